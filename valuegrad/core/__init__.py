# valuegrad/core/__init__.py

"""
Core public API for valuegrad.

Exports:
    Value             : The scalar graph node.
    backward          : Run one reverse pass from a root node.
    zero_grad         : Reset gradients of every node below the given roots.
    topological_order : Operands-before-consumers ordering of a graph.
    trace             : Flatten a graph into nodes and edges for rendering.
    grad, grads       : Convenience: gradients of plain functions of floats.
    value             : Convenience: extract the primal value from a Value.
"""

from .var import Value
from .engine import backward, zero_grad, topological_order
from .node import TraceNode, Edge, GraphTrace
from .graph_utils import trace, get_graph_stats, print_graph_summary, print_computation_graph
from .seeds import value, grad, grads, grads_list, numerical_grad

__all__ = [
    "Value",
    "backward", "zero_grad", "topological_order",
    "TraceNode", "Edge", "GraphTrace",
    "trace", "get_graph_stats", "print_graph_summary", "print_computation_graph",
    "value", "grad", "grads", "grads_list", "numerical_grad",
]
