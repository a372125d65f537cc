"""
Computation-graph utilities.
Enumerate, measure and print the DAG below a root Value.
"""

import numpy as np
from typing import Dict
from collections import Counter

from .var import Value
from .node import Edge, GraphTrace, TraceNode
from .engine import topological_order


def trace(root: Value) -> GraphTrace:
    """
    Flatten the graph below `root` into nodes and edges.

    Nodes are recorded once each (keyed by Value.id) in discovery order,
    root first. One edge is recorded per operand position, so `x + x`
    yields two edges x -> (x+x) with positions 0 and 1 while `x` itself
    appears once in `nodes`.

    Nothing is rendered or written here; see valuegrad.view.
    """
    result = GraphTrace()
    seen = set()
    stack = [root]
    while stack:
        v = stack.pop()
        if v.id in seen:
            continue
        seen.add(v.id)
        result.nodes.append(TraceNode(
            id=v.id, data=float(v.data), grad=float(v.grad), label=v.label, op=v.op,
        ))
        for pos, child in enumerate(_positional_operands(v)):
            result.edges.append(Edge(src=child.id, dst=v.id, position=pos))
        for child in reversed(v.operands):
            if child.id not in seen:
                stack.append(child)
    return result


def _positional_operands(v: Value):
    # Aliased binary op: the single stored operand fills both slots
    if v._self_op:
        return (v._prev[0], v._prev[0])
    return v._prev


def get_graph_stats(root: Value) -> Dict:
    """
    Collect statistics about the graph below `root` (no printing).

    Returns
    -------
    dict with keys: nodes, edges, leaves, max_fan_in, avg_fan_in,
    max_fan_out, avg_fan_out, depth, operations
    """
    g = trace(root)
    n_nodes = len(g.nodes)
    n_edges = len(g.edges)

    fan_in = Counter(e.dst for e in g.edges)
    fan_out = Counter(e.src for e in g.edges)
    fan_ins = [fan_in.get(n.id, 0) for n in g.nodes]
    fan_outs = [fan_out.get(n.id, 0) for n in g.nodes]

    # Longest operand chain from a leaf to each node
    depth = {}
    for v in topological_order(root):
        depth[v.id] = 1 + max((depth[c.id] for c in v.operands), default=-1)

    op_counter = Counter(n.op or "leaf" for n in g.nodes)

    return {
        'nodes': n_nodes,
        'edges': n_edges,
        'leaves': op_counter.get("leaf", 0),
        'max_fan_in': max(fan_ins),
        'avg_fan_in': float(np.mean(fan_ins)),
        'max_fan_out': max(fan_outs),
        'avg_fan_out': float(np.mean(fan_outs)),
        'depth': depth[root.id],
        'operations': dict(op_counter),
    }


def print_graph_summary(root: Value, detailed: bool = False) -> Dict:
    """
    Print a summary of the graph below `root`.

    Args:
        root: output node of the computation
        detailed: also list every node (only for graphs up to 100 nodes)

    Returns:
        the statistics dict from get_graph_stats
    """
    stats = get_graph_stats(root)
    n_nodes = stats['nodes']

    print("\n" + "="*70)
    print("COMPUTATION GRAPH SUMMARY")
    print("="*70)
    print(f"Total nodes:        {n_nodes:,}")
    print(f"Total edges:        {stats['edges']:,}")
    print(f"Leaves:             {stats['leaves']:,}")
    print(f"Depth:              {stats['depth']}")
    print(f"Max fan-in:         {stats['max_fan_in']}")
    print(f"Avg fan-in:         {stats['avg_fan_in']:.2f}")
    print(f"Max fan-out:        {stats['max_fan_out']}")
    print(f"Avg fan-out:        {stats['avg_fan_out']:.2f}")
    print()
    print("Operation breakdown:")
    for op_type, count in Counter(stats['operations']).most_common(10):
        pct = 100.0 * count / n_nodes
        print(f"  {op_type:12s}: {count:6,} ({pct:5.1f}%)")

    if detailed and n_nodes <= 100:
        print()
        print_computation_graph(root, max_nodes=100)
    else:
        print("="*70 + "\n")

    return stats


def print_computation_graph(root: Value, max_nodes: int = 20) -> None:
    """
    Print one line per node, operands before consumers.

    Args:
        root: output node of the computation
        max_nodes: print at most this many nodes
    """
    print("="*70)
    print("COMPUTATION GRAPH STRUCTURE")
    print("="*70)

    g = trace(root)
    names = {n.id: n.label or f"#{n.id}" for n in g.nodes}
    order = topological_order(root)
    n_show = min(len(order), max_nodes)

    for v in order[:n_show]:
        name = names[v.id]
        if v.op is not None:
            parent_info = ", ".join(
                names[i] for i in g.operand_ids(v.id)
            )
            print(f"{name:>12s}: {v.op:6s} data={float(v.data):10.6f} grad={float(v.grad):10.6f} <- [{parent_info}]")
        else:
            print(f"{name:>12s}: {'leaf':6s} data={float(v.data):10.6f} grad={float(v.grad):10.6f}")

    if len(order) > max_nodes:
        print(f"... ({len(order) - max_nodes} more nodes)")

    print("="*70 + "\n")
