"""
Render a computation graph with graphviz.

Each Value becomes a record node `{ label | data d | grad g }`; each
operation gets its own circle node feeding the value it produced.
"""

from graphviz import Digraph

from .core.var import Value
from .core.node import GraphTrace
from .core.graph_utils import trace
from .logger import get_logger

logger = get_logger(__name__)

OP_SYMBOLS = {
    "add": "+",
    "sub": "-",
    "mul": "*",
    "div": "/",
    "neg": "neg",
    "pow": "**",
    "tanh": "tanh",
    "exp": "exp",
    "log": "log",
    "relu": "relu",
}


_RECORD_SPECIALS = "|{}<>"


def _escape(label):
    # record labels treat these as field separators / port markers
    return "".join("\\" + ch if ch in _RECORD_SPECIALS else ch for ch in label)


def _fmt(x):
    # %g keeps integers short (-8 rather than -8.0000) and shows nan/inf
    return "%.4g" % x


def to_dot(graph, rankdir="LR", fmt="svg") -> Digraph:
    """
    Build a Digraph from a root Value or an existing GraphTrace.

    Aliased operands (x + x) produce two operand edges into the same
    operation node, one per position.
    """
    g = graph if isinstance(graph, GraphTrace) else trace(graph)
    dot = Digraph(format=fmt, graph_attr={"rankdir": rankdir})

    for n in g.nodes:
        uid = str(n.id)
        dot.node(
            name=uid,
            label="{ %s | data %s | grad %s }" % (_escape(n.label), _fmt(n.data), _fmt(n.grad)),
            shape="record",
        )
        if n.op is not None:
            dot.node(name=uid + n.op, label=OP_SYMBOLS.get(n.op, n.op), shape="circle")
            dot.edge(uid + n.op, uid)

    ops = {n.id: n.op for n in g.nodes}
    for e in g.edges:
        dot.edge(str(e.src), str(e.dst) + ops[e.dst])

    return dot


def to_dot_source(graph, rankdir="LR") -> str:
    """Textual DOT description of the graph."""
    return to_dot(graph, rankdir=rankdir).source


def render(root: Value, output_path: str, fmt: str = "svg") -> str:
    """
    Write the graph below `root` as an image using the graphviz `dot` binary.

    Args:
        root: output node of the computation
        output_path: target file, with or without the format extension
        fmt: any graphviz output format ("svg", "png", ...)

    Returns:
        path of the rendered file

    Raises graphviz.ExecutableNotFound when `dot` is not installed.
    """
    suffix = "." + fmt
    stem = output_path[:-len(suffix)] if output_path.endswith(suffix) else output_path
    dot = to_dot(root, fmt=fmt)
    path = dot.render(filename=stem, cleanup=True)
    logger.info("%s generated at %s", fmt.upper(), path)
    return path
