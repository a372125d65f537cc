# valuegrad/core/engine.py
from __future__ import annotations
import numpy as np
from typing import List

from .var import Value
from ..logger import get_logger

logger = get_logger(__name__)


def topological_order(root: Value) -> List[Value]:
    """
    Return every node reachable from `root`, each exactly once, operands
    before the nodes that consume them (root last).

    Post-order DFS with an explicit stack, so deep graphs (long training
    losses, chained sums) do not hit the recursion limit. Operands are
    visited in argument order; the visited set is keyed by Value.id.
    """
    topo: List[Value] = []
    visited = set()
    stack = [(root, False)]
    while stack:
        v, expanded = stack.pop()
        if expanded:
            topo.append(v)
            continue
        if v.id in visited:
            continue
        visited.add(v.id)
        stack.append((v, True))
        # reversed so the first operand is popped first
        for child in reversed(v._prev):
            if child.id not in visited:
                stack.append((child, False))
    return topo


def backward(root: Value) -> None:
    """
    Run a single reverse pass from `root`.

    Notes:
        - root.grad is set (not added) to 1.0: d(root)/d(root) = 1.
        - This pass's gradients are collected in `pass_grads` (keyed by
          Value.id, seeded with the root) and each backward rule reads its
          node's gradient from there: p += g[node] * (∂node/∂p).
        - Every other node then gets its pass gradient added to `.grad`
          once, so a second call without `zero_grad` adds ∂root/∂n again.
    """
    topo = topological_order(root)
    logger.debug("backward: %d nodes reachable from %r", len(topo), root.label or root.id)

    pass_grads = {root.id: np.float64(1.0)}
    # IEEE-754 specials (inf * 0, ...) propagate as nan/inf without warnings
    with np.errstate(all="ignore"):
        for node in reversed(topo):
            if node._backward is not None:
                node._backward(pass_grads)
        for node in topo:
            if node is root:
                node._set_grad(1.0)
            else:
                node._accumulate(pass_grads.get(node.id, 0.0))


def zero_grad(*roots: Value) -> None:
    """
    Set the gradient of every node reachable from any of `roots` to zero.
    This is the caller's explicit reset between independent backward passes.
    """
    seen = set()
    for root in roots:
        for v in topological_order(root):
            if v.id not in seen:
                v.zero_grad(); seen.add(v.id)
