# valuegrad/core/var.py
from __future__ import annotations
import itertools
import numpy as np
from typing import Any, Callable, Optional, Tuple

_ids = itertools.count()


class Value:
    """
    One scalar node of the computation graph.

    Attributes
    ----------
    data : np.float64
        Forward value, computed eagerly when the node is built. Read-only.
    grad : np.float64
        Gradient accumulator d(root)/d(self). Starts at 0 and is only changed
        by the engine (seeding/accumulation) or by `zero_grad()`.
    id : int
        Unique identity of the node, independent of its value. Traversals
        deduplicate on it.
    label : str
        Optional name used when the graph is printed or rendered.

    Internal fields
    ---------------
    _prev : tuple of Value
        Operands that produced this node. A binary op whose two arguments are
        the same node stores it once and sets `_self_op`.
    _op : Optional[str]
        Operation tag ("add", "mul", "tanh", ...). None for leaves.
    _backward : Optional[callable]
        Given the current pass's gradient map, adds `g[self] * local_partial`
        for each operand. None for leaves.
    """

    __slots__ = ("_data", "_grad", "_prev", "_op", "_self_op", "_backward", "id", "label")

    def __init__(self, data: Any, *, label: str = ""):
        # bool is an int subclass but never a meaningful scalar here
        if isinstance(data, bool) or not isinstance(data, (int, float, np.integer, np.floating)):
            raise TypeError(
                f"Value only accepts real scalars (int, float, numpy scalar), "
                f"but got {type(data)}"
            )
        self._data = np.float64(data)
        self._grad = np.float64(0.0)
        self._prev: Tuple[Value, ...] = ()
        self._op: Optional[str] = None
        self._self_op = False
        self._backward: Optional[Callable[[dict], None]] = None
        self.id = next(_ids)
        self.label = label

    @classmethod
    def _from_op(cls, data, operands: Tuple["Value", ...], op: str,
                 backward: Callable[[dict], None], *, self_op: bool = False) -> "Value":
        out = cls(data)
        out._prev = operands
        out._op = op
        out._self_op = self_op
        out._backward = backward
        return out

    # ---------------- accessors ---------------- #
    @property
    def data(self) -> np.float64:
        return self._data

    @property
    def grad(self) -> np.float64:
        return self._grad

    @property
    def op(self) -> Optional[str]:
        return self._op

    @property
    def operands(self) -> Tuple["Value", ...]:
        return self._prev

    @property
    def is_leaf(self) -> bool:
        return self._op is None

    def _accumulate(self, delta) -> None:
        self._grad = self._grad + delta

    def _set_grad(self, g) -> None:
        self._grad = np.float64(g)

    def zero_grad(self) -> None:
        """Reset this node's gradient only (see engine.zero_grad for a whole graph)."""
        self._grad = np.float64(0.0)

    def with_label(self, label: str) -> "Value":
        self.label = label
        return self

    def backward(self) -> None:
        """Run the reverse pass with this node as the root."""
        from .engine import backward
        backward(self)

    def __repr__(self):
        return f"Value(data={self._data!r}, grad={self._grad!r}, label={self.label!r})"

    # Operator overloading; primitives live in valuegrad.ops
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def tanh(self):
        from ..ops.transcendental import tanh
        return tanh(self)

    def exp(self):
        from ..ops.transcendental import exp
        return exp(self)

    def log(self):
        from ..ops.transcendental import log
        return log(self)

    def relu(self):
        from ..ops.transcendental import relu
        return relu(self)
