# valuegrad/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Sequence
import numpy as np

from .var import Value
from .engine import backward


def value(x: Any) -> Any:
    """Return the numeric value of a Value; pass through plain numbers unchanged."""
    return x.data if isinstance(x, Value) else x


def _as_output(y: Any, fname: str) -> Value:
    if isinstance(y, Value):
        return y
    if isinstance(y, (int, float, np.integer, np.floating)) and not isinstance(y, bool):
        # Output does not depend on any input: every partial is zero
        return Value(y, label="y")
    raise TypeError(f"{fname} expects f to return a Value or a number, got {type(y)}")


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Value], Value], x0: float) -> np.float64:
    """
    Derivative of a scalar function y=f(x) at x0.
    Builds a fresh graph, so earlier gradients never leak in.
    """
    x = Value(value(x0), label="x")
    y = _as_output(f(x), "grad(f, x0)")
    backward(y)
    return x.grad


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Value]], Value],
          inputs: Dict[str, float]) -> Dict[str, np.float64]:
    """
    Gradient of a scalar function y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Value} and returning a scalar Value
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: numeric}  # gradients in the same key order as `inputs`
    """
    vars_v: Dict[str, Value] = {k: Value(value(v), label=k) for k, v in inputs.items()}
    y = _as_output(f(vars_v), "grads(f, inputs)")
    backward(y)
    return {k: vars_v[k].grad for k in inputs.keys()}


def grads_list(f: Callable[[List[Value]], Value],
               x0_list: Iterable[float]) -> List[np.float64]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    xs: List[Value] = [Value(value(v), label=f"x{i}") for i, v in enumerate(x0_list)]
    y = _as_output(f(xs), "grads_list(f, x0_list)")
    backward(y)
    return [x.grad for x in xs]


def numerical_grad(f: Callable[[List[Value]], Value],
                   x0_list: Sequence[float], eps: float = 1e-6) -> np.ndarray:
    """
    Central finite-difference estimate of ∇f at x0_list:

        ∂f/∂x_i ≈ (f(x + eps·e_i) - f(x - eps·e_i)) / (2·eps)

    `f` receives fresh leaves on every evaluation, like grads_list, so the
    same expression builder can be checked against the reverse pass.
    """
    x0 = np.asarray([value(v) for v in x0_list], dtype=np.float64)
    out = np.zeros_like(x0)
    for i in range(x0.size):
        hi, lo = x0.copy(), x0.copy()
        hi[i] += eps
        lo[i] -= eps
        f_hi = value(f([Value(v) for v in hi]))
        f_lo = value(f([Value(v) for v in lo]))
        out[i] = (f_hi - f_lo) / (2.0 * eps)
    return out
