# valuegrad/ops/arithmetic.py
import numpy as np
from ..core.var import Value


def _as_value(x):
    """Ensure x is a Value; otherwise wrap it as a constant leaf."""
    return x if isinstance(x, Value) else Value(x)


def _record(data, parents, tag):
    """
    Build the output node for a primitive.

    `parents` is a list of (operand, local_partial) pairs, one per argument
    position. Operands are stored once each in `_prev`, but the backward
    closure walks every pair, so an operand used in both positions receives
    both contributions.
    """
    operands = tuple(dict((p.id, p) for p, _ in parents).values())
    self_op = len(operands) < len(parents)
    out = None

    def _backward(pass_grads):
        # gradients of the current pass only, keyed by Value.id
        g = pass_grads.get(out.id, 0.0)
        for p, a in parents:
            pass_grads[p.id] = pass_grads.get(p.id, 0.0) + g * a

    out = Value._from_op(data, operands, tag, _backward, self_op=self_op)
    return out


def _binary(x, y, f, dfdx, dfdy, tag):
    """
    Generic binary primitive:
      - computes out.data = f(x.data, y.data)
      - records local partials (∂out/∂x, ∂out/∂y) evaluated at the forward values
    """
    x = _as_value(x)
    y = _as_value(y)
    a, b = x.data, y.data
    with np.errstate(all="ignore"):
        data = f(a, b)
        parents = [(x, dfdx(a, b)), (y, dfdy(a, b))]
    return _record(data, parents, tag)


def add(x, y): return _binary(x, y, lambda a,b:a+b, lambda a,b:1.0,   lambda a,b:1.0,              "add")
def sub(x, y): return _binary(x, y, lambda a,b:a-b, lambda a,b:1.0,   lambda a,b:-1.0,             "sub")
def mul(x, y): return _binary(x, y, lambda a,b:a*b, lambda a,b:b,     lambda a,b:a,                "mul")
def div(x, y): return _binary(x, y, lambda a,b:a/b, lambda a,b:1.0/b, lambda a,b:-a/np.square(b),  "div")


def neg(x):
    """Unary negation: out = -x, ∂out/∂x = -1."""
    x = _as_value(x)
    return _record(-x.data, [(x, -1.0)], "neg")


def pow(x, k):
    """
    Power with a constant exponent:
      out.data = x ** k
      ∂out/∂x  = k * x^(k-1)

    Non-integer exponents of negative bases give NaN, as IEEE-754 does.
    """
    if isinstance(k, Value) or isinstance(k, bool) or not isinstance(k, (int, float, np.integer, np.floating)):
        raise TypeError(f"pow only supports int/float exponents, but got {type(k)}")
    x = _as_value(x)
    xv = x.data
    with np.errstate(all="ignore"):
        data = np.power(xv, np.float64(k))
        partial = np.float64(0.0) if k == 0 else k * np.power(xv, np.float64(k - 1))
    return _record(data, [(x, partial)], "pow")
