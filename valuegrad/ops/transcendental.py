# valuegrad/ops/transcendental.py
import numpy as np
from .arithmetic import _as_value, _record


def tanh(x):
    x = _as_value(x)
    t = np.tanh(x.data)
    return _record(t, [(x, 1.0 - t * t)], "tanh")


def exp(x):
    x = _as_value(x)
    with np.errstate(all="ignore"):
        ex = np.exp(x.data)
    return _record(ex, [(x, ex)], "exp")


def log(x):
    """
    Natural logarithm. log(0) = -inf and log(x<0) = nan; both propagate
    instead of raising.
    """
    x = _as_value(x)
    with np.errstate(all="ignore"):
        out = np.log(x.data)
        partial = 1.0 / x.data
    return _record(out, [(x, partial)], "log")


def relu(x):
    x = _as_value(x)
    xv = x.data
    # NaN is neither > 0 nor <= 0; keep it flowing through value and gradient
    if np.isnan(xv):
        return _record(xv, [(x, np.nan)], "relu")
    data = xv if xv > 0 else np.float64(0.0)
    return _record(data, [(x, 1.0 if xv > 0 else 0.0)], "relu")
