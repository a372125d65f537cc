# valuegrad/ops/__init__.py

# Convenience re-exports so users can do: from valuegrad.ops import mul, tanh, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import tanh, exp, log, relu

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "tanh", "exp", "log", "relu",
]
