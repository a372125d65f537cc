# valuegrad/__init__.py
# Scalar reverse-mode automatic differentiation

from .core.var import Value
from .core.engine import backward, zero_grad, topological_order
from .core.graph_utils import trace, get_graph_stats
from .core.seeds import value, grad, grads, grads_list, numerical_grad

# Primitives (also reachable through Value's operators)
from .ops import add, sub, mul, div, neg, pow, tanh, exp, log, relu

from . import nn
from .nn import Neuron, Layer, MLP
from .config import TrainConfig
from .train import mse_loss, train

__version__ = "0.1.0"

__all__ = [
    # Core
    'Value',
    'backward',
    'zero_grad',
    'topological_order',
    'trace',
    'get_graph_stats',
    'value',
    'grad',
    'grads',
    'grads_list',
    'numerical_grad',
    # Ops
    'add', 'sub', 'mul', 'div', 'neg', 'pow',
    'tanh', 'exp', 'log', 'relu',
    # Composition / training
    'nn',
    'Neuron',
    'Layer',
    'MLP',
    'TrainConfig',
    'mse_loss',
    'train',
]
