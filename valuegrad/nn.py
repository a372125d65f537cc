from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from .core.var import Value
from .core.engine import zero_grad


def _make_rng(rng):
    # Generator -> itself, int/None -> freshly seeded Generator
    return np.random.default_rng(rng)


def _step(p, lr):
    # Value.data is immutable: a parameter step yields a new leaf
    return Value(p.data - lr * p.grad, label=p.label)


class Module(ABC):
    """Anything holding trainable leaves: parameters, zero_grad, update."""

    def parameters(self):
        return []

    def zero_grad(self):
        """Reset the gradients of all parameters (the caller's job between steps)."""
        for p in self.parameters():
            p.zero_grad()

    @abstractmethod
    def update(self, learning_rate):
        """Replace every parameter p with a fresh leaf p - learning_rate * p.grad."""
        pass


class Neuron(Module):
    """
    nin inputs, one weight per input drawn from U[-1, 1), plus a bias.
    Forward: a = tanh(sum(w_i * x_i) + b), or just the affine part when
    `activation` is False.
    """

    def __init__(self, nin, activation=True, rng=None):
        rng = _make_rng(rng)
        self.w = [Value(float(v), label=f"w{i}") for i, v in enumerate(rng.uniform(-1.0, 1.0, nin))]
        self.b = Value(float(rng.uniform(-1.0, 1.0)), label="b")
        self.activation = activation

    @classmethod
    def from_weights(cls, weights, bias, activation=True):
        n = cls.__new__(cls)
        n.w = [w if isinstance(w, Value) else Value(w, label=f"w{i}") for i, w in enumerate(weights)]
        n.b = bias if isinstance(bias, Value) else Value(bias, label="b")
        n.activation = activation
        return n

    def __call__(self, x):
        if len(x) != len(self.w):
            raise ValueError(f"Neuron expects {len(self.w)} inputs, got {len(x)}")
        terms = []
        for i, (wi, xi) in enumerate(zip(self.w, x)):
            if not isinstance(xi, Value):
                xi = Value(xi, label=f"x{i}")
            terms.append((wi * xi).with_label(f"y{i}"))
        z = (sum(terms[1:], terms[0]) + self.b) if terms else (self.b + 0.0)
        z.with_label("z")
        return z.tanh().with_label("a") if self.activation else z

    def parameters(self):
        return self.w + [self.b]

    def update(self, learning_rate):
        self.w = [_step(w, learning_rate) for w in self.w]
        self.b = _step(self.b, learning_rate)

    def __repr__(self):
        kind = "Tanh" if self.activation else "Linear"
        return f"{kind}Neuron({len(self.w)})"


class Layer(Module):

    def __init__(self, nin, nout, activation=True, rng=None):
        rng = _make_rng(rng)
        self.neurons = [Neuron(nin, activation=activation, rng=rng) for _ in range(nout)]

    def __call__(self, x):
        return [n(x) for n in self.neurons]

    def __len__(self):
        return len(self.neurons)

    def parameters(self):
        return [p for n in self.neurons for p in n.parameters()]

    def update(self, learning_rate):
        for n in self.neurons:
            n.update(learning_rate)

    def __repr__(self):
        return f"Layer of [{', '.join(str(n) for n in self.neurons)}]"


@dataclass
class MLPStat:
    num_layers: int
    num_neurons: int
    num_weights: int
    num_biases: int
    num_parameters: int

    def __str__(self):
        return (
            "MLP Statistics:\n"
            f"  Number of Layers: {self.num_layers}\n"
            f"  Number of Neurons: {self.num_neurons}\n"
            f"  Number of Weights: {self.num_weights}\n"
            f"  Number of Biases: {self.num_biases}\n"
            f"  Total Number of Parameters: {self.num_parameters}\n"
        )


class MLP(Module):
    """
    Multi-layer perceptron. `nouts` lists the layer sizes; hidden layers
    always use tanh, the last one only if `activation_last_layer`.

    All weights come from one generator, so MLP(..., rng=seed) is
    reproducible.
    """

    def __init__(self, nin, nouts, activation_last_layer=True, rng=None):
        if not nouts:
            raise ValueError("MLP needs at least one layer size")
        rng = _make_rng(rng)
        sz = [nin] + list(nouts)
        last = len(nouts) - 1
        self.layers = [
            Layer(sz[i], sz[i + 1], activation=activation_last_layer or i != last, rng=rng)
            for i in range(len(nouts))
        ]

    def __call__(self, x):
        for layer in self.layers:
            x = layer(x)
        return x

    def parameters(self):
        return [p for layer in self.layers for p in layer.parameters()]

    def update(self, learning_rate):
        for layer in self.layers:
            layer.update(learning_rate)

    def zero_grad(self, *outputs):
        """
        Reset parameter gradients; pass the previous loss (or outputs) to
        also clear every intermediate node of that graph.
        """
        super().zero_grad()
        if outputs:
            zero_grad(*outputs)

    def stat(self):
        num_neurons = sum(len(layer) for layer in self.layers)
        num_parameters = len(self.parameters())
        return MLPStat(
            num_layers=len(self.layers),
            num_neurons=num_neurons,
            num_weights=num_parameters - num_neurons,
            num_biases=num_neurons,
            num_parameters=num_parameters,
        )

    def __repr__(self):
        return f"MLP of [{', '.join(str(layer) for layer in self.layers)}]"
