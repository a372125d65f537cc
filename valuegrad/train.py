"""
Training loop: forward, loss, zero grads, backward, SGD update.
"""

import numpy as np
from typing import List, Sequence

from .core.var import Value
from .config import TrainConfig
from .logger import get_logger

logger = get_logger(__name__)


def mse_loss(ypred: Sequence[Value], ys: Sequence[float]) -> Value:
    """Sum of squared errors: sum((yp - y)**2)."""
    if len(ypred) != len(ys):
        raise ValueError(f"got {len(ypred)} predictions for {len(ys)} targets")
    terms = [(yp - float(y)) ** 2 for yp, y in zip(ypred, ys)]
    return sum(terms[1:], terms[0]) if terms else Value(0.0)


def sgd_step(model, learning_rate: float) -> None:
    model.update(learning_rate)


def _flatten_outputs(model, xs, ys):
    """Forward every sample; pair each output with its target."""
    preds, targets = [], []
    for x, y in zip(xs, ys):
        out = model(list(x))
        y = np.atleast_1d(np.asarray(y, dtype=np.float64))
        if len(out) != y.size:
            raise ValueError(f"model produced {len(out)} outputs for a target of size {y.size}")
        preds.extend(out)
        targets.extend(y.tolist())
    return preds, targets


def train(model, xs, ys, config: TrainConfig) -> List[float]:
    """
    Fit `model` to (xs, ys) with full-batch gradient descent.

    Args:
        model: any valuegrad.nn.Module returning a list of outputs
        xs: samples, list of lists or 2-D array
        ys: targets, one per sample (scalar or one value per output)
        config: epochs, learning rate and logging cadence

    Returns:
        loss value after each epoch's forward pass
    """
    xs = np.asarray(xs, dtype=np.float64)
    ys = np.asarray(ys, dtype=np.float64)
    if len(xs) != len(ys):
        raise ValueError(f"got {len(xs)} samples but {len(ys)} targets")

    history = []
    for epoch in range(1, config.epochs + 1):
        # forward pass
        ypred, targets = _flatten_outputs(model, xs, ys)
        loss = mse_loss(ypred, targets).with_label("loss")

        # backward pass
        model.zero_grad()
        loss.backward()

        # update
        sgd_step(model, config.learning_rate)

        history.append(float(loss.data))
        if config.log_every and epoch % config.log_every == 0:
            logger.info("epoch %d/%d loss: %.6f", epoch, config.epochs, loss.data)
    return history
