import logging

import numpy as np
import pytest

from valuegrad import Value, MLP, TrainConfig, mse_loss, train

XS = [
    [2.0, 3.0, -1.0],
    [3.0, -1.0, 0.5],
    [0.5, 1.0, 1.0],
    [1.0, 1.0, -1.0],
]
YS = [1.0, -1.0, -1.0, 1.0]


def test_mse_loss_value_and_grad():
    p = [Value(1.0), Value(2.0)]
    loss = mse_loss(p, [0.0, 4.0])
    assert loss.data == 5.0
    loss.backward()
    assert p[0].grad == 2.0
    assert p[1].grad == -4.0


def test_mse_loss_length_mismatch():
    with pytest.raises(ValueError):
        mse_loss([Value(1.0)], [1.0, 2.0])


def test_training_reduces_loss():
    model = MLP(3, [4, 4, 1], rng=0)
    config = TrainConfig(epochs=40, learning_rate=0.05, log_every=0)
    history = train(model, XS, YS, config)
    assert len(history) == 40
    assert history[-1] < history[0]


def test_train_accepts_arrays():
    model = MLP(3, [2, 1], rng=1)
    history = train(model, np.array(XS), np.array(YS), TrainConfig(epochs=2, log_every=0))
    assert all(np.isfinite(history))


def test_train_sample_mismatch():
    model = MLP(3, [1], rng=0)
    with pytest.raises(ValueError):
        train(model, XS, YS[:2], TrainConfig(epochs=1))


def test_train_target_size_mismatch():
    model = MLP(3, [2], rng=0)
    with pytest.raises(ValueError):
        train(model, XS, YS, TrainConfig(epochs=1))


def test_train_logs_loss(caplog):
    model = MLP(3, [1], rng=0)
    with caplog.at_level(logging.INFO, logger="valuegrad"):
        train(model, XS, YS, TrainConfig(epochs=4, log_every=2))
    messages = [r.getMessage() for r in caplog.records if r.name == "valuegrad.train"]
    assert len(messages) == 2
    assert messages[0].startswith("epoch 2/4 loss:")
