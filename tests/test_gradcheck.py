"""
Reverse-mode gradients vs. central finite differences.
"""

import numpy as np
import pytest

from valuegrad import grads_list, numerical_grad


def random_expression(seed, n_ops=6):
    """
    Build f(xs) from a seeded sequence of add/sub/mul/tanh over a growing
    pool of nodes. The same seed always gives the same expression, and
    picking the same pool entry twice exercises self-use (x+x, x*x).
    """
    def f(xs):
        rng = np.random.default_rng(seed)
        pool = list(xs)
        for _ in range(n_ops):
            kind = int(rng.integers(4))
            a = pool[int(rng.integers(len(pool)))]
            if kind == 3:
                pool.append(a.tanh())
                continue
            b = pool[int(rng.integers(len(pool)))]
            if kind == 0:
                pool.append(a + b)
            elif kind == 1:
                pool.append(a - b)
            else:
                pool.append(a * b)
        return pool[-1]
    return f


@pytest.mark.parametrize("seed", range(25))
def test_random_expressions_match_finite_differences(seed):
    f = random_expression(seed)
    x0 = np.random.default_rng(1000 + seed).uniform(-1.0, 1.0, size=3)
    analytic = np.array(grads_list(f, x0), dtype=np.float64)
    numeric = numerical_grad(f, x0)
    np.testing.assert_allclose(analytic, numeric, rtol=1e-4, atol=1e-4)


def test_extended_ops_match_finite_differences():
    def f(xs):
        x, y, z = xs
        return (x / y).exp() + (x ** 2 + 1.0).log() - (y * 3.0).relu() + z ** 3 - (-z).tanh()

    x0 = [0.7, 1.3, -0.4]
    analytic = np.array(grads_list(f, x0), dtype=np.float64)
    np.testing.assert_allclose(analytic, numerical_grad(f, x0), rtol=1e-4, atol=1e-4)


def test_neuron_shaped_expression():
    def f(xs):
        x1, x2, w1, w2, b = xs
        return (x1 * w1 + x2 * w2 + b).tanh()

    x0 = [2.0, 0.0, -3.0, 1.0, 6.881373587019543]
    analytic = grads_list(f, x0)
    # o = tanh(n) with n ~ 0.8814 -> do/dn = 0.5
    assert analytic[4] == pytest.approx(0.5, abs=1e-6)
    assert analytic[0] == pytest.approx(-1.5, abs=1e-6)
    assert analytic[2] == pytest.approx(1.0, abs=1e-6)
    np.testing.assert_allclose(analytic, numerical_grad(f, x0), rtol=1e-4, atol=1e-4)
