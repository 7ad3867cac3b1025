import numpy as np
import pytest

from nesterov_es.optimizer import (
    E0,
    Population,
    apply_update,
    gradient_estimate,
    has_converged,
    make_weights,
)


def test_gradient_estimate_matches_weighted_sums():
    rng = np.random.default_rng(5)
    z = rng.standard_normal((13, 3))
    pop = Population(z=z, costs=np.arange(13, dtype=float))
    w = make_weights(13)

    g, g_log_sigma = gradient_estimate(pop, w)

    np.testing.assert_allclose(g, (w[:, None] * z).sum(axis=0))
    np.testing.assert_allclose(g_log_sigma, (w[:, None] * (np.abs(z) / E0 - 1.0)).sum(axis=0))


def test_zero_weight_ranks_are_ignored():
    w = make_weights(13)
    z = np.ones((13, 2))
    z[6:] = 1e6  # zero-weight ranks
    pop = Population(z=z, costs=np.arange(13, dtype=float))

    g, g_log_sigma = gradient_estimate(pop, w)

    np.testing.assert_allclose(g, [1.0, 1.0])
    np.testing.assert_allclose(g_log_sigma, [1.0 / E0 - 1.0] * 2)


def test_apply_update_moves_mean_by_updated_velocity():
    mean = np.array([1.0, 2.0])
    sigma = np.array([0.5, 2.0])
    velocity = np.array([0.1, -0.1])
    g = np.array([1.0, -1.0])
    g_log_sigma = np.array([0.2, -0.4])

    apply_update(mean, sigma, velocity, g, g_log_sigma, lr_mu=0.6, lr_sigma=0.15)

    np.testing.assert_allclose(velocity, [0.1 + 0.6 * 0.5, -0.1 - 0.6 * 2.0])
    np.testing.assert_allclose(mean, [1.0 + 0.4, 2.0 - 1.3])
    np.testing.assert_allclose(sigma, [0.5 * np.exp(0.03), 2.0 * np.exp(-0.06)])


def test_sigma_stays_positive():
    rng = np.random.default_rng(11)
    mean = np.zeros(4)
    sigma = np.ones(4)
    velocity = np.zeros(4)
    for _ in range(2000):
        g = rng.standard_normal(4)
        g_log_sigma = rng.standard_normal(4) * 3.0
        apply_update(mean, sigma, velocity, g, g_log_sigma, 0.6, 0.15)
        assert np.all(sigma > 0.0)


def _pop(costs):
    costs = np.asarray(costs, dtype=float)
    return Population(z=np.zeros((costs.size, 1)), costs=costs)


def test_converged_on_small_sigma():
    assert has_converged(np.array([1e-13, 5e-13]), _pop([0.0, 1.0]), 1e-12, 1e-12)


def test_converged_on_flat_costs():
    assert has_converged(np.array([1.0]), _pop([3.0, 3.0, 3.0]), 1e-12, 0.0)


def test_not_converged():
    assert not has_converged(np.array([1e-13, 1.0]), _pop([0.0, 1.0]), 1e-12, 1e-12)
