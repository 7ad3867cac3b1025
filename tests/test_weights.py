import numpy as np
import pytest

from nesterov_es.optimizer import make_weights, population_size


@pytest.mark.parametrize("p", list(range(1, 40)) + [64, 100, 257, 1000])
def test_weights_are_normalised_and_monotonic(p):
    w = make_weights(p)
    assert w.shape == (p,)
    assert np.all(w >= 0.0)
    assert np.all(np.diff(w) <= 0.0)
    assert w.sum() == pytest.approx(1.0, abs=1e-12)


def test_single_member_population_gets_all_weight():
    assert make_weights(1).tolist() == [1.0]


def test_worse_half_gets_zero_weight():
    # ln(6.5) - ln(i + 0.5) is positive only for i < 6
    w = make_weights(13)
    assert np.count_nonzero(w) == 6
    assert np.all(w[6:] == 0.0)


def test_weights_match_log_rank_formula():
    p = 20
    raw = np.log((p - 1) * 0.5 + 0.5) - np.log(np.arange(p) + 0.5)
    raw[raw < 0] = 0.0
    np.testing.assert_allclose(make_weights(p), raw / raw.sum())


@pytest.mark.parametrize("n", range(1, 300))
def test_population_size_is_minimal(n):
    p = population_size(n)
    assert p * p > 144 * n
    assert (p - 1) * (p - 1) <= 144 * n


def test_population_size_known_values():
    assert population_size(1) == 13
    assert population_size(2) == 17
    assert population_size(10) == 38


def test_population_size_grows_from_requested():
    assert population_size(1, requested=5) == 13
    # A large request is used as is
    assert population_size(1, requested=200) == 200
