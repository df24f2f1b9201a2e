import numpy as np
import pytest

from methyl_kde.analysis.density import DensityCurve, estimate_density
from methyl_kde.analysis.extrema import (
    find_local_maxima,
    find_local_minima,
    find_local_minima_xy,
)


def _curve(y, x=None):
    y = np.asarray(y, dtype=float)
    if x is None:
        x = np.linspace(0.0, 1.0, y.size)
    return DensityCurve(x=np.asarray(x, dtype=float), y=y, bandwidth=0.05,
                        domain_low=0.0, domain_high=1.0)


def test_single_valley():
    x = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
    minima = find_local_minima_xy(x, [3.0, 2.0, 1.0, 2.0, 3.0])
    np.testing.assert_array_equal(minima, [0.5])


def test_two_valleys_sorted():
    x = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
    minima = find_local_minima_xy(x, [3.0, 1.0, 3.0, 1.0, 3.0])
    np.testing.assert_array_equal(minima, [0.25, 0.75])


def test_plateau_is_not_reported():
    # diff(sign(diff(y))) is [1, 1] here, never 2
    x = np.array([0.0, 1 / 3, 2 / 3, 1.0])
    minima = find_local_minima_xy(x, [3.0, 2.0, 2.0, 3.0])
    assert minima.size == 0


def test_endpoints_are_never_minima():
    x = np.linspace(0.0, 1.0, 5)
    assert find_local_minima_xy(x, [1.0, 2.0, 3.0, 2.0, 1.0]).size == 0


def test_monotonic_curve_has_no_minima():
    x = np.linspace(0.0, 1.0, 11)
    assert find_local_minima_xy(x, np.arange(11.0)).size == 0


@pytest.mark.parametrize("y", [[], [1.0], [1.0, 0.5]])
def test_short_curves(y):
    x = np.linspace(0.0, 1.0, len(y))
    assert find_local_minima_xy(x, y).size == 0


def test_domain_filter():
    x = np.array([0.0, 0.25, 0.5, 0.75, 1.0])
    y = [3.0, 1.0, 3.0, 1.0, 3.0]
    np.testing.assert_array_equal(find_local_minima_xy(x, y, domain_low=0.5), [0.75])
    np.testing.assert_array_equal(find_local_minima_xy(x, y, domain_high=0.5), [0.25])


def test_mismatched_lengths():
    with pytest.raises(ValueError):
        find_local_minima_xy([0.0, 0.5, 1.0], [1.0, 0.0])


def test_bimodal_clusters_give_single_minimum_at_midpoint(bimodal_samples):
    curve = estimate_density(bimodal_samples, bandwidth=0.05, grid_step=0.01)
    minima = find_local_minima(curve)
    assert minima.size == 1
    assert round(float(minima[0]), 2) == 0.5


def test_identical_samples_have_no_minima(unimodal_samples):
    curve = estimate_density(unimodal_samples, bandwidth=0.05)
    assert find_local_minima(curve).size == 0
    np.testing.assert_allclose(find_local_maxima(curve), [0.5])


def test_minima_are_strict_down_then_up(two_population_samples):
    curve = estimate_density(two_population_samples, bandwidth=0.05)
    minima = find_local_minima(curve)

    assert minima.size >= 1
    assert np.all(np.diff(minima) > 0)
    for m in minima:
        i = int(np.argmin(np.abs(curve.x - m)))
        assert curve.y[i - 1] > curve.y[i] < curve.y[i + 1]


def test_minimum_lies_between_population_peaks(two_population_samples):
    curve = estimate_density(two_population_samples, bandwidth=0.05)
    minima = find_local_minima(curve)
    maxima = find_local_maxima(curve)
    assert maxima.size == 2
    assert np.all((minima > maxima[0]) & (minima < maxima[1]))


def test_pure_function():
    y = np.array([2.0, 1.0, 2.0])
    curve = _curve(y.copy())
    first = find_local_minima(curve)
    second = find_local_minima(curve)
    np.testing.assert_array_equal(first, second)
    np.testing.assert_array_equal(curve.y, y)


def test_maxima_mirror_rule():
    curve = _curve([0.0, 2.0, 1.0, 3.0, 0.0])
    np.testing.assert_array_equal(find_local_maxima(curve), [0.25, 0.75])
    np.testing.assert_array_equal(find_local_minima(curve), [0.5])
