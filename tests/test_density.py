"""
Tests for grid construction and Gaussian KDE estimation.
"""

import numpy as np
import pytest

from methyl_kde.analysis.density import DensityCurve, estimate_density, make_grid
from methyl_kde.exceptions import EstimationError


class TestMakeGrid:
    """Tests for make_grid."""

    def test_grid_includes_both_bounds(self):
        """A step of 0.5 over [0, 1] gives exactly three points."""
        grid = make_grid(0.0, 1.0, 0.5)
        np.testing.assert_array_equal(grid, [0.0, 0.5, 1.0])

    def test_default_grid_has_101_points(self):
        grid = make_grid(0.0, 1.0, 0.01)
        assert grid.size == 101
        assert grid[0] == 0.0
        assert grid[-1] == 1.0

    def test_step_not_dividing_domain_stops_below_upper_bound(self):
        grid = make_grid(0.0, 1.0, 0.3)
        assert grid.size == 4
        assert grid[-1] == pytest.approx(0.9)
        assert grid[-1] <= 1.0

    def test_floating_point_step_count(self):
        """0.3 / 0.1 is just under 3 in floating point but must give 4 points."""
        grid = make_grid(0.0, 0.3, 0.1)
        assert grid.size == 4
        assert grid[-1] == 0.3

    def test_strictly_increasing(self):
        grid = make_grid(0.2, 0.8, 0.07)
        assert np.all(np.diff(grid) > 0)
        assert grid[0] == 0.2
        assert grid[-1] <= 0.8

    @pytest.mark.parametrize("low, high, step", [
        (0.0, 1.0, 0.0),
        (0.0, 1.0, -0.01),
        (1.0, 1.0, 0.01),
        (1.0, 0.0, 0.01),
    ])
    def test_invalid_parameters(self, low, high, step):
        with pytest.raises(EstimationError):
            make_grid(low, high, step)

    def test_non_numeric_step(self):
        with pytest.raises(EstimationError, match="grid_step"):
            make_grid(0.0, 1.0, "tenth")


class TestEstimateDensity:
    """Tests for estimate_density."""

    @pytest.mark.parametrize("step", [0.01, 0.02, 0.05, 0.3, 0.5])
    def test_length_matches_grid(self, two_population_samples, step):
        curve = estimate_density(two_population_samples, grid_step=step)
        expected = int(np.floor(1.0 / step + 1e-10)) + 1
        assert len(curve) == expected
        assert curve.y.size == curve.x.size

    def test_values_non_negative(self, two_population_samples):
        curve = estimate_density(two_population_samples)
        assert np.all(curve.y >= 0)

    def test_integrates_to_about_one(self):
        """Mass well inside the domain integrates close to 1."""
        samples = np.linspace(0.4, 0.6, 50)
        curve = estimate_density(samples, bandwidth=0.05)
        assert curve.integral() == pytest.approx(1.0, abs=0.01)

    def test_truncation_loses_mass_near_boundary(self):
        samples = np.array([0.0, 0.0, 0.01, 0.02])
        curve = estimate_density(samples, bandwidth=0.05)
        assert curve.integral() < 0.75

    def test_matches_gaussian_formula(self):
        samples = np.array([0.3, 0.7])
        h = 0.1
        curve = estimate_density(samples, bandwidth=h, grid_step=0.1)
        x = curve.x
        expected = (
            np.exp(-0.5 * ((x - 0.3) / h) ** 2) + np.exp(-0.5 * ((x - 0.7) / h) ** 2)
        ) / (2 * h * np.sqrt(2 * np.pi))
        np.testing.assert_allclose(curve.y, expected, rtol=1e-12)

    def test_peaks_at_cluster_centres(self, bimodal_samples):
        curve = estimate_density(bimodal_samples, bandwidth=0.05)
        left = curve.x[np.argmax(np.where(curve.x < 0.5, curve.y, -1))]
        right = curve.x[np.argmax(np.where(curve.x > 0.5, curve.y, -1))]
        assert left == pytest.approx(0.1)
        assert right == pytest.approx(0.9)

    def test_deterministic(self, two_population_samples):
        first = estimate_density(two_population_samples)
        second = estimate_density(two_population_samples)
        np.testing.assert_array_equal(first.y, second.y)

    def test_does_not_modify_samples(self, two_population_samples):
        before = two_population_samples.copy()
        estimate_density(two_population_samples)
        np.testing.assert_array_equal(two_population_samples, before)

    def test_curve_is_read_only(self, bimodal_samples):
        curve = estimate_density(bimodal_samples)
        with pytest.raises(ValueError):
            curve.y[0] = 1.0

    def test_binned_method_agrees_with_direct(self, two_population_samples):
        direct = estimate_density(two_population_samples, method="direct")
        binned = estimate_density(two_population_samples, method="binned")
        assert np.all(binned.y >= 0)
        np.testing.assert_allclose(binned.y, direct.y, atol=0.01 * direct.y.max())

    def test_binned_method_keeps_target_grid(self, two_population_samples):
        curve = estimate_density(two_population_samples, method="binned", grid_step=0.5)
        np.testing.assert_array_equal(curve.x, [0.0, 0.5, 1.0])

    def test_records_parameters(self, bimodal_samples):
        curve = estimate_density(bimodal_samples, bandwidth=0.07, domain_low=0.0, domain_high=1.0)
        assert curve.bandwidth == 0.07
        assert (curve.domain_low, curve.domain_high) == (0.0, 1.0)

    @pytest.mark.parametrize("bandwidth", [0.0, -0.05, float("nan")])
    def test_invalid_bandwidth(self, bimodal_samples, bandwidth):
        with pytest.raises(EstimationError):
            estimate_density(bimodal_samples, bandwidth=bandwidth)

    def test_invalid_grid_step(self, bimodal_samples):
        with pytest.raises(EstimationError):
            estimate_density(bimodal_samples, grid_step=0)

    def test_degenerate_domain(self, bimodal_samples):
        with pytest.raises(EstimationError):
            estimate_density(bimodal_samples, domain_low=1.0, domain_high=1.0)

    @pytest.mark.parametrize("samples", [[], [0.5]])
    def test_too_few_samples(self, samples):
        with pytest.raises(EstimationError):
            estimate_density(samples)

    @pytest.mark.parametrize("param", ["bandwidth", "grid_step", "domain_low", "domain_high"])
    def test_non_numeric_parameter(self, bimodal_samples, param):
        with pytest.raises(EstimationError, match=param):
            estimate_density(bimodal_samples, **{param: "abc"})

    def test_none_bandwidth(self, bimodal_samples):
        with pytest.raises(EstimationError):
            estimate_density(bimodal_samples, bandwidth=None)

    def test_numeric_strings_are_accepted(self, bimodal_samples):
        """Quoted YAML numbers behave like the numbers they spell."""
        from_text = estimate_density(bimodal_samples, bandwidth="0.05", grid_step="0.01")
        from_float = estimate_density(bimodal_samples, bandwidth=0.05, grid_step=0.01)
        np.testing.assert_array_equal(from_text.y, from_float.y)
        assert from_text.bandwidth == 0.05

    def test_non_numeric_samples(self):
        with pytest.raises(EstimationError):
            estimate_density(["low", "high"])

    def test_unknown_method(self, bimodal_samples):
        with pytest.raises(EstimationError):
            estimate_density(bimodal_samples, method="silverman")

    def test_estimation_error_is_value_error(self):
        with pytest.raises(ValueError):
            estimate_density([0.1, 0.2], bandwidth=0)


def test_density_curve_rejects_mismatched_lengths():
    with pytest.raises(EstimationError):
        DensityCurve(
            x=np.array([0.0, 0.5, 1.0]),
            y=np.array([1.0, 2.0]),
            bandwidth=0.05,
            domain_low=0.0,
            domain_high=1.0,
        )


def test_value_at_interpolates_linearly():
    curve = DensityCurve(
        x=np.array([0.0, 0.5, 1.0]),
        y=np.array([0.0, 2.0, 0.0]),
        bandwidth=0.05,
        domain_low=0.0,
        domain_high=1.0,
    )
    assert curve.value_at(0.25) == pytest.approx(1.0)
    np.testing.assert_allclose(curve.value_at([0.5, 0.75]), [2.0, 1.0])


def test_density_curve_copies_caller_arrays():
    x = np.array([0.0, 0.5, 1.0])
    y = np.array([1.0, 0.0, 1.0])
    curve = DensityCurve(x=x, y=y, bandwidth=0.05, domain_low=0.0, domain_high=1.0)

    y[0] = 2.0
    x[1] = 0.4

    assert curve.y[0] == 1.0
    assert curve.x[1] == 0.5
    with pytest.raises(ValueError):
        curve.y[0] = 3.0


def test_density_curve_accepts_lists():
    curve = DensityCurve(
        x=[0.0, 0.5, 1.0],
        y=[1.0, 0.0, 1.0],
        bandwidth=0.05,
        domain_low=0.0,
        domain_high=1.0,
    )
    assert isinstance(curve.y, np.ndarray)
    assert curve.y.dtype == float
    assert len(curve) == 3
