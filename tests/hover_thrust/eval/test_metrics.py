"""
Unit tests for hover thrust evaluation metrics and plots.

Run with: pytest tests/hover_thrust/eval/test_metrics.py -v
"""

import tempfile
import unittest
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import numpy as np
import pytest

from hover_thrust.eval.metrics import (
    compute_convergence_time,
    compute_error_stats,
    compute_nis,
    compute_nis_consistency,
    compute_rmse,
)
from hover_thrust.eval.plots import (
    plot_hover_thrust_estimate,
    plot_innovation_diagnostics,
    save_figure,
)


class TestErrorMetrics(unittest.TestCase):
    """Test error statistics."""

    def test_rmse(self):
        self.assertAlmostEqual(compute_rmse(np.array([3.0, -4.0])), np.sqrt(12.5))
        self.assertEqual(compute_rmse(np.zeros(5)), 0.0)

    def test_error_stats(self):
        errors = np.array([0.01, -0.02, 0.03, -0.04])
        stats = compute_error_stats(errors)

        self.assertAlmostEqual(stats['mean'], 0.025)
        self.assertAlmostEqual(stats['bias'], -0.005)
        self.assertAlmostEqual(stats['median'], 0.025)
        self.assertAlmostEqual(stats['max'], 0.04)
        self.assertAlmostEqual(stats['rmse'], compute_rmse(errors))
        self.assertLessEqual(stats['p90'], stats['p95'])
        self.assertLessEqual(stats['p95'], stats['max'])

    def test_error_stats_invalid(self):
        with self.assertRaises(ValueError):
            compute_error_stats(np.array([]))
        with self.assertRaises(ValueError):
            compute_error_stats(np.zeros((3, 2)))


class TestNis(unittest.TestCase):
    """Test NIS computation and consistency check."""

    def test_compute_nis(self):
        nis = compute_nis(np.array([2.0, -3.0, 1.0]), np.array([4.0, 9.0, 0.0]))

        self.assertAlmostEqual(nis[0], 1.0)
        self.assertAlmostEqual(nis[1], 1.0)
        self.assertTrue(np.isnan(nis[2]))

    def test_compute_nis_shape_mismatch(self):
        with self.assertRaises(ValueError):
            compute_nis(np.zeros(3), np.ones(4))

    def test_consistent_innovations(self):
        """Gaussian innovations with the right variance are consistent."""
        rng = np.random.default_rng(0)
        innov_var = np.full(20000, 2.5)
        innov = np.sqrt(innov_var) * rng.standard_normal(20000)

        result = compute_nis_consistency(compute_nis(innov, innov_var))

        self.assertAlmostEqual(result['mean_nis'], 1.0, delta=0.05)
        self.assertAlmostEqual(result['fraction_inside'], 0.95, delta=0.01)
        self.assertLess(result['lower'], result['upper'])

    def test_overconfident_filter(self):
        """Innovation variance too small: NIS mean well above 1."""
        rng = np.random.default_rng(1)
        innov = 3.0 * rng.standard_normal(5000)

        result = compute_nis_consistency(compute_nis(innov, np.ones(5000)))

        self.assertGreater(result['mean_nis'], 5.0)
        self.assertLess(result['fraction_inside'], 0.8)

    def test_nan_ignored(self):
        result = compute_nis_consistency(np.array([1.0, np.nan, 1.0]))
        self.assertEqual(result['mean_nis'], 1.0)

    def test_no_valid_values(self):
        with self.assertRaises(ValueError):
            compute_nis_consistency(np.array([np.nan, np.nan]))


class TestConvergenceTime(unittest.TestCase):
    """Test settling time computation."""

    def setUp(self):
        self.t = np.arange(100) * 0.1
        self.truth = np.full(100, 0.45)

    def test_settles(self):
        estimate = self.truth + 0.1 * np.exp(-self.t)
        # 0.1 * exp(-t) <= 0.01 for t >= ln(10)
        t_conv = compute_convergence_time(self.t, estimate, self.truth, tolerance=0.01)

        self.assertAlmostEqual(t_conv, 2.4, places=9)

    def test_already_converged(self):
        t_conv = compute_convergence_time(self.t, self.truth, self.truth)
        self.assertEqual(t_conv, 0.0)

    def test_never_settles(self):
        estimate = self.truth + 0.05
        self.assertIsNone(compute_convergence_time(self.t, estimate, self.truth))

    def test_leaves_tolerance_at_end(self):
        estimate = self.truth.copy()
        estimate[-1] += 0.1
        self.assertIsNone(compute_convergence_time(self.t, estimate, self.truth))

    def test_relative_to_t_start(self):
        estimate = self.truth.copy()
        estimate[50:60] += 0.05
        t_conv = compute_convergence_time(
            self.t, estimate, self.truth, tolerance=0.01, t_start=5.0
        )

        self.assertAlmostEqual(t_conv, 1.0, places=9)

    def test_t_start_after_log(self):
        self.assertIsNone(
            compute_convergence_time(self.t, self.truth, self.truth, t_start=100.0)
        )


@pytest.fixture
def replay_result():
    n = 50
    t = np.arange(n) * 0.02
    result = {
        'hover_thrust': np.linspace(0.5, 0.45, n),
        'hover_thrust_var': np.linspace(1e-2, 1e-4, n),
        'innov': np.sin(t),
        'innov_var': np.full(n, 2.0),
        'innov_test_ratio': np.sin(t) ** 2 / 18.0,
        'accel_noise_var': np.full(n, 2.0),
        'accepted': np.ones(n, dtype=bool),
    }
    return t, result


def test_plots_and_save(replay_result):
    t, result = replay_result

    fig1 = plot_hover_thrust_estimate(t, {"EKF": result}, truth=np.full(len(t), 0.45))
    fig2 = plot_innovation_diagnostics(t, result, gate_size=3.0)

    with tempfile.TemporaryDirectory() as tmp:
        paths = save_figure(fig1, Path(tmp) / "figs", "estimate", formats=("png",))
        assert len(paths) == 1
        assert paths[0].exists()

    assert len(fig2.axes) >= 2
    plt.close(fig1)
    plt.close(fig2)


if __name__ == "__main__":
    unittest.main()
