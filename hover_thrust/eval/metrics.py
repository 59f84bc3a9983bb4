"""
Evaluation Metrics for Hover Thrust Estimation.

This module provides functions to compute estimation error metrics and
innovation consistency statistics for the hover thrust filter.
"""

from typing import Dict, Optional

import numpy as np

from hover_thrust.fusion.gating import chi_square_bounds


def compute_rmse(errors: np.ndarray) -> float:
    """
    Compute Root Mean Square Error (RMSE).

    Args:
        errors: Errors, shape (N,)

    Returns:
        rmse: Scalar RMSE
    """
    errors = np.asarray(errors)
    return float(np.sqrt(np.mean(errors**2)))


def compute_error_stats(errors: np.ndarray) -> Dict[str, float]:
    """
    Compute error statistics.

    Args:
        errors: Hover thrust errors (estimate - truth), shape (N,)

    Returns:
        stats: Dictionary with keys:
               - 'mean': Mean absolute error
               - 'bias': Mean signed error
               - 'median': Median absolute error
               - 'std': Standard deviation of the absolute error
               - 'rmse': Root mean square error
               - 'p90': 90th percentile
               - 'p95': 95th percentile
               - 'max': Maximum absolute error
    """
    errors = np.asarray(errors, dtype=float)
    if errors.ndim != 1 or errors.size == 0:
        raise ValueError(f"errors must be a non-empty 1D array, got shape {errors.shape}")

    abs_errors = np.abs(errors)

    stats = {
        "mean": float(np.mean(abs_errors)),
        "bias": float(np.mean(errors)),
        "median": float(np.median(abs_errors)),
        "std": float(np.std(abs_errors)),
        "rmse": float(np.sqrt(np.mean(abs_errors**2))),
        "p90": float(np.percentile(abs_errors, 90)),
        "p95": float(np.percentile(abs_errors, 95)),
        "max": float(np.max(abs_errors)),
    }

    return stats


def compute_nis(innovation: np.ndarray, innov_var: np.ndarray) -> np.ndarray:
    """
    Compute Normalized Innovation Squared (NIS) of scalar innovations.

        NIS = innov² / innov_var

    For a consistent filter, NIS follows a chi-square distribution with one
    degree of freedom.

    Args:
        innovation: Innovations, shape (N,)
        innov_var: Innovation variances, shape (N,)

    Returns:
        nis: NIS values, shape (N,); NaN where innov_var <= 0

    Raises:
        ValueError: If inputs have incompatible shapes
    """
    innovation = np.asarray(innovation, dtype=float)
    innov_var = np.asarray(innov_var, dtype=float)

    if innovation.shape != innov_var.shape:
        raise ValueError(
            f"innovation and innov_var must have the same shape, got "
            f"{innovation.shape} and {innov_var.shape}"
        )

    nis = np.full(innovation.shape, np.nan)
    valid = innov_var > 0
    nis[valid] = innovation[valid] ** 2 / innov_var[valid]

    return nis


def compute_nis_consistency(
    nis: np.ndarray,
    confidence: float = 0.95,
) -> Dict[str, float]:
    """
    Check NIS values against the chi-square (1 DOF) confidence interval.

    Args:
        nis: NIS values, shape (N,); NaN values are ignored
        confidence: Confidence level of the two-sided interval

    Returns:
        Dictionary with 'mean_nis', 'lower', 'upper' and 'fraction_inside'
        (expected to be close to ``confidence`` for a well-tuned filter).
    """
    nis = np.asarray(nis, dtype=float)
    nis = nis[~np.isnan(nis)]
    if nis.size == 0:
        raise ValueError("No valid NIS values")

    lower, upper = chi_square_bounds(dof=1, confidence=confidence)
    inside = (nis >= lower) & (nis <= upper)

    return {
        "mean_nis": float(np.mean(nis)),
        "lower": lower,
        "upper": upper,
        "fraction_inside": float(np.mean(inside)),
    }


def compute_convergence_time(
    t: np.ndarray,
    estimate: np.ndarray,
    truth: np.ndarray,
    tolerance: float = 0.01,
    t_start: float = 0.0,
) -> Optional[float]:
    """
    Time needed for the estimate to settle within ``tolerance`` of the truth.

    The estimate is settled at the first sample after which the absolute
    error stays within tolerance until the end of the log.

    Args:
        t: Timestamps, shape (N,)
        estimate: Hover thrust estimate, shape (N,)
        truth: True hover thrust, shape (N,)
        tolerance: Absolute tolerance (normalized thrust)
        t_start: Reference time (e.g. time of a hover thrust change);
                 only samples at or after t_start are considered

    Returns:
        Settling time relative to t_start in seconds, or None if the
        estimate never settles.
    """
    t = np.asarray(t, dtype=float)
    err = np.abs(np.asarray(estimate, dtype=float) - np.asarray(truth, dtype=float))

    mask = t >= t_start
    t = t[mask]
    err = err[mask]
    if t.size == 0:
        return None

    outside = np.nonzero(err > tolerance)[0]
    if outside.size == 0:
        return float(t[0] - t_start)
    last_outside = outside[-1]
    if last_outside == t.size - 1:
        return None
    return float(t[last_outside + 1] - t_start)
