"""Innovation gating utilities for the hover thrust filter.

The hover thrust filter has a single scalar measurement (vertical
acceleration), so the squared Mahalanobis distance of the innovation reduces
to the Normalized Innovation Squared (NIS):

    d² = innov² / innov_var

Instead of comparing d² against a chi-square quantile directly, the gate is
expressed in innovation standard deviations (``gate_size``) and the test
ratio is normalized so that the decision threshold is always 1:

    test_ratio = innov² / (gate_size² * innov_var)

    accept  if test_ratio <= 1   (|innov| <= gate_size * sqrt(innov_var))
    reject  otherwise

Since d² follows a chi-square distribution with one degree of freedom for a
consistent filter, a gate of ``gate_size`` sigmas corresponds to the
confidence level chi2.cdf(gate_size², 1), e.g. 3 sigma ≈ 99.73%.
"""

import numpy as np
from scipy import stats


def innovation_test_ratio(
    innov: float,
    innov_var: float,
    gate_size: float,
) -> float:
    """Compute the ratio between the NIS and the squared gate size.

    Args:
        innov: Scalar innovation (measurement minus prediction).
        innov_var: Innovation variance, must be positive.
        gate_size: Gate size in innovation standard deviations, must be positive.

    Returns:
        Test ratio; values <= 1 pass the gate.

    Raises:
        ValueError: If innov_var or gate_size is not positive.

    Example:
        >>> innovation_test_ratio(6.0, 4.0, 3.0)
        1.0
        >>> innovation_test_ratio(0.0, 4.0, 3.0)
        0.0
    """
    if innov_var <= 0.0:
        raise ValueError(f"Innovation variance must be positive, got {innov_var}")
    if gate_size <= 0.0:
        raise ValueError(f"Gate size must be positive, got {gate_size}")

    return float(innov * innov / (gate_size * gate_size * innov_var))


def is_test_ratio_passing(innov_test_ratio: float) -> bool:
    """Gating decision; the boundary (ratio == 1) is accepted."""
    return bool(innov_test_ratio <= 1.0)


def gate_size_from_confidence(confidence: float) -> float:
    """Gate size (in sigmas) that accepts ``confidence`` of consistent samples.

    Args:
        confidence: Acceptance probability in (0, 1), e.g. 0.9973.

    Returns:
        sqrt(chi2.ppf(confidence, dof=1)).

    Raises:
        ValueError: If confidence is not in (0, 1).

    Example:
        >>> round(gate_size_from_confidence(0.9545), 2)
        2.0
    """
    if not (0 < confidence < 1):
        raise ValueError(
            f"Confidence level must be in (0, 1), got {confidence}"
        )

    return float(np.sqrt(stats.chi2.ppf(confidence, 1)))


def gate_confidence_from_size(gate_size: float) -> float:
    """Acceptance probability of a ``gate_size``-sigma gate for a consistent filter.

    Args:
        gate_size: Gate size in innovation standard deviations (> 0).

    Returns:
        chi2.cdf(gate_size², dof=1).

    Raises:
        ValueError: If gate_size is not positive.

    Example:
        >>> round(gate_confidence_from_size(3.0), 4)
        0.9973
    """
    if gate_size <= 0.0:
        raise ValueError(f"Gate size must be positive, got {gate_size}")

    return float(stats.chi2.cdf(gate_size * gate_size, 1))


def chi_square_bounds(
    dof: int = 1,
    confidence: float = 0.95,
) -> tuple[float, float]:
    """Get lower and upper chi-square bounds for NIS consistency monitoring.

    The bounds cover the central ``confidence`` probability mass:
        - lower = ppf((1 - confidence) / 2)
        - upper = ppf((1 + confidence) / 2)

    Args:
        dof: Degrees of freedom (1 for the scalar acceleration measurement).
        confidence: Confidence level in (0, 1).

    Returns:
        Tuple (lower_bound, upper_bound).

    Raises:
        ValueError: If dof < 1 or confidence is not in (0, 1).

    Example:
        >>> lower, upper = chi_square_bounds(dof=1, confidence=0.95)
        >>> 0.0 < lower < 0.01
        True
        >>> 5.0 < upper < 5.1
        True
    """
    if dof < 1:
        raise ValueError(f"Degrees of freedom must be positive, got {dof}")
    if not (0 < confidence < 1):
        raise ValueError(
            f"Confidence level must be in (0, 1), got {confidence}"
        )

    lower = float(stats.chi2.ppf((1.0 - confidence) / 2.0, dof))
    upper = float(stats.chi2.ppf((1.0 + confidence) / 2.0, dof))

    return lower, upper
