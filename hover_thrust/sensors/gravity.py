"""
Gravity magnitude used by the hover thrust measurement model.

The thrust/acceleration relationship

    a_z = g * T / T_h - g

scales linearly with the local gravity magnitude g, so the same value must be
used by the estimator, the simulator and any offline replay. This module is the
single source of truth for that value.

Two options are provided:
    - Standard gravity (9.80665 m/s², the ISO 80000 conventional value)
    - Latitude-dependent WGS-84 gravity for a "locally configured" value

Design:
    - Explicit radians: latitude must be in radians to avoid conversion errors
    - Falls back to standard gravity when latitude is unavailable
"""

from typing import Optional
import numpy as np


STANDARD_GRAVITY = 9.80665  # m/s²


def gravity_magnitude_wgs84(lat_rad: float) -> float:
    """
    Compute gravity magnitude using the WGS-84 latitude model.

        g(φ) = 9.7803 * (1 + 0.0053024·sin²(φ) - 0.000005·sin²(2φ))

    where φ is geodetic latitude in radians.

    Physical Interpretation:
        - Equator (φ=0°):   g ≈ 9.780 m/s² (minimum, strongest centrifugal effect)
        - 45° latitude:     g ≈ 9.806 m/s² (mid-range)
        - Poles (φ=±90°):   g ≈ 9.832 m/s² (maximum, no centrifugal effect)

    For a vehicle in hover the ≈0.5% variation translates directly into a
    ≈0.5% bias of the predicted vertical acceleration at full thrust, which
    the adaptive measurement noise would otherwise absorb.

    Args:
        lat_rad: Geodetic latitude in radians, in [-π/2, +π/2].

    Returns:
        Gravity magnitude g in m/s².

    Notes:
        - Sea level only; altitude correction is not included.

    Example:
        >>> g_equator = gravity_magnitude_wgs84(0.0)
        >>> round(g_equator, 4)
        9.7803
    """
    sin_lat = np.sin(lat_rad)
    sin_lat_sq = sin_lat * sin_lat
    sin_2lat = np.sin(2.0 * lat_rad)
    sin_2lat_sq = sin_2lat * sin_2lat

    g = 9.7803 * (1.0 + 0.0053024 * sin_lat_sq - 0.000005 * sin_2lat_sq)

    return float(g)


def gravity_magnitude(
    lat_rad: Optional[float] = None,
    default_g: float = STANDARD_GRAVITY,
) -> float:
    """
    Compute gravity magnitude with automatic fallback.

    Behavior:
        - If lat_rad is provided: use the WGS-84 latitude model
        - If lat_rad is None: return default_g

    Args:
        lat_rad: Geodetic latitude in radians (optional).
        default_g: Fallback gravity magnitude when lat_rad is None.
                   Default: 9.80665 m/s² (standard gravity).

    Returns:
        Gravity magnitude in m/s².

    Example:
        >>> gravity_magnitude()
        9.80665
        >>> g = gravity_magnitude(lat_rad=np.deg2rad(47.4))  # Zurich
        >>> 9.80 < g < 9.81
        True
    """
    if lat_rad is None:
        return default_g
    return gravity_magnitude_wgs84(lat_rad)


def gravity_magnitude_from_lat_deg(lat_deg: float) -> float:
    """
    Convenience wrapper: compute gravity from latitude in degrees.

    Args:
        lat_deg: Geodetic latitude in degrees, in [-90, +90].

    Returns:
        Gravity magnitude in m/s².
    """
    lat_rad = np.deg2rad(lat_deg)
    return gravity_magnitude_wgs84(lat_rad)
