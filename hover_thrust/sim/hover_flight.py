"""
Synthetic hover flight logs for hover thrust estimation.

Generates time-aligned vertical acceleration and thrust command samples for
a multirotor holding altitude, using the same thrust model as the estimator:

    a_z = g * T / T_h - g + n_vib + n_outlier

where
    T       : commanded thrust (true hover thrust plus a sinusoidal excitation,
              representing the altitude controller correcting small errors)
    T_h     : true hover thrust, optionally stepping at ``change_time``
              (payload drop or pick-up)
    n_vib   : white vibration noise, N(0, accel_noise_std²)
    n_outlier: sparse impulsive disturbances (hard landing, gust, collision)
"""

from typing import Dict, Optional

import numpy as np

from hover_thrust.models.thrust_model import predicted_acc_z
from hover_thrust.sensors.gravity import STANDARD_GRAVITY


def hover_thrust_profile(
    t: np.ndarray,
    hover_thrust: float,
    hover_thrust_after: Optional[float] = None,
    change_time: Optional[float] = None,
) -> np.ndarray:
    """
    True hover thrust over time, with an optional step change.

    Args:
        t: Timestamps (N,).
        hover_thrust: Hover thrust before the change.
        hover_thrust_after: Hover thrust after the change (None: no change).
        change_time: Time of the change in seconds (None: no change).

    Returns:
        Hover thrust (N,).
    """
    t = np.asarray(t, dtype=float)
    profile = np.full_like(t, hover_thrust)
    if hover_thrust_after is not None and change_time is not None:
        profile[t >= change_time] = hover_thrust_after
    return profile


def simulate_hover_flight(
    duration: float = 60.0,
    dt: float = 0.02,
    hover_thrust: float = 0.45,
    hover_thrust_after: Optional[float] = None,
    change_time: Optional[float] = None,
    excitation_amplitude: float = 0.05,
    excitation_freq: float = 0.5,
    accel_noise_std: float = 1.5,
    outlier_prob: float = 0.0,
    outlier_magnitude: float = 20.0,
    gravity: float = STANDARD_GRAVITY,
    rng: Optional[np.random.Generator] = None,
) -> Dict[str, np.ndarray]:
    """
    Simulate a hover flight log.

    Args:
        duration: Log duration (s).
        dt: Sample period (s).
        hover_thrust: True hover thrust, in (0, 1).
        hover_thrust_after: True hover thrust after the step change.
        change_time: Time of the step change (s).
        excitation_amplitude: Relative amplitude of the thrust excitation
                              in [0, 1) (0.05 = ±5% of the hover thrust).
        excitation_freq: Excitation frequency (Hz).
        accel_noise_std: Vibration noise standard deviation (m/s²).
        outlier_prob: Probability that a sample carries an impulsive disturbance.
        outlier_magnitude: Standard deviation of the impulsive disturbances (m/s²).
        gravity: Gravity magnitude (m/s²).
        rng: Random number generator for reproducibility.
             If None, uses np.random.default_rng().

    Returns:
        Dictionary with arrays (N,):
            't', 'acc_z', 'thrust', 'hover_thrust_true', 'is_outlier'

    Raises:
        ValueError: If a parameter is out of range.

    Example:
        >>> rng = np.random.default_rng(42)
        >>> log = simulate_hover_flight(duration=1.0, dt=0.1, rng=rng)
        >>> log['acc_z'].shape
        (10,)
    """
    if duration <= 0:
        raise ValueError(f"duration must be positive, got {duration}")
    if dt <= 0 or dt > duration:
        raise ValueError(f"dt must be in (0, duration], got {dt}")
    for name, value in (("hover_thrust", hover_thrust),
                        ("hover_thrust_after", hover_thrust_after)):
        if value is not None and not (0.0 < value < 1.0):
            raise ValueError(f"{name} must be in (0, 1), got {value}")
    if not (0.0 <= excitation_amplitude < 1.0):
        raise ValueError(
            f"excitation_amplitude must be in [0, 1), got {excitation_amplitude}"
        )
    if accel_noise_std < 0:
        raise ValueError(f"accel_noise_std must be >= 0, got {accel_noise_std}")
    if not (0.0 <= outlier_prob <= 1.0):
        raise ValueError(f"outlier_prob must be in [0, 1], got {outlier_prob}")

    if rng is None:
        rng = np.random.default_rng()

    n = int(round(duration / dt))
    t = np.arange(n) * dt

    hover_true = hover_thrust_profile(t, hover_thrust, hover_thrust_after, change_time)

    thrust = hover_true * (
        1.0 + excitation_amplitude * np.sin(2.0 * np.pi * excitation_freq * t)
    )

    acc_z = predicted_acc_z(thrust, hover_true, gravity)
    acc_z = acc_z + accel_noise_std * rng.standard_normal(n)

    is_outlier = rng.random(n) < outlier_prob
    n_outliers = int(np.count_nonzero(is_outlier))
    if n_outliers > 0:
        acc_z[is_outlier] += outlier_magnitude * rng.standard_normal(n_outliers)

    return {
        't': t,
        'acc_z': acc_z,
        'thrust': thrust,
        'hover_thrust_true': hover_true,
        'is_outlier': is_outlier,
    }
