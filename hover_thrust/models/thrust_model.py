"""
Thrust / vertical acceleration measurement model.

A multirotor producing a normalized collective thrust T (0..1, ratio of the
maximum thrust) accelerates vertically according to

    a_z = g * T / T_h - g                                   (1)

where T_h is the hover thrust, i.e. the thrust that exactly compensates
gravity for the current vehicle mass. Eq. (1) follows from m * a_z =
T * F_max - m * g and T_h = m * g / F_max. Vertical acceleration is positive
up, so a vehicle in steady hover (T == T_h) measures a_z = 0.

The partial derivative of (1) with respect to the state T_h is the
measurement sensitivity used by the extended Kalman filter:

    H = d a_z / d T_h = -g * T / T_h²                       (2)

All functions accept scalars or numpy arrays (broadcasting applies).
"""

from typing import Union

import numpy as np

from hover_thrust.sensors.gravity import STANDARD_GRAVITY

ArrayLike = Union[float, np.ndarray]


def predicted_acc_z(
    thrust: ArrayLike,
    hover_thrust: ArrayLike,
    g: float = STANDARD_GRAVITY,
) -> ArrayLike:
    """
    Predict the vertical acceleration produced by a thrust command, Eq. (1).

    Args:
        thrust: Normalized commanded thrust T (> 0).
        hover_thrust: Hover thrust T_h (> 0).
        g: Gravity magnitude in m/s².

    Returns:
        Predicted vertical acceleration in m/s² (positive up).

    Example:
        >>> predicted_acc_z(0.5, 0.5)
        0.0
        >>> predicted_acc_z(0.6, 0.5) > 0.0
        True
    """
    return g * thrust / hover_thrust - g


def thrust_jacobian(
    thrust: ArrayLike,
    hover_thrust: ArrayLike,
    g: float = STANDARD_GRAVITY,
) -> ArrayLike:
    """
    Sensitivity of the predicted vertical acceleration to the hover thrust, Eq. (2).

    Args:
        thrust: Normalized commanded thrust T (> 0).
        hover_thrust: Hover thrust T_h (> 0), linearization point.
        g: Gravity magnitude in m/s².

    Returns:
        H = -g * T / T_h² (always negative for positive thrust).

    Example:
        >>> thrust_jacobian(0.5, 0.5) == -2.0 * STANDARD_GRAVITY
        True
    """
    return -g * thrust / (hover_thrust * hover_thrust)


def hover_thrust_from_acc_z(
    acc_z: ArrayLike,
    thrust: ArrayLike,
    g: float = STANDARD_GRAVITY,
) -> ArrayLike:
    """
    Invert Eq. (1): hover thrust implied by a single acceleration sample.

        T_h = g * T / (a_z + g)

    This is the noisy, instantaneous value the filter smooths. Useful to build
    ground truth from logs and to seed the estimator.

    Args:
        acc_z: Measured vertical acceleration in m/s² (positive up).
        thrust: Normalized commanded thrust T.
        g: Gravity magnitude in m/s².

    Returns:
        Instantaneous hover thrust.

    Raises:
        ValueError: If a_z + g <= 0 (free fall or worse: thrust carries no
                    information about the hover thrust).
    """
    denom = np.asarray(acc_z) + g
    if np.any(denom <= 0.0):
        raise ValueError(
            f"Vertical acceleration must be greater than -g ({-g}), "
            f"got min(acc_z) = {float(np.min(acc_z))}"
        )
    result = g * np.asarray(thrust) / denom
    if np.ndim(result) == 0:
        return float(result)
    return result


def thrust_for_acc_z(
    acc_z_setpoint: ArrayLike,
    hover_thrust: ArrayLike,
    g: float = STANDARD_GRAVITY,
) -> ArrayLike:
    """
    Thrust required to obtain a vertical acceleration setpoint.

        T = T_h * (a_z,sp + g) / g

    This is how an outer altitude controller consumes the hover thrust
    estimate: the acceleration setpoint is scaled into a thrust command.

    Args:
        acc_z_setpoint: Desired vertical acceleration in m/s² (positive up).
        hover_thrust: Current hover thrust estimate.
        g: Gravity magnitude in m/s².

    Returns:
        Normalized thrust command (not saturated).

    Example:
        >>> abs(thrust_for_acc_z(0.0, 0.42) - 0.42) < 1e-12
        True
    """
    return hover_thrust * (acc_z_setpoint + g) / g
