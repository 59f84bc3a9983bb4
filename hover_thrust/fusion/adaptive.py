"""Adaptive measurement noise and innovation monitoring.

The vibration level seen by the accelerometer of a multirotor depends on
the airframe, the propellers and the flight condition, so the vertical
acceleration noise variance R cannot be tuned once for all vehicles. The
hover thrust filter learns it online with a first-order low-pass filter on
the squared post-fit residual:

    alpha = dt / (tau + dt)
    R <- (1 - alpha) * R + alpha * (residual² + H² * P)

The H² * P term restores the part of the residual variance absorbed by the
state update, so that R converges to the measurement noise and not to the
(smaller) post-fit residual variance. The time constant tau bounds how fast
R can move: a single outlier changes R by at most alpha * residual².

The InnovationMonitor keeps the bookkeeping used to judge the health of the
filter from outside (acceptance rate, consecutive rejections, NIS mean).
"""

from typing import Optional

import numpy as np


def noise_learning_alpha(dt: float, time_constant: float) -> float:
    """Forgetting factor of the measurement noise low-pass filter.

    Args:
        dt: Time elapsed since the previous update (s).
        time_constant: Low-pass filter time constant tau (s).

    Returns:
        alpha = dt / (tau + dt), in [0, 1).

    Example:
        >>> noise_learning_alpha(0.5, 0.5)
        0.5
    """
    return dt / (time_constant + dt)


def update_accel_noise_var(
    accel_noise_var: float,
    residual: float,
    H: float,
    state_var: float,
    dt: float,
    time_constant: float,
    accel_noise_var_min: float,
    accel_noise_var_max: float,
) -> float:
    """One step of the adaptive vertical acceleration noise estimate.

    Args:
        accel_noise_var: Current measurement noise variance R ((m/s²)²).
        residual: Post-fit residual if the sample was fused, raw innovation
                  otherwise (m/s²).
        H: Measurement sensitivity used for this sample.
        state_var: Hover thrust variance P after the update.
        dt: Time step (s).
        time_constant: Noise learning time constant (s).
        accel_noise_var_min: Lower clamp of R.
        accel_noise_var_max: Upper clamp of R.

    Returns:
        Updated and clamped R. The previous R is kept when the update is not
        finite (NaN/Inf sample), so a single corrupted sample cannot poison
        the noise estimate.
    """
    alpha = noise_learning_alpha(dt, time_constant)
    R = (1.0 - alpha) * accel_noise_var + alpha * (residual * residual + H * state_var * H)
    if not np.isfinite(R):
        return accel_noise_var
    return min(max(R, accel_noise_var_min), accel_noise_var_max)


class InnovationMonitor:
    """Health monitoring of the acceleration innovation stream.

    Tracks how many samples pass the innovation gate and whether the
    normalized innovations are statistically consistent. It never modifies
    the filter; the caller decides what to do with the diagnostics (for
    instance calling ``reset_accel_noise()`` when the filter has been
    starved by the gate after a violent maneuver).

    Usage:
        >>> monitor = InnovationMonitor(consecutive_reject_limit=3)
        >>> monitor.update(innov=0.1, innov_var=1.0, accepted=True)
        >>> monitor.get_stats()['total_accepts']
        1
    """

    def __init__(
        self,
        consecutive_reject_limit: int = 10,
        nis_window_size: int = 50,
    ):
        """Initialize the monitor.

        Args:
            consecutive_reject_limit: Consecutive rejections after which the
                                      stream is considered starved.
            nis_window_size: Rolling window size for NIS statistics.
        """
        if consecutive_reject_limit < 1:
            raise ValueError(
                f"consecutive_reject_limit must be >= 1, got {consecutive_reject_limit}"
            )
        if nis_window_size < 1:
            raise ValueError(f"nis_window_size must be >= 1, got {nis_window_size}")

        self.consecutive_reject_limit = consecutive_reject_limit
        self.nis_window_size = nis_window_size

        self.consecutive_rejects = 0
        self.max_consecutive_rejects = 0
        self.nis_history = []
        self.total_measurements = 0
        self.total_accepts = 0
        self.total_rejects = 0

    def update(self, innov: float, innov_var: float, accepted: bool) -> None:
        """Record one fused (or rejected) sample.

        Args:
            innov: Innovation of the sample.
            innov_var: Innovation variance of the sample (> 0).
            accepted: Whether the sample passed the gate.
        """
        self.total_measurements += 1

        self.nis_history.append(innov * innov / innov_var)
        if len(self.nis_history) > self.nis_window_size:
            self.nis_history.pop(0)

        if accepted:
            self.consecutive_rejects = 0
            self.total_accepts += 1
        else:
            self.consecutive_rejects += 1
            self.total_rejects += 1
            self.max_consecutive_rejects = max(
                self.max_consecutive_rejects, self.consecutive_rejects
            )

    @property
    def is_starved(self) -> bool:
        """True when the consecutive rejection limit has been reached."""
        return self.consecutive_rejects >= self.consecutive_reject_limit

    def mean_nis(self) -> Optional[float]:
        """Mean NIS over the rolling window (expected 1.0 when consistent)."""
        if not self.nis_history:
            return None
        return float(np.mean(self.nis_history))

    def get_stats(self) -> dict:
        """Get diagnostic statistics for logging.

        Returns:
            Dictionary with acceptance rate, NIS stats, etc.
        """
        acceptance_rate = (
            self.total_accepts / self.total_measurements
            if self.total_measurements > 0
            else 0.0
        )

        mean_nis = self.mean_nis()

        return {
            'total_measurements': self.total_measurements,
            'total_accepts': self.total_accepts,
            'total_rejects': self.total_rejects,
            'acceptance_rate': acceptance_rate,
            'consecutive_rejects': self.consecutive_rejects,
            'max_consecutive_rejects': self.max_consecutive_rejects,
            'mean_nis': mean_nis if mean_nis is not None else 0.0,
            'expected_nis': 1.0,
        }

    def reset(self):
        """Reset all tracking state (e.g., for a new flight)."""
        self.consecutive_rejects = 0
        self.max_consecutive_rejects = 0
        self.nis_history = []
        self.total_measurements = 0
        self.total_accepts = 0
        self.total_rejects = 0
