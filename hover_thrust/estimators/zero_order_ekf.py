"""
Zero-order hover thrust extended Kalman filter.

Single-state estimator of the hover thrust T_h, the normalized thrust a
multirotor has to command to compensate gravity. The vertical acceleration
is used as measurement and the current thrust command T[k] enters the
measurement model.

The state is noise driven (transition matrix F = 1):
    x[k+1] = x[k] + v,            v ~ N(0, Q * dt)
    y[k]   = h(T[k], x[k]) + w,   w ~ N(0, R)

with the measurement model and its partial derivative w.r.t. T_h:
    h(T, T_h) = g * T / T_h - g
    H[k]      = -g * T[k] / T_h[k]²

Because h is nonlinear in the state, the update uses the EKF linearization
H = dh/dT_h even though the time update is the identity. The measurement
noise R is learned online from the post-fit residuals (see
hover_thrust.fusion.adaptive).

Implements:
    - Time update:        P <- P + Q * dt
    - Innovation:         innov = a_z - h(T, T_h)
    - Innovation var:     S = H² P + R
    - Gate:               innov² / (gate² S) <= 1
    - Kalman gain:        K = P H / S
    - State update:       T_h <- T_h + K innov
    - Covariance update:  P <- (1 - K H) P
"""

import sys
import warnings
from typing import Optional

from hover_thrust.estimators.types import HoverThrustEkfConfig, HoverThrustEkfStatus
from hover_thrust.fusion.adaptive import update_accel_noise_var
from hover_thrust.fusion.gating import is_test_ratio_passing
from hover_thrust.models.thrust_model import predicted_acc_z, thrust_jacobian

ACCEL_NOISE_VAR_RESET = 5.0  # (m/s²)²

_INNOV_VAR_MIN = sys.float_info.epsilon


class ZeroOrderHoverThrustEkf:
    """
    Hover thrust estimator for multirotor vehicles.

    Meant to be called once per control-loop tick: ``predict(dt)`` followed,
    when a new vertical acceleration sample is available, by
    ``fuse_acc_z(acc_z, thrust)``. The inputs are assumed time aligned and
    valid (thrust > 0, dt > 0); the filter only protects itself against
    numerical degeneracy by clamping its variances.

    Not thread safe: the caller must serialize access.

    Attributes:
        config: Configuration used to initialize (and reset) the filter.

    Example:
        >>> ekf = ZeroOrderHoverThrustEkf()
        >>> ekf.predict(0.02)
        >>> status = ekf.fuse_acc_z(acc_z=0.0, thrust=0.5)
        >>> status.hover_thrust
        0.5
    """

    def __init__(self, config: Optional[HoverThrustEkfConfig] = None):
        """
        Initialize the estimator.

        Args:
            config: Initial state and tuning. Defaults to HoverThrustEkfConfig().
        """
        self.config = config if config is not None else HoverThrustEkfConfig()
        self.reset()

    def reset(self) -> None:
        """Restore the initial state, variances and gate from the configuration."""
        cfg = self.config
        self._hover_thr = float(cfg.hover_thrust)
        self._P = float(cfg.hover_thrust_var)
        self._Q = float(cfg.process_noise_var)
        self._R = float(cfg.accel_noise_var)
        self._gate_size = float(cfg.gate_size)
        self._dt = float(cfg.dt)

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def set_process_noise_std_dev(self, process_noise: float) -> None:
        """Set the hover thrust random-walk standard deviation (thrust/sqrt(s))."""
        self._Q = process_noise * process_noise

    def set_measurement_noise_std_dev(self, measurement_noise: float) -> None:
        """Set the vertical acceleration noise standard deviation (m/s²)."""
        self._R = measurement_noise * measurement_noise

    def set_hover_thrust_std_dev(self, hover_thrust_noise: float) -> None:
        """Set the hover thrust estimate standard deviation."""
        self._P = hover_thrust_noise * hover_thrust_noise

    def set_accel_innov_gate(self, gate_size: float) -> None:
        """Set the innovation gate size in standard deviations.

        Raises:
            ValueError: If gate_size is not positive.
        """
        if not gate_size > 0:
            raise ValueError(f"gate_size must be positive, got {gate_size}")
        self._gate_size = gate_size

    def set_hover_thrust(self, hover_thrust: float) -> None:
        """Re-seed the hover thrust estimate, constrained to the configured bounds."""
        self._hover_thr = self._constrain_hover_thrust(hover_thrust)

    def reset_accel_noise(self) -> None:
        """
        Force the measurement noise back to a wide default.

        To be called when the learned noise no longer represents the
        vibration environment, e.g. after a mode change or a violent maneuver.
        """
        self._R = ACCEL_NOISE_VAR_RESET

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def get_hover_thrust_estimate(self) -> float:
        """Current hover thrust estimate."""
        return self._hover_thr

    def get_hover_thrust_estimate_var(self) -> float:
        """Current hover thrust variance."""
        return self._P

    def get_accel_noise_var(self) -> float:
        """Current (learned) vertical acceleration noise variance."""
        return self._R

    # ------------------------------------------------------------------
    # Filter
    # ------------------------------------------------------------------

    def predict(self, dt: float) -> None:
        """
        Perform prediction step (time update).

        The state is a random walk, only its variance grows:
            P <- P + Q * dt

        Args:
            dt: Time elapsed since the previous call (s, > 0). Also used as the
                sample time of the measurement noise learning.
        """
        self._P += self._Q * dt
        self._dt = dt

    def fuse_acc_z(self, acc_z: float, thrust: float) -> HoverThrustEkfStatus:
        """
        Perform measurement update with a vertical acceleration sample.

        The sample is fused only if it passes the innovation gate. The
        measurement noise is learned in both cases, from the post-fit
        residual when fused and from the raw innovation otherwise, so that
        genuine turbulence widens R instead of being ignored by the gate.

        Args:
            acc_z: Measured vertical acceleration (m/s², positive up).
            thrust: Normalized thrust commanded when acc_z was sampled (> 0).

        Returns:
            HoverThrustEkfStatus snapshot.
        """
        H = self._compute_h(thrust)
        innov_var = self._compute_innov_var(H)
        innov = self._compute_innov(acc_z, thrust)
        innov_test_ratio = self._compute_innov_test_ratio(innov, innov_var)

        residual = innov
        accepted = is_test_ratio_passing(innov_test_ratio)

        if accepted:
            K = self._compute_kalman_gain(H, innov_var)
            self._update_state(K, innov)
            self._update_state_covariance(K, H)
            # hover thrust moved: the residual differs from the innovation
            residual = self._compute_innov(acc_z, thrust)

        self._update_measurement_noise(residual, H)

        return self._pack_status(innov, innov_var, innov_test_ratio, accepted)

    def _compute_h(self, thrust: float) -> float:
        return thrust_jacobian(thrust, self._hover_thr, self.config.gravity)

    def _compute_innov_var(self, H: float) -> float:
        innov_var = max(H * self._P * H + self._R, self._R)
        if not innov_var > _INNOV_VAR_MIN:
            warnings.warn(
                f"Innovation variance {innov_var} too small, clamped to {_INNOV_VAR_MIN}",
                RuntimeWarning
            )
            innov_var = _INNOV_VAR_MIN
        return innov_var

    def _compute_predicted_acc_z(self, thrust: float) -> float:
        return predicted_acc_z(thrust, self._hover_thr, self.config.gravity)

    def _compute_innov(self, acc_z: float, thrust: float) -> float:
        return acc_z - self._compute_predicted_acc_z(thrust)

    def _compute_kalman_gain(self, H: float, innov_var: float) -> float:
        return self._P * H / innov_var

    def _compute_innov_test_ratio(self, innov: float, innov_var: float) -> float:
        # Normalized Innovation Squared divided by its maximum gate size
        return innov * innov / (self._gate_size * self._gate_size * innov_var)

    def _update_state(self, K: float, innov: float) -> None:
        self._hover_thr = self._constrain_hover_thrust(self._hover_thr + K * innov)

    def _update_state_covariance(self, K: float, H: float) -> None:
        self._P = max((1.0 - K * H) * self._P, 0.0)

    def _update_measurement_noise(self, residual: float, H: float) -> None:
        cfg = self.config
        self._R = update_accel_noise_var(
            self._R,
            residual,
            H,
            self._P,
            self._dt,
            cfg.noise_learning_time_constant,
            cfg.accel_noise_var_min,
            cfg.accel_noise_var_max,
        )

    def _constrain_hover_thrust(self, hover_thrust: float) -> float:
        cfg = self.config
        return min(max(float(hover_thrust), cfg.hover_thrust_min), cfg.hover_thrust_max)

    def _pack_status(
        self,
        innov: float,
        innov_var: float,
        innov_test_ratio: float,
        accepted: bool,
    ) -> HoverThrustEkfStatus:
        return HoverThrustEkfStatus(
            hover_thrust=self._hover_thr,
            hover_thrust_var=self._P,
            innov=float(innov),
            innov_var=float(innov_var),
            innov_test_ratio=float(innov_test_ratio),
            accel_noise_var=self._R,
            accepted=accepted,
        )
