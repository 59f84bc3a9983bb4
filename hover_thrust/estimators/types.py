"""Data types for the hover thrust estimator.

This module defines the configuration of the zero-order hover thrust EKF and
the status snapshot returned by each measurement update.
"""

import json
import warnings
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Any, Dict, Union

from hover_thrust.sensors.gravity import STANDARD_GRAVITY


@dataclass(frozen=True)
class HoverThrustEkfConfig:
    """Initial state and tuning of the hover thrust EKF.

    Attributes:
        hover_thrust: Initial hover thrust estimate (normalized thrust).
        hover_thrust_var: Initial hover thrust variance P (thrust²).
        process_noise_var: Hover thrust random-walk variance rate Q (thrust²/s).
        accel_noise_var: Initial vertical acceleration noise variance R ((m/s²)²).
        gate_size: Innovation gate size in standard deviations.
        gravity: Gravity magnitude used by the measurement model (m/s²).
        noise_learning_time_constant: Time constant of the adaptive R filter (s).
        dt: Time step assumed until the first predict() call (s).
        accel_noise_var_min: Lower clamp of the learned R.
        accel_noise_var_max: Upper clamp of the learned R.
        hover_thrust_min: Lower clamp of the hover thrust estimate.
        hover_thrust_max: Upper clamp of the hover thrust estimate.

    Example:
        >>> cfg = HoverThrustEkfConfig(hover_thrust=0.35, gate_size=4.0)
        >>> cfg.accel_noise_var
        5.0
    """

    hover_thrust: float = 0.5
    hover_thrust_var: float = 0.01
    process_noise_var: float = 0.25e-6
    accel_noise_var: float = 5.0
    gate_size: float = 3.0
    gravity: float = STANDARD_GRAVITY
    noise_learning_time_constant: float = 0.5
    dt: float = 0.02
    accel_noise_var_min: float = 1.0
    accel_noise_var_max: float = 400.0
    hover_thrust_min: float = 0.1
    hover_thrust_max: float = 0.9

    def __post_init__(self) -> None:
        """Validate the configuration."""
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, bool) or not isinstance(value, (float, int)):
                raise TypeError(f"{f.name} must be numeric, got {type(value)}")

        if not (0.0 < self.hover_thrust_min < self.hover_thrust_max <= 1.0):
            raise ValueError(
                "Hover thrust bounds must satisfy 0 < min < max <= 1, got "
                f"[{self.hover_thrust_min}, {self.hover_thrust_max}]"
            )
        if not (self.hover_thrust_min <= self.hover_thrust <= self.hover_thrust_max):
            raise ValueError(
                f"Initial hover thrust {self.hover_thrust} outside "
                f"[{self.hover_thrust_min}, {self.hover_thrust_max}]"
            )
        if self.hover_thrust_var < 0:
            raise ValueError(f"hover_thrust_var must be >= 0, got {self.hover_thrust_var}")
        if self.process_noise_var < 0:
            raise ValueError(f"process_noise_var must be >= 0, got {self.process_noise_var}")
        if not (0.0 < self.accel_noise_var_min <= self.accel_noise_var_max):
            raise ValueError(
                "Acceleration noise bounds must satisfy 0 < min <= max, got "
                f"[{self.accel_noise_var_min}, {self.accel_noise_var_max}]"
            )
        if self.accel_noise_var < 0:
            raise ValueError(f"accel_noise_var must be >= 0, got {self.accel_noise_var}")
        if self.gate_size <= 0:
            raise ValueError(f"gate_size must be positive, got {self.gate_size}")
        if self.gravity <= 0:
            raise ValueError(f"gravity must be positive, got {self.gravity}")
        if self.noise_learning_time_constant <= 0:
            raise ValueError(
                "noise_learning_time_constant must be positive, got "
                f"{self.noise_learning_time_constant}"
            )
        if self.dt <= 0:
            raise ValueError(f"dt must be positive, got {self.dt}")

        if self.gate_size < 1.0 or self.gate_size > 10.0:
            warnings.warn(
                f"Innovation gate of {self.gate_size} sigma is unusual. "
                "Typical values are between 2 and 5.",
                UserWarning
            )

    def to_dict(self) -> Dict[str, float]:
        """Convert to a JSON-serializable dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HoverThrustEkfConfig":
        """Build a configuration from a dictionary.

        Missing keys take their default value.

        Raises:
            ValueError: If the dictionary contains unknown keys.
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ValueError(f"Unknown configuration keys: {sorted(unknown)}")
        return cls(**data)

    @classmethod
    def from_json(cls, path: Union[str, Path]) -> "HoverThrustEkfConfig":
        """Load a configuration from a JSON file.

        The file may either hold the configuration at top level or under an
        ``"estimator"`` key (layout of dataset config.json files).
        """
        with open(path, "r") as f:
            data = json.load(f)
        if "estimator" in data:
            data = data["estimator"]
        return cls.from_dict(data)


@dataclass(frozen=True)
class HoverThrustEkfStatus:
    """Snapshot returned by each acceleration fusion.

    Attributes:
        hover_thrust: Hover thrust estimate after the update.
        hover_thrust_var: Hover thrust variance P after the update.
        innov: Innovation (measured minus predicted vertical acceleration).
        innov_var: Innovation variance.
        innov_test_ratio: NIS divided by the squared gate size.
        accel_noise_var: Learned vertical acceleration noise variance R.
        accepted: Whether the sample passed the innovation gate.
    """

    hover_thrust: float
    hover_thrust_var: float
    innov: float
    innov_var: float
    innov_test_ratio: float
    accel_noise_var: float
    accepted: bool
