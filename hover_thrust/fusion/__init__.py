"""Innovation gating and adaptive noise utilities.

This package provides the statistical tools used by the hover thrust filter:
- Innovation test ratio and gate decision
- Conversion between gate size (sigmas) and chi-square confidence
- Online learning of the vertical acceleration noise variance
- Innovation stream health monitoring
"""

from hover_thrust.fusion.adaptive import (
    InnovationMonitor,
    noise_learning_alpha,
    update_accel_noise_var,
)
from hover_thrust.fusion.gating import (
    chi_square_bounds,
    gate_confidence_from_size,
    gate_size_from_confidence,
    innovation_test_ratio,
    is_test_ratio_passing,
)

__all__ = [
    # Gating
    "innovation_test_ratio",
    "is_test_ratio_passing",
    "gate_size_from_confidence",
    "gate_confidence_from_size",
    "chi_square_bounds",
    # Adaptive noise
    "noise_learning_alpha",
    "update_accel_noise_var",
    "InnovationMonitor",
]
