"""
Hover thrust estimation.

Available components:
    - ZeroOrderHoverThrustEkf: single-state EKF of the hover thrust
    - HoverThrustEkfConfig / HoverThrustEkfStatus: configuration and status
    - run_hover_thrust_ekf / load_hover_dataset: offline replay over logs
"""

from hover_thrust.estimators.types import HoverThrustEkfConfig, HoverThrustEkfStatus
from hover_thrust.estimators.zero_order_ekf import (
    ACCEL_NOISE_VAR_RESET,
    ZeroOrderHoverThrustEkf,
)
from hover_thrust.estimators.replay import load_hover_dataset, run_hover_thrust_ekf

__all__ = [
    "ZeroOrderHoverThrustEkf",
    "ACCEL_NOISE_VAR_RESET",
    "HoverThrustEkfConfig",
    "HoverThrustEkfStatus",
    "run_hover_thrust_ekf",
    "load_hover_dataset",
]
