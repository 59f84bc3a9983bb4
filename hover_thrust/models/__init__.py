"""
Measurement models for hover thrust estimation.

The hover thrust filter has a trivial (identity) process model, so only the
nonlinear thrust/acceleration measurement model lives here.
"""

from .thrust_model import (
    predicted_acc_z,
    thrust_jacobian,
    hover_thrust_from_acc_z,
    thrust_for_acc_z,
)

__all__ = [
    'predicted_acc_z',
    'thrust_jacobian',
    'hover_thrust_from_acc_z',
    'thrust_for_acc_z',
]
