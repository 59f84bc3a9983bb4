"""
Simulation utilities for generating synthetic hover flight logs.

Modules:
    hover_flight: Vertical acceleration / thrust command logs from a true
                  hover thrust profile
"""

from hover_thrust.sim.hover_flight import (
    hover_thrust_profile,
    simulate_hover_flight,
)

__all__ = [
    "hover_thrust_profile",
    "simulate_hover_flight",
]
