"""
Sensor-side constants and models.

Modules:
    gravity: Standard and latitude-dependent gravity magnitude
"""

from hover_thrust.sensors.gravity import (
    STANDARD_GRAVITY,
    gravity_magnitude,
    gravity_magnitude_from_lat_deg,
    gravity_magnitude_wgs84,
)

__all__ = [
    "STANDARD_GRAVITY",
    "gravity_magnitude",
    "gravity_magnitude_from_lat_deg",
    "gravity_magnitude_wgs84",
]
