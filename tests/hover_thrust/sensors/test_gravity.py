"""
Unit tests for gravity magnitude computation.

Tests verify:
    1. WGS-84 latitude model at reference latitudes (0°, 45°, 90°)
    2. Monotonic increase from equator to pole
    3. Symmetric behavior for North/South hemispheres
    4. Standard gravity fallback
    5. Degree/radian conversion helper
"""

import unittest

import numpy as np

from hover_thrust.sensors.gravity import (
    STANDARD_GRAVITY,
    gravity_magnitude,
    gravity_magnitude_from_lat_deg,
    gravity_magnitude_wgs84,
)


class TestGravityMagnitudeWgs84(unittest.TestCase):
    """
    Test suite for the WGS-84 gravity magnitude.

    Reference values computed from:
        g(φ) = 9.7803 * (1 + 0.0053024·sin²(φ) - 0.000005·sin²(2φ))
    """

    def test_gravity_at_equator(self):
        """At the equator both sine terms vanish: g = 9.7803 m/s²."""
        self.assertAlmostEqual(gravity_magnitude_wgs84(0.0), 9.7803, places=6)

    def test_gravity_at_45_degrees(self):
        """
        At 45°:
            sin²(π/4) = 0.5, sin²(π/2) = 1
            g = 9.7803 * (1 + 0.0026512 - 0.000005) ≈ 9.8062 m/s²
        """
        g = gravity_magnitude_wgs84(np.deg2rad(45.0))

        expected_g = 9.7803 * (1 + 0.0053024 * 0.5 - 0.000005 * 1.0)
        self.assertAlmostEqual(g, expected_g, places=6)
        self.assertAlmostEqual(g, 9.8062, places=3)

    def test_gravity_at_north_pole(self):
        """At 90°: g = 9.7803 * 1.0053024 ≈ 9.8322 m/s²."""
        g = gravity_magnitude_wgs84(np.pi / 2.0)
        self.assertAlmostEqual(g, 9.7803 * 1.0053024, places=6)

    def test_monotonic_increase(self):
        """Gravity increases from equator to pole."""
        latitudes = np.deg2rad(np.linspace(0.0, 90.0, 19))
        values = [gravity_magnitude_wgs84(lat) for lat in latitudes]

        self.assertTrue(all(b > a for a, b in zip(values, values[1:])))

    def test_hemisphere_symmetry(self):
        for lat_deg in (10.0, 33.3, 47.4, 80.0):
            self.assertAlmostEqual(
                gravity_magnitude_from_lat_deg(lat_deg),
                gravity_magnitude_from_lat_deg(-lat_deg),
                places=12,
            )

    def test_return_type(self):
        self.assertIsInstance(gravity_magnitude_wgs84(0.3), float)


class TestGravityMagnitude(unittest.TestCase):
    """Test suite for the fallback wrapper."""

    def test_default_is_standard_gravity(self):
        self.assertEqual(gravity_magnitude(), STANDARD_GRAVITY)
        self.assertEqual(STANDARD_GRAVITY, 9.80665)

    def test_custom_default(self):
        self.assertEqual(gravity_magnitude(default_g=9.81), 9.81)

    def test_latitude_overrides_default(self):
        lat_rad = np.deg2rad(47.4)
        self.assertEqual(
            gravity_magnitude(lat_rad=lat_rad, default_g=1.0),
            gravity_magnitude_wgs84(lat_rad),
        )

    def test_equator_latitude_is_not_none(self):
        """A latitude of exactly 0 uses the model, not the fallback."""
        self.assertAlmostEqual(gravity_magnitude(lat_rad=0.0), 9.7803, places=6)

    def test_degrees_helper(self):
        self.assertEqual(
            gravity_magnitude_from_lat_deg(30.0),
            gravity_magnitude_wgs84(np.deg2rad(30.0)),
        )


if __name__ == "__main__":
    unittest.main()
