"""
Tests for the Frame Transform

Covers inertial -> spherical -> geodetic conversion, longitude wrapping and
rejection of non-finite coordinates.

Run with:
    python -m pytest tests/test_frames.py -v
"""

import math
import unittest
from datetime import datetime, timedelta, timezone

import numpy as np

from ground_track.frames import (
    InvalidGeometryError,
    inertial_to_geodetic,
    normalize_longitude,
    to_geodetic,
    to_spherical,
)
from ground_track.models import InertialPosition, SphericalPosition
from ground_track.sidereal import sidereal_degrees


class TestToSpherical(unittest.TestCase):
    """Inertial to spherical conversion."""

    def test_rho_matches_vector_norm(self):
        """Rho equals sqrt(x^2 + y^2 + z^2) for random positions."""
        rng = np.random.default_rng(42)
        for x, y, z in rng.uniform(-42000.0, 42000.0, size=(1000, 3)):
            spherical = to_spherical(InertialPosition(x, y, z))
            self.assertAlmostEqual(spherical.rho, math.sqrt(x ** 2 + y ** 2 + z ** 2), delta=1e-9)

    def test_axis_aligned_positions(self):
        """Known angles along the frame axes."""
        on_x = to_spherical(InertialPosition(7000.0, 0.0, 0.0))
        self.assertAlmostEqual(on_x.theta, 0.0)
        self.assertAlmostEqual(on_x.phi, math.pi / 2)

        on_y = to_spherical(InertialPosition(0.0, 7000.0, 0.0))
        self.assertAlmostEqual(on_y.theta, math.pi / 2)

        north = to_spherical(InertialPosition(0.0, 0.0, 7000.0))
        self.assertAlmostEqual(north.phi, 0.0)

        south = to_spherical(InertialPosition(0.0, 0.0, -7000.0))
        self.assertAlmostEqual(south.phi, math.pi)

    def test_angle_ranges(self):
        """Theta in (-pi, pi] and phi in [0, pi]."""
        rng = np.random.default_rng(7)
        for x, y, z in rng.normal(0.0, 7000.0, size=(500, 3)):
            spherical = to_spherical(InertialPosition(x, y, z))
            self.assertGreater(spherical.theta, -math.pi - 1e-15)
            self.assertLessEqual(spherical.theta, math.pi)
            self.assertGreaterEqual(spherical.phi, 0.0)
            self.assertLessEqual(spherical.phi, math.pi)

    def test_origin_is_degenerate_but_defined(self):
        """The origin gives rho = 0 and zero angles."""
        self.assertEqual(to_spherical(InertialPosition(0.0, 0.0, 0.0)), SphericalPosition(0.0, 0.0, 0.0))

    def test_non_finite_position_rejected(self):
        """NaN or infinite components raise InvalidGeometryError."""
        with self.assertRaises(InvalidGeometryError):
            to_spherical(InertialPosition(float("nan"), 0.0, 0.0))
        with self.assertRaises(InvalidGeometryError):
            to_spherical(InertialPosition(0.0, float("inf"), 0.0))
        self.assertTrue(issubclass(InvalidGeometryError, ValueError))


class TestNormalizeLongitude(unittest.TestCase):
    """Longitude wrapping into (-180, 180]."""

    def test_values_inside_range_unchanged(self):
        for value in (0.0, 45.5, -179.5, 180.0):
            self.assertAlmostEqual(normalize_longitude(value), value)

    def test_lower_bound_maps_to_upper(self):
        self.assertEqual(normalize_longitude(-180.0), 180.0)

    def test_single_turn_outside_range(self):
        self.assertAlmostEqual(normalize_longitude(181.0), -179.0)
        self.assertAlmostEqual(normalize_longitude(-181.0), 179.0)
        self.assertAlmostEqual(normalize_longitude(539.0), 179.0)

    def test_several_turns_outside_range(self):
        """Values beyond (-540, 540] still land in range."""
        self.assertAlmostEqual(normalize_longitude(725.0), 5.0)
        self.assertAlmostEqual(normalize_longitude(-725.0), -5.0)
        self.assertAlmostEqual(normalize_longitude(900.0), 180.0)
        self.assertAlmostEqual(normalize_longitude(-900.0), 180.0)
        self.assertAlmostEqual(normalize_longitude(1.0e6), -80.0, places=6)

    def test_random_values_in_range(self):
        rng = np.random.default_rng(3)
        for value in rng.uniform(-1.0e5, 1.0e5, size=2000):
            wrapped = normalize_longitude(value)
            self.assertGreater(wrapped, -180.0)
            self.assertLessEqual(wrapped, 180.0)
            # Same direction modulo a whole number of turns
            turns = (value - wrapped) / 360.0
            self.assertAlmostEqual(turns, round(turns), places=6)


class TestToGeodetic(unittest.TestCase):
    """Spherical to latitude/longitude conversion."""

    def setUp(self):
        self.at = datetime(2024, 3, 20, 6, 30, tzinfo=timezone.utc)

    def test_latitude_from_polar_angle(self):
        self.assertAlmostEqual(to_geodetic(SphericalPosition(7000.0, 0.0, 0.0), self.at).latitude, 90.0)
        self.assertAlmostEqual(to_geodetic(SphericalPosition(7000.0, 0.0, math.pi), self.at).latitude, -90.0)
        self.assertAlmostEqual(to_geodetic(SphericalPosition(7000.0, 0.0, math.pi / 2), self.at).latitude, 0.0)
        self.assertAlmostEqual(
            to_geodetic(SphericalPosition(7000.0, 0.0, math.radians(30.0)), self.at).latitude, 60.0
        )

    def test_longitude_subtracts_sidereal_angle(self):
        """A position on the inertial x axis sits at minus the sidereal angle."""
        geodetic = to_geodetic(SphericalPosition(7000.0, 0.0, math.pi / 2), self.at)
        self.assertAlmostEqual(geodetic.longitude, normalize_longitude(-sidereal_degrees(self.at)))

    def test_longitude_follows_earth_rotation(self):
        """A fixed inertial direction drifts west by about 15 degrees per hour."""
        spherical = SphericalPosition(7000.0, 1.0, 1.0)
        before = to_geodetic(spherical, self.at).longitude
        after = to_geodetic(spherical, self.at + timedelta(hours=1)).longitude
        self.assertAlmostEqual(normalize_longitude(before - after), 15.041, places=2)

    def test_output_ranges(self):
        """Latitude in [-90, 90] and longitude in (-180, 180] for any theta."""
        rng = np.random.default_rng(11)
        base = datetime(2018, 1, 1, tzinfo=timezone.utc)
        thetas = rng.uniform(-10 * math.pi, 10 * math.pi, size=1000)
        phis = rng.uniform(0.0, math.pi, size=1000)
        offsets = rng.uniform(0.0, 10 * 365 * 86400.0, size=1000)
        for theta, phi, offset in zip(thetas, phis, offsets):
            geodetic = to_geodetic(SphericalPosition(7000.0, theta, phi), base + timedelta(seconds=offset))
            self.assertGreaterEqual(geodetic.latitude, -90.0)
            self.assertLessEqual(geodetic.latitude, 90.0)
            self.assertGreater(geodetic.longitude, -180.0)
            self.assertLessEqual(geodetic.longitude, 180.0)

    def test_non_finite_angles_rejected(self):
        with self.assertRaises(InvalidGeometryError):
            to_geodetic(SphericalPosition(7000.0, float("nan"), 1.0), self.at)

    def test_composition(self):
        position = InertialPosition(-2634.4, -2361.1, 5891.1)
        self.assertEqual(
            inertial_to_geodetic(position, self.at),
            to_geodetic(to_spherical(position), self.at),
        )


if __name__ == "__main__":
    unittest.main()
