"""
Frame Transform

Converts inertial (TEME/ECI) positions into sub-satellite points on a
spherical, rotating Earth:

    inertial (x, y, z) -> spherical (rho, theta, phi) -> geodetic (lat, lon)

Latitude is 90 degrees minus the polar angle. Longitude is the inertial
azimuth minus the Greenwich sidereal angle, wrapped into (-180, 180].
No ellipsoid is involved, so latitudes are geocentric.

Edge case: the origin maps to rho = 0 with theta = phi = 0 (atan2(0, 0) = 0).
A propagated satellite is never exactly at the origin, so it is not guarded.
Non-finite input is rejected with InvalidGeometryError instead of letting NaN
reach rendered coordinates.
"""

import math
from datetime import datetime

from ground_track.models import GeodeticPosition, InertialPosition, SphericalPosition
from ground_track.sidereal import sidereal_degrees


class InvalidGeometryError(ValueError):
    """Raised when a position or angle is NaN or infinite."""


def _require_finite(values, what: str) -> None:
    if not all(math.isfinite(v) for v in values):
        raise InvalidGeometryError(f"Non-finite {what}: {tuple(values)}")


def normalize_longitude(longitude: float) -> float:
    """
    Wrap a longitude in degrees into (-180, 180].

    Works for any finite input, not only values within one turn of the range.
    """
    wrapped = (180.0 - longitude) % 360.0
    if wrapped >= 360.0:
        wrapped = 0.0
    return 180.0 - wrapped


def to_spherical(position: InertialPosition) -> SphericalPosition:
    """
    Convert an inertial position to spherical coordinates.

    Args:
        position: (x, y, z) in km

    Returns:
        SphericalPosition with rho in km, theta and phi in radians

    Raises:
        InvalidGeometryError: If any component is NaN or infinite
    """
    x, y, z = position
    _require_finite(position, "inertial position")

    rho = math.sqrt(x * x + y * y + z * z)
    theta = math.atan2(y, x)
    phi = math.atan2(math.sqrt(x * x + y * y), z)
    return SphericalPosition(rho, theta, phi)


def to_geodetic(spherical: SphericalPosition, at: datetime) -> GeodeticPosition:
    """
    Convert spherical coordinates at an instant to latitude/longitude.

    Args:
        spherical: Inertial spherical position (phi measured from +z)
        at: Instant of the position, used for Earth rotation

    Returns:
        GeodeticPosition in degrees

    Raises:
        InvalidGeometryError: If theta or phi is NaN or infinite
    """
    _require_finite((spherical.theta, spherical.phi), "spherical angles")

    latitude = (math.degrees(spherical.phi) - 90.0) * -1.0
    longitude = normalize_longitude(math.degrees(spherical.theta) - sidereal_degrees(at))
    return GeodeticPosition(latitude, longitude)


def inertial_to_geodetic(position: InertialPosition, at: datetime) -> GeodeticPosition:
    """Sub-satellite point of an inertial position at an instant."""
    return to_geodetic(to_spherical(position), at)
