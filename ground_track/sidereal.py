"""
Greenwich Mean Sidereal Time

Rotation angle of the Earth relative to the inertial frame, needed to turn an
inertial azimuth into an Earth-fixed longitude.

The computation follows the IAU 1982 expression: GMST at the preceding 0h UT
from the Julian centuries since J2000.0, advanced by the sidereal/solar rate
ratio over the seconds elapsed since that midnight. Time is taken on the
terrestrial time scale, TT = UTC + config.TT_MINUS_UTC_SECONDS, and brought
back to UTC seconds-of-day through SIDEREAL_MIDNIGHT_OFFSET_SECONDS.

References:
    Aoki, S. et al. (1982). Astronomy and Astrophysics 105, 359-361.
    Vallado, D. A. (2013). Fundamentals of Astrodynamics and Applications,
    4th ed., Algorithm 15.
"""

from datetime import datetime, timezone

import config

# J2000.0 reference instant on the UTC axis
J2000_EPOCH = datetime(2000, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


def terrestrial_seconds(at: datetime) -> float:
    """Terrestrial-time seconds elapsed since J2000.0."""
    return (at - J2000_EPOCH).total_seconds() + config.TT_MINUS_UTC_SECONDS


def sidereal_seconds(at: datetime) -> float:
    """
    Greenwich mean sidereal time at an instant.

    Args:
        at: Timezone-aware instant

    Returns:
        Sidereal seconds in [0, 86400)
    """
    et = terrestrial_seconds(at)
    jde = config.J2000_JULIAN_DATE + et / config.SECONDS_PER_DAY

    # Seconds since the UTC midnight, negative before TT noon
    s = (et % config.SECONDS_PER_DAY) - config.SIDEREAL_MIDNIGHT_OFFSET_SECONDS
    t = (jde - s / config.SECONDS_PER_DAY - config.J2000_JULIAN_DATE) / config.DAYS_PER_JULIAN_CENTURY

    c0, c1, c2 = config.GMST_0H_COEFFICIENTS
    r0, r1 = config.SIDEREAL_RATE_COEFFICIENTS
    h0 = c0 + c1 * t + c2 * t ** 2  # sidereal time at that midnight
    h1 = r0 + r1 * t

    rotation = (h0 + h1 * s) % config.SECONDS_PER_DAY
    # Floor modulo of a tiny negative value rounds up to the divisor
    if rotation >= config.SECONDS_PER_DAY:
        rotation = 0.0
    return rotation


def sidereal_degrees(at: datetime) -> float:
    """Greenwich mean sidereal time as an angle in degrees, [0, 360)."""
    return sidereal_seconds(at) / config.SECONDS_PER_DAY * 360.0
