"""
Ground Track Configuration and Constants

This module contains the time constants, refresh-cycle settings and the
fallback element set used throughout the project.

Constants:
    Julian date / sidereal constants used by the IAU 1982 GMST expression
    (Aoki et al. 1982), applied on a spherical, rotating Earth.

Refresh cycle:
    The sampling window is one fixed estimate of a low Earth orbit period
    (94.5 minutes) sampled every 2.5 minutes. Both are estimates for a
    near-circular LEO constellation, not derived from each satellite's
    mean motion. Override them with the environment variables below or the
    command-line flags of track.py.

    GROUND_TRACK_PERIOD_MINUTES    window length (default 94.5)
    GROUND_TRACK_STEP_MINUTES      sampling step (default 2.5)
    GROUND_TRACK_POLL_SECONDS      quit poll wait between cycles (default 0.016)
    GROUND_TRACK_TT_MINUS_UTC      TT - UTC in seconds (default 69.184)
    CELESTRAK_SUPPLEMENTAL_URL     roster endpoint
    CELESTRAK_TIMEOUT_SECONDS      HTTP timeout (default 30)

Fallback Element Set:
    ISS element set in CelesTrak OMM JSON layout, for offline runs and tests.
    Its epoch is 2023-09-16; ground tracks computed far from that date are
    only illustrative.

References:
    Aoki, S. et al. (1982). The new definition of universal time.
    Astronomy and Astrophysics 105, 359-361.
"""

import os
from typing import Dict, Any

# Time constants
SECONDS_PER_DAY: float = 86400.0
DAYS_PER_JULIAN_CENTURY: float = 36525.0
J2000_JULIAN_DATE: float = 2451545.0  # 2000-01-01 12:00:00 TT

# TT - UTC: 37 leap seconds (since 2017-01-01) + 32.184 s TAI offset
TT_MINUS_UTC_SECONDS: float = float(os.getenv("GROUND_TRACK_TT_MINUS_UTC", "69.184"))

# Seconds between a terrestrial-time noon epoch and the following UTC midnight
SIDEREAL_MIDNIGHT_OFFSET_SECONDS: float = 43269.1839244

# IAU 1982 GMST at 0h UT1 (seconds) and sidereal/solar rate ratio
GMST_0H_COEFFICIENTS = (24110.54841, 8640184.812866, 0.093104)
SIDEREAL_RATE_COEFFICIENTS = (1.00273790935, 5.9e-11)

# Refresh cycle
ORBITAL_PERIOD_MINUTES: float = float(os.getenv("GROUND_TRACK_PERIOD_MINUTES", "94.5"))
SAMPLING_STEP_MINUTES: float = float(os.getenv("GROUND_TRACK_STEP_MINUTES", "2.5"))
POLL_INTERVAL_SECONDS: float = float(os.getenv("GROUND_TRACK_POLL_SECONDS", "0.016"))

# Roster source
CELESTRAK_SUPPLEMENTAL_URL: str = os.getenv(
    "CELESTRAK_SUPPLEMENTAL_URL",
    "https://celestrak.org/NORAD/elements/supplemental/sup-gp.php",
)
REQUEST_TIMEOUT_SECONDS: float = float(os.getenv("CELESTRAK_TIMEOUT_SECONDS", "30"))
DEFAULT_CONSTELLATION: str = "KUIPER"

# Fallback ISS element set (from TLE 23259.57580000)
FALLBACK_ELEMENT_SET: Dict[str, Any] = {
    "OBJECT_NAME": "ISS (ZARYA)",
    "OBJECT_ID": "1998-067A",
    "EPOCH": "2023-09-16T13:49:09.120000",
    "MEAN_MOTION": 15.49541986,
    "ECCENTRICITY": 0.0004263,
    "INCLINATION": 51.6416,
    "RA_OF_ASC_NODE": 220.9944,
    "ARG_OF_PERICENTER": 122.0101,
    "MEAN_ANOMALY": 312.2755,
    "EPHEMERIS_TYPE": 0,
    "CLASSIFICATION_TYPE": "U",
    "NORAD_CAT_ID": 25544,
    "ELEMENT_SET_NO": 999,
    "REV_AT_EPOCH": 41559,
    "BSTAR": 0.00021844,
    "MEAN_MOTION_DOT": 0.00012022,
    "MEAN_MOTION_DDOT": 0.0,
}
FALLBACK_TLE_LINES = (
    "1 25544U 98067A   23259.57580000  .00012022  00000-0  21844-3 0  9995",
    "2 25544  51.6416 220.9944 0004263 122.0101 312.2755 15.49541986415598",
)
