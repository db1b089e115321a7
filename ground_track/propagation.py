"""
SGP4 Propagation Adapter

Wraps the sgp4 library for one satellite at one instant and normalizes the
outcome into either an inertial position or a PropagationFailure value.

Features:
- Satellite constants (Satrec) built once per element set and reused
- Elapsed minutes computed from the element set's own epoch
- Domain failures (decay, divergent elements) returned, never raised
- Per-satellite failure counts for diagnostics

The sgp4 library is used as an opaque propagation service; positions are in
the TEME frame, km.
"""

import logging
from collections import Counter
from datetime import datetime
from typing import Dict, Iterable, Tuple, Union

from sgp4 import omm
from sgp4.api import Satrec

from ground_track.models import ElementSet, InertialPosition, PropagationFailure

logger = logging.getLogger(__name__)


# SGP4 error code meanings
SGP4_ERROR_CODES = {
    0: "No error",
    1: "Mean eccentricity < 0.0 or > 1.0",
    2: "Mean motion < 0.0",
    3: "Perturbed eccentricity < 0.0 or > 1.0",
    4: "Semi-latus rectum < 0.0",
    5: "Satellite has decayed",
    6: "Satellite has decayed (low altitude)",
}

PredictResult = Union[InertialPosition, PropagationFailure]


class Propagator:
    """
    SGP4 propagation for a roster of element sets.

    Satellite constants are memoized in ``satellites`` keyed by
    (NORAD id, epoch); passing the roster to the constructor builds them all
    up front, otherwise they are built on first use.
    """

    def __init__(self, roster: Iterable[ElementSet] = ()):
        self.satellites: Dict[Tuple[int, datetime], Satrec] = {}
        self.error_counts: Counter = Counter()
        for element_set in roster:
            try:
                self.load(element_set)
            except ValueError as e:
                logger.warning(f"Skipping constants for satellite {element_set.norad_id}: {e}")

    def load(self, element_set: ElementSet) -> Satrec:
        """Build (or return the cached) sgp4 constants for an element set."""
        satellite = self.satellites.get(element_set.key)
        if satellite is not None:
            return satellite

        try:
            satellite = Satrec()
            omm.initialize(satellite, element_set.to_omm_fields())
        except Exception as e:
            raise ValueError(f"Failed to load satellite {element_set.norad_id}: {e}") from e

        self.satellites[element_set.key] = satellite
        logger.debug(f"Loaded constants for {element_set.name or element_set.norad_id}")
        return satellite

    def predict(self, element_set: ElementSet, at: datetime) -> PredictResult:
        """
        Propagate one element set to an instant.

        Args:
            element_set: Satellite element set
            at: Timezone-aware target instant

        Returns:
            InertialPosition in km, or PropagationFailure describing the
            sgp4 error
        """
        try:
            satellite = self.load(element_set)
        except ValueError as e:
            self._log_error(element_set, None, at)
            return PropagationFailure(None, str(e))

        minutes = (at - element_set.epoch).total_seconds() / 60.0
        error, position, _velocity = satellite.sgp4_tsince(minutes)

        if error != 0:
            self._log_error(element_set, error, at)
            return PropagationFailure(error, SGP4_ERROR_CODES.get(error, f"Unknown error code {error}"))

        return InertialPosition(*position)

    def _log_error(self, element_set: ElementSet, error_code, at: datetime) -> None:
        """Count a failure for diagnostics."""
        self.error_counts[element_set.norad_id] += 1
        logger.debug(
            f"SGP4 error {error_code} for satellite {element_set.norad_id} at {at.isoformat()}"
        )
