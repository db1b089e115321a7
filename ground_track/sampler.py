"""
Ground Track Sampler

Samples one satellite over a half-open time window. Every requested instant
yields exactly one Sample; a failed instant is recorded and sampling carries
on with the next one.
"""

import logging
from datetime import datetime

from ground_track.frames import InvalidGeometryError, inertial_to_geodetic
from ground_track.models import (
    ElementSet,
    GeometryFailure,
    GroundTrack,
    PropagationFailure,
    Sample,
    SamplingWindow,
)
from ground_track.propagation import Propagator

logger = logging.getLogger(__name__)


class GroundTrackSampler:
    """Turns propagated positions into ground-track samples."""

    def __init__(self, propagator: Propagator):
        self.propagator = propagator

    def sample_at(self, element_set: ElementSet, at: datetime) -> Sample:
        """Sub-satellite point at one instant, or the failure that prevented it."""
        result = self.propagator.predict(element_set, at)
        if isinstance(result, PropagationFailure):
            return Sample.failed(at, result)

        try:
            position = inertial_to_geodetic(result, at)
        except InvalidGeometryError as e:
            logger.warning(f"Satellite {element_set.norad_id} at {at.isoformat()}: {e}")
            return Sample.failed(at, GeometryFailure(str(e)))

        return Sample.success(at, position)

    def sample(self, element_set: ElementSet, window: SamplingWindow) -> GroundTrack:
        """
        Ground track of one satellite over a window.

        Args:
            element_set: Satellite element set
            window: Half-open [start, end) window with its step

        Returns:
            GroundTrack with one sample per window instant, ascending
        """
        samples = tuple(self.sample_at(element_set, at) for at in window.instants())
        return GroundTrack(element_set.norad_id, element_set.name, samples)
