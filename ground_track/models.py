"""
Ground Track Data Model

Value types passed between the propagation adapter, the frame transform, the
sampler and the snapshot aggregator. All of them are immutable: a Snapshot is
built from scratch every refresh cycle and handed to rendering read-only.

Element sets are validated from CelesTrak OMM JSON records with pydantic.
"""

from datetime import datetime, timedelta, timezone
from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, NamedTuple, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

OMM_EPOCH_FORMAT = "%Y-%m-%dT%H:%M:%S.%f"


class InertialPosition(NamedTuple):
    """Position in the Earth-Centered Inertial (TEME) frame, km."""

    x: float
    y: float
    z: float


class SphericalPosition(NamedTuple):
    """
    Spherical form of an inertial position.

    rho is the radius in km, theta the inertial azimuth in (-pi, pi] and phi
    the polar angle from the +z axis in [0, pi], both in radians.
    """

    rho: float
    theta: float
    phi: float


class GeodeticPosition(NamedTuple):
    """Sub-satellite point in degrees on a spherical Earth."""

    latitude: float
    longitude: float


class PropagationFailure(NamedTuple):
    """
    SGP4 could not produce a position.

    error_code is the sgp4 error code (1-6), or None when the element set
    could not be turned into satellite constants at all.
    """

    error_code: Optional[int]
    message: str


class GeometryFailure(NamedTuple):
    """A propagated position produced non-finite coordinates."""

    message: str


Failure = Union[PropagationFailure, GeometryFailure]


class Sample(NamedTuple):
    """One instant of a ground track: either a position or a failure."""

    instant: datetime
    position: Optional[GeodeticPosition] = None
    failure: Optional[Failure] = None

    @property
    def ok(self) -> bool:
        return self.failure is None

    @classmethod
    def success(cls, instant: datetime, position: GeodeticPosition) -> "Sample":
        return cls(instant, position, None)

    @classmethod
    def failed(cls, instant: datetime, failure: Failure) -> "Sample":
        return cls(instant, None, failure)


class SamplingWindow(NamedTuple):
    """Half-open time window [start, end) sampled every step."""

    start: datetime
    end: datetime
    step: timedelta

    def sample_count(self) -> int:
        """Number of instants: ceil((end - start) / step), or 0 for an empty window."""
        if self.step <= timedelta(0):
            raise ValueError(f"Sampling step must be positive, got {self.step}")
        if self.end <= self.start:
            return 0
        whole, remainder = divmod(self.end - self.start, self.step)
        return whole + (1 if remainder else 0)

    def instants(self) -> Iterator[datetime]:
        """Yield start, start + step, ... strictly before end."""
        for i in range(self.sample_count()):
            yield self.start + i * self.step


class GroundTrack(NamedTuple):
    """Samples for one satellite over one window, in ascending instant order."""

    norad_id: int
    name: Optional[str]
    samples: Tuple[Sample, ...]

    def positions(self) -> List[GeodeticPosition]:
        return [s.position for s in self.samples if s.ok]

    def failures(self) -> List[Sample]:
        return [s for s in self.samples if not s.ok]

    @property
    def current(self) -> Optional[Sample]:
        """Earliest sample with a position, if any."""
        return next((s for s in self.samples if s.ok), None)


class Snapshot(NamedTuple):
    """Ground tracks of every tracked satellite for one refresh cycle."""

    taken_at: datetime
    window: SamplingWindow
    tracks: Mapping[int, GroundTrack]

    @classmethod
    def freeze(cls, taken_at: datetime, window: SamplingWindow,
               tracks: Dict[int, GroundTrack]) -> "Snapshot":
        return cls(taken_at, window, MappingProxyType(dict(tracks)))

    def failure_count(self) -> int:
        return sum(len(track.failures()) for track in self.tracks.values())


class ElementSet(BaseModel):
    """
    Orbital element set in CelesTrak OMM JSON layout.

    Field names follow the Python side; aliases are the OMM keywords so a
    decoded JSON record validates directly. Angles are in degrees, mean motion
    in revolutions per day.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    norad_id: int = Field(alias="NORAD_CAT_ID")
    name: Optional[str] = Field(default=None, alias="OBJECT_NAME")
    object_id: str = Field(default="", alias="OBJECT_ID")
    epoch: datetime = Field(alias="EPOCH")
    mean_motion: float = Field(alias="MEAN_MOTION")
    eccentricity: float = Field(alias="ECCENTRICITY")
    inclination: float = Field(alias="INCLINATION")
    raan: float = Field(alias="RA_OF_ASC_NODE")
    arg_perigee: float = Field(alias="ARG_OF_PERICENTER")
    mean_anomaly: float = Field(alias="MEAN_ANOMALY")
    ephemeris_type: int = Field(default=0, alias="EPHEMERIS_TYPE")
    classification: str = Field(default="U", alias="CLASSIFICATION_TYPE")
    element_set_no: int = Field(default=999, alias="ELEMENT_SET_NO")
    rev_at_epoch: int = Field(default=0, alias="REV_AT_EPOCH")
    bstar: float = Field(alias="BSTAR")
    mean_motion_dot: float = Field(alias="MEAN_MOTION_DOT")
    mean_motion_ddot: float = Field(default=0.0, alias="MEAN_MOTION_DDOT")

    @field_validator("epoch")
    @classmethod
    def _epoch_in_utc(cls, value: datetime) -> datetime:
        # CelesTrak publishes naive UTC timestamps
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    @property
    def key(self) -> Tuple[int, datetime]:
        return self.norad_id, self.epoch

    def to_omm_fields(self) -> Dict[str, Any]:
        """OMM keyword dictionary in the form sgp4.omm.initialize expects."""
        fields = self.model_dump(by_alias=True)
        fields["EPOCH"] = self.epoch.replace(tzinfo=None).strftime(OMM_EPOCH_FORMAT)
        return fields
