"""
Snapshot Aggregator

Builds, once per refresh cycle, the ground track of every satellite in the
roster over [now, now + period). Satellites share no mutable state, so tracks
may be computed on a thread pool; the result is the same as computing them
one after another.
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta
from typing import Dict, Optional, Sequence

import config
from ground_track.models import ElementSet, GroundTrack, SamplingWindow, Snapshot
from ground_track.sampler import GroundTrackSampler

logger = logging.getLogger(__name__)


class SnapshotAggregator:
    """
    Per-cycle ground tracks for a roster.

    Args:
        sampler: Sampler used for every satellite
        period: Window length (default config.ORBITAL_PERIOD_MINUTES)
        step: Sampling step (default config.SAMPLING_STEP_MINUTES)
        max_workers: Thread pool size; None or 1 computes sequentially

    The thread pool lives as long as the aggregator; call close() (or use it
    as a context manager) when the run ends.
    """

    def __init__(
        self,
        sampler: GroundTrackSampler,
        period: Optional[timedelta] = None,
        step: Optional[timedelta] = None,
        max_workers: Optional[int] = None,
    ):
        self.sampler = sampler
        self.period = period if period is not None else timedelta(minutes=config.ORBITAL_PERIOD_MINUTES)
        self.step = step if step is not None else timedelta(minutes=config.SAMPLING_STEP_MINUTES)
        if self.step <= timedelta(0):
            raise ValueError(f"Sampling step must be positive, got {self.step}")
        if self.period < timedelta(0):
            raise ValueError(f"Window period must not be negative, got {self.period}")
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        if max_workers and max_workers > 1:
            self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="ground-track")

    def close(self) -> None:
        """Shut down the thread pool, if any."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def window_for(self, now: datetime) -> SamplingWindow:
        return SamplingWindow(now, now + self.period, self.step)

    def build(self, roster: Sequence[ElementSet], now: datetime) -> Snapshot:
        """
        Ground tracks of every roster entry for the window starting at now.

        Args:
            roster: Element sets to track
            now: Start of the refresh window

        Returns:
            Read-only Snapshot keyed by NORAD id, in roster order
        """
        window = self.window_for(now)

        if self._executor is not None and len(roster) > 1:
            tracks = list(self._executor.map(lambda es: self.sampler.sample(es, window), roster))
        else:
            tracks = [self.sampler.sample(element_set, window) for element_set in roster]

        by_id: Dict[int, GroundTrack] = {}
        for track in tracks:
            if track.norad_id in by_id:
                logger.warning(f"Duplicate element set for satellite {track.norad_id}, keeping the last")
            by_id[track.norad_id] = track

        snapshot = Snapshot.freeze(now, window, by_id)
        logger.debug(
            f"Snapshot at {now.isoformat()}: {len(by_id)} satellites, "
            f"{snapshot.failure_count()} failed samples"
        )
        return snapshot
