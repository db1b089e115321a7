"""
Refresh Cycle Loop

One thread alternates between building a Snapshot for the current time,
handing it to the render surface and polling the surface for a quit request
with a bounded wait. A snapshot build always runs to completion; quitting is
only observed at the poll point.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, Sequence

import config
from ground_track.models import ElementSet, Snapshot
from ground_track.snapshot import SnapshotAggregator

logger = logging.getLogger(__name__)


class Surface(Protocol):
    def draw(self, snapshot: Snapshot) -> None: ...

    def poll_quit(self, timeout: float) -> bool: ...


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def run_cycles(
    roster: Sequence[ElementSet],
    aggregator: SnapshotAggregator,
    surface: Surface,
    clock: Callable[[], datetime] = utc_now,
    poll_interval: float = config.POLL_INTERVAL_SECONDS,
    max_cycles: Optional[int] = None,
) -> int:
    """
    Run refresh cycles until the surface reports quit.

    Args:
        roster: Element sets to track, fixed for the run
        aggregator: Snapshot builder
        surface: Render surface owned by the caller
        clock: Source of the current instant
        poll_interval: Bounded wait for the quit poll, seconds
        max_cycles: Stop after this many cycles (None runs until quit)

    Returns:
        Number of completed cycles
    """
    cycles = 0
    while max_cycles is None or cycles < max_cycles:
        snapshot = aggregator.build(roster, clock())
        surface.draw(snapshot)
        cycles += 1

        if surface.poll_quit(poll_interval):
            logger.info(f"Quit requested after {cycles} cycles")
            break
    return cycles
