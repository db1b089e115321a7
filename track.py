"""
Real-Time Ground Track Viewer

Fetches a constellation's element sets from CelesTrak once, then redraws the
ground track of every satellite over the next orbit estimate until q/Q is
pressed or the window is closed.

Usage:
    python track.py [--name KUIPER] [--prefix KUIPER] [--workers N]
                    [--period-minutes 94.5] [--step-minutes 2.5]
                    [--cycles N] [--offline] [--verbose] [--log-file PATH]

Arguments:
    --name: CelesTrak NAME query
    --prefix: Keep only satellites whose name starts with this (default: --name)
    --offline: Track the bundled ISS element set instead of fetching
    --cycles: Stop after N refresh cycles
    --verbose: Enable debug logging

Exit status is 1 when the roster cannot be retrieved, the map cannot be
opened or the configured sampling window is invalid. Non-positive
--period-minutes or --step-minutes values are rejected by argparse.
"""

import argparse
import logging
import sys
from datetime import timedelta
from typing import List, Optional

import config
from ground_track.models import ElementSet
from ground_track.propagation import Propagator
from ground_track.render import GroundTrackMap
from ground_track.roster import RosterError, load_roster
from ground_track.sampler import GroundTrackSampler
from ground_track.snapshot import SnapshotAggregator
from ground_track.tracker import run_cycles
from logging_config import configure_logging, get_logger

logger = get_logger(__name__)


def positive_float(text: str) -> float:
    """argparse type for window lengths and steps."""
    try:
        value = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid number: {text!r}")
    if not value > 0:
        raise argparse.ArgumentTypeError(f"must be a positive number of minutes, got {text}")
    return value


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Real-time satellite ground track viewer")
    parser.add_argument("--name", default=config.DEFAULT_CONSTELLATION, help="CelesTrak NAME query")
    parser.add_argument("--prefix", default=None, help="Satellite name prefix to track (default: --name)")
    parser.add_argument(
        "--period-minutes", type=positive_float, default=config.ORBITAL_PERIOD_MINUTES,
        help="Ground track window length in minutes",
    )
    parser.add_argument(
        "--step-minutes", type=positive_float, default=config.SAMPLING_STEP_MINUTES,
        help="Sampling step in minutes",
    )
    parser.add_argument("--workers", type=int, default=None, help="Threads used to build each snapshot")
    parser.add_argument("--cycles", type=int, default=None, help="Stop after this many refresh cycles")
    parser.add_argument("--offline", action="store_true", help="Use the bundled ISS element set")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--log-file", default=None, help="Also write logs to this file")
    return parser


def fetch_roster(args: argparse.Namespace) -> List[ElementSet]:
    if args.offline:
        logger.info("Offline mode: tracking the fallback ISS element set")
        return [ElementSet.model_validate(config.FALLBACK_ELEMENT_SET)]
    return load_roster(args.name, args.prefix)


def main(argv: Optional[List[str]] = None) -> int:
    """Viewer entry point; returns the process exit status."""
    args = build_parser().parse_args(argv)

    configure_logging(level=logging.DEBUG if args.verbose else logging.INFO, log_file=args.log_file)
    prefix = args.name if args.prefix is None else args.prefix

    try:
        surface = GroundTrackMap(label_prefix=prefix)
    except Exception as e:
        logger.error(f"Could not open the map window: {e}")
        return 1

    with surface:
        surface.show_status("Fetching orbits from CelesTrak...")
        surface.poll_quit(config.POLL_INTERVAL_SECONDS)

        try:
            roster = fetch_roster(args)
        except RosterError as e:
            logger.error(str(e))
            return 1
        if not roster:
            logger.error(f"No satellites match prefix {prefix!r}")
            return 1

        propagator = Propagator(roster)
        try:
            aggregator = SnapshotAggregator(
                GroundTrackSampler(propagator),
                period=timedelta(minutes=args.period_minutes),
                step=timedelta(minutes=args.step_minutes),
                max_workers=args.workers,
            )
        except ValueError as e:
            logger.error(f"Invalid sampling window: {e}")
            return 1

        with aggregator:
            cycles = run_cycles(roster, aggregator, surface, max_cycles=args.cycles)

    failing = {norad_id: n for norad_id, n in propagator.error_counts.items() if n}
    if failing:
        logger.info(f"Propagation failures per satellite: {failing}")
    logger.info(f"Completed {cycles} refresh cycles")
    return 0


if __name__ == "__main__":
    sys.exit(main())
