"""
Tests for the Refresh Cycle Loop and the track.py entry point

The loop is driven with a fake surface and clock; the entry point runs
headless on the Agg backend with the bundled element set.

Run with:
    python -m pytest tests/test_tracker.py -v
"""

import argparse
import unittest
from datetime import datetime, timedelta, timezone
from unittest.mock import patch

import matplotlib

matplotlib.use("Agg")

import track  # noqa: E402
from ground_track.roster import RosterError  # noqa: E402
from ground_track.tracker import run_cycles  # noqa: E402


class FakeSurface:
    """Records snapshots; asks to quit on the given poll number (1-based)."""

    def __init__(self, quit_on_poll=None):
        self.quit_on_poll = quit_on_poll
        self.drawn = []
        self.timeouts = []

    def draw(self, snapshot):
        self.drawn.append(snapshot)

    def poll_quit(self, timeout):
        self.timeouts.append(timeout)
        return self.quit_on_poll is not None and len(self.timeouts) >= self.quit_on_poll


class FakeAggregator:
    def __init__(self):
        self.builds = []

    def build(self, roster, now):
        self.builds.append((roster, now))
        return ("snapshot", now)


class FakeClock:
    def __init__(self, start):
        self.now = start

    def __call__(self):
        current = self.now
        self.now += timedelta(seconds=1)
        return current


class TestRunCycles(unittest.TestCase):
    """Build / draw / poll loop."""

    def setUp(self):
        self.start = datetime(2024, 1, 1, tzinfo=timezone.utc)
        self.roster = ["sat-a", "sat-b"]

    def test_stops_at_first_quit(self):
        surface = FakeSurface(quit_on_poll=3)
        aggregator = FakeAggregator()

        cycles = run_cycles(self.roster, aggregator, surface, clock=FakeClock(self.start), poll_interval=0.01)

        self.assertEqual(cycles, 3)
        self.assertEqual(len(surface.drawn), 3)
        self.assertEqual(surface.timeouts, [0.01, 0.01, 0.01])
        self.assertEqual(
            [now for _, now in aggregator.builds],
            [self.start + timedelta(seconds=i) for i in range(3)],
        )
        self.assertTrue(all(roster is self.roster for roster, _ in aggregator.builds))

    def test_fresh_snapshot_each_cycle(self):
        surface = FakeSurface(quit_on_poll=2)
        run_cycles(self.roster, FakeAggregator(), surface, clock=FakeClock(self.start))
        self.assertNotEqual(surface.drawn[0], surface.drawn[1])

    def test_max_cycles(self):
        surface = FakeSurface()
        cycles = run_cycles(self.roster, FakeAggregator(), surface, clock=FakeClock(self.start), max_cycles=2)
        self.assertEqual(cycles, 2)
        self.assertEqual(len(surface.drawn), 2)


class TestTrackMain(unittest.TestCase):
    """Command-line entry point."""

    def setUp(self):
        # Keep the test runner's logging handlers in place
        patcher = patch("track.configure_logging")
        patcher.start()
        self.addCleanup(patcher.stop)

    def test_offline_run(self):
        self.assertEqual(track.main(["--offline", "--cycles", "2", "--period-minutes", "10"]), 0)

    def test_roster_failure_is_fatal(self):
        with patch("track.load_roster", side_effect=RosterError("Roster retrieval failed")):
            self.assertEqual(track.main(["--cycles", "1"]), 1)

    def test_empty_roster_is_fatal(self):
        with patch("track.load_roster", return_value=[]):
            self.assertEqual(track.main(["--name", "NOSUCH", "--cycles", "1"]), 1)

    def test_non_positive_window_rejected(self):
        """Zero or negative window arguments are usage errors, not tracebacks."""
        for argv in (["--step-minutes", "0"], ["--step-minutes", "-2.5"],
                     ["--period-minutes", "-5"], ["--period-minutes", "nan"],
                     ["--step-minutes", "abc"]):
            with self.subTest(argv=argv), patch("sys.stderr"):
                with self.assertRaises(SystemExit) as ctx:
                    track.main(["--offline", "--cycles", "1"] + argv)
                self.assertEqual(ctx.exception.code, 2)

    def test_positive_float(self):
        self.assertEqual(track.positive_float("2.5"), 2.5)
        with self.assertRaises(argparse.ArgumentTypeError):
            track.positive_float("0")

    def test_invalid_configured_step_is_fatal(self):
        with patch.object(track.config, "SAMPLING_STEP_MINUTES", 0.0):
            self.assertEqual(track.main(["--offline", "--cycles", "1"]), 1)

    def test_parser_defaults(self):
        args = track.build_parser().parse_args([])
        self.assertEqual(args.name, "KUIPER")
        self.assertIsNone(args.prefix)
        self.assertFalse(args.offline)


if __name__ == "__main__":
    unittest.main()
