"""
Ground Track Map

matplotlib surface that draws one Snapshot per refresh cycle on a
longitude [-180, 180] by latitude [-90, 90] canvas and reports when the user
asks to quit (q/Q key or closing the window).

The surface is created and owned by the caller and handed to the cycle loop;
nothing here is module-level state.
"""

import logging
from typing import Tuple

import matplotlib.pyplot as plt
import numpy as np

from ground_track.models import GroundTrack, Snapshot
from ground_track.roster import display_label

logger = logging.getLogger(__name__)

TRACK_COLOR = "red"
LABEL_COLOR = "black"
QUIT_KEYS = ("q", "Q")


def track_coordinates(track: GroundTrack) -> Tuple[np.ndarray, np.ndarray]:
    """
    Longitude and latitude arrays for plotting a ground track.

    Failed samples become NaN so matplotlib leaves a gap, and a NaN is
    inserted wherever consecutive longitudes wrap across the antimeridian.
    """
    lons = np.array([s.position.longitude if s.ok else np.nan for s in track.samples], dtype=float)
    lats = np.array([s.position.latitude if s.ok else np.nan for s in track.samples], dtype=float)

    with np.errstate(invalid="ignore"):
        jumps = np.abs(np.diff(lons)) > 180.0
    breaks = np.nonzero(jumps)[0] + 1
    return np.insert(lons, breaks, np.nan), np.insert(lats, breaks, np.nan)


class GroundTrackMap:
    """
    World map of ground tracks.

    Args:
        label_prefix: Constellation prefix stripped from satellite labels
        interactive: Turn on matplotlib interactive mode (off for headless use)
        figsize: Figure size in inches
    """

    def __init__(self, label_prefix: str = "", interactive: bool = True, figsize=(12, 6)):
        self.label_prefix = label_prefix
        self.quit_requested = False
        self.closed = False

        if interactive:
            plt.ion()
        self.figure, self.ax = plt.subplots(figsize=figsize)
        self.figure.canvas.mpl_connect("key_press_event", self._on_key)
        self.figure.canvas.mpl_connect("close_event", self._on_close)
        self._reset_axes("")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def _on_key(self, event) -> None:
        if event.key in QUIT_KEYS:
            logger.debug("Quit key pressed")
            self.quit_requested = True

    def _on_close(self, event) -> None:
        self.closed = True

    def _reset_axes(self, title: str) -> None:
        ax = self.ax
        ax.clear()
        ax.set_xlim(-180, 180)
        ax.set_ylim(-90, 90)
        ax.set_aspect("equal")
        ax.set_xticks(range(-180, 181, 30))
        ax.set_yticks(range(-90, 91, 30))
        ax.grid(True, linestyle=":", linewidth=0.5)
        ax.set_xlabel("Longitude (deg)")
        ax.set_ylabel("Latitude (deg)")
        ax.set_title(title)

    def show_status(self, text: str) -> None:
        """Empty map with a status title (e.g. while fetching the roster)."""
        self._reset_axes(text)
        self.figure.canvas.draw_idle()

    def draw(self, snapshot: Snapshot) -> None:
        """Replace the map contents with a snapshot's ground tracks."""
        failed = snapshot.failure_count()
        title = snapshot.taken_at.strftime("%Y-%m-%d %H:%M:%S UTC")
        if failed:
            title += f"  ({failed} samples unavailable)"
        self._reset_axes(title)

        for track in snapshot.tracks.values():
            lons, lats = track_coordinates(track)
            self.ax.plot(lons, lats, color=TRACK_COLOR, marker=".", markersize=3, linewidth=0.5)

            current = track.current
            if current is None:
                continue
            lon, lat = current.position.longitude, current.position.latitude
            self.ax.plot(lon, lat, marker="^", color=LABEL_COLOR, markersize=5)
            self.ax.annotate(
                display_label(track.name, self.label_prefix),
                (lon, lat),
                xytext=(3, 3),
                textcoords="offset points",
                fontsize=7,
                color=LABEL_COLOR,
            )

        self.figure.canvas.draw_idle()

    def poll_quit(self, timeout: float) -> bool:
        """
        Process window events for up to timeout seconds.

        Returns:
            True once the user pressed q/Q or closed the window
        """
        if not (self.quit_requested or self.closed):
            plt.pause(timeout)
        return self.quit_requested or self.closed

    def close(self) -> None:
        plt.close(self.figure)
        self.closed = True
