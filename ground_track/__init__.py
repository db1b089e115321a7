"""
Real-Time Ground Track Package

Converts SGP4 inertial positions into sub-satellite latitude/longitude on a
spherical, rotating Earth and assembles per-cycle ground tracks for a
satellite constellation.

Modules:
    models: Value types (positions, samples, tracks, snapshots, element sets)
    sidereal: Greenwich mean sidereal time
    frames: Inertial -> spherical -> geodetic transform
    propagation: sgp4 adapter with memoized satellite constants
    sampler: Windowed ground-track sampling
    snapshot: Per-cycle aggregation over the roster
    roster: CelesTrak retrieval, validation and prefix filtering
    render: matplotlib world map surface
    tracker: Refresh cycle loop

References:
    Vallado, D. A., Crawford, P., Hujsak, R., & Kelso, T. S. (2006).
    Revisiting Spacetrack Report #3. AIAA 2006-6753.
"""

__version__ = "1.0.0"
