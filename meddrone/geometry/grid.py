"""Mini README: Grid geometry adapter for the A* search.

Structure:
    * DIRECTIONS - the 16 fixed (dx, dy) compass offsets, computed once.
    * normalize - strips floating point noise from a coordinate.
    * grid_key - integer cell key used for visited-state deduplication.

Positions produced by the search keep their exact step geometry (every move
is exactly one STEP long), while the visited table is keyed by STEP sized
cells. Two positions that land within floating point noise of each other
always share a key, so a cell reached more cheaply is never expanded twice.
"""

from __future__ import annotations

import math
from typing import Tuple

from .primitives import ANGLE_INCREMENT, STEP, Coordinate

# Precision used to snap positions; far below STEP, far above double noise.
_NOISE_QUANTUM = 1e12

DIRECTIONS: Tuple[Tuple[float, float], ...] = tuple(
    (
        STEP * math.cos(math.radians(index * ANGLE_INCREMENT)),
        STEP * math.sin(math.radians(index * ANGLE_INCREMENT)),
    )
    for index in range(16)
)

GridKey = Tuple[int, int]


def normalize(point: Coordinate) -> Coordinate:
    """Round both axes to 1e-12 degrees so equal positions compare equal."""

    return Coordinate(
        lng=round(point.lng * _NOISE_QUANTUM) / _NOISE_QUANTUM,
        lat=round(point.lat * _NOISE_QUANTUM) / _NOISE_QUANTUM,
    )


def grid_key(point: Coordinate) -> GridKey:
    """Cell index of ``point`` on the STEP grid."""

    return (round(point.lng / STEP), round(point.lat / STEP))


def heuristic(point: Coordinate, goal: Coordinate) -> int:
    """Whole steps still needed at minimum; never overestimates."""

    return int(math.floor(math.hypot(point.lng - goal.lng, point.lat - goal.lat) / STEP))
