"""Mini README: Geometry subsystem for the routing engine.

Modules:
    * ``primitives`` - coordinates, distances, segment and polygon predicates.
    * ``grid`` - the 16-direction step table and visited-state keys.
    * ``obstacles`` - bounding boxes and the per-move no-fly filter.
"""

from .grid import DIRECTIONS, grid_key, heuristic, normalize
from .obstacles import BoundingBox, bounding_box, step_blocked
from .primitives import (
    EPSILON,
    STEP,
    Coordinate,
    distance_between,
    is_near,
    is_point_in_region,
    is_valid_angle,
    is_valid_coordinate,
    is_valid_region,
    next_position,
    on_segment,
    segments_intersect,
)

__all__ = [
    "BoundingBox",
    "Coordinate",
    "DIRECTIONS",
    "EPSILON",
    "STEP",
    "bounding_box",
    "distance_between",
    "grid_key",
    "heuristic",
    "is_near",
    "is_point_in_region",
    "is_valid_angle",
    "is_valid_coordinate",
    "is_valid_region",
    "next_position",
    "normalize",
    "on_segment",
    "segments_intersect",
    "step_blocked",
]
