"""Mini README: Planar coordinate primitives used by the routing engine.

Structure:
    * Coordinate - immutable (lng, lat) value in degrees.
    * distance_between / is_near / next_position - step arithmetic.
    * orient / on_segment / segments_intersect - segment predicates.
    * is_point_in_region - polygon containment, boundary counts as inside.
    * is_valid_coordinate / is_valid_angle / is_valid_region - input checks.

The engine treats longitude/latitude as a flat plane: distances are plain
Euclidean distances in degrees, which is accurate enough at the scale of a
city-wide drone network and matches how move budgets are defined.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Optional, Sequence

STEP = 0.00015
EPSILON = 1e-12
ANGLE_INCREMENT = 22.5


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A point on the planning plane."""

    lng: float
    lat: float

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Coordinate":
        """Build a coordinate from a ``{"lng": .., "lat": ..}`` mapping."""

        try:
            return cls(lng=float(payload["lng"]), lat=float(payload["lat"]))
        except (KeyError, TypeError, ValueError) as error:
            raise ValueError(f"Invalid coordinate payload: {payload!r}") from error

    def as_dict(self) -> Dict[str, float]:
        return {"lng": self.lng, "lat": self.lat}


def distance_between(first: Coordinate, second: Coordinate) -> float:
    """Euclidean distance in degrees."""

    return math.hypot(first.lng - second.lng, first.lat - second.lat)


def is_near(first: Coordinate, second: Coordinate) -> bool:
    """True when the points are strictly closer than one STEP."""

    return distance_between(first, second) + EPSILON < STEP


def next_position(start: Coordinate, angle: float) -> Coordinate:
    """Point reached by moving one STEP from ``start`` along a compass angle."""

    radians = math.radians(angle)
    return Coordinate(
        lng=start.lng + STEP * math.cos(radians),
        lat=start.lat + STEP * math.sin(radians),
    )


def orient(a: Coordinate, b: Coordinate, c: Coordinate) -> int:
    """Sign of the turn a -> b -> c: 1 counter-clockwise, -1 clockwise, 0 collinear."""

    cross = (b.lng - a.lng) * (c.lat - a.lat) - (b.lat - a.lat) * (c.lng - a.lng)
    if cross > EPSILON:
        return 1
    if cross < -EPSILON:
        return -1
    return 0


def on_segment(point: Coordinate, p: Coordinate, q: Coordinate) -> bool:
    """True when ``point`` lies on the closed segment ``pq``."""

    cross = (q.lng - p.lng) * (point.lat - p.lat) - (q.lat - p.lat) * (point.lng - p.lng)
    if abs(cross) > EPSILON:
        return False
    return (
        min(p.lng, q.lng) - EPSILON <= point.lng <= max(p.lng, q.lng) + EPSILON
        and min(p.lat, q.lat) - EPSILON <= point.lat <= max(p.lat, q.lat) + EPSILON
    )


def segments_intersect(p1: Coordinate, p2: Coordinate, q1: Coordinate, q2: Coordinate) -> bool:
    """Segment intersection including touching endpoints and collinear overlap."""

    o1 = orient(p1, p2, q1)
    o2 = orient(p1, p2, q2)
    o3 = orient(q1, q2, p1)
    o4 = orient(q1, q2, p2)
    if o1 != o2 and o3 != o4:
        return True
    if o1 == 0 and on_segment(q1, p1, p2):
        return True
    if o2 == 0 and on_segment(q2, p1, p2):
        return True
    if o3 == 0 and on_segment(p1, q1, q2):
        return True
    if o4 == 0 and on_segment(p2, q1, q2):
        return True
    return False


def is_point_in_region(point: Coordinate, vertices: Sequence[Coordinate]) -> bool:
    """Ray casting containment for a closed polygon (last vertex == first).

    Points on an edge or vertex are reported as inside.
    """

    edge_count = len(vertices) - 1
    for index in range(edge_count):
        if on_segment(point, vertices[index], vertices[index + 1]):
            return True

    inside = False
    j = edge_count - 1
    for i in range(edge_count):
        vi, vj = vertices[i], vertices[j]
        if (vi.lat > point.lat) != (vj.lat > point.lat):
            x_intersect = (vj.lng - vi.lng) * (point.lat - vi.lat) / (vj.lat - vi.lat) + vi.lng
            if point.lng < x_intersect:
                inside = not inside
        j = i
    return inside


def is_valid_coordinate(point: Optional[Coordinate]) -> bool:
    if point is None or point.lng is None or point.lat is None:
        return False
    if not (math.isfinite(point.lng) and math.isfinite(point.lat)):
        return False
    return -180.0 <= point.lng <= 180.0 and -90.0 <= point.lat <= 90.0


def is_valid_angle(angle: Optional[float]) -> bool:
    """Angles must be finite, within [0, 360] and a multiple of 22.5 degrees."""

    if angle is None or not math.isfinite(angle):
        return False
    if angle < 0 or angle > 360:
        return False
    remainder = math.fmod(angle, ANGLE_INCREMENT)
    return abs(remainder) < EPSILON or abs(remainder - ANGLE_INCREMENT) < EPSILON


def is_closed(vertices: Sequence[Coordinate]) -> bool:
    if len(vertices) < 2:
        return False
    first, last = vertices[0], vertices[-1]
    return abs(first.lng - last.lng) <= EPSILON and abs(first.lat - last.lat) <= EPSILON


def is_valid_region(vertices: Optional[Sequence[Coordinate]]) -> bool:
    """A region needs at least three distinct corners plus the closing vertex."""

    if not vertices or len(vertices) < 4:
        return False
    if not is_closed(vertices):
        return False
    return all(is_valid_coordinate(vertex) for vertex in vertices)
