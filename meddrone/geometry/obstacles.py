"""Mini README: No-fly zone filter for single drone moves.

Structure:
    * BoundingBox - axis-aligned extent of a restricted polygon.
    * bounding_box - derive the box for one closed polygon.
    * step_blocked - decide whether a single move is legal.

``step_blocked`` is called for every neighbour the path finder generates, so
each polygon is first rejected cheaply on its bounding box before the exact
containment and edge intersection tests run.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .primitives import EPSILON, Coordinate, is_point_in_region, segments_intersect


@dataclass(frozen=True, slots=True)
class BoundingBox:
    """Inclusive extent of a polygon."""

    min_lng: float
    min_lat: float
    max_lng: float
    max_lat: float

    def covers_lng(self, value: float) -> bool:
        return self.min_lng - EPSILON <= value <= self.max_lng + EPSILON

    def covers_lat(self, value: float) -> bool:
        return self.min_lat - EPSILON <= value <= self.max_lat + EPSILON


def bounding_box(vertices: Sequence[Coordinate]) -> BoundingBox:
    if not vertices:
        raise ValueError("Cannot compute the bounding box of an empty polygon")
    lngs = [vertex.lng for vertex in vertices]
    lats = [vertex.lat for vertex in vertices]
    return BoundingBox(min_lng=min(lngs), min_lat=min(lats), max_lng=max(lngs), max_lat=max(lats))


def _may_touch(origin: Coordinate, destination: Coordinate, box: BoundingBox) -> bool:
    lng_hit = box.covers_lng(origin.lng) or box.covers_lng(destination.lng)
    lat_hit = box.covers_lat(origin.lat) or box.covers_lat(destination.lat)
    return lng_hit or lat_hit


def step_blocked(
    origin: Coordinate,
    destination: Coordinate,
    polygons: Sequence[Sequence[Coordinate]],
    boxes: Sequence[BoundingBox],
) -> bool:
    """Return True when moving from ``origin`` to ``destination`` enters a no-fly zone.

    ``boxes`` must be index-aligned with ``polygons``. The origin is assumed
    to be legal already; only the destination and the swept segment are
    tested.
    """

    for polygon, box in zip(polygons, boxes):
        if not _may_touch(origin, destination, box):
            continue
        if is_point_in_region(destination, polygon):
            return True
        for index in range(len(polygon) - 1):
            if segments_intersect(origin, destination, polygon[index], polygon[index + 1]):
                return True
    return False
