"""Mini README: Obstacle-aware A* search on the 16-direction step grid.

Structure:
    * DEFAULT_EXPANSION_CAP - hard bound on popped nodes per search.
    * find_path - minimal-step path between two coordinates.

The search tree is stored as an arena: parallel lists of positions and parent
handles, with the open set holding integer handles. ``find_path`` never
raises for unreachable goals; an empty list means "no path", whether because
an endpoint sits in a no-fly zone, the reachable space was exhausted or the
expansion budget ran out.
"""

from __future__ import annotations

import heapq
from typing import Dict, List, Optional, Sequence, Tuple

from ..geometry import (
    DIRECTIONS,
    BoundingBox,
    Coordinate,
    bounding_box,
    distance_between,
    grid_key,
    heuristic,
    is_near,
    is_point_in_region,
    normalize,
    step_blocked,
)
from ..geometry.grid import GridKey
from ..logging_utils import get_logger

LOGGER = get_logger(__name__)

DEFAULT_EXPANSION_CAP = 1_000_000


def _reconstruct(positions: List[Coordinate], parents: List[int], handle: int) -> List[Coordinate]:
    path: List[Coordinate] = []
    while handle != -1:
        path.append(positions[handle])
        handle = parents[handle]
    path.reverse()
    return path


def find_path(
    start: Coordinate,
    goal: Coordinate,
    polygons: Sequence[Sequence[Coordinate]] = (),
    boxes: Optional[Sequence[BoundingBox]] = None,
    *,
    expansion_cap: int = DEFAULT_EXPANSION_CAP,
) -> List[Coordinate]:
    """Return the step-by-step path from ``start`` to a point near ``goal``.

    Every consecutive pair in the result is exactly one STEP apart and no
    move touches a polygon in ``polygons``. ``boxes`` must be index-aligned
    with ``polygons``; they are derived on the fly when omitted.
    """

    if boxes is None:
        boxes = [bounding_box(polygon) for polygon in polygons]
    start = normalize(start)
    goal = normalize(goal)

    for polygon in polygons:
        if is_point_in_region(start, polygon) or is_point_in_region(goal, polygon):
            LOGGER.debug("Endpoint inside restricted area; start=%s goal=%s", start, goal)
            return []
    if is_near(start, goal):
        return [start]

    positions: List[Coordinate] = [start]
    parents: List[int] = [-1]
    costs: List[int] = [0]
    best_g: Dict[GridKey, int] = {grid_key(start): 0}
    # (f, remaining distance, handle): ties prefer nodes nearer the goal, then FIFO.
    open_set: List[Tuple[int, float, int]] = [(heuristic(start, goal), distance_between(start, goal), 0)]

    expansions = 0
    while open_set:
        expansions += 1
        if expansions > expansion_cap:
            LOGGER.debug("Expansion cap %s reached searching %s -> %s", expansion_cap, start, goal)
            return []
        _, _, handle = heapq.heappop(open_set)
        current = positions[handle]
        if is_near(current, goal):
            return _reconstruct(positions, parents, handle)

        next_g = costs[handle] + 1
        for dx, dy in DIRECTIONS:
            candidate = normalize(Coordinate(lng=current.lng + dx, lat=current.lat + dy))
            key = grid_key(candidate)
            previous = best_g.get(key)
            if previous is not None and previous <= next_g:
                continue
            if step_blocked(current, candidate, polygons, boxes):
                continue
            best_g[key] = next_g
            positions.append(candidate)
            parents.append(handle)
            costs.append(next_g)
            heapq.heappush(
                open_set,
                (next_g + heuristic(candidate, goal), distance_between(candidate, goal), len(positions) - 1),
            )

    LOGGER.debug("Open set exhausted searching %s -> %s", start, goal)
    return []
