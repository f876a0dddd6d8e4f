"""Mini README: Attribute filters over the drone roster.

Structure:
    * QueryCondition - one ``attribute operator value`` clause.
    * matches / compare_numeric / matches_conditions - predicate helpers.
    * drones_with_cooling / query_as_path / query - roster filters.
    * query_available_drones - drones able to serve a whole batch alone.

Values arrive as strings from URL paths and JSON bodies, so every comparison
parses its operand; an operand that does not parse simply fails to match.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, Optional, Sequence

from ..geometry import STEP, distance_between
from ..logging_utils import get_logger
from .availability import is_available_at
from .models import (
    AvailabilityWindow,
    DeliveryRequest,
    Drone,
    DroneCapability,
    ServicePoint,
    ServicePointDrones,
)

LOGGER = get_logger(__name__)

_NUMERIC_ATTRIBUTES: Dict[str, Callable[[DroneCapability], float]] = {
    "capacity": lambda capability: capability.capacity,
    "maxmoves": lambda capability: capability.max_moves,
    "costpermove": lambda capability: capability.cost_per_move,
    "costinitial": lambda capability: capability.cost_initial,
    "costfinal": lambda capability: capability.cost_final,
}


@dataclass(frozen=True, slots=True)
class QueryCondition:
    attribute: str
    operator: str
    value: str


def _parse_bool(value: str) -> bool:
    return value.strip().lower() == "true"


def matches(drone: Drone, attribute: str, value: str) -> bool:
    """Equality test of one drone attribute against a string operand."""

    key = attribute.lower()
    capability = drone.capability
    try:
        if key == "id":
            return drone.drone_id == value
        if key == "name":
            return drone.name.lower() == value.lower()
        if key == "cooling":
            return capability.cooling == _parse_bool(value)
        if key == "heating":
            return capability.heating == _parse_bool(value)
        if key == "maxmoves":
            return capability.max_moves == int(value)
        if key in _NUMERIC_ATTRIBUTES:
            return _NUMERIC_ATTRIBUTES[key](capability) == float(value)
    except ValueError:
        return False
    return False


def compare_numeric(drone: Drone, attribute: str, operator: str, value: str) -> bool:
    getter = _NUMERIC_ATTRIBUTES.get(attribute.lower())
    if getter is None:
        return False
    try:
        operand = float(value)
    except ValueError:
        return False
    current = getter(drone.capability)
    if operator == "<":
        return current < operand
    if operator == ">":
        return current > operand
    return False


def matches_conditions(drone: Drone, conditions: Iterable[QueryCondition]) -> bool:
    for condition in conditions:
        if condition.operator == "=":
            if not matches(drone, condition.attribute, condition.value):
                return False
        elif condition.operator == "!=":
            if matches(drone, condition.attribute, condition.value):
                return False
        elif condition.operator in {"<", ">"}:
            if not compare_numeric(drone, condition.attribute, condition.operator, condition.value):
                return False
        else:
            return False
    return True


def drones_with_cooling(drones: Iterable[Drone], state: bool) -> List[str]:
    return [drone.drone_id for drone in drones if drone.capability.cooling == state]


def query_as_path(drones: Iterable[Drone], attribute: str, value: str) -> List[str]:
    return [drone.drone_id for drone in drones if matches(drone, attribute, value)]


def query(drones: Iterable[Drone], conditions: Sequence[QueryCondition]) -> List[str]:
    return [drone.drone_id for drone in drones if matches_conditions(drone, conditions)]


def _respects_max_cost(
    capability: DroneCapability,
    home_points: Sequence[ServicePoint],
    requests: Sequence[DeliveryRequest],
) -> bool:
    """Pro-rata straight-line cost estimate from the best home service point."""

    best_moves = math.inf
    for home in home_points:
        current = home.location
        moves = 0.0
        for request in requests:
            moves += distance_between(current, request.delivery) / STEP + 1.0
            current = request.delivery
        moves += distance_between(current, home.location) / STEP
        best_moves = min(best_moves, moves)
    if math.isinf(best_moves):
        return False

    total = capability.cost_initial + capability.cost_final + math.floor(best_moves) * capability.cost_per_move
    per_delivery = total / len(requests)
    return all(
        request.requirements.max_cost is None or per_delivery <= request.requirements.max_cost
        for request in requests
    )


def can_handle_all(
    drone: Drone,
    windows: Sequence[AvailabilityWindow],
    home_points: Sequence[ServicePoint],
    requests: Sequence[DeliveryRequest],
) -> bool:
    """True when ``drone`` alone could carry every request in one flight."""

    if not home_points:
        return False
    capability = drone.capability
    total_required = 0.0
    any_max_cost = False
    for request in requests:
        requirements = request.requirements
        if requirements.capacity > capability.capacity:
            return False
        if requirements.cooling and not capability.cooling:
            return False
        if requirements.heating and not capability.heating:
            return False
        if not is_available_at(windows, request.date, request.time):
            return False
        total_required += requirements.capacity
        any_max_cost = any_max_cost or requirements.max_cost is not None
    if total_required > capability.capacity:
        return False
    if not any_max_cost:
        return True
    return _respects_max_cost(capability, home_points, requests)


def query_available_drones(
    drones: Sequence[Drone],
    service_points: Sequence[ServicePoint],
    stationing: Sequence[ServicePointDrones],
    requests: Sequence[DeliveryRequest],
) -> List[str]:
    """Ids (sorted) of drones able to serve the whole batch on their own."""

    if not requests:
        return []
    for request in requests:
        if request.requirements is None or request.requirements.capacity is None or request.delivery is None:
            LOGGER.info("Rejecting availability query: incomplete dispatch record %s", request.delivery_id)
            return []

    points_by_id = {point.service_point_id: point for point in service_points}
    windows_by_drone: Dict[str, List[AvailabilityWindow]] = {}
    homes_by_drone: Dict[str, List[ServicePoint]] = {}
    for entry in stationing:
        home: Optional[ServicePoint] = points_by_id.get(entry.service_point_id)
        for item in entry.drones:
            windows_by_drone.setdefault(item.drone_id, []).extend(item.windows)
            if home is not None:
                homes_by_drone.setdefault(item.drone_id, []).append(home)

    available = [
        drone.drone_id
        for drone in drones
        if can_handle_all(
            drone,
            windows_by_drone.get(drone.drone_id, []),
            homes_by_drone.get(drone.drone_id, []),
            requests,
        )
    ]
    LOGGER.debug("Drones able to serve %s dispatches: %s", len(requests), available)
    return sorted(available)
