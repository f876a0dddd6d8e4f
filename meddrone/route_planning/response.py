"""Mini README: Folding finished flights into the public plan result.

Structure:
    * DeliveryPlan / FlightPlan / PlanResult - serialisable plan records.
    * empty_plan - the canonical "no feasible plan" result.
    * build_plan_result - totals cost and moves over finished flights.
    * SingleRoute / merge_single_route - one continuous path for one drone.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

from ..geometry import Coordinate
from .flight import FinishedFlight


@dataclass(slots=True)
class DeliveryPlan:
    delivery_id: Optional[int]
    path: List[Coordinate]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "deliveryId": self.delivery_id,
            "flightPath": [point.as_dict() for point in self.path],
        }


@dataclass(slots=True)
class FlightPlan:
    drone_id: str
    deliveries: List[DeliveryPlan] = field(default_factory=list)

    def as_dict(self) -> Dict[str, Any]:
        return {
            "droneId": self.drone_id,
            "deliveries": [delivery.as_dict() for delivery in self.deliveries],
        }


@dataclass(slots=True)
class PlanResult:
    """Aggregate answer of one planning call."""

    total_cost: float = 0.0
    total_moves: int = 0
    flights: List[FlightPlan] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.flights

    def as_dict(self) -> Dict[str, Any]:
        return {
            "totalCost": self.total_cost,
            "totalMoves": self.total_moves,
            "dronePaths": [flight.as_dict() for flight in self.flights],
        }


def empty_plan() -> PlanResult:
    return PlanResult(total_cost=0.0, total_moves=0, flights=[])


def build_plan_result(finished: Sequence[FinishedFlight]) -> PlanResult:
    """Sum per-flight cost and moves and copy each flight's segments."""

    if not finished:
        return empty_plan()
    result = PlanResult()
    for flight in finished:
        result.total_cost += flight.cost
        result.total_moves += flight.steps_used
        result.flights.append(
            FlightPlan(
                drone_id=flight.drone_id,
                deliveries=[
                    DeliveryPlan(delivery_id=segment.delivery_id, path=list(segment.path))
                    for segment in flight.segments
                ],
            )
        )
    return result


@dataclass(slots=True)
class SingleRoute:
    drone_id: str
    path: List[Coordinate]


def merge_single_route(result: PlanResult) -> Optional[SingleRoute]:
    """Join every leg of a one-flight plan into a single continuous path.

    Each leg starts where the previous one ended, so the shared point is kept
    once. Plans with no flight or with several flights yield None.
    """

    if len(result.flights) != 1:
        return None
    flight = result.flights[0]
    path: List[Coordinate] = []
    for delivery in flight.deliveries:
        if not delivery.path:
            continue
        path.extend(delivery.path if not path else delivery.path[1:])
    return SingleRoute(drone_id=flight.drone_id, path=path)
