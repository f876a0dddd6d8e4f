"""Mini README: In-progress and finished drone flights.

Structure:
    * DeliverySegment - one leg of a flight; ``delivery_id`` is None for the
      return leg.
    * FlightBuilder - mutable accumulator owned by the planner while a flight
      is open.
    * FinishedFlight - immutable record handed to the response assembler.

The builder performs no admission checks. The planner validates capacity,
move budget, cost ceilings and cargo compatibility before calling
``add_segment``, which keeps the builder a plain record of what was decided.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import List, Optional, Sequence, Tuple

from ..fleet import DeliveryRequest, Drone, ServicePoint
from ..fleet.models import DAY_NAMES
from ..geometry import Coordinate


@dataclass(frozen=True, slots=True)
class DeliverySegment:
    delivery_id: Optional[int]
    path: Tuple[Coordinate, ...]

    @property
    def is_return(self) -> bool:
        return self.delivery_id is None


@dataclass(frozen=True, slots=True)
class FinishedFlight:
    """A closed round trip: one drone, its deliveries and the way home."""

    drone_id: str
    service_point: ServicePoint
    flight_date: Optional[date]
    steps_used: int
    max_moves: int
    capacity: float
    cost_per_move: float
    cost_initial: float
    cost_final: float
    segments: Tuple[DeliverySegment, ...]
    loads: Tuple[float, ...]

    @property
    def cost(self) -> float:
        return self.cost_initial + self.cost_final + self.steps_used * self.cost_per_move

    @property
    def delivery_ids(self) -> List[int]:
        return [segment.delivery_id for segment in self.segments if not segment.is_return]


@dataclass(slots=True)
class FlightBuilder:
    """Route being assembled for one drone out of one service point."""

    drone_id: str
    service_point: ServicePoint
    capacity: float
    max_moves: int
    cost_per_move: float
    cost_initial: float
    cost_final: float
    flight_date: Optional[date] = None
    day_of_week: Optional[str] = None
    first_dispatch: Optional[time] = None
    end: Optional[Coordinate] = None
    steps_used: int = 0
    current_load: float = 0.0
    has_cooling: bool = False
    has_heating: bool = False
    delivery_count: int = 0
    max_costs: List[float] = field(default_factory=list)
    loads: List[float] = field(default_factory=list)
    segments: List[DeliverySegment] = field(default_factory=list)

    @classmethod
    def open(
        cls,
        drone: Drone,
        service_point: ServicePoint,
        first: DeliveryRequest,
        day: Optional[date] = None,
    ) -> "FlightBuilder":
        """Start a flight, freezing the drone's capability for its duration.

        The flight is dated by its first delivery, or by the planning day when
        that delivery carries no date of its own.
        """

        capability = drone.capability
        flight_date = first.date if first.date is not None else day
        return cls(
            drone_id=drone.drone_id,
            service_point=service_point,
            capacity=capability.capacity,
            max_moves=capability.max_moves,
            cost_per_move=capability.cost_per_move,
            cost_initial=capability.cost_initial,
            cost_final=capability.cost_final,
            flight_date=flight_date,
            day_of_week=None if flight_date is None else DAY_NAMES[flight_date.weekday()],
            first_dispatch=first.time,
            end=service_point.location,
        )

    def add_segment(
        self,
        delivery_id: int,
        path: Sequence[Coordinate],
        steps: int,
        load: float,
        max_cost: Optional[float],
        cooling: bool,
        heating: bool,
    ) -> None:
        self.segments.append(DeliverySegment(delivery_id=delivery_id, path=tuple(path)))
        self.steps_used += steps
        self.end = path[-1]
        self.current_load += load
        self.loads.append(load)
        if max_cost is not None:
            self.max_costs.append(max_cost)
        self.has_cooling = self.has_cooling or cooling
        self.has_heating = self.has_heating or heating
        self.delivery_count += 1

    def add_return(self, path: Sequence[Coordinate], steps: int) -> None:
        self.segments.append(DeliverySegment(delivery_id=None, path=tuple(path)))
        self.steps_used += steps
        if path:
            self.end = path[-1]

    @property
    def first_segment(self) -> DeliverySegment:
        return self.segments[0]

    def finish(self) -> FinishedFlight:
        return FinishedFlight(
            drone_id=self.drone_id,
            service_point=self.service_point,
            flight_date=self.flight_date,
            steps_used=self.steps_used,
            max_moves=self.max_moves,
            capacity=self.capacity,
            cost_per_move=self.cost_per_move,
            cost_initial=self.cost_initial,
            cost_final=self.cost_final,
            segments=tuple(self.segments),
            loads=tuple(self.loads),
        )
