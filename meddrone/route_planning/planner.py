"""Mini README: Greedy multi-drone delivery planner.

Structure:
    * PlanningContext - per-call, read-only view of the reference data with
      precomputed no-fly bounding boxes.
    * DeliveryPlanner - opens, merges into and closes flights day by day.

Requests are planned date by date. Each day first takes its timed requests
(by time, then id) and then its date-only requests; a single one that cannot
be placed aborts the whole call. Undated requests fill in on any day that can
take them, and any left over at the end also abort the call. Every placement
first tries to extend an open flight and only then opens a new one from the
nearest service point with an eligible, affordable drone.

The assignment is order dependent by construction: the first flight that
accepts a request keeps it, and no placement is revisited.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, time
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple

from ..fleet import (
    DeliveryRequest,
    Drone,
    InvalidReferenceDataError,
    RestrictedArea,
    ServicePoint,
    ServicePointDrones,
    drone_meets_request,
    feasible_drone_ids,
)
from ..fleet.validation import batch_problem
from ..geometry import BoundingBox, Coordinate, bounding_box, distance_between
from ..geometry.primitives import is_closed
from ..logging_utils import get_logger
from .flight import FinishedFlight, FlightBuilder
from .pathfinder import DEFAULT_EXPANSION_CAP, find_path
from .response import PlanResult, SingleRoute, build_plan_result, empty_plan, merge_single_route

LOGGER = get_logger(__name__)

COST_TOLERANCE = 1e-9
CAPACITY_TOLERANCE = 1e-9


class _UnroutableReturn(Exception):
    """A flight could not find its way home when being closed."""


@dataclass(slots=True)
class PlanningContext:
    """Reference data for one planning call, indexed for the planner."""

    service_points: List[ServicePoint]
    drones_by_id: Dict[str, Drone]
    stationing: Dict[int, ServicePointDrones]
    polygons: List[Tuple[Coordinate, ...]] = field(default_factory=list)
    boxes: List[BoundingBox] = field(default_factory=list)
    expansion_cap: int = DEFAULT_EXPANSION_CAP

    @classmethod
    def build(
        cls,
        drones: Optional[Sequence[Drone]],
        service_points: Optional[Sequence[ServicePoint]],
        restricted_areas: Optional[Sequence[RestrictedArea]],
        stationing: Optional[Sequence[ServicePointDrones]],
        *,
        expansion_cap: int = DEFAULT_EXPANSION_CAP,
    ) -> "PlanningContext":
        """Index reference data, rejecting collections the planner cannot use."""

        if drones is None or service_points is None or restricted_areas is None or stationing is None:
            raise InvalidReferenceDataError("All four reference data collections are required")
        if expansion_cap < 1:
            raise InvalidReferenceDataError("expansion_cap must be positive")

        polygons: List[Tuple[Coordinate, ...]] = []
        for area in restricted_areas:
            vertices = area.vertices
            if len(vertices) < 4 or not is_closed(vertices) or len(set(vertices[:-1])) < 3:
                raise InvalidReferenceDataError(
                    f"Restricted area {area.name or area.area_id} is not a closed polygon with 3+ corners"
                )
            polygons.append(tuple(vertices))

        return cls(
            service_points=list(service_points),
            drones_by_id={drone.drone_id: drone for drone in drones},
            stationing={entry.service_point_id: entry for entry in stationing},
            polygons=polygons,
            boxes=[bounding_box(polygon) for polygon in polygons],
            expansion_cap=expansion_cap,
        )

    def path(self, start: Coordinate, goal: Coordinate) -> List[Coordinate]:
        return find_path(start, goal, self.polygons, self.boxes, expansion_cap=self.expansion_cap)

    def windows_for(self, service_point_id: int, drone_id: str):
        entry = self.stationing.get(service_point_id)
        item = None if entry is None else entry.find(drone_id)
        return None if item is None else item.windows


def _sort_key(request: DeliveryRequest) -> Tuple[time, int]:
    return (request.time, request.delivery_id)


class DeliveryPlanner:
    """Assign a batch of deliveries to drone flights."""

    def __init__(self, context: PlanningContext) -> None:
        self.context = context
        LOGGER.debug(
            "Planner ready: %s service points, %s drones, %s restricted areas",
            len(context.service_points),
            len(context.drones_by_id),
            len(context.polygons),
        )

    # Public entry points -------------------------------------------------

    def plan(self, requests: Sequence[DeliveryRequest]) -> PlanResult:
        """Plan every request or return the canonical empty plan."""

        problem = batch_problem(requests)
        if problem is not None:
            LOGGER.info("Rejecting delivery batch: %s", problem)
            return empty_plan()
        finished = self.plan_flights(requests)
        if finished is None:
            return empty_plan()
        result = build_plan_result(finished)
        LOGGER.info(
            "Planned %s deliveries on %s flights: moves=%s cost=%.2f",
            len(requests),
            len(result.flights),
            result.total_moves,
            result.total_cost,
        )
        return result

    def plan_single_route(self, requests: Sequence[DeliveryRequest]) -> Optional[SingleRoute]:
        """One continuous route, or None unless one dated flight serves the batch."""

        dates = {request.date for request in requests} if requests else set()
        if len(dates) != 1 or None in dates:
            LOGGER.info("Single route needs one shared date, got %s", sorted(str(d) for d in dates))
            return None
        route = merge_single_route(self.plan(requests))
        if route is None:
            LOGGER.info("Batch of %s deliveries does not fit a single flight", len(requests))
        return route

    def plan_flights(self, requests: Sequence[DeliveryRequest]) -> Optional[List[FinishedFlight]]:
        """Run the day-by-day state machine; None means no feasible plan."""

        timed: Dict[date, List[DeliveryRequest]] = defaultdict(list)
        dated_only: Dict[date, List[DeliveryRequest]] = defaultdict(list)
        anytime: List[DeliveryRequest] = []
        for request in requests:
            if request.date is None:
                anytime.append(request)
            elif request.time is not None:
                timed[request.date].append(request)
            else:
                dated_only[request.date].append(request)
        days = sorted(set(timed) | set(dated_only))
        LOGGER.info(
            "Planning %s requests over %s day(s), %s undated",
            len(requests),
            len(days),
            len(anytime),
        )

        active: List[FlightBuilder] = []
        finished: List[FinishedFlight] = []
        try:
            for day in days:
                todays = sorted(timed.get(day, []), key=_sort_key) + dated_only.get(day, [])
                for request in todays:
                    if not self.try_assign_or_start_flight(request, day, active, finished):
                        LOGGER.info("No drone can serve delivery %s on %s; aborting plan", request.delivery_id, day)
                        return None
                remaining: List[DeliveryRequest] = []
                for request in anytime:
                    if not self.try_assign_or_start_flight(request, day, active, finished):
                        remaining.append(request)
                anytime = remaining

            for flight in active:
                self.close_flight(flight, finished)
        except _UnroutableReturn as error:
            LOGGER.info("Aborting plan: %s", error)
            return None
        active.clear()

        if anytime:
            LOGGER.info(
                "Undated deliveries %s could not be placed on any day; aborting plan",
                [request.delivery_id for request in anytime],
            )
            return None
        return finished

    # Flight assembly -----------------------------------------------------

    def try_assign_or_start_flight(
        self,
        request: DeliveryRequest,
        day: date,
        active: List[FlightBuilder],
        finished: List[FinishedFlight],
    ) -> bool:
        if active and self.try_merge_flight(request, active, finished, day):
            return True
        flight = self.open_new_flight(request, day, active)
        if flight is None:
            return False
        active.append(flight)
        return True

    def _busy_drones(self, active: Iterable[FlightBuilder], day: date) -> Set[str]:
        return {
            flight.drone_id
            for flight in active
            if flight.flight_date is None or flight.flight_date == day
        }

    def open_new_flight(
        self,
        request: DeliveryRequest,
        day: date,
        active: Sequence[FlightBuilder] = (),
    ) -> Optional[FlightBuilder]:
        """Start a flight from the nearest service point that can take ``request``.

        Drones already flying today are not considered.
        """

        context = self.context
        target = request.delivery
        requirements = request.requirements
        busy = self._busy_drones(active, day)
        candidates = sorted(
            context.service_points,
            key=lambda point: distance_between(point.location, target),
        )
        for point in candidates:
            eligible = [
                drone_id
                for drone_id in feasible_drone_ids(
                    context.stationing.get(point.service_point_id),
                    context.drones_by_id,
                    request,
                    day,
                )
                if drone_id not in busy
            ]
            if not eligible:
                continue
            forward = context.path(point.location, target)
            if not forward:
                LOGGER.debug("Delivery %s unreachable from service point %s", request.delivery_id, point.service_point_id)
                continue
            forward_steps = len(forward) - 1
            needed = 2 * forward_steps + 1

            best_drone: Optional[Drone] = None
            best_cost = float("inf")
            for drone_id in eligible:
                drone = context.drones_by_id[drone_id]
                capability = drone.capability
                if needed > capability.max_moves:
                    continue
                estimate = capability.cost_initial + capability.cost_final + capability.cost_per_move * needed
                if requirements.max_cost is not None and estimate > requirements.max_cost + COST_TOLERANCE:
                    continue
                if estimate < best_cost:
                    best_drone, best_cost = drone, estimate
            if best_drone is None:
                LOGGER.debug(
                    "No drone at service point %s fits %s moves within budget for delivery %s",
                    point.service_point_id,
                    needed,
                    request.delivery_id,
                )
                continue

            flight = FlightBuilder.open(best_drone, point, request, day)
            flight.add_segment(
                request.delivery_id,
                forward + [forward[-1]],
                forward_steps + 1,
                requirements.capacity,
                requirements.max_cost,
                requirements.cooling,
                requirements.heating,
            )
            LOGGER.debug(
                "Opened flight for drone %s at service point %s with delivery %s (%s steps out, est. cost %.2f)",
                best_drone.drone_id,
                point.service_point_id,
                request.delivery_id,
                forward_steps,
                best_cost,
            )
            return flight
        return None

    def try_merge_flight(
        self,
        request: DeliveryRequest,
        active: List[FlightBuilder],
        finished: List[FinishedFlight],
        day: date,
    ) -> bool:
        """Append ``request`` to the first open flight that can absorb it.

        Flights dated before ``day`` are closed and dropped from ``active`` as
        they are encountered.
        """

        context = self.context
        requirements = request.requirements
        index = 0
        while index < len(active):
            flight = active[index]
            if flight.flight_date is not None and flight.flight_date != day:
                active.pop(index)
                self.close_flight(flight, finished)
                continue
            index += 1

            drone = context.drones_by_id.get(flight.drone_id)
            windows = context.windows_for(flight.service_point.service_point_id, flight.drone_id)
            if not drone_meets_request(drone, windows, request, day):
                continue
            if (requirements.cooling and flight.has_heating) or (requirements.heating and flight.has_cooling):
                LOGGER.debug("Delivery %s cannot share drone %s: mixed heating/cooling", request.delivery_id, flight.drone_id)
                continue
            if requirements.capacity + flight.current_load > flight.capacity + CAPACITY_TOLERANCE:
                continue

            forward = context.path(flight.end, request.delivery)
            if not forward:
                continue
            forward_with_hover = forward + [forward[-1]]
            forward_steps = len(forward_with_hover) - 1
            if flight.steps_used + forward_steps > flight.max_moves:
                continue
            back = context.path(forward[-1], flight.service_point.location)
            if not back:
                continue
            total_steps = flight.steps_used + forward_steps + len(back) - 1
            if total_steps > flight.max_moves:
                LOGGER.debug("Delivery %s would exceed drone %s move budget", request.delivery_id, flight.drone_id)
                continue

            ceilings = list(flight.max_costs)
            if requirements.max_cost is not None:
                ceilings.append(requirements.max_cost)
            if ceilings:
                per_delivery = (
                    total_steps * flight.cost_per_move + flight.cost_initial + flight.cost_final
                ) / (flight.delivery_count + 1)
                if any(per_delivery - ceiling > COST_TOLERANCE for ceiling in ceilings):
                    LOGGER.debug("Delivery %s would break a cost ceiling on drone %s", request.delivery_id, flight.drone_id)
                    continue

            flight.add_segment(
                request.delivery_id,
                forward_with_hover,
                forward_steps,
                requirements.capacity,
                requirements.max_cost,
                requirements.cooling,
                requirements.heating,
            )
            LOGGER.debug("Merged delivery %s into flight of drone %s", request.delivery_id, flight.drone_id)
            return True
        return False

    def close_flight(self, flight: FlightBuilder, finished: List[FinishedFlight]) -> None:
        """Append the way home and move the flight to ``finished``."""

        if flight.delivery_count == 1:
            back = list(reversed(flight.first_segment.path[:-1]))
        else:
            back = self.context.path(flight.end, flight.service_point.location)
            if not back:
                raise _UnroutableReturn(f"drone {flight.drone_id} cannot return to service point")
        flight.add_return(back, len(back) - 1)
        finished.append(flight.finish())
        LOGGER.debug(
            "Closed flight of drone %s: %s deliveries, %s steps",
            flight.drone_id,
            flight.delivery_count,
            flight.steps_used,
        )
