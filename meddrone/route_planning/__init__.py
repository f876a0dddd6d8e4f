"""Mini README: Routing and flight planning engine.

Exports the A* path finder, the flight builder, the greedy delivery planner
and the plan result types. Callers normally build a ``PlanningContext`` from
reference data and hand it to ``DeliveryPlanner``; the lower level pieces are
exported for tools and tests that work on a single path or flight.
"""

from .flight import DeliverySegment, FinishedFlight, FlightBuilder
from .pathfinder import DEFAULT_EXPANSION_CAP, find_path
from .planner import DeliveryPlanner, PlanningContext
from .response import (
    DeliveryPlan,
    FlightPlan,
    PlanResult,
    SingleRoute,
    build_plan_result,
    empty_plan,
    merge_single_route,
)

__all__ = [
    "DEFAULT_EXPANSION_CAP",
    "DeliveryPlan",
    "DeliveryPlanner",
    "DeliverySegment",
    "FinishedFlight",
    "FlightBuilder",
    "FlightPlan",
    "PlanResult",
    "PlanningContext",
    "SingleRoute",
    "build_plan_result",
    "empty_plan",
    "find_path",
    "merge_single_route",
]
