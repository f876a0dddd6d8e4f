"""Mini README: Dispatch service facade used by the HTTP interface and CLI.

Structure:
    * DispatchService - fetches a reference snapshot per call and runs the
      planner or a fleet query against it.

Each call fetches its own snapshot and builds its own planner, so concurrent
calls share nothing mutable. Malformed batches are rejected before the
reference service is contacted.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Sequence

from ..configuration import MeddroneSettings, get_settings
from ..fleet import (
    DeliveryRequest,
    Drone,
    QueryCondition,
    batch_problem,
    drones_with_cooling,
    query,
    query_as_path,
    query_available_drones,
)
from ..logging_utils import get_logger
from ..reference import IlpClient, ReferenceData, ReferenceProvider
from ..route_planning import (
    DeliveryPlanner,
    PlanningContext,
    PlanResult,
    SingleRoute,
    empty_plan,
)
from ..utils.geojson import route_collection

LOGGER = get_logger(__name__)


class DispatchService:
    """Plan deliveries and answer fleet queries from live reference data."""

    def __init__(
        self,
        provider: Optional[ReferenceProvider] = None,
        *,
        expansion_cap: Optional[int] = None,
        settings: Optional[MeddroneSettings] = None,
    ) -> None:
        settings = settings or get_settings()
        self.provider = provider or IlpClient.from_settings(settings)
        self.expansion_cap = expansion_cap or settings.expansion_cap

    @property
    def endpoint(self) -> str:
        return getattr(self.provider, "endpoint", "unknown")

    def _snapshot(self) -> ReferenceData:
        return self.provider.fetch_reference_data()

    def _planner(self, snapshot: ReferenceData) -> DeliveryPlanner:
        context = PlanningContext.build(
            snapshot.drones,
            snapshot.service_points,
            snapshot.restricted_areas,
            snapshot.stationing,
            expansion_cap=self.expansion_cap,
        )
        return DeliveryPlanner(context)

    # Planning ------------------------------------------------------------

    def plan(self, requests: Sequence[DeliveryRequest]) -> PlanResult:
        problem = batch_problem(requests)
        if problem is not None:
            LOGGER.info("Rejecting delivery batch before planning: %s", problem)
            return empty_plan()
        return self._planner(self._snapshot()).plan(requests)

    def plan_single_route(self, requests: Sequence[DeliveryRequest]) -> Optional[SingleRoute]:
        if batch_problem(requests) is not None:
            return None
        return self._planner(self._snapshot()).plan_single_route(requests)

    def plan_geojson(self, requests: Sequence[DeliveryRequest]) -> Dict[str, Any]:
        return route_collection(self.plan_single_route(requests))

    # Fleet queries -------------------------------------------------------

    def drones_with_cooling(self, state: bool) -> List[str]:
        return drones_with_cooling(self._snapshot().drones, state)

    def drone_details(self, drone_id: str) -> Drone:
        for drone in self._snapshot().drones:
            if drone.drone_id == drone_id:
                return drone
        raise KeyError(f"Drone {drone_id} not found")

    def query_as_path(self, attribute: str, value: str) -> List[str]:
        return query_as_path(self._snapshot().drones, attribute, value)

    def query(self, conditions: Sequence[QueryCondition]) -> List[str]:
        return query(self._snapshot().drones, conditions)

    def query_available_drones(self, requests: Sequence[DeliveryRequest]) -> List[str]:
        if not requests:
            return []
        snapshot = self._snapshot()
        return query_available_drones(
            snapshot.drones,
            snapshot.service_points,
            snapshot.stationing,
            requests,
        )
