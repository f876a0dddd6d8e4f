"""Mini README: FastAPI-powered dispatch centre for MedDrone.

Structure:
    * create_application - application factory wiring the ``/api/v1`` routes.
    * _require_* helpers - translate missing or out-of-range geometry into 400.

Routes fall into three groups: geometry services (distance, proximity, next
position, region containment), fleet queries against the live reference data
and delivery planning. Planning and fleet routes are plain ``def`` handlers so
FastAPI runs them in its threadpool; each request works on its own reference
snapshot. Reference service outages surface as 502, unknown drones as 404.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse

from ..dispatch import DispatchService
from ..fleet import DeliveryRequest, InvalidReferenceDataError
from ..geometry import (
    Coordinate,
    distance_between,
    is_near,
    is_point_in_region,
    is_valid_angle,
    is_valid_coordinate,
    is_valid_region,
    next_position,
)
from ..logging_utils import get_logger
from ..reference import ReferenceDataUnavailableError
from .schemas import (
    DeliveryRequestModel,
    DistanceRequestModel,
    IsInRegionRequestModel,
    NextPositionRequestModel,
    QueryConditionModel,
)

LOGGER = get_logger(__name__)

SERVICE_UID = "meddrone-dispatch"


def _require_coordinate(point: Optional[Coordinate], label: str) -> Coordinate:
    if not is_valid_coordinate(point):
        raise HTTPException(status_code=400, detail=f"Invalid {label}")
    return point


def _require_pair(payload: DistanceRequestModel) -> Sequence[Coordinate]:
    first, second = payload.points()
    return (
        _require_coordinate(first, "position1"),
        _require_coordinate(second, "position2"),
    )


def _to_requests(payload: Optional[List[DeliveryRequestModel]]) -> List[DeliveryRequest]:
    return [model.to_domain() for model in payload or []]


def create_application(service: Optional[DispatchService] = None) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    app = FastAPI(title="MedDrone Dispatch Centre", version="0.3.0")
    dispatch = service or DispatchService()
    api = APIRouter(prefix="/api/v1")

    @app.exception_handler(ReferenceDataUnavailableError)
    async def reference_unavailable(_: Request, error: ReferenceDataUnavailableError) -> JSONResponse:
        LOGGER.error("Reference data unavailable: %s", error)
        return JSONResponse({"detail": str(error)}, status_code=502)

    @app.exception_handler(InvalidReferenceDataError)
    async def reference_invalid(_: Request, error: InvalidReferenceDataError) -> JSONResponse:
        LOGGER.error("Reference data rejected: %s", error)
        return JSONResponse({"detail": str(error)}, status_code=502)

    @app.get("/", response_class=HTMLResponse)
    async def index() -> HTMLResponse:
        """Landing banner naming the reference data source."""

        return HTMLResponse(
            "<html><body><h1>MedDrone dispatch centre</h1>"
            f"<p>Reference data: {dispatch.endpoint}</p></body></html>"
        )

    # Geometry services ---------------------------------------------------

    @api.get("/uid")
    async def uid() -> JSONResponse:
        return JSONResponse(SERVICE_UID)

    @api.post("/distanceTo")
    async def distance_to(payload: DistanceRequestModel) -> JSONResponse:
        first, second = _require_pair(payload)
        return JSONResponse(distance_between(first, second))

    @api.post("/isCloseTo")
    async def is_close_to(payload: DistanceRequestModel) -> JSONResponse:
        first, second = _require_pair(payload)
        return JSONResponse(is_near(first, second))

    @api.post("/nextPosition")
    async def next_position_route(payload: NextPositionRequestModel) -> JSONResponse:
        start = _require_coordinate(payload.start_point(), "start")
        if not is_valid_angle(payload.angle):
            raise HTTPException(status_code=400, detail="Angle must be a multiple of 22.5 in [0, 360]")
        return JSONResponse(next_position(start, payload.angle).as_dict())

    @api.post("/isInRegion")
    async def is_in_region(payload: IsInRegionRequestModel) -> JSONResponse:
        position = _require_coordinate(
            None if payload.position is None else payload.position.to_domain(),
            "position",
        )
        vertices = None if payload.region is None else payload.region.vertex_points()
        if not is_valid_region(vertices):
            raise HTTPException(status_code=400, detail="Region must be a closed polygon")
        return JSONResponse(is_point_in_region(position, vertices))

    # Fleet queries -------------------------------------------------------

    @api.get("/dronesWithCooling/{state}")
    def drones_with_cooling(state: bool) -> JSONResponse:
        return JSONResponse(dispatch.drones_with_cooling(state))

    @api.get("/droneDetails/{drone_id}")
    def drone_details(drone_id: str) -> JSONResponse:
        try:
            drone = dispatch.drone_details(drone_id)
        except KeyError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        return JSONResponse(drone.as_dict())

    @api.get("/queryAsPath/{attribute}/{value}")
    def query_as_path(attribute: str, value: str) -> JSONResponse:
        return JSONResponse(dispatch.query_as_path(attribute, value))

    @api.post("/query")
    def query(conditions: List[QueryConditionModel]) -> JSONResponse:
        return JSONResponse(dispatch.query([condition.to_domain() for condition in conditions]))

    @api.post("/queryAvailableDrones")
    def query_available_drones(payload: Optional[List[DeliveryRequestModel]] = None) -> JSONResponse:
        return JSONResponse(dispatch.query_available_drones(_to_requests(payload)))

    # Planning ------------------------------------------------------------

    @api.post("/calcDeliveryPath")
    def calc_delivery_path(payload: Optional[List[DeliveryRequestModel]] = None) -> JSONResponse:
        requests = _to_requests(payload)
        result = dispatch.plan(requests)
        LOGGER.info(
            "Planned %s requests into %s flights (moves=%s cost=%.2f)",
            len(requests),
            len(result.flights),
            result.total_moves,
            result.total_cost,
        )
        return JSONResponse(result.as_dict())

    @api.post("/calcDeliveryPathAsGeoJson")
    def calc_delivery_path_as_geojson(
        payload: Optional[List[DeliveryRequestModel]] = None,
    ) -> JSONResponse:
        return JSONResponse(dispatch.plan_geojson(_to_requests(payload)))

    app.include_router(api)
    return app
