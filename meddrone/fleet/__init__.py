"""Mini README: Fleet reference data and drone eligibility.

The ``models`` module defines the drones, service points, availability
windows, restricted areas and delivery requests exchanged with the reference
service and API callers. ``availability`` decides whether a drone may take a
delivery, and ``query`` hosts the attribute filters exposed over HTTP.
"""

from .availability import drone_meets_request, feasible_drone_ids, is_available_at
from .models import (
    AvailabilityWindow,
    DeliveryRequest,
    Drone,
    DroneAvailability,
    DroneCapability,
    InvalidReferenceDataError,
    Requirements,
    RestrictedArea,
    ServicePoint,
    ServicePointDrones,
    parse_requests,
)
from .query import (
    QueryCondition,
    drones_with_cooling,
    query,
    query_as_path,
    query_available_drones,
)
from .validation import batch_problem, request_problem

__all__ = [
    "AvailabilityWindow",
    "DeliveryRequest",
    "Drone",
    "DroneAvailability",
    "DroneCapability",
    "InvalidReferenceDataError",
    "QueryCondition",
    "Requirements",
    "RestrictedArea",
    "ServicePoint",
    "ServicePointDrones",
    "batch_problem",
    "drone_meets_request",
    "drones_with_cooling",
    "feasible_drone_ids",
    "is_available_at",
    "parse_requests",
    "query",
    "query_as_path",
    "query_available_drones",
    "request_problem",
]
