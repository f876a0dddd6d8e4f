"""Mini README: Drone eligibility checks for individual deliveries.

Structure:
    * is_available_at - weekly window lookup for an optional date/time.
    * drone_meets_request - capability, capacity and availability in one check.
    * feasible_drone_ids - eligible drones stationed at one service point.
"""

from __future__ import annotations

from datetime import date, time
from typing import Dict, List, Optional, Sequence

from .models import AvailabilityWindow, DeliveryRequest, Drone, ServicePointDrones


def is_available_at(
    windows: Optional[Sequence[AvailabilityWindow]],
    day: Optional[date],
    moment: Optional[time],
) -> bool:
    """Return True when any window admits the given day (and time, if set).

    Requests with neither a date nor a time are unconstrained. A time without
    a date can never be placed in the week and is rejected.
    """

    if day is None and moment is None:
        return True
    if not windows or day is None:
        return False
    if moment is None:
        return any(window.covers_day(day) for window in windows)
    return any(window.covers(day, moment) for window in windows)


def drone_meets_request(
    drone: Optional[Drone],
    windows: Optional[Sequence[AvailabilityWindow]],
    request: DeliveryRequest,
    day: Optional[date],
) -> bool:
    """Check heating/cooling support, capacity and availability on ``day``."""

    if drone is None or request.requirements is None:
        return False
    capability = drone.capability
    requirements = request.requirements
    if requirements.cooling and not capability.cooling:
        return False
    if requirements.heating and not capability.heating:
        return False
    if (requirements.capacity or 0.0) > capability.capacity:
        return False
    effective_day = day if day is not None else request.date
    return is_available_at(windows, effective_day, request.time)


def feasible_drone_ids(
    stationed: Optional[ServicePointDrones],
    drones_by_id: Dict[str, Drone],
    request: DeliveryRequest,
    day: Optional[date],
) -> List[str]:
    """Ids of drones at a service point able to fly ``request`` on ``day``."""

    if stationed is None:
        return []
    eligible: List[str] = []
    for item in stationed.drones:
        drone = drones_by_id.get(item.drone_id)
        if drone is not None and drone_meets_request(drone, item.windows, request, day):
            eligible.append(drone.drone_id)
    return eligible
