"""Mini README: Reference data and request models for drone dispatch.

Structure:
    * DroneCapability / Drone - a drone and its capability snapshot.
    * ServicePoint - a depot drones depart from and return to.
    * AvailabilityWindow / DroneAvailability / ServicePointDrones - weekly
      availability of each drone at each service point.
    * RestrictedArea - a closed no-fly polygon.
    * Requirements / DeliveryRequest - one medical delivery to plan.
    * InvalidReferenceDataError - raised when reference data cannot be used.

Payloads arrive as camelCase JSON from the ILP reference service and from
API callers. Each model offers ``from_dict`` to parse such payloads; reference
models are frozen so a fetched snapshot can be shared between planning calls.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, time
from typing import Any, Dict, List, Optional, Tuple

from ..geometry import Coordinate

DAY_NAMES = (
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
    "SUNDAY",
)


class InvalidReferenceDataError(ValueError):
    """Reference data is structurally unusable (not merely infeasible)."""


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _parse_time(value: Any) -> Optional[time]:
    """Parse ``HH:MM[:SS]`` strings; unparsable values yield None."""

    if value is None:
        return None
    if isinstance(value, time):
        return value
    try:
        return time.fromisoformat(str(value))
    except ValueError:
        return None


def _parse_request_time(value: Any) -> Optional[time]:
    """Parse a dispatch record time; malformed strings raise ValueError."""

    if value is None:
        return None
    if isinstance(value, time):
        return value
    return time.fromisoformat(str(value))


def _parse_date(value: Any) -> Optional[date]:
    if value is None:
        return None
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value))


@dataclass(frozen=True, slots=True)
class DroneCapability:
    """Capability snapshot copied into every flight the drone opens."""

    capacity: float
    max_moves: int
    cost_per_move: float
    cost_initial: float
    cost_final: float
    cooling: bool = False
    heating: bool = False

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DroneCapability":
        return cls(
            capacity=float(payload.get("capacity", 0.0)),
            max_moves=int(payload.get("maxMoves", 0)),
            cost_per_move=float(payload.get("costPerMove", 0.0)),
            cost_initial=float(payload.get("costInitial", 0.0)),
            cost_final=float(payload.get("costFinal", 0.0)),
            cooling=bool(payload.get("cooling", False)),
            heating=bool(payload.get("heating", False)),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {
            "cooling": self.cooling,
            "heating": self.heating,
            "capacity": self.capacity,
            "maxMoves": self.max_moves,
            "costPerMove": self.cost_per_move,
            "costInitial": self.cost_initial,
            "costFinal": self.cost_final,
        }


@dataclass(frozen=True, slots=True)
class Drone:
    drone_id: str
    name: str
    capability: DroneCapability

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Drone":
        if "id" not in payload or payload.get("capability") is None:
            raise InvalidReferenceDataError(f"Drone payload lacks id or capability: {payload!r}")
        return cls(
            drone_id=str(payload["id"]),
            name=str(payload.get("name", "")),
            capability=DroneCapability.from_dict(payload["capability"]),
        )

    def as_dict(self) -> Dict[str, Any]:
        return {"id": self.drone_id, "name": self.name, "capability": self.capability.as_dict()}


@dataclass(frozen=True, slots=True)
class ServicePoint:
    service_point_id: int
    name: str
    location: Coordinate

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ServicePoint":
        if "id" not in payload or payload.get("location") is None:
            raise InvalidReferenceDataError(f"Service point payload lacks id or location: {payload!r}")
        return cls(
            service_point_id=int(payload["id"]),
            name=str(payload.get("name", "")),
            location=Coordinate.from_dict(payload["location"]),
        )


@dataclass(frozen=True, slots=True)
class AvailabilityWindow:
    """A weekly slot, e.g. MONDAY 09:00-17:00, bounds inclusive."""

    day_of_week: str
    from_time: Optional[time]
    until_time: Optional[time]

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "AvailabilityWindow":
        return cls(
            day_of_week=str(payload.get("dayOfWeek") or "").strip().upper(),
            from_time=_parse_time(payload.get("from")),
            until_time=_parse_time(payload.get("until")),
        )

    def covers_day(self, day: date) -> bool:
        return self.day_of_week == DAY_NAMES[day.weekday()]

    def covers(self, day: date, moment: time) -> bool:
        if not self.covers_day(day) or self.from_time is None or self.until_time is None:
            return False
        return self.from_time <= moment <= self.until_time


@dataclass(frozen=True, slots=True)
class DroneAvailability:
    """Availability of one drone at one service point."""

    drone_id: str
    windows: Tuple[AvailabilityWindow, ...] = ()

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DroneAvailability":
        return cls(
            drone_id=str(payload["id"]),
            windows=tuple(
                AvailabilityWindow.from_dict(window) for window in payload.get("availability") or []
            ),
        )


@dataclass(frozen=True, slots=True)
class ServicePointDrones:
    """The drones stationed at a service point, with their weekly windows."""

    service_point_id: int
    drones: Tuple[DroneAvailability, ...] = ()

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "ServicePointDrones":
        return cls(
            service_point_id=int(payload["servicePointId"]),
            drones=tuple(
                DroneAvailability.from_dict(item) for item in payload.get("drones") or [] if item
            ),
        )

    def find(self, drone_id: str) -> Optional[DroneAvailability]:
        for item in self.drones:
            if item.drone_id == drone_id:
                return item
        return None


@dataclass(frozen=True, slots=True)
class RestrictedArea:
    area_id: Optional[int]
    name: str
    vertices: Tuple[Coordinate, ...]

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "RestrictedArea":
        try:
            vertices = tuple(Coordinate.from_dict(vertex) for vertex in payload.get("vertices") or [])
        except ValueError as error:
            raise InvalidReferenceDataError(str(error)) from error
        area_id = payload.get("id")
        return cls(
            area_id=None if area_id is None else int(area_id),
            name=str(payload.get("name", "")),
            vertices=vertices,
        )


@dataclass(slots=True)
class Requirements:
    """What a delivery needs from the drone carrying it."""

    capacity: Optional[float] = None
    cooling: bool = False
    heating: bool = False
    max_cost: Optional[float] = None

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "Requirements":
        return cls(
            capacity=_optional_float(payload.get("capacity")),
            cooling=bool(payload.get("cooling") or False),
            heating=bool(payload.get("heating") or False),
            max_cost=_optional_float(payload.get("maxCost")),
        )


@dataclass(slots=True)
class DeliveryRequest:
    """A medical dispatch record; every field may be missing on input."""

    delivery_id: Optional[int] = None
    date: Optional[date] = None
    time: Optional[time] = None
    delivery: Optional[Coordinate] = None
    requirements: Optional[Requirements] = field(default=None)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "DeliveryRequest":
        delivery = payload.get("delivery")
        requirements = payload.get("requirements")
        delivery_id = payload.get("id")
        return cls(
            delivery_id=None if delivery_id is None else int(delivery_id),
            date=_parse_date(payload.get("date")),
            time=_parse_request_time(payload.get("time")),
            delivery=None if delivery is None else Coordinate.from_dict(delivery),
            requirements=None if requirements is None else Requirements.from_dict(requirements),
        )


def parse_requests(payloads: List[Dict[str, Any]]) -> List[DeliveryRequest]:
    """Parse a JSON batch of dispatch records."""

    return [DeliveryRequest.from_dict(payload) for payload in payloads]
