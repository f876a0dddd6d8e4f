"""Mini README: Immutable reference data snapshots.

Structure:
    * ReferenceData - drones, service points, restricted areas and stationing
      captured at the start of a planning call.
    * ReferenceProvider - protocol implemented by anything that can produce a
      snapshot (the ILP client, in-memory fixtures).
    * InMemoryProvider - serves a fixed snapshot, used by tests and by the CLI
      when planning offline from a JSON file.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Protocol, Sequence, Tuple, Union

from ..fleet import Drone, RestrictedArea, ServicePoint, ServicePointDrones


@dataclass(frozen=True, slots=True)
class ReferenceData:
    drones: Tuple[Drone, ...] = ()
    service_points: Tuple[ServicePoint, ...] = ()
    restricted_areas: Tuple[RestrictedArea, ...] = ()
    stationing: Tuple[ServicePointDrones, ...] = ()

    @classmethod
    def build(
        cls,
        drones: Sequence[Drone],
        service_points: Sequence[ServicePoint],
        restricted_areas: Sequence[RestrictedArea],
        stationing: Sequence[ServicePointDrones],
    ) -> "ReferenceData":
        return cls(
            drones=tuple(drones),
            service_points=tuple(service_points),
            restricted_areas=tuple(restricted_areas),
            stationing=tuple(stationing),
        )

    @classmethod
    def from_payload(cls, payload: Dict[str, List[Dict[str, Any]]]) -> "ReferenceData":
        """Parse the four ILP collections from one JSON document.

        Keys mirror the ILP endpoints: ``drones``, ``servicePoints``,
        ``restrictedAreas`` and ``dronesForServicePoints``.
        """

        return cls.build(
            drones=[Drone.from_dict(item) for item in payload.get("drones", [])],
            service_points=[ServicePoint.from_dict(item) for item in payload.get("servicePoints", [])],
            restricted_areas=[RestrictedArea.from_dict(item) for item in payload.get("restrictedAreas", [])],
            stationing=[
                ServicePointDrones.from_dict(item) for item in payload.get("dronesForServicePoints", [])
            ],
        )

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ReferenceData":
        return cls.from_payload(json.loads(Path(path).read_text(encoding="utf-8")))


class ReferenceProvider(Protocol):
    def fetch_reference_data(self) -> ReferenceData:
        ...


class InMemoryProvider:
    """Provider returning the same snapshot on every call."""

    def __init__(self, snapshot: ReferenceData) -> None:
        self.snapshot = snapshot

    @property
    def endpoint(self) -> str:
        return "in-memory"

    def fetch_reference_data(self) -> ReferenceData:
        return self.snapshot
