"""Mini README: Request bodies accepted by the HTTP interface.

Every field is optional at the schema level: a record with missing pieces
must still reach the planner, which answers with the empty plan instead of a
validation error. Geometry endpoints check their inputs explicitly and answer
400 for missing or out-of-range values.
"""

from __future__ import annotations

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..fleet import DeliveryRequest, QueryCondition, Requirements
from ..geometry import Coordinate


class CoordinateModel(BaseModel):
    lng: Optional[float] = None
    lat: Optional[float] = None

    def to_domain(self) -> Optional[Coordinate]:
        if self.lng is None or self.lat is None:
            return None
        return Coordinate(lng=self.lng, lat=self.lat)


def _coordinate(model: Optional[CoordinateModel]) -> Optional[Coordinate]:
    return None if model is None else model.to_domain()


class DistanceRequestModel(BaseModel):
    position1: Optional[CoordinateModel] = None
    position2: Optional[CoordinateModel] = None

    def points(self) -> List[Optional[Coordinate]]:
        return [_coordinate(self.position1), _coordinate(self.position2)]


class NextPositionRequestModel(BaseModel):
    start: Optional[CoordinateModel] = None
    angle: Optional[float] = None

    def start_point(self) -> Optional[Coordinate]:
        return _coordinate(self.start)


class RegionModel(BaseModel):
    name: Optional[str] = None
    vertices: Optional[List[CoordinateModel]] = None

    def vertex_points(self) -> Optional[List[Coordinate]]:
        if self.vertices is None:
            return None
        points = [vertex.to_domain() for vertex in self.vertices]
        if any(point is None for point in points):
            return None
        return points


class IsInRegionRequestModel(BaseModel):
    position: Optional[CoordinateModel] = None
    region: Optional[RegionModel] = None


class QueryConditionModel(BaseModel):
    attribute: str
    operator: str
    value: str

    def to_domain(self) -> QueryCondition:
        return QueryCondition(attribute=self.attribute, operator=self.operator, value=self.value)


class RequirementsModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    capacity: Optional[float] = None
    cooling: Optional[bool] = False
    heating: Optional[bool] = False
    max_cost: Optional[float] = Field(None, alias="maxCost")

    def to_domain(self) -> Requirements:
        return Requirements(
            capacity=self.capacity,
            cooling=bool(self.cooling),
            heating=bool(self.heating),
            max_cost=self.max_cost,
        )


class DeliveryRequestModel(BaseModel):
    """A medical dispatch record as posted by callers."""

    id: Optional[int] = None
    date: Optional[dt.date] = None
    time: Optional[dt.time] = None
    delivery: Optional[CoordinateModel] = None
    requirements: Optional[RequirementsModel] = None

    def to_domain(self) -> DeliveryRequest:
        return DeliveryRequest(
            delivery_id=self.id,
            date=self.date,
            time=self.time,
            delivery=_coordinate(self.delivery),
            requirements=None if self.requirements is None else self.requirements.to_domain(),
        )
