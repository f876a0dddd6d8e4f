"""Mini README: Tests for fleet models, availability and roster queries.

Validates payload parsing, the weekly availability rules, attribute queries
with their operators, the whole-batch availability query and request shape
checks.
"""

from __future__ import annotations

from datetime import time
from typing import List

import pytest

from meddrone.fleet import (
    AvailabilityWindow,
    DeliveryRequest,
    Drone,
    InvalidReferenceDataError,
    QueryCondition,
    ServicePointDrones,
    batch_problem,
    drones_with_cooling,
    is_available_at,
    query,
    query_as_path,
    query_available_drones,
    request_problem,
)

from builders import MONDAY, TUESDAY, make_drone, offset, request, service_point, station

ROSTER = [
    make_drone("1", capacity=4.0, max_moves=1000, cooling=True, heating=False, name="Falcon"),
    make_drone("2", capacity=12.0, max_moves=2000, cooling=False, heating=True, name="Heron"),
    make_drone("3", capacity=8.0, max_moves=1500, cooling=True, heating=True, name="Kite"),
]


def test_drone_payload_round_trips_camel_case() -> None:
    """Ensure drone payloads parse from and render back to camelCase."""

    payload = {
        "id": "7",
        "name": "Swift",
        "capability": {
            "cooling": True,
            "heating": False,
            "capacity": 4.0,
            "maxMoves": 2000,
            "costPerMove": 0.01,
            "costInitial": 4.3,
            "costFinal": 6.5,
        },
    }
    drone = Drone.from_dict(payload)
    assert drone.capability.max_moves == 2000
    assert drone.as_dict() == payload
    with pytest.raises(InvalidReferenceDataError):
        Drone.from_dict({"name": "nameless"})


def test_stationing_payload_parses_windows() -> None:
    """Ensure stationing payloads parse weekly availability windows."""

    entry = ServicePointDrones.from_dict(
        {
            "servicePointId": 1,
            "drones": [
                {"id": "1", "availability": [{"dayOfWeek": "monday", "from": "09:00:00", "until": "17:00:00"}]}
            ],
        }
    )
    window = entry.find("1").windows[0]
    assert window.day_of_week == "MONDAY"
    assert window.covers(MONDAY, time(17, 0))
    assert entry.find("missing") is None


def test_request_payload_tolerates_missing_fields() -> None:
    """Ensure dispatch records with missing pieces still parse."""

    parsed = DeliveryRequest.from_dict(
        {"id": 3, "date": "2025-01-06", "time": "10:30", "requirements": {"capacity": 0.75, "maxCost": 13.5}}
    )
    assert parsed.date == MONDAY
    assert parsed.time == time(10, 30)
    assert parsed.delivery is None
    assert parsed.requirements.max_cost == 13.5


def test_request_payload_rejects_malformed_time() -> None:
    """Ensure an out-of-range request time raises instead of being dropped."""

    with pytest.raises(ValueError):
        DeliveryRequest.from_dict({"id": 4, "date": "2025-01-06", "time": "25:99"})
    assert DeliveryRequest.from_dict({"id": 5, "date": "2025-01-06"}).time is None


def test_availability_rules() -> None:
    """Ensure weekday and inclusive time bounds decide availability."""

    windows = [AvailabilityWindow("MONDAY", time(9, 0), time(12, 0))]
    assert is_available_at(windows, None, None)
    assert is_available_at(windows, MONDAY, None)
    assert is_available_at(windows, MONDAY, time(9, 0))
    assert not is_available_at(windows, MONDAY, time(12, 1))
    assert not is_available_at(windows, TUESDAY, None)
    assert not is_available_at([], MONDAY, None)
    assert not is_available_at(windows, None, time(10, 0))


def test_cooling_filter() -> None:
    """Ensure the cooling filter returns matching drone identifiers."""

    assert drones_with_cooling(ROSTER, True) == ["1", "3"]
    assert drones_with_cooling(ROSTER, False) == ["2"]


@pytest.mark.parametrize(
    "attribute, value, expected",
    [
        ("name", "heron", ["2"]),
        ("capacity", "8", ["3"]),
        ("maxMoves", "1000", ["1"]),
        ("heating", "true", ["2", "3"]),
        ("id", "3", ["3"]),
        ("capacity", "lots", []),
        ("colour", "red", []),
    ],
)
def test_query_as_path(attribute: str, value: str, expected: List[str]) -> None:
    """Ensure single attribute queries compare by attribute type."""

    assert query_as_path(ROSTER, attribute, value) == expected


def test_query_combines_conditions() -> None:
    """Ensure every condition must hold for a drone to match."""

    conditions = [
        QueryCondition("capacity", ">", "5"),
        QueryCondition("cooling", "=", "true"),
    ]
    assert query(ROSTER, conditions) == ["3"]
    assert query(ROSTER, [QueryCondition("name", "!=", "Kite")]) == ["1", "2"]
    assert query(ROSTER, [QueryCondition("maxMoves", "<", "1500")]) == ["1"]
    assert query(ROSTER, [QueryCondition("name", "<", "Kite")]) == []
    assert query(ROSTER, [QueryCondition("capacity", "~", "5")]) == []


def _availability_setup():
    points = [service_point(1)]
    stationing = [station(1, ["1", "2", "3"])]
    return points, stationing


def test_available_drones_cover_capacity_and_cargo() -> None:
    """Ensure available drones carry the batch capacity and cargo needs."""

    points, stationing = _availability_setup()
    batch = [request(1, offset(east=0.001), capacity=3.0), request(2, offset(north=0.001), capacity=3.0)]
    assert query_available_drones(ROSTER, points, stationing, batch) == ["2", "3"]
    cooled = [request(1, offset(east=0.001), capacity=1.0, cooling=True)]
    assert query_available_drones(ROSTER, points, stationing, cooled) == ["1", "3"]


def test_available_drones_respect_windows_and_ceilings() -> None:
    """Ensure availability windows and cost ceilings exclude drones."""

    points = [service_point(1)]
    monday_only = [AvailabilityWindow("MONDAY", time(9, 0), time(17, 0))]
    stationing = [station(1, ["1", "2"], monday_only), station(1, ["3"])]
    tuesday = [request(1, offset(east=0.001), day=TUESDAY, at=time(10, 0))]
    assert query_available_drones(ROSTER, points, stationing, tuesday) == ["3"]

    # Fixed costs alone are 10.8, so a ceiling of 10 rules everyone out.
    capped = [request(1, offset(east=0.001), max_cost=10.0)]
    assert query_available_drones(ROSTER, points, stationing, capped) == []
    generous = [request(1, offset(east=0.001), max_cost=20.0)]
    assert query_available_drones(ROSTER, points, stationing, generous) == ["1", "2", "3"]


def test_available_drones_reject_incomplete_records() -> None:
    """Ensure incomplete dispatch records yield no available drones."""

    points, stationing = _availability_setup()
    incomplete = request(1, offset(east=0.001))
    incomplete.delivery = None
    assert query_available_drones(ROSTER, points, stationing, [incomplete]) == []
    assert query_available_drones(ROSTER, points, stationing, []) == []


def test_request_problems_are_explained() -> None:
    """Ensure malformed records produce a readable reason."""

    good = request(1, offset(east=0.001))
    assert request_problem(good) is None
    assert batch_problem([good]) is None
    assert batch_problem([]) == "empty batch"

    both = request(2, offset(east=0.001), cooling=True, heating=True)
    assert "cooling and heating" in request_problem(both)
    timed_only = request(3, offset(east=0.001), day=None, at=time(9, 0))
    assert "time but no date" in request_problem(timed_only)
    anonymous = request(4, offset(east=0.001))
    anonymous.delivery_id = None
    assert request_problem(anonymous) == "missing id"
    assert batch_problem([good, both]) == request_problem(both)
