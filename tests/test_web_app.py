"""Mini README: Tests for the FastAPI dispatch centre.

Uses ``TestClient`` against an application wired to an in-memory reference
snapshot, covering geometry services, fleet queries, planning and the error
mapping for bad input, unknown drones and reference data outages.
"""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from meddrone.configuration import MeddroneSettings
from meddrone.dispatch import DispatchService
from meddrone.interface import create_application
from meddrone.reference import InMemoryProvider, ReferenceDataUnavailableError

from builders import HOME, TEST_EXPANSION_CAP, make_drone, snapshot, square, offset

API = "/api/v1"


def _point(east=0.0, north=0.0):
    point = offset(east=east, north=north)
    return {"lng": point.lng, "lat": point.lat}


def _dispatch(date="2025-01-06", time="10:00", **overrides):
    payload = {
        "id": 1,
        "date": date,
        "time": time,
        "delivery": _point(east=0.00062),
        "requirements": {"capacity": 1.0, "cooling": False, "heating": False},
    }
    payload.update(overrides)
    return payload


@pytest.fixture()
def client():
    data = snapshot(
        drones=[make_drone("1", cooling=True, heating=False), make_drone("2", cooling=False, capacity=12.0)],
        restricted_areas=[square(offset(east=0.003), 0.0005)],
    )
    service = DispatchService(
        InMemoryProvider(data),
        expansion_cap=TEST_EXPANSION_CAP,
        settings=MeddroneSettings(),
    )
    return TestClient(create_application(service))


class OfflineProvider:
    endpoint = "offline"

    def fetch_reference_data(self):
        raise ReferenceDataUnavailableError("ILP service unreachable")


def test_index_and_uid(client: TestClient) -> None:
    """Ensure the banner and service identifier are served."""

    assert "in-memory" in client.get("/").text
    response = client.get(f"{API}/uid")
    assert response.status_code == 200
    assert response.json() == "meddrone-dispatch"


def test_distance_and_proximity(client: TestClient) -> None:
    """Ensure distance and proximity endpoints answer JSON scalars."""

    body = {"position1": _point(), "position2": _point(east=0.0003, north=0.0004)}
    assert client.post(f"{API}/distanceTo", json=body).json() == pytest.approx(0.0005)
    assert client.post(f"{API}/isCloseTo", json=body).json() is False
    near = {"position1": _point(), "position2": _point(east=0.0001)}
    assert client.post(f"{API}/isCloseTo", json=near).json() is True


def test_invalid_geometry_is_bad_request(client: TestClient) -> None:
    """Ensure invalid geometry input answers 400."""

    assert client.post(f"{API}/distanceTo", json={"position1": _point()}).status_code == 400
    bad = {"position1": {"lng": 200.0, "lat": 0.0}, "position2": _point()}
    assert client.post(f"{API}/isCloseTo", json=bad).status_code == 400
    assert client.post(f"{API}/nextPosition", json={"start": _point(), "angle": 10}).status_code == 400


def test_next_position(client: TestClient) -> None:
    """Ensure the next position endpoint moves one step."""

    response = client.post(f"{API}/nextPosition", json={"start": _point(), "angle": 90})
    assert response.status_code == 200
    assert response.json()["lat"] == pytest.approx(HOME.lat + 0.00015)
    assert response.json()["lng"] == pytest.approx(HOME.lng)


def test_is_in_region(client: TestClient) -> None:
    """Ensure region containment answers and rejects unclosed regions."""

    region = {
        "name": "box",
        "vertices": [_point(), _point(east=0.001), _point(east=0.001, north=0.001), _point(north=0.001), _point()],
    }
    inside = client.post(f"{API}/isInRegion", json={"position": _point(0.0005, 0.0005), "region": region})
    assert inside.json() is True
    outside = client.post(f"{API}/isInRegion", json={"position": _point(0.002, 0.0005), "region": region})
    assert outside.json() is False
    region["vertices"] = region["vertices"][:-1]
    unclosed = client.post(f"{API}/isInRegion", json={"position": _point(0.0005, 0.0005), "region": region})
    assert unclosed.status_code == 400


def test_fleet_queries(client: TestClient) -> None:
    """Ensure fleet query endpoints answer identifiers and details."""

    assert client.get(f"{API}/dronesWithCooling/true").json() == ["1"]
    assert client.get(f"{API}/droneDetails/2").json()["capability"]["capacity"] == 12.0
    assert client.get(f"{API}/droneDetails/99").status_code == 404
    assert client.get(f"{API}/queryAsPath/capacity/12").json() == ["2"]
    conditions = [{"attribute": "capacity", "operator": ">", "value": "10"}]
    assert client.post(f"{API}/query", json=conditions).json() == ["2"]


def test_query_available_drones(client: TestClient) -> None:
    """Ensure available drones are matched to batch needs."""

    chilled = _dispatch(requirements={"capacity": 1.0, "cooling": True})
    assert client.post(f"{API}/queryAvailableDrones", json=[chilled]).json() == ["1"]
    heavy = _dispatch(requirements={"capacity": 10.0})
    assert client.post(f"{API}/queryAvailableDrones", json=[heavy]).json() == ["2"]


def test_calc_delivery_path(client: TestClient) -> None:
    """Ensure planning answers a plan with a return leg."""

    response = client.post(f"{API}/calcDeliveryPath", json=[_dispatch()])
    assert response.status_code == 200
    payload = response.json()
    assert payload["totalMoves"] > 0
    assert payload["dronePaths"][0]["deliveries"][0]["deliveryId"] == 1
    assert payload["dronePaths"][0]["deliveries"][-1]["deliveryId"] is None


def test_calc_delivery_path_returns_empty_plan_for_bad_batches(client: TestClient) -> None:
    """Ensure bad batches answer the empty plan."""

    empty = {"totalCost": 0.0, "totalMoves": 0, "dronePaths": []}
    assert client.post(f"{API}/calcDeliveryPath", json=[]).json() == empty
    no_requirements = _dispatch(requirements=None)
    assert client.post(f"{API}/calcDeliveryPath", json=[no_requirements]).json() == empty
    blocked = _dispatch(delivery=_point(east=0.003))
    assert client.post(f"{API}/calcDeliveryPath", json=[blocked]).json() == empty


def test_calc_delivery_path_as_geojson(client: TestClient) -> None:
    """Ensure plans render as GeoJSON routes."""

    collection = client.post(f"{API}/calcDeliveryPathAsGeoJson", json=[_dispatch()]).json()
    assert collection["type"] == "FeatureCollection"
    assert collection["features"][0]["geometry"]["type"] == "LineString"
    undated = _dispatch(date=None, time=None)
    assert client.post(f"{API}/calcDeliveryPathAsGeoJson", json=[undated]).json()["features"] == []


def test_reference_outage_maps_to_bad_gateway() -> None:
    """Ensure reference data outages answer 502."""

    service = DispatchService(OfflineProvider(), settings=MeddroneSettings())
    offline = TestClient(create_application(service))
    response = offline.post(f"{API}/calcDeliveryPath", json=[_dispatch()])
    assert response.status_code == 502
    assert "unreachable" in response.json()["detail"]
