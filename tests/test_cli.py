"""Mini README: Tests for the dispatch centre CLI.

Runs the ``plan`` command offline against a reference snapshot file.
"""

from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from main_dispatch_centre import cli

REFERENCE = {
    "drones": [
        {
            "id": "1",
            "name": "Falcon",
            "capability": {
                "cooling": False,
                "heating": False,
                "capacity": 4.0,
                "maxMoves": 2000,
                "costPerMove": 0.01,
                "costInitial": 4.3,
                "costFinal": 6.5,
            },
        }
    ],
    "servicePoints": [{"id": 1, "name": "Appleton Tower", "location": {"lng": -3.1863, "lat": 55.9446}}],
    "restrictedAreas": [],
    "dronesForServicePoints": [
        {
            "servicePointId": 1,
            "drones": [{"id": "1", "availability": [{"dayOfWeek": "MONDAY", "from": "08:00:00", "until": "18:00:00"}]}],
        }
    ],
}

REQUESTS = [
    {
        "id": 12,
        "date": "2025-01-06",
        "time": "09:30",
        "delivery": {"lng": -3.18568, "lat": 55.9446},
        "requirements": {"capacity": 1.5},
    }
]


def _write_inputs(tmp_path):
    requests_path = tmp_path / "requests.json"
    reference_path = tmp_path / "reference.json"
    requests_path.write_text(json.dumps(REQUESTS), encoding="utf-8")
    reference_path.write_text(json.dumps(REFERENCE), encoding="utf-8")
    return requests_path, reference_path


def test_plan_prints_plan_json(tmp_path: Path) -> None:
    """Ensure the offline plan command prints the plan as camelCase JSON."""

    requests_path, reference_path = _write_inputs(tmp_path)
    result = CliRunner().invoke(cli, ["plan", str(requests_path), "--reference", str(reference_path)])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["dronePaths"][0]["droneId"] == "1"
    assert [item["deliveryId"] for item in payload["dronePaths"][0]["deliveries"]] == [12, None]


def test_plan_prints_geojson(tmp_path: Path) -> None:
    """Ensure the geojson flag renders the plan as a FeatureCollection."""

    requests_path, reference_path = _write_inputs(tmp_path)
    result = CliRunner().invoke(
        cli, ["plan", str(requests_path), "--reference", str(reference_path), "--geojson"]
    )
    assert result.exit_code == 0, result.output
    collection = json.loads(result.stdout)
    assert collection["features"][0]["properties"] == {"droneId": "1"}


def test_plan_rejects_malformed_request_time(tmp_path: Path) -> None:
    """Ensure an unparsable request time stops the command before planning."""

    requests_path, reference_path = _write_inputs(tmp_path)
    requests_path.write_text(json.dumps([dict(REQUESTS[0], time="25:99")]), encoding="utf-8")
    result = CliRunner().invoke(cli, ["plan", str(requests_path), "--reference", str(reference_path)])
    assert result.exit_code != 0
    assert "dronePaths" not in result.stdout
