"""Mini README: Entry point CLI for the MedDrone dispatch centre.

Commands:
    * run - start the FastAPI application under uvicorn.
    * plan - plan a JSON batch of delivery requests and print the result,
      either against the live ILP service or an offline reference snapshot.

Logging is configured from ``MEDDRONE_LOG_LEVEL`` before any command runs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import typer
import uvicorn

from meddrone.configuration import get_settings
from meddrone.dispatch import DispatchService
from meddrone.fleet import parse_requests
from meddrone.logging_utils import configure_root_logger
from meddrone.reference import InMemoryProvider, ReferenceData

cli = typer.Typer(help="Launch the MedDrone dispatch centre or plan batches offline.")


@cli.command()
def run(
    host: str = typer.Option(None, help="Host interface to bind."),
    port: int = typer.Option(None, help="Port to listen on."),
    production: bool = typer.Option(
        False, help="Use production server settings (disable auto-reload)."
    ),
) -> None:
    """Start the FastAPI application using uvicorn."""

    settings = get_settings()
    effective_host = host or settings.interface_host
    effective_port = port or settings.interface_port
    configure_root_logger(settings.log_level)

    # Browsers cannot open the 0.0.0.0 sentinel, so point operators at localhost.
    browser_host = "127.0.0.1" if effective_host in {"0.0.0.0", "::"} else effective_host
    typer.echo(
        f"Starting MedDrone on {effective_host}:{effective_port} "
        f"(reference data: {settings.ilp_endpoint}).\n"
        f"API root: http://{browser_host}:{effective_port}/api/v1"
    )
    uvicorn.run(
        "meddrone.interface.web_app:create_application",
        host=effective_host,
        port=effective_port,
        factory=True,
        reload=not production,
    )


@cli.command()
def plan(
    requests_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="JSON list of delivery requests."),
    reference: Optional[Path] = typer.Option(
        None,
        exists=True,
        dir_okay=False,
        help="Offline reference snapshot (drones, servicePoints, restrictedAreas, dronesForServicePoints).",
    ),
    geojson: bool = typer.Option(False, help="Print a GeoJSON FeatureCollection instead of the plan."),
) -> None:
    """Plan a batch of delivery requests and print the JSON result."""

    settings = get_settings()
    configure_root_logger(settings.log_level)

    payload = json.loads(requests_file.read_text(encoding="utf-8"))
    if not isinstance(payload, list):
        raise typer.BadParameter("Requests file must hold a JSON list", param_hint="REQUESTS_FILE")
    try:
        requests = parse_requests(payload)
    except ValueError as error:
        raise typer.BadParameter(str(error), param_hint="REQUESTS_FILE") from error

    provider = InMemoryProvider(ReferenceData.from_file(reference)) if reference else None
    service = DispatchService(provider, settings=settings)
    if geojson:
        output = service.plan_geojson(requests)
    else:
        output = service.plan(requests).as_dict()
    typer.echo(json.dumps(output, indent=2))


if __name__ == "__main__":
    cli()
