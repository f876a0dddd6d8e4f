"""Mini README: GeoJSON rendering helpers for MedDrone routes.

The helpers turn planned routes into GeoJSON ``Feature``/``FeatureCollection``
dictionaries that map viewers (geojson.io, Leaflet) can display directly.
They are kept free of web framework imports so the CLI can reuse them.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List, Optional

from ..geometry import Coordinate
from ..route_planning import SingleRoute


def line_string(path: Iterable[Coordinate]) -> Dict[str, Any]:
    return {
        "type": "LineString",
        "coordinates": [[point.lng, point.lat] for point in path],
    }


def route_feature(route: SingleRoute) -> Dict[str, Any]:
    """A LineString feature tagged with the drone flying it."""

    return {
        "type": "Feature",
        "properties": {"droneId": route.drone_id},
        "geometry": line_string(route.path),
    }


def feature_collection(features: Iterable[Dict[str, Any]]) -> Dict[str, Any]:
    return {"type": "FeatureCollection", "features": list(features)}


def route_collection(route: Optional[SingleRoute]) -> Dict[str, Any]:
    """Collection holding the route, or no features when there is none."""

    features: List[Dict[str, Any]] = [] if route is None else [route_feature(route)]
    return feature_collection(features)
