"""Mini README: Utility helpers for MedDrone.

Currently exports the GeoJSON rendering helpers used by the HTTP interface
and the CLI to publish planned routes.
"""

from .geojson import feature_collection, line_string, route_collection, route_feature

__all__ = ["feature_collection", "line_string", "route_collection", "route_feature"]
