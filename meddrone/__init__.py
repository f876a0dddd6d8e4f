"""Mini README: Core package initializer for the MedDrone dispatch engine.

MedDrone plans medical delivery flights for a fleet of capability-limited
drones flying from several service points around no-fly zones. Subpackages:
``geometry`` (grid and polygon maths), ``route_planning`` (A* search and the
greedy flight planner), ``fleet`` (reference data models and queries),
``reference`` (ILP REST client), ``dispatch`` (service facade), ``interface``
(FastAPI app) and ``utils`` (GeoJSON rendering).
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
