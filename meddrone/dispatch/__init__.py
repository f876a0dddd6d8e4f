"""Mini README: Service layer tying reference data to the planner.

Exports ``DispatchService``, the single object the HTTP interface and the CLI
talk to for planning and fleet queries.
"""

from .service import DispatchService

__all__ = ["DispatchService"]
