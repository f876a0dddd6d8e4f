"""Mini README: Shape checks for incoming delivery batches.

``request_problem`` explains why a single record cannot be planned and
``batch_problem`` reports the first such record in a batch. Callers turn any
problem into the canonical empty plan before planning starts.
"""

from __future__ import annotations

import math
from typing import Optional, Sequence

from ..geometry import is_valid_coordinate
from .models import DeliveryRequest


def request_problem(request: Optional[DeliveryRequest]) -> Optional[str]:
    if request is None:
        return "missing record"
    if request.delivery_id is None:
        return "missing id"
    if request.delivery is None or not is_valid_coordinate(request.delivery):
        return f"delivery {request.delivery_id} has no valid target coordinate"
    requirements = request.requirements
    if requirements is None:
        return f"delivery {request.delivery_id} has no requirements"
    if requirements.capacity is None or not math.isfinite(requirements.capacity) or requirements.capacity < 0:
        return f"delivery {request.delivery_id} has no valid capacity"
    if requirements.cooling and requirements.heating:
        return f"delivery {request.delivery_id} requires both cooling and heating"
    if requirements.max_cost is not None and not math.isfinite(requirements.max_cost):
        return f"delivery {request.delivery_id} has a non-finite cost ceiling"
    if request.time is not None and request.date is None:
        return f"delivery {request.delivery_id} has a time but no date"
    return None


def batch_problem(requests: Optional[Sequence[DeliveryRequest]]) -> Optional[str]:
    if not requests:
        return "empty batch"
    for request in requests:
        problem = request_problem(request)
        if problem is not None:
            return problem
    return None
