"""Mini README: HTTP client for the ILP reference data service.

Structure:
    * ReferenceDataUnavailableError - transport or payload failure.
    * IlpClient - fetches drones, service points, restricted areas and
      per-service-point availability, returning parsed fleet models.

The client keeps one ``requests.Session`` with a urllib3 ``Retry`` adapter so
transient 429/5xx responses are retried before a planning call gives up.
"""

from __future__ import annotations

from typing import Any, Callable, List, Optional, TypeVar

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from ..configuration import MeddroneSettings, get_settings
from ..fleet import (
    Drone,
    InvalidReferenceDataError,
    RestrictedArea,
    ServicePoint,
    ServicePointDrones,
)
from ..logging_utils import get_logger
from .snapshot import ReferenceData

LOGGER = get_logger(__name__)

ModelT = TypeVar("ModelT")


class ReferenceDataUnavailableError(RuntimeError):
    """The reference service could not be reached or returned bad data."""


def _session_with_retries(retries: int) -> requests.Session:
    session = requests.Session()
    retry = Retry(
        total=retries,
        backoff_factor=0.3,
        status_forcelist=(429, 500, 502, 503, 504),
        allowed_methods=frozenset({"GET"}),
        raise_on_status=False,
    )
    session.mount("http://", HTTPAdapter(max_retries=retry))
    session.mount("https://", HTTPAdapter(max_retries=retry))
    return session


class IlpClient:
    """Read-only access to the ILP REST endpoints."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        retries: int = 2,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or _session_with_retries(retries)
        LOGGER.debug("Initialised IlpClient for %s (timeout=%ss)", self.base_url, timeout)

    @classmethod
    def from_settings(cls, settings: Optional[MeddroneSettings] = None) -> "IlpClient":
        settings = settings or get_settings()
        return cls(
            settings.ilp_endpoint,
            timeout=settings.request_timeout_seconds,
            retries=settings.request_retries,
        )

    @property
    def endpoint(self) -> str:
        return self.base_url

    def _get_list(self, path: str, parse: Callable[[Any], ModelT]) -> List[ModelT]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(url, timeout=self.timeout)
            response.raise_for_status()
            payload = response.json()
        except (requests.RequestException, ValueError) as error:
            LOGGER.error("Reference data request %s failed: %s", url, error)
            raise ReferenceDataUnavailableError(f"GET {url} failed: {error}") from error
        if payload is None:
            return []
        if not isinstance(payload, list):
            raise ReferenceDataUnavailableError(f"GET {url} returned {type(payload).__name__}, expected a list")
        try:
            return [parse(item) for item in payload if item is not None]
        except InvalidReferenceDataError:
            raise
        except (KeyError, TypeError, ValueError) as error:
            raise InvalidReferenceDataError(f"GET {url} returned a malformed record: {error}") from error

    def get_drones(self) -> List[Drone]:
        return self._get_list("/drones", Drone.from_dict)

    def get_service_points(self) -> List[ServicePoint]:
        return self._get_list("/service-points", ServicePoint.from_dict)

    def get_restricted_areas(self) -> List[RestrictedArea]:
        return self._get_list("/restricted-areas", RestrictedArea.from_dict)

    def get_drones_for_service_points(self) -> List[ServicePointDrones]:
        return self._get_list("/drones-for-service-points", ServicePointDrones.from_dict)

    def fetch_reference_data(self) -> ReferenceData:
        """Fetch a fresh snapshot of all four collections."""

        snapshot = ReferenceData.build(
            drones=self.get_drones(),
            service_points=self.get_service_points(),
            restricted_areas=self.get_restricted_areas(),
            stationing=self.get_drones_for_service_points(),
        )
        LOGGER.info(
            "Fetched reference data: %s drones, %s service points, %s restricted areas",
            len(snapshot.drones),
            len(snapshot.service_points),
            len(snapshot.restricted_areas),
        )
        return snapshot
