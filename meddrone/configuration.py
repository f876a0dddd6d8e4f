"""Mini README: Centralised configuration for the MedDrone dispatch service.

Structure:
    * MeddroneSettings - pydantic-settings model describing runtime options.
    * get_settings - cached accessor for environment-aware settings.

Usage:
    Import ``get_settings`` to read the ILP reference data endpoint, HTTP
    client timeouts, the path search budget and the web interface binding.
    Every option can be overridden with a ``MEDDRONE_`` environment variable;
    the reference data endpoint also honours the legacy ``ILP_ENDPOINT``.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_ILP_ENDPOINT = "https://ilp-rest-2025-bvh6e9hschfagrgy.ukwest-01.azurewebsites.net"


class MeddroneSettings(BaseSettings):
    """Runtime configuration for the dispatch service."""

    model_config = SettingsConfigDict(
        env_prefix="MEDDRONE_",
        env_file=".env",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    environment: str = Field(
        "development",
        description="Environment label controlling debug toggles and logging levels.",
    )
    ilp_endpoint: str = Field(
        DEFAULT_ILP_ENDPOINT,
        validation_alias=AliasChoices("MEDDRONE_ILP_ENDPOINT", "ILP_ENDPOINT", "ilp_endpoint"),
        description="Base URL of the REST service providing drones, service points and no-fly zones.",
    )
    request_timeout_seconds: float = Field(
        10.0,
        gt=0,
        description="Read timeout applied to every reference data request.",
    )
    request_retries: int = Field(
        2,
        ge=0,
        description="Retries for transient reference data failures (429/5xx).",
    )
    expansion_cap: int = Field(
        200_000,
        ge=1,
        description=(
            "Maximum number of A* node expansions before a path is declared unreachable. "
            "An exhausted search costs roughly 30 microseconds per expansion, so the default "
            "bounds an unreachable goal to a few seconds of request time."
        ),
    )
    log_level: str = Field("INFO", description="Root log level name.")
    interface_host: str = Field(
        "0.0.0.0",
        description="Network interface for the HTTP service to bind to.",
    )
    interface_port: int = Field(
        8080,
        description="Default port the HTTP service exposes.",
        ge=1,
        le=65535,
    )

    @field_validator("ilp_endpoint")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        """Keep path concatenation in the client unambiguous."""

        value = value.strip()
        if not value:
            raise ValueError("ilp_endpoint must not be blank")
        return value.rstrip("/")


@lru_cache()
def get_settings() -> MeddroneSettings:
    """Return cached settings, ensuring consistent configuration across modules."""

    return MeddroneSettings()
