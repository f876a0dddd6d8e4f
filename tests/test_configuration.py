"""Mini README: Tests for settings and logging helpers."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from meddrone.configuration import DEFAULT_ILP_ENDPOINT, MeddroneSettings, get_settings
from meddrone.logging_utils import _resolve_level
from meddrone.route_planning import DEFAULT_EXPANSION_CAP


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in ("MEDDRONE_ILP_ENDPOINT", "ILP_ENDPOINT", "MEDDRONE_EXPANSION_CAP"):
        monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_defaults() -> None:
    """Ensure settings fall back to the documented defaults."""

    settings = MeddroneSettings()
    assert settings.ilp_endpoint == DEFAULT_ILP_ENDPOINT
    assert settings.expansion_cap == 200_000
    assert settings.expansion_cap < DEFAULT_EXPANSION_CAP
    assert "per expansion" in MeddroneSettings.model_fields["expansion_cap"].description
    assert settings.request_retries == 2


def test_legacy_endpoint_variable_is_honoured(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure the unprefixed ILP_ENDPOINT variable still configures the client."""

    monkeypatch.setenv("ILP_ENDPOINT", "https://ilp.example/")
    assert MeddroneSettings().ilp_endpoint == "https://ilp.example"


def test_prefixed_variables_override(monkeypatch: pytest.MonkeyPatch) -> None:
    """Ensure MEDDRONE_ variables override defaults through the cached settings."""

    monkeypatch.setenv("MEDDRONE_ILP_ENDPOINT", "https://other.example")
    monkeypatch.setenv("MEDDRONE_EXPANSION_CAP", "5000")
    settings = get_settings()
    assert settings.ilp_endpoint == "https://other.example"
    assert settings.expansion_cap == 5000


def test_invalid_values_are_rejected() -> None:
    """Ensure blank endpoints and non-positive caps fail validation."""

    with pytest.raises(ValidationError):
        MeddroneSettings(ilp_endpoint="   ")
    with pytest.raises(ValidationError):
        MeddroneSettings(expansion_cap=0)


def test_log_level_names_resolve() -> None:
    """Ensure log level names and numbers both resolve."""

    assert _resolve_level("debug") == logging.DEBUG
    assert _resolve_level(logging.WARNING) == logging.WARNING
    with pytest.raises(ValueError):
        _resolve_level("chatty")
