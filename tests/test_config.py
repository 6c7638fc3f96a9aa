"""Unit tests for olp_sdk.core.config settings loading."""

from __future__ import annotations

import pydantic
import pytest

from olp_sdk import __version__
from olp_sdk.core import config


def test_defaults() -> None:
    """Test the values used when nothing is configured."""
    settings = config.Settings(_env_file=None)
    assert settings.environment == "here"
    assert settings.cache_capacity_bytes == 2097152
    assert settings.lookup_cache_version == "v1"
    assert settings.default_max_age_s == 3600
    assert settings.request_timeout_s == 15.0
    assert settings.user_agent == f"OLP-PY-SDK/{__version__}"


def test_environment_variables_override_defaults(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    """Test that OLP_-prefixed variables are picked up."""
    monkeypatch.setenv("OLP_ENVIRONMENT", "here-dev")
    monkeypatch.setenv("OLP_CACHE_CAPACITY_BYTES", "4194304")
    monkeypatch.setenv("OLP_REQUEST_TIMEOUT_S", "30")
    settings = config.Settings(_env_file=None)
    assert settings.environment == "here-dev"
    assert settings.cache_capacity_bytes == 4194304
    assert settings.request_timeout_s == 30.0


def test_get_settings_is_cached(monkeypatch: pytest.MonkeyPatch) -> None:
    """Test that get_settings returns one instance until cleared."""
    first = config.get_settings()
    assert config.get_settings() is first

    monkeypatch.setenv("OLP_ENVIRONMENT", "local")
    assert config.get_settings().environment == first.environment
    config.get_settings.cache_clear()
    assert config.get_settings().environment == "local"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("cache_capacity_bytes", -1),
        ("request_timeout_s", 0),
        ("default_max_age_s", -5),
    ],
)
def test_invalid_values_are_rejected(field: str, value: int) -> None:
    """Test that out-of-range values fail validation."""
    with pytest.raises(pydantic.ValidationError):
        config.Settings(_env_file=None, **{field: value})
