"""Unit tests for the core configuration module."""

import json

import pytest
from pydantic import ValidationError

from core.config import DEFAULT_MODEL_MAPPING, ServiceConfig, Settings, get_settings
from services.errors import ConfigurationError


def test_settings_defaults():
    """Test that Settings initializes with expected defaults."""
    settings = Settings()

    assert settings.docintel_endpoint is None
    assert settings.docintel_api_key is None
    assert settings.docintel_api_version == "2023-07-31"
    assert settings.docintel_api_path == "formrecognizer"
    assert settings.docintel_content_type == "application/octet-stream"
    assert settings.poll_max_ticks == 30
    assert settings.default_model == "mixed"
    assert settings.fallback_model_id == "prebuilt-read"
    assert settings.model_mapping == DEFAULT_MODEL_MAPPING


def test_settings_with_env_vars(monkeypatch):
    """Test that Settings properly loads values from environment variables."""
    monkeypatch.setenv("DOCINTEL_ENDPOINT", "https://example.test")
    monkeypatch.setenv("POLL_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("POLL_MAX_TICKS", "10")
    monkeypatch.setenv("MODEL_MAPPING", json.dumps({"contract": "custom-contract-v1"}))

    settings = Settings()

    assert settings.docintel_endpoint == "https://example.test"
    assert settings.poll_interval_seconds == 0.5
    assert settings.poll_max_ticks == 10
    assert settings.resolve_model_id("contract") == "custom-contract-v1"


def test_invalid_poll_budget(monkeypatch):
    monkeypatch.setenv("POLL_MAX_TICKS", "0")
    with pytest.raises(ValidationError):
        Settings()


@pytest.mark.parametrize(
    ("selector", "expected"),
    [
        ("invoice", "prebuilt-invoice"),
        ("business-card", "prebuilt-businessCard"),
        ("handwriting", "prebuilt-read"),
        (" layout ", "prebuilt-layout"),
        ("prebuilt-tax.us.w2", "prebuilt-tax.us.w2"),
        ("unknown", "prebuilt-read"),
        (None, "prebuilt-read"),
    ],
)
def test_resolve_model_id(selector, expected):
    assert Settings().resolve_model_id(selector) == expected


def test_service_config_requires_endpoint_and_key(monkeypatch):
    with pytest.raises(ConfigurationError, match="DOCINTEL_ENDPOINT"):
        ServiceConfig.from_settings(Settings())

    monkeypatch.setenv("DOCINTEL_ENDPOINT", "https://example.test")
    with pytest.raises(ConfigurationError, match="DOCINTEL_API_KEY"):
        ServiceConfig.from_settings(Settings())


def test_service_config_from_settings(configured):
    config = ServiceConfig.from_settings(configured)
    assert config.endpoint == "https://example.cognitiveservices.azure.com/"
    assert config.api_key.get_secret_value() == "secret-key"
    assert config.timeout == 30.0


def test_api_key_is_masked_when_dumped(configured):
    dumped = configured.model_dump(mode="json")
    assert dumped["docintel_api_key"] == "**********"
    assert "secret-key" not in repr(configured)


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
