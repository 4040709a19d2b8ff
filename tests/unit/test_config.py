"""Unit tests for error translator settings."""

from __future__ import annotations

import pytest

from error_translator.core.config import ErrorSettings
from error_translator.core.config import get_error_settings


def test_defaults_without_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("ERROR_TRANSLATOR_LOG_LEVEL", raising=False)
    monkeypatch.delenv("ERROR_TRANSLATOR_BINDING_STATUS_CODE", raising=False)
    monkeypatch.delenv("ERROR_TRANSLATOR_VALIDATION_TITLE", raising=False)

    settings = get_error_settings()

    assert settings == ErrorSettings(log_level="INFO", binding_status_code=400, validation_title="Invalid request")


def test_settings_are_read_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("ERROR_TRANSLATOR_LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("ERROR_TRANSLATOR_BINDING_STATUS_CODE", "422")
    monkeypatch.setenv("ERROR_TRANSLATOR_VALIDATION_TITLE", "Validation failure")

    settings = get_error_settings()

    assert settings.log_level == "DEBUG"
    assert settings.binding_status_code == 422
    assert settings.validation_title == "Validation failure"
    assert settings.safe_for_logging() == {
        "log_level": "DEBUG",
        "binding_status_code": 422,
        "validation_title": "Validation failure",
    }


def test_binding_status_must_be_an_error_status() -> None:
    with pytest.raises(ValueError):
        ErrorSettings(binding_status_code=200)
