"""Error translation configuration helpers."""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
import os

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_BINDING_STATUS_CODE = 400
DEFAULT_VALIDATION_TITLE = "Invalid request"


def _get_int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    return int(raw)


@dataclass(frozen=True)
class ErrorSettings:
    """Runtime settings for error translation and logging."""

    log_level: str = DEFAULT_LOG_LEVEL
    binding_status_code: int = DEFAULT_BINDING_STATUS_CODE
    validation_title: str = DEFAULT_VALIDATION_TITLE

    def __post_init__(self) -> None:
        if not 400 <= self.binding_status_code <= 599:
            raise ValueError("binding_status_code must be an HTTP error status")

    def safe_for_logging(self) -> dict[str, str | int]:
        """Return error settings safe for logs."""
        return {
            "log_level": self.log_level,
            "binding_status_code": self.binding_status_code,
            "validation_title": self.validation_title,
        }


@lru_cache(maxsize=1)
def get_error_settings() -> ErrorSettings:
    """Load error settings from the environment."""
    return ErrorSettings(
        log_level=os.getenv("ERROR_TRANSLATOR_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        binding_status_code=_get_int_env("ERROR_TRANSLATOR_BINDING_STATUS_CODE", DEFAULT_BINDING_STATUS_CODE),
        validation_title=os.getenv("ERROR_TRANSLATOR_VALIDATION_TITLE", DEFAULT_VALIDATION_TITLE),
    )
