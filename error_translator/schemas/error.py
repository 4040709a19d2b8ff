"""Error envelope schemas returned for every failed request."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ErrorInformation(BaseModel):
    """Descriptive metadata about the failure category."""

    title: str | None = None
    type: str | None = None


class PropertyFailure(BaseModel):
    """Single field-level validation failure."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    message: str
    field: str
    code: str = ""
    rejected_value: Any = Field(default=None, alias="rejectedValue")

    @classmethod
    def of(
        cls,
        field: str,
        message: str,
        *,
        code: str = "",
        rejected_value: Any = None,
    ) -> PropertyFailure:
        """Build a failure for ``field`` without spelling out keyword aliases."""
        return cls(message=message, field=field, code=code, rejected_value=rejected_value)


class ErrorResponse(BaseModel):
    """Top-level API error response envelope."""

    model_config = ConfigDict(frozen=True)

    error: ErrorInformation
    content: list[PropertyFailure] = Field(default_factory=list)
