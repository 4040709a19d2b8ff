"""Conversion of request-binding field errors into property failures."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Any

from fastapi.exceptions import RequestValidationError

from error_translator.core.logging import safe_log
from error_translator.schemas.error import PropertyFailure

logger = logging.getLogger(__name__)

NOT_NULL = "NotNull"
NOT_EMPTY = "NotEmpty"
EMPTY_CODE = "empty"

_LOCATION_SOURCES = {"body", "query", "path", "header", "cookie"}
_LENGTH_ERROR_TYPES = {"string_too_short", "too_short"}


@dataclass(frozen=True)
class FieldError:
    """One invalid field as reported by the request-binding layer."""

    object_name: str
    field: str
    rejected_value: Any
    default_message: str
    codes: tuple[str, ...]


def _split_location(location: tuple[Any, ...] | list[Any] | Any) -> tuple[str, str]:
    if not isinstance(location, (tuple, list)):
        return "request", str(location)
    if not location:
        return "request", "request"

    parts = list(location)
    object_name = "request"
    if parts[0] in _LOCATION_SOURCES:
        object_name = str(parts.pop(0))
    if not parts:
        return object_name, object_name
    return object_name, ".".join(str(part) for part in parts)


def _rule_codes(issue: dict[str, Any]) -> tuple[str, ...]:
    error_type = str(issue.get("type", ""))
    codes = [error_type] if error_type else []

    if error_type == "missing" or ("input" in issue and issue["input"] is None):
        codes.append(NOT_NULL)

    context = issue.get("ctx") or {}
    if error_type in _LENGTH_ERROR_TYPES and context.get("min_length") == 1:
        codes.append(NOT_EMPTY)

    return tuple(codes)


def field_errors_from_validation(exc: RequestValidationError) -> list[FieldError]:
    """Return one field error per issue, in the order the framework reports them."""
    field_errors: list[FieldError] = []
    for issue in exc.errors():
        object_name, field = _split_location(issue.get("loc", ()))
        rejected_value = None if issue.get("type") == "missing" else issue.get("input")
        field_errors.append(
            FieldError(
                object_name=object_name,
                field=field,
                rejected_value=rejected_value,
                default_message=str(issue.get("msg", "Invalid value")),
                codes=_rule_codes(issue),
            )
        )
    return field_errors


def to_property_failure(error: FieldError) -> PropertyFailure:
    """Classify a field error and carry it over as a property failure."""
    safe_log(
        logger,
        logging.ERROR,
        "%s.%s with value %r: %s",
        error.object_name,
        error.field,
        error.rejected_value,
        error.default_message,
    )

    if NOT_NULL in error.codes:
        code = EMPTY_CODE
    elif NOT_EMPTY in error.codes:
        code = EMPTY_CODE
    else:
        code = ""

    return PropertyFailure(
        message=error.default_message,
        field=error.field,
        code=code,
        rejected_value=error.rejected_value,
    )
