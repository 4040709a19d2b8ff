"""Exception-to-response translation and handler registration."""

from __future__ import annotations

from collections.abc import Callable
from collections.abc import Mapping
from collections.abc import Sequence
from dataclasses import dataclass
import logging
from typing import Any

from fastapi import FastAPI
from fastapi import Request
from fastapi import status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic_core import to_jsonable_python
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response

from error_translator.core.config import ErrorSettings
from error_translator.core.config import get_error_settings
from error_translator.core.exceptions import PropertyFailureError
from error_translator.core.exceptions import PropertyReferenceError
from error_translator.core.field_errors import field_errors_from_validation
from error_translator.core.field_errors import to_property_failure
from error_translator.core.logging import safe_log
from error_translator.schemas.error import ErrorInformation
from error_translator.schemas.error import ErrorResponse
from error_translator.schemas.error import PropertyFailure

logger = logging.getLogger(__name__)

INTERNAL_ERROR_TITLE = "Internal error"
INVALID_QUERY_TITLE = "Invalid query"

_BODYLESS_STATUS_CODES = {status.HTTP_204_NO_CONTENT, status.HTTP_304_NOT_MODIFIED}

ErrorHandler = Callable[[Request, Any], Response]


@dataclass(frozen=True)
class ErrorRule:
    """One dispatch table entry: the exceptions of a category and how to answer them."""

    category: str
    exception_types: tuple[type[Exception], ...]
    handler: ErrorHandler

    def matches(self, exc: Exception) -> bool:
        return isinstance(exc, self.exception_types)


def build_error_response(
    *,
    status_code: int,
    error: ErrorInformation,
    content: Sequence[PropertyFailure] | None = None,
    headers: Mapping[str, str] | None = None,
) -> JSONResponse:
    """Wrap an error envelope with its HTTP status into a JSON response."""
    payload = ErrorResponse(error=error, content=list(content) if content else [])
    return JSONResponse(
        status_code=status_code,
        content=to_jsonable_python(payload, by_alias=True, bytes_mode="hex", fallback=str),
        headers=dict(headers) if headers else None,
    )


def _describe(request: Request) -> str:
    return f"{request.method} {request.url.path}"


class ErrorTranslator:
    """Ordered dispatch table from exception category to error response.

    Rules are checked in order and the first match wins, independently of
    how the host framework resolves its own handler lookup. The last rule
    catches every remaining ``Exception``.
    """

    def __init__(self, settings: ErrorSettings | None = None) -> None:
        self._settings = settings or get_error_settings()
        self._rules: list[ErrorRule] = [
            ErrorRule("validation", (PropertyFailureError,), self._handle_validation),
            ErrorRule("binding", (RequestValidationError,), self._handle_binding),
            ErrorRule("persistence", (SQLAlchemyError, PropertyReferenceError), self._handle_persistence),
            ErrorRule("framework", (StarletteHTTPException,), self._handle_framework),
            ErrorRule("runtime", (Exception,), self._handle_runtime),
        ]

    @property
    def settings(self) -> ErrorSettings:
        return self._settings

    @property
    def rules(self) -> tuple[ErrorRule, ...]:
        return tuple(self._rules)

    def add_rule(self, rule: ErrorRule) -> None:
        """Add a rule ahead of the catch-all runtime rule."""
        self._rules.insert(len(self._rules) - 1, rule)

    def rule_for(self, exc: Exception) -> ErrorRule:
        for rule in self._rules:
            if rule.matches(exc):
                return rule
        return self._rules[-1]

    def translate(self, request: Request, exc: Exception) -> Response:
        """Return the error response for ``exc`` raised while serving ``request``."""
        return self.rule_for(exc).handler(request, exc)

    async def handle(self, request: Request, exc: Exception) -> Response:
        """Starlette-compatible exception handler entry point."""
        return self.translate(request, exc)

    def _validation_error(self, status_code: int) -> ErrorInformation:
        return ErrorInformation(title=self._settings.validation_title, type=str(status_code))

    def _handle_validation(self, request: Request, exc: PropertyFailureError) -> Response:
        safe_log(logger, logging.WARNING, "Validation failure on %s: %s", _describe(request), exc)

        return build_error_response(
            status_code=status.HTTP_400_BAD_REQUEST,
            error=self._validation_error(status.HTTP_400_BAD_REQUEST),
            content=exc.failures,
        )

    def _handle_binding(self, request: Request, exc: RequestValidationError) -> Response:
        field_errors = field_errors_from_validation(exc)
        safe_log(
            logger,
            logging.WARNING,
            "Request binding failed on %s with %d invalid field(s)",
            _describe(request),
            len(field_errors),
        )

        status_code = self._settings.binding_status_code
        return build_error_response(
            status_code=status_code,
            error=self._validation_error(status_code),
            content=[to_property_failure(error) for error in field_errors],
        )

    def _handle_persistence(self, request: Request, exc: Exception) -> Response:
        safe_log(logger, logging.WARNING, "Query failed on %s: %s", _describe(request), exc, exc_info=exc)

        return build_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=ErrorInformation(title=INVALID_QUERY_TITLE),
        )

    def _handle_framework(self, request: Request, exc: StarletteHTTPException) -> Response:
        level = logging.ERROR if exc.status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR else logging.WARNING
        safe_log(logger, level, "HTTP %d on %s: %s", exc.status_code, _describe(request), exc.detail)

        if exc.status_code in _BODYLESS_STATUS_CODES:
            return Response(status_code=exc.status_code, headers=exc.headers)
        return build_error_response(
            status_code=exc.status_code,
            error=ErrorInformation(title=INTERNAL_ERROR_TITLE, type=str(status.HTTP_500_INTERNAL_SERVER_ERROR)),
            headers=exc.headers,
        )

    def _handle_runtime(self, request: Request, exc: Exception) -> Response:
        safe_log(logger, logging.ERROR, "Unhandled error on %s: %s", _describe(request), exc, exc_info=exc)

        return build_error_response(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            error=ErrorInformation(title=INTERNAL_ERROR_TITLE),
        )


def register_error_handlers(app: FastAPI, translator: ErrorTranslator | None = None) -> ErrorTranslator:
    """Attach the translator to every exception type in its dispatch table."""
    translator = translator or ErrorTranslator()
    for rule in translator.rules:
        for exception_type in rule.exception_types:
            app.add_exception_handler(exception_type, translator.handle)
    return translator
