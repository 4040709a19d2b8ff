"""Exceptions raised by application code and classified by the error translator."""

from __future__ import annotations

from collections.abc import Iterable

from error_translator.schemas.error import PropertyFailure


class PropertyFailureError(Exception):
    """Raised by business logic when one or more input fields are invalid."""

    def __init__(self, failures: Iterable[PropertyFailure]) -> None:
        self.failures = tuple(failures)
        if not self.failures:
            raise ValueError("failures must not be empty")
        super().__init__(self.failures)

    def __str__(self) -> str:
        fields = ", ".join(failure.field for failure in self.failures)
        return f"Invalid fields: {fields}"


class PropertyReferenceError(Exception):
    """Raised when a dynamic query property does not exist on the queried model."""

    def __init__(self, property_name: str, model_name: str) -> None:
        super().__init__(property_name, model_name)
        self.property_name = property_name
        self.model_name = model_name

    def __str__(self) -> str:
        return f"No property '{self.property_name}' found for type '{self.model_name}'"
