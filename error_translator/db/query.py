"""Resolution of client-supplied query property names against ORM models."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any
from typing import Literal

from sqlalchemy import inspect
from sqlalchemy.orm import InstrumentedAttribute
from sqlalchemy.sql.elements import UnaryExpression

from error_translator.core.exceptions import PropertyReferenceError

SortDirection = Literal["asc", "desc"]


def resolve_property(model: type[Any], name: str) -> InstrumentedAttribute[Any]:
    """Return the mapped column attribute called ``name`` on ``model``."""
    mapper = inspect(model)
    if name not in mapper.column_attrs:
        raise PropertyReferenceError(name, model.__name__)
    return getattr(model, name)


def parse_sort(expression: str) -> tuple[str, SortDirection]:
    """Split ``"name,desc"`` into a property name and a direction."""
    name, _, direction = expression.partition(",")
    name = name.strip()
    direction = direction.strip().lower() or "asc"
    if not name:
        raise ValueError("sort property is required")
    if direction not in ("asc", "desc"):
        raise ValueError(f"Invalid sort direction: {direction}")
    return name, direction  # type: ignore[return-value]


def build_order_by(model: type[Any], sort: Iterable[str]) -> list[UnaryExpression[Any]]:
    """Return ORDER BY clauses for each sort expression, in request order."""
    clauses: list[UnaryExpression[Any]] = []
    for expression in sort:
        name, direction = parse_sort(expression)
        column = resolve_property(model, name)
        clauses.append(column.desc() if direction == "desc" else column.asc())
    return clauses
