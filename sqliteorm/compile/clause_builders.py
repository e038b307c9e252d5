"""Clause-level SQL builders.

Each class renders exactly one clause from builder state and, in fill mode,
appends to the shared parameter sequence of the
:class:`~sqliteorm.compile.context.RenderContext` it was built with.  Every
builder returns ``""`` when its clause is unset.

Classes
-------
GroupByBuilder        — ``GROUP BY <field>``
OrderByBuilder        — ``ORDER BY <field> <direction>``
LimitBuilder          — ``LIMIT <count>[,<offset>]``
SetClauseBuilder      — ``f1=v1, f2=v2`` for UPDATE
InsertValuesBuilder   — ``(f1, f2) VALUES (v, v), (v, v)``
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from sqliteorm.compile.context import RenderContext
from sqliteorm.compile.values import (
    render_identifier,
    render_insert_value,
    render_set_value,
    validate_scalar,
)
from sqliteorm.errors import CompilationError, RowShapeError
from sqliteorm.schema.types import OrderDirection


class GroupByBuilder:
    """Builds ``GROUP BY <field>`` (``GROUP BY ?`` in fill mode)."""

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def build(self, field: str | None) -> str:
        if not field:
            return ""
        return f"GROUP BY {render_identifier(self._ctx, field)}"


class OrderByBuilder:
    """Builds ``ORDER BY <field> <direction>``.

    Fill mode binds the field and then the direction, rendering
    ``ORDER BY ? ?``.
    """

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def build(self, order_by: tuple[OrderDirection, str] | None) -> str:
        if not order_by:
            return ""
        direction, field = order_by
        field_sql = render_identifier(self._ctx, field)
        direction_sql = render_identifier(self._ctx, direction.value)
        return f"ORDER BY {field_sql} {direction_sql}"


class LimitBuilder:
    """Builds ``LIMIT <count>`` or ``LIMIT <count>,<offset>``."""

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def build(self, limit: tuple[int, int | None] | None) -> str:
        if not limit:
            return ""
        count, offset = limit
        parts = [self._render(count)]
        if offset is not None:
            parts.append(self._render(offset))
        return f"LIMIT {','.join(parts)}"

    def _render(self, n: int) -> str:
        return self._ctx.bind(n) if self._ctx.fill else str(n)


class SetClauseBuilder:
    """Builds the ``f1=v1, f2=v2`` assignment list of an UPDATE."""

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def build(self, values: Mapping[str, Any]) -> str:
        if not values:
            raise CompilationError("UPDATE requires at least one field to set.", clause="SET")
        return ", ".join(
            f"{field}={render_set_value(self._ctx, value)}" for field, value in values.items()
        )


class InsertValuesBuilder:
    """Builds ``(f1, f2, ...) VALUES (v1, v2, ...), (...)``.

    The column order is taken from the first row's keys; values are emitted
    row-major so fill-mode parameters line up with the placeholders.
    """

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def build(self, rows: Sequence[Mapping[str, Any]]) -> str:
        if not rows:
            return ""
        fields = list(rows[0].keys())
        check_row_shapes(fields, rows)
        row_sql: list[str] = []
        for row in rows:
            values = ", ".join(render_insert_value(self._ctx, row[f]) for f in fields)
            row_sql.append(f"({values})")
        return f"({', '.join(fields)}) VALUES {', '.join(row_sql)}"


def check_row_shapes(fields: list[str], rows: Sequence[Mapping[str, Any]]) -> None:
    """Validate that every row has exactly ``fields``, each holding a scalar."""
    expected = set(fields)
    for index, row in enumerate(rows):
        if set(row.keys()) != expected:
            raise RowShapeError(fields, list(row.keys()), index)
        for field in fields:
            validate_scalar(field, row[field])
