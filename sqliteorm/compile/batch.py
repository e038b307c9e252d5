"""Batch statements: row slicing, multi-row INSERT and CASE WHEN UPDATE.

SQLite limits both the number of bound variables per statement and the depth
of an expression tree.  Batch entry points therefore slice their input into
chunks and emit one independent, self-contained statement per chunk, so a
caller can retry exactly one failed chunk without touching the others.
"""
from __future__ import annotations

import copy
import logging
import math
from collections.abc import Mapping, Sequence
from typing import Any, TypeVar

from sqliteorm.compile.base import CompiledSQL
from sqliteorm.compile.clause_builders import InsertValuesBuilder
from sqliteorm.compile.context import RenderContext
from sqliteorm.compile.values import render_set_value, validate_scalar
from sqliteorm.errors import CompilationError
from sqliteorm.schema.config import OrmConfig
from sqliteorm.schema.update_when import UpdateWhenField, UpdateWhenOption

logger = logging.getLogger(__name__)

T = TypeVar("T")


# ---------------------------------------------------------------------------
# Slicer
# ---------------------------------------------------------------------------


def slice_rows(rows: Sequence[T], max_per_chunk: int) -> list[list[T]]:
    """Split a deep copy of ``rows`` into consecutive chunks.

    Args:
        rows: Input rows; never modified, and chunks share no objects with it.
        max_per_chunk: Maximum rows per chunk.

    Returns:
        ``ceil(len(rows) / max_per_chunk)`` chunks in input order;
        ``[]`` for empty input.

    Raises:
        CompilationError: If ``max_per_chunk`` is not positive.
    """
    if max_per_chunk <= 0:
        raise CompilationError(f"Chunk size must be positive, got {max_per_chunk}.")
    copied = copy.deepcopy(list(rows))
    chunk_count = math.ceil(len(copied) / max_per_chunk)
    return [
        copied[i * max_per_chunk : (i + 1) * max_per_chunk] for i in range(chunk_count)
    ]


# ---------------------------------------------------------------------------
# INSERT
# ---------------------------------------------------------------------------


def build_insert(config: OrmConfig, rows: Sequence[Mapping[str, Any]]) -> CompiledSQL:
    """Render one ``INSERT or REPLACE`` statement for ``rows``.

    Raises:
        CompilationError: If there is no row or the first row has no fields.
        RowShapeError: If rows do not share the first row's fields.
        UnsupportedValueError: If a value is not a scalar.
    """
    if not rows or not rows[0]:
        raise CompilationError("INSERT requires at least one row with fields.", clause="VALUES")
    ctx = RenderContext(config=config)
    values_sql = InsertValuesBuilder(ctx).build(rows)
    compiled = ctx.finish(f"INSERT or REPLACE INTO {ctx.table} {values_sql}")
    logger.debug("Rendered %s with params %r", compiled.sql, compiled.params)
    return compiled


def build_inserts(
    config: OrmConfig,
    rows: Sequence[Mapping[str, Any]],
    max_bound_variables: int | None = None,
) -> list[CompiledSQL]:
    """Render ``rows`` as chunked INSERT statements.

    Each chunk holds ``floor(max_bound_variables / fields_per_row)`` rows so
    no statement exceeds the bound-variable limit.

    Args:
        config: Effective configuration.
        rows: Rows sharing the first row's fields.
        max_bound_variables: Overrides ``config.max_bound_variables``.

    Returns:
        One statement per chunk; ``[]`` for empty input.

    Raises:
        CompilationError: If a single row has more fields than the limit.
    """
    if not rows:
        return []
    limit = config.max_bound_variables if max_bound_variables is None else max_bound_variables
    fields_per_row = len(rows[0])
    if fields_per_row == 0:
        raise CompilationError("INSERT requires at least one row with fields.", clause="VALUES")
    per_chunk = limit // fields_per_row
    if per_chunk == 0:
        raise CompilationError(
            f"A row has {fields_per_row} fields but at most {limit} bound variables are allowed.",
            clause="VALUES",
        )
    return [build_insert(config, chunk) for chunk in slice_rows(rows, per_chunk)]


# ---------------------------------------------------------------------------
# Conditional batch UPDATE
# ---------------------------------------------------------------------------


class UpdateWhenBuilder:
    """Builds ``UPDATE ... SET f = CASE WHEN ... END`` statements.

    Example output for one field mapping over two rows (fill mode)::

        UPDATE "t" SET f = CASE WHEN k=? THEN ? WHEN k=? THEN ? END

    Args:
        config: Effective configuration.
    """

    def __init__(self, config: OrmConfig) -> None:
        self._config = config

    def build(self, option: UpdateWhenOption) -> list[CompiledSQL]:
        """Slice ``option.rows`` by ``option.max_rows`` and render each chunk.

        Returns:
            One statement per chunk; ``[]`` (with a warning) when there are
            no rows.

        Raises:
            CompilationError: If no field mapping is given.
        """
        if not option.fields:
            raise CompilationError("Conditional update requires at least one field.", clause="SET")
        if not option.rows:
            logger.warning("Conditional update on '%s' has no rows; nothing rendered",
                           self._config.table_name)
            return []
        return [self.build_chunk(option, chunk) for chunk in slice_rows(option.rows, option.max_rows)]

    def build_chunk(self, option: UpdateWhenOption, rows: list[Any]) -> CompiledSQL:
        """Render a single statement covering every row of ``rows``."""
        ctx = RenderContext(config=self._config)
        assignments = [self._build_case(ctx, f, rows) for f in option.fields]
        set_sql = ", ".join(assignments)
        if option.get_extra_set is not None:
            set_sql = f"{set_sql}, {option.get_extra_set(rows)}"
        where_sql = ""
        if option.get_extra_where is not None:
            where_sql = f"WHERE {option.get_extra_where(rows)}"
        compiled = ctx.finish(f"UPDATE {ctx.table} SET {set_sql} {where_sql}")
        logger.debug("Rendered %s with params %r", compiled.sql, compiled.params)
        return compiled

    def _build_case(self, ctx: RenderContext, mapping: UpdateWhenField, rows: list[Any]) -> str:
        arms = [self._build_arm(ctx, mapping, row) for row in rows]
        return f"{mapping.set_field} = CASE {' '.join(arms)} END"

    def _build_arm(self, ctx: RenderContext, mapping: UpdateWhenField, row: Any) -> str:
        when_field = mapping.get_when_field(row)
        when_value = mapping.get_when_value(row)
        then_value = mapping.get_then_value(row)
        validate_scalar(when_field, when_value)
        validate_scalar(mapping.set_field, then_value)
        when_sql = render_set_value(ctx, when_value)
        then_sql = render_set_value(ctx, then_value)
        return f"WHEN {when_field}={when_sql} THEN {then_sql}"
