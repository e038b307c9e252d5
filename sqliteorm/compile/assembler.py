"""Statement assembly: builder state → SQL text + parameters.

``StatementAssembler`` maps the active operation to its verb, then renders
the shared tail (WHERE, GROUP BY, ORDER BY, LIMIT) with one
:class:`~sqliteorm.compile.context.RenderContext`, so parameters are appended
in placeholder order.  It never mutates the state it is given; resetting the
builder after a render is the caller's job.

Sub-builder hierarchy
---------------------
StatementAssembler
  ├── SetClauseBuilder     (clause_builders.py, UPDATE only)
  ├── WhereClauseBuilder   (where.py)
  ├── GroupByBuilder       (clause_builders.py)
  ├── OrderByBuilder       (clause_builders.py)
  └── LimitBuilder         (clause_builders.py)
"""
from __future__ import annotations

import logging

from sqliteorm.compile.base import CompiledSQL
from sqliteorm.compile.clause_builders import (
    GroupByBuilder,
    LimitBuilder,
    OrderByBuilder,
    SetClauseBuilder,
)
from sqliteorm.compile.context import RenderContext
from sqliteorm.compile.state import BuilderState, CountOp, DeleteOp, SelectOp, UpdateOp
from sqliteorm.compile.where import WhereClauseBuilder
from sqliteorm.errors import CompilationError
from sqliteorm.schema.config import OrmConfig

logger = logging.getLogger(__name__)


class StatementAssembler:
    """Renders a :class:`BuilderState` for one effective configuration.

    Args:
        config: Effective configuration (base merged with any override).
    """

    def __init__(self, config: OrmConfig) -> None:
        self._config = config

    def build(self, state: BuilderState) -> CompiledSQL:
        """Render ``state``.

        Returns:
            The statement and its parameters, or an empty
            :class:`CompiledSQL` when no operation is active.

        Raises:
            CompilationError: If an UPDATE has nothing to set.
        """
        op = state.operation
        if op is None:
            logger.debug("No active operation on '%s'; nothing rendered", self._config.table_name)
            return CompiledSQL.empty()

        ctx = RenderContext(config=self._config)
        parts: list[str] = [self._build_prefix(ctx, op)]

        if isinstance(op, UpdateOp):
            parts.append(f"SET {SetClauseBuilder(ctx).build(op.values)}")

        parts.append(WhereClauseBuilder(ctx).build(state))
        parts.append(GroupByBuilder(ctx).build(state.group_by))
        parts.append(OrderByBuilder(ctx).build(state.order_by))
        parts.append(LimitBuilder(ctx).build(state.limit))

        compiled = ctx.finish(" ".join(parts))
        logger.debug("Rendered %s with params %r", compiled.sql, compiled.params)
        return compiled

    def _build_prefix(self, ctx: RenderContext, op: object) -> str:
        if isinstance(op, SelectOp):
            return f"SELECT {op.fields} FROM {ctx.table}"
        if isinstance(op, CountOp):
            return f"SELECT count({op.field}) FROM {ctx.table}"
        if isinstance(op, UpdateOp):
            return f"UPDATE {ctx.table}"
        if isinstance(op, DeleteOp):
            return f"DELETE FROM {ctx.table}"
        raise CompilationError(f"Unknown operation type: {type(op).__name__}")
