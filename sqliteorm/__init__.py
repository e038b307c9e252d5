"""sqliteorm – a fluent SQL statement builder for SQLite.

Build statements, don't execute them.

Public API
----------
``SqliteOrm``
    Stateful, chainable builder.  Terminal calls return ``CompiledSQL`` and
    reset the builder for the next statement.

``TableStatements``
    CRUD and maintenance statements for a declared ``TableSchema``.

``execute_batches``
    Dispatch per-chunk batch statements to a caller-supplied ``SQLExecutor``.

Example::

    from sqliteorm import SqliteOrm

    orm = SqliteOrm("people")
    sql, params = (
        orm.select()
        .where("name", "=", "A")
        .and_("age", "!=", 18)
        .or_("name", "IN", ["A", "B"])
        .get_sql_raw()
    )
    # SELECT * FROM "people" WHERE name=? AND age!=? OR name IN (?, ?)
    # ["A", 18, "A", "B"]
"""

from __future__ import annotations

from sqliteorm.compile.base import CompiledSQL
from sqliteorm.compile.batch import slice_rows
from sqliteorm.errors import (
    CompilationError,
    ConfigError,
    ExecutionError,
    RowShapeError,
    SqliteOrmError,
    UnsupportedOperatorError,
    UnsupportedValueError,
    ValidationError,
)
from sqliteorm.executor import BatchOutcome, ChunkFailure, SQLExecutor, execute_batches
from sqliteorm.orm import SqliteOrm
from sqliteorm.schema.config import ConfigOverride, OrmConfig
from sqliteorm.schema.converters import fields_from_create_sql
from sqliteorm.schema.table import TableField, TableSchema
from sqliteorm.schema.types import DataType, Operator, OrderDirection, WhereKind
from sqliteorm.schema.update_when import UpdateWhenField, UpdateWhenOption
from sqliteorm.statements import TableStatements

__all__ = [
    # Builders
    "SqliteOrm",
    "TableStatements",
    "CompiledSQL",
    "slice_rows",
    # Configuration
    "OrmConfig",
    "ConfigOverride",
    # Schema types
    "TableField",
    "TableSchema",
    "fields_from_create_sql",
    "DataType",
    "Operator",
    "OrderDirection",
    "WhereKind",
    "UpdateWhenField",
    "UpdateWhenOption",
    # Execution boundary
    "SQLExecutor",
    "BatchOutcome",
    "ChunkFailure",
    "execute_batches",
    # Errors
    "SqliteOrmError",
    "ValidationError",
    "UnsupportedValueError",
    "UnsupportedOperatorError",
    "RowShapeError",
    "ConfigError",
    "CompilationError",
    "ExecutionError",
]
