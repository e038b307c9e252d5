"""Schema statements: CREATE TABLE, ALTER TABLE ADD, DROP TABLE, PRAGMA.

These render from arguments only; they do not look at WHERE or operation
state.  Only ``PRAGMA user_version`` binds a parameter in fill mode.
"""
from __future__ import annotations

from collections.abc import Sequence

from sqliteorm.compile.base import CompiledSQL
from sqliteorm.compile.context import RenderContext
from sqliteorm.errors import CompilationError
from sqliteorm.schema.table import TableField
from sqliteorm.schema.types import DataType


def build_column(field: TableField) -> str:
    """``<name> <type> [PRIMARY KEY AUTOINCREMENT] [NOT NULL]``."""
    line = f"{field.field} {field.type.value}"
    if field.is_key:
        line += " PRIMARY KEY AUTOINCREMENT"
    if field.is_not_null:
        line += " NOT NULL"
    return line


def build_create(ctx: RenderContext, fields: Sequence[TableField]) -> CompiledSQL:
    """Render ``CREATE TABLE IF NOT EXISTS "<table>" (...);``.

    Raises:
        CompilationError: If ``fields`` is empty.
    """
    if not fields:
        raise CompilationError("CREATE TABLE requires at least one field.", clause="CREATE")
    columns = ", ".join(build_column(f) for f in fields)
    return CompiledSQL(sql=f"CREATE TABLE IF NOT EXISTS {ctx.table} ({columns});")


def build_add_column(ctx: RenderContext, field: str, data_type: DataType) -> CompiledSQL:
    """Render ``ALTER TABLE "<table>" ADD <field> <type>;``."""
    return CompiledSQL(sql=f"ALTER TABLE {ctx.table} ADD {field} {data_type.value};")


def build_drop(ctx: RenderContext) -> CompiledSQL:
    """Render ``DROP TABLE IF EXISTS "<table>"``."""
    return CompiledSQL(sql=f"DROP TABLE IF EXISTS {ctx.table}")


def build_set_version(ctx: RenderContext, version: int) -> CompiledSQL:
    """Render ``PRAGMA user_version = <n>`` (``= ?`` in fill mode)."""
    if ctx.fill:
        return ctx.finish(f"PRAGMA user_version = {ctx.bind(version)}")
    return CompiledSQL(sql=f"PRAGMA user_version = {version}")
