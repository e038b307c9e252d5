"""Fluent, stateful SQL statement builder for SQLite.

``SqliteOrm`` accumulates operation intent and clauses through chained calls
and renders a complete statement on demand.  It never executes anything.

Reading is destructive
----------------------
Every terminal call (``get_sql_raw``, ``insert``, ``inserts``, the DDL
helpers, ``build_update_by_when`` ...) returns its statement *and* resets the
builder: clauses, the active operation and the per-call configuration are all
cleared, ready for the next statement::

    orm = SqliteOrm("users")
    sql, params = orm.select().where("name", "=", "A").and_("age", "!=", 18).get_sql_raw()
    # sql    == 'SELECT * FROM "users" WHERE name=? AND age!=?'
    # params == ["A", 18]
    assert orm.get_sql_raw().is_empty

One instance must therefore serve one statement at a time: use one builder
per in-flight statement, or reuse it strictly sequentially.

Configuration scopes
--------------------
``set_table_name`` / ``set_fill_value`` change the persistent configuration;
``table`` / ``fill_value`` apply to the next terminal call only.
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqliteorm.compile.assembler import StatementAssembler
from sqliteorm.compile.base import CompiledSQL
from sqliteorm.compile.batch import UpdateWhenBuilder, build_insert, build_inserts, slice_rows
from sqliteorm.compile.context import RenderContext
from sqliteorm.compile.ddl import build_add_column, build_create, build_drop, build_set_version
from sqliteorm.compile.state import (
    BuilderState,
    CountOp,
    DeleteOp,
    Operation,
    SelectOp,
    UpdateOp,
)
from sqliteorm.compile.values import Value, validate_scalar
from sqliteorm.compile.where import make_predicate, push_array, push_joined, push_where
from sqliteorm.errors import UnsupportedValueError
from sqliteorm.schema.config import ConfigOverride, OrmConfig, make_override
from sqliteorm.schema.table import TableField
from sqliteorm.schema.types import (
    DEFAULT_MAX_BOUND_VARIABLES,
    DataType,
    Operator,
    OrderDirection,
    WhereKind,
    coerce_data_type,
    coerce_direction,
)
from sqliteorm.schema.update_when import UpdateWhenOption

logger = logging.getLogger(__name__)

#: Table holding SQLite's schema records.
SQLITE_MASTER = "sqlite_master"


class SqliteOrm:
    """Builds SELECT / COUNT / UPDATE / DELETE / INSERT and schema statements.

    Args:
        table_name: Persistent target table.
        fill_value: Render ``?`` placeholders plus parameters (default) or
            inline literals.
        max_bound_variables: Placeholder limit per batch INSERT statement.

    Raises:
        ConfigError: If any argument is invalid.
    """

    def __init__(
        self,
        table_name: str,
        *,
        fill_value: bool = True,
        max_bound_variables: int = DEFAULT_MAX_BOUND_VARIABLES,
    ) -> None:
        self._config = OrmConfig.create(
            table_name=table_name,
            fill_value=fill_value,
            max_bound_variables=max_bound_variables,
        )
        self._override = ConfigOverride()
        self._state = BuilderState()

    def __repr__(self) -> str:
        return f"SqliteOrm(table_name={self.table_name!r}, fill_value={self.is_fill_value!r})"

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    @property
    def config(self) -> OrmConfig:
        """The persistent configuration."""
        return self._config

    @property
    def effective_config(self) -> OrmConfig:
        """The configuration the next terminal call will use."""
        return self._config.merged(self._override)

    @property
    def table_name(self) -> str:
        return self.effective_config.table_name

    @property
    def is_fill_value(self) -> bool:
        return self.effective_config.fill_value

    def get_table_name(self) -> str:
        return self.table_name

    def set_table_name(self, table_name: str) -> SqliteOrm:
        """Change the table for this and all future statements."""
        self._config = self._config.updated(table_name=table_name)
        return self

    def set_fill_value(self, flag: bool = True) -> SqliteOrm:
        """Change the fill mode for this and all future statements."""
        self._config = self._config.updated(fill_value=flag)
        return self

    def table(self, table_name: str) -> SqliteOrm:
        """Target ``table_name`` for the next terminal call only."""
        self._override = make_override(
            **{**self._override.model_dump(), "table_name": table_name}
        )
        return self

    def fill_value(self, flag: bool = True) -> SqliteOrm:
        """Set the fill mode for the next terminal call only.

        May be called at any point of a chain; values are rendered when the
        statement is, not when they are added.
        """
        self._override = make_override(**{**self._override.model_dump(), "fill_value": flag})
        return self

    def clear(self) -> SqliteOrm:
        """Discard accumulated clauses and the per-call configuration."""
        self._state = BuilderState()
        self._override = ConfigOverride()
        return self

    def _consume(self) -> OrmConfig:
        """Return the effective configuration and reset for the next statement."""
        config = self.effective_config
        self.clear()
        return config

    # ------------------------------------------------------------------
    # Operations (mutually exclusive)
    # ------------------------------------------------------------------

    def _set_operation(self, op: Operation) -> SqliteOrm:
        self._state.operation = op
        return self

    def select(self, fields: str = "*") -> SqliteOrm:
        return self._set_operation(SelectOp(fields=fields))

    def count(self, field: str = "*") -> SqliteOrm:
        return self._set_operation(CountOp(field=field))

    def update(self, values: Mapping[str, Any]) -> SqliteOrm:
        """Start an UPDATE assigning ``values`` (column → scalar)."""
        for field, value in values.items():
            validate_scalar(field, value)
        return self._set_operation(UpdateOp(values=dict(values)))

    def delete(self) -> SqliteOrm:
        return self._set_operation(DeleteOp())

    # ------------------------------------------------------------------
    # WHERE
    # ------------------------------------------------------------------

    def where(self, key: str, operator: Operator | str, value: Value) -> SqliteOrm:
        """Set the primary condition; it always renders first in the clause."""
        push_where(self._state, make_predicate(key, operator, value))
        return self

    def and_(self, key: str, operator: Operator | str, value: Value) -> SqliteOrm:
        push_joined(self._state, WhereKind.AND, make_predicate(key, operator, value))
        return self

    def or_(self, key: str, operator: Operator | str, value: Value) -> SqliteOrm:
        push_joined(self._state, WhereKind.OR, make_predicate(key, operator, value))
        return self

    def where_array(
        self,
        key: str,
        operator: Operator | str,
        values: Sequence[Value],
        kind: WhereKind | str,
    ) -> SqliteOrm:
        """Add ``<kind> (key op v1 <kind> key op v2 ...)``.

        An empty ``values`` logs a warning and changes nothing.
        """
        push_array(self._state, key, operator, values, kind)
        return self

    def and_array(self, key: str, operator: Operator | str, values: Sequence[Value]) -> SqliteOrm:
        return self.where_array(key, operator, values, WhereKind.AND)

    def or_array(self, key: str, operator: Operator | str, values: Sequence[Value]) -> SqliteOrm:
        return self.where_array(key, operator, values, WhereKind.OR)

    # ------------------------------------------------------------------
    # GROUP BY / ORDER BY / LIMIT
    # ------------------------------------------------------------------

    def group_by(self, field: str) -> SqliteOrm:
        self._state.group_by = field
        return self

    def order_by(self, direction: OrderDirection | str, field: str) -> SqliteOrm:
        self._state.order_by = (coerce_direction(direction), field)
        return self

    def limit(self, count: int, offset: int | None = None) -> SqliteOrm:
        for name, n in (("limit", count), ("offset", offset)):
            if n is not None and (isinstance(n, bool) or not isinstance(n, int)):
                raise UnsupportedValueError(name, n, "LIMIT values must be integers.")
        self._state.limit = (count, offset)
        return self

    # ------------------------------------------------------------------
    # Terminal: SELECT / COUNT / UPDATE / DELETE
    # ------------------------------------------------------------------

    def get_sql_raw(self) -> CompiledSQL:
        """Render the accumulated statement and reset the builder.

        Returns:
            The statement with its parameters (empty in literal mode), or an
            empty :class:`CompiledSQL` when no operation was chosen.

        Raises:
            CompilationError: If an UPDATE has nothing to set.
        """
        state = self._state
        config = self._consume()
        return StatementAssembler(config).build(state)

    # ------------------------------------------------------------------
    # Terminal: INSERT
    # ------------------------------------------------------------------

    def insert(self, row: Mapping[str, Any]) -> CompiledSQL:
        """Render ``INSERT or REPLACE INTO "<table>" (...) VALUES (...)``."""
        return build_insert(self._consume(), [row])

    def inserts(
        self,
        rows: Sequence[Mapping[str, Any]],
        max_bound_variables: int | None = None,
    ) -> list[CompiledSQL]:
        """Render ``rows`` as one INSERT per chunk.

        Chunks hold ``floor(max_bound_variables / fields_per_row)`` rows;
        the limit defaults to the configured ``max_bound_variables``.
        """
        return build_inserts(self._consume(), rows, max_bound_variables)

    # ------------------------------------------------------------------
    # Terminal: batch helpers
    # ------------------------------------------------------------------

    def data_slice(self, rows: Sequence[Any], max_per_chunk: int) -> list[list[Any]]:
        """Deep-copy ``rows`` into chunks of at most ``max_per_chunk``."""
        self.clear()
        return slice_rows(rows, max_per_chunk)

    def build_update_by_when(self, option: UpdateWhenOption) -> list[CompiledSQL]:
        """Render a conditional batch update, one statement per chunk.

        See :class:`~sqliteorm.schema.update_when.UpdateWhenOption`.
        """
        return UpdateWhenBuilder(self._consume()).build(option)

    # ------------------------------------------------------------------
    # Terminal: schema statements
    # ------------------------------------------------------------------

    def build_create(self, fields: Sequence[TableField | Mapping[str, Any]]) -> CompiledSQL:
        """Render ``CREATE TABLE IF NOT EXISTS`` for ``fields``.

        Fields may be :class:`TableField` instances or plain mappings such as
        ``{"field": "id", "type": "INTEGER", "isKey": True}``.

        Raises:
            ConfigError: If a mapping is not a valid column declaration.
            CompilationError: If ``fields`` is empty.
        """
        config = self._consume()
        parsed = [TableField.parse(f) for f in fields]
        return build_create(RenderContext(config=config), parsed)

    def add_column(
        self,
        field: str,
        data_type: DataType | str,
        table_name: str | None = None,
    ) -> CompiledSQL:
        """Render ``ALTER TABLE "<table>" ADD <field> <type>;``.

        Raises:
            ConfigError: If ``data_type`` is not a supported column type.
        """
        if table_name is not None:
            self.table(table_name)
        config = self._consume()
        return build_add_column(RenderContext(config=config), field, coerce_data_type(data_type))

    def add_columns(self, fields: Sequence[TableField]) -> list[CompiledSQL]:
        """Render one ALTER TABLE statement per field, for the same table."""
        config = self._consume()
        return [build_add_column(RenderContext(config=config), f.field, f.type) for f in fields]

    def delete_table(self, table_name: str | None = None) -> CompiledSQL:
        """Render ``DROP TABLE IF EXISTS "<table>"``."""
        if table_name is not None:
            self.table(table_name)
        return build_drop(RenderContext(config=self._consume()))

    def set_version(self, version: int) -> CompiledSQL:
        """Render ``PRAGMA user_version = <version>``."""
        if isinstance(version, bool) or not isinstance(version, int):
            raise UnsupportedValueError("user_version", version, "Versions must be integers.")
        return build_set_version(RenderContext(config=self._consume()), version)

    # ------------------------------------------------------------------
    # Terminal: shortcuts
    # ------------------------------------------------------------------

    def table_info(self, table_name: str | None = None) -> CompiledSQL:
        """Render the ``sqlite_master`` lookup for ``table_name``."""
        config = self._consume()
        name = table_name or config.table_name
        master = SqliteOrm(SQLITE_MASTER, fill_value=config.fill_value)
        return master.select().where("type", "=", "table").and_("name", "=", name).get_sql_raw()

    def find_by_id(self, id_value: str | int, field: str = "id") -> CompiledSQL:
        self._state = BuilderState()
        return self.select().where(field, "=", id_value).get_sql_raw()

    def select_all(self, table_name: str | None = None) -> CompiledSQL:
        self._state = BuilderState()
        if table_name is not None:
            self.table(table_name)
        return self.select().get_sql_raw()

    def delete_by_id(self, id_value: str | int, field: str = "id") -> CompiledSQL:
        self._state = BuilderState()
        return self.delete().where(field, "=", id_value).get_sql_raw()

    def delete_all(self, table_name: str | None = None) -> CompiledSQL:
        """Render ``DELETE FROM "<table>" WHERE 1=1``."""
        self._state = BuilderState()
        if table_name is not None:
            self.table(table_name)
        return self.delete().where("1", "=", 1).get_sql_raw()
