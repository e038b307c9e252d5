"""Schema-aware statement shortcuts for one declared table.

``TableStatements`` combines a :class:`~sqliteorm.schema.table.TableSchema`
with a :class:`~sqliteorm.orm.SqliteOrm` to produce the everyday CRUD
statements an application needs.  Input rows are filtered to the declared
columns first, so records carrying extra keys can be passed straight in::

    schema = TableSchema(name="people", fields=[
        TableField(field="id", type="INTEGER", is_key=True),
        TableField(field="name", type="TEXT", is_not_null=True),
    ])
    people = TableStatements(schema)
    sql, params = people.get_by_custom({"name": "A", "unknown": 1})
    # SELECT * FROM "people" WHERE name=?   ["A"]

Every method targets ``schema.name`` regardless of the builder's own table
and returns :class:`~sqliteorm.compile.base.CompiledSQL` (or a list of them).
"""
from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from sqliteorm.compile.base import CompiledSQL
from sqliteorm.compile.values import Value
from sqliteorm.errors import ValidationError
from sqliteorm.orm import SqliteOrm
from sqliteorm.schema.converters import fields_from_create_sql
from sqliteorm.schema.table import TableSchema
from sqliteorm.schema.types import WhereKind, coerce_kind

logger = logging.getLogger(__name__)


class TableStatements:
    """CRUD and maintenance statements for one table.

    Args:
        schema: The declared table.
        orm: Builder to render with; defaults to a fill-mode builder for
            ``schema.name``.
    """

    def __init__(self, schema: TableSchema, orm: SqliteOrm | None = None) -> None:
        self._schema = schema
        self._orm = orm or SqliteOrm(schema.name)

    @property
    def schema(self) -> TableSchema:
        return self._schema

    def _builder(self) -> SqliteOrm:
        return self._orm.clear().table(self._schema.name)

    def _conditions(
        self,
        orm: SqliteOrm,
        conditions: Mapping[str, Any],
        kind: WhereKind | str,
    ) -> SqliteOrm:
        kind = coerce_kind(kind)
        for field, value in conditions.items():
            if kind is WhereKind.AND:
                orm.and_(field, "=", value)
            else:
                orm.or_(field, "=", value)
        return orm

    # ------------------------------------------------------------------
    # Schema
    # ------------------------------------------------------------------

    def create_table(self) -> CompiledSQL:
        return self._builder().build_create(self._schema.fields)

    def drop_table(self) -> CompiledSQL:
        return self._builder().delete_table()

    def table_info(self) -> CompiledSQL:
        return self._builder().table_info()

    def set_version(self, version: int) -> CompiledSQL:
        return self._builder().set_version(version)

    def repair_columns(self, existing_create_sql: str) -> list[CompiledSQL]:
        """ALTER statements adding declared columns missing from a stored table.

        Args:
            existing_create_sql: The table's ``sqlite_master.sql`` text.

        Returns:
            One ``ALTER TABLE ... ADD`` per missing column; ``[]`` when the
            stored table already has every declared column.
        """
        existing = fields_from_create_sql(existing_create_sql)
        missing = self._schema.missing_fields(existing)
        if not missing:
            logger.debug("Table '%s' has no missing columns", self._schema.name)
            return []
        return self._builder().add_columns(missing)

    # ------------------------------------------------------------------
    # Read
    # ------------------------------------------------------------------

    def list_all(self, fields: str = "*") -> CompiledSQL:
        return self._builder().select(fields).get_sql_raw()

    def count(
        self,
        where: Mapping[str, Any] | None = None,
        kind: WhereKind | str = WhereKind.AND,
        key: str | None = None,
    ) -> CompiledSQL:
        """``SELECT count(<key>)`` filtered by declared, non-key columns of ``where``.

        ``key`` defaults to the primary key.
        """
        orm = self._builder().count(key or self._schema.primary_key())
        return self._conditions(orm, self._schema.filter_row(where or {}), kind).get_sql_raw()

    def get_by_id(self, id_value: str | int, fields: str = "*") -> CompiledSQL:
        key = self._schema.primary_key()
        return self._builder().select(fields).where(key, "=", id_value).get_sql_raw()

    def get_by_custom(
        self,
        query: Mapping[str, Any],
        kind: WhereKind | str = WhereKind.AND,
        fields: str = "*",
        group: str | None = None,
    ) -> CompiledSQL:
        orm = self._conditions(self._builder().select(fields), self._schema.filter_row(query), kind)
        if group:
            orm.group_by(group)
        return orm.get_sql_raw()

    def get_by_array(
        self,
        values: Sequence[Value],
        key: str,
        kind: WhereKind | str = WhereKind.OR,
    ) -> CompiledSQL:
        return self._builder().select().where_array(key, "=", values, kind).get_sql_raw()

    # ------------------------------------------------------------------
    # Write
    # ------------------------------------------------------------------

    def insert(self, row: Mapping[str, Any]) -> CompiledSQL:
        """INSERT the declared, non-key columns of ``row``."""
        return self._builder().insert(self._schema.filter_row(row))

    def inserts(
        self,
        rows: Sequence[Mapping[str, Any]],
        max_bound_variables: int | None = None,
    ) -> list[CompiledSQL]:
        filtered = [self._schema.filter_row(row) for row in rows]
        return self._builder().inserts(filtered, max_bound_variables)

    def update_by_id(self, row: Mapping[str, Any]) -> CompiledSQL:
        """UPDATE every declared column of ``row`` where the key matches.

        Raises:
            ValidationError: If ``row`` carries no primary key value.
        """
        key = self._schema.primary_key()
        key_value = row.get(key)
        if key_value is None or key_value == "":
            raise ValidationError(
                f"Row has no value for primary key '{key}'.",
                code="MISSING_PRIMARY_KEY",
                details={"key": key, "fields": list(row.keys())},
            )
        values = self._schema.filter_row(row, drop_key=True)
        return self._builder().update(values).where(key, "=", key_value).get_sql_raw()

    def update_by_custom(
        self,
        data: Mapping[str, Any],
        where: Mapping[str, Any],
        kind: WhereKind | str = WhereKind.AND,
    ) -> CompiledSQL:
        conditions = self._schema.filter_row(where)
        if not conditions:
            logger.warning("UPDATE on '%s' has no conditions; every row is affected",
                           self._schema.name)
        orm = self._builder().update(self._schema.filter_row(data))
        return self._conditions(orm, conditions, kind).get_sql_raw()

    def delete_by_id(self, id_value: str | int) -> CompiledSQL:
        return self._builder().delete_by_id(id_value, self._schema.primary_key())

    def delete_by_custom(
        self,
        query: Mapping[str, Any],
        kind: WhereKind | str = WhereKind.AND,
    ) -> CompiledSQL:
        conditions = self._schema.filter_row(query)
        if not conditions:
            logger.warning("DELETE on '%s' has no conditions; every row is affected",
                           self._schema.name)
        return self._conditions(self._builder().delete(), conditions, kind).get_sql_raw()

    def delete_by_array(
        self,
        values: Sequence[Value],
        key: str,
        kind: WhereKind | str = WhereKind.OR,
    ) -> CompiledSQL:
        if not values:
            logger.warning("DELETE on '%s' with an empty '%s' list; nothing rendered",
                           self._schema.name, key)
            return CompiledSQL.empty()
        return self._builder().delete().where_array(key, "=", values, kind).get_sql_raw()

    def clear_table(self) -> CompiledSQL:
        return self._builder().delete_all()
