"""Pydantic models describing a table's declared columns.

A :class:`TableSchema` is supplied by the caller (sqliteorm never reflects a
live database).  It feeds the CREATE TABLE renderer and the schema-aware
statements in :mod:`sqliteorm.statements`.

Field descriptors accept both snake_case and the camelCase keys used by
stored JSON configs::

    TableField.model_validate({"field": "id", "type": "INTEGER", "isKey": True})
"""
from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from sqliteorm.errors import ConfigError
from sqliteorm.schema.types import DataType

logger = logging.getLogger(__name__)


class TableField(BaseModel):
    """Metadata for a single column.

    Attributes:
        field: Column name.
        type: Column data type.
        is_key: Render ``PRIMARY KEY AUTOINCREMENT``.
        is_not_null: Render ``NOT NULL``.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    field: str = Field(min_length=1)
    type: DataType
    is_key: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_key", "isKey", "is_primary_key", "isPrimaryKey"),
    )
    is_not_null: bool = Field(
        default=False,
        validation_alias=AliasChoices("is_not_null", "isNotNull"),
    )

    @classmethod
    def parse(cls, value: TableField | Mapping[str, Any]) -> TableField:
        """Return ``value`` as a :class:`TableField`.

        Raises:
            ConfigError: If a mapping does not describe a valid column.
        """
        if isinstance(value, TableField):
            return value
        try:
            return cls.model_validate(value)
        except PydanticValidationError as exc:
            raise ConfigError(f"Invalid column declaration {value!r}: {exc}", exc.errors()) from exc

    def as_nullable(self) -> TableField:
        """Return a copy that is neither a key nor NOT NULL.

        SQLite cannot ``ALTER TABLE ... ADD`` a primary key, and a NOT NULL
        column without a default cannot be added to a populated table.
        """
        return self.model_copy(update={"is_key": False, "is_not_null": False})


class TableSchema(BaseModel):
    """A table name plus its ordered column declarations.

    Attributes:
        name: Table name.
        fields: Columns in declaration order.
    """

    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    fields: list[TableField] = Field(min_length=1)

    @property
    def field_names(self) -> list[str]:
        """Returns all declared column names in order."""
        return [f.field for f in self.fields]

    def get_field(self, name: str) -> TableField | None:
        """Returns the TableField for ``name``, or ``None``."""
        for f in self.fields:
            if f.field == name:
                return f
        return None

    def primary_key(self) -> str:
        """Returns the primary key column name.

        Raises:
            ConfigError: If no field is declared with ``is_key``.
        """
        for f in self.fields:
            if f.is_key:
                return f.field
        raise ConfigError(
            f"Table '{self.name}' has no primary key; declared fields: {self.field_names}"
        )

    def insertable_fields(self) -> list[str]:
        """Returns declared columns excluding the auto-increment key."""
        return [f.field for f in self.fields if not f.is_key]

    def filter_row(self, row: Mapping[str, Any], drop_key: bool = True) -> dict[str, Any]:
        """Keep only declared columns of ``row``, in declaration order.

        Args:
            row: Arbitrary mapping, e.g. a record from application code.
            drop_key: Also drop the primary key column.

        Returns:
            A new dict; ``row`` is not modified.
        """
        allowed = self.insertable_fields() if drop_key else self.field_names
        return {name: row[name] for name in allowed if name in row}

    def missing_fields(self, existing: list[TableField]) -> list[TableField]:
        """Return declared columns absent from ``existing``.

        Each returned field is downgraded with :meth:`TableField.as_nullable`
        so that it can be added with ``ALTER TABLE ... ADD``.
        """
        present = {f.field for f in existing}
        missing: list[TableField] = []
        for f in self.fields:
            if f.field in present:
                continue
            if f.is_key or f.is_not_null:
                logger.warning(
                    "Column '%s' on table '%s' is new; adding it as a nullable non-key column",
                    f.field,
                    self.name,
                )
                f = f.as_nullable()
            missing.append(f)
        return missing
