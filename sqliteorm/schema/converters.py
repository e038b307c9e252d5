"""Utilities for building table metadata from external sources.

:func:`fields_from_create_sql` parses the ``sql`` column stored in
``sqlite_master`` (the stored CREATE TABLE text) back into
:class:`~sqliteorm.schema.table.TableField` descriptors, so that a declared
:class:`~sqliteorm.schema.table.TableSchema` can be diffed against a table
that already exists::

    existing = fields_from_create_sql(row["sql"])
    for field in schema.missing_fields(existing):
        ...
"""

from __future__ import annotations

import logging
import re

from sqliteorm.schema.table import TableField
from sqliteorm.schema.types import DataType

logger = logging.getLogger(__name__)

_COLUMNS_RE = re.compile(r"\((?P<columns>.*)\)", re.DOTALL)


def fields_from_create_sql(sql: str) -> list[TableField]:
    """Parse the column list of a ``CREATE TABLE`` statement.

    Only the shape produced by :func:`~sqliteorm.compile.ddl.build_create`
    is understood: ``<name> <type> [PRIMARY KEY ...] [NOT NULL]`` separated
    by commas.  Unknown types are read as ``TEXT``.

    Args:
        sql: CREATE TABLE text, e.g. from ``sqlite_master.sql``.

    Returns:
        Field descriptors in declaration order; ``[]`` if no column list
        is found.
    """
    match = _COLUMNS_RE.search(sql)
    if match is None:
        return []

    fields: list[TableField] = []
    for chunk in match.group("columns").split(","):
        parts = chunk.split()
        if not parts:
            continue
        name = parts[0].strip('"`[]')
        type_name = parts[1].upper() if len(parts) > 1 else DataType.TEXT.value
        try:
            data_type = DataType(type_name)
        except ValueError:
            logger.warning("Column '%s' has unknown type %r; reading it as TEXT", name, type_name)
            data_type = DataType.TEXT
        upper = chunk.upper()
        fields.append(
            TableField(
                field=name,
                type=data_type,
                is_key="PRIMARY KEY" in upper,
                is_not_null="NOT NULL" in upper,
            )
        )
    return fields
