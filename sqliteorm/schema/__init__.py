"""sqliteorm schema layer: configuration, table metadata and enums."""
from sqliteorm.schema.config import ConfigOverride, OrmConfig
from sqliteorm.schema.converters import fields_from_create_sql
from sqliteorm.schema.table import TableField, TableSchema
from sqliteorm.schema.types import (
    ConnectorKind,
    DataType,
    Operator,
    OrderDirection,
    WhereKind,
)
from sqliteorm.schema.update_when import UpdateWhenField, UpdateWhenOption

__all__ = [
    "ConfigOverride",
    "OrmConfig",
    "fields_from_create_sql",
    "TableField",
    "TableSchema",
    "ConnectorKind",
    "DataType",
    "Operator",
    "OrderDirection",
    "WhereKind",
    "UpdateWhenField",
    "UpdateWhenOption",
]
