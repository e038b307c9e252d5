"""Enums and constants shared by the builder and the renderers.

Operators, connectors and directions are plain ``str`` enums so that callers
may pass either the enum member or its string value.
"""

from __future__ import annotations

from enum import Enum

from sqliteorm.errors import ConfigError, UnsupportedOperatorError

# ---------------------------------------------------------------------------
# Column data types
# ---------------------------------------------------------------------------


class DataType(str, Enum):
    """Column types accepted by CREATE TABLE / ALTER TABLE."""

    INTEGER = "INTEGER"
    LONG = "LONG"
    FLOAT = "FLOAT"
    VARCHAR = "VARCHAR"
    TEXT = "TEXT"


# ---------------------------------------------------------------------------
# WHERE operators and connectors
# ---------------------------------------------------------------------------


class Operator(str, Enum):
    """Comparison operators usable in a WHERE predicate."""

    EQ = "="
    GT = ">"
    GTE = ">="
    LT = "<"
    LTE = "<="
    NE = "!="
    IN = "IN"
    IS_NOT = "IS NOT"
    NOT = "NOT"
    LIKE = "like"


#: Operators rendered with a space on each side (``name IN (...)``).
SPACED_OPERATORS: frozenset[Operator] = frozenset(
    {Operator.IN, Operator.IS_NOT, Operator.NOT, Operator.LIKE}
)


class WhereKind(str, Enum):
    """Boolean joiner used by ``and_`` / ``or_`` and the array helpers."""

    AND = "AND"
    OR = "OR"


class ConnectorKind(str, Enum):
    """Non-predicate WHERE tokens."""

    AND = "AND"
    OR = "OR"
    OPEN_PAREN = "("
    CLOSE_PAREN = ")"


class OrderDirection(str, Enum):
    """ORDER BY direction."""

    ASC = "ASC"
    DESC = "DESC"


# ---------------------------------------------------------------------------
# Limits
# ---------------------------------------------------------------------------

#: SQLite's historical SQLITE_MAX_VARIABLE_NUMBER.
DEFAULT_MAX_BOUND_VARIABLES = 999

#: Rows per conditional UPDATE; SQLite caps expression-tree depth at 1000.
DEFAULT_MAX_UPDATE_ROWS = 999


def coerce_data_type(data_type: DataType | str) -> DataType:
    """Return ``data_type`` as a :class:`DataType` (any case).

    Raises:
        ConfigError: If the type is not a supported column type.
    """
    if isinstance(data_type, DataType):
        return data_type
    try:
        return DataType(str(data_type).upper())
    except ValueError:
        raise ConfigError(
            f"Unsupported column type {data_type!r}; expected one of {[t.value for t in DataType]}."
        ) from None


def coerce_operator(op: Operator | str) -> Operator:
    """Return ``op`` as an :class:`Operator`, raising on unknown values."""
    if isinstance(op, Operator):
        return op
    try:
        return Operator(op)
    except ValueError:
        raise UnsupportedOperatorError(op, [o.value for o in Operator]) from None


def coerce_kind(kind: WhereKind | str) -> WhereKind:
    """Return ``kind`` as a :class:`WhereKind` (``'AND'`` / ``'OR'``, any case)."""
    if isinstance(kind, WhereKind):
        return kind
    try:
        return WhereKind(str(kind).upper())
    except ValueError:
        raise UnsupportedOperatorError(kind, [k.value for k in WhereKind]) from None


def coerce_direction(direction: OrderDirection | str) -> OrderDirection:
    """Return ``direction`` as an :class:`OrderDirection` (any case)."""
    if isinstance(direction, OrderDirection):
        return direction
    try:
        return OrderDirection(str(direction).upper())
    except ValueError:
        raise UnsupportedOperatorError(direction, [d.value for d in OrderDirection]) from None
