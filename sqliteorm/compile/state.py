"""Builder state: the active operation plus accumulated clauses.

The active operation is a tagged union of small frozen dataclasses; exactly
one (or none) is set at a time.  WHERE tokens are kept in emission order and
rendered lazily so that every placeholder's parameter is appended while the
final statement is assembled left to right.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from sqliteorm.schema.types import ConnectorKind, Operator, OrderDirection

# ---------------------------------------------------------------------------
# Operations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SelectOp:
    fields: str = "*"


@dataclass(frozen=True)
class CountOp:
    field: str = "*"


@dataclass(frozen=True)
class UpdateOp:
    values: dict[str, Any]


@dataclass(frozen=True)
class DeleteOp:
    pass


Operation = Union[SelectOp, CountOp, UpdateOp, DeleteOp]


# ---------------------------------------------------------------------------
# WHERE tokens
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Predicate:
    """``key <operator> value``."""

    key: str
    operator: Operator
    value: Any


@dataclass(frozen=True)
class Connector:
    """``AND`` / ``OR`` / ``(`` / ``)``."""

    kind: ConnectorKind


WhereToken = Union[Predicate, Connector]

OPEN_PAREN = Connector(ConnectorKind.OPEN_PAREN)
CLOSE_PAREN = Connector(ConnectorKind.CLOSE_PAREN)


# ---------------------------------------------------------------------------
# Accumulated state
# ---------------------------------------------------------------------------


@dataclass
class BuilderState:
    """Everything one statement-in-progress has accumulated.

    Attributes:
        operation: The active operation, or ``None``.
        where_tokens: Predicates and connectors in emission order.
        explicit_where: Set by ``where()``.  When unset, the first token is
            a stray leading connector and is dropped at render time.
        group_by: GROUP BY field.
        order_by: ``(direction, field)``.
        limit: ``(count, offset)``; ``offset`` may be ``None``.
    """

    operation: Operation | None = None
    where_tokens: list[WhereToken] = field(default_factory=list)
    explicit_where: bool = False
    group_by: str | None = None
    order_by: tuple[OrderDirection, str] | None = None
    limit: tuple[int, int | None] | None = None

    @property
    def last_token(self) -> WhereToken | None:
        return self.where_tokens[-1] if self.where_tokens else None
