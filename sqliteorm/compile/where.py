"""WHERE expression accumulation and rendering.

Tokens are appended by the ``push_*`` helpers (called from the fluent
builder) and rendered by :class:`WhereClauseBuilder`.  Ordering rules:

* ``where()`` *prepends* its predicate, so the most recent ``where()`` is
  always the first condition of the clause.
* ``and_()`` / ``or_()`` append a connector and a predicate; the connector
  is omitted directly after ``(``.
* The array helpers append ``<kind> (``, one predicate per value joined by
  ``<kind>``, then ``)``.
* Without any ``where()`` call the first token is a leading connector and
  is dropped at render time.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence

from sqliteorm.compile.context import RenderContext
from sqliteorm.compile.state import (
    CLOSE_PAREN,
    OPEN_PAREN,
    BuilderState,
    Connector,
    Predicate,
    WhereToken,
)
from sqliteorm.compile.values import Value, render_predicate_value, validate_value
from sqliteorm.schema.types import (
    SPACED_OPERATORS,
    ConnectorKind,
    Operator,
    WhereKind,
    coerce_kind,
    coerce_operator,
)

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Token accumulation
# ---------------------------------------------------------------------------


def make_predicate(key: str, operator: Operator | str, value: Value) -> Predicate:
    """Validate and build a predicate token."""
    op = coerce_operator(operator)
    validate_value(key, value, op)
    if isinstance(value, tuple):
        value = list(value)
    return Predicate(key=key, operator=op, value=value)


def push_where(state: BuilderState, predicate: Predicate) -> None:
    state.explicit_where = True
    state.where_tokens.insert(0, predicate)


def push_joined(state: BuilderState, kind: WhereKind | str, predicate: Predicate) -> None:
    kind = coerce_kind(kind)
    if state.last_token != OPEN_PAREN:
        state.where_tokens.append(Connector(ConnectorKind(kind.value)))
    state.where_tokens.append(predicate)


def push_array(
    state: BuilderState,
    key: str,
    operator: Operator | str,
    values: Sequence[Value],
    kind: WhereKind | str,
) -> bool:
    """Append ``<kind> ( key op v1 <kind> key op v2 ... )``.

    Returns:
        ``False`` (with a warning, state untouched) when ``values`` is empty.
    """
    kind = coerce_kind(kind)
    if not values:
        logger.warning("Empty value list for %s array condition on '%s'; ignored", kind.value, key)
        return False
    # Validate every value before touching the token list.
    predicates = [make_predicate(key, operator, v) for v in values]
    state.where_tokens.append(Connector(ConnectorKind(kind.value)))
    state.where_tokens.append(OPEN_PAREN)
    for predicate in predicates:
        push_joined(state, kind, predicate)
    state.where_tokens.append(CLOSE_PAREN)
    return True


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


class WhereClauseBuilder:
    """Builds ``WHERE ...`` from the accumulated tokens."""

    def __init__(self, ctx: RenderContext) -> None:
        self._ctx = ctx

    def build(self, state: BuilderState) -> str:
        tokens: list[WhereToken] = list(state.where_tokens)
        if tokens and not state.explicit_where:
            tokens = tokens[1:]
        if not tokens:
            return ""
        return "WHERE " + " ".join(self._build_token(t) for t in tokens)

    def _build_token(self, token: WhereToken) -> str:
        if isinstance(token, Connector):
            return token.kind.value
        op = token.operator
        op_sql = f" {op.value} " if op in SPACED_OPERATORS else op.value
        value_sql = render_predicate_value(self._ctx, token.value)
        return f"{token.key}{op_sql}{value_sql}"
