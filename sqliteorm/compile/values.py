"""Value-fill policy: placeholder + parameter, or inline literal.

Every value embedded in a statement goes through one of the ``render_*``
helpers below with the shared :class:`~sqliteorm.compile.context.RenderContext`.
In fill mode the helpers always return ``?`` and append the value, unchanged,
to ``ctx.params``.  In literal mode each clause has its own literal rules:

==================  =====================  ==========  ===================
clause              str                    bool        falsy non-bool
==================  =====================  ==========  ===================
WHERE predicate     ``"v"``                ``1``/``0`` empty string
INSERT VALUES       ``"v"``                ``1``/``0`` rendered as-is
UPDATE SET          ``"v"``                ``"true"``  ``"0"`` / ``""``
==================  =====================  ==========  ===================

The WHERE rule that ``0`` and ``""`` render as nothing is long-standing
observable behaviour; bind such values in fill mode instead.  It does not
apply to the elements of an ``IN`` list.
"""
from __future__ import annotations

from typing import Any, Union

from sqliteorm.compile.context import RenderContext
from sqliteorm.errors import UnsupportedValueError
from sqliteorm.schema.types import Operator

#: Scalar value accepted anywhere a value is expected.
Scalar = Union[str, int, float, bool]

#: A scalar, or a sequence of scalars for the ``IN`` operator.
Value = Union[Scalar, list[Scalar], tuple[Scalar, ...]]

_SCALAR_TYPES = (str, int, float, bool)


def is_scalar(value: Any) -> bool:
    return isinstance(value, _SCALAR_TYPES)


# ---------------------------------------------------------------------------
# Validation (API boundary)
# ---------------------------------------------------------------------------


def validate_scalar(field: str, value: Any) -> None:
    """Raise :class:`UnsupportedValueError` unless ``value`` is a scalar."""
    if not is_scalar(value):
        raise UnsupportedValueError(field, value)


def validate_value(field: str, value: Any, operator: Operator) -> None:
    """Validate a WHERE value for ``operator``.

    Sequences are only meaningful with ``IN`` and must hold scalars.

    Raises:
        UnsupportedValueError: On ``None``, mappings, callables, nested
            sequences, or a sequence used with another operator.
    """
    if isinstance(value, (list, tuple)):
        if operator is not Operator.IN:
            raise UnsupportedValueError(
                field, value, f"Sequences are only valid with IN, not {operator.value!r}."
            )
        for item in value:
            if not is_scalar(item):
                raise UnsupportedValueError(field, item, "IN lists may only hold scalars.")
        return
    validate_scalar(field, value)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def _render_scalar(ctx: RenderContext, value: Scalar) -> str:
    if ctx.fill:
        return ctx.bind(value)
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return ctx.dialect.quote_string(value)
    return str(value)


def render_predicate_value(ctx: RenderContext, value: Value) -> str:
    """Render a WHERE value; sequences become ``(a, b, ...)``."""
    if isinstance(value, (list, tuple)):
        items = ", ".join(_render_scalar(ctx, item) for item in value)
        return f"({items})"
    if not ctx.fill and not isinstance(value, bool) and not value:
        return ""
    return _render_scalar(ctx, value)


def render_insert_value(ctx: RenderContext, value: Scalar) -> str:
    """Render one INSERT value."""
    return _render_scalar(ctx, value)


def render_set_value(ctx: RenderContext, value: Scalar) -> str:
    """Render one UPDATE SET value; literal mode quotes every value."""
    if ctx.fill:
        return ctx.bind(value)
    text = str(value).lower() if isinstance(value, bool) else str(value)
    return ctx.dialect.quote_string(text)


def render_identifier(ctx: RenderContext, name: str) -> str:
    """Render a column name or keyword that fill mode binds as a parameter."""
    if ctx.fill:
        return ctx.bind(name)
    return name
