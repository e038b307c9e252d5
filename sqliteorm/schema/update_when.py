"""Options for conditional batch updates (``UPDATE ... SET f = CASE WHEN ...``).

Each :class:`UpdateWhenField` turns one row into one ``WHEN`` arm of the
``CASE`` expression for ``set_field``::

    UpdateWhenField(
        set_field="tid_code",
        get_when_field=lambda row: "epc",
        get_when_value=lambda row: row["epc"],
        get_then_value=lambda row: row["tid"],
    )

renders ``tid_code = CASE WHEN epc=? THEN ? ... END`` with the row's ``epc``
and ``tid`` values pushed in that order.
"""
from __future__ import annotations

from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from sqliteorm.schema.types import DEFAULT_MAX_UPDATE_ROWS


class UpdateWhenField(BaseModel):
    """Mapping from a row to one ``WHEN ... THEN ...`` arm.

    Attributes:
        set_field: Column assigned by the ``CASE`` expression.
        get_when_field: Returns the column compared in ``WHEN <col>=...``.
        get_when_value: Returns the value compared against.
        get_then_value: Returns the value assigned when the arm matches.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    set_field: str = Field(min_length=1)
    get_when_field: Callable[[Any], str]
    get_when_value: Callable[[Any], Any]
    get_then_value: Callable[[Any], Any]


class UpdateWhenOption(BaseModel):
    """A conditional batch update request.

    Attributes:
        rows: Source rows, in the order their ``WHEN`` arms are emitted.
        fields: One entry per assigned column.
        max_rows: Rows per generated statement.
        get_extra_set: Receives a whole chunk and returns an extra
            ``SET`` fragment (e.g. ``"flag = 2"``).
        get_extra_where: Receives a whole chunk and returns the ``WHERE``
            condition.  Without it the statement affects every row of the
            table.
    """

    model_config = ConfigDict(extra="forbid")

    rows: list[Any]
    fields: list[UpdateWhenField]
    max_rows: int = Field(default=DEFAULT_MAX_UPDATE_ROWS, gt=0)
    get_extra_set: Callable[[list[Any]], str] | None = None
    get_extra_where: Callable[[list[Any]], str] | None = None
