"""Render output and SQLite quoting conventions.

``CompiledSQL`` is the single return shape of every terminal builder call:
literal mode yields an empty ``params`` list, fill mode one entry per ``?``.
"""
from __future__ import annotations

import re
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

_WHITESPACE_RE = re.compile(r"\s+")


@dataclass
class CompiledSQL:
    """The output of a terminal render.

    Attributes:
        sql: The SQL statement; empty when nothing was rendered.
        params: Positional values for the ``?`` placeholders, in the order the
            placeholders appear in ``sql``.  Empty in literal mode.

    Unpacks as a pair for direct use with DB-API cursors::

        sql, params = orm.select().where("id", "=", 1).get_sql_raw()
        cursor.execute(sql, params)
    """

    sql: str
    params: list[Any] = field(default_factory=list)

    def __iter__(self) -> Iterator[Any]:
        yield self.sql
        yield self.params

    @property
    def is_empty(self) -> bool:
        """``True`` when no statement was produced (no active operation)."""
        return not self.sql

    @classmethod
    def empty(cls) -> CompiledSQL:
        return cls(sql="", params=[])


class SQLiteDialect:
    """Quoting and placeholder conventions of the target dialect.

    Identifiers and literal strings are wrapped in double quotes with no
    escaping of embedded quotes.  Callers must not pass untrusted text in
    literal mode; fill mode binds every value instead.
    """

    placeholder = "?"

    def quote_table(self, name: str) -> str:
        return f'"{name}"'

    def quote_string(self, value: str) -> str:
        return f'"{value}"'

    def normalize(self, sql: str) -> str:
        """Collapse runs of whitespace to one space and trim."""
        return _WHITESPACE_RE.sub(" ", sql).strip()


#: Shared stateless dialect instance.
SQLITE = SQLiteDialect()
