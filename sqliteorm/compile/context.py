"""Render context value object.

Packages the effective configuration and the shared parameter accumulator
for one terminal render.  A single instance is threaded through every clause
renderer so that parameters are appended in exactly the left-to-right order
their placeholders appear in the final statement.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from sqliteorm.compile.base import SQLITE, CompiledSQL, SQLiteDialect
from sqliteorm.schema.config import OrmConfig


@dataclass
class RenderContext:
    """Per-render state.

    Attributes:
        config: Effective configuration (base merged with the override).
        params: Ordered parameter sequence, append-only during a render.
        dialect: Quoting conventions.
    """

    config: OrmConfig
    params: list[Any] = field(default_factory=list)
    dialect: SQLiteDialect = SQLITE

    @property
    def fill(self) -> bool:
        return self.config.fill_value

    @property
    def table(self) -> str:
        """The quoted target table."""
        return self.dialect.quote_table(self.config.table_name)

    def bind(self, value: Any) -> str:
        """Store ``value`` and return its placeholder."""
        self.params.append(value)
        return self.dialect.placeholder

    def finish(self, sql: str) -> CompiledSQL:
        """Normalize ``sql`` and pair it with the collected parameters."""
        return CompiledSQL(sql=self.dialect.normalize(sql), params=list(self.params))
