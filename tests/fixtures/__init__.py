"""Test fixtures: a sample table declaration, matching rows and a sqlite3 executor."""

from __future__ import annotations

import json
import sqlite3
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from sqliteorm.errors import ExecutionError
from sqliteorm.schema.table import TableSchema

_FIXTURES_DIR = Path(__file__).parent


def _load() -> dict[str, Any]:
    return json.loads((_FIXTURES_DIR / "people.json").read_text())


def load_people_schema() -> TableSchema:
    """Load the canonical ``people`` TableSchema from people.json."""
    return TableSchema.model_validate(_load()["schema"])


def load_people_rows() -> list[dict[str, Any]]:
    """Return five sample rows with ``name``, ``age`` and ``gex`` keys.

    ``gex`` is not a declared column; schema-aware helpers must drop it.
    """
    return _load()["rows"]


class Sqlite3Executor:
    """Minimal executor over a sqlite3 connection."""

    def __init__(self, conn: sqlite3.Connection) -> None:
        self._conn = conn

    def execute(self, statement: str, params: Sequence[Any]) -> list[Any]:
        try:
            return self._conn.execute(statement, list(params)).fetchall()
        except sqlite3.Error as exc:
            raise ExecutionError(str(exc), statement, list(params)) from exc
