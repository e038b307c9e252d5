"""Shared pytest fixtures for sqliteorm unit and integration tests."""
from __future__ import annotations

import sqlite3
from collections.abc import Iterator
from typing import Any

import pytest

from sqliteorm.orm import SqliteOrm
from sqliteorm.schema.table import TableSchema
from tests.fixtures import Sqlite3Executor, load_people_rows, load_people_schema


@pytest.fixture()
def orm() -> SqliteOrm:
    """Fill-mode builder for table ``t``."""
    return SqliteOrm("t")


@pytest.fixture()
def literal_orm() -> SqliteOrm:
    """Literal-mode builder for table ``t``."""
    return SqliteOrm("t", fill_value=False)


@pytest.fixture(scope="session")
def people_schema() -> TableSchema:
    return load_people_schema()


@pytest.fixture()
def people_rows() -> list[dict[str, Any]]:
    return load_people_rows()


@pytest.fixture()
def db() -> Iterator[sqlite3.Connection]:
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    yield conn
    conn.close()


@pytest.fixture()
def executor(db: sqlite3.Connection) -> Sqlite3Executor:
    return Sqlite3Executor(db)
