"""The executor boundary.

sqliteorm renders statements; running them belongs to a caller-supplied
executor.  Any object with a matching ``execute`` method satisfies
:class:`SQLExecutor`, e.g. a thin wrapper over :mod:`sqlite3`::

    class Sqlite3Executor:
        def __init__(self, conn):
            self._conn = conn

        def execute(self, statement, params):
            try:
                return self._conn.execute(statement, params).fetchall()
            except sqlite3.Error as exc:
                raise ExecutionError(str(exc), statement, list(params)) from exc

:func:`execute_batches` dispatches the independent per-chunk statements of a
batch INSERT / conditional UPDATE and reports partial success.
"""
from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from sqliteorm.compile.base import CompiledSQL
from sqliteorm.errors import ExecutionError

logger = logging.getLogger(__name__)


@runtime_checkable
class SQLExecutor(Protocol):
    """Runs one statement with positional parameters.

    Implementations return the result rows (``[]`` for statements without a
    result set) and raise :class:`~sqliteorm.errors.ExecutionError` on failure.
    """

    def execute(self, statement: str, params: Sequence[Any]) -> list[Any]: ...


@dataclass
class ChunkFailure:
    """A chunk whose statement raised.

    Attributes:
        index: Position of the chunk in the submitted list.
        statement: The failing statement, ready to retry on its own.
        error: The raised exception.
    """

    index: int
    statement: CompiledSQL
    error: ExecutionError


@dataclass
class BatchOutcome:
    """Result of :func:`execute_batches`.

    Attributes:
        results: ``(index, rows)`` for each chunk that succeeded.
        failures: One entry per chunk that failed.
    """

    results: list[tuple[int, list[Any]]] = field(default_factory=list)
    failures: list[ChunkFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def execute_batches(executor: SQLExecutor, statements: Sequence[CompiledSQL]) -> BatchOutcome:
    """Run every statement independently, collecting successes and failures.

    A failing chunk does not stop the remaining ones; wrap the call in a
    transaction on the executor side for all-or-nothing behaviour.

    Args:
        executor: Statement runner.
        statements: Per-chunk statements, e.g. from ``SqliteOrm.inserts``.

    Returns:
        A :class:`BatchOutcome`; empty statements are skipped.
    """
    outcome = BatchOutcome()
    for index, compiled in enumerate(statements):
        if compiled.is_empty:
            continue
        try:
            rows = executor.execute(compiled.sql, compiled.params)
        except ExecutionError as exc:
            logger.error("Chunk %d of %d failed: %s", index + 1, len(statements), exc)
            outcome.failures.append(ChunkFailure(index=index, statement=compiled, error=exc))
            continue
        logger.debug("Chunk %d of %d succeeded", index + 1, len(statements))
        outcome.results.append((index, rows))
    return outcome
