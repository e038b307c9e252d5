"""Custom exception hierarchy for sqliteorm.

All public errors inherit from SqliteOrmError so callers can catch the base
class for any sqliteorm-specific failure.
"""
from __future__ import annotations

from typing import Any


class SqliteOrmError(Exception):
    """Base exception for all sqliteorm errors."""


class ValidationError(SqliteOrmError):
    """Raised when caller-supplied data cannot be embedded in a statement.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. UNSUPPORTED_VALUE).
        details: Extra context about the offending input.
    """

    def __init__(
        self,
        message: str,
        code: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.details: dict[str, Any] = details or {}


class UnsupportedValueError(ValidationError):
    """Raised when a value is not a str, int, float, bool or an IN list of them."""

    def __init__(self, field: str, value: Any, reason: str | None = None) -> None:
        message = (
            f"Unsupported value {value!r} ({type(value).__name__}) for field '{field}'."
        )
        if reason:
            message = f"{message} {reason}"
        super().__init__(
            message,
            code="UNSUPPORTED_VALUE",
            details={"field": field, "value": value, "type": type(value).__name__},
        )
        self.field = field
        self.value = value


class UnsupportedOperatorError(ValidationError):
    """Raised when a WHERE operator is not one of the known comparison operators."""

    def __init__(self, operator: Any, allowed: list[str]) -> None:
        super().__init__(
            f"Unsupported operator {operator!r}.",
            code="UNSUPPORTED_OPERATOR",
            details={"operator": operator, "allowed_operators": allowed},
        )


class RowShapeError(ValidationError):
    """Raised when a batch row does not share the first row's field set."""

    def __init__(self, expected: list[str], actual: list[str], index: int) -> None:
        super().__init__(
            f"Row {index} has fields {actual}, expected {expected}.",
            code="ROW_SHAPE_MISMATCH",
            details={"expected": expected, "actual": actual, "index": index},
        )


class ConfigError(SqliteOrmError):
    """Raised when builder or table configuration is invalid.

    Args:
        message: Human-readable description.
        errors: Underlying pydantic error entries, when available.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None) -> None:
        super().__init__(message)
        self.errors = errors or []


class CompilationError(SqliteOrmError):
    """Raised when a statement cannot be assembled from the builder state.

    Args:
        message: Human-readable description.
        clause: The clause being rendered when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause


class ExecutionError(SqliteOrmError):
    """Raised by a SQL executor when a statement fails to run.

    Args:
        message: Human-readable description.
        statement: The SQL text that failed.
        params: The parameters bound to the statement.
    """

    def __init__(
        self,
        message: str,
        statement: str | None = None,
        params: list[Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.statement = statement
        self.params = params or []
