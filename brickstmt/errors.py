"""Custom exception hierarchy for brickstmt.

All public errors inherit from BrickStmtError so callers can catch the base
class for any brickstmt-specific failure.  Both build modes (parameterized
and literal) raise these; a failed build never returns partial SQL.
"""
from __future__ import annotations

from typing import Any


class BrickStmtError(Exception):
    """Base exception for all brickstmt errors."""


class StatementError(BrickStmtError):
    """Raised when a statement cannot be assembled from the builder state.

    Args:
        message: Human-readable description.
        code: Machine-readable error code (e.g. MISSING_SOURCE).
        details: Extra context about the offending builder state.
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

    def to_error_response(self) -> dict[str, Any]:
        """Returns a structured error response."""
        return {
            "error": self.code,
            "message": str(self),
            "details": self.details,
        }


class MissingSourceError(StatementError):
    """Raised when no table or view was specified."""

    def __init__(self) -> None:
        super().__init__(
            "Table or view was not specified.",
            code="MISSING_SOURCE",
        )


class MissingColumnsError(StatementError):
    """Raised when a non-DELETE statement has no registered columns."""

    def __init__(self, source: str, command: str) -> None:
        super().__init__(
            f"No columns were specified for {command} on '{source}'.",
            code="MISSING_COLUMNS",
            details={"source": source, "command": command},
        )


class UnsupportedClauseError(StatementError):
    """Raised when a clause is used with a command that cannot carry it."""

    def __init__(self, clause: str, command: str) -> None:
        super().__init__(
            f"{clause} is not supported when the command is {command}.",
            code="UNSUPPORTED_CLAUSE",
            details={"clause": clause, "command": command},
        )


class RawFragmentError(StatementError):
    """Raised when a raw (non-parameter) value cannot be rendered as SQL text."""

    def __init__(self, column: str, value: Any) -> None:
        super().__init__(
            f"Raw fragment value for column '{column}' must be textual, "
            f"got {type(value).__name__}.",
            code="RAW_FRAGMENT_NOT_TEXTUAL",
            details={"column": column, "type": type(value).__name__},
        )


class ProfileConfigError(BrickStmtError):
    """Raised when an EngineDialect is misconfigured.

    Detected at :meth:`DialectProfileBuilder.build` time, before any
    statement is assembled.

    Args:
        message: Human-readable description.
        setting: Name of the offending setting.
    """

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting or ""
