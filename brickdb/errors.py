"""Custom exception hierarchy for brickDB.

brickDB raises very little on its own.  Errors coming from SQLite
(``sqlite3.Error`` and subclasses: malformed SQL, constraint violations,
unknown columns) propagate to the caller unmodified, and a missing row is
reported as ``None`` rather than as an exception.

The classes below cover the few failures detected inside brickDB itself.
All of them inherit from :class:`BrickDBError` so callers can catch the base
class for any brickDB-specific failure.
"""
from __future__ import annotations


class BrickDBError(Exception):
    """Base exception for all brickDB errors."""


class CompilationError(BrickDBError):
    """Raised when a query builder cannot be compiled to SQL.

    Args:
        message: Human-readable description.
        clause: The clause being compiled when the error occurred.
    """

    def __init__(self, message: str, clause: str | None = None) -> None:
        super().__init__(message)
        self.clause = clause
