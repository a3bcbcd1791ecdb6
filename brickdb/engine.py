"""SQLite engine boundary.

``SQLiteEngine`` is the only place brickDB talks to :mod:`sqlite3`.  It
executes finished SQL with positional parameters and returns rows as plain
dicts; it never rewrites SQL and never catches driver errors.

The connection is opened in autocommit mode (``isolation_level=None``) so
transactions are exactly the ``BEGIN`` / ``COMMIT`` / ``ROLLBACK`` the
caller issues.
"""
from __future__ import annotations

import sqlite3
from collections.abc import Sequence
from typing import Any

from brickdb.compile.base import Row
from brickdb.logger import get_logger

logger = get_logger(__name__)


def _dict_row(cursor: sqlite3.Cursor, row: tuple[Any, ...]) -> Row:
    return {desc[0]: value for desc, value in zip(cursor.description, row)}


def split_script(script: str) -> list[str]:
    """Split ``script`` into complete SQL statements.

    Pieces between semicolons are accumulated until
    :func:`sqlite3.complete_statement` accepts them, so semicolons inside
    string literals, comments and trigger bodies do not split a statement.
    A trailing statement without a semicolon is kept; an incomplete one is
    returned as-is for SQLite to reject.
    """
    statements: list[str] = []
    buffer = ""
    pieces = script.split(";")
    for i, piece in enumerate(pieces):
        buffer += piece if i == len(pieces) - 1 else piece + ";"
        if sqlite3.complete_statement(buffer):
            if buffer.strip(" \t\r\n;"):
                statements.append(buffer.strip())
            buffer = ""
    if buffer.strip():
        statements.append(buffer.strip())
    return statements


class SQLiteEngine:
    """A single SQLite connection.

    Args:
        path: Database file path or ``":memory:"``.
        timeout: Seconds to wait on a locked database.
        foreign_keys: Enable foreign key enforcement for this connection.
        log_sql: Log each statement at DEBUG level.
    """

    def __init__(
        self,
        path: str = ":memory:",
        timeout: float = 5.0,
        foreign_keys: bool = True,
        log_sql: bool = False,
    ) -> None:
        self.path = path
        self.log_sql = log_sql
        self._conn = sqlite3.connect(path, timeout=timeout, isolation_level=None)
        self._conn.row_factory = _dict_row
        if foreign_keys:
            self._conn.execute("PRAGMA foreign_keys = ON")
        logger.info("Opened SQLite database %s", path)

    # ------------------------------------------------------------------
    # Statement execution
    # ------------------------------------------------------------------

    def execute(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        """Run one statement and return every row it produces."""
        if self.log_sql:
            logger.debug("SQL: %s | %d param(s)", sql, len(params))
        cursor = self._conn.execute(sql, tuple(params))
        try:
            return cursor.fetchall()
        finally:
            cursor.close()

    def query_one(self, sql: str, params: Sequence[Any] = ()) -> Row | None:
        """Run one statement and return its first row, or ``None``."""
        rows = self.execute(sql, params)
        return rows[0] if rows else None

    def execute_script(self, sql: str) -> None:
        """Run one or more semicolon-separated statements without params.

        Statements run one by one on the connection, so a script issued
        between :meth:`begin` and :meth:`commit` is part of that transaction.
        """
        for statement in split_script(sql):
            self.execute(statement)

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    def begin(self) -> None:
        logger.debug("BEGIN TRANSACTION")
        self._conn.execute("BEGIN TRANSACTION")

    def commit(self) -> None:
        logger.debug("COMMIT")
        self._conn.execute("COMMIT")

    def rollback(self) -> None:
        logger.debug("ROLLBACK")
        self._conn.execute("ROLLBACK")

    @property
    def in_transaction(self) -> bool:
        return self._conn.in_transaction

    # ------------------------------------------------------------------
    # Catalog helpers
    # ------------------------------------------------------------------

    def table_names(self) -> list[str]:
        """User tables from ``sqlite_master``, excluding SQLite's own."""
        rows = self.execute(
            "SELECT name FROM sqlite_master WHERE type = 'table' AND name NOT LIKE 'sqlite_%'"
        )
        return [r["name"] for r in rows]

    def last_insert_id(self) -> int:
        """Rowid of the most recent successful INSERT on this connection."""
        row = self.query_one("SELECT last_insert_rowid() AS id")
        return row["id"] if row else 0

    def close(self) -> None:
        self._conn.close()
        logger.info("Closed SQLite database %s", self.path)
