"""Fluent query builder.

``QueryBuilder`` accumulates select / filter / order / paging / mutation
intent and compiles it into a :class:`~brickdb.compile.base.CompiledSQL`
right before execution::

    rows = (
        db.query()
        .select(["name", "price"])
        .from_("products")
        .where({"column": "category", "operator": "=", "value": "tools"})
        .and_({"column": "stock", "operator": ">", "value": 50})
        .order_by("price", "DESC")
        .limit(10)
        .execute()
    )

Lifecycle
---------
A builder starts empty, accumulates state through chained calls, and is
consumed by a terminal call (``execute`` / ``execute_one``).  The terminal
call resets the builder to its empty state, whether or not the statement
succeeds, so a builder can be reused without leaking earlier filters.

``select``, ``order_by``, ``limit`` and ``offset`` overwrite their previous
value; ``where`` / ``and_`` / ``or_`` append.

Mode precedence
---------------
``insert``, ``update`` and ``delete`` are meant to be used alone.  When more
than one is set the builder does not complain; it resolves deterministically:
INSERT, then UPDATE, then DELETE, then a ``raw()`` statement, then SELECT.

Builders are not thread-safe.  Every piece of state, including the
parameters, lives on the instance, so separate builders sharing one
database never interfere with each other.
"""
from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

from brickdb.compile.base import CompiledSQL, Executor, Row
from brickdb.compile.where import WhereFragment, join_fragments, render_condition
from brickdb.errors import CompilationError
from brickdb.schema.conditions import ConditionLike, to_condition

#: LIMIT value meaning "no limit"; SQLite needs a LIMIT before any OFFSET.
UNBOUNDED_LIMIT = -1

_DIRECTIONS = frozenset({"ASC", "DESC"})


class QueryBuilder:
    """Stateful, single-owner SQL builder bound to an executor.

    Args:
        executor: Object providing ``execute(sql, params) -> list[dict]``,
            normally the database's :class:`~brickdb.engine.SQLiteEngine`.
    """

    def __init__(self, executor: Executor) -> None:
        self._executor = executor
        self._reset()

    # ------------------------------------------------------------------
    # SELECT state
    # ------------------------------------------------------------------

    def select(self, columns: str | Sequence[str] | None = None) -> QueryBuilder:
        """Columns to return; ``None`` or empty means ``*``."""
        if isinstance(columns, str):
            columns = [columns]
        self._select = list(columns) if columns else ["*"]
        return self

    def from_(self, table: str) -> QueryBuilder:
        self._from = table
        return self

    def where(self, condition: ConditionLike | Sequence[ConditionLike]) -> QueryBuilder:
        """Append one or more AND-joined conditions."""
        conditions = condition if isinstance(condition, (list, tuple)) else [condition]
        for cond in conditions:
            self._where.append(render_condition(to_condition(cond)))
        return self

    def and_(self, condition: ConditionLike) -> QueryBuilder:
        return self.where(condition)

    def or_(self, condition: ConditionLike) -> QueryBuilder:
        """Append one condition joined with ``OR`` (no parentheses)."""
        self._where.append(render_condition(to_condition(condition), is_or=True))
        return self

    def order_by(self, column: str, direction: str = "ASC") -> QueryBuilder:
        direction = direction.upper()
        if direction not in _DIRECTIONS:
            raise CompilationError(
                f"ORDER BY direction must be ASC or DESC, got {direction!r}.",
                clause="ORDER BY",
            )
        self._order_by = (column, direction)
        return self

    def limit(self, count: int) -> QueryBuilder:
        self._limit = count
        return self

    def offset(self, count: int) -> QueryBuilder:
        self._offset = count
        return self

    # ------------------------------------------------------------------
    # Mutation modes
    # ------------------------------------------------------------------

    def insert(self, table: str, data: Mapping[str, Any]) -> QueryBuilder:
        self._from = table
        self._insert_data = dict(data)
        return self

    def update(self, table: str, data: Mapping[str, Any]) -> QueryBuilder:
        self._from = table
        self._update_data = dict(data)
        return self

    def delete(self, table: str) -> QueryBuilder:
        self._from = table
        self._is_delete = True
        return self

    def raw(self, sql: str, params: Sequence[Any] | None = None) -> QueryBuilder:
        """Replace the SELECT with a literal statement.

        Ignored when ``insert``, ``update`` or ``delete`` was also called.
        """
        self._raw = CompiledSQL(sql, list(params or []))
        return self

    # ------------------------------------------------------------------
    # Compilation
    # ------------------------------------------------------------------

    def compile(self) -> CompiledSQL:
        """Render the accumulated state without executing or resetting it."""
        if self._insert_data is not None:
            return self._compile_insert(self._insert_data)
        if self._update_data is not None:
            return self._compile_update(self._update_data)
        if self._is_delete:
            return self._with_where(f"DELETE FROM {self._from}", [])
        if self._raw is not None:
            return CompiledSQL(self._raw.sql, list(self._raw.params))
        return self._compile_select()

    def _compile_insert(self, data: dict[str, Any]) -> CompiledSQL:
        if not data:
            return CompiledSQL(f"INSERT INTO {self._from} DEFAULT VALUES", [])
        columns = ", ".join(data)
        placeholders = ", ".join("?" for _ in data)
        return CompiledSQL(
            f"INSERT INTO {self._from} ({columns}) VALUES ({placeholders})",
            list(data.values()),
        )

    def _compile_update(self, data: dict[str, Any]) -> CompiledSQL:
        # SET placeholders precede WHERE placeholders in the statement text.
        set_clause = ", ".join(f"{col} = ?" for col in data)
        return self._with_where(f"UPDATE {self._from} SET {set_clause}", list(data.values()))

    def _compile_select(self) -> CompiledSQL:
        compiled = self._with_where(f"SELECT {', '.join(self._select)} FROM {self._from}", [])
        sql = compiled.sql

        if self._order_by is not None:
            column, direction = self._order_by
            sql += f" ORDER BY {column} {direction}"

        if self._limit is not None:
            sql += f" LIMIT {int(self._limit)}"

        if self._offset is not None:
            if self._limit is None:
                sql += f" LIMIT {UNBOUNDED_LIMIT}"
            sql += f" OFFSET {int(self._offset)}"

        return CompiledSQL(sql, compiled.params)

    def _with_where(self, sql: str, params: list[Any]) -> CompiledSQL:
        if not self._where:
            return CompiledSQL(sql, params)
        where_sql, where_params = join_fragments(self._where)
        return CompiledSQL(f"{sql} WHERE {where_sql}", params + where_params)

    # ------------------------------------------------------------------
    # Terminal calls
    # ------------------------------------------------------------------

    def execute(self) -> list[Row]:
        """Compile, reset, and run the statement; returns all rows."""
        try:
            compiled = self.compile()
        finally:
            self._reset()
        return self._executor.execute(compiled.sql, compiled.params)

    def execute_one(self) -> Row | None:
        """Like :meth:`execute` but returns the first row or ``None``."""
        rows = self.execute()
        return rows[0] if rows else None

    def execute_raw(self, sql: str, params: Sequence[Any] | None = None) -> list[Row]:
        """Run ``sql`` directly; builder state is left untouched."""
        return self._executor.execute(sql, list(params or []))

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    def _reset(self) -> None:
        self._select: list[str] = ["*"]
        self._from: str = ""
        self._where: list[WhereFragment] = []
        self._order_by: tuple[str, str] | None = None
        self._limit: int | None = None
        self._offset: int | None = None
        self._insert_data: dict[str, Any] | None = None
        self._update_data: dict[str, Any] | None = None
        self._is_delete: bool = False
        self._raw: CompiledSQL | None = None
