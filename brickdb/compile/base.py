"""Compiler output and the executor boundary.

``CompiledSQL`` is what the query builder produces: SQL text with ``?``
placeholders plus the parameter list aligned with them.  ``Executor`` is the
single primitive the builder needs from the database layer; anything with an
``execute(sql, params)`` method returning row dicts qualifies.
"""
from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol

Row = dict[str, Any]


@dataclass(frozen=True)
class CompiledSQL:
    """The output of a successful compilation.

    Attributes:
        sql: The compiled SQL string with positional ``?`` placeholders.
        params: Values for the placeholders, in left-to-right order.
    """

    sql: str
    params: list[Any] = field(default_factory=list)

    @property
    def placeholder_count(self) -> int:
        """Number of ``?`` placeholders outside string literals."""
        count = 0
        in_literal = False
        for ch in self.sql:
            if ch == "'":
                in_literal = not in_literal
            elif ch == "?" and not in_literal:
                count += 1
        return count


class Executor(Protocol):
    """Anything able to run one parameterized statement."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> list[Row]:
        ...
