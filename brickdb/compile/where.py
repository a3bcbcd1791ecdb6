"""WHERE clause compilation.

Every ``where`` / ``and_`` / ``or_`` call on the query builder renders its
conditions straight away into :class:`WhereFragment` objects.  Each
fragment keeps its own parameters, so nothing is shared between builders.

Joining is flat and left to right: an OR fragment is preceded by ``OR``,
any other fragment after the first by ``AND``.  No parentheses are added,
so SQLite's own precedence applies (``AND`` binds tighter than ``OR``)::

    where(A).and_(B).or_(C)   ->   A AND B OR C
    where(A).or_(B).and_(C)   ->   A OR B AND C

Callers that need grouping should use ``raw()``.
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from brickdb.schema.conditions import NULL_OPERATORS, WhereCondition


@dataclass(frozen=True)
class WhereFragment:
    """One rendered condition.

    Attributes:
        sql: Condition text, without a leading connector.
        params: Values bound by this condition, in placeholder order.
        is_or: Join with ``OR`` instead of ``AND``.
    """

    sql: str
    params: tuple[Any, ...] = ()
    is_or: bool = False


def _is_value_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


def render_condition(cond: WhereCondition, is_or: bool = False) -> WhereFragment:
    """Render one condition to SQL with ``?`` placeholders."""
    if cond.operator in NULL_OPERATORS:
        return WhereFragment(f"{cond.column} {cond.operator}", (), is_or)

    if cond.operator == "IN" and _is_value_list(cond.value):
        values = tuple(cond.value)
        placeholders = ", ".join("?" for _ in values)
        return WhereFragment(f"{cond.column} IN ({placeholders})", values, is_or)

    return WhereFragment(f"{cond.column} {cond.operator} ?", (cond.value,), is_or)


def join_fragments(fragments: Iterable[WhereFragment]) -> tuple[str, list[Any]]:
    """Join fragments into WHERE text and the matching parameter list.

    Returns:
        ``(sql, params)``; ``sql`` is empty when there are no fragments.
    """
    parts: list[str] = []
    params: list[Any] = []
    for i, frag in enumerate(fragments):
        if frag.is_or:
            parts.append("OR")
        elif i > 0:
            parts.append("AND")
        parts.append(frag.sql)
        params.extend(frag.params)
    return " ".join(parts), params
