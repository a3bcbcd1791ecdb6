"""WHERE condition model.

A condition is a ``(column, operator, value)`` triple.  Builders accept
either :class:`WhereCondition` instances or plain mappings with the same
keys::

    WhereCondition(column="stock", operator=">", value=50)
    {"column": "category", "operator": "IN", "value": ["tools", "toys"]}
    {"column": "deleted_at", "operator": "IS NULL"}

Only the operator is checked here.  Column names and values go to SQLite
as-is, so a misspelled column surfaces as an engine error at execution.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal, Union

from pydantic import BaseModel, ConfigDict

Operator = Literal["=", "!=", ">", "<", ">=", "<=", "LIKE", "IN", "IS NULL", "IS NOT NULL"]

#: Operators that take no value and bind no parameter.
NULL_OPERATORS: frozenset[str] = frozenset({"IS NULL", "IS NOT NULL"})


class WhereCondition(BaseModel):
    """One filter condition.

    Attributes:
        column: Column name (rendered verbatim).
        operator: Comparison operator.
        value: Scalar for most operators, a list or tuple for ``IN``, unused
            for the null tests.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    column: str
    operator: Operator
    value: Any = None


ConditionLike = Union[WhereCondition, Mapping[str, Any]]


def to_condition(cond: ConditionLike) -> WhereCondition:
    """Coerce a mapping into a :class:`WhereCondition`."""
    if isinstance(cond, WhereCondition):
        return cond
    return WhereCondition.model_validate(dict(cond))
