"""Schema DSL: small pure functions that build descriptor models.

Modifiers take a column and return a copy with one field changed, so they
compose by nesting::

    from brickdb.schema.helpers import (
        default_value, index, integer, not_null, primary_key,
        references, table, text, unique,
    )

    users = table("users", [
        primary_key(integer("id"), auto_increment=True),
        not_null(unique(text("email"))),
        default_value(text("role"), "member"),
        references(integer("org_id"), "orgs", "id", on_delete="CASCADE"),
        unique(["email", "org_id"]),
        index("idx_users_org", "org_id"),
    ])
"""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import Any, overload

from brickdb.schema.columns import (
    ColumnDefinition,
    ColumnType,
    ForeignKey,
    ForeignKeyAction,
    IndexDefinition,
    SqlValue,
    TableSchema,
    UniqueConstraint,
)

# ---------------------------------------------------------------------------
# Tables and columns
# ---------------------------------------------------------------------------


def table(
    name: str,
    members: Iterable[ColumnDefinition | UniqueConstraint | IndexDefinition],
    indexes: Iterable[IndexDefinition | dict[str, Any]] | None = None,
) -> TableSchema:
    """Build a :class:`TableSchema`.

    Args:
        name: Table name.
        members: Columns, composite unique constraints and inline indexes.
        indexes: Optional extra indexes; plain dicts with ``name``,
            ``columns`` and optional ``unique`` keys are accepted.
    """
    return TableSchema(name=name, members=list(members), indexes=list(indexes or []))


def column(name: str, type: ColumnType) -> ColumnDefinition:
    return ColumnDefinition(name=name, type=type)


def integer(name: str) -> ColumnDefinition:
    return column(name, "INTEGER")


def text(name: str) -> ColumnDefinition:
    return column(name, "TEXT")


def real(name: str) -> ColumnDefinition:
    return column(name, "REAL")


def blob(name: str) -> ColumnDefinition:
    return column(name, "BLOB")


def numeric(name: str) -> ColumnDefinition:
    return column(name, "NUMERIC")


# ---------------------------------------------------------------------------
# Column modifiers
# ---------------------------------------------------------------------------


def primary_key(col: ColumnDefinition, auto_increment: bool = False) -> ColumnDefinition:
    return col.model_copy(update={"primary_key": True, "auto_increment": auto_increment})


def not_null(col: ColumnDefinition) -> ColumnDefinition:
    return col.model_copy(update={"not_null": True})


@overload
def unique(col: ColumnDefinition) -> ColumnDefinition: ...


@overload
def unique(col: str | Sequence[str]) -> UniqueConstraint: ...


def unique(col: ColumnDefinition | str | Sequence[str]) -> ColumnDefinition | UniqueConstraint:
    """Mark a column unique, or build a composite constraint.

    Passing a column returns a copy with ``unique=True``.  Passing a list of
    column names returns a :class:`UniqueConstraint` table member; a bare
    name is a one-column constraint.
    """
    if isinstance(col, ColumnDefinition):
        return col.model_copy(update={"unique": True})
    cols = [col] if isinstance(col, str) else list(col)
    return UniqueConstraint(columns=cols)


def default_value(col: ColumnDefinition, value: SqlValue) -> ColumnDefinition:
    return col.model_copy(update={"default": value})


def references(
    col: ColumnDefinition,
    table: str,
    column: str,
    on_delete: ForeignKeyAction | None = None,
    on_update: ForeignKeyAction | None = None,
) -> ColumnDefinition:
    """Attach a foreign key to ``col``."""
    fk = ForeignKey(table=table, column=column, on_delete=on_delete, on_update=on_update)
    return col.model_copy(update={"references": fk})


def index(name: str, columns: str | Sequence[str], unique: bool = False) -> IndexDefinition:
    """Build an inline index member over one or more columns."""
    cols = [columns] if isinstance(columns, str) else list(columns)
    return IndexDefinition(name=name, columns=cols, unique=unique)
