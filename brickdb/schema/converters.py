"""Build :class:`TableSchema` declarations from an existing database.

SQLAlchemy converter
--------------------
:func:`schema_from_sqlalchemy` reflects a live engine and returns one
:class:`~brickdb.schema.columns.TableSchema` per table, ready to be
registered with :meth:`~brickdb.database.Database.define_schema` or dumped
to JSON.

Install the optional dependency before using this module::

    pip install "brickdb[sqlalchemy]"

Example::

    from sqlalchemy import create_engine
    from brickdb.schema.converters import schema_from_sqlalchemy

    engine = create_engine("sqlite:///legacy.db")
    for schema in schema_from_sqlalchemy(engine):
        print(schema.model_dump_json(indent=2))

Reflection is lossy in two respects.  SQLite does not report
``AUTOINCREMENT``, so reflected primary keys always have
``auto_increment=False``.  Only literal defaults (strings, numbers, blobs,
``NULL``) are carried over; expression defaults such as
``CURRENT_TIMESTAMP`` or ``(1+1)`` are dropped with a warning, because a
:class:`~brickdb.schema.columns.ColumnDefinition` default is always
rendered as a literal.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from brickdb.logger import get_logger
from brickdb.schema.columns import (
    ColumnDefinition,
    ColumnType,
    ForeignKey,
    IndexDefinition,
    SqlValue,
    TableSchema,
    UniqueConstraint,
)

if TYPE_CHECKING:
    from sqlalchemy import Column, Engine, MetaData, Table

logger = get_logger(__name__)


def schema_from_sqlalchemy(
    engine: Engine,
    *,
    include_tables: list[str] | None = None,
) -> list[TableSchema]:
    """Reflect ``engine`` into table schemas.

    Args:
        engine: A :class:`sqlalchemy.engine.Engine`.
        include_tables: Optional allowlist of table names.  When ``None``
            every table is reflected.

    Returns:
        Table schemas in dependency order (referenced tables first).

    Raises:
        ImportError: If ``sqlalchemy`` is not installed.
    """
    try:
        from sqlalchemy import MetaData as _MetaData
    except ImportError as exc:
        raise ImportError(
            "SQLAlchemy is required for schema_from_sqlalchemy(). "
            'Install it with: pip install "brickdb[sqlalchemy]"'
        ) from exc

    metadata = _MetaData()
    with engine.connect() as conn:
        metadata.reflect(bind=conn, only=include_tables)
    return _metadata_to_schemas(metadata)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _metadata_to_schemas(metadata: MetaData) -> list[TableSchema]:
    return [_table_to_schema(table) for table in metadata.sorted_tables]


def _table_to_schema(table: Table) -> TableSchema:
    from sqlalchemy import UniqueConstraint as _SAUnique

    single_unique: set[str] = set()
    composite: list[UniqueConstraint] = []
    for constraint in table.constraints:
        if not isinstance(constraint, _SAUnique):
            continue
        names = [c.name for c in constraint.columns]
        if len(names) == 1:
            single_unique.add(names[0])
        elif names:
            composite.append(UniqueConstraint(columns=names))

    members: list[Any] = [_column_to_definition(col, col.name in single_unique) for col in table.columns]
    members.extend(composite)

    indexes = [
        IndexDefinition(
            name=idx.name,
            columns=[c.name for c in idx.columns],
            unique=bool(idx.unique),
        )
        for idx in sorted(table.indexes, key=lambda i: i.name or "")
        if idx.name
    ]
    return TableSchema(name=table.name, members=members, indexes=indexes)


def _column_to_definition(col: Column, unique: bool) -> ColumnDefinition:
    fields: dict[str, Any] = {
        "name": col.name,
        "type": column_affinity(str(col.type)),
        "primary_key": bool(col.primary_key),
        "not_null": col.nullable is False and not col.primary_key,
        "unique": unique,
    }

    if col.server_default is not None:
        arg = col.server_default.arg
        literal = str(getattr(arg, "text", arg))
        try:
            fields["default"] = parse_default(literal)
        except ValueError:
            logger.warning(
                "Skipping non-literal default %s on %s.%s", literal, col.table.name, col.name
            )

    fks = list(col.foreign_keys)
    if fks:
        fk = fks[0]
        fields["references"] = ForeignKey(
            table=fk.column.table.name,
            column=fk.column.name,
            on_delete=_action(fk.constraint.ondelete if fk.constraint is not None else None),
            on_update=_action(fk.constraint.onupdate if fk.constraint is not None else None),
        )

    return ColumnDefinition(**fields)


def _action(value: str | None) -> str | None:
    return value.upper() if value else None


def column_affinity(declared: str) -> ColumnType:
    """Map a declared SQL type to an SQLite column type.

    Follows SQLite's type-affinity rules: ``INT`` anywhere means INTEGER,
    ``CHAR`` / ``CLOB`` / ``TEXT`` mean TEXT, ``BLOB`` or no type means BLOB,
    ``REAL`` / ``FLOA`` / ``DOUB`` mean REAL, and anything else is NUMERIC.
    """
    upper = declared.upper()
    if "INT" in upper:
        return "INTEGER"
    if any(token in upper for token in ("CHAR", "CLOB", "TEXT")):
        return "TEXT"
    if not upper or "BLOB" in upper or upper == "NULL":
        return "BLOB"
    if any(token in upper for token in ("REAL", "FLOA", "DOUB")):
        return "REAL"
    return "NUMERIC"


def parse_default(literal: str) -> SqlValue:
    """Turn a reflected DEFAULT literal back into a Python scalar.

    Quoted strings are unquoted, ``X'..'`` blobs become ``bytes`` and numbers
    become ``int`` / ``float``.

    Raises:
        ValueError: If ``literal`` is an expression such as
            ``CURRENT_TIMESTAMP`` rather than a literal.
    """
    text = literal.strip()
    if text.upper() == "NULL":
        return None
    if len(text) >= 2 and text[0] == text[-1] == "'":
        inner = text[1:-1]
        if "'" not in inner.replace("''", ""):
            return inner.replace("''", "'")
    if text[:2].upper() == "X'" and text.endswith("'"):
        return bytes.fromhex(text[2:-1])
    for cast in (int, float):
        try:
            return cast(text)
        except ValueError:
            continue
    raise ValueError(f"Not a literal default: {literal!r}")
