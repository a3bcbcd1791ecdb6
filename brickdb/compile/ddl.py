"""Schema → DDL compilation.

``CreateTableBuilder`` renders ``CREATE TABLE IF NOT EXISTS`` and
``CreateIndexBuilder`` renders one ``CREATE [UNIQUE] INDEX IF NOT EXISTS``
per index.  :func:`compile_schema` ties both together in the order the
statements must run.

Column clause order is fixed::

    <name> <TYPE> [PRIMARY KEY [AUTOINCREMENT]] [NOT NULL] [UNIQUE]
        [DEFAULT <literal>] [REFERENCES t(c) [ON DELETE a] [ON UPDATE a]]

Identifiers are emitted verbatim.  DEFAULT string literals are quoted with
embedded single quotes doubled.
"""
from __future__ import annotations

from brickdb.schema.columns import (
    ColumnDefinition,
    IndexDefinition,
    SqlValue,
    TableSchema,
    UniqueConstraint,
)


def render_literal(value: SqlValue) -> str:
    """Render a scalar as an SQLite literal for a DEFAULT clause."""
    if value is None:
        return "NULL"
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, (int, float)):
        return repr(value)
    if isinstance(value, bytes):
        return f"X'{value.hex()}'"
    escaped = str(value).replace("'", "''")
    return f"'{escaped}'"


class CreateTableBuilder:
    """Builds the ``CREATE TABLE IF NOT EXISTS`` statement for a schema."""

    def build(self, schema: TableSchema) -> str:
        fragments: list[str] = []
        constraints: list[str] = []
        for member in schema.members:
            if isinstance(member, ColumnDefinition):
                fragments.append(self.build_column(member))
            elif isinstance(member, UniqueConstraint):
                constraints.append(self.build_unique(member))
            # IndexDefinition members become separate CREATE INDEX statements.
        return f"CREATE TABLE IF NOT EXISTS {schema.name} ({', '.join(fragments + constraints)})"

    def build_column(self, col: ColumnDefinition) -> str:
        parts = [col.name, col.type]

        if col.primary_key:
            parts.append("PRIMARY KEY")
            if col.auto_increment:
                parts.append("AUTOINCREMENT")

        if col.not_null and not col.primary_key:
            parts.append("NOT NULL")

        if col.unique:
            parts.append("UNIQUE")

        if col.has_default:
            parts.append(f"DEFAULT {render_literal(col.default)}")

        fk = col.references
        if fk is not None:
            parts.append(f"REFERENCES {fk.table}({fk.column})")
            if fk.on_delete:
                parts.append(f"ON DELETE {fk.on_delete}")
            if fk.on_update:
                parts.append(f"ON UPDATE {fk.on_update}")

        return " ".join(parts)

    @staticmethod
    def build_unique(constraint: UniqueConstraint) -> str:
        return f"UNIQUE ({', '.join(constraint.columns)})"


class CreateIndexBuilder:
    """Builds ``CREATE [UNIQUE] INDEX IF NOT EXISTS`` statements."""

    def build(self, table_name: str, idx: IndexDefinition) -> str:
        keyword = "CREATE UNIQUE INDEX" if idx.unique else "CREATE INDEX"
        return f"{keyword} IF NOT EXISTS {idx.name} ON {table_name} ({', '.join(idx.columns)})"

    def build_all(self, schema: TableSchema) -> list[str]:
        """Inline index members first, then ``schema.indexes``."""
        return [self.build(schema.name, idx) for idx in schema.all_indexes]


def compile_schema(schema: TableSchema) -> list[str]:
    """Return every statement needed to create ``schema``.

    The first element is the CREATE TABLE statement; the rest are index
    statements.
    """
    return [CreateTableBuilder().build(schema), *CreateIndexBuilder().build_all(schema)]


def drop_table_sql(name: str) -> str:
    return f"DROP TABLE IF EXISTS {name}"
