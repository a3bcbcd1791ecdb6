"""Unit tests for the schema → DDL compiler."""
from __future__ import annotations

import pytest

from brickdb.compile.ddl import (
    CreateIndexBuilder,
    CreateTableBuilder,
    compile_schema,
    drop_table_sql,
    render_literal,
)
from brickdb.schema.helpers import (
    blob,
    default_value,
    index,
    integer,
    not_null,
    primary_key,
    real,
    references,
    table,
    text,
    unique,
)


def _create(schema) -> str:
    return CreateTableBuilder().build(schema)


def test_simple_table():
    schema = table("notes", [primary_key(integer("id"), auto_increment=True), text("body")])
    assert _create(schema) == (
        "CREATE TABLE IF NOT EXISTS notes (id INTEGER PRIMARY KEY AUTOINCREMENT, body TEXT)"
    )


def test_primary_key_never_gets_not_null():
    col = not_null(primary_key(text("id")))
    assert CreateTableBuilder().build_column(col) == "id TEXT PRIMARY KEY"


def test_auto_increment_requires_primary_key():
    col = integer("seq").model_copy(update={"auto_increment": True})
    assert CreateTableBuilder().build_column(col) == "seq INTEGER"


def test_column_clause_order():
    col = references(
        default_value(unique(not_null(integer("owner_id"))), 0),
        "users",
        "id",
        on_delete="CASCADE",
        on_update="RESTRICT",
    )
    assert CreateTableBuilder().build_column(col) == (
        "owner_id INTEGER NOT NULL UNIQUE DEFAULT 0 "
        "REFERENCES users(id) ON DELETE CASCADE ON UPDATE RESTRICT"
    )


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        ("{}", "'{}'"),
        ("it's", "'it''s'"),
        (None, "NULL"),
        (True, "1"),
        (False, "0"),
        (42, "42"),
        (2.5, "2.5"),
        (b"\x01\xff", "X'01ff'"),
    ],
)
def test_render_literal(value, expected):
    assert render_literal(value) == expected


def test_explicit_null_default_is_rendered():
    assert CreateTableBuilder().build_column(default_value(text("note"), None)) == (
        "note TEXT DEFAULT NULL"
    )


def test_quote_in_default_is_escaped():
    col = default_value(text("motto"), "x'); DROP TABLE users; --")
    assert CreateTableBuilder().build_column(col) == (
        "motto TEXT DEFAULT 'x''); DROP TABLE users; --'"
    )


def test_composite_unique_after_columns_in_order():
    schema = table(
        "oauth_providers",
        [
            primary_key(integer("id"), auto_increment=True),
            unique(["user_id", "provider"]),
            not_null(integer("user_id")),
            not_null(text("provider")),
            text("provider_id"),
            unique(["provider", "provider_id"]),
        ],
    )
    sql = _create(schema)
    assert sql.endswith(
        "provider_id TEXT, UNIQUE (user_id, provider), UNIQUE (provider, provider_id))"
    )


def test_orders_fixture_renders_columns_then_unique(schemas):
    assert _create(schemas["orders"]) == (
        "CREATE TABLE IF NOT EXISTS orders ("
        "id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE, "
        "product_id INTEGER REFERENCES products(id) ON DELETE SET NULL, "
        "quantity INTEGER NOT NULL DEFAULT 1, "
        "note TEXT DEFAULT NULL, "
        "UNIQUE (user_id, product_id))"
    )


def test_index_members_are_not_inlined():
    schema = table("t", [integer("a"), index("idx_a", "a")])
    assert "idx_a" not in _create(schema)


def test_index_statements():
    builder = CreateIndexBuilder()
    assert builder.build("users", index("idx_email", "email", unique=True)) == (
        "CREATE UNIQUE INDEX IF NOT EXISTS idx_email ON users (email)"
    )
    assert builder.build("users", index("idx_name_role", ["name", "role"])) == (
        "CREATE INDEX IF NOT EXISTS idx_name_role ON users (name, role)"
    )


def test_compile_schema_orders_inline_indexes_first():
    schema = table(
        "transactions",
        [
            primary_key(integer("id"), auto_increment=True),
            integer("user_id"),
            text("provider"),
            index("idx_user_id", "user_id"),
        ],
        indexes=[{"name": "idx_provider", "columns": ["provider"]}],
    )
    statements = compile_schema(schema)
    assert statements[0].startswith("CREATE TABLE IF NOT EXISTS transactions")
    assert statements[1:] == [
        "CREATE INDEX IF NOT EXISTS idx_user_id ON transactions (user_id)",
        "CREATE INDEX IF NOT EXISTS idx_provider ON transactions (provider)",
    ]


def test_all_column_types_render():
    schema = table("kinds", [integer("i"), text("t"), real("r"), blob("b")])
    assert _create(schema) == "CREATE TABLE IF NOT EXISTS kinds (i INTEGER, t TEXT, r REAL, b BLOB)"


def test_drop_table_sql():
    assert drop_table_sql("users") == "DROP TABLE IF EXISTS users"
