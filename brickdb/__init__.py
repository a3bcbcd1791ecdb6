"""brickDB – schema DSL and fluent query builder for SQLite.

Declare Tables. Build Queries. Bind Every Value.

Public API
----------
``Database``
    Owns the SQLite connection and the schema registry; offers
    ``define_schema``, ``query()``, quick operations (``find``, ``insert``,
    ``update``, ``delete``, ...), transactions and raw SQL.

``QueryBuilder``
    Fluent SELECT / INSERT / UPDATE / DELETE builder compiling to ``?``
    placeholders and an aligned parameter list.

Schema helpers
    ``table``, ``column``, ``integer``, ``text``, ``real``, ``blob``,
    ``numeric``, ``primary_key``, ``not_null``, ``unique``,
    ``default_value``, ``references``, ``index``.

Example::

    from brickdb import Database, integer, primary_key, table, text

    db = Database()
    db.define_schema(table("notes", [
        primary_key(integer("id"), auto_increment=True),
        text("body"),
    ]))
    note = db.insert("notes", {"body": "hello"})
"""

from __future__ import annotations

from brickdb.compile.base import CompiledSQL
from brickdb.compile.builder import QueryBuilder
from brickdb.compile.ddl import compile_schema
from brickdb.database import Database
from brickdb.engine import SQLiteEngine
from brickdb.errors import BrickDBError, CompilationError
from brickdb.logger import get_logger, setup_logging
from brickdb.schema.columns import (
    ColumnDefinition,
    ForeignKey,
    IndexDefinition,
    TableSchema,
    UniqueConstraint,
)
from brickdb.schema.conditions import WhereCondition
from brickdb.schema.helpers import (
    blob,
    column,
    default_value,
    index,
    integer,
    not_null,
    numeric,
    primary_key,
    real,
    references,
    table,
    text,
    unique,
)
from brickdb.schema.registry import SchemaRegistry
from brickdb.settings import BrickDBSettings

__all__ = [
    # Core
    "Database",
    "QueryBuilder",
    "CompiledSQL",
    "SQLiteEngine",
    "SchemaRegistry",
    "compile_schema",
    # Schema types
    "TableSchema",
    "ColumnDefinition",
    "ForeignKey",
    "UniqueConstraint",
    "IndexDefinition",
    "WhereCondition",
    # Schema helpers
    "table",
    "column",
    "integer",
    "text",
    "real",
    "blob",
    "numeric",
    "primary_key",
    "not_null",
    "unique",
    "default_value",
    "references",
    "index",
    # Configuration and logging
    "BrickDBSettings",
    "get_logger",
    "setup_logging",
    # Errors
    "BrickDBError",
    "CompilationError",
]
