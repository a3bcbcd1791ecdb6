"""The ``Database`` facade.

``Database`` owns one :class:`~brickdb.engine.SQLiteEngine` and one
:class:`~brickdb.schema.registry.SchemaRegistry`.  Everything beyond schema
management is a thin composition of :class:`~brickdb.compile.builder.QueryBuilder`
calls::

    from brickdb import Database, integer, primary_key, real, table, text

    with Database() as db:
        db.define_schema(table("products", [
            primary_key(integer("id"), auto_increment=True),
            text("name"),
            real("price"),
        ]))
        widget = db.insert("products", {"name": "Widget", "price": 9.99})
        db.update("products", widget["id"], {"price": 12.5})

Single-row lookups return ``None`` when nothing matches.  SQLite errors
propagate unchanged.
"""
from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, Sequence
from contextlib import contextmanager
from typing import Any, TypeVar

from brickdb.compile.base import Row
from brickdb.compile.builder import QueryBuilder
from brickdb.compile.ddl import compile_schema, drop_table_sql
from brickdb.engine import SQLiteEngine
from brickdb.logger import get_logger
from brickdb.schema.columns import TableSchema
from brickdb.schema.conditions import WhereCondition
from brickdb.schema.registry import SchemaRegistry
from brickdb.settings import BrickDBSettings

logger = get_logger(__name__)

T = TypeVar("T")


class Database:
    """A SQLite database with a schema DSL and a query builder.

    Args:
        path: Database path; overrides ``settings.path`` when given.
        settings: Connection settings.  Defaults to :class:`BrickDBSettings`
            loaded from the environment.
    """

    def __init__(self, path: str | None = None, *, settings: BrickDBSettings | None = None) -> None:
        settings = settings or BrickDBSettings()
        if path is not None:
            settings = settings.model_copy(update={"path": path})
        self.settings = settings
        self.schemas = SchemaRegistry()
        self._engine = SQLiteEngine(
            settings.path,
            timeout=settings.timeout,
            foreign_keys=settings.foreign_keys,
            log_sql=settings.log_sql,
        )

    @property
    def engine(self) -> SQLiteEngine:
        return self._engine

    def close(self) -> None:
        self._engine.close()

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Schema management
    # ------------------------------------------------------------------

    def define_schema(self, schema: TableSchema) -> None:
        """Register ``schema`` and create its table and indexes.

        Re-declaring a table replaces the registry entry, but an existing
        table is left as it is (``IF NOT EXISTS``).
        """
        self.schemas.register(schema)
        for statement in compile_schema(schema):
            self._engine.execute(statement)
        logger.info("Defined table %s (%d index(es))", schema.name, len(schema.all_indexes))

    def get_schema(self, table: str) -> TableSchema | None:
        return self.schemas.get(table)

    def list_tables(self) -> list[str]:
        return self._engine.table_names()

    def drop_table(self, table: str) -> None:
        self._engine.execute(drop_table_sql(table))
        self.schemas.remove(table)
        logger.info("Dropped table %s", table)

    # ------------------------------------------------------------------
    # Query builder
    # ------------------------------------------------------------------

    def query(self) -> QueryBuilder:
        """Return a fresh builder bound to this database."""
        return QueryBuilder(self._engine)

    # ------------------------------------------------------------------
    # Quick operations
    # ------------------------------------------------------------------

    @staticmethod
    def _equalities(conditions: Mapping[str, Any]) -> list[WhereCondition]:
        return [WhereCondition(column=col, operator="=", value=val) for col, val in conditions.items()]

    def find(self, table: str, conditions: Mapping[str, Any]) -> list[Row]:
        """All rows whose columns equal every value in ``conditions``."""
        return self.query().select().from_(table).where(self._equalities(conditions)).execute()

    def find_one(self, table: str, conditions: Mapping[str, Any]) -> Row | None:
        return (
            self.query()
            .select()
            .from_(table)
            .where(self._equalities(conditions))
            .limit(1)
            .execute_one()
        )

    def find_by_id(self, table: str, id: int | str) -> Row | None:
        return self.find_one(table, {"id": id})

    def all(self, table: str) -> list[Row]:
        return self.query().select().from_(table).execute()

    def insert(self, table: str, data: Mapping[str, Any]) -> Row | None:
        """Insert one row and return it as stored.

        The row is read back through ``last_insert_rowid()``, so defaults
        and trigger effects are visible in the result.
        """
        self.query().insert(table, data).execute()
        return self.find_by_id(table, self._engine.last_insert_id())

    def update(self, table: str, id: int | str, data: Mapping[str, Any]) -> Row | None:
        """Update the row with ``id`` and return it, or ``None`` if absent."""
        self.query().update(table, data).where(
            WhereCondition(column="id", operator="=", value=id)
        ).execute()
        return self.find_by_id(table, id)

    def delete(self, table: str, id: int | str) -> bool:
        """Delete the row with ``id``.

        Always returns ``True``; the affected-row count is not inspected.
        """
        self.query().delete(table).where(
            WhereCondition(column="id", operator="=", value=id)
        ).execute()
        return True

    # ------------------------------------------------------------------
    # Transactions
    # ------------------------------------------------------------------

    @contextmanager
    def atomic(self) -> Iterator[Database]:
        """``BEGIN`` on entry, ``COMMIT`` on success, ``ROLLBACK`` on error.

        The original exception is always re-raised.  If the rollback fails
        too, that failure is logged and the original exception still wins.
        """
        self._engine.begin()
        try:
            yield self
            self._engine.commit()
        except BaseException:
            try:
                self._engine.rollback()
            except Exception:
                logger.exception("Rollback failed; re-raising the original error")
            raise

    def transaction(self, callback: Callable[[Database], T]) -> T:
        """Run ``callback(self)`` inside :meth:`atomic` and return its result."""
        with self.atomic() as db:
            return callback(db)

    # ------------------------------------------------------------------
    # Raw SQL
    # ------------------------------------------------------------------

    def exec(self, sql: str) -> None:
        """Run one or more statements, discarding any rows.

        Inside :meth:`transaction` or :meth:`atomic` the statements join the
        open transaction and roll back with it.
        """
        self._engine.execute_script(sql)

    def raw(self, sql: str, params: Sequence[Any] | None = None) -> list[Row]:
        return self._engine.execute(sql, list(params or []))

    def raw_one(self, sql: str, params: Sequence[Any] | None = None) -> Row | None:
        return self._engine.query_one(sql, list(params or []))
