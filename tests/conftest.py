"""Shared pytest fixtures for brickDB unit and integration tests."""
from __future__ import annotations

from collections.abc import Iterator

import pytest

from brickdb.database import Database
from brickdb.schema.columns import TableSchema
from brickdb.settings import BrickDBSettings
from tests.fixtures import PRODUCT_ROWS, RecordingExecutor, load_schemas


@pytest.fixture(scope="session")
def schemas() -> dict[str, TableSchema]:
    """Canonical sample schemas shared across all tests."""
    return load_schemas()


@pytest.fixture()
def executor() -> RecordingExecutor:
    return RecordingExecutor()


@pytest.fixture()
def db() -> Iterator[Database]:
    """Empty in-memory database, independent of BRICKDB_* variables."""
    database = Database(settings=BrickDBSettings(_env_file=None, path=":memory:"))
    yield database
    database.close()


@pytest.fixture()
def products_db(db: Database, schemas: dict[str, TableSchema]) -> Database:
    """Database with the ``products`` table holding the four sample rows."""
    db.define_schema(schemas["products"])
    for row in PRODUCT_ROWS:
        db.insert("products", row)
    return db
