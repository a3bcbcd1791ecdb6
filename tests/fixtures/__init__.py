"""Test fixtures: sample schema JSON, product rows and a recording executor."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from brickdb.schema.columns import TableSchema

_FIXTURES_DIR = Path(__file__).parent

#: Rows for the ``products`` table, in insertion order.
PRODUCT_ROWS = [
    {"name": "Widget", "price": 9.99, "stock": 100, "category": "tools"},
    {"name": "Gadget", "price": 19.99, "stock": 50, "category": "electronics"},
    {"name": "Gizmo", "price": 14.99, "stock": 75, "category": "tools"},
    {"name": "Doohickey", "price": 4.99, "stock": 200, "category": "misc"},
]


class RecordingExecutor:
    """Executor stub that records statements and replays canned rows."""

    def __init__(self, rows: list[dict[str, Any]] | None = None) -> None:
        self.rows = rows or []
        self.calls: list[tuple[str, list[Any]]] = []

    def execute(self, sql: str, params=()) -> list[dict[str, Any]]:
        self.calls.append((sql, list(params)))
        return list(self.rows)


def load_schemas() -> dict[str, TableSchema]:
    """Load the canonical sample schemas from schema.json, keyed by name."""
    data = json.loads((_FIXTURES_DIR / "schema.json").read_text())
    schemas = [TableSchema.model_validate(t) for t in data["tables"]]
    return {s.name: s for s in schemas}


def load_schema(name: str) -> TableSchema:
    return load_schemas()[name]
