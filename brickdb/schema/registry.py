"""In-process registry of declared table schemas."""
from __future__ import annotations

from collections.abc import Iterator

from brickdb.schema.columns import TableSchema


class SchemaRegistry:
    """Maps table names to the :class:`TableSchema` last declared for them.

    Re-registering a name replaces the previous entry outright; nothing is
    merged.  The registry is a cache of declarations only.  It never alters
    the database, so replacing an entry does not change an existing table.
    """

    def __init__(self) -> None:
        self._schemas: dict[str, TableSchema] = {}

    def register(self, schema: TableSchema) -> None:
        self._schemas[schema.name] = schema

    def get(self, name: str) -> TableSchema | None:
        """Returns the schema for ``name``, or ``None`` when undeclared."""
        return self._schemas.get(name)

    def remove(self, name: str) -> TableSchema | None:
        """Evicts ``name`` and returns the removed schema, if any."""
        return self._schemas.pop(name, None)

    @property
    def names(self) -> list[str]:
        """Declared table names in registration order."""
        return list(self._schemas)

    def __contains__(self, name: object) -> bool:
        return name in self._schemas

    def __iter__(self) -> Iterator[TableSchema]:
        return iter(self._schemas.values())

    def __len__(self) -> int:
        return len(self._schemas)
