"""Pydantic models describing table schemas.

A :class:`TableSchema` is an ordered list of *members*: column definitions,
composite unique constraints, and inline index definitions.  Every model is
frozen; the helper functions in :mod:`brickdb.schema.helpers` return
modified copies instead of mutating.

Each member carries a ``kind`` tag so a schema survives a JSON round trip::

    schema = TableSchema.model_validate_json(path.read_text())
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, Literal, Union

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_serializer,
    field_validator,
    model_serializer,
)

#: SQLite storage classes a column may declare.
ColumnType = Literal["INTEGER", "TEXT", "REAL", "BLOB", "NUMERIC"]

#: Scalar values accepted by SQLite parameters and DEFAULT clauses.
SqlValue = Union[str, int, float, bool, bytes, None]

#: Referential actions for ``ON DELETE`` / ``ON UPDATE``.
ForeignKeyAction = Literal["CASCADE", "SET NULL", "RESTRICT", "NO ACTION", "SET DEFAULT"]


class ForeignKey(BaseModel):
    """Target of a ``REFERENCES`` clause.

    Attributes:
        table: Referenced table.
        column: Referenced column.
        on_delete: Optional ``ON DELETE`` action.
        on_update: Optional ``ON UPDATE`` action.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    table: str
    column: str
    on_delete: ForeignKeyAction | None = None
    on_update: ForeignKeyAction | None = None


class ColumnDefinition(BaseModel):
    """A single column.

    ``default`` is only rendered when it was explicitly provided, so
    ``default=None`` produces ``DEFAULT NULL`` while an omitted default
    produces nothing.  See :attr:`has_default`.  In JSON a ``bytes`` default
    is written as ``{"hex": "..."}`` so it is not read back as text.

    Attributes:
        name: Column name.
        type: SQLite column type.
        primary_key: Emit ``PRIMARY KEY``.
        auto_increment: Emit ``AUTOINCREMENT`` (only with ``primary_key``).
        not_null: Emit ``NOT NULL`` (ignored on primary keys).
        unique: Emit a column-level ``UNIQUE``.
        default: Literal for the ``DEFAULT`` clause.
        references: Optional foreign key target.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["column"] = "column"
    name: str
    type: ColumnType
    primary_key: bool = False
    auto_increment: bool = False
    not_null: bool = False
    unique: bool = False
    default: SqlValue = None
    references: ForeignKey | None = None

    @property
    def has_default(self) -> bool:
        """True when a DEFAULT was set, including an explicit ``None``."""
        return "default" in self.model_fields_set

    @field_validator("default", mode="before")
    @classmethod
    def _decode_blob_default(cls, value: Any) -> Any:
        if isinstance(value, Mapping) and set(value) == {"hex"}:
            return bytes.fromhex(value["hex"])
        return value

    @field_serializer("default", when_used="json")
    def _encode_blob_default(self, value: SqlValue) -> Any:
        if isinstance(value, bytes):
            return {"hex": value.hex()}
        return value

    @model_serializer(mode="wrap")
    def _omit_unset_default(self, handler: SerializerFunctionWrapHandler) -> dict:
        # Keeps an omitted default omitted across a JSON round trip.
        data = handler(self)
        if not self.has_default:
            data.pop("default", None)
        return data


class UniqueConstraint(BaseModel):
    """A table-level ``UNIQUE (a, b, ...)`` constraint."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["unique"] = "unique"
    columns: list[str] = Field(min_length=1)


class IndexDefinition(BaseModel):
    """A named index, emitted as a separate ``CREATE INDEX`` statement."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    kind: Literal["index"] = "index"
    name: str
    columns: list[str] = Field(min_length=1)
    unique: bool = False


SchemaMember = Annotated[
    Union[ColumnDefinition, UniqueConstraint, IndexDefinition],
    Field(discriminator="kind"),
]


class TableSchema(BaseModel):
    """A table declaration.

    Indexes can be declared two ways: as :class:`IndexDefinition` entries in
    ``members`` (via :func:`~brickdb.schema.helpers.index`) or in the separate
    ``indexes`` list.  Both are honoured; :attr:`all_indexes` merges them with
    inline members first.

    Attributes:
        name: Table name.
        members: Columns, composite unique constraints and inline indexes,
            in declaration order.
        indexes: Additional index definitions.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    members: list[SchemaMember]
    indexes: list[IndexDefinition] = Field(default_factory=list)

    @property
    def column_definitions(self) -> list[ColumnDefinition]:
        """Column members in declaration order."""
        return [m for m in self.members if isinstance(m, ColumnDefinition)]

    @property
    def unique_constraints(self) -> list[UniqueConstraint]:
        """Composite unique constraint members in declaration order."""
        return [m for m in self.members if isinstance(m, UniqueConstraint)]

    @property
    def inline_indexes(self) -> list[IndexDefinition]:
        """Index members declared inside ``members``."""
        return [m for m in self.members if isinstance(m, IndexDefinition)]

    @property
    def all_indexes(self) -> list[IndexDefinition]:
        """Inline index members followed by the ``indexes`` list."""
        return [*self.inline_indexes, *self.indexes]

    @property
    def column_names(self) -> list[str]:
        return [c.name for c in self.column_definitions]

    def get_column(self, name: str) -> ColumnDefinition | None:
        """Returns the column called ``name``, or ``None``."""
        for col in self.column_definitions:
            if col.name == name:
                return col
        return None
