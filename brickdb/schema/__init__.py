"""brickDB schema models: descriptors, DSL helpers, conditions, registry."""
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
from brickdb.schema.conditions import Operator, WhereCondition
from brickdb.schema.registry import SchemaRegistry

__all__ = [
    "ColumnDefinition",
    "ColumnType",
    "ForeignKey",
    "ForeignKeyAction",
    "IndexDefinition",
    "SqlValue",
    "TableSchema",
    "UniqueConstraint",
    "Operator",
    "WhereCondition",
    "SchemaRegistry",
]
