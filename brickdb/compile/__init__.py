"""brickDB compilation layer: descriptors and builder state → SQL."""
from brickdb.compile.base import CompiledSQL, Executor
from brickdb.compile.builder import QueryBuilder
from brickdb.compile.ddl import CreateIndexBuilder, CreateTableBuilder, compile_schema
from brickdb.compile.where import WhereFragment, join_fragments, render_condition

__all__ = [
    "CompiledSQL",
    "Executor",
    "QueryBuilder",
    "CreateIndexBuilder",
    "CreateTableBuilder",
    "compile_schema",
    "WhereFragment",
    "join_fragments",
    "render_condition",
]
