"""Unit tests for QueryBuilder compilation and lifecycle.

Statements are captured by the ``executor`` fixture; nothing touches SQLite.
"""
from __future__ import annotations

import pytest

from brickdb.compile.builder import QueryBuilder
from brickdb.errors import CompilationError
from brickdb.schema.conditions import WhereCondition
from tests.fixtures import RecordingExecutor


@pytest.fixture()
def qb(executor: RecordingExecutor) -> QueryBuilder:
    return QueryBuilder(executor)


# ---------------------------------------------------------------------------
# SELECT
# ---------------------------------------------------------------------------


def test_default_select_is_star(qb):
    assert qb.from_("products").compile().sql == "SELECT * FROM products"


def test_select_columns(qb):
    compiled = qb.select(["name", "price"]).from_("products").compile()
    assert compiled.sql == "SELECT name, price FROM products"
    assert compiled.params == []


def test_empty_select_means_star(qb):
    assert qb.select([]).from_("t").compile().sql == "SELECT * FROM t"


def test_select_single_column_name(qb):
    assert qb.select("name").from_("products").compile().sql == "SELECT name FROM products"


def test_select_overwrites(qb):
    compiled = qb.select(["a"]).select(["b"]).from_("t").compile()
    assert compiled.sql == "SELECT b FROM t"


def test_full_select(qb):
    compiled = (
        qb.select(["name"])
        .from_("products")
        .where({"column": "category", "operator": "=", "value": "tools"})
        .and_({"column": "stock", "operator": ">", "value": 50})
        .order_by("price", "desc")
        .limit(10)
        .offset(20)
        .compile()
    )
    assert compiled.sql == (
        "SELECT name FROM products WHERE category = ? AND stock > ? "
        "ORDER BY price DESC LIMIT 10 OFFSET 20"
    )
    assert compiled.params == ["tools", 50]


def test_where_accepts_a_list(qb):
    compiled = (
        qb.from_("t")
        .where([WhereCondition(column="a", operator="=", value=1), {"column": "b", "operator": "<", "value": 2}])
        .compile()
    )
    assert compiled.sql == "SELECT * FROM t WHERE a = ? AND b < ?"
    assert compiled.params == [1, 2]


def test_or_is_flat(qb):
    compiled = (
        qb.from_("t")
        .where({"column": "a", "operator": "=", "value": 1})
        .or_({"column": "b", "operator": "=", "value": 2})
        .and_({"column": "c", "operator": "IS NULL"})
        .compile()
    )
    assert compiled.sql == "SELECT * FROM t WHERE a = ? OR b = ? AND c IS NULL"
    assert compiled.params == [1, 2]


def test_offset_without_limit_uses_unbounded_limit(qb):
    assert qb.from_("products").offset(2).compile().sql == "SELECT * FROM products LIMIT -1 OFFSET 2"


def test_limit_and_offset_overwrite(qb):
    compiled = qb.from_("t").limit(5).limit(3).offset(1).offset(4).compile()
    assert compiled.sql == "SELECT * FROM t LIMIT 3 OFFSET 4"


def test_order_by_overwrites(qb):
    compiled = qb.from_("t").order_by("a").order_by("b", "DESC").compile()
    assert compiled.sql == "SELECT * FROM t ORDER BY b DESC"


def test_order_by_rejects_unknown_direction(qb):
    with pytest.raises(CompilationError) as exc_info:
        qb.order_by("a", "SIDEWAYS")
    assert exc_info.value.clause == "ORDER BY"


def test_unknown_operator_rejected(qb):
    with pytest.raises(ValueError):
        qb.where({"column": "a", "operator": "~", "value": 1})


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------


def test_insert(qb):
    compiled = qb.insert("products", {"name": "Widget", "price": 9.99}).compile()
    assert compiled.sql == "INSERT INTO products (name, price) VALUES (?, ?)"
    assert compiled.params == ["Widget", 9.99]


def test_insert_empty_uses_default_values(qb):
    compiled = qb.insert("users", {}).compile()
    assert compiled.sql == "INSERT INTO users DEFAULT VALUES"
    assert compiled.params == []


def test_update_params_set_before_where(qb):
    compiled = (
        qb.update("t", {"a": 1, "b": 2})
        .where({"column": "id", "operator": "=", "value": 5})
        .compile()
    )
    assert compiled.sql == "UPDATE t SET a = ?, b = ? WHERE id = ?"
    assert compiled.params == [1, 2, 5]


def test_delete(qb):
    compiled = qb.delete("t").where({"column": "id", "operator": "IN", "value": [1, 2]}).compile()
    assert compiled.sql == "DELETE FROM t WHERE id IN (?, ?)"
    assert compiled.params == [1, 2]


def test_delete_without_where(qb):
    assert qb.delete("t").compile().sql == "DELETE FROM t"


def test_insert_wins_over_other_modes(qb):
    compiled = qb.delete("t").update("t", {"a": 1}).insert("t", {"b": 2}).compile()
    assert compiled.sql == "INSERT INTO t (b) VALUES (?)"


def test_update_wins_over_delete_and_raw(qb):
    compiled = qb.raw("SELECT 1").delete("t").update("t", {"a": 1}).compile()
    assert compiled.sql == "UPDATE t SET a = ?"


def test_delete_wins_over_raw(qb):
    assert qb.raw("SELECT 1").delete("t").compile().sql == "DELETE FROM t"


def test_raw_replaces_select(qb):
    compiled = qb.from_("ignored").limit(3).raw("SELECT ? AS x", [7]).compile()
    assert compiled.sql == "SELECT ? AS x"
    assert compiled.params == [7]


# ---------------------------------------------------------------------------
# Terminal calls and lifecycle
# ---------------------------------------------------------------------------


def test_execute_sends_compiled_statement(qb, executor):
    qb.from_("t").where({"column": "a", "operator": "=", "value": 1}).execute()
    assert executor.calls == [("SELECT * FROM t WHERE a = ?", [1])]


def test_execute_resets_state(qb, executor):
    qb.select(["a"]).from_("t").where({"column": "a", "operator": "=", "value": 1}).limit(1).execute()
    qb.from_("u").execute()
    assert executor.calls[1] == ("SELECT * FROM u", [])


def test_reset_after_mutation(qb, executor):
    qb.delete("t").execute()
    qb.from_("t").execute()
    assert executor.calls[1][0] == "SELECT * FROM t"


def test_state_resets_when_executor_fails():
    class FailingExecutor:
        def execute(self, sql, params=()):
            raise RuntimeError("boom")

    qb = QueryBuilder(FailingExecutor())
    qb.from_("t").where({"column": "a", "operator": "=", "value": 1})
    with pytest.raises(RuntimeError):
        qb.execute()
    assert qb.compile().params == []
    assert qb.from_("u").compile().sql == "SELECT * FROM u"


def test_builders_do_not_share_state(executor):
    first = QueryBuilder(executor).from_("a").where({"column": "x", "operator": "=", "value": 1})
    second = QueryBuilder(executor).from_("b").where({"column": "y", "operator": "=", "value": 2})
    assert first.compile().params == [1]
    assert second.compile().params == [2]


def test_compile_does_not_reset(qb):
    qb.from_("t").limit(1)
    assert qb.compile().sql == qb.compile().sql == "SELECT * FROM t LIMIT 1"


def test_execute_one():
    executor = RecordingExecutor(rows=[{"id": 1}, {"id": 2}])
    assert QueryBuilder(executor).from_("t").execute_one() == {"id": 1}


def test_execute_one_returns_none_when_empty(qb):
    assert qb.from_("t").execute_one() is None


def test_execute_raw_leaves_state_alone(qb, executor):
    qb.from_("t").limit(2)
    qb.execute_raw("SELECT ?", [1])
    assert executor.calls == [("SELECT ?", [1])]
    assert qb.compile().sql == "SELECT * FROM t LIMIT 2"
