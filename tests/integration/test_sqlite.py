"""SQLite 統合テスト: 組み立て → DB 実行の一連フロー検証."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass
from typing import Annotated

import pytest

from sqltext import (
    Column,
    Dialect,
    PagingOptions,
    RawWhereBuilder,
    SqlBuilder,
    SqlQuery,
    count_query,
    entity,
    page_query,
)

pytestmark = pytest.mark.sqlite


@entity(table="customers")
@dataclass
class Customer:
    """テスト用エンティティ."""

    id: Annotated[int, Column(insertable=False, updatable=False)]
    name: str
    status: int


@pytest.fixture
def db() -> sqlite3.Connection:
    """テスト用 SQLite インメモリ DB を作成し、テストデータを投入する."""
    conn = sqlite3.connect(":memory:")
    conn.row_factory = sqlite3.Row
    conn.execute("""
        CREATE TABLE customers (
            id INTEGER PRIMARY KEY,
            name TEXT NOT NULL,
            status INTEGER NOT NULL
        )
    """)
    conn.execute("""
        CREATE TABLE invoices (
            id INTEGER PRIMARY KEY,
            customer_id INTEGER NOT NULL,
            total INTEGER NOT NULL
        )
    """)
    conn.executemany(
        "INSERT INTO customers (id, name, status) VALUES (?, ?, ?)",
        [(1, "Alice", 1), (2, "Bob", 2), (3, "Charlie", 1), (4, "Diana", 1)],
    )
    conn.executemany(
        "INSERT INTO invoices (customer_id, total) VALUES (?, ?)",
        [(1, 100), (1, 250), (3, 40)],
    )
    conn.commit()
    return conn


def _run(db: sqlite3.Connection, query: SqlQuery) -> list[sqlite3.Row]:
    """名前付きプレースホルダは辞書、? は位置で渡す."""
    if "?" in query.command_text:
        return db.execute(query.command_text, query.params).fetchall()
    return db.execute(query.command_text, query.named_params).fetchall()


@pytest.fixture(params=[Dialect.SQLITE, Dialect.EMPTY], ids=["named", "positional"])
def sql(request: pytest.FixtureRequest) -> SqlBuilder:
    return SqlBuilder(request.param)


class TestSelect:
    """SELECT の実行."""

    def test_where_in(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = (
            sql.select("name")
            .from_("customers")
            .where("id")
            .in_(1, 3)
            .order_by_ascending("name")
            .to_sql_query()
        )
        assert [row["name"] for row in _run(db, query)] == ["Alice", "Charlie"]

    def test_entity_columns(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = sql.select().from_(Customer).where("id").is_equal_to(2).to_sql_query()
        rows = _run(db, query)
        assert [tuple(row) for row in rows] == [(2, "Bob", 2)]

    def test_sub_query(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        sub = sql.select("customer_id").from_("invoices").where("total").is_greater_than(50)
        query = (
            sql.select("name")
            .from_("customers")
            .where("status")
            .is_equal_to(1)
            .and_where("id")
            .in_(sub.to_sql_query())
            .to_sql_query()
        )
        assert [row["name"] for row in _run(db, query)] == ["Alice"]

    def test_exists(self, db: sqlite3.Connection) -> None:
        sub = SqlQuery("SELECT 1 FROM invoices WHERE invoices.customer_id = customers.id")
        query = (
            SqlBuilder(Dialect.SQLITE)
            .select("name")
            .from_("customers")
            .where()
            .not_exists(sub)
            .order_by_ascending("name")
            .to_sql_query()
        )
        assert [row["name"] for row in _run(db, query)] == ["Bob", "Diana"]

    def test_group_by_having(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = (
            sql.select("customer_id")
            .sum("total")
            .from_("invoices")
            .group_by("customer_id")
            .having("SUM(total) > ?" if sql.dialect is Dialect.EMPTY else "SUM(total) > @p0", 50)
            .to_sql_query()
        )
        assert [(row["customer_id"], row["total"]) for row in _run(db, query)] == [(1, 350)]

    def test_raw_where(self, db: sqlite3.Connection) -> None:
        where = RawWhereBuilder().append("status = @p0", 1).append(" AND name LIKE @p0", "%ar%")
        query = (
            where.apply_to(SqlBuilder(Dialect.SQLITE).select("name").from_("customers"))
            .order_by_ascending("name")
            .to_sql_query()
        )
        assert [row["name"] for row in _run(db, query)] == ["Charlie"]


class TestRewrite:
    """count_query / page_query の実行."""

    def test_count(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = sql.select().from_("customers").where("status").is_equal_to(1).to_sql_query()
        (row,) = _run(db, count_query(query, sql.dialect))
        assert row[0] == 3

    def test_page(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = sql.select("name").from_("customers").order_by_ascending("id").to_sql_query()
        paged = page_query(query, PagingOptions.for_page(2, 2), sql.dialect)
        assert [row["name"] for row in _run(db, paged)] == ["Charlie", "Diana"]


class TestWrite:
    """INSERT / UPDATE / DELETE の実行."""

    def test_insert(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = sql.insert().into(Customer).columns().values("Eve", 2).to_sql_query()
        _run(db, query)
        row = db.execute("SELECT name, status FROM customers WHERE id = 5").fetchone()
        assert tuple(row) == ("Eve", 2)

    def test_update(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = (
            sql.update()
            .table("customers")
            .set_column_value("status", 3)
            .where("name")
            .is_like("%li%")
            .to_sql_query()
        )
        _run(db, query)
        rows = db.execute("SELECT name FROM customers WHERE status = 3 ORDER BY id").fetchall()
        assert [row["name"] for row in rows] == ["Alice", "Charlie"]

    def test_delete(self, db: sqlite3.Connection, sql: SqlBuilder) -> None:
        query = sql.delete().from_("customers").where("status").is_not_equal_to(1).to_sql_query()
        _run(db, query)
        (row,) = db.execute("SELECT COUNT(*) FROM customers").fetchall()
        assert row[0] == 3
