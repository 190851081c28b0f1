"""RawWhereBuilder のテスト."""

from __future__ import annotations

from datetime import date

import pytest

from sqltext import InvalidArgumentError, ParameterMismatchError, RawWhereBuilder, SqlBuilder


def _customer_where() -> RawWhereBuilder:
    return (
        RawWhereBuilder()
        .append("ForeName = @p0", "Fred")
        .append(" AND Surname = @p0", "Flintstone")
        .append(" AND Created > @p0", date(2014, 1, 1))
        .append(" AND LastLogin IS NOT NULL")
    )


class TestAppend:
    """述語の蓄積."""

    def test_renumbers_fragments(self) -> None:
        where = _customer_where()
        assert str(where) == (
            "ForeName = @p0 AND Surname = @p1 AND Created > @p2 AND LastLogin IS NOT NULL"
        )
        assert where.arguments == ("Fred", "Flintstone", date(2014, 1, 1))

    def test_positional(self) -> None:
        where = RawWhereBuilder().append("A = ?", 1).append(" AND B = ?", 2)
        assert str(where) == "A = ? AND B = ?"
        assert where.arguments == (1, 2)

    def test_repr(self) -> None:
        where = RawWhereBuilder().append("A = @p0", 1)
        assert repr(where) == "RawWhereBuilder('A = @p0', arguments=1)"

    def test_none_predicate(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            RawWhereBuilder().append(None)  # type: ignore[arg-type]
        assert exc_info.value.param_name == "predicate"

    def test_mismatch(self) -> None:
        with pytest.raises(ParameterMismatchError):
            RawWhereBuilder().append("A = @p0 AND B = @p1", 1)


class TestApplyTo:
    """ビルダーへの適用."""

    def test_select(self, empty: SqlBuilder) -> None:
        query = _customer_where().apply_to(empty.select().from_("Customers")).to_sql_query()
        assert query.command_text == (
            "SELECT * FROM Customers WHERE (ForeName = @p0 AND Surname = @p1"
            " AND Created > @p2 AND LastLogin IS NOT NULL)"
        )
        assert query.params == ["Fred", "Flintstone", date(2014, 1, 1)]

    def test_update_renumbers_after_set(self, mssql: SqlBuilder) -> None:
        builder = mssql.update().table("Customers").set_column_value("Status", 2)
        query = RawWhereBuilder().append("Id = @p0", 5).apply_to(builder).to_sql_query()
        assert query.command_text == "UPDATE [Customers] SET [Status] = @p0 WHERE (Id = @p1)"
        assert query.params == [2, 5]

    def test_delete(self, empty: SqlBuilder) -> None:
        where = RawWhereBuilder().append("IsActive = 0")
        query = where.apply_to(empty.delete().from_("Customers")).to_sql_query()
        assert query.command_text == "DELETE FROM Customers WHERE (IsActive = 0)"
        assert query.arguments == ()

    def test_chain_continues(self, empty: SqlBuilder) -> None:
        """適用後もビルダーの呼び出しを続けられる."""
        builder = RawWhereBuilder().append("A = ?", 1).apply_to(empty.select().from_("T"))
        query = builder.order_by_ascending("A").to_sql_query()
        assert query.command_text == "SELECT * FROM T WHERE (A = ?) ORDER BY A ASC"

    def test_none_builder(self) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            RawWhereBuilder().append("A = ?", 1).apply_to(None)  # type: ignore[type-var]
        assert exc_info.value.param_name == "builder"

    def test_empty_predicate(self, empty: SqlBuilder) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            RawWhereBuilder().apply_to(empty.select().from_("T"))
        assert exc_info.value.param_name == "predicate"
