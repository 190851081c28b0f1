"""InsertSqlBuilder のテスト."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Annotated

import pytest

from sqltext import BuilderStateError, Column, InvalidArgumentError, SqlBuilder, TableInfo, entity
from sqltext.mapper import ColumnInfo


@entity(table="Customers", schema="Sales")
@dataclass
class Customer:
    """Id は自動採番."""

    Id: Annotated[int, Column(insertable=False)]
    Name: str
    Status: Annotated[int, Column("CustomerStatusId")]


class TestInsert:
    """INSERT 文の組み立て."""

    def test_columns_and_values(self, empty: SqlBuilder) -> None:
        query = (
            empty.insert()
            .into("Table")
            .columns("Column1", "Column2")
            .values("Foo", 12)
            .to_sql_query()
        )
        assert query.command_text == "INSERT INTO Table (Column1,Column2) VALUES (?,?)"
        assert query.params == ["Foo", 12]

    def test_escaped(self, mssql: SqlBuilder) -> None:
        query = (
            mssql.insert()
            .into("Table")
            .columns("Column1", "Column2")
            .values("Foo", 12)
            .to_sql_query()
        )
        assert query.command_text == "INSERT INTO [Table] ([Column1],[Column2]) VALUES (@p0,@p1)"

    def test_into_only(self, mssql: SqlBuilder) -> None:
        query = mssql.insert().into("Sales.Customers").to_sql_query()
        assert query.command_text == "INSERT INTO [Sales].[Customers]"

    def test_entity_insertable_columns(self, empty: SqlBuilder) -> None:
        """カラム省略時はエンティティの挿入可能なカラムを使う."""
        query = empty.insert().into(Customer).columns().values("Fred", 1).to_sql_query()
        assert (
            query.command_text
            == "INSERT INTO Sales.Customers (Name,CustomerStatusId) VALUES (?,?)"
        )

    def test_table_info(self, mssql: SqlBuilder) -> None:
        info = TableInfo(
            name="Invoices",
            columns=(ColumnInfo("Id", insertable=False), ColumnInfo("Total")),
        )
        query = mssql.insert().into(info).columns().values(10).to_sql_query()
        assert query.command_text == "INSERT INTO [Invoices] ([Total]) VALUES (@p0)"


class TestInsertErrors:
    """不正な呼び出し."""

    def test_value_count_mismatch(self, empty: SqlBuilder) -> None:
        builder = empty.insert().into("Table").columns("Column1", "Column2")
        with pytest.raises(InvalidArgumentError) as exc_info:
            builder.values("Foo")
        assert exc_info.value.param_name == "column_values"
        with pytest.raises(InvalidArgumentError):
            builder.values("Foo", 1, 2)

    def test_columns_required_for_table_name(self, empty: SqlBuilder) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            empty.insert().into("Table").columns()
        assert exc_info.value.param_name == "column_names"

    def test_empty_table(self, empty: SqlBuilder) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            empty.insert().into("")
        assert exc_info.value.param_name == "table"

    def test_values_before_columns(self, empty: SqlBuilder) -> None:
        with pytest.raises(BuilderStateError):
            empty.insert().into("Table").values(1)

    def test_finalize_before_into(self, empty: SqlBuilder) -> None:
        with pytest.raises(BuilderStateError):
            empty.insert().to_sql_query()
