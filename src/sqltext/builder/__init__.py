"""sqltext ステートメントビルダーパッケージ."""

from __future__ import annotations

from sqltext.builder.base import BuilderPhase, SqlBuilderBase
from sqltext.builder.delete import DeleteSqlBuilder
from sqltext.builder.insert import InsertSqlBuilder
from sqltext.builder.predicate import PredicateComposer
from sqltext.builder.procedure import StoredProcedureSqlBuilder
from sqltext.builder.raw_where import RawWhereBuilder
from sqltext.builder.select import SelectSqlBuilder
from sqltext.builder.update import UpdateSqlBuilder
from sqltext.dialect import Dialect


class SqlBuilder:
    """方言を固定したビルダーの生成窓口.

    Examples:
        >>> sql = SqlBuilder(Dialect.MSSQL)
        >>> sql.select("Name").from_("Customers").where("Id").is_equal_to(1).to_sql_query()
        SqlQuery('SELECT [Name] FROM [Customers] WHERE ([Id] = @p0)', arguments=1)

    """

    def __init__(self, dialect: Dialect = Dialect.EMPTY) -> None:
        self._dialect = dialect

    @property
    def dialect(self) -> Dialect:
        """生成するビルダーに渡す方言."""
        return self._dialect

    def select(self, *columns: str) -> SelectSqlBuilder:
        """SELECT 文を開始する（カラム省略時は ``*``）."""
        return SelectSqlBuilder(self._dialect, *columns)

    def insert(self) -> InsertSqlBuilder:
        """INSERT 文を開始する."""
        return InsertSqlBuilder(self._dialect)

    def update(self) -> UpdateSqlBuilder:
        """UPDATE 文を開始する."""
        return UpdateSqlBuilder(self._dialect)

    def delete(self) -> DeleteSqlBuilder:
        """DELETE 文を開始する."""
        return DeleteSqlBuilder(self._dialect)

    def execute(self, procedure_name: str) -> StoredProcedureSqlBuilder:
        """ストアドプロシージャ呼び出しを開始する.

        Raises:
            InvalidArgumentError: 方言がストアドプロシージャに対応していない場合

        """
        return StoredProcedureSqlBuilder(self._dialect, procedure_name)


__all__ = [
    "BuilderPhase",
    "DeleteSqlBuilder",
    "InsertSqlBuilder",
    "PredicateComposer",
    "RawWhereBuilder",
    "SelectSqlBuilder",
    "SqlBuilder",
    "SqlBuilderBase",
    "StoredProcedureSqlBuilder",
    "UpdateSqlBuilder",
]
