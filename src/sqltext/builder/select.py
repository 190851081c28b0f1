"""SelectSqlBuilder: SELECT 文のビルダー."""

from __future__ import annotations

from typing import Any

from sqltext._messages import format_error
from sqltext.builder.base import BuilderPhase, check_name, check_names
from sqltext.builder.predicate import PredicateComposer
from sqltext.dialect import Dialect
from sqltext.exceptions import BuilderStateError
from sqltext.mapper.table_info import TableInfo

_Phase = BuilderPhase


class SelectSqlBuilder(PredicateComposer):
    """SELECT 文のビルダー.

    フェーズの遷移::

        INITIAL/PROJECTED --from_--> SOURCED --where--> FILTERED
            --group_by--> GROUPED --order_by_*--> ORDERED

    集計関数（``count``/``sum``/``average``/``min``/``max``）は ``from_`` の前に
    何度でも呼び出せる。``group_by``/``having``/``order_by_*`` は繰り返し
    呼び出すと前の指定に追加される。

    Examples:
        >>> query = (
        ...     SelectSqlBuilder(Dialect.MSSQL, "Column1")
        ...     .from_("Table")
        ...     .where("Column1").in_(1, 2, 3)
        ...     .to_sql_query()
        ... )
        >>> query.command_text
        'SELECT [Column1] FROM [Table] WHERE ([Column1] IN (@p0,@p1,@p2))'

    """

    statement_kind = "select"
    _where_phases = (_Phase.SOURCED,)
    _finalizable_phases = (
        _Phase.INITIAL,
        _Phase.SOURCED,
        _Phase.FILTERED,
        _Phase.GROUPED,
        _Phase.ORDERED,
    )

    def __init__(self, dialect: Dialect = Dialect.EMPTY, *columns: str) -> None:
        super().__init__(dialect)
        check_names(columns, "columns")
        wildcard = dialect.select_wildcard
        self._projection = [c if c == wildcard else self._escape(c) for c in columns]
        self._distinct = False
        self._added_group_by = False
        self._added_having = False
        self._added_order = False
        if self._projection and self._projection != [wildcard]:
            self._phase = _Phase.PROJECTED

    # --- 射影 ---

    def distinct(self, *columns: str) -> SelectSqlBuilder:
        """``SELECT DISTINCT`` のカラムを指定する."""
        self._require_phase("distinct", _Phase.INITIAL)
        check_names(columns, "columns", allow_empty=False)
        self._distinct = True
        self._projection = [self._escape(c) for c in columns]
        self._phase = _Phase.PROJECTED
        return self

    def count(self, column: str, alias: str | None = None) -> SelectSqlBuilder:
        """``COUNT(column) AS alias`` を追加する（alias 省略時はカラム名）."""
        self._add_function("count", "COUNT", column, alias)
        return self

    def sum(self, column: str, alias: str | None = None) -> SelectSqlBuilder:
        """``SUM(column) AS alias`` を追加する."""
        self._add_function("sum", "SUM", column, alias)
        return self

    def average(self, column: str, alias: str | None = None) -> SelectSqlBuilder:
        """``AVG(column) AS alias`` を追加する."""
        self._add_function("average", "AVG", column, alias)
        return self

    def min(self, column: str, alias: str | None = None) -> SelectSqlBuilder:
        """``MIN(column) AS alias`` を追加する."""
        self._add_function("min", "MIN", column, alias)
        return self

    def max(self, column: str, alias: str | None = None) -> SelectSqlBuilder:
        """``MAX(column) AS alias`` を追加する."""
        self._add_function("max", "MAX", column, alias)
        return self

    # --- FROM ---

    def from_(self, table: str | type | TableInfo) -> SelectSqlBuilder:
        """対象テーブルを指定する.

        エンティティクラスまたは TableInfo を渡し、カラムを指定していない
        （または ``*`` のみの）場合は、マッピングされた全カラムに展開する。

        Args:
            table: テーブル名、エンティティクラス、または TableInfo

        """
        self._require_phase("from_", _Phase.INITIAL, _Phase.PROJECTED)
        name, info = self._resolve_table(table, "table")
        self._parts.append(self._select_clause(info))
        self._parts.append(f" FROM {name}")
        self._phase = _Phase.SOURCED
        return self

    # --- GROUP BY / HAVING / ORDER BY ---

    def group_by(self, *columns: str) -> SelectSqlBuilder:
        """``GROUP BY`` のカラムを追加する."""
        self._require_phase("group_by", _Phase.SOURCED, _Phase.FILTERED, _Phase.GROUPED)
        if self._added_having:
            raise BuilderStateError(
                format_error("invalid_phase", operation="group_by", phase="HAVING")
            )
        check_names(columns, "columns", allow_empty=False)
        self._parts.append(" GROUP BY " if not self._added_group_by else ",")
        self._parts.append(",".join(self._escape(c) for c in columns))
        self._added_group_by = True
        self._phase = _Phase.GROUPED
        return self

    def having(self, predicate: str, *args: Any) -> SelectSqlBuilder:
        """``HAVING`` の述語を追加する（2回目以降は ``AND`` で結合）."""
        self._require_phase("having", _Phase.GROUPED)
        check_name(predicate, "predicate")
        text = self._add_fragment(predicate, args)
        self._parts.append(f" HAVING {text}" if not self._added_having else f" AND {text}")
        self._added_having = True
        return self

    def order_by_ascending(self, *columns: str) -> SelectSqlBuilder:
        """昇順の ``ORDER BY`` カラムを追加する."""
        self._add_order("order_by_ascending", columns, " ASC")
        return self

    def order_by_descending(self, *columns: str) -> SelectSqlBuilder:
        """降順の ``ORDER BY`` カラムを追加する."""
        self._add_order("order_by_descending", columns, " DESC")
        return self

    # --- 内部処理 ---

    def _render(self) -> str:
        if self._phase is _Phase.INITIAL:
            return self._select_clause(None)
        return self.inner_sql

    def _select_clause(self, info: TableInfo | None) -> str:
        wildcard = self._dialect.select_wildcard
        items = self._projection
        if info is not None and info.columns and items in ([], [wildcard]):
            items = [self._escape(name) for name in info.column_names]
        prefix = "SELECT DISTINCT " if self._distinct else "SELECT "
        return prefix + (",".join(items) or wildcard)

    def _add_function(
        self, operation: str, function_name: str, column: str, alias: str | None
    ) -> None:
        self._require_phase(operation, _Phase.INITIAL, _Phase.PROJECTED)
        check_name(column, "column_name")
        alias = column if alias is None else alias
        check_name(alias, "column_alias")
        self._projection.append(f"{function_name}({self._escape(column)}) AS {alias}")
        self._phase = _Phase.PROJECTED

    def _add_order(self, operation: str, columns: tuple[str, ...], direction: str) -> None:
        self._require_phase(
            operation, _Phase.SOURCED, _Phase.FILTERED, _Phase.GROUPED, _Phase.ORDERED
        )
        check_names(columns, "columns", allow_empty=False)
        self._parts.append(" ORDER BY " if not self._added_order else ",")
        self._parts.append(",".join(self._escape(c) + direction for c in columns))
        self._added_order = True
        self._phase = _Phase.ORDERED
