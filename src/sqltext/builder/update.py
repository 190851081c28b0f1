"""UpdateSqlBuilder: UPDATE 文のビルダー."""

from __future__ import annotations

from typing import Any

from sqltext._messages import format_error
from sqltext.builder.base import BuilderPhase, check_name
from sqltext.builder.predicate import PredicateComposer
from sqltext.exceptions import InvalidArgumentError
from sqltext.mapper.table_info import TableInfo


class UpdateSqlBuilder(PredicateComposer):
    """UPDATE 文のビルダー.

    ``table`` の後に ``set_column_value`` を1回以上呼び出し、必要に応じて
    ``where`` を続ける。

    Examples:
        >>> query = (
        ...     UpdateSqlBuilder()
        ...     .table("Table")
        ...     .set_column_value("Column1", "Foo")
        ...     .where("Id").is_equal_to(100122)
        ...     .to_sql_query()
        ... )
        >>> query.command_text
        'UPDATE Table SET Column1 = ? WHERE (Id = ?)'

    """

    statement_kind = "update"
    _where_phases = (BuilderPhase.PROJECTED,)
    _finalizable_phases = (BuilderPhase.PROJECTED, BuilderPhase.FILTERED)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._table_info: TableInfo | None = None

    @property
    def table_info(self) -> TableInfo | None:
        """エンティティから解決したテーブル情報（テーブル名指定時は None）."""
        return self._table_info

    def table(self, table: str | type | TableInfo) -> UpdateSqlBuilder:
        """更新するテーブルを指定する."""
        self._require_phase("table", BuilderPhase.INITIAL)
        name, self._table_info = self._resolve_table(table, "table_name")
        self._parts.append(f"UPDATE {name} SET ")
        self._phase = BuilderPhase.SOURCED
        return self

    def set_column_value(self, column_name: str, value: Any) -> UpdateSqlBuilder:
        """``column = value`` を追加する.

        Raises:
            InvalidArgumentError: エンティティで更新不可と定義されたカラムの場合

        """
        self._require_phase("set_column_value", BuilderPhase.SOURCED, BuilderPhase.PROJECTED)
        check_name(column_name, "column_name")
        if self._is_read_only(column_name):
            msg = format_error("column_not_updatable", param_name="column_name")
            raise InvalidArgumentError(f"{msg} column={column_name!r}", param_name="column_name")
        separator = "," if self._phase is BuilderPhase.PROJECTED else ""
        column = self._escape(column_name)
        self._parts.append(f"{separator}{column} = {self._add_argument(value)}")
        self._phase = BuilderPhase.PROJECTED
        return self

    def _is_read_only(self, column_name: str) -> bool:
        info = self._table_info
        if info is None:
            return False
        return column_name in info.column_names and column_name not in info.updatable_column_names
