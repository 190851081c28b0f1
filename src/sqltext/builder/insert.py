"""InsertSqlBuilder: INSERT 文のビルダー."""

from __future__ import annotations

from typing import Any

from sqltext._messages import format_error
from sqltext.builder.base import BuilderPhase, SqlBuilderBase, check_names
from sqltext.exceptions import InvalidArgumentError
from sqltext.mapper.table_info import TableInfo


class InsertSqlBuilder(SqlBuilderBase):
    """INSERT 文のビルダー.

    ``into`` → ``columns`` → ``values`` の順に呼び出す。

    Examples:
        >>> query = (
        ...     InsertSqlBuilder()
        ...     .into("Table")
        ...     .columns("Column1", "Column2")
        ...     .values("Foo", 12)
        ...     .to_sql_query()
        ... )
        >>> query.command_text
        'INSERT INTO Table (Column1,Column2) VALUES (?,?)'

    """

    statement_kind = "insert"
    _finalizable_phases = (BuilderPhase.SOURCED, BuilderPhase.PROJECTED, BuilderPhase.FILTERED)

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._table_info: TableInfo | None = None
        self._column_count = 0

    def into(self, table: str | type | TableInfo) -> InsertSqlBuilder:
        """挿入先のテーブルを指定する."""
        self._require_phase("into", BuilderPhase.INITIAL)
        name, self._table_info = self._resolve_table(table, "table")
        self._parts.append(f"INSERT INTO {name}")
        self._phase = BuilderPhase.SOURCED
        return self

    def columns(self, *column_names: str) -> InsertSqlBuilder:
        """挿入するカラムを指定する.

        省略時はエンティティの挿入可能なカラムを使用する。

        Raises:
            InvalidArgumentError: カラムを決定できない場合

        """
        self._require_phase("columns", BuilderPhase.SOURCED)
        if not column_names and self._table_info is not None:
            column_names = tuple(self._table_info.insertable_column_names)
        check_names(column_names, "column_names", allow_empty=False)
        self._parts.append(f" ({','.join(self._escape(c) for c in column_names)})")
        self._column_count = len(column_names)
        self._phase = BuilderPhase.PROJECTED
        return self

    def values(self, *column_values: Any) -> InsertSqlBuilder:
        """カラムの値を指定する（カラムと同じ順序・同じ数）.

        Raises:
            InvalidArgumentError: 値の数がカラムの数と一致しない場合

        """
        self._require_phase("values", BuilderPhase.PROJECTED)
        if len(column_values) != self._column_count:
            key = (
                "missing_parameter_value"
                if len(column_values) < self._column_count
                else "surplus_parameter_value"
            )
            raise InvalidArgumentError(
                format_error(key, param_name="column_values", position=len(column_values)),
                param_name="column_values",
            )
        params = ",".join(self._add_argument(v) for v in column_values)
        self._parts.append(f" VALUES ({params})")
        self._phase = BuilderPhase.FILTERED
        return self
