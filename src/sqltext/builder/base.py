"""SqlBuilderBase: 全ビルダー共通の状態とヘルパー."""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum
from typing import Any, ClassVar

import structlog

from sqltext._messages import format_error
from sqltext.dialect import Dialect
from sqltext.exceptions import BuilderStateError, InvalidArgumentError
from sqltext.mapper.factory import table_info_for
from sqltext.mapper.table_info import TableInfo
from sqltext.parser.renumber import renumber_parameters
from sqltext.query import SqlArgument, SqlQuery

logger = structlog.get_logger(__name__)


class BuilderPhase(Enum):
    """文の組み立て段階."""

    INITIAL = "initial"
    PROJECTED = "projected"
    SOURCED = "sourced"
    FILTERED = "filtered"
    GROUPED = "grouped"
    ORDERED = "ordered"
    FINALIZED = "finalized"


class SqlBuilderBase:
    """ビルダーの基底クラス.

    出力バッファ、バインド順の引数リスト、現在のフェーズ、方言を保持する。
    ビルダーは1つの呼び出しチェーン専用で、スレッドセーフではない。
    例外発生後のビルダーは再利用できない。
    """

    statement_kind: ClassVar[str] = ""
    """ログ出力用の文種別."""

    _finalizable_phases: ClassVar[tuple[BuilderPhase, ...]] = ()
    """``to_sql_query()`` を呼び出せるフェーズ."""

    def __init__(self, dialect: Dialect = Dialect.EMPTY) -> None:
        self._dialect = dialect
        self._parts: list[str] = []
        self._arguments: list[SqlArgument] = []
        self._phase = BuilderPhase.INITIAL
        self._query: SqlQuery | None = None

    @property
    def dialect(self) -> Dialect:
        """使用中の方言."""
        return self._dialect

    @property
    def phase(self) -> BuilderPhase:
        """現在のフェーズ."""
        return self._phase

    @property
    def inner_sql(self) -> str:
        """組み立て途中の SQL."""
        return "".join(self._parts)

    def to_sql_query(self) -> SqlQuery:
        """組み立てた SQL を SqlQuery として返す.

        2回目以降の呼び出しは同じ SqlQuery を返す。

        Raises:
            BuilderStateError: 文がまだ完成していない場合

        """
        if self._query is not None:
            return self._query
        self._check_finalizable()

        command_text = self._render().rstrip(", ")
        self._query = SqlQuery(command_text, *self._arguments)
        self._phase = BuilderPhase.FINALIZED

        logger.debug(
            "sql_query_built",
            statement=self.statement_kind,
            dialect=self._dialect.name,
            argument_count=len(self._arguments),
        )
        return self._query

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.inner_sql!r}, phase={self._phase.name})"

    # --- 派生クラス用ヘルパー ---

    def _render(self) -> str:
        return self.inner_sql

    def _check_finalizable(self) -> None:
        if self._phase not in self._finalizable_phases:
            raise BuilderStateError(
                format_error("invalid_phase", operation="to_sql_query", phase=self._phase.name)
            )

    def _require_phase(self, operation: str, *phases: BuilderPhase) -> None:
        """現在のフェーズで operation が許可されているか検証する."""
        if self._phase not in phases:
            raise BuilderStateError(
                format_error("invalid_phase", operation=operation, phase=self._phase.name)
            )

    def _escape(self, name: str) -> str:
        return self._dialect.escape_sql(name)

    def _add_argument(self, value: Any) -> str:
        """値を引数リストに追加し、対応するプレースホルダを返す."""
        self._arguments.append(value if isinstance(value, SqlArgument) else SqlArgument(value))
        return self._dialect.parameter_name(len(self._arguments) - 1)

    def _add_fragment(self, sql: str, arguments: Sequence[Any]) -> str:
        """SQL 断片のプレースホルダを現在の引数数から振り直し、引数を追加する.

        Raises:
            ParameterMismatchError: 値の数とプレースホルダの数が一致しない場合

        """
        fragment = renumber_parameters(
            sql,
            len(self._arguments),
            [arg if isinstance(arg, SqlArgument) else SqlArgument(arg) for arg in arguments],
        )
        self._arguments.extend(fragment.arguments)
        return fragment.sql

    def _add_sub_query(self, sub_query: SqlQuery) -> str:
        """サブクエリを現在の位置に埋め込む（括弧なし）."""
        return self._add_fragment(sub_query.command_text, sub_query.arguments)

    def _resolve_table(
        self, table: str | type | TableInfo, param_name: str
    ) -> tuple[str, TableInfo | None]:
        """テーブル指定をエスケープ済みのテーブル名とテーブル情報に解決する."""
        if isinstance(table, TableInfo):
            return self._escape(table.qualified_name), table
        if isinstance(table, type):
            info = table_info_for(table)
            return self._escape(info.qualified_name), info
        check_name(table, param_name)
        return self._escape(table), None


def check_name(value: Any, param_name: str) -> None:
    """テーブル名・カラム名・述語が None または空でないことを検証する.

    Raises:
        InvalidArgumentError: None、空文字列、または文字列でない場合

    """
    if not value or not isinstance(value, str):
        raise InvalidArgumentError(
            format_error("argument_null_or_empty", param_name=param_name),
            param_name=param_name,
        )


def check_names(values: Sequence[Any], param_name: str, *, allow_empty: bool = True) -> None:
    """カラム名のリストを検証する.

    Raises:
        InvalidArgumentError: いずれかの名前が不正な場合、または
            ``allow_empty=False`` で1つも指定されていない場合

    """
    if values is None:
        raise InvalidArgumentError(
            format_error("argument_null", param_name=param_name), param_name=param_name
        )
    if not values and not allow_empty:
        raise InvalidArgumentError(
            format_error("argument_empty_sequence", param_name=param_name),
            param_name=param_name,
        )
    for value in values:
        check_name(value, param_name)
