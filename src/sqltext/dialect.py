"""Dialect enum: RDBMS ごとの SQL 方言定義."""

from __future__ import annotations

from enum import Enum

from sqltext._messages import format_error
from sqltext.exceptions import InvalidArgumentError


class Dialect(Enum):
    """RDBMS ごとの SQL 方言.

    各メンバーは識別子のエスケープ文字、プレースホルダの接頭辞、
    名前付きパラメータの可否、ストアドプロシージャ呼び出しコマンド、
    ページング構文を保持する。

    EMPTY はエスケープなし・位置プレースホルダ ``?`` の中立な方言で、
    ビルダーの既定値として使用する。
    """

    EMPTY = ("empty", "", "", "?", False, "", "limit_offset")
    MSSQL = ("mssql", "[", "]", "@", True, "EXEC", "offset_fetch")
    MYSQL = ("mysql", "`", "`", "@", True, "CALL", "limit_comma")
    POSTGRESQL = ("postgresql", '"', '"', "@", True, "SELECT", "limit_offset")
    SQLITE = ("sqlite", '"', '"', "@", True, "", "limit_offset")
    FIREBIRD = ("firebird", '"', '"', "@", True, "", "rows_to")
    ORACLE = ("oracle", '"', '"', ":", True, "", "offset_fetch")

    def __init__(
        self,
        dialect_id: str,
        left_delimiter: str,
        right_delimiter: str,
        sql_parameter: str,
        supports_named_parameters: bool,
        stored_procedure_invocation_command: str,
        paging_style: str,
    ) -> None:
        self._dialect_id = dialect_id
        self._left_delimiter = left_delimiter
        self._right_delimiter = right_delimiter
        self._sql_parameter = sql_parameter
        self._supports_named_parameters = supports_named_parameters
        self._stored_procedure_invocation_command = stored_procedure_invocation_command
        self._paging_style = paging_style

    @property
    def left_delimiter(self) -> str:
        """識別子の開始エスケープ文字を返す."""
        return self._left_delimiter

    @property
    def right_delimiter(self) -> str:
        """識別子の終了エスケープ文字を返す."""
        return self._right_delimiter

    @property
    def sql_parameter(self) -> str:
        """プレースホルダの接頭辞（``?``, ``@``, ``:``）を返す."""
        return self._sql_parameter

    @property
    def supports_named_parameters(self) -> bool:
        """名前付きパラメータ（``@p0`` 等）を使用するか."""
        return self._supports_named_parameters

    @property
    def stored_procedure_invocation_command(self) -> str:
        """ストアドプロシージャ呼び出しコマンドを返す.

        空文字列はストアドプロシージャ非対応を意味する。
        """
        return self._stored_procedure_invocation_command

    @property
    def supports_stored_procedures(self) -> bool:
        """ストアドプロシージャ呼び出しに対応しているか."""
        return bool(self._stored_procedure_invocation_command)

    @property
    def paging_style(self) -> str:
        """ページング構文の種別を返す."""
        return self._paging_style

    @property
    def statement_separator(self) -> str:
        """文の区切り文字を返す."""
        return ";"

    @property
    def select_wildcard(self) -> str:
        """SELECT のワイルドカードを返す."""
        return "*"

    def is_escaped(self, sql: str | None) -> bool:
        """識別子がすでにエスケープされているか判定する.

        区切り文字を持たない方言では常に False を返す。
        """
        if not sql or not self._left_delimiter:
            return False
        return sql.startswith(self._left_delimiter) and sql.endswith(self._right_delimiter)

    def escape_sql(self, sql: str) -> str:
        """識別子をエスケープする.

        ``Schema.Table`` のようなドット区切りの識別子は各要素を個別に
        エスケープする。すでにエスケープ済みの場合、または区切り文字を
        持たない方言ではそのまま返す。

        Args:
            sql: 識別子

        Returns:
            エスケープ済みの識別子

        Raises:
            InvalidArgumentError: sql が None の場合

        Examples:
            >>> Dialect.MSSQL.escape_sql("Schema.Table")
            '[Schema].[Table]'
            >>> Dialect.EMPTY.escape_sql("Schema.Table")
            'Schema.Table'

        """
        if sql is None:
            raise InvalidArgumentError(
                format_error("argument_null", param_name="sql"), param_name="sql"
            )
        if not self._left_delimiter or self.is_escaped(sql):
            return sql
        return ".".join(
            piece if self.is_escaped(piece) else self._left_delimiter + piece + self._right_delimiter
            for piece in sql.split(".")
        )

    def parameter_name(self, position: int) -> str:
        """指定位置のプレースホルダ文字列を返す.

        名前付きパラメータ対応の方言では ``@p0`` のような名前を、
        非対応の方言では位置に関わらず接頭辞そのもの（``?``）を返す。
        """
        if self._supports_named_parameters:
            return f"{self._sql_parameter}p{position}"
        return self._sql_parameter
