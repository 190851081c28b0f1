"""StoredProcedureSqlBuilder: ストアドプロシージャ呼び出しのビルダー."""

from __future__ import annotations

from typing import Any

from sqltext._messages import format_error
from sqltext.builder.base import BuilderPhase, SqlBuilderBase, check_name
from sqltext.dialect import Dialect
from sqltext.exceptions import InvalidArgumentError


class StoredProcedureSqlBuilder(SqlBuilderBase):
    """ストアドプロシージャ呼び出しのビルダー.

    ``<呼び出しコマンド> <名前> <パラメータ>,...`` を出力する。パラメータ名は
    呼び出し側が指定したものをそのまま使用する。

    Examples:
        >>> query = (
        ...     StoredProcedureSqlBuilder(Dialect.MSSQL, "GetCustomerInvoices")
        ...     .with_parameter("@CustomerId", 7633245)
        ...     .with_parameter("@StartDate", "2014-01-01")
        ...     .to_sql_query()
        ... )
        >>> query.command_text
        'EXEC GetCustomerInvoices @CustomerId,@StartDate'

    """

    statement_kind = "stored_procedure"
    _finalizable_phases = (BuilderPhase.SOURCED,)

    def __init__(self, dialect: Dialect, procedure_name: str) -> None:
        if not dialect.supports_stored_procedures:
            raise InvalidArgumentError(
                format_error(
                    "stored_procedure_unsupported", param_name="dialect", operation=dialect.name
                ),
                param_name="dialect",
            )
        check_name(procedure_name, "procedure_name")
        super().__init__(dialect)
        self._parts.append(f"{dialect.stored_procedure_invocation_command} {procedure_name} ")
        self._phase = BuilderPhase.SOURCED

    def with_parameter(self, parameter: str, value: Any) -> StoredProcedureSqlBuilder:
        """パラメータを追加する（呼び出し順を保持）."""
        self._require_phase("with_parameter", BuilderPhase.SOURCED)
        check_name(parameter, "parameter")
        if self._arguments:
            self._parts.append(",")
        self._add_argument(value)
        self._parts.append(parameter)
        return self
