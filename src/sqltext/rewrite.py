"""完成済み SqlQuery の書き換え: 件数取得、ページング、結合."""

from __future__ import annotations

from collections.abc import Iterable

import structlog

from sqltext._messages import format_error
from sqltext.dialect import Dialect
from sqltext.exceptions import InvalidArgumentError
from sqltext.paging import PagingOptions
from sqltext.parser.renumber import renumber_parameters
from sqltext.parser.sql_string import Clauses, SqlString
from sqltext.query import DbType, SqlArgument, SqlQuery

logger = structlog.get_logger(__name__)


def count_query(sql_query: SqlQuery, dialect: Dialect = Dialect.EMPTY) -> SqlQuery:
    """SELECT 文から同じ条件の件数取得クエリを生成する.

    FROM 句と WHERE 句だけを引き継ぎ、引数はそのまま渡す。

    Args:
        sql_query: 元の SELECT 文
        dialect: 方言

    Returns:
        ``SELECT COUNT(*) FROM <from> [WHERE <where>]``

    Raises:
        InvalidArgumentError: FROM 句が見つからない場合

    Examples:
        >>> q = SqlQuery("SELECT Id FROM Customers WHERE Status = ? ORDER BY Id", 1)
        >>> count_query(q).command_text
        'SELECT COUNT(*) FROM Customers WHERE Status = ?'

    """
    _check_query(sql_query)
    sql_string = SqlString.parse(sql_query.command_text, Clauses.FROM | Clauses.WHERE)
    if not sql_string.from_:
        raise InvalidArgumentError(
            format_error("no_from_clause", param_name="sql_query", sql=sql_query.command_text),
            param_name="sql_query",
        )
    where = f" WHERE {sql_string.where}" if sql_string.where else ""
    command_text = f"SELECT COUNT({dialect.select_wildcard}) FROM {sql_string.from_}{where}"
    return SqlQuery(command_text, *sql_query.arguments)


def page_query(
    sql_query: SqlQuery,
    paging: PagingOptions,
    dialect: Dialect = Dialect.EMPTY,
) -> SqlQuery:
    """方言のページング構文を付加する.

    ページング用の2つの INT32 引数を既存の引数の後ろに追加する。
    OFFSET/FETCH 構文の方言では ORDER BY がなければ
    ``ORDER BY CURRENT_TIMESTAMP`` を補う。

    Args:
        sql_query: 元の SELECT 文
        paging: ページング指定
        dialect: 方言

    Returns:
        ページング付きの SqlQuery

    Raises:
        InvalidArgumentError: ページング指定がない場合

    """
    _check_query(sql_query)
    if paging is None or paging.count < 1:
        raise InvalidArgumentError(
            format_error("invalid_paging", param_name="paging"), param_name="paging"
        )

    command_text = " ".join(sql_query.command_text.splitlines()).rstrip()
    position = len(sql_query.arguments)
    first = dialect.parameter_name(position)
    second = dialect.parameter_name(position + 1)

    match dialect.paging_style:
        case "offset_fetch":
            values = (paging.offset, paging.count)
            if not SqlString.parse(command_text, Clauses.ORDER_BY).order_by:
                command_text += " ORDER BY CURRENT_TIMESTAMP"
            clause = f" OFFSET {first} ROWS FETCH NEXT {second} ROWS ONLY"
        case "limit_comma":
            values = (paging.offset, paging.count)
            clause = f" LIMIT {first},{second}"
        case "rows_to":
            values = (paging.offset + 1, paging.offset + paging.count)
            clause = f" ROWS {first} TO {second}"
        case _:
            values = (paging.count, paging.offset)
            clause = f" LIMIT {first} OFFSET {second}"

    logger.debug(
        "sql_query_paged",
        dialect=dialect.name,
        paging_style=dialect.paging_style,
        argument_count=position + 2,
    )
    return SqlQuery(
        command_text + clause,
        *sql_query.arguments,
        *(SqlArgument(v, DbType.INT32) for v in values),
    )


def combine(sql_queries: Iterable[SqlQuery], dialect: Dialect = Dialect.EMPTY) -> SqlQuery:
    """複数の文を1つのバッチに結合する.

    各文は文区切りと改行で連結する。2つ目以降の文のプレースホルダは
    それまでの引数の数から振り直す。ストアドプロシージャ呼び出しは
    パラメータ名をそのまま使用する。

    Args:
        sql_queries: 結合する文
        dialect: 方言

    Returns:
        結合した SqlQuery

    Raises:
        InvalidArgumentError: sql_queries が None の場合
        ParameterMismatchError: 文のプレースホルダ数と引数の数が一致しない場合

    Examples:
        >>> combined = combine(
        ...     [SqlQuery("SELECT * FROM A WHERE Id = @p0", 1),
        ...      SqlQuery("SELECT * FROM B WHERE Id = @p0", 2)],
        ...     Dialect.MSSQL,
        ... )
        >>> print(combined.command_text)
        SELECT * FROM A WHERE Id = @p0;
        SELECT * FROM B WHERE Id = @p1

    """
    if sql_queries is None:
        raise InvalidArgumentError(
            format_error("argument_null", param_name="sql_queries"), param_name="sql_queries"
        )

    texts: list[str] = []
    arguments: list[SqlArgument] = []
    statement_count = 0
    for sql_query in sql_queries:
        _check_query(sql_query)
        if _is_stored_procedure(sql_query.command_text, dialect):
            texts.append(sql_query.command_text)
            arguments.extend(sql_query.arguments)
        else:
            fragment = renumber_parameters(
                sql_query.command_text, len(arguments), sql_query.arguments
            )
            texts.append(fragment.sql)
            arguments.extend(fragment.arguments)
        statement_count += 1

    logger.debug(
        "sql_queries_combined",
        dialect=dialect.name,
        statement_count=statement_count,
        argument_count=len(arguments),
    )
    return SqlQuery(f"{dialect.statement_separator}\n".join(texts), *arguments)


def _is_stored_procedure(command_text: str, dialect: Dialect) -> bool:
    command = dialect.stored_procedure_invocation_command
    if not command or not command_text.startswith(f"{command} "):
        return False
    # PostgreSQL は関数呼び出しも SELECT のため FROM の有無で区別する
    return not SqlString.parse(command_text, Clauses.FROM).from_


def _check_query(sql_query: SqlQuery) -> None:
    if not isinstance(sql_query, SqlQuery):
        raise InvalidArgumentError(
            format_error("argument_null", param_name="sql_query"), param_name="sql_query"
        )
