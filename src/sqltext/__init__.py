"""sqltext: dialect-agnostic parameterized SQL text builder for Python."""

from sqltext.builder import RawWhereBuilder, SqlBuilder
from sqltext.dialect import Dialect
from sqltext.exceptions import (
    BuilderStateError,
    InvalidArgumentError,
    ParameterMismatchError,
    SqlTextError,
)
from sqltext.mapper import Column, ColumnInfo, TableInfo, entity, table_info_for
from sqltext.paging import PagingOptions
from sqltext.parser import (
    Clauses,
    SqlString,
    compare_parameter_names,
    get_first_parameter_position,
    get_parameter_names,
    renumber_parameters,
)
from sqltext.query import DbType, SqlArgument, SqlQuery
from sqltext.rewrite import combine, count_query, page_query

__all__ = [
    "BuilderStateError",
    "Clauses",
    "Column",
    "ColumnInfo",
    "DbType",
    "Dialect",
    "InvalidArgumentError",
    "PagingOptions",
    "ParameterMismatchError",
    "RawWhereBuilder",
    "SqlArgument",
    "SqlBuilder",
    "SqlQuery",
    "SqlString",
    "SqlTextError",
    "TableInfo",
    "combine",
    "compare_parameter_names",
    "count_query",
    "entity",
    "get_first_parameter_position",
    "get_parameter_names",
    "page_query",
    "renumber_parameters",
    "table_info_for",
]
