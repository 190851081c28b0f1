"""SQL テキスト解析パッケージ."""

from sqltext.parser.comparer import compare_parameter_names, parameter_name_key
from sqltext.parser.renumber import RenumberedFragment, count_parameters, renumber_parameters
from sqltext.parser.sql_string import Clauses, SqlString
from sqltext.parser.tokenizer import (
    ParameterToken,
    find_positional,
    get_first_parameter_position,
    get_parameter_names,
    tokenize,
)

__all__ = [
    "Clauses",
    "ParameterToken",
    "RenumberedFragment",
    "SqlString",
    "compare_parameter_names",
    "count_parameters",
    "find_positional",
    "get_first_parameter_position",
    "get_parameter_names",
    "parameter_name_key",
    "renumber_parameters",
    "tokenize",
]
