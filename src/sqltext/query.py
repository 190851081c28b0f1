"""SqlQuery と SqlArgument: ビルダーが生成する不変の結果."""

from __future__ import annotations

import datetime
import uuid
from decimal import Decimal
from enum import Enum
from typing import Any

from sqltext._messages import format_error
from sqltext.exceptions import ParameterMismatchError
from sqltext.parser.tokenizer import find_positional, tokenize


class DbType(Enum):
    """バインド時の DB 型."""

    ANSI_STRING = "ansi_string"
    BINARY = "binary"
    BOOLEAN = "boolean"
    BYTE = "byte"
    DATE = "date"
    DATE_TIME = "date_time"
    DATE_TIME_OFFSET = "date_time_offset"
    DECIMAL = "decimal"
    DOUBLE = "double"
    GUID = "guid"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    OBJECT = "object"
    STRING = "string"
    TIME = "time"


_TYPE_TO_DB_TYPE: dict[type, DbType] = {
    bool: DbType.BOOLEAN,
    int: DbType.INT32,
    float: DbType.DOUBLE,
    Decimal: DbType.DECIMAL,
    str: DbType.STRING,
    bytes: DbType.BINARY,
    bytearray: DbType.BINARY,
    memoryview: DbType.BINARY,
    datetime.datetime: DbType.DATE_TIME,
    datetime.date: DbType.DATE,
    datetime.time: DbType.TIME,
    datetime.timedelta: DbType.INT64,
    uuid.UUID: DbType.GUID,
}


def resolve_db_type(value_type: type) -> DbType:
    """Python の型から DbType を解決する.

    型の MRO を順にたどり、最初に対応表に見つかった DbType を返す。
    ``bool`` は ``int`` より先に、``datetime`` は ``date`` より先に解決される。
    Enum 型は対応表に見つからなければ ``OBJECT`` となる。

    Examples:
        >>> resolve_db_type(int)
        <DbType.INT32: 'int32'>
        >>> resolve_db_type(bool)
        <DbType.BOOLEAN: 'boolean'>

    """
    for klass in value_type.__mro__:
        db_type = _TYPE_TO_DB_TYPE.get(klass)
        if db_type is not None:
            return db_type
    return DbType.OBJECT


def _infer_db_type(value: Any) -> DbType:
    if value is None:
        return DbType.OBJECT
    if isinstance(value, Enum) and not isinstance(value, (int, str)):
        return _infer_db_type(value.value)
    return resolve_db_type(type(value))


class SqlArgument:
    """バインド値とその DB 型の組."""

    __slots__ = ("_db_type", "_value")

    def __init__(self, value: Any, db_type: DbType | None = None) -> None:
        self._value = value
        self._db_type = db_type if db_type is not None else _infer_db_type(value)

    @property
    def value(self) -> Any:
        """バインド値."""
        return self._value

    @property
    def db_type(self) -> DbType:
        """DB 型."""
        return self._db_type

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SqlArgument):
            return NotImplemented
        return self._db_type == other._db_type and self._value == other._value

    def __hash__(self) -> int:
        return hash((self._db_type, "" if self._value is None else self._value))

    def __repr__(self) -> str:
        return f"SqlArgument({self._value!r}, {self._db_type})"


class SqlQuery:
    """コマンドテキストと、バインド順に並んだ引数の組.

    Examples:
        >>> query = SqlQuery("SELECT * FROM Customers WHERE Id = ?", 1024)
        >>> query.params
        [1024]

    """

    __slots__ = ("_arguments", "_command_text")

    def __init__(self, command_text: str, *arguments: Any) -> None:
        self._command_text = command_text
        self._arguments = tuple(
            arg if isinstance(arg, SqlArgument) else SqlArgument(arg) for arg in arguments
        )

    @property
    def command_text(self) -> str:
        """SQL 文字列."""
        return self._command_text

    @property
    def arguments(self) -> tuple[SqlArgument, ...]:
        """バインド順の引数."""
        return self._arguments

    @property
    def params(self) -> list[Any]:
        """?形式用: バインド順の値のリスト."""
        return [arg.value for arg in self._arguments]

    @property
    def named_params(self) -> dict[str, Any]:
        """名前付き形式用: 接頭辞を除いたプレースホルダ名をキーとする辞書.

        Raises:
            ParameterMismatchError: プレースホルダ数と引数の数が一致しない場合

        """
        names: list[str] = []
        for token in tokenize(self._command_text):
            if token.bare_name not in names:
                names.append(token.bare_name)
        if not names and find_positional(self._command_text):
            names = [f"p{i}" for i in range(len(self._arguments))]
        if len(names) != len(self._arguments):
            position = min(len(names), len(self._arguments))
            raise ParameterMismatchError(
                format_error(
                    "named_params_mismatch",
                    param_name="arguments",
                    position=position,
                    sql=self._command_text,
                ),
                position=position,
                param_name="arguments",
            )
        return dict(zip(names, self.params))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SqlQuery):
            return NotImplemented
        return (
            self._command_text == other._command_text and self._arguments == other._arguments
        )

    def __hash__(self) -> int:
        return hash((self._command_text, self._arguments))

    def __repr__(self) -> str:
        return f"SqlQuery({self._command_text!r}, arguments={len(self._arguments)})"

    def __str__(self) -> str:
        return self._command_text
