"""プレースホルダの振り直し."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from sqltext._messages import format_error
from sqltext.exceptions import ParameterMismatchError
from sqltext.parser.tokenizer import ParameterToken, find_positional, tokenize


@dataclass(frozen=True)
class RenumberedFragment:
    """振り直し結果."""

    sql: str
    arguments: tuple[Any, ...] = field(default_factory=tuple)
    """新しい番号順に並べ替えた引数."""

    @property
    def parameter_count(self) -> int:
        """断片が消費するプレースホルダ（引数）の数."""
        return len(self.arguments)


def renumber_parameters(
    sql: str,
    offset: int,
    arguments: Sequence[Any] = (),
) -> RenumberedFragment:
    """断片内のプレースホルダを ``offset`` からの連番に振り直す.

    名前付きプレースホルダ（``@p0``, ``:p0`` 等）は初出順に
    ``offset, offset + 1, ...`` へ書き換える。同じ名前が複数回現れる場合は
    1つの引数を参照する。全ての名前が同じ接頭辞と末尾の数字を持つ場合、
    引数は末尾の数字の順に対応付ける（``@p1`` は 2 番目の値）。
    番号を持たない名前（``@name``）は初出順に対応付け、``@p0`` 形式へ書き換える。
    引数は書き換え後の番号順に並べ替えて返す。

    位置プレースホルダ（``?``）は識別子を持たないため文字列は変更せず、
    数の検証のみ行う。

    Args:
        sql: SQL 断片
        offset: 外側の文ですでに蓄積されている引数の数
        arguments: 断片のプレースホルダに対応する値

    Returns:
        振り直し後の SQL と並べ替えた引数

    Raises:
        ParameterMismatchError: 値の数とプレースホルダの数が一致しない場合

    Examples:
        >>> renumber_parameters("Col1 = @p0 OR @p0 IS NULL", 2, ["a"]).sql
        'Col1 = @p2 OR @p2 IS NULL'

    """
    tokens = tokenize(sql)
    if not tokens:
        expected = len(find_positional(sql))
        _check_argument_count(sql, offset, expected, len(arguments))
        return RenumberedFragment(sql=sql, arguments=tuple(arguments))

    distinct = list(dict.fromkeys(token.name for token in tokens))
    _check_argument_count(sql, offset, len(distinct), len(arguments))

    prefix = _shared_numbered_prefix(distinct)
    if prefix is None:
        # 番号を持たない名前は初出順に引数を対応付け、@p0 形式へ書き換える
        value_for = dict(zip(distinct, arguments))
        new_names = {name: name[0] + "p" + str(offset + i) for i, name in enumerate(distinct)}
    else:
        # 元の番号順 i 番目の名前が arguments[i] を参照する
        ordered = sorted(distinct, key=lambda name: int(name[len(prefix) :]))
        value_for = dict(zip(ordered, arguments))
        new_names = {name: prefix + str(offset + i) for i, name in enumerate(distinct)}

    # 後ろから置換(位置ずれ防止)
    for token in reversed(tokens):
        sql = sql[: token.start] + new_names[token.name] + sql[token.end :]

    return RenumberedFragment(sql=sql, arguments=tuple(value_for[name] for name in distinct))


def count_parameters(sql: str) -> int:
    """断片が参照する引数の数を返す.

    名前付きプレースホルダがあれば重複を除いた数、なければ ``?`` の数。
    """
    tokens = tokenize(sql)
    if tokens:
        return len({token.name for token in tokens})
    return len(find_positional(sql))


def _shared_numbered_prefix(names: list[str]) -> str | None:
    """全ての名前が同じ接頭辞と末尾の数字を持つ場合、その接頭辞を返す."""
    prefixes = {ParameterToken(name=name, start=0, end=len(name)).prefix for name in names}
    if len(prefixes) != 1:
        return None
    prefix = prefixes.pop()
    if any(len(name) == len(prefix) for name in names):
        return None
    return prefix


def _check_argument_count(sql: str, offset: int, expected: int, supplied: int) -> None:
    if supplied < expected:
        position = offset + supplied
        raise ParameterMismatchError(
            format_error("missing_parameter_value", param_name="args", position=position, sql=sql),
            position=position,
        )
    if supplied > expected:
        position = offset + expected
        raise ParameterMismatchError(
            format_error("surplus_parameter_value", param_name="args", position=position, sql=sql),
            position=position,
        )
