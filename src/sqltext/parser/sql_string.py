"""完成済み SQL 文字列からの句の切り出し."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Flag

from sqltext.parser.tokenizer import _overlaps, _quoted_ranges


class Clauses(Flag):
    """切り出し対象の句."""

    SELECT = 1
    FROM = 2
    WHERE = 4
    GROUP_BY = 8
    ORDER_BY = 16


# 空白区切りのキーワード（大文字小文字を区別しない）
_KEYWORD_PATTERNS = {
    Clauses.FROM: re.compile(r"\sFROM\b", re.IGNORECASE),
    Clauses.WHERE: re.compile(r"\sWHERE\b", re.IGNORECASE),
    Clauses.GROUP_BY: re.compile(r"\sGROUP\s+BY\b", re.IGNORECASE),
    Clauses.ORDER_BY: re.compile(r"\sORDER\s+BY\b", re.IGNORECASE),
}

_SELECT_PATTERN = re.compile(r"^\s*SELECT\b", re.IGNORECASE)

_LINE_BREAK_PATTERN = re.compile(r"\r\n|\r|\n")

# 各句の終端候補（先に見つかったものが優先）
_BOUNDARIES = {
    Clauses.SELECT: (Clauses.FROM, Clauses.WHERE, Clauses.GROUP_BY, Clauses.ORDER_BY),
    Clauses.FROM: (Clauses.WHERE, Clauses.GROUP_BY, Clauses.ORDER_BY),
    Clauses.WHERE: (Clauses.GROUP_BY, Clauses.ORDER_BY),
    Clauses.GROUP_BY: (Clauses.ORDER_BY,),
    Clauses.ORDER_BY: (),
}


@dataclass(frozen=True)
class SqlString:
    """SQL 文字列を句ごとに分解した結果.

    見つからなかった句、要求されなかった句は空文字列になる。
    """

    select: str = ""
    from_: str = ""
    where: str = ""
    group_by: str = ""
    order_by: str = ""

    @classmethod
    def parse(cls, command_text: str | None, clauses: Clauses) -> SqlString:
        """SQL 文字列から要求された句の中身を切り出す.

        改行は空白に正規化してからキーワードを検索する。括弧内
        （サブクエリ）と引用符内のキーワードは句の区切りとして扱わない。

        Args:
            command_text: 完成済みの SQL 文字列
            clauses: 切り出す句（``Clauses.WHERE | Clauses.GROUP_BY`` のように指定）

        Returns:
            句ごとの文字列

        Examples:
            >>> s = SqlString.parse(
            ...     "SELECT Id FROM Customers WHERE Id = @p0 ORDER BY Id",
            ...     Clauses.WHERE,
            ... )
            >>> s.where
            'Id = @p0'
            >>> s.order_by
            ''

        """
        if not command_text:
            return cls()

        text = _LINE_BREAK_PATTERN.sub(" ", command_text)
        positions = _keyword_positions(text)

        select_match = _SELECT_PATTERN.match(text)
        if select_match is not None:
            positions[Clauses.SELECT] = (select_match.start(), select_match.end())

        values: dict[Clauses, str] = {}
        for clause, boundaries in _BOUNDARIES.items():
            if clause not in clauses or clause not in positions:
                continue
            start = positions[clause][1]
            end = len(text)
            for boundary in boundaries:
                if boundary in positions and positions[boundary][0] >= start:
                    end = positions[boundary][0]
                    break
            values[clause] = text[start:end].strip()

        return cls(
            select=values.get(Clauses.SELECT, ""),
            from_=values.get(Clauses.FROM, ""),
            where=values.get(Clauses.WHERE, ""),
            group_by=values.get(Clauses.GROUP_BY, ""),
            order_by=values.get(Clauses.ORDER_BY, ""),
        )


def _keyword_positions(text: str) -> dict[Clauses, tuple[int, int]]:
    """最上位（括弧の外、引用符の外）で最初に現れる各キーワードの範囲を返す."""
    quoted = _quoted_ranges(text)
    depths = _paren_depths(text, quoted)
    positions: dict[Clauses, tuple[int, int]] = {}
    for clause, pattern in _KEYWORD_PATTERNS.items():
        for m in pattern.finditer(text):
            if depths[m.start()] == 0 and not _overlaps(m.start(), m.end(), quoted):
                positions[clause] = (m.start(), m.end())
                break
    return positions


def _paren_depths(text: str, quoted: list[tuple[int, int]]) -> list[int]:
    """各文字位置の括弧の深さを返す."""
    depths: list[int] = []
    depth = 0
    in_quote = [False] * len(text)
    for start, end in quoted:
        for i in range(start, end):
            in_quote[i] = True
    for i, ch in enumerate(text):
        if not in_quote[i]:
            if ch == "(":
                depth += 1
            elif ch == ")":
                depth = max(depth - 1, 0)
        depths.append(depth)
    return depths
