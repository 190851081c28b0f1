"""SQL テキスト内プレースホルダの字句解析."""

from __future__ import annotations

import re
from dataclasses import dataclass

# 名前付きプレースホルダ: @name / :name
#   @@IDENTITY や ::int のような二重接頭辞、
#   label: や 12:30 のように単語文字に続く接頭辞はプレースホルダではない。
NAMED_PARAMETER_PATTERN = re.compile(r"(?<![@:\w])[@:](?![@:])\w+", re.IGNORECASE)

# 位置プレースホルダ: ?
POSITIONAL_PARAMETER_PATTERN = re.compile(r"\?")

# 引用符で囲まれた範囲（文字列リテラルと引用符付き識別子）
QUOTED_PATTERN = re.compile(
    r"'(?:''|[^'])*'"  # 'string' (SQL escape: '')
    r'|"(?:""|[^"])*"'  # "identifier" (SQL escape: "")
)


@dataclass(frozen=True)
class ParameterToken:
    """プレースホルダトークン."""

    name: str
    """接頭辞を含むプレースホルダ名（例: ``@p0``）."""

    start: int
    """元文字列内の開始位置."""

    end: int
    """元文字列内の終了位置."""

    @property
    def prefix(self) -> str:
        """末尾の数字を除いた部分（例: ``@p0`` → ``@p``）."""
        return self.name.rstrip("0123456789")

    @property
    def bare_name(self) -> str:
        """接頭辞記号を除いた名前（例: ``@p0`` → ``p0``）."""
        return self.name[1:]


def tokenize(sql: str) -> list[ParameterToken]:
    """名前付きプレースホルダを出現順に抽出する.

    引用符で囲まれた範囲にあるものは除外する。

    Args:
        sql: SQL 文字列

    Returns:
        ParameterToken のリスト（出現順、重複を含む）

    """
    quoted = _quoted_ranges(sql)
    return [
        ParameterToken(name=m.group(0), start=m.start(), end=m.end())
        for m in NAMED_PARAMETER_PATTERN.finditer(sql)
        if not _overlaps(m.start(), m.end(), quoted)
    ]


def find_positional(sql: str) -> list[int]:
    """位置プレースホルダ ``?`` の位置を抽出する."""
    quoted = _quoted_ranges(sql)
    return [
        m.start()
        for m in POSITIONAL_PARAMETER_PATTERN.finditer(sql)
        if not _overlaps(m.start(), m.end(), quoted)
    ]


def get_parameter_names(sql: str) -> list[str]:
    """重複を除いた名前付きプレースホルダ名を初出順に返す.

    Examples:
        >>> get_parameter_names("Col1 = @p0 AND (Col2 = @p1 OR @p1 IS NULL)")
        ['@p0', '@p1']
        >>> get_parameter_names("SELECT @@IDENTITY")
        []

    """
    return list(dict.fromkeys(token.name for token in tokenize(sql)))


def get_first_parameter_position(sql: str) -> int:
    """最初のプレースホルダ（名前付きまたは ``?``）の位置を返す.

    Returns:
        位置。プレースホルダがない場合は -1

    """
    positions = [token.start for token in tokenize(sql)[:1]] + find_positional(sql)[:1]
    return min(positions) if positions else -1


def _quoted_ranges(sql: str) -> list[tuple[int, int]]:
    return [(m.start(), m.end()) for m in QUOTED_PATTERN.finditer(sql)]


def _overlaps(start: int, end: int, ranges: list[tuple[int, int]]) -> bool:
    """指定範囲が既存範囲と重複するか判定する."""
    return any(start < r_end and end > r_start for r_start, r_end in ranges)
