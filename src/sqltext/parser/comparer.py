"""プレースホルダ名の数値順比較."""

from __future__ import annotations

from functools import cmp_to_key


def compare_parameter_names(x: str | None, y: str | None) -> int:
    """プレースホルダ名を数値として比較する.

    文字列の辞書順では ``@p10 < @p2`` となるが、この比較では
    ``@p2 < @p10`` となる。

    先頭から走査し、両者が同じ位置に数字を持ち、かつそれが短い方の
    最終文字でない場合はその数字で大小を決める。決まらなければ
    長さ、最後に通常の文字列比較で決める。

    Args:
        x: プレースホルダ名
        y: プレースホルダ名

    Returns:
        x < y なら負、x == y なら 0、x > y なら正

    Examples:
        >>> compare_parameter_names("@p2", "@p10")
        -1
        >>> compare_parameter_names("@p10", "@p9")
        1

    """
    if x is y or x == y:
        return 0
    if x is None:
        return -1
    if y is None:
        return 1

    min_length = min(len(x), len(y))
    for i in range(min_length):
        if x[i].isdigit() and y[i].isdigit() and i < min_length - 1:
            if x[i] < y[i]:
                return -1
            if x[i] > y[i]:
                return 1

    if len(x) != len(y):
        return -1 if len(x) < len(y) else 1
    return -1 if x < y else 1


parameter_name_key = cmp_to_key(compare_parameter_names)
"""``sorted(names, key=parameter_name_key)`` 用のキー関数."""
