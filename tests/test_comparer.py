"""プレースホルダ名比較のテスト."""

from __future__ import annotations

import pytest

from sqltext import compare_parameter_names
from sqltext.parser import parameter_name_key


class TestCompareParameterNames:
    """compare_parameter_names のテスト."""

    @pytest.mark.parametrize(
        ("x", "y"),
        [
            ("@p2", "@p10"),
            ("@p9", "@p10"),
            ("@p10", "@p11"),
            ("@p12", "@p21"),
            ("@p0", "@p1"),
            (":p3", ":p30"),
        ],
    )
    def test_less_than(self, x: str, y: str) -> None:
        assert compare_parameter_names(x, y) < 0
        assert compare_parameter_names(y, x) > 0

    def test_equal(self) -> None:
        assert compare_parameter_names("@p3", "@p3") == 0

    def test_none(self) -> None:
        """None は他のどの名前よりも小さい."""
        assert compare_parameter_names(None, "@p0") < 0
        assert compare_parameter_names("@p0", None) > 0
        assert compare_parameter_names(None, None) == 0


class TestParameterNameKey:
    """sorted のキーとして使用する."""

    def test_sort_numerically(self) -> None:
        names = ["@p10", "@p2", "@p1", "@p9", "@p0"]
        assert sorted(names, key=parameter_name_key) == ["@p0", "@p1", "@p2", "@p9", "@p10"]

    def test_plain_string_order_differs(self) -> None:
        """通常の文字列比較とは異なる順序になる."""
        names = ["@p10", "@p2"]
        assert sorted(names) == ["@p10", "@p2"]
        assert sorted(names, key=parameter_name_key) == ["@p2", "@p10"]
