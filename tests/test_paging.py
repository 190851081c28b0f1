"""PagingOptions のテスト."""

from __future__ import annotations

import pytest

from sqltext import InvalidArgumentError, PagingOptions


class TestPagingOptions:
    """生成と検証."""

    def test_for_page(self) -> None:
        assert PagingOptions.for_page(1, 25) == PagingOptions(count=25, offset=0)
        assert PagingOptions.for_page(3, 25) == PagingOptions(count=25, offset=50)

    def test_skip_take(self) -> None:
        assert PagingOptions.skip_take(10, 5) == PagingOptions(count=5, offset=10)
        assert PagingOptions.skip_take(0, 1) == PagingOptions(count=1, offset=0)

    def test_none(self) -> None:
        assert PagingOptions.NONE.is_none is True
        assert PagingOptions.for_page(1, 10).is_none is False

    @pytest.mark.parametrize(
        ("page", "results_per_page", "param_name"),
        [(0, 25, "page"), (-1, 25, "page"), (1, 0, "results_per_page")],
    )
    def test_for_page_invalid(self, page: int, results_per_page: int, param_name: str) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            PagingOptions.for_page(page, results_per_page)
        assert exc_info.value.param_name == param_name

    @pytest.mark.parametrize(
        ("skip", "take", "param_name"),
        [(-1, 5, "skip"), (0, 0, "take")],
    )
    def test_skip_take_invalid(self, skip: int, take: int, param_name: str) -> None:
        with pytest.raises(InvalidArgumentError) as exc_info:
            PagingOptions.skip_take(skip, take)
        assert exc_info.value.param_name == param_name

    def test_frozen(self) -> None:
        paging = PagingOptions.for_page(1, 10)
        with pytest.raises(AttributeError):
            paging.count = 20  # type: ignore[misc]
