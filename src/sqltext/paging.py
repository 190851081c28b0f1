"""PagingOptions: ページング指定."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar

from sqltext._messages import format_error
from sqltext.exceptions import InvalidArgumentError


@dataclass(frozen=True)
class PagingOptions:
    """取得件数とスキップ件数の組.

    直接生成せず ``for_page`` / ``skip_take`` を使用する。

    Examples:
        >>> PagingOptions.for_page(3, 25)
        PagingOptions(count=25, offset=50)

    """

    count: int = 0
    offset: int = 0

    NONE: ClassVar[PagingOptions]
    """ページングなし."""

    @property
    def is_none(self) -> bool:
        """ページングなしか."""
        return self.count == 0 and self.offset == 0

    @classmethod
    def for_page(cls, page: int, results_per_page: int) -> PagingOptions:
        """ページ番号（1始まり）と1ページあたりの件数から生成する.

        Raises:
            InvalidArgumentError: page または results_per_page が 1 未満の場合

        """
        _check_minimum(page, 1, "page")
        _check_minimum(results_per_page, 1, "results_per_page")
        return cls(count=results_per_page, offset=(page - 1) * results_per_page)

    @classmethod
    def skip_take(cls, skip: int, take: int) -> PagingOptions:
        """スキップ件数と取得件数から生成する.

        Raises:
            InvalidArgumentError: skip が負、または take が 1 未満の場合

        """
        _check_minimum(skip, 0, "skip")
        _check_minimum(take, 1, "take")
        return cls(count=take, offset=skip)


PagingOptions.NONE = PagingOptions()


def _check_minimum(value: int, minimum: int, param_name: str) -> None:
    if value < minimum:
        raise InvalidArgumentError(
            f"{format_error('invalid_paging', param_name=param_name)} ({value} < {minimum})",
            param_name=param_name,
        )
