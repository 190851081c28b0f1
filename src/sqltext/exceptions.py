"""sqltext 例外クラス."""

from __future__ import annotations


class SqlTextError(Exception):
    """sqltext の基底例外."""


class InvalidArgumentError(SqlTextError, ValueError):
    """引数が契約に違反している."""

    def __init__(self, message: str, *, param_name: str | None = None) -> None:
        super().__init__(message)
        self.param_name = param_name


class ParameterMismatchError(InvalidArgumentError):
    """プレースホルダ数と引数の数が一致しない."""

    def __init__(
        self,
        message: str,
        *,
        position: int,
        param_name: str | None = "args",
    ) -> None:
        super().__init__(message, param_name=param_name)
        self.position = position


class BuilderStateError(SqlTextError):
    """現在のビルダーフェーズでは許可されない操作."""
