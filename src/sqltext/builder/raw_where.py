"""RawWhereBuilder: 生の述語を段階的に組み立てる."""

from __future__ import annotations

from typing import Any, TypeVar

from sqltext._messages import format_error
from sqltext.builder.predicate import PredicateComposer
from sqltext.exceptions import InvalidArgumentError
from sqltext.parser.renumber import renumber_parameters

_P = TypeVar("_P", bound=PredicateComposer)


class RawWhereBuilder:
    """生の述語と値を蓄積し、まとめて WHERE 句として適用する.

    条件に応じて述語を足していくような場面で使用する。各断片の
    プレースホルダは蓄積済みの値の数から振り直される。

    Examples:
        >>> where = RawWhereBuilder()
        >>> where.append("Forename = @p0", "Fred").append(" AND Surname = @p0", "Flintstone")
        RawWhereBuilder('Forename = @p0 AND Surname = @p1', arguments=2)

    """

    def __init__(self) -> None:
        self._parts: list[str] = []
        self._arguments: list[Any] = []

    @property
    def arguments(self) -> tuple[Any, ...]:
        """蓄積済みの値."""
        return tuple(self._arguments)

    def append(self, predicate: str, *args: Any) -> RawWhereBuilder:
        """述語の断片と値を追加する.

        Raises:
            ParameterMismatchError: 値の数とプレースホルダの数が一致しない場合

        """
        if predicate is None:
            raise InvalidArgumentError(
                format_error("argument_null", param_name="predicate"), param_name="predicate"
            )
        fragment = renumber_parameters(predicate, len(self._arguments), args)
        self._parts.append(fragment.sql)
        self._arguments.extend(fragment.arguments)
        return self

    def apply_to(self, builder: _P) -> _P:
        """蓄積した述語を builder の WHERE 句として適用する.

        ``builder.where_raw(str(self), *self.arguments)`` と同じ。

        Args:
            builder: SELECT / UPDATE / DELETE ビルダー

        Returns:
            述語を適用した builder

        Raises:
            InvalidArgumentError: builder が None の場合、または述語が空の場合

        """
        if builder is None:
            raise InvalidArgumentError(
                format_error("argument_null", param_name="builder"), param_name="builder"
            )
        return builder.where_raw(str(self), *self._arguments)

    def __str__(self) -> str:
        return "".join(self._parts)

    def __repr__(self) -> str:
        return f"RawWhereBuilder({str(self)!r}, arguments={len(self._arguments)})"
