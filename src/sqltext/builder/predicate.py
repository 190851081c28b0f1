"""PredicateComposer: WHERE 句の組み立て."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from sqltext._messages import format_error
from sqltext.builder.base import BuilderPhase, SqlBuilderBase, check_name
from sqltext.exceptions import BuilderStateError, InvalidArgumentError
from sqltext.query import SqlQuery

_P = TypeVar("_P", bound="PredicateComposer")


@dataclass(frozen=True)
class _PendingPredicate:
    """演算子の適用を待っている述語."""

    operand: str
    """前の述語との結合子（``""``, ``" AND"``, ``" OR"``）."""

    column: str | None
    """エスケープ済みのカラム名。None は EXISTS 待ち."""


class PredicateComposer(SqlBuilderBase):
    """WHERE 句を組み立てるビルダーの基底クラス.

    2つの書き方を受け付ける。

    - 生の述語: ``where("Column2 = ?", "FOO")``
    - カラム起点: ``where("Column1").in_(1, 2, 3)``

    文字列だけを渡した場合はカラム名として扱う。引数なしの ``where()`` は
    ``exists()`` / ``not_exists()`` を続けるために使う。
    最初の述語には接頭辞が付かず、``and_where`` / ``or_where`` による述語には
    カラム起点の場合も含めて ``AND`` / ``OR`` が付く。
    """

    _where_phases: ClassVar[tuple[BuilderPhase, ...]] = (BuilderPhase.SOURCED,)
    """``where()`` を呼び出せるフェーズ."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._added_where = False
        self._pending: _PendingPredicate | None = None

    # --- 述語の開始 ---

    def where(self: _P, predicate: str | SqlQuery | None = None, *args: Any) -> _P:
        """最初の述語を追加する.

        Args:
            predicate: カラム名、生の述語、または述語としての SqlQuery。
                省略時は EXISTS 待ちになる
            *args: 生の述語のプレースホルダに対応する値

        Raises:
            InvalidArgumentError: 述語が空、または値の数が一致しない場合
            BuilderStateError: 現在のフェーズで WHERE を追加できない場合

        """
        self._require_phase("where", *self._where_phases)
        self._start_predicate("", predicate, args)
        return self

    def where_raw(self: _P, predicate: str, *args: Any) -> _P:
        """値の有無に関わらず predicate を生の述語として最初の WHERE に追加する.

        ``where("IsActive = 1")`` はカラム名と解釈されるため、値のない
        述語はこちらを使用する。
        """
        self._require_phase("where_raw", *self._where_phases)
        self._add_raw_predicate("", predicate, args)
        return self

    def and_where(self: _P, predicate: str | SqlQuery | None = None, *args: Any) -> _P:
        """``AND`` で結合する述語を追加する."""
        self._require_phase("and_where", BuilderPhase.FILTERED)
        self._start_predicate(" AND", predicate, args)
        return self

    def or_where(self: _P, predicate: str | SqlQuery | None = None, *args: Any) -> _P:
        """``OR`` で結合する述語を追加する."""
        self._require_phase("or_where", BuilderPhase.FILTERED)
        self._start_predicate(" OR", predicate, args)
        return self

    # --- 比較演算子 ---

    def is_equal_to(self: _P, value: Any) -> _P:
        """``column = value``（値またはサブクエリ）."""
        self._add_comparison("is_equal_to", " = ", value)
        return self

    def is_not_equal_to(self: _P, value: Any) -> _P:
        """``column <> value``（値またはサブクエリ）."""
        self._add_comparison("is_not_equal_to", " <> ", value)
        return self

    def is_greater_than(self: _P, value: Any) -> _P:
        """``column > value``."""
        self._add_comparison("is_greater_than", " > ", value)
        return self

    def is_greater_than_or_equal_to(self: _P, value: Any) -> _P:
        """``column >= value``."""
        self._add_comparison("is_greater_than_or_equal_to", " >= ", value)
        return self

    def is_less_than(self: _P, value: Any) -> _P:
        """``column < value``."""
        self._add_comparison("is_less_than", " < ", value)
        return self

    def is_less_than_or_equal_to(self: _P, value: Any) -> _P:
        """``column <= value``."""
        self._add_comparison("is_less_than_or_equal_to", " <= ", value)
        return self

    def is_like(self: _P, value: Any) -> _P:
        """``column LIKE value``."""
        self._add_comparison("is_like", " LIKE ", value)
        return self

    def is_not_like(self: _P, value: Any) -> _P:
        """``column NOT LIKE value``."""
        self._add_comparison("is_not_like", " NOT LIKE ", value)
        return self

    def between(self: _P, lower: Any, upper: Any) -> _P:
        """``column BETWEEN lower AND upper``."""
        self._add_between("between", lower, upper, negate=False)
        return self

    def not_between(self: _P, lower: Any, upper: Any) -> _P:
        """``column NOT BETWEEN lower AND upper``."""
        self._add_between("not_between", lower, upper, negate=True)
        return self

    def in_(self: _P, *values: Any) -> _P:
        """``column IN (...)``.

        値の並び、1つのシーケンス、または1つ以上のサブクエリを受け付ける。
        """
        self._add_in("in_", values, negate=False)
        return self

    def not_in(self: _P, *values: Any) -> _P:
        """``column NOT IN (...)``."""
        self._add_in("not_in", values, negate=True)
        return self

    def is_null(self: _P) -> _P:
        """``column IS NULL``."""
        pending = self._take_column("is_null")
        self._emit(pending, f"{pending.column} IS NULL")
        return self

    def is_not_null(self: _P) -> _P:
        """``column IS NOT NULL``."""
        pending = self._take_column("is_not_null")
        self._emit(pending, f"{pending.column} IS NOT NULL")
        return self

    def exists(self: _P, sub_query: SqlQuery) -> _P:
        """``EXISTS (sub_query)``."""
        self._add_exists("exists", sub_query, negate=False)
        return self

    def not_exists(self: _P, sub_query: SqlQuery) -> _P:
        """``NOT EXISTS (sub_query)``."""
        self._add_exists("not_exists", sub_query, negate=True)
        return self

    # --- 内部処理 ---

    def _check_finalizable(self) -> None:
        if self._pending is not None:
            raise BuilderStateError(
                format_error("pending_column", operation="to_sql_query", phase=self._phase.name)
            )
        super()._check_finalizable()

    def _require_phase(self, operation: str, *phases: BuilderPhase) -> None:
        if self._pending is not None:
            raise BuilderStateError(
                format_error("pending_column", operation=operation, phase=self._phase.name)
            )
        super()._require_phase(operation, *phases)

    def _start_predicate(
        self, operand: str, predicate: str | SqlQuery | None, args: Sequence[Any]
    ) -> None:
        if predicate is None:
            if args:
                check_name(predicate, "predicate")
            self._open_where(operand)
            self._pending = _PendingPredicate(operand=operand, column=None)
        elif isinstance(predicate, SqlQuery):
            if args:
                raise InvalidArgumentError(
                    format_error("surplus_parameter_value", param_name="args"),
                    param_name="args",
                )
            self._add_raw_predicate(operand, predicate.command_text, predicate.arguments)
        elif args:
            self._add_raw_predicate(operand, predicate, args)
        else:
            check_name(predicate, "column")
            column = self._escape(predicate)
            self._open_where(operand)
            self._pending = _PendingPredicate(operand=operand, column=column)

    def _add_raw_predicate(self, operand: str, predicate: str, args: Sequence[Any]) -> None:
        """生の述語をプレースホルダを振り直して追加する.

        Args:
            operand: 結合子（``""``, ``" AND"``, ``" OR"``）
            predicate: 述語
            args: プレースホルダに対応する値

        """
        check_name(predicate, "predicate")
        if args is None:
            raise InvalidArgumentError(
                format_error("argument_null", param_name="args"), param_name="args"
            )
        text = self._add_fragment(predicate, args)
        prefix = operand or " WHERE"
        self._parts.append(f"{prefix} ({text})")
        self._added_where = True
        self._phase = BuilderPhase.FILTERED

    def _open_where(self, operand: str) -> None:
        if not operand and not self._added_where:
            self._parts.append(" WHERE")
            self._added_where = True

    def _take_column(self, operation: str) -> _PendingPredicate:
        pending = self._pending
        if pending is None or pending.column is None:
            raise BuilderStateError(
                format_error("no_pending_column", operation=operation, phase=self._phase.name)
            )
        return pending

    def _emit(self, pending: _PendingPredicate, body: str) -> None:
        self._parts.append(f"{pending.operand} ({body})")
        self._pending = None
        self._phase = BuilderPhase.FILTERED

    def _add_comparison(self, operation: str, operator: str, value: Any) -> None:
        pending = self._take_column(operation)
        if isinstance(value, SqlQuery):
            operand = f"({self._add_sub_query(value)})"
        else:
            operand = self._add_argument(value)
        self._emit(pending, f"{pending.column}{operator}{operand}")

    def _add_between(self, operation: str, lower: Any, upper: Any, *, negate: bool) -> None:
        pending = self._take_column(operation)
        for name, bound in (("lower", lower), ("upper", upper)):
            if bound is None:
                raise InvalidArgumentError(
                    format_error("argument_null", param_name=name), param_name=name
                )
        lower_param = self._add_argument(lower)
        upper_param = self._add_argument(upper)
        keyword = " NOT BETWEEN " if negate else " BETWEEN "
        self._emit(pending, f"{pending.column}{keyword}{lower_param} AND {upper_param}")

    def _add_in(self, operation: str, values: tuple[Any, ...], *, negate: bool) -> None:
        pending = self._take_column(operation)
        if len(values) == 1 and _is_value_sequence(values[0]):
            values = tuple(values[0])
        if not values or (len(values) == 1 and values[0] is None):
            raise InvalidArgumentError(
                format_error("argument_empty_sequence", param_name="args"), param_name="args"
            )

        keyword = " NOT IN " if negate else " IN "
        sub_queries = [v for v in values if isinstance(v, SqlQuery)]
        if sub_queries and len(sub_queries) != len(values):
            raise InvalidArgumentError(
                format_error("mixed_in_operands", param_name="sub_queries"),
                param_name="sub_queries",
            )

        if len(sub_queries) == 1:
            items = self._add_sub_query(sub_queries[0])
        elif sub_queries:
            items = ", ".join(f"({self._add_sub_query(q)})" for q in sub_queries)
        else:
            items = ",".join(self._add_argument(v) for v in values)
        self._emit(pending, f"{pending.column}{keyword}({items})")

    def _add_exists(self, operation: str, sub_query: SqlQuery, *, negate: bool) -> None:
        pending = self._pending
        if pending is None or pending.column is not None:
            raise BuilderStateError(
                format_error("invalid_phase", operation=operation, phase=self._phase.name)
            )
        if not isinstance(sub_query, SqlQuery):
            raise InvalidArgumentError(
                format_error("argument_null", param_name="sub_query"), param_name="sub_query"
            )
        keyword = " NOT EXISTS" if negate else " EXISTS"
        self._parts.append(f"{pending.operand}{keyword} ({self._add_sub_query(sub_query)})")
        self._pending = None
        self._phase = BuilderPhase.FILTERED


def _is_value_sequence(value: Any) -> bool:
    """IN の値の並びとして展開できるか判定する（文字列とサブクエリは除く）."""
    if isinstance(value, (str, bytes, bytearray, SqlQuery)):
        return False
    return isinstance(value, Iterable)
