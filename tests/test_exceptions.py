"""例外クラスとエラーメッセージのテスト."""

from __future__ import annotations

import pytest

from sqltext import (
    BuilderStateError,
    InvalidArgumentError,
    ParameterMismatchError,
    SqlBuilder,
    SqlTextError,
    config,
    renumber_parameters,
)


class TestExceptionHierarchy:
    """例外クラスの継承関係を検証する."""

    def test_sqltext_error_is_exception(self) -> None:
        assert issubclass(SqlTextError, Exception)

    def test_invalid_argument_error(self) -> None:
        assert issubclass(InvalidArgumentError, SqlTextError)
        assert issubclass(InvalidArgumentError, ValueError)

    def test_parameter_mismatch_error(self) -> None:
        assert issubclass(ParameterMismatchError, InvalidArgumentError)

    def test_builder_state_error(self) -> None:
        assert issubclass(BuilderStateError, SqlTextError)
        assert not issubclass(BuilderStateError, ValueError)


class TestExceptionAttributes:
    """例外が保持する情報."""

    def test_param_name(self) -> None:
        err = InvalidArgumentError("bad", param_name="table")
        assert str(err) == "bad"
        assert err.param_name == "table"

    def test_position_defaults_param_name(self) -> None:
        err = ParameterMismatchError("mismatch", position=3)
        assert err.position == 3
        assert err.param_name == "args"

    def test_catch_as_value_error(self, empty: SqlBuilder) -> None:
        with pytest.raises(ValueError):
            empty.select().from_("")


class TestErrorMessage:
    """メッセージの言語と SQL の付与."""

    def test_japanese_by_default(self) -> None:
        with pytest.raises(ParameterMismatchError) as exc_info:
            renumber_parameters("A = @p0 AND B = @p1", 0, [1])
        message = str(exc_info.value)
        assert "プレースホルダに対応する値がありません" in message
        assert "param='args'" in message
        assert "position=1" in message
        assert "sql='A = @p0 AND B = @p1'" in message

    def test_english(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "ERROR_MESSAGE_LANGUAGE", "en")
        with pytest.raises(ParameterMismatchError) as exc_info:
            renumber_parameters("A = @p0", 0, [1, 2])
        assert str(exc_info.value).startswith("Value supplied without a matching placeholder")

    def test_without_sql(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "ERROR_INCLUDE_SQL", False)
        with pytest.raises(ParameterMismatchError) as exc_info:
            renumber_parameters("A = @p0 AND B = @p1", 0, [1])
        assert "sql=" not in str(exc_info.value)

    def test_phase_in_message(self, monkeypatch: pytest.MonkeyPatch, empty: SqlBuilder) -> None:
        monkeypatch.setattr(config, "ERROR_MESSAGE_LANGUAGE", "en")
        with pytest.raises(BuilderStateError) as exc_info:
            empty.select("A").where("A")
        message = str(exc_info.value)
        assert message.startswith("Operation is not valid in the current phase")
        assert "operation='where'" in message
        assert "phase=PROJECTED" in message

    def test_unknown_language_falls_back(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(config, "ERROR_MESSAGE_LANGUAGE", "fr")
        with pytest.raises(InvalidArgumentError) as exc_info:
            SqlBuilder().select().from_("")
        assert str(exc_info.value).startswith("引数が None または空です")
