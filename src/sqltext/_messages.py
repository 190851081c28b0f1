"""エラーメッセージの組み立て."""

from __future__ import annotations

from sqltext import config

_MESSAGES = {
    "ja": {
        "argument_null_or_empty": "引数が None または空です",
        "argument_null": "引数が None です",
        "argument_empty_sequence": "値が1つも指定されていません",
        "missing_parameter_value": "プレースホルダに対応する値がありません",
        "surplus_parameter_value": "プレースホルダに対応しない余分な値があります",
        "named_params_mismatch": "プレースホルダ数と引数の数が一致しません",
        "invalid_phase": "現在のフェーズでは実行できない操作です",
        "no_pending_column": "演算子を適用する列が指定されていません",
        "pending_column": "列に演算子が適用されていません",
        "stored_procedure_unsupported": "この方言はストアドプロシージャをサポートしていません",
        "not_an_entity": "テーブル情報を解決できないクラスです",
        "invalid_paging": "ページング指定が不正です",
        "mixed_in_operands": "値とサブクエリを混在させることはできません",
        "no_from_clause": "FROM 句が見つかりません",
        "invalid_naming": "命名規則が不正です",
        "column_not_updatable": "更新できないカラムです",
    },
    "en": {
        "argument_null_or_empty": "Argument must not be None or empty",
        "argument_null": "Argument must not be None",
        "argument_empty_sequence": "At least one value must be supplied",
        "missing_parameter_value": "No value supplied for placeholder",
        "surplus_parameter_value": "Value supplied without a matching placeholder",
        "named_params_mismatch": "Placeholder count does not match argument count",
        "invalid_phase": "Operation is not valid in the current phase",
        "no_pending_column": "No column is pending for the operator",
        "pending_column": "A column is still waiting for an operator",
        "stored_procedure_unsupported": "The dialect does not support stored procedures",
        "not_an_entity": "Cannot resolve table information for class",
        "invalid_paging": "Invalid paging options",
        "mixed_in_operands": "Values and sub-queries cannot be mixed",
        "no_from_clause": "No FROM clause found",
        "invalid_naming": "Invalid naming convention",
        "column_not_updatable": "Column is not updatable",
    },
}


def format_error(
    key: str,
    *,
    param_name: str | None = None,
    position: int | None = None,
    operation: str | None = None,
    phase: str | None = None,
    sql: str | None = None,
) -> str:
    """設定された言語でエラーメッセージを組み立てる.

    Args:
        key: メッセージキー
        param_name: 問題のある引数名
        position: 問題のあるプレースホルダ位置
        operation: 実行しようとした操作名
        phase: 現在のビルダーフェーズ
        sql: 対象の SQL 断片（``ERROR_INCLUDE_SQL`` が真の場合のみ付与）

    Returns:
        エラーメッセージ

    """
    lang = config.ERROR_MESSAGE_LANGUAGE
    msg = _MESSAGES.get(lang, _MESSAGES["ja"]).get(key, key)
    if param_name:
        msg = f"{msg}: param='{param_name}'"
    if position is not None:
        msg = f"{msg} position={position}"
    if operation:
        msg = f"{msg} operation='{operation}'"
    if phase:
        msg = f"{msg} phase={phase}"
    if sql and config.ERROR_INCLUDE_SQL:
        msg = f"{msg} sql='{sql.strip()}'"
    return msg
