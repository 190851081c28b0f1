"""sqltext のモジュールレベル設定."""

ERROR_MESSAGE_LANGUAGE = "ja"
"""エラーメッセージの言語 ("ja" または "en")."""

ERROR_INCLUDE_SQL = True
"""エラーメッセージに対象の SQL 断片を含めるか."""
