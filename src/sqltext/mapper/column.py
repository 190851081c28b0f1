"""Column アノテーションと @entity デコレータ."""

from __future__ import annotations

import re
from typing import Any

from sqltext._messages import format_error
from sqltext.exceptions import InvalidArgumentError

_VALID_NAMING = frozenset({"as_is", "snake_to_camel", "snake_to_pascal", "camel_to_snake"})


class Column:
    """カラム名と書き込み可否を指定するアノテーション.

    Examples:
        >>> from dataclasses import dataclass
        >>> from typing import Annotated
        >>> @dataclass
        ... class Customer:
        ...     customer_id: Annotated[int, Column("CustomerId", insertable=False)]

    """

    def __init__(
        self,
        name: str | None = None,
        *,
        insertable: bool = True,
        updatable: bool = True,
    ) -> None:
        self.name = name
        self.insertable = insertable
        self.updatable = updatable

    def __repr__(self) -> str:
        return (
            f"Column({self.name!r}, insertable={self.insertable}, updatable={self.updatable})"
        )


def entity(
    cls: type | None = None,
    *,
    table: str | None = None,
    schema: str | None = None,
    column_map: dict[str, str] | None = None,
    naming: str = "as_is",
) -> Any:
    """エンティティデコレータ.

    Args:
        cls: デコレート対象クラス
        table: テーブル名（省略時はクラス名）
        schema: スキーマ名
        column_map: フィールド名→カラム名のマッピング
        naming: 命名規則 ("as_is", "snake_to_camel", "snake_to_pascal", "camel_to_snake")

    Raises:
        InvalidArgumentError: 未知の命名規則が指定された場合

    """
    if naming not in _VALID_NAMING:
        msg = format_error("invalid_naming", param_name="naming")
        msg = f"{msg} naming={naming!r} (one of {sorted(_VALID_NAMING)})"
        raise InvalidArgumentError(msg, param_name="naming")

    def decorator(cls: type) -> type:
        cls.__table_name__ = table or cls.__name__  # type: ignore[attr-defined]
        cls.__table_schema__ = schema  # type: ignore[attr-defined]
        cls.__column_map__ = column_map or {}  # type: ignore[attr-defined]
        cls.__column_naming__ = naming  # type: ignore[attr-defined]
        return cls

    if cls is not None:
        return decorator(cls)
    return decorator


def apply_naming(name: str, naming: str) -> str:
    """命名規則に従ってフィールド名をカラム名に変換する."""
    if naming == "snake_to_camel":
        components = name.split("_")
        return components[0] + "".join(x.title() for x in components[1:])
    if naming == "snake_to_pascal":
        return "".join(x.title() for x in name.split("_"))
    if naming == "camel_to_snake":
        return re.sub(r"(?<!^)(?=[A-Z])", "_", name).lower()
    return name
