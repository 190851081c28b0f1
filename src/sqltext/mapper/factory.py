"""table_info_for ファクトリ関数."""

from __future__ import annotations

from dataclasses import is_dataclass

from sqltext._messages import format_error
from sqltext.exceptions import InvalidArgumentError
from sqltext.mapper.table_info import TableInfo


def table_info_for(entity_cls: type) -> TableInfo:
    """エンティティクラスのテーブル情報を取得する.

    Args:
        entity_cls: dataclass または Pydantic BaseModel

    Returns:
        テーブル情報

    Raises:
        InvalidArgumentError: テーブル情報を解決できないクラスの場合

    """
    if is_dataclass(entity_cls) and isinstance(entity_cls, type):
        from sqltext.mapper.dataclass import DataclassResolver

        return DataclassResolver(entity_cls).resolve()

    if hasattr(entity_cls, "model_fields"):
        from sqltext.mapper.pydantic import PydanticResolver

        return PydanticResolver(entity_cls).resolve()

    raise InvalidArgumentError(
        f"{format_error('not_an_entity', param_name='entity_cls')} ({entity_cls!r})",
        param_name="entity_cls",
    )
