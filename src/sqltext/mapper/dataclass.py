"""DataclassResolver: dataclass からテーブル情報を解決する."""

from __future__ import annotations

from dataclasses import fields, is_dataclass
from typing import Annotated, Any, ClassVar, get_args, get_origin, get_type_hints

from sqltext.mapper.column import Column, apply_naming
from sqltext.mapper.table_info import ColumnInfo, TableInfo


class DataclassResolver:
    """Dataclass 用のテーブル情報リゾルバ."""

    _cache: ClassVar[dict[type, TableInfo]] = {}

    def __init__(self, entity_cls: type) -> None:
        if not is_dataclass(entity_cls):
            msg = f"{entity_cls} is not a dataclass"
            raise TypeError(msg)
        self.entity_cls = entity_cls

    def resolve(self) -> TableInfo:
        """テーブル情報を取得（キャッシュ付き）."""
        if self.entity_cls not in self._cache:
            hints = get_type_hints(self.entity_cls, include_extras=True)
            annotations = {
                f.name: find_column(_annotated_metadata(hints.get(f.name)))
                for f in fields(self.entity_cls)
            }
            self._cache[self.entity_cls] = build_table_info(self.entity_cls, annotations)
        return self._cache[self.entity_cls]


def build_table_info(entity_cls: type, annotations: dict[str, Column | None]) -> TableInfo:
    """フィールド定義とクラス属性からテーブル情報を構築する.

    カラム名は次の優先順で決まる。

    1. ``Annotated[..., Column("X")]``
    2. ``@entity(column_map=...)``
    3. ``@entity(naming=...)`` の命名規則

    Args:
        entity_cls: エンティティクラス
        annotations: 定義順のフィールド名→Column アノテーション（なければ None）

    Returns:
        テーブル情報

    """
    column_map: dict[str, str] = getattr(entity_cls, "__column_map__", {})
    naming: str = getattr(entity_cls, "__column_naming__", "as_is")

    columns: list[ColumnInfo] = []
    for field_name, column in annotations.items():
        if column is not None and column.name:
            name = column.name
        elif field_name in column_map:
            name = column_map[field_name]
        else:
            name = apply_naming(field_name, naming)

        if column is not None:
            columns.append(
                ColumnInfo(name=name, insertable=column.insertable, updatable=column.updatable)
            )
        else:
            columns.append(ColumnInfo(name=name))

    return TableInfo(
        name=getattr(entity_cls, "__table_name__", entity_cls.__name__),
        schema=getattr(entity_cls, "__table_schema__", None),
        columns=tuple(columns),
    )


def find_column(metadata: list[Any]) -> Column | None:
    """メタデータから Column アノテーションを探す."""
    for arg in metadata:
        if isinstance(arg, Column):
            return arg
    return None


def _annotated_metadata(type_hint: Any) -> list[Any]:
    if type_hint is not None and get_origin(type_hint) is Annotated:
        return list(get_args(type_hint)[1:])
    return []
