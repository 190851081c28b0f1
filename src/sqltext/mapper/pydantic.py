"""PydanticResolver: Pydantic BaseModel からテーブル情報を解決する."""

from __future__ import annotations

from typing import ClassVar

from sqltext.mapper.dataclass import build_table_info, find_column
from sqltext.mapper.table_info import TableInfo


class PydanticResolver:
    """Pydantic BaseModel 用のテーブル情報リゾルバ.

    ``Annotated[..., Column("X")]`` は pydantic が ``FieldInfo.metadata`` に
    保持するものを参照する。
    """

    _cache: ClassVar[dict[type, TableInfo]] = {}

    def __init__(self, entity_cls: type) -> None:
        if not hasattr(entity_cls, "model_fields"):
            msg = f"{entity_cls} is not a Pydantic BaseModel"
            raise TypeError(msg)
        self.entity_cls = entity_cls

    def resolve(self) -> TableInfo:
        """テーブル情報を取得（キャッシュ付き）."""
        if self.entity_cls not in self._cache:
            model_fields = self.entity_cls.model_fields  # type: ignore[attr-defined]
            annotations = {
                name: find_column(list(info.metadata)) for name, info in model_fields.items()
            }
            self._cache[self.entity_cls] = build_table_info(self.entity_cls, annotations)
        return self._cache[self.entity_cls]
