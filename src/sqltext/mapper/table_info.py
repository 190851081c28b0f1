"""テーブル情報."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ColumnInfo:
    """カラム情報."""

    name: str
    insertable: bool = True
    updatable: bool = True


@dataclass(frozen=True)
class TableInfo:
    """ビルダーに渡すテーブル情報.

    Attributes:
        name: テーブル名
        schema: スキーマ名（なければ None）
        columns: 定義順のカラム情報

    """

    name: str
    schema: str | None = None
    columns: tuple[ColumnInfo, ...] = field(default_factory=tuple)

    @property
    def qualified_name(self) -> str:
        """スキーマ付きのテーブル名（エスケープなし）."""
        if self.schema:
            return f"{self.schema}.{self.name}"
        return self.name

    @property
    def column_names(self) -> list[str]:
        """全カラム名."""
        return [c.name for c in self.columns]

    @property
    def insertable_column_names(self) -> list[str]:
        """INSERT 対象のカラム名."""
        return [c.name for c in self.columns if c.insertable]

    @property
    def updatable_column_names(self) -> list[str]:
        """UPDATE 対象のカラム名."""
        return [c.name for c in self.columns if c.updatable]
