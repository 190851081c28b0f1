"""sqltext エンティティメタデータパッケージ."""

from sqltext.mapper.column import Column, entity
from sqltext.mapper.factory import table_info_for
from sqltext.mapper.table_info import ColumnInfo, TableInfo

__all__ = ["Column", "ColumnInfo", "TableInfo", "entity", "table_info_for"]
