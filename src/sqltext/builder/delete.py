"""DeleteSqlBuilder: DELETE 文のビルダー."""

from __future__ import annotations

from sqltext.builder.base import BuilderPhase
from sqltext.builder.predicate import PredicateComposer
from sqltext.mapper.table_info import TableInfo


class DeleteSqlBuilder(PredicateComposer):
    """DELETE 文のビルダー.

    Examples:
        >>> builder = DeleteSqlBuilder().from_("Table")
        >>> builder.where("Column1").is_equal_to("Foo").to_sql_query().command_text
        'DELETE FROM Table WHERE (Column1 = ?)'

    """

    statement_kind = "delete"
    _finalizable_phases = (BuilderPhase.SOURCED, BuilderPhase.FILTERED)

    def from_(self, table: str | type | TableInfo) -> DeleteSqlBuilder:
        """削除対象のテーブルを指定する."""
        self._require_phase("from_", BuilderPhase.INITIAL)
        name, _ = self._resolve_table(table, "table")
        self._parts.append(f"DELETE FROM {name}")
        self._phase = BuilderPhase.SOURCED
        return self
