"""Keyed collection of system variable rows with dedupe-or-merge insertion."""

from __future__ import annotations

from typing import Dict, Iterator, List, Optional, TextIO

from .logging import get_logger
from .models import RowConflict, SysvarDetails, SysvarRow
from .sql import INSERT_COLUMNS, create_table_statement, insert_statement

logger = get_logger(__name__)


class SysvarTable:
    """Rows in insertion order, indexed by system variable name."""

    def __init__(self, name: str) -> None:
        if not name:
            raise ValueError("table name is required")
        self.name = name
        self.rows: List[SysvarRow] = []
        self.conflicts: List[RowConflict] = []
        self._index: Dict[str, int] = {}
        logger.debug("table_created", table=name)

    def __len__(self) -> int:
        return len(self.rows)

    def __iter__(self) -> Iterator[SysvarRow]:
        return iter(self.rows)

    def get(self, name: str) -> Optional[SysvarRow]:
        position = self._index.get(name)
        if position is None:
            return None
        return self.rows[position]

    def append_row(self, row: SysvarRow) -> bool:
        """Add ``row`` unless a row with the same name already covers it.

        Identical rows are ignored, compatible rows are merged into the
        stored one, and conflicting rows are recorded while the stored row is
        kept. Returns True when the table changed.
        """
        position = self._index.get(row.key)
        if position is None:
            self._index[row.key] = len(self.rows)
            self.rows.append(row)
            return True

        existing = self.rows[position]
        if existing == row:
            return False

        if existing.mergeable(row):
            merged = existing.merged(row)
            self.rows[position] = merged
            logger.debug("row_merged", sysvar=row.key)
            return merged != existing

        conflict = RowConflict(kept=existing, rejected=row, field_names=existing.differing_fields(row))
        self.conflicts.append(conflict)
        logger.warning(
            "row_conflict",
            sysvar=row.key,
            fields=conflict.field_names,
            previous=_describe(existing),
            latest=_describe(row),
        )
        return False

    def create_table_statement(self) -> str:
        return create_table_statement(self.name)

    def insert_statements(self) -> List[str]:
        statements = []
        for row in self.rows:
            if row.is_empty():
                continue
            values = [getattr(row, column) for column in INSERT_COLUMNS]
            statements.append(insert_statement(self.name, INSERT_COLUMNS, values))
        return statements

    def dump(self, sink: TextIO) -> None:
        """Write the equivalent of ``mysqldump <db> <table>`` to ``sink``."""
        sink.write(self.create_table_statement())
        if self.rows:
            sink.write("-- Insert rows\n")
        for statement in self.insert_statements():
            sink.write(statement + "\n")

    def dump_from_details(self, details: SysvarDetails, sink: TextIO) -> None:
        """Write INSERT statements built from the per-variable detail sections."""
        columns = ("system_variable_name", "cmd_line", "var_scope", "dynamic")
        sink.write("-- start dump from sysvars\n")
        for name in details.names():
            detail = details.get(name)
            if detail is None or detail.is_empty():
                continue
            values = (name, detail.command_line, detail.scope, detail.dynamic)
            sink.write(insert_statement(self.name, columns, values) + "\n")
        sink.write("-- end dump from sysvars\n")


def _describe(row: SysvarRow) -> dict:
    return {column: getattr(row, column) for column in INSERT_COLUMNS}
