"""
Table and column metadata for the active database.
"""

from typing import List

from .session import ActiveSession
from .types import ColumnInfo, TableSchema


class SchemaIntrospector:
    """Reads the SQLite catalog. Nothing is cached between calls."""

    def __init__(self, session: ActiveSession):
        self.session = session

    def list_tables(self) -> List[str]:
        """User tables in catalog order, internal ``sqlite_*`` tables excluded."""
        cursor = self.session.connection.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name NOT LIKE 'sqlite_%'"
        )
        return [row[0] for row in cursor.fetchall()]

    def describe(self, table_name: str) -> List[ColumnInfo]:
        """Columns of ``table_name``; an unknown table yields an empty list."""
        quoted = table_name.replace('"', '""')
        cursor = self.session.connection.execute(f'PRAGMA table_info("{quoted}")')
        return [ColumnInfo.from_pragma(row) for row in cursor.fetchall()]

    def get_schema(self) -> TableSchema:
        """Snapshot of every table and its columns."""
        return {table: self.describe(table) for table in self.list_tables()}

    def count_rows(self, table_name: str) -> int:
        quoted = table_name.replace('"', '""')
        cursor = self.session.connection.execute(f'SELECT COUNT(*) FROM "{quoted}"')
        return cursor.fetchone()[0]
