"""
Main viewer engine class.
"""

import time
from typing import Any, Dict, List, Optional

from .browse import BrowseQueryBuilder
from .config import Settings, settings as default_settings
from .converter import DialectConverter
from .exceptions import NotFoundError
from .executor import QueryExecutor
from .registry import DatabaseRegistry
from .schema import SchemaIntrospector
from .seed import seed
from .session import ActiveSession
from .storage import Storage
from .types import (
    BrowsePage,
    BrowseRequest,
    ColumnInfo,
    DatabaseFile,
    QueryResult,
    TableSchema,
)


class ViewerEngine:
    """Main viewer interface.

    Owns the one ActiveSession and hands it by reference to every component
    that reads or replaces it.
    """

    def __init__(self, default_path: str = "demo.sqlite", uploads_dir: str = "uploads",
                 seed_demo: bool = True):
        self.session = ActiveSession(default_path)
        if seed_demo:
            seed(self.session.connection)

        self.storage = Storage(uploads_dir)
        self.converter = DialectConverter()
        self.registry = DatabaseRegistry(self.session, self.storage, default_path, self.converter)
        self.executor = QueryExecutor(self.session)
        self.schema = SchemaIntrospector(self.session)
        self.browser = BrowseQueryBuilder()

    @classmethod
    def from_settings(cls, config: Optional[Settings] = None) -> "ViewerEngine":
        config = config or default_settings
        return cls(config.DEFAULT_DB_PATH, config.UPLOADS_DIR, config.SEED_DEMO)

    @property
    def active_path(self) -> str:
        return self.session.path

    def execute(self, query: str) -> QueryResult:
        """
        Execute one SQL statement against the active database.

        Raises:
            ValidationError: If the query is empty
            ExecutionError: If SQLite rejects the statement
        """
        return self.executor.execute(query)

    def list_tables(self) -> List[str]:
        """List all tables in the active database."""
        return self.schema.list_tables()

    def get_schema(self) -> TableSchema:
        return self.schema.get_schema()

    def describe(self, table_name: str) -> List[ColumnInfo]:
        return self.schema.describe(table_name)

    def get_table_info(self, table_name: str) -> Dict[str, Any]:
        """Get information about a table."""
        if table_name not in self.schema.list_tables():
            raise NotFoundError(f"Table '{table_name}' does not exist")

        return {
            'columns': [column.to_dict() for column in self.schema.describe(table_name)],
            'row_count': self.schema.count_rows(table_name),
        }

    def browse(self, request: BrowseRequest) -> BrowsePage:
        """
        Fetch one page of a table, optionally filtered by a search term.

        The caller is responsible for keeping ``request.page`` in range; a page
        past the end comes back with no rows.

        Raises:
            ExecutionError: If the table does not exist
        """
        start = time.perf_counter()
        queries = self.browser.build(request, self.schema.get_schema())

        count_result = self.executor.execute(queries.count_sql)
        total_records = count_result.rows[0]["count"] if count_result.rows else 0
        page_result = self.executor.execute(queries.select_sql)

        return BrowsePage(
            table=request.table,
            page=request.page,
            page_size=request.page_size,
            search_term=request.search_term,
            total_records=total_records,
            rows=page_result.rows,
            duration_ms=(time.perf_counter() - start) * 1000,
        )

    def list_databases(self) -> List[DatabaseFile]:
        return self.registry.list()

    def switch_database(self, path: str) -> DatabaseFile:
        return self.registry.switch(path)

    def delete_database(self, path: str) -> None:
        self.registry.delete(path)

    def upload_database(self, filename: str, data: bytes) -> DatabaseFile:
        return self.registry.store_upload(filename, data)

    def import_dump(self, filename: str, text: str) -> DatabaseFile:
        return self.registry.import_dump(filename, text)

    def close(self) -> None:
        self.session.close()
