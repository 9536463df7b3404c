"""
Runs ad-hoc SQL against the active database.
"""

import logging
import sqlite3
import time

from .exceptions import ExecutionError, ValidationError
from .session import ActiveSession
from .types import QueryResult, StatementKind

logger = logging.getLogger(__name__)


class QueryExecutor:
    """Executes one statement at a time against the session's connection.

    Statements are passed to SQLite as given: no rewriting and no
    parameter binding.
    """

    def __init__(self, session: ActiveSession):
        self.session = session

    def execute(self, sql: str) -> QueryResult:
        """
        Execute a single SQL statement.

        Args:
            sql: statement text

        Returns:
            QueryResult with rows for SELECT statements, or the change
            count and last inserted rowid for everything else.

        Raises:
            ValidationError: If the statement is empty
            ExecutionError: If SQLite rejects the statement
        """
        if not sql or not sql.strip():
            raise ValidationError("Query is required")

        kind = StatementKind.classify(sql)
        if kind is StatementKind.READ:
            return self._execute_read(sql)
        return self._execute_write(sql)

    def _execute_read(self, sql: str) -> QueryResult:
        connection = self.session.connection
        start = time.perf_counter()
        try:
            cursor = connection.execute(sql)
            records = cursor.fetchall()
        except (sqlite3.Error, sqlite3.Warning) as e:
            logger.warning("Query failed: %s", e)
            raise ExecutionError(str(e)) from e
        duration_ms = (time.perf_counter() - start) * 1000

        columns = [description[0] for description in cursor.description or ()]
        rows = [dict(zip(columns, record)) for record in records]
        return QueryResult(kind=StatementKind.READ, duration_ms=duration_ms, rows=rows)

    def _execute_write(self, sql: str) -> QueryResult:
        connection = self.session.connection
        start = time.perf_counter()
        try:
            cursor = connection.execute(sql)
        except (sqlite3.Error, sqlite3.Warning) as e:
            logger.warning("Statement failed: %s", e)
            raise ExecutionError(str(e)) from e
        duration_ms = (time.perf_counter() - start) * 1000

        last_insert_id = connection.execute("SELECT last_insert_rowid()").fetchone()[0]
        return QueryResult(
            kind=StatementKind.WRITE,
            duration_ms=duration_ms,
            changes=max(cursor.rowcount, 0),
            last_insert_id=last_insert_id,
        )
