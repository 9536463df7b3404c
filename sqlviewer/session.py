"""
The active database session.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Optional

from .exceptions import ExecutionError

logger = logging.getLogger(__name__)


def open_connection(path: str) -> sqlite3.Connection:
    """Open a SQLite file in autocommit mode, creating it if needed."""
    return sqlite3.connect(path, isolation_level=None, check_same_thread=False)


class ActiveSession:
    """Holds the single live connection and the path it was opened from.

    Not thread-safe: reads and swaps happen without locking. Callers must not
    keep a reference to ``connection`` across a switch or delete.
    """

    def __init__(self, path: str):
        self.path = path
        self._connection: Optional[sqlite3.Connection] = open_connection(path)
        logger.info("Opened database %s", path)

    @property
    def connection(self) -> sqlite3.Connection:
        if self._connection is None:
            raise sqlite3.ProgrammingError("Cannot operate on a closed database.")
        return self._connection

    def is_active(self, path: str) -> bool:
        """Check whether ``path`` points at the file this session has open."""
        return Path(path).resolve() == Path(self.path).resolve()

    def replace(self, path: str) -> None:
        """Close the current handle, then open ``path`` as the new active database.

        If ``path`` cannot be opened the previous database is reopened and
        ExecutionError is raised.
        """
        self.close()
        try:
            self._connection = open_connection(path)
        except sqlite3.Error as e:
            logger.warning("Could not open %s, keeping %s: %s", path, self.path, e)
            self._connection = open_connection(self.path)
            raise ExecutionError(str(e)) from e
        logger.info("Switched active database from %s to %s", self.path, path)
        self.path = path

    def close(self) -> None:
        if self._connection is not None:
            self._connection.close()
            self._connection = None
