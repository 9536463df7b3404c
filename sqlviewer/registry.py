"""
Known database files and the switch/delete/import operations on them.
"""

import logging
import os
import sqlite3
from pathlib import Path
from typing import List

from .converter import DialectConverter
from .exceptions import (
    DefaultDatabaseError,
    ExecutionError,
    ForbiddenError,
    NotFoundError,
    ValidationError,
)
from .session import ActiveSession, open_connection
from .storage import Storage
from .types import DatabaseFile

logger = logging.getLogger(__name__)


class DatabaseRegistry:
    """Tracks the default database plus everything under the uploads directory.

    Every operation may replace the session's connection; callers must
    re-read ``session.connection`` afterwards.
    """

    def __init__(self, session: ActiveSession, storage: Storage, default_path: str,
                 converter: DialectConverter = None):
        self.session = session
        self.storage = storage
        self.default_path = default_path
        self.converter = converter or DialectConverter()

    def is_default(self, path: str) -> bool:
        return Path(path).resolve() == Path(self.default_path).resolve()

    def list(self) -> List[DatabaseFile]:
        """Default database first, then stored files by name."""
        files = [DatabaseFile(
            name=self.default_path,
            path=self.default_path,
            is_active=self.session.is_active(self.default_path),
        )]
        for path in self.storage.list_files():
            files.append(DatabaseFile(
                name=path.name,
                path=str(path),
                is_active=self.session.is_active(str(path)),
            ))
        return files

    def switch(self, target_path: str) -> DatabaseFile:
        """
        Make ``target_path`` the active database.

        Switching to the already active file still closes and reopens it.

        Raises:
            ValidationError: If no path is given
            NotFoundError: If no file exists at ``target_path``
        """
        if not target_path:
            raise ValidationError("Name required")
        if not os.path.isfile(target_path):
            raise NotFoundError("Database not found")

        self.session.replace(target_path)
        return DatabaseFile(name=Path(target_path).name, path=target_path, is_active=True)

    def delete(self, target_path: str) -> None:
        """
        Remove a stored database file.

        If the file is the active database, the session reverts to the
        default database.

        Raises:
            ValidationError: If no path is given
            DefaultDatabaseError: If ``target_path`` is the default database
            ForbiddenError: If ``target_path`` lies outside the uploads directory
            NotFoundError: If the file does not exist
        """
        if not target_path:
            raise ValidationError("Name required")
        if self.is_default(target_path):
            raise DefaultDatabaseError("Cannot delete default database")
        if not self.storage.contains(target_path):
            raise ForbiddenError("Invalid file path")
        if not os.path.isfile(target_path):
            raise NotFoundError("File not found")

        was_active = self.session.is_active(target_path)
        os.remove(target_path)
        logger.info("Deleted database %s", target_path)

        if was_active:
            self.session.replace(self.default_path)

    def store_upload(self, filename: str, data: bytes) -> DatabaseFile:
        """Save an uploaded ``.sqlite``/``.db`` file byte for byte."""
        path = self.storage.save_bytes(filename, data)
        logger.info("Stored uploaded database %s (%d bytes)", path, len(data))
        return DatabaseFile(name=path.name, path=str(path))

    def import_dump(self, filename: str, text: str) -> DatabaseFile:
        """
        Convert a MySQL-style dump and run it into a brand-new database file.

        Raises:
            ExecutionError: If SQLite rejects the converted script
        """
        script = self.converter.convert(text)
        path = self.storage.converted_path(filename)

        connection = open_connection(str(path))
        try:
            connection.executescript(script)
        except (sqlite3.Error, sqlite3.Warning) as e:
            connection.close()
            path.unlink(missing_ok=True)
            logger.warning("Import of %s failed: %s", filename, e)
            raise ExecutionError(str(e)) from e
        connection.close()

        logger.info("Imported dump %s into %s", filename, path)
        return DatabaseFile(name=path.name, path=str(path))
