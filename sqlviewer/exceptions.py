"""
Error taxonomy for the viewer core.

Each error carries the HTTP status the request boundary answers with.
"""


class SQLViewerError(Exception):
    """Base exception for the viewer core."""

    status_code = 500


class ValidationError(SQLViewerError):
    """A required field is missing or empty."""

    status_code = 400


class ExecutionError(SQLViewerError):
    """The SQLite engine rejected a statement or script.

    The message is the engine's own text, passed through verbatim.
    """

    status_code = 400


class NotFoundError(SQLViewerError):
    """A referenced database file does not exist."""

    status_code = 404


class ForbiddenError(SQLViewerError):
    """A path escapes the uploads directory."""

    status_code = 403


class DefaultDatabaseError(ForbiddenError):
    """The default database cannot be deleted."""

    status_code = 400
