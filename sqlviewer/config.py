"""
Viewer configuration.

Storage, logging and server settings can be overridden through the environment.
"""

import os


class Settings:
    """Runtime configuration for the API server and the console."""

    # Storage
    DEFAULT_DB_PATH: str = os.getenv("SQLVIEWER_DEFAULT_DB", "demo.sqlite")
    UPLOADS_DIR: str = os.getenv("SQLVIEWER_UPLOADS_DIR", "uploads")
    SEED_DEMO: bool = os.getenv("SQLVIEWER_SEED_DEMO", "True").lower() == "true"

    # Logging
    LOG_LEVEL: str = os.getenv("SQLVIEWER_LOG_LEVEL", "INFO").upper()

    # Server
    HOST: str = os.getenv("HOST", "0.0.0.0")
    PORT: int = int(os.getenv("PORT", "8000"))
    CORS_ORIGINS: list[str] = os.getenv("CORS_ORIGINS", "*").split(",")

    # Upload handling
    DUMP_EXTENSIONS: tuple[str, ...] = (".sql",)
    DATABASE_EXTENSIONS: tuple[str, ...] = (".sqlite", ".db")


settings = Settings()
