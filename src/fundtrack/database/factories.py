"""Database factory functions for creating database instances."""

import os
from pathlib import Path
from typing import Optional

import structlog

from fundtrack.database.sqlalchemy_db import SQLAlchemyDatabase

logger = structlog.get_logger(__name__)

DEFAULT_DATA_DIR = Path.home() / ".fundtrack"
IN_MEMORY = ":memory:"


def resolve_database_path(database_path: Optional[str] = None) -> str:
    """Pick the SQLite file: explicit argument, then FUNDTRACK_DB_PATH, then the default.

    The parent directory of a file path is created when missing.
    """
    database_path = database_path or os.environ.get("FUNDTRACK_DB_PATH")
    if database_path == IN_MEMORY:
        return database_path

    path = Path(database_path).expanduser() if database_path else DEFAULT_DATA_DIR / "fundtrack.db"
    path.parent.mkdir(parents=True, exist_ok=True)
    return str(path)


def create_sqlite_database(database_path: Optional[str] = None) -> SQLAlchemyDatabase:
    """Create a SQLite-backed store.

    Args:
        database_path: Path to the SQLite file, or ``:memory:``. See
            :func:`resolve_database_path` for the fallbacks.
    """
    database_path = resolve_database_path(database_path)
    logger.debug("database_selected", path=database_path)
    return SQLAlchemyDatabase(f"sqlite:///{database_path}")
