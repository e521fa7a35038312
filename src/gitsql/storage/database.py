"""Opening the SQLite database that receives extracted history."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from typing import Iterator

from ..config import LocalConfig, DEFAULT_CONFIG, MEMORY_DATABASE
from ..errors import SinkWriteError


def _configure_connection(connection: sqlite3.Connection) -> None:
    # commit_files.id must name a stored commit
    connection.execute("PRAGMA foreign_keys=ON;")


def get_connection(config: LocalConfig | None = None) -> sqlite3.Connection:
    """Open the history database named by ``config``.

    File databases are switched to WAL journaling; ``":memory:"`` is opened
    as is.

    Raises
    ------
    SinkWriteError:
        If the database directory cannot be created or SQLite cannot open
        the file
    """

    active_config = config or DEFAULT_CONFIG
    try:
        db_path = active_config.resolved_database_path()
        connection = sqlite3.connect(str(db_path))
    except (OSError, sqlite3.Error) as e:
        raise SinkWriteError(f"Cannot open database: {e}") from e

    try:
        if str(db_path) != MEMORY_DATABASE:
            connection.execute("PRAGMA journal_mode=WAL;")
        _configure_connection(connection)
    except sqlite3.Error as e:
        connection.close()
        raise SinkWriteError(f"Cannot open database {db_path}: {e}") from e
    return connection


@contextmanager
def temp_connection(schema_sql: str) -> Iterator[sqlite3.Connection]:
    """Yield a throwaway in-memory database built from ``schema_sql``."""

    connection = sqlite3.connect(":memory:")
    try:
        _configure_connection(connection)
        connection.executescript(schema_sql)
        yield connection
    finally:
        connection.close()
