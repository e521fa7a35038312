"""The ``commits`` / ``commit_files`` table definitions shipped with gitsql."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
import sqlite3

from ..errors import SinkWriteError

SCHEMA_PATH = Path(__file__).resolve().parent / "schema.sql"


@lru_cache(maxsize=1)
def load_schema() -> str:
    """Return the DDL from ``schema.sql``, read once per process."""

    return SCHEMA_PATH.read_text(encoding="utf-8")


def apply_schema(connection: sqlite3.Connection) -> None:
    """Create the history tables and indexes when they are missing.

    Every statement uses ``IF NOT EXISTS``, so applying the schema to a
    database from an earlier run leaves its tables in place.
    """

    try:
        connection.executescript(load_schema())
        connection.commit()
    except sqlite3.Error as e:
        raise SinkWriteError(f"Cannot create history tables: {e}") from e
