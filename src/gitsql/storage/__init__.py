"""SQLite storage for extracted commit history."""

from .commits import read_commits, read_file_changes, write_commits
from .database import get_connection, temp_connection
from .schema import apply_schema

__all__ = [
    "apply_schema",
    "get_connection",
    "read_commits",
    "read_file_changes",
    "temp_connection",
    "write_commits",
]
