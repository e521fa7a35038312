"""Persistence of commit records into the ``commits`` and ``commit_files`` tables."""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime
from typing import Dict, Iterable, List, Optional, Tuple

from ..errors import SinkWriteError
from ..git.records import CommitRecord, FileChangeRecord, FileStatus

logger = logging.getLogger(__name__)

FileChangeRow = Tuple[str, str, str, Optional[int], Optional[int]]


def write_commits(
    connection: sqlite3.Connection, commits: Iterable[CommitRecord]
) -> int:
    """Replace the stored history with ``commits`` and their file changes.

    Both tables are emptied first, in the same transaction as the inserts,
    so every call leaves exactly one full extraction in the database.

    Parameters
    ----------
    connection:
        Database connection with the schema applied
    commits:
        Records to store, usually the output of ``walk_history``

    Returns
    -------
    Number of commits written

    Raises
    ------
    SinkWriteError:
        If any statement fails. The previously stored history is kept in that
        case.
    """
    count = 0
    current: Optional[str] = None
    try:
        with connection:
            cursor = connection.cursor()
            cursor.execute("DELETE FROM commit_files")
            cursor.execute("DELETE FROM commits")
            for commit in commits:
                current = commit.id
                cursor.execute(
                    """INSERT INTO commits
                       (id, summary, author_name, author_email, author_when)
                       VALUES (?, ?, ?, ?, ?)""",
                    (
                        commit.id,
                        commit.summary,
                        commit.author_name,
                        commit.author_email,
                        commit.author_when.isoformat(),
                    ),
                )
                cursor.executemany(
                    """INSERT INTO commit_files (id, name, status, added, deleted)
                       VALUES (?, ?, ?, ?, ?)""",
                    [
                        (
                            commit.id,
                            change.path,
                            change.status.value,
                            change.added_lines,
                            change.removed_lines,
                        )
                        for change in commit.files.values()
                    ],
                )
                count += 1
    except sqlite3.Error as e:
        raise SinkWriteError(f"Failed to store commit: {e}", commit_id=current) from e

    logger.info("Stored %d commits", count)
    return count


def read_file_changes(connection: sqlite3.Connection) -> List[FileChangeRow]:
    """Return ``(id, name, status, added, deleted)`` for every stored file change."""
    cursor = connection.cursor()
    rows = cursor.execute(
        """SELECT commits.id, commit_files.name, commit_files.status,
                  commit_files.added, commit_files.deleted
           FROM commits, commit_files
           WHERE commits.id = commit_files.id
           ORDER BY commits.author_when, commit_files.name"""
    ).fetchall()
    return [tuple(row) for row in rows]


def read_commits(connection: sqlite3.Connection) -> List[CommitRecord]:
    """Rebuild every stored commit record, oldest first."""
    cursor = connection.cursor()

    files: Dict[str, Dict[str, FileChangeRecord]] = {}
    for commit_id, name, status, added, deleted in cursor.execute(
        "SELECT id, name, status, added, deleted FROM commit_files"
    ):
        files.setdefault(commit_id, {})[name] = FileChangeRecord(
            path=name,
            status=FileStatus(status),
            added_lines=added,
            removed_lines=deleted,
        )

    rows = cursor.execute(
        """SELECT id, summary, author_name, author_email, author_when
           FROM commits ORDER BY author_when, rowid"""
    ).fetchall()
    return [
        CommitRecord(
            id=commit_id,
            summary=summary,
            author_name=author_name,
            author_email=author_email,
            author_when=datetime.fromisoformat(author_when),
            files=files.get(commit_id, {}),
        )
        for commit_id, summary, author_name, author_email, author_when in rows
    ]
