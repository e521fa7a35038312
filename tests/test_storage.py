from __future__ import annotations

import sqlite3
from datetime import datetime, timezone
from pathlib import Path

import pytest

from gitsql.config import LocalConfig
from gitsql.errors import SinkWriteError
from gitsql.git.history import extract_history
from gitsql.git.records import CommitRecord, FileChangeRecord, FileStatus
from gitsql.storage.commits import read_commits, read_file_changes, write_commits
from gitsql.storage.database import get_connection
from gitsql.storage.schema import apply_schema


def _make_connection() -> sqlite3.Connection:
    connection = sqlite3.connect(":memory:")
    apply_schema(connection)
    return connection


def _record(sha: str, hour: int, files=None) -> CommitRecord:
    return CommitRecord(
        id=sha,
        summary=f"summary {sha}",
        author_name="Ada",
        author_email="<none>",
        author_when=datetime(2021, 5, 14, hour, tzinfo=timezone.utc),
        files=files or {},
    )


def test_write_commits_keeps_null_distinct_from_zero() -> None:
    files = {
        "img.png": FileChangeRecord("img.png", FileStatus.ADDED),
        "empty.txt": FileChangeRecord("empty.txt", FileStatus.ADDED, 0, 0),
    }
    connection = _make_connection()
    written = write_commits(connection, [_record("a1", 1), _record("b2", 2, files)])
    rows = connection.execute(
        "SELECT name, added, deleted FROM commit_files ORDER BY name"
    ).fetchall()
    commits = connection.execute("SELECT COUNT(*) FROM commits").fetchone()[0]
    connection.close()

    assert written == 2
    assert commits == 2
    assert rows == [("empty.txt", 0, 0), ("img.png", None, None)]


def test_author_when_supports_sqlite_date_functions() -> None:
    connection = _make_connection()
    write_commits(connection, [_record("a1", 9)])
    day = connection.execute(
        "SELECT date(author_when) FROM commits WHERE author_when >= '2021-01-01'"
    ).fetchone()[0]
    connection.close()
    assert day == "2021-05-14"


def test_read_commits_rebuilds_records() -> None:
    records = [
        _record("b2", 2, {"x.py": FileChangeRecord("x.py", FileStatus.MODIFIED, 3, 1)}),
        _record("a1", 1),
    ]
    connection = _make_connection()
    write_commits(connection, records)
    loaded = read_commits(connection)
    connection.close()

    assert loaded == [records[1], records[0]]


def test_duplicate_commit_fails_and_rolls_back() -> None:
    connection = _make_connection()
    with pytest.raises(SinkWriteError) as excinfo:
        write_commits(connection, [_record("a1", 1), _record("a1", 2)])
    count = connection.execute("SELECT COUNT(*) FROM commits").fetchone()[0]
    connection.close()

    assert excinfo.value.commit_id == "a1"
    assert count == 0


def test_round_trip_through_join(history_repo) -> None:
    records = extract_history(history_repo.path)
    expected = {
        (
            record.id,
            change.path,
            change.status.value,
            change.added_lines,
            change.removed_lines,
        )
        for record in records
        for change in record.files.values()
    }

    connection = _make_connection()
    write_commits(connection, records)
    stored = read_file_changes(connection)
    connection.close()

    assert len(stored) == len(expected)
    assert set(stored) == expected
    assert (history_repo.shas["binary"], "data.bin", "Added", None, None) in expected


def test_get_connection_uses_configured_path(tmp_path) -> None:
    config = LocalConfig(base_dir=tmp_path / "home")
    connection = get_connection(config)
    try:
        apply_schema(connection)
        write_commits(connection, [_record("a1", 1)])
    finally:
        connection.close()

    assert (tmp_path / "home" / "gitsql.db").exists()


def test_memory_database_path_is_passed_through() -> None:
    config = LocalConfig(database_path=Path(":memory:"))
    assert config.resolved_database_path() == ":memory:"


def test_write_commits_replaces_previous_history() -> None:
    connection = _make_connection()
    write_commits(
        connection,
        [_record("a1", 1, {"x.py": FileChangeRecord("x.py", FileStatus.ADDED, 1, 0)})],
    )
    written = write_commits(connection, [_record("a1", 1), _record("b2", 2)])
    ids = [row[0] for row in connection.execute("SELECT id FROM commits ORDER BY id")]
    files = connection.execute("SELECT COUNT(*) FROM commit_files").fetchone()[0]
    connection.close()

    assert written == 2
    assert ids == ["a1", "b2"]
    assert files == 0


def test_failed_write_keeps_previous_history() -> None:
    connection = _make_connection()
    write_commits(connection, [_record("a1", 1)])
    with pytest.raises(SinkWriteError):
        write_commits(connection, [_record("b2", 2), _record("b2", 3)])
    ids = [row[0] for row in connection.execute("SELECT id FROM commits")]
    connection.close()

    assert ids == ["a1"]


def test_get_connection_reports_unopenable_database(tmp_path) -> None:
    config = LocalConfig(database_path=tmp_path)
    with pytest.raises(SinkWriteError, match="Cannot open database"):
        get_connection(config)
