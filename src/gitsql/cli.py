"""Extract the commit history of a git repository into a SQLite database."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable

from .config import LocalConfig
from .errors import GitsqlError
from .git.history import extract_history
from .storage.commits import read_commits, write_commits
from .storage.database import get_connection
from .storage.schema import apply_schema

logger = logging.getLogger(__name__)


def _resolve_config(database: Path | None) -> LocalConfig:
    config = LocalConfig()
    if database is not None:
        config.database_path = database
    return config


def _print_commits(connection) -> None:
    for commit in read_commits(connection):
        print(
            f"Found commit {commit.id[:8]} {commit.author_when.isoformat()} "
            f"{commit.author_name} <{commit.author_email}> {commit.summary}"
        )
        for change in sorted(commit.files.values(), key=lambda c: c.path):
            added = "-" if change.added_lines is None else change.added_lines
            removed = "-" if change.removed_lines is None else change.removed_lines
            print(f"    {change.status.value:<10} +{added} -{removed} {change.path}")


def _extract(args: argparse.Namespace) -> int:
    config = _resolve_config(args.database)
    repo_path = args.repo.resolve()

    try:
        commits = extract_history(repo_path)
        connection = get_connection(config)
    except GitsqlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        apply_schema(connection)
        written = write_commits(connection, commits)
        if args.show:
            _print_commits(connection)
    except GitsqlError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        connection.close()

    file_changes = sum(len(commit.files) for commit in commits)
    print(f"Extracted history of {repo_path}")
    print(f"  Commits      : {written}")
    print(f"  File changes : {file_changes}")
    print(f"  Database     : {config.resolved_database_path()}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gitsql", description=__doc__)
    parser.add_argument("repo", type=Path, help="Path to the git repository to analyze")
    parser.add_argument(
        "--database",
        type=Path,
        help="Path to the SQLite database (defaults to ~/.gitsql/gitsql.db, "
        "':memory:' for a throwaway database)",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Print every stored commit after writing",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress for every commit",
    )
    return parser


def main(argv: Iterable[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s:%(name)s:%(message)s",
    )
    logging.getLogger("git").setLevel(logging.WARNING)

    return _extract(args)


if __name__ == "__main__":  # pragma: no cover - CLI entry point
    sys.exit(main())
