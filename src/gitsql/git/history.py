"""Git history extraction and commit tracking."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

from ..errors import GitsqlError
from ..temporal import to_utc
from .diff import reconcile_diff
from .reader import CommitMeta, GitRepo, RepositoryReader
from .records import NO_VALUE, CommitRecord

logger = logging.getLogger(__name__)


def _or_none(value: Optional[str]) -> str:
    return value if value else NO_VALUE


def _summary(message: str) -> str:
    return message.split("\n", 1)[0]


def build_commit_record(reader: RepositoryReader, meta: CommitMeta) -> CommitRecord:
    """Assemble the record of one commit, diffing it when it has one parent.

    Root commits and merge commits carry no file records.
    """

    files = {}
    if len(meta.parent_ids) == 1:
        parent = reader.read_commit(meta.parent_ids[0])
        files = reconcile_diff(reader.diff_trees(parent.tree_id, meta.tree_id))
    else:
        logger.debug(
            "Skipping diff for %s: %d parents", meta.id[:8], len(meta.parent_ids)
        )

    return CommitRecord(
        id=meta.id,
        summary=_summary(meta.message),
        author_name=_or_none(meta.author_name),
        author_email=_or_none(meta.author_email),
        author_when=to_utc(meta.author_seconds, meta.author_offset_minutes),
        files=files,
    )


def walk_history(reader: RepositoryReader) -> List[CommitRecord]:
    """Return a record for every commit reachable from HEAD, oldest first.

    Parameters
    ----------
    reader:
        Repository reader supplying commits and diffs

    Returns
    -------
    List of CommitRecord objects

    Raises
    ------
    GitsqlError:
        On the first failure. Errors raised while a commit is processed have
        ``commit_id`` set to that commit.
    """

    records: List[CommitRecord] = []
    start = reader.head()

    for commit_id in reader.traverse(start):
        try:
            meta = reader.read_commit(commit_id)
            record = build_commit_record(reader, meta)
        except GitsqlError as e:
            if e.commit_id is None:
                e.commit_id = commit_id
            raise
        logger.debug("Read commit %s with %d files", commit_id[:8], len(record.files))
        records.append(record)

    logger.info("Walked %d commits", len(records))
    return records


def extract_history(repo_path: Path) -> List[CommitRecord]:
    """Open the repository at ``repo_path`` and walk its history."""

    return walk_history(GitRepo(repo_path))
