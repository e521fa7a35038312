"""Records produced by the history walker."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Dict, Optional

NO_VALUE = "<none>"


class FileStatus(Enum):
    """Closed set of change labels stored in ``commit_files.status``."""

    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"
    RENAMED = "Renamed"
    COPIED = "Copied"
    TYPECHANGE = "Typechange"
    UNMODIFIED = "Unmodified"
    IGNORED = "Ignored"
    UNTRACKED = "Untracked"
    UNREADABLE = "Unreadable"
    CONFLICTED = "Conflicted"


@dataclass(frozen=True, slots=True)
class LineCounts:
    """Added/removed line counts for one path.

    Both fields are ``None`` for binary files, where git reports ``-``.
    """

    added: Optional[int]
    removed: Optional[int]


@dataclass(frozen=True, slots=True)
class FileChangeRecord:
    """One changed path; ``None`` counts mean no numeric summary matched it."""

    path: str
    status: FileStatus
    added_lines: Optional[int] = None
    removed_lines: Optional[int] = None


@dataclass(frozen=True, slots=True)
class CommitRecord:
    """One visited commit and the files it changed.

    ``files`` is empty for root and merge commits.
    """

    id: str
    summary: str
    author_name: str
    author_email: str
    author_when: datetime
    files: Dict[str, FileChangeRecord] = field(default_factory=dict)
