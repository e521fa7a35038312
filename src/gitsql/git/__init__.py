"""Git integration for tracking repository history and changes."""

from .diff import classify, parse_numstat, reconcile, reconcile_diff
from .history import build_commit_record, extract_history, walk_history
from .reader import CommitMeta, GitRepo, RawChange, RepositoryReader, TreeDiff
from .records import CommitRecord, FileChangeRecord, FileStatus, LineCounts

__all__ = [
    "CommitMeta",
    "CommitRecord",
    "FileChangeRecord",
    "FileStatus",
    "GitRepo",
    "LineCounts",
    "RawChange",
    "RepositoryReader",
    "TreeDiff",
    "build_commit_record",
    "classify",
    "extract_history",
    "parse_numstat",
    "reconcile",
    "reconcile_diff",
    "walk_history",
]
