"""Exceptions raised while extracting history into SQLite."""

from __future__ import annotations

from typing import Optional


class GitsqlError(Exception):
    """Base class for every fatal extraction error.

    ``commit_id`` is filled in by the history walker when the failure happened
    while a specific commit was being processed.
    """

    def __init__(self, message: str, commit_id: Optional[str] = None):
        super().__init__(message)
        self.commit_id = commit_id

    def __str__(self) -> str:
        message = super().__str__()
        if self.commit_id:
            return f"{message} (while processing commit {self.commit_id})"
        return message


class RepositoryOpenError(GitsqlError):
    """The path does not point at a git repository."""


class ReferenceResolutionError(GitsqlError):
    """HEAD is unborn or cannot be resolved to a commit."""


class ObjectNotFoundError(GitsqlError):
    """A commit or tree object could not be read."""


class ClassificationError(GitsqlError):
    """A diff reported a status tag with no known label."""


class TimestampRangeError(GitsqlError):
    """A commit timestamp falls outside the representable range."""


class SinkWriteError(GitsqlError):
    """Rows could not be written to the database."""
