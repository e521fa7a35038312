"""Read access to commits, trees and diffs of a git repository."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Iterator, List, Optional, Protocol, Tuple

from git import Repo
from git.exc import (
    BadName,
    BadObject,
    GitCommandError,
    InvalidGitRepositoryError,
    NoSuchPathError,
)

from ..errors import ObjectNotFoundError, ReferenceResolutionError, RepositoryOpenError

_LOOKUP_ERRORS = (BadName, BadObject, GitCommandError, ValueError)


@dataclass(slots=True)
class RawChange:
    """One file observation from a tree-to-tree diff."""

    a_path: Optional[str]
    b_path: Optional[str]
    change_type: str


@dataclass(slots=True)
class TreeDiff:
    """Structured change list plus a lazily rendered numstat summary."""

    changes: List[RawChange]
    render_numstat: Callable[[], str] = field(repr=False)

    def numstat(self) -> str:
        return self.render_numstat()


@dataclass(slots=True)
class CommitMeta:
    """Metadata of a single commit object."""

    id: str
    message: str
    author_name: Optional[str]
    author_email: Optional[str]
    author_seconds: int
    author_offset_minutes: int
    parent_ids: Tuple[str, ...]
    tree_id: str


class RepositoryReader(Protocol):
    def head(self) -> str:
        ...

    def traverse(self, start: str) -> Iterator[str]:
        ...

    def read_commit(self, commit_id: str) -> CommitMeta:
        ...

    def diff_trees(self, a_tree: str, b_tree: str) -> TreeDiff:
        ...


class GitRepo:
    """Wrapper around gitpython implementing ``RepositoryReader``."""

    def __init__(self, repo_path: Path):
        self.repo_path = Path(repo_path).resolve()
        try:
            self.repo = Repo(self.repo_path)
        except (InvalidGitRepositoryError, NoSuchPathError) as e:
            raise RepositoryOpenError(f"Not a valid git repository: {repo_path}") from e

    def head(self) -> str:
        """Return the sha of the commit HEAD points at."""
        try:
            return self.repo.head.commit.hexsha
        except _LOOKUP_ERRORS as e:
            raise ReferenceResolutionError(
                f"Cannot resolve HEAD in {self.repo_path}: {e}"
            ) from e

    def traverse(self, start: str) -> Iterator[str]:
        """Yield commit shas reachable from ``start``, oldest first."""
        try:
            for commit in self.repo.iter_commits(start, date_order=True, reverse=True):
                yield commit.hexsha
        except _LOOKUP_ERRORS as e:
            raise ObjectNotFoundError(f"Cannot walk history from {start}: {e}") from e

    def read_commit(self, commit_id: str) -> CommitMeta:
        """Load the metadata of ``commit_id``.

        GitPython stores the author timezone as seconds west of UTC; it is
        converted to minutes east of UTC here.
        """
        try:
            commit = self.repo.commit(commit_id)
            message = commit.message
            if isinstance(message, bytes):
                message = message.decode("utf-8", errors="replace")
            return CommitMeta(
                id=commit.hexsha,
                message=message,
                author_name=commit.author.name,
                author_email=commit.author.email,
                author_seconds=commit.authored_date,
                author_offset_minutes=-commit.author_tz_offset // 60,
                parent_ids=tuple(parent.hexsha for parent in commit.parents),
                tree_id=commit.tree.hexsha,
            )
        except _LOOKUP_ERRORS as e:
            raise ObjectNotFoundError(f"Cannot read commit {commit_id}: {e}") from e

    def diff_trees(self, a_tree: str, b_tree: str) -> TreeDiff:
        """Diff two trees, with rename detection as done by ``git diff-tree -M``."""
        try:
            diff_index = self.repo.tree(a_tree).diff(self.repo.tree(b_tree))
        except _LOOKUP_ERRORS as e:
            raise ObjectNotFoundError(f"Cannot diff trees {a_tree}..{b_tree}: {e}") from e

        changes = [
            RawChange(a_path=diff.a_path, b_path=diff.b_path, change_type=diff.change_type)
            for diff in diff_index
        ]

        def render_numstat() -> str:
            try:
                return self.repo.git(c="core.quotepath=off").diff_tree(
                    "-r", "-M", "--numstat", "--no-color", a_tree, b_tree
                )
            except GitCommandError as e:
                raise ObjectNotFoundError(
                    f"Cannot summarise trees {a_tree}..{b_tree}: {e}"
                ) from e

        return TreeDiff(changes=changes, render_numstat=render_numstat)
