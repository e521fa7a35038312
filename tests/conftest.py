"""Fixture repositories built with GitPython."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict

import pytest
from git import Actor, Repo

AUTHOR = Actor("Ada Lovelace", "ada@example.com")
NO_EMAIL = Actor("Nobody", "")

BASE_TIME = 1577836800  # 2020-01-01T00:00:00Z


@dataclass
class FixtureRepo:
    path: Path
    repo: Repo
    shas: Dict[str, str]


def _date(offset_hours: int) -> str:
    return f"{BASE_TIME + offset_hours * 3600} +0000"


def _write(root: Path, name: str, content: str | bytes) -> str:
    target = root / name
    if isinstance(content, bytes):
        target.write_bytes(content)
    else:
        target.write_text(content, encoding="utf-8")
    return str(target)


def _commit(repo: Repo, message: str, hour: int, author: Actor = AUTHOR, **kwargs):
    return repo.index.commit(
        message,
        author=author,
        committer=author,
        author_date=_date(hour),
        commit_date=_date(hour),
        **kwargs,
    )


@pytest.fixture
def history_repo(tmp_path) -> FixtureRepo:
    """Six commits: root, edits, a binary add, a side branch, a merge, a rename.

    root -> second -> binary ------> merge -> rename
                  \\-> side --------/
    """

    root = tmp_path / "repo"
    root.mkdir()
    repo = Repo.init(root)
    shas: Dict[str, str] = {}

    repo.index.add([_write(root, "a.txt", "one\n")])
    shas["root"] = _commit(repo, "Initial commit", 1).hexsha

    repo.index.add([_write(root, "a.txt", "one\ntwo\n"), _write(root, "b.txt", "b\n")])
    second = _commit(repo, "Add b and extend a\n\nLonger body text.", 2)
    shas["second"] = second.hexsha

    repo.index.add([_write(root, "data.bin", b"\x00\x01\x02binary\x00")])
    binary = _commit(repo, "Add binary blob", 3)
    shas["binary"] = binary.hexsha

    repo.index.add([_write(root, "c.txt", "see\n")])
    side = _commit(repo, "Side branch work", 4, parent_commits=[second])
    shas["side"] = side.hexsha

    shas["merge"] = _commit(
        repo, "Merge side branch", 5, parent_commits=[binary, side]
    ).hexsha

    repo.index.remove([str(root / "b.txt"), str(root / "c.txt")], working_tree=True)
    repo.index.add([_write(root, "d.txt", "see\n")])
    shas["rename"] = _commit(repo, "Rename c to d, drop b", 6, author=NO_EMAIL).hexsha

    return FixtureRepo(path=root, repo=repo, shas=shas)
