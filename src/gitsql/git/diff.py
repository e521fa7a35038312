"""Per-commit diff classification and numstat reconciliation."""

from __future__ import annotations

import logging
import re
from typing import Collection, Dict, Mapping

from ..errors import ClassificationError
from .reader import RawChange, TreeDiff
from .records import FileChangeRecord, FileStatus, LineCounts

logger = logging.getLogger(__name__)

# Status letters emitted by ``git diff --raw`` and ``git status``.
_STATUS_LABELS: Dict[str, FileStatus] = {
    "A": FileStatus.ADDED,
    "M": FileStatus.MODIFIED,
    "B": FileStatus.MODIFIED,
    "D": FileStatus.DELETED,
    "R": FileStatus.RENAMED,
    "C": FileStatus.COPIED,
    "T": FileStatus.TYPECHANGE,
    "U": FileStatus.CONFLICTED,
    "X": FileStatus.UNREADABLE,
    " ": FileStatus.UNMODIFIED,
    "!": FileStatus.IGNORED,
    "?": FileStatus.UNTRACKED,
}

_NUMSTAT_LINE = re.compile(r"^(?P<added>\d+|-)\s+(?P<removed>\d+|-)\s+(?P<path>.+)$")
_BRACED_RENAME = re.compile(r"^(?P<prefix>.*)\{(?P<old>.*) => (?P<new>.*)\}(?P<suffix>.*)$")


def classify(change: RawChange) -> FileStatus:
    """Map a raw change observation onto its ``FileStatus`` label.

    Raises
    ------
    ClassificationError:
        If ``change.change_type`` is not a known git status letter
    """

    try:
        return _STATUS_LABELS[change.change_type]
    except KeyError:
        raise ClassificationError(
            f"Unknown diff status {change.change_type!r} for "
            f"{change.b_path or change.a_path}"
        ) from None


def change_path(change: RawChange) -> str:
    """Return the post-change path, or the old path for deletions."""

    return change.b_path or change.a_path or ""


def _rename_target(path: str) -> str:
    # numstat prints renames as "old => new" or "dir/{old => new}/file"
    braced = _BRACED_RENAME.match(path)
    if braced:
        target = braced.group("prefix") + braced.group("new") + braced.group("suffix")
        return target.replace("//", "/")
    if " => " in path:
        return path.split(" => ", 1)[1]
    return path


def parse_numstat(text: str, known_paths: Collection[str]) -> Dict[str, LineCounts]:
    """Parse ``git diff --numstat`` output into per-path line counts.

    Parameters
    ----------
    text:
        Numstat output, one ``<added> <removed> <path>`` line per file
    known_paths:
        Paths reported by the structured diff; entries for other paths are
        dropped

    Returns
    -------
    Mapping of path to ``LineCounts``. Binary files (``-`` counts) map to
    ``LineCounts(None, None)``. Lines that do not parse are skipped. Only a
    newline ends a line; other line-break characters belong to the path.
    """

    counts: Dict[str, LineCounts] = {}
    for line in text.split("\n"):
        match = _NUMSTAT_LINE.match(line)
        if not match:
            continue

        path = match.group("path")
        if path not in known_paths:
            path = _rename_target(path)
            if path not in known_paths:
                continue

        added, removed = match.group("added"), match.group("removed")
        if added == "-" or removed == "-":
            counts[path] = LineCounts(None, None)
        else:
            counts[path] = LineCounts(int(added), int(removed))
    return counts


def reconcile(
    statuses: Mapping[str, FileStatus],
    counts: Mapping[str, LineCounts],
) -> Dict[str, FileChangeRecord]:
    """Join the status listing and the numeric summary by path.

    Every path in ``statuses`` yields one record. Counts are attached where
    ``counts`` has the same path; paths only present in ``counts`` are not
    part of the result.
    """

    records: Dict[str, FileChangeRecord] = {}
    for path, status in statuses.items():
        line_counts = counts.get(path)
        if line_counts is None:
            records[path] = FileChangeRecord(path=path, status=status)
        else:
            records[path] = FileChangeRecord(
                path=path,
                status=status,
                added_lines=line_counts.added,
                removed_lines=line_counts.removed,
            )

    for path in counts.keys() - statuses.keys():
        logger.warning("Dropping line counts for %s: no status reported", path)

    return records


def reconcile_diff(diff: TreeDiff) -> Dict[str, FileChangeRecord]:
    """Build the file records for one tree-to-tree diff."""

    statuses: Dict[str, FileStatus] = {}
    for change in diff.changes:
        statuses[change_path(change)] = classify(change)

    counts = parse_numstat(diff.numstat(), statuses.keys())
    return reconcile(statuses, counts)
