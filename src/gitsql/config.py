"""Configuration for where gitsql keeps its SQLite database."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path

MEMORY_DATABASE = ":memory:"


@dataclass(slots=True)
class LocalConfig:
    """Runtime configuration for a local run.

    Attributes
    ----------
    base_dir:
        Root directory for runtime artefacts such as the SQLite database.
        Defaults to ``~/.gitsql``.
    database_path:
        Location of the SQLite database file. Derived from ``base_dir`` when
        not provided explicitly. ``":memory:"`` selects a transient database.
    """

    base_dir: Path = field(default_factory=lambda: Path.home() / ".gitsql")
    database_path: Path | None = None

    def resolved_database_path(self) -> Path | str:
        """Return an absolute path to the SQLite database file.

        The directory is created when it does not yet exist so that the rest of
        the application can assume the path is ready for use.
        """

        if self.database_path is not None and str(self.database_path) == MEMORY_DATABASE:
            return MEMORY_DATABASE
        target = self.database_path or self.base_dir / "gitsql.db"
        target.parent.mkdir(parents=True, exist_ok=True)
        return target.resolve()


DEFAULT_CONFIG = LocalConfig()
