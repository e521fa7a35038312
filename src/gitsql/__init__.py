"""gitsql package.

Extracts the commit history of a git repository into SQLite tables.
"""

__all__ = [
    "config",
    "errors",
    "git",
    "storage",
    "temporal",
]
