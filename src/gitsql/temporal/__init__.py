"""Temporal metadata helpers."""

from .normalize import to_utc

__all__ = ["to_utc"]
