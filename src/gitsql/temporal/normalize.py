"""Conversion of git timestamps into absolute instants."""

from __future__ import annotations

from datetime import datetime, timezone

from ..errors import TimestampRangeError


def to_utc(seconds: int, offset_minutes: int) -> datetime:
    """Return ``seconds + offset_minutes * 60`` as an aware UTC datetime.

    Parameters
    ----------
    seconds:
        Seconds since the Unix epoch as recorded in the commit header
    offset_minutes:
        Signed timezone offset of the author, east of UTC

    Raises
    ------
    TimestampRangeError:
        If the shifted value cannot be represented as a ``datetime``
    """

    shifted = seconds + offset_minutes * 60
    try:
        return datetime.fromtimestamp(shifted, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as exc:
        raise TimestampRangeError(
            f"Timestamp {seconds} with offset {offset_minutes}m is out of range"
        ) from exc
