"""Timestamp formatting in the classic ``ls -l`` style."""

from __future__ import annotations

import time
from datetime import datetime

from nls.output.cell import Alignment, Cell

SIX_MONTHS_IN_SECS = 60 * 60 * 24 * 30 * 6

ABMON = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


def format_recent(dt: datetime) -> str:
    """Equivalent to ``date "+%b %e %H:%M"``."""
    return f"{ABMON[dt.month - 1]} {dt.day:>2} {dt.hour:02}:{dt.minute:02}"


def format_old(dt: datetime) -> str:
    """Equivalent to ``date "+%b %e  %Y"`` with the year padded to four digits."""
    return f"{ABMON[dt.month - 1]} {dt.day:>2}  {dt.year:04}"


def format_timestamp(timestamp: int, style: str | None = None, *, now: float | None = None) -> Cell:
    """Format a unix timestamp into a left-aligned cell.

    Timestamps newer than six months before *now* show the time of day,
    older ones show the year. Out-of-range timestamps yield an error cell.
    """
    try:
        dt = datetime.fromtimestamp(timestamp)
    except (OverflowError, OSError, ValueError):
        return Cell.error_cell(Alignment.LEFT)

    six_months_ago = (time.time() if now is None else now) - SIX_MONTHS_IN_SECS
    text = format_recent(dt) if timestamp > six_months_ago else format_old(dt)
    return Cell.from_ascii_str(text, style)
