"""
Clock helpers shared by date reclassification.
"""

from __future__ import annotations

import arrow


def local_now() -> arrow.Arrow:
    """Return the current wall-clock time in the local timezone."""
    return arrow.now()


def compact_date(day: int, month: int, year: int) -> str:
    """Render a calendar date as DDMMYYYY."""
    return f"{day:02d}{month:02d}{year:04d}"


def compact_clock(moment: arrow.Arrow, *, seconds: bool = False) -> str:
    """Render the time of day as HHMM (or HHMMSS)."""
    pattern = "HHmmss" if seconds else "HHmm"
    return moment.format(pattern)
