"""
Re-express date-like field text as a compact timestamp token.

The calendar date comes from the parsed text; the time of day is always the
current wall-clock time, so the token records when the slug was generated.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional, Tuple

import arrow

from ..util.time import compact_clock, compact_date, local_now

logger = logging.getLogger(__name__)


class DateFormat(str, Enum):
    ISO = "iso"
    DD_MM_YY = "dd_mm_yy"
    MM_DD_YY = "mm_dd_yy"
    NATURAL = "natural"


@dataclass(frozen=True)
class DateParseResult:
    success: bool
    value: Optional[str] = None
    format: Optional[DateFormat] = None


MONTH_NAMES = (
    "january",
    "february",
    "march",
    "april",
    "may",
    "june",
    "july",
    "august",
    "september",
    "october",
    "november",
    "december",
)

_NATURAL = re.compile(
    r"^(?:Date)?([a-zA-Z]+)\s*-?\s*(\d{1,2})(?:st|nd|rd|th)?\s*,?\s*-?\s*(\d{4})$",
    re.IGNORECASE,
)
_ISO = re.compile(r"^(\d{4})[/-](\d{1,2})[/-](\d{1,2})")
_DOTTED = re.compile(r"(\d{1,2})\.(\d{1,2})\.(\d{2,4})")
_SLASHED = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{2,4})")

YMD = Tuple[int, int, int]


def _full_year(token: str) -> int:
    return int(f"20{token}") if len(token) == 2 else int(token)


def _natural(match: re.Match) -> Optional[YMD]:
    month_name, day, year = match.groups()
    try:
        month = MONTH_NAMES.index(month_name.lower()) + 1
    except ValueError:
        return None
    return int(year), month, int(day)


def _iso(match: re.Match) -> Optional[YMD]:
    year, month, day = match.groups()
    return int(year), int(month), int(day)


def _dotted(match: re.Match) -> Optional[YMD]:
    day, month, year = match.groups()
    return _full_year(year), int(month), int(day)


def _slashed(match: re.Match) -> Optional[YMD]:
    first, second, year = match.groups()
    # US ordering unless the first number cannot be a month.
    if int(first) > 12:
        return _full_year(year), int(second), int(first)
    return _full_year(year), int(first), int(second)


_MATCHERS: Tuple[Tuple[DateFormat, re.Pattern, Callable[[re.Match], Optional[YMD]]], ...] = (
    (DateFormat.NATURAL, _NATURAL, _natural),
    (DateFormat.ISO, _ISO, _iso),
    (DateFormat.DD_MM_YY, _DOTTED, _dotted),
    (DateFormat.MM_DD_YY, _SLASHED, _slashed),
)


def parse_date_value(field_value: str, *, now: Optional[arrow.Arrow] = None) -> DateParseResult:
    """
    Try each date matcher in order and format the first valid hit.

    Args:
        field_value: Raw text taken from the field.
        now: Clock reading used for the time-of-day part (defaults to local now).

    Returns:
        A successful result holding ``DDMMYYYY-HHMM`` (``DDMMYYYY-HHMMSS`` for
        natural-language dates), or an unsuccessful result when nothing parsed.
    """
    text = (field_value or "").strip()
    if not text:
        return DateParseResult(success=False)

    for date_format, pattern, extract in _MATCHERS:
        match = pattern.search(text)
        if not match:
            continue
        parts = extract(match)
        if parts is None:
            continue
        year, month, day = parts
        try:
            parsed = arrow.Arrow(year, month, day)
        except ValueError as exc:
            logger.debug("Discarding %s match for %r: %s", date_format.value, text, exc)
            continue
        moment = now or local_now()
        clock = compact_clock(moment, seconds=date_format is DateFormat.NATURAL)
        value = f"{compact_date(parsed.day, parsed.month, parsed.year)}-{clock}"
        return DateParseResult(success=True, value=value, format=date_format)

    return DateParseResult(success=False)
