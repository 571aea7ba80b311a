"""
Shared utility helpers for slug encoding, identifiers, files, and time.
"""

from .filesystem import write_form_snapshot
from .identifiers import generate_uuid_v4
from .text import SEPARATORS, SlugOptions, create_slug, is_url
from .time import compact_clock, compact_date, local_now
from .transliteration import TRANSLITERATION_TABLE, transliterate

__all__ = [
    "write_form_snapshot",
    "generate_uuid_v4",
    "SEPARATORS",
    "SlugOptions",
    "create_slug",
    "is_url",
    "compact_clock",
    "compact_date",
    "local_now",
    "TRANSLITERATION_TABLE",
    "transliterate",
]
