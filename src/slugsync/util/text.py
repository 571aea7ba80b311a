"""
Text-to-slug encoding.
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import dataclass, replace
from typing import Optional

from .transliteration import transliterate

SEPARATORS = ("-", "_")

_URL_PATTERN = re.compile(r"^https?://", re.IGNORECASE)
_COMBINING_MARKS = re.compile(r"[\u0300-\u036f]")
_URL_DISALLOWED = re.compile(r"[^a-zA-Z0-9\-/.:]")
_SLUG_ALLOWED = r"a-zA-Z0-9\-/ "
_WHITESPACE_RUN = re.compile(r"\s+")
_DASH_SLASH_RUN = re.compile(r"[-/]+")


@dataclass(frozen=True)
class SlugOptions:
    """
    Separator and case policy for a single encoding call.

    Attributes:
        separator: Either "-" or "_".
        lowercase: Fold the text to lower case before cleaning.
    """
    separator: str = "-"
    lowercase: bool = True

    def __post_init__(self) -> None:
        if self.separator not in SEPARATORS:
            raise ValueError(f"Unsupported separator {self.separator!r}; expected one of {SEPARATORS}.")


def is_url(text: str) -> bool:
    """Return True when the text starts with an http(s) scheme."""
    return bool(_URL_PATTERN.match(text or ""))


def _strip_marks(value: str) -> str:
    return _COMBINING_MARKS.sub("", unicodedata.normalize("NFD", value))


def _clean_url(value: str) -> str:
    protocol, _, rest = value.partition("://")
    if not protocol or not rest:
        return value
    cleaned = _URL_DISALLOWED.sub("", _strip_marks(rest)).strip()
    return f"{protocol}://{cleaned}"


def _clean_text(value: str, separator: str) -> str:
    slug = _strip_marks(transliterate(value))
    # The active separator survives cleaning so existing slugs re-encode unchanged.
    slug = re.sub(f"[^{_SLUG_ALLOWED}{re.escape(separator)}]", "", slug).strip()

    leading_slash = slug.startswith("/")
    trailing_slash = slug.endswith("/")

    slug = _WHITESPACE_RUN.sub(separator, slug)
    # Slashes fold into the separator too; the outer ones are restored below.
    slug = _DASH_SLASH_RUN.sub(separator, slug)
    slug = re.sub(f"{re.escape(separator)}+", separator, slug)
    slug = slug.removeprefix(separator).removesuffix(separator)

    if leading_slash and not slug.startswith("/"):
        slug = "/" + slug
    if trailing_slash and not slug.endswith("/"):
        slug = slug + "/"
    return slug


def create_slug(
    text: str,
    options: Optional[SlugOptions] = None,
    *,
    separator: Optional[str] = None,
    lowercase: Optional[bool] = None,
) -> str:
    """
    Encode free text into a URL-safe slug.

    Text that looks like an http(s) URL keeps its scheme, dots, colons and
    slashes; everything else is transliterated, stripped of diacritics and
    punctuation, and joined with the separator. Empty or non-string input
    yields an empty string.

    Args:
        text: Source text.
        options: Separator/case policy (defaults to "-" and lowercase).
        separator: Override for ``options.separator``.
        lowercase: Override for ``options.lowercase``.
    """
    opts = options or SlugOptions()
    if separator is not None:
        opts = replace(opts, separator=separator)
    if lowercase is not None:
        opts = replace(opts, lowercase=lowercase)

    if not text or not isinstance(text, str):
        return ""

    # Case folding happens before the URL split, so the scheme follows it too.
    slug = text.lower() if opts.lowercase else text
    if is_url(slug):
        return _clean_url(slug)
    return _clean_text(slug, opts.separator)
