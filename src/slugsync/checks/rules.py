"""
Validation of slug values against the field's editor options.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, List, Literal, Optional

from ..config.models import InterfaceOptions
from ..util.text import is_url

Severity = Literal["error", "warning"]

DRAFT_STATUS = "draft"
DUPLICATE_MESSAGE = "This slug is already in use."

_URL_SLUG = re.compile(r"^https?://[A-Za-z0-9\-/.:]*$", re.IGNORECASE)


@dataclass(frozen=True)
class SlugIssue:
    code: Literal["empty", "format", "duplicate"]
    message: str
    severity: Severity = "error"


def _format_pattern(options: InterfaceOptions) -> re.Pattern:
    letters = "a-z" if options.lowercase else "A-Za-z"
    return re.compile(f"^[{letters}0-9{re.escape(options.separator)}/]*$")


def validate_slug(
    value: Optional[str],
    options: InterfaceOptions,
    *,
    status: Optional[str] = None,
    existing_slugs: Iterable[str] = (),
) -> List[SlugIssue]:
    """
    Check a slug for emptiness, allowed characters and duplicates.

    Drafts may leave a required slug empty. Duplicates are reported as
    warnings only; storage-level uniqueness is the host's concern.
    """
    slug = (value or "").strip()
    if not slug:
        if options.required and (status or "").lower() != DRAFT_STATUS:
            return [SlugIssue("empty", options.empty_message)]
        return []

    issues: List[SlugIssue] = []
    pattern = _URL_SLUG if is_url(slug) else _format_pattern(options)
    if not pattern.match(slug):
        issues.append(SlugIssue("format", options.format_message))

    if not options.allow_duplicates and slug in set(existing_slugs):
        issues.append(SlugIssue("duplicate", DUPLICATE_MESSAGE, severity="warning"))
    return issues
