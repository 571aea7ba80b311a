"""
Read a field's current text from the host and normalise date-like values.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .dates import DateFormat, parse_date_value
from .document import FieldElement
from .host import FieldHost
from .lookup import DATE_CONTEXTS

logger = logging.getLogger(__name__)

DATE_INPUT_TYPES = ("date", "datetime-local")
DATE_NAME_MARKERS = ("date", "time")
DATE_CLASSES = ("date", "datetime")


@dataclass(frozen=True)
class ExtractedField:
    """
    A resolved field and its trimmed text.

    Attributes:
        element: Element the value was read from.
        value: Trimmed, non-empty text.
        kind: "contenteditable", "input", "div", or "textarea".
    """
    element: FieldElement
    value: str
    kind: str


@dataclass(frozen=True)
class ExtractedValue:
    raw: Optional[str]
    classified_as_date: bool = False
    date_format: Optional[DateFormat] = None
    processed: Optional[str] = None


def extract_field_value(host: FieldHost, element: FieldElement) -> Optional[str]:
    """Return the element's trimmed text, or None when it is blank."""
    raw = host.read_value(element)
    value = raw.strip() if raw else ""
    logger.debug("Extracted %r from <%s> %s", value, element.tag, sorted(element.classes))
    return value or None


def _element_kind(element: FieldElement) -> str:
    if element.is_contenteditable:
        return "contenteditable"
    if any(element.has_class(name) for name in ("v-input__input", "v-textarea__input", "v-field__input")):
        return "input"
    if element.tag == "div":
        return "div"
    return "textarea"


def find_field_element(host: FieldHost, field_name: str) -> Optional[ExtractedField]:
    """
    Walk the host's ranked candidates and return the first one holding text.
    """
    for element in host.candidates(field_name):
        value = extract_field_value(host, element)
        if value:
            logger.debug("Resolved field %s to <%s> with value %r", field_name, element.tag, value)
            return ExtractedField(element=element, value=value, kind=_element_kind(element))
        logger.debug("Candidate <%s> for field %s holds no value", element.tag, field_name)
    logger.debug("No field element found for %s", field_name)
    return None


def is_date_field(field_name: str, element: FieldElement) -> bool:
    lowered = field_name.lower()
    if any(marker in lowered for marker in DATE_NAME_MARKERS):
        return True
    if element.get_attribute("type") in DATE_INPUT_TYPES:
        return True
    if element.closest(lambda node: node.get_attribute("data-field") in DATE_CONTEXTS) is not None:
        return True
    return any(element.has_class(name) for name in DATE_CLASSES)


def extract_value(host: FieldHost, field_name: str) -> ExtractedValue:
    """
    Resolve a field and, for date-like fields, reparse its text.

    The processed value is the reparsed date token when one of the date
    patterns matched, otherwise the raw text.
    """
    found = find_field_element(host, field_name)
    if found is None:
        return ExtractedValue(raw=None)

    if not is_date_field(field_name, found.element):
        return ExtractedValue(raw=found.value, processed=found.value)

    result = parse_date_value(found.value)
    if result.success and result.value:
        return ExtractedValue(
            raw=found.value,
            classified_as_date=True,
            date_format=result.format,
            processed=result.value,
        )
    return ExtractedValue(raw=found.value, classified_as_date=True, processed=found.value)


def get_processed_field_value(host: FieldHost, field_name: str) -> Optional[str]:
    return extract_value(host, field_name).processed


def get_status_value(host: FieldHost, status_field: str = "status") -> Optional[str]:
    return host.current_status_value(status_field)
