"""
Host field model, lookup, and value extraction.
"""

from .dates import DateFormat, DateParseResult, parse_date_value
from .document import FieldElement, FormDocument
from .extraction import (
    ExtractedField,
    ExtractedValue,
    extract_field_value,
    extract_value,
    find_field_element,
    get_processed_field_value,
    get_status_value,
    is_date_field,
)
from .host import FieldHost

__all__ = [
    "DateFormat",
    "DateParseResult",
    "parse_date_value",
    "FieldElement",
    "FormDocument",
    "ExtractedField",
    "ExtractedValue",
    "extract_field_value",
    "extract_value",
    "find_field_element",
    "get_processed_field_value",
    "get_status_value",
    "is_date_field",
    "FieldHost",
]
