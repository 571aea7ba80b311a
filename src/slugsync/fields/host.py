"""
Capabilities the synchronization core needs from the hosting form.
"""

from __future__ import annotations

from typing import Callable, Iterator, Optional, Protocol

from .document import FieldElement, Listener


class FieldHost(Protocol):
    """Protocol for anything that can find, read and write form fields."""

    def candidates(self, field_name: str) -> Iterator[FieldElement]:
        """Yield elements that may hold the field, most specific first."""
        ...

    def resolve_field_element(self, field_name: str) -> Optional[FieldElement]:
        ...

    def read_value(self, element: FieldElement) -> Optional[str]:
        ...

    def write_value(self, element: FieldElement, value: str) -> None:
        """Store the value and fire exactly one change notification."""
        ...

    def current_status_value(self, status_field: str) -> Optional[str]:
        ...

    def listen(self, element: FieldElement, event: str, listener: Listener) -> Callable[[], None]:
        ...
