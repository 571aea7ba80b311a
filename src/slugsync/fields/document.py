"""
In-memory form model standing in for the host's rendered fields.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Set

from .lookup import DEFAULT_STRATEGIES, LookupStrategy, iter_candidates

logger = logging.getLogger(__name__)

Listener = Callable[["FieldElement", str], None]

FORM_CONTROL_TAGS = frozenset({"input", "textarea", "select"})


@dataclass(eq=False)
class FieldElement:
    """
    A node of the form tree.

    Attributes:
        tag: Lower-case element name ("input", "textarea", "select", "div", ...).
        attributes: Plain attributes such as ``name``, ``type`` or ``data-field``.
        classes: Class names carried by the element.
        value: Current value of a form control; ``None`` for other elements.
        text: Text content owned directly by this element.
    """
    tag: str
    attributes: Dict[str, str] = field(default_factory=dict)
    classes: Set[str] = field(default_factory=set)
    value: Optional[str] = None
    text: str = ""
    children: List["FieldElement"] = field(default_factory=list)
    parent: Optional["FieldElement"] = field(default=None, repr=False)
    _listeners: Dict[str, List[Listener]] = field(default_factory=dict, repr=False)

    def __post_init__(self) -> None:
        self.tag = self.tag.lower()
        for child in self.children:
            child.parent = self

    def append(self, child: "FieldElement") -> "FieldElement":
        child.parent = self
        self.children.append(child)
        return child

    def get_attribute(self, name: str) -> Optional[str]:
        return self.attributes.get(name)

    def has_class(self, name: str) -> bool:
        return name in self.classes

    @property
    def is_form_control(self) -> bool:
        return self.tag in FORM_CONTROL_TAGS

    @property
    def is_contenteditable(self) -> bool:
        return self.attributes.get("contenteditable") == "true"

    @property
    def text_content(self) -> str:
        return self.text + "".join(child.text_content for child in self.children)

    @text_content.setter
    def text_content(self, value: str) -> None:
        self.text = value
        self.children.clear()

    def iter_descendants(self) -> Iterator["FieldElement"]:
        """Yield descendants in document order (depth first)."""
        for child in self.children:
            yield child
            yield from child.iter_descendants()

    def find(self, predicate: Callable[["FieldElement"], bool]) -> Optional["FieldElement"]:
        return next((node for node in self.iter_descendants() if predicate(node)), None)

    def closest(self, predicate: Callable[["FieldElement"], bool]) -> Optional["FieldElement"]:
        """Return the nearest element, starting with this one, that matches."""
        node: Optional[FieldElement] = self
        while node is not None:
            if predicate(node):
                return node
            node = node.parent
        return None

    def add_listener(self, event: str, listener: Listener) -> Callable[[], None]:
        """Subscribe to an event; the returned callable unsubscribes."""
        bucket = self._listeners.setdefault(event, [])
        bucket.append(listener)

        def _remove() -> None:
            if listener in bucket:
                bucket.remove(listener)

        return _remove

    def dispatch(self, event: str) -> None:
        """Fire an event on this element and bubble it through its ancestors."""
        node: Optional[FieldElement] = self
        while node is not None:
            for listener in list(node._listeners.get(event, ())):
                listener(self, event)
            node = node.parent


class FormDocument:
    """
    Host collaborator backed by a tree of ``FieldElement`` nodes.

    Field lookup walks a ranked list of strategies; writes always dispatch an
    ``input`` event so observers see the change.
    """

    def __init__(
        self,
        root: Optional[FieldElement] = None,
        *,
        strategies: Sequence[LookupStrategy] = DEFAULT_STRATEGIES,
    ) -> None:
        self.root = root or FieldElement("form")
        self.strategies = tuple(strategies)

    def candidates(self, field_name: str) -> Iterator[FieldElement]:
        return iter_candidates(self.root, field_name, self.strategies)

    def resolve_field_element(self, field_name: str) -> Optional[FieldElement]:
        element = next(self.candidates(field_name), None)
        if element is None:
            logger.debug("No element resolved for field %s", field_name)
        return element

    def read_value(self, element: FieldElement) -> Optional[str]:
        if element.is_contenteditable:
            return element.text_content
        if element.is_form_control:
            return element.value
        if element.tag == "div":
            control = element.find(lambda node: node.tag in ("input", "textarea"))
            if control is not None:
                return control.value
            editable = element.find(lambda node: node.is_contenteditable)
            if editable is not None:
                return editable.text_content
        return element.text_content

    def write_value(self, element: FieldElement, value: str) -> None:
        target = element
        if not element.is_contenteditable and not element.is_form_control:
            control = element.find(lambda node: node.is_form_control or node.is_contenteditable)
            if control is not None:
                target = control
        if target.is_contenteditable or not target.is_form_control:
            target.text_content = value
        else:
            target.value = value
        target.dispatch("input")

    def current_status_value(self, status_field: str) -> Optional[str]:
        for element in self.candidates(status_field):
            if element.is_form_control:
                return element.value
            control = element.find(lambda node: node.tag in ("input", "select"))
            if control is not None:
                return control.value
        return None

    def listen(self, element: FieldElement, event: str, listener: Listener) -> Callable[[], None]:
        return element.add_listener(event, listener)

    def add_field(
        self,
        name: str,
        value: Optional[str] = "",
        *,
        tag: str = "input",
        input_type: Optional[str] = None,
        context: Optional[str] = None,
    ) -> FieldElement:
        """
        Append a ``data-field`` wrapper holding a single control.

        Returns the control element.
        """
        wrapper = self.root.append(FieldElement("div", attributes={"data-field": context or name}))
        attributes = {"name": name}
        if input_type:
            attributes["type"] = input_type
        if tag == "contenteditable":
            control = FieldElement("div", attributes={**attributes, "contenteditable": "true"}, text=value or "")
        else:
            control = FieldElement(tag, attributes=attributes, value=value)
        return wrapper.append(control)

    @classmethod
    def from_dict(cls, payload: Dict[str, Any]) -> "FormDocument":
        """
        Build a document from a snapshot.

        The snapshot holds a ``fields`` list of ``{"field", "value", "tag",
        "type", "context"}`` objects; only ``field`` is required.
        """
        document = cls()
        for entry in payload.get("fields", []):
            document.add_field(
                entry["field"],
                entry.get("value", ""),
                tag=entry.get("tag", "input"),
                input_type=entry.get("type"),
                context=entry.get("context"),
            )
        return document

    def to_dict(self) -> Dict[str, Any]:
        fields: List[Dict[str, Any]] = []
        for wrapper in self.root.children:
            control = wrapper.find(lambda node: node.get_attribute("name") is not None)
            if control is None:
                continue
            entry: Dict[str, Any] = {"field": control.attributes["name"], "value": self.read_value(control)}
            if control.is_contenteditable:
                entry["tag"] = "contenteditable"
            elif control.tag != "input":
                entry["tag"] = control.tag
            if control.get_attribute("type"):
                entry["type"] = control.attributes["type"]
            if wrapper.get_attribute("data-field") != entry["field"]:
                entry["context"] = wrapper.get_attribute("data-field")
            fields.append(entry)
        return {"fields": fields}
