"""
Ranked strategies for locating a field's element inside the form tree.

Each strategy mirrors one way hosts render a field (a ``data-field``
wrapper, a bare named input, an editor component, a date picker, ...).
Strategies are tried from most to least specific.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Iterator, Optional, Sequence, Tuple

if TYPE_CHECKING:
    from .document import FieldElement

Predicate = Callable[["FieldElement"], bool]
LookupStrategy = Callable[["FieldElement", str], Optional["FieldElement"]]

TEXT_CONTROLS = ("input", "textarea")
EDITOR_INPUT_CLASSES = ("v-input__input", "v-textarea__input", "v-field__input")
EDITOR_WRAPPER_CLASSES = ("v-input", "v-textarea", "v-field")
TRANSLATION_CLASSES = ("interface-translations", "translations-editor", "translation-field")
RELATION_CLASSES = (
    "interface-many-to-any",
    "interface-many-to-one",
    "interface-one-to-many",
    "relation-field",
    "m2a-field",
    "m2o-field",
    "o2m-field",
)
DATE_CONTEXTS = ("date", "datetime", "timestamp")


def _attr(name: str, value: str) -> Predicate:
    return lambda node: node.get_attribute(name) == value


def _tag(*tags: str) -> Predicate:
    return lambda node: node.tag in tags


def _class(*names: str) -> Predicate:
    return lambda node: any(node.has_class(name) for name in names)


def _all(*predicates: Predicate) -> Predicate:
    return lambda node: all(predicate(node) for predicate in predicates)


def _class_contains(fragment: str) -> Predicate:
    return lambda node: node.tag == "div" and any(fragment in name for name in node.classes)


def _select(root: "FieldElement", *chain: Predicate) -> Optional["FieldElement"]:
    """
    Return the first element matching a descendant chain such as ``A B C``.

    Matches are reported in document order of the final element, like a
    CSS descendant selector.
    """
    head, last = chain[:-1], chain[-1]
    for node in root.iter_descendants():
        if not last(node):
            continue
        remaining = list(head)
        ancestor = node.parent
        while remaining and ancestor is not None and ancestor is not root:
            if remaining[-1](ancestor):
                remaining.pop()
            ancestor = ancestor.parent
        if not remaining:
            return node
    return None


def _selector(*chain: Callable[[str], Predicate]) -> LookupStrategy:
    def strategy(root: "FieldElement", field_name: str) -> Optional["FieldElement"]:
        return _select(root, *(factory(field_name) for factory in chain))

    return strategy


def _fixed(predicate: Predicate) -> Callable[[str], Predicate]:
    return lambda _field_name: predicate


def _data_field(field_name: str) -> Predicate:
    return _attr("data-field", field_name)


def _named(tag: str, attribute: str) -> Callable[[str], Predicate]:
    return lambda field_name: _all(_tag(tag), _attr(attribute, field_name))


DEFAULT_STRATEGIES: Tuple[LookupStrategy, ...] = (
    # Field wrappers rendered by the host
    _selector(_data_field),
    _selector(_data_field, _fixed(_tag("input"))),
    _selector(_data_field, _fixed(_tag("textarea"))),
    _selector(_data_field, _fixed(_class(*EDITOR_WRAPPER_CLASSES)), _fixed(_tag(*TEXT_CONTROLS))),
    # Translation and relation editors
    _selector(_data_field, _fixed(_class(*TRANSLATION_CLASSES)), _fixed(_tag(*TEXT_CONTROLS))),
    _selector(
        _data_field,
        _fixed(_class(*TRANSLATION_CLASSES)),
        _fixed(lambda node: node.get_attribute("contenteditable") is not None),
    ),
    _selector(_data_field, _fixed(_class(*RELATION_CLASSES)), _fixed(_tag("input"))),
    # Bare named controls
    _selector(_named("input", "name")),
    _selector(_named("input", "id")),
    _selector(_named("textarea", "name")),
    _selector(_named("textarea", "id")),
    _selector(lambda field_name: _attr("data-ky-field", field_name)),
    _selector(lambda field_name: _class(f"field-{field_name}"), _fixed(_tag(*TEXT_CONTROLS))),
    # Date pickers
    _selector(
        _data_field,
        _fixed(lambda node: node.tag == "input" and node.get_attribute("type") in ("date", "datetime-local")),
    ),
    _selector(_fixed(_attr("data-field", "date")), _fixed(_all(_tag("input"), _attr("type", "date")))),
    _selector(
        _fixed(_attr("data-field", "datetime")),
        _fixed(_all(_tag("input"), _attr("type", "datetime-local"))),
    ),
    _selector(_fixed(_attr("data-field", "timestamp")), _fixed(_tag("input"))),
    # Content editable
    _selector(_data_field, _fixed(lambda node: node.is_contenteditable)),
    # Editor component inputs
    _selector(_data_field, _fixed(_class(*EDITOR_INPUT_CLASSES))),
    _selector(
        _fixed(lambda node: node.get_attribute("data-field") in ("date", "datetime")),
        _fixed(_class("v-field__input")),
    ),
    # Last resort: any div whose class mentions a prepend slot or a date
    _selector(lambda field_name: _all(_class_contains("prepend"), _data_field(field_name))),
    _selector(lambda field_name: _all(_class_contains("date"), _data_field(field_name))),
    _selector(_fixed(_class_contains("date"))),
)


def iter_candidates(
    root: "FieldElement",
    field_name: str,
    strategies: Sequence[LookupStrategy] = DEFAULT_STRATEGIES,
) -> Iterator["FieldElement"]:
    """Yield each distinct element found by the strategies, in rank order."""
    seen: set[int] = set()
    for strategy in strategies:
        element = strategy(root, field_name)
        if element is None or id(element) in seen:
            continue
        seen.add(id(element))
        yield element
