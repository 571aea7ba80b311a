import arrow
import pytest

from slugsync.fields import (
    FieldElement,
    FormDocument,
    extract_value,
    find_field_element,
    get_processed_field_value,
    get_status_value,
    is_date_field,
)
from slugsync.fields import dates


def test_wrapper_resolves_to_inner_control(form: FormDocument) -> None:
    found = find_field_element(form, "title")

    assert found is not None
    assert found.value == "Hello World"
    assert found.element.get_attribute("data-field") == "title"
    assert found.kind == "div"


def test_values_are_trimmed_and_blank_is_absent() -> None:
    document = FormDocument()
    document.add_field("title", "   padded  ")
    document.add_field("empty", "   ")

    assert get_processed_field_value(document, "title") == "padded"
    assert get_processed_field_value(document, "empty") is None
    assert get_processed_field_value(document, "missing") is None


def test_named_input_without_wrapper() -> None:
    document = FormDocument()
    document.root.append(FieldElement("textarea", attributes={"name": "summary"}, value="Short text"))

    assert get_processed_field_value(document, "summary") == "Short text"


def test_first_candidate_with_a_value_wins() -> None:
    document = FormDocument()
    empty_wrapper = document.root.append(FieldElement("div", attributes={"data-field": "title"}))
    document.root.append(FieldElement("input", attributes={"id": "title"}, value="From id"))

    found = find_field_element(document, "title")
    assert found is not None
    assert found.value == "From id"
    assert document.resolve_field_element("title") is empty_wrapper


def test_contenteditable_and_editor_components() -> None:
    document = FormDocument()
    document.add_field("body", "Rich text", tag="contenteditable")
    wrapper = document.root.append(FieldElement("div", attributes={"data-field": "caption"}))
    editor = wrapper.append(FieldElement("div", classes={"v-field"}))
    editor.append(FieldElement("input", classes={"v-field__input"}, value="Editor text"))

    assert get_processed_field_value(document, "body") == "Rich text"
    assert get_processed_field_value(document, "caption") == "Editor text"


def test_translation_editor_is_found() -> None:
    document = FormDocument()
    wrapper = document.root.append(FieldElement("div", attributes={"data-field": "translations"}))
    panel = wrapper.append(FieldElement("section", classes={"interface-translations"}))
    panel.append(FieldElement("textarea", value="Bonjour"))

    assert get_processed_field_value(document, "translations") == "Bonjour"


def test_date_picker_div_is_last_resort() -> None:
    document = FormDocument()
    picker = document.root.append(FieldElement("div", classes={"v-date-picker"}))
    picker.append(FieldElement("input", value="2025-02-28"))

    assert document.resolve_field_element("published") is picker
    assert get_processed_field_value(document, "published") == "2025-02-28"

    named = document.root.append(FieldElement("input", attributes={"name": "published"}, value="Named"))
    assert document.resolve_field_element("published") is named


def test_prepend_slot_wrapper_holds_text() -> None:
    document = FormDocument()
    document.root.append(
        FieldElement("div", attributes={"data-field": "code"}, classes={"field-prepend"}, text="ABC-1")
    )

    assert get_processed_field_value(document, "code") == "ABC-1"


@pytest.mark.parametrize(
    "field_name, element, expected",
    [
        ("publish_date", FieldElement("input"), True),
        ("startTime", FieldElement("input"), True),
        ("title", FieldElement("input", attributes={"type": "date"}), True),
        ("title", FieldElement("input", attributes={"type": "datetime-local"}), True),
        ("title", FieldElement("input", classes={"datetime"}), True),
        ("title", FieldElement("input", attributes={"type": "text"}), False),
    ],
)
def test_date_field_classification(field_name: str, element: FieldElement, expected: bool) -> None:
    assert is_date_field(field_name, element) is expected


def test_date_context_ancestor_marks_field_as_date() -> None:
    outer = FieldElement("div", attributes={"data-field": "timestamp"})
    inner = outer.append(FieldElement("input", attributes={"name": "created"}))

    assert is_date_field("created", inner) is True


def test_date_field_is_reexpressed(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(dates, "local_now", lambda: arrow.Arrow(2026, 1, 2, 9, 30, 0))
    document = FormDocument()
    document.add_field("event_date", "2025-06-01")

    extracted = extract_value(document, "event_date")

    assert extracted.classified_as_date is True
    assert extracted.raw == "2025-06-01"
    assert extracted.processed == "01062025-0930"


def test_unparseable_date_field_keeps_raw_text() -> None:
    document = FormDocument()
    document.add_field("event_date", "sometime soon")

    assert get_processed_field_value(document, "event_date") == "sometime soon"


def test_non_date_field_is_not_reparsed() -> None:
    document = FormDocument()
    document.add_field("title", "2025-06-01")

    extracted = extract_value(document, "title")
    assert extracted.classified_as_date is False
    assert extracted.processed == "2025-06-01"


def test_status_value(form: FormDocument) -> None:
    assert get_status_value(form) == "published"
    assert get_status_value(form, "workflow") is None


def test_write_value_notifies_once(form: FormDocument) -> None:
    seen = []
    target = form.resolve_field_element("slug")
    form.listen(target, "input", lambda element, event: seen.append(element.value))

    form.write_value(target, "hello-world")

    assert seen == ["hello-world"]
    assert form.read_value(target) == "hello-world"


def test_snapshot_round_trip(form: FormDocument) -> None:
    snapshot = form.to_dict()
    rebuilt = FormDocument.from_dict(snapshot)

    assert rebuilt.to_dict() == snapshot
    assert snapshot["fields"][2] == {"field": "status", "value": "published", "tag": "select"}
