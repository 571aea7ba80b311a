import asyncio
import logging
from typing import List, Optional

import pytest

from slugsync.config import AutoUpdateConfig
from slugsync.fields import FieldElement, FormDocument
from slugsync.sync import (
    GENERATED,
    AutoUpdater,
    TransformError,
    UpdateOutcome,
    UpdateResult,
    auto_update_field,
)


class RecordingForm(FormDocument):
    """Form double that counts write-backs."""

    def __init__(self) -> None:
        super().__init__()
        self.writes: List[str] = []

    def write_value(self, element: FieldElement, value: str) -> None:
        self.writes.append(value)
        super().write_value(element, value)


def _form(title: Optional[str] = "Hello World", slug: str = "") -> RecordingForm:
    document = RecordingForm()
    document.add_field("title", title)
    document.add_field("slug", slug)
    return document


def _config(**overrides) -> AutoUpdateConfig:
    return AutoUpdateConfig(source_field="title", target_field="slug", **overrides)


def _set_title(document: FormDocument, value: str) -> None:
    control = document.root.find(lambda node: node.get_attribute("name") == "title")
    control.value = value


def test_writes_slug_for_new_source() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)

    result = updater.perform_update()

    assert result == UpdateResult(
        success=True,
        old_value="",
        new_value="hello-world",
        source_value="Hello World",
    )
    assert document.writes == ["hello-world"]
    assert updater.last_source_value == "Hello World"
    assert updater.is_updating is False


def test_slug_options_are_applied() -> None:
    document = _form(title="Привет Мир")
    updater = AutoUpdater(_config(separator="_", lowercase=False), document)

    assert updater.perform_update().new_value == "Privet_Mir"


def test_unchanged_source_skips_write() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)
    updater.perform_update()

    result = updater.perform_update()

    assert result.success is True
    assert result.outcome is UpdateOutcome.UNCHANGED
    assert result.error == "Source value unchanged"
    assert result.new_value == "hello-world"
    assert document.writes == ["hello-world"]


def test_changed_source_rewrites() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)
    updater.perform_update()
    _set_title(document, "Second Title")

    result = updater.perform_update()

    assert result.wrote
    assert result.old_value == "hello-world"
    assert document.writes == ["hello-world", "second-title"]


def test_emptied_target_is_refilled_even_if_source_unchanged() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)
    updater.perform_update()
    target = document.resolve_field_element("slug")
    FormDocument.write_value(document, target, "")

    result = updater.perform_update()

    assert result.wrote
    assert document.writes == ["hello-world", "hello-world"]


def test_preserve_existing_leaves_target_untouched() -> None:
    document = _form(slug="hand-made")
    updater = AutoUpdater(_config(preserve_existing=True), document)

    result = updater.perform_update()

    assert result.success is True
    assert result.outcome is UpdateOutcome.PRESERVED
    assert result.new_value == "hand-made"
    assert result.error == "Preserving existing value"
    assert document.writes == []
    assert document.read_value(document.resolve_field_element("slug")) == "hand-made"


def test_preserve_existing_ignores_blank_target() -> None:
    document = _form(slug="   ")
    updater = AutoUpdater(_config(preserve_existing=True), document)

    assert updater.perform_update().new_value == "hello-world"


def test_clearing_source_clears_target_once() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)
    updater.perform_update()
    _set_title(document, "")

    cleared = updater.perform_update()

    assert cleared.wrote
    assert cleared.new_value == ""
    assert cleared.source_value is None
    assert updater.last_source_value is None
    assert document.writes == ["hello-world", ""]

    _set_title(document, "Hello World")
    again = updater.perform_update()
    assert again.wrote
    assert document.writes == ["hello-world", "", "hello-world"]


def test_uuid_mode_marks_memo_as_generated() -> None:
    document = _form()
    updater = AutoUpdater(_config(generation_mode="uuid"), document)

    first = updater.perform_update()
    second = updater.perform_update()

    assert first.wrote and second.wrote
    assert len(first.new_value) == 36
    assert first.new_value != second.new_value
    assert updater.last_source_value is GENERATED
    assert len(document.writes) == 2


def test_uuid_mode_respects_preserve_existing() -> None:
    document = _form(slug="0b7c1c1e-9a51-4b7b-8b7e-3f7f7c0d4e21")
    updater = AutoUpdater(_config(generation_mode="uuid", preserve_existing=True), document)

    assert updater.perform_update().outcome is UpdateOutcome.PRESERVED
    assert document.writes == []


def test_missing_target_is_reported() -> None:
    document = RecordingForm()
    document.add_field("title", "Hello")
    updater = AutoUpdater(_config(), document)

    result = updater.perform_update()

    assert result.success is False
    assert result.outcome is UpdateOutcome.FIELD_NOT_FOUND
    assert result.error == 'Target field "slug" not found'
    assert result.source_value == "Hello"
    assert updater.is_updating is False


def test_unexpected_failure_releases_flag(caplog: pytest.LogCaptureFixture) -> None:
    class BrokenForm(RecordingForm):
        def write_value(self, element: FieldElement, value: str) -> None:
            raise OSError("disk on fire")

    document = BrokenForm()
    document.add_field("title", "Hello")
    document.add_field("slug", "")
    updater = AutoUpdater(_config(), document)

    caplog.set_level(logging.ERROR)
    result = updater.perform_update()

    assert result.success is False
    assert result.outcome is UpdateOutcome.FAILED
    assert result.error == "disk on fire"
    assert updater.is_updating is False
    assert updater.last_source_value is None
    assert "update of slug failed" in caplog.text


def test_failure_is_logged_as_transform_error_with_cause(caplog: pytest.LogCaptureFixture) -> None:
    class BrokenSource(RecordingForm):
        def read_value(self, element: FieldElement) -> Optional[str]:
            raise KeyError("value")

    document = BrokenSource()
    document.add_field("title", "Hello")
    document.add_field("slug", "")
    updater = AutoUpdater(_config(), document)

    caplog.set_level(logging.ERROR)
    result = updater.perform_update()

    assert result.outcome is UpdateOutcome.FAILED
    assert result.error == "'value'"
    assert updater.is_updating is False
    failure = caplog.records[-1].exc_info[1]
    assert isinstance(failure, TransformError)
    assert isinstance(failure.__cause__, KeyError)


def test_reentrant_update_is_rejected() -> None:
    class ReentrantForm(RecordingForm):
        updater: Optional[AutoUpdater] = None
        nested: List[UpdateResult] = []

        def read_value(self, element: FieldElement) -> Optional[str]:
            if self.updater is not None and not self.nested:
                self.nested.append(self.updater.perform_update())
            return super().read_value(element)

    document = ReentrantForm()
    document.nested = []
    document.add_field("title", "Hello World")
    document.add_field("slug", "")
    updater = AutoUpdater(_config(), document)
    document.updater = updater

    outer = updater.perform_update()

    assert outer.wrote
    assert document.nested[0].success is False
    assert document.nested[0].outcome is UpdateOutcome.IN_PROGRESS
    assert document.nested[0].error == "Update already in progress"
    assert document.writes == ["hello-world"]
    assert updater.is_updating is False


def test_update_rejected_while_flag_held() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)
    updater.is_updating = True

    result = updater.perform_update()

    assert result.outcome is UpdateOutcome.IN_PROGRESS
    assert updater.is_updating is True
    assert document.writes == []


def test_destroy_resets_state() -> None:
    document = _form()
    updater = AutoUpdater(_config(), document)
    updater.perform_update()

    updater.destroy()

    assert updater.last_source_value is None
    assert updater.is_updating is False


def test_auto_update_field_helper() -> None:
    document = _form(title="Café déjà vu")

    result = asyncio.run(auto_update_field(document, "title", "slug", separator="_"))

    assert result.new_value == "cafe_deja_vu"
    assert document.writes == ["cafe_deja_vu"]
