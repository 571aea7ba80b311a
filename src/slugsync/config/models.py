"""
Pydantic models for validating slug field configuration files.
"""

from __future__ import annotations

import hashlib
import json
import tomllib
from pathlib import Path
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, Field, ValidationError

from ..util.text import SlugOptions

Separator = Literal["-", "_"]
AutoUpdateMode = Literal["disabled", "change", "blur", "focus", "realtime"]
GenerationMode = Literal["slug", "uuid"]

DEFAULT_UPDATE_DELAY_MS = 100
DEFAULT_EMPTY_MESSAGE = "Slug cannot be empty. Please enter a valid slug."
DEFAULT_FORMAT_MESSAGE = "Slug must contain only lowercase letters, numbers, hyphens, and forward slashes."


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class AutoUpdateConfig(BaseModel):
    """
    Settings for one source -> target synchronization pairing.

    Attributes:
        source_field: Field whose text drives the target.
        target_field: Field that receives the slug or identifier.
        separator: "-" or "_".
        lowercase: Fold slugs to lower case.
        auto_update: Attach event triggers on initialization.
        preserve_existing: Never overwrite a non-blank target.
        update_on_change: Recompute on input/change events.
        update_on_blur: Recompute when the source loses focus.
        update_on_focus: Recompute when the source gains focus.
        generation_mode: "slug" (encode the source) or "uuid" (random identifier).
        update_delay: Debounce delay in milliseconds.
    """
    source_field: str
    target_field: str
    separator: Separator = "-"
    lowercase: bool = True
    auto_update: bool = True
    preserve_existing: bool = False
    update_on_change: bool = True
    update_on_blur: bool = False
    update_on_focus: bool = False
    generation_mode: GenerationMode = "slug"
    update_delay: int = Field(default=DEFAULT_UPDATE_DELAY_MS, ge=0)

    model_config = {"extra": "forbid", "frozen": True}

    @property
    def slug_options(self) -> SlugOptions:
        return SlugOptions(separator=self.separator, lowercase=self.lowercase)


class InterfaceOptions(BaseModel):
    """
    Options a content editor sets on the slug field.

    Attributes:
        select_collection: Collection the source field belongs to.
        status_field: Field holding the item's publication status.
        auto: Generate the slug automatically.
        required: An empty slug is a validation error.
        separator: "-" or "_".
        lowercase: Fold slugs to lower case.
        placeholder: Placeholder text for an empty field.
        custom_empty_message: Message used when a required slug is empty.
        custom_format_message: Message used when the slug has invalid characters.
        allow_duplicates: Skip the duplicate check.
        auto_update_mode: Which events drive regeneration.
        preserve_existing: Keep a non-blank slug when the source changes.
        update_delay: Debounce delay in milliseconds.
    """
    select_collection: Optional[str] = None
    status_field: Optional[str] = None
    auto: bool = True
    required: bool = True
    separator: Separator = "-"
    lowercase: bool = True
    placeholder: Optional[str] = None
    custom_empty_message: Optional[str] = None
    custom_format_message: Optional[str] = None
    allow_duplicates: bool = False
    auto_update_mode: AutoUpdateMode = "change"
    preserve_existing: bool = False
    update_delay: int = Field(default=DEFAULT_UPDATE_DELAY_MS, ge=0)

    model_config = {"extra": "forbid"}

    @property
    def empty_message(self) -> str:
        return self.custom_empty_message or DEFAULT_EMPTY_MESSAGE

    @property
    def format_message(self) -> str:
        return self.custom_format_message or DEFAULT_FORMAT_MESSAGE

    @property
    def slug_options(self) -> SlugOptions:
        return SlugOptions(separator=self.separator, lowercase=self.lowercase)

    def to_auto_update_config(
        self,
        source_field: str,
        target_field: str,
        generation_mode: GenerationMode = "slug",
    ) -> AutoUpdateConfig:
        """
        Translate editor options into controller settings.

        ``realtime`` listens to change and blur events without a delay;
        ``disabled`` or ``auto = false`` leaves the controller manual-only.
        """
        mode = self.auto_update_mode
        return AutoUpdateConfig(
            source_field=source_field,
            target_field=target_field,
            separator=self.separator,
            lowercase=self.lowercase,
            auto_update=self.auto and mode != "disabled",
            preserve_existing=self.preserve_existing,
            update_on_change=mode in ("change", "realtime"),
            update_on_blur=mode in ("blur", "realtime"),
            update_on_focus=mode == "focus",
            generation_mode=generation_mode,
            update_delay=0 if mode == "realtime" else self.update_delay,
        )


class SlugFieldConfig(BaseModel):
    """
    Top-level configuration file: one slug field and the field it follows.
    """
    source_field: str
    target_field: str = "slug"
    generation_mode: GenerationMode = "slug"
    options: InterfaceOptions = Field(default_factory=InterfaceOptions)

    model_config = {"extra": "forbid"}

    @property
    def auto_update(self) -> AutoUpdateConfig:
        return self.options.to_auto_update_config(
            self.source_field,
            self.target_field,
            generation_mode=self.generation_mode,
        )

    @property
    def hash(self) -> str:
        """
        Deterministic hash of the normalized config, used to detect changes.
        """
        payload = self.model_dump(mode="json", round_trip=True)
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()


_FIELD_KEYS = ("source_field", "target_field", "generation_mode")


def load_config(path: Path | str) -> SlugFieldConfig:
    """
    Load and validate a TOML config file into a SlugFieldConfig instance.

    Field keys (``source_field``, ``target_field``, ``generation_mode``) live at
    the top level next to the interface options.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    if "options" in raw_data:
        raise ConfigError("Use top-level option keys; an [options] table is not supported.")

    fields = {key: raw_data.pop(key) for key in _FIELD_KEYS if key in raw_data}
    try:
        return SlugFieldConfig.model_validate({**fields, "options": raw_data})
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc
