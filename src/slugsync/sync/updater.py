"""
Controller that keeps a target field in step with its source field.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from ..config.models import AutoUpdateConfig
from ..fields.extraction import get_processed_field_value
from ..fields.host import FieldHost
from ..util.identifiers import generate_uuid_v4
from ..util.text import create_slug
from .errors import ConcurrentUpdateError, FieldNotFoundError, TransformError
from .triggers import UpdateTriggers

logger = logging.getLogger(__name__)


class UpdateOutcome(str, Enum):
    WRITTEN = "written"
    PRESERVED = "preserved"
    UNCHANGED = "unchanged"
    IN_PROGRESS = "in_progress"
    FIELD_NOT_FOUND = "field_not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class UpdateResult:
    """
    Outcome of a single ``perform_update`` call.

    Attributes:
        success: False for rejected or failed updates.
        old_value: Target value before the update.
        new_value: Target value after the update.
        source_value: Processed source value that was read.
        error: Failure message, or an informational marker for skipped writes.
        outcome: Which branch the update took.
    """
    success: bool
    old_value: Optional[str]
    new_value: Optional[str]
    source_value: Optional[str]
    error: Optional[str] = None
    outcome: UpdateOutcome = UpdateOutcome.WRITTEN

    @property
    def wrote(self) -> bool:
        return self.outcome is UpdateOutcome.WRITTEN


class _Generated:
    def __repr__(self) -> str:
        return "<generated>"


# Memo value after a UUID write; never equal to any source text.
GENERATED = _Generated()


class AutoUpdater:
    """
    Recompute and write the target field when the source field changes.

    One instance per source/target pairing. At most one update runs at a
    time; a call that arrives while another is running is rejected rather
    than queued.
    """

    def __init__(
        self,
        config: AutoUpdateConfig,
        host: FieldHost,
        *,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.config = config
        self.host = host
        self.is_updating = False
        self.last_source_value: object = None
        self._loop = loop
        self._triggers: Optional[UpdateTriggers] = None

    @property
    def triggers(self) -> Optional[UpdateTriggers]:
        return self._triggers

    def initialize(self) -> bool:
        """
        Attach event triggers and run a first update.

        Returns False, without touching the form, when auto update is off or
        the source field cannot be found.
        """
        if not self.config.auto_update:
            return False

        source = self.host.resolve_field_element(self.config.source_field)
        if source is None:
            logger.warning('AutoUpdater: source field "%s" not found', self.config.source_field)
            return False

        self._triggers = UpdateTriggers(
            self.host,
            source,
            self.perform_update,
            delay_ms=self.config.update_delay,
            on_change=self.config.update_on_change,
            on_blur=self.config.update_on_blur,
            on_focus=self.config.update_on_focus,
            loop=self._loop,
        )
        self._triggers.attach()
        self.perform_update()
        return True

    async def update(self) -> UpdateResult:
        """Manually trigger an update."""
        return self.perform_update()

    def destroy(self) -> None:
        if self._triggers is not None:
            self._triggers.detach()
            self._triggers = None
        self.is_updating = False
        self.last_source_value = None

    @contextmanager
    def _updating(self) -> Iterator[None]:
        if self.is_updating:
            raise ConcurrentUpdateError()
        self.is_updating = True
        try:
            yield
        finally:
            self.is_updating = False

    def perform_update(self) -> UpdateResult:
        try:
            with self._updating():
                return self._run()
        except ConcurrentUpdateError as exc:
            return UpdateResult(
                success=False,
                old_value=None,
                new_value=None,
                source_value=None,
                error=str(exc),
                outcome=UpdateOutcome.IN_PROGRESS,
            )
        except TransformError as exc:
            logger.exception("AutoUpdater: update of %s failed", self.config.target_field)
            return UpdateResult(
                success=False,
                old_value=None,
                new_value=None,
                source_value=None,
                error=str(exc),
                outcome=UpdateOutcome.FAILED,
            )

    def _run(self) -> UpdateResult:
        source_value: Optional[str] = None
        try:
            source_value = get_processed_field_value(self.host, self.config.source_field)
            target = self.host.resolve_field_element(self.config.target_field)
            if target is None:
                raise FieldNotFoundError("target", self.config.target_field)

            old_value = self.host.read_value(target)

            if self.config.preserve_existing and old_value and old_value.strip():
                return UpdateResult(
                    success=True,
                    old_value=old_value,
                    new_value=old_value,
                    source_value=source_value,
                    error="Preserving existing value",
                    outcome=UpdateOutcome.PRESERVED,
                )

            if source_value == self.last_source_value and old_value:
                return UpdateResult(
                    success=True,
                    old_value=old_value,
                    new_value=old_value,
                    source_value=source_value,
                    error="Source value unchanged",
                    outcome=UpdateOutcome.UNCHANGED,
                )

            new_value, memo = self._compute(source_value)
            self.host.write_value(target, new_value)
            self.last_source_value = memo
        except FieldNotFoundError as exc:
            return UpdateResult(
                success=False,
                old_value=None,
                new_value=None,
                source_value=source_value,
                error=str(exc),
                outcome=UpdateOutcome.FIELD_NOT_FOUND,
            )
        except Exception as exc:
            raise TransformError(str(exc) or type(exc).__name__) from exc

        logger.debug("Updated %s: %r -> %r", self.config.target_field, old_value, new_value)
        return UpdateResult(
            success=True,
            old_value=old_value,
            new_value=new_value,
            source_value=source_value,
        )

    def _compute(self, source_value: Optional[str]) -> tuple[str, object]:
        """Return the value to write and the memo to keep once it is written."""
        if self.config.generation_mode == "uuid":
            return generate_uuid_v4(), GENERATED
        if source_value:
            return create_slug(source_value, self.config.slug_options), source_value
        return "", None


def create_auto_updater(config: AutoUpdateConfig, host: FieldHost) -> AutoUpdater:
    return AutoUpdater(config, host)


async def auto_update_field(
    host: FieldHost,
    source_field: str,
    target_field: str,
    **options: object,
) -> UpdateResult:
    """
    Run a single update for a pairing without attaching any triggers.
    """
    config = AutoUpdateConfig(source_field=source_field, target_field=target_field, **options)
    return await create_auto_updater(config, host).update()
