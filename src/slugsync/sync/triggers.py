"""
Debounced event subscriptions that drive the controller.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Callable, List, Optional, Set

from ..fields.document import FieldElement
from ..fields.host import FieldHost

logger = logging.getLogger(__name__)

CHANGE_EVENTS = ("input", "change")
BLUR_EVENTS = ("blur",)
FOCUS_EVENTS = ("focus",)


class UpdateTriggers:
    """
    Attach change, blur and focus listeners to a source element.

    Every observed event schedules its own single-shot timer; timers are not
    reset by later events. Overlapping runs are absorbed by the controller's
    in-progress flag and its unchanged-source check.

    Timers need an event loop: the one passed in, or the loop running when
    the event fires. With neither, each event runs the callback synchronously
    inside the dispatch, so the delay does not apply and nothing is debounced.
    """

    def __init__(
        self,
        host: FieldHost,
        element: FieldElement,
        callback: Callable[[], object],
        *,
        delay_ms: int,
        on_change: bool = True,
        on_blur: bool = False,
        on_focus: bool = False,
        loop: Optional[asyncio.AbstractEventLoop] = None,
    ) -> None:
        self.host = host
        self.element = element
        self.callback = callback
        self.delay = max(delay_ms, 0) / 1000
        self.events: List[str] = []
        if on_change:
            self.events.extend(CHANGE_EVENTS)
        if on_blur:
            self.events.extend(BLUR_EVENTS)
        if on_focus:
            self.events.extend(FOCUS_EVENTS)
        self._loop = loop
        self._unsubscribers: List[Callable[[], None]] = []
        self._pending: Set[asyncio.TimerHandle] = set()

    @property
    def attached(self) -> bool:
        return bool(self._unsubscribers)

    @property
    def pending(self) -> int:
        return len(self._pending)

    def attach(self) -> None:
        if self.attached:
            return
        for event in self.events:
            self._unsubscribers.append(self.host.listen(self.element, event, self._schedule))
        logger.debug("Listening for %s with %.3fs delay", ", ".join(self.events) or "no events", self.delay)

    def detach(self) -> None:
        for unsubscribe in self._unsubscribers:
            unsubscribe()
        self._unsubscribers.clear()
        for handle in self._pending:
            handle.cancel()
        self._pending.clear()

    def _schedule(self, _element: FieldElement, event: str) -> None:
        loop = self._loop
        if loop is None:
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError:
                logger.debug("No running event loop; handling %s immediately", event)
                self.callback()
                return

        handle: Optional[asyncio.TimerHandle] = None

        def _fire() -> None:
            self._pending.discard(handle)
            result = self.callback()
            logger.debug("Deferred update after %s: %s", event, result)

        handle = loop.call_later(self.delay, _fire)
        self._pending.add(handle)
