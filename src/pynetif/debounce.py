"""Debounce gate collapsing bursts of change signals into one trigger."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

_logger = logging.getLogger(__name__)


class DebounceGate:
    """Single-shot delayed trigger bound to one asyncio loop.

    :meth:`notify` must run on the owning loop; foreign threads use
    :meth:`notify_threadsafe`. While a trigger is pending further
    notifications are absorbed, so a burst yields exactly one call of
    *on_trigger*, ``delay`` seconds after the first notification.
    """

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        on_trigger: Callable[[], None],
        delay: float = 0.25,
    ) -> None:
        self._loop = loop
        self._on_trigger = on_trigger
        self._delay = delay
        self._handle: asyncio.TimerHandle | None = None

    @property
    def pending(self) -> bool:
        return self._handle is not None

    def notify(self) -> bool:
        """Schedule the trigger unless one is already pending.

        Returns whether a new trigger was scheduled.
        """
        if self._handle is not None:
            return False
        self._handle = self._loop.call_later(self._delay, self._fire)
        return True

    def notify_threadsafe(self) -> None:
        self._loop.call_soon_threadsafe(self.notify)

    def cancel(self) -> None:
        handle = self._handle
        self._handle = None
        if handle is not None:
            handle.cancel()

    def _fire(self) -> None:
        self._handle = None
        try:
            self._on_trigger()
        except Exception:
            _logger.debug("Debounced trigger failed", exc_info=True)
