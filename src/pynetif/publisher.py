"""Delivery of settle events and reported errors to the consumer."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pynetif.exceptions import NetifError
from pynetif.state.events import SettleEvent

_logger = logging.getLogger(__name__)

SettleCallback = Callable[[SettleEvent], None]
ErrorCallback = Callable[[NetifError], None]


class StatePublisher:
    """Fan-out of settle events and error reports.

    Consumer callbacks run on the engine's loop. A callback that raises is
    logged and skipped; it never reaches the engine.
    """

    def __init__(
        self,
        *,
        on_settled: SettleCallback | None = None,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._settle_callbacks: list[SettleCallback] = []
        self._error_callbacks: list[ErrorCallback] = []
        self._last_event: SettleEvent | None = None
        if on_settled is not None:
            self._settle_callbacks.append(on_settled)
        if on_error is not None:
            self._error_callbacks.append(on_error)

    @property
    def last_event(self) -> SettleEvent | None:
        return self._last_event

    def subscribe(self, callback: SettleCallback) -> Callable[[], None]:
        """Register a settle callback; returns an unsubscribe function."""
        self._settle_callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._settle_callbacks:
                self._settle_callbacks.remove(callback)

        return _unsubscribe

    def subscribe_errors(self, callback: ErrorCallback) -> Callable[[], None]:
        self._error_callbacks.append(callback)

        def _unsubscribe() -> None:
            if callback in self._error_callbacks:
                self._error_callbacks.remove(callback)

        return _unsubscribe

    def publish(self, event: SettleEvent) -> None:
        self._last_event = event
        _logger.debug(
            "Publishing settle event trigger=%s interfaces=%d settled=%s",
            event.trigger,
            len(event.interfaces),
            event.settled,
        )
        for callback in list(self._settle_callbacks):
            try:
                callback(event)
            except Exception:
                _logger.debug("on_settled callback failed", exc_info=True)

    def report_error(self, error: NetifError) -> None:
        _logger.warning("%s: %s", type(error).__name__, error)
        for callback in list(self._error_callbacks):
            try:
                callback(error)
            except Exception:
                _logger.debug("on_error callback failed", exc_info=True)
