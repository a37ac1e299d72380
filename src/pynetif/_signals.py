"""Background change signal sources.

Each source owns a daemon thread that periodically snapshots host state
through :mod:`psutil` and, when the snapshot changes, hands a
:class:`ChangeSignal` to the asyncio loop with ``call_soon_threadsafe``.
Nothing here touches engine state directly.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Hashable

import psutil

from pynetif.exceptions import NetifSignalSourceError
from pynetif.state.events import ChangeSignal

SnapshotFn = Callable[[], Hashable]


def address_fingerprint() -> Hashable:
    """Set of (interface, family, address) triples currently assigned."""
    return frozenset(
        (name, int(addr.family), addr.address)
        for name, addrs in psutil.net_if_addrs().items()
        for addr in addrs
    )


def adapter_status_fingerprint() -> Hashable:
    """Up/down flag and link speed per interface."""
    return frozenset((name, stat.isup, stat.speed) for name, stat in psutil.net_if_stats().items())


class PollingSignalSource:
    """Threaded snapshot differ that emits one signal per observed change."""

    def __init__(
        self,
        *,
        loop: asyncio.AbstractEventLoop,
        signal: ChangeSignal,
        snapshot: SnapshotFn,
        on_signal: Callable[[ChangeSignal], None],
        interval: float = 1.0,
        logger: logging.Logger | None = None,
    ) -> None:
        self._loop = loop
        self._signal = signal
        self._snapshot = snapshot
        self._on_signal = on_signal
        self._interval = interval
        self._logger = logger or logging.getLogger(__name__)
        self._thread: threading.Thread | None = None
        self._stop = threading.Event()
        self._last: Hashable = None

    @property
    def signal(self) -> ChangeSignal:
        return self._signal

    @property
    def is_running(self) -> bool:
        """Whether the source thread is alive."""
        thread = self._thread
        return thread is not None and thread.is_alive()

    def start(self) -> None:
        """Take the baseline snapshot and start the watcher thread.

        Raises :class:`NetifSignalSourceError` when the baseline cannot be
        taken; the caller decides whether that is fatal.
        """
        self.stop()
        try:
            self._last = self._snapshot()
        except Exception as exc:
            raise NetifSignalSourceError(f"{self._signal} source unavailable: {exc}") from exc

        self._stop.clear()
        thread = threading.Thread(target=self._run, name=f"pynetif-{self._signal}", daemon=True)
        thread.start()
        self._thread = thread
        self._logger.debug("Signal source started: %s", self._signal)

    def stop(self) -> None:
        thread = self._thread
        self._thread = None
        if thread is None:
            return
        self._stop.set()
        if thread is not threading.current_thread():
            thread.join(timeout=self._interval * 2)
        self._logger.debug("Signal source stopped: %s", self._signal)

    def _run(self) -> None:
        while not self._stop.wait(self._interval):
            try:
                current = self._snapshot()
            except Exception:
                self._logger.debug("Signal snapshot failed: %s", self._signal, exc_info=True)
                continue
            if current == self._last:
                continue
            self._last = current
            try:
                self._loop.call_soon_threadsafe(self._on_signal, self._signal)
            except RuntimeError:
                # Loop already closed during shutdown.
                self._logger.debug("Dropping %s signal; loop closed", self._signal)
                return


def address_change_source(
    *,
    loop: asyncio.AbstractEventLoop,
    on_signal: Callable[[ChangeSignal], None],
    interval: float,
    logger: logging.Logger | None = None,
) -> PollingSignalSource:
    return PollingSignalSource(
        loop=loop,
        signal=ChangeSignal.ADDRESS_CHANGED,
        snapshot=address_fingerprint,
        on_signal=on_signal,
        interval=interval,
        logger=logger,
    )


def adapter_status_source(
    *,
    loop: asyncio.AbstractEventLoop,
    on_signal: Callable[[ChangeSignal], None],
    interval: float,
    logger: logging.Logger | None = None,
) -> PollingSignalSource:
    return PollingSignalSource(
        loop=loop,
        signal=ChangeSignal.ADAPTER_STATUS_CHANGED,
        snapshot=adapter_status_fingerprint,
        on_signal=on_signal,
        interval=interval,
        logger=logger,
    )
