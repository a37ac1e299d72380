"""High-level async facade tying signals, engine and commands together."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Iterable
from typing import Any

from pynetif._process import CommandRunner, SubprocessRunner
from pynetif._signals import PollingSignalSource, adapter_status_source, address_change_source
from pynetif.commands import CommandExecutor, NetshCommandExecutor
from pynetif.config import NetifConfig
from pynetif.engine import ReconciliationEngine
from pynetif.exceptions import NetifCommandError, NetifError, NetifSignalSourceError
from pynetif.ingestion.enrich import Enricher, PsutilEnricher
from pynetif.ingestion.inventory import (
    InterfaceProber,
    InventoryFetcher,
    NetshInterfaceProber,
    NetshInventoryFetcher,
)
from pynetif.models.interface import InterfaceRecord
from pynetif.models.profile import WifiProfile
from pynetif.publisher import StatePublisher
from pynetif.state.events import ChangeSignal, SettleEvent

_logger = logging.getLogger(__name__)


class NetifManager:
    """Async manager for host network interfaces.

    Usage::

        async with NetifManager(on_settled=print) as manager:
            await manager.set_admin_state("Wi-Fi", True)
            ...

    Entering the context starts the engine, starts the change signal
    sources (best-effort) and performs an initial manual refresh.
    """

    def __init__(
        self,
        config: NetifConfig | None = None,
        *,
        fetcher: InventoryFetcher | None = None,
        prober: InterfaceProber | None = None,
        executor: CommandExecutor | None = None,
        enricher: Enricher | None = None,
        runner: CommandRunner | None = None,
        on_settled: Callable[[SettleEvent], None] | None = None,
        on_error: Callable[[NetifError], None] | None = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._config = config or NetifConfig.from_env()
        runner = runner or SubprocessRunner()
        if enricher is None and self._config.enrichment_enabled:
            enricher = PsutilEnricher()
        self._publisher = StatePublisher(on_settled=on_settled, on_error=on_error)
        self._executor = executor or NetshCommandExecutor(self._config, runner)
        self._engine = ReconciliationEngine(
            fetcher=fetcher or NetshInventoryFetcher(self._config, runner),
            prober=prober or NetshInterfaceProber(self._config, runner),
            publisher=self._publisher,
            config=self._config,
            enricher=enricher,
            clock=clock,
        )
        self._sources: list[PollingSignalSource] = []

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> NetifManager:
        await self.start()
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.stop()

    async def start(self) -> None:
        self._engine.start()
        if self._config.signals_enabled:
            self._start_signals()
        await self.refresh()

    async def stop(self) -> None:
        self._stop_signals()
        await self._engine.stop()

    # ------------------------------------------------------------------
    # Signal sources
    # ------------------------------------------------------------------

    def _start_signals(self) -> None:
        """Best-effort startup; manual refresh keeps working without sources."""
        loop = asyncio.get_running_loop()
        factories = [address_change_source]
        if self._config.adapter_events_enabled:
            factories.append(adapter_status_source)

        for factory in factories:
            source = factory(
                loop=loop,
                on_signal=self._on_signal,
                interval=self._config.signal_poll_interval,
                logger=_logger,
            )
            try:
                source.start()
            except NetifSignalSourceError as exc:
                _logger.warning("%s; automatic refresh from this source is disabled", exc)
                continue
            self._sources.append(source)

    def _stop_signals(self) -> None:
        sources = self._sources
        self._sources = []
        for source in sources:
            try:
                source.stop()
            except Exception:
                _logger.debug("Signal source stop failed", exc_info=True)

    def _on_signal(self, signal: ChangeSignal) -> None:
        """Handle a change signal on the owning loop."""
        _logger.debug("Change signal: %s", signal)
        self._engine.request_refresh()

    @property
    def signal_sources(self) -> tuple[ChangeSignal, ...]:
        """Signal sources currently running."""
        return tuple(source.signal for source in self._sources if source.is_running)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def engine(self) -> ReconciliationEngine:
        return self._engine

    @property
    def publisher(self) -> StatePublisher:
        return self._publisher

    def snapshot(self) -> tuple[InterfaceRecord, ...]:
        return self._engine.snapshot()

    async def refresh(self) -> SettleEvent | None:
        """Manual refresh: always publishes the current ground truth."""
        return await self._engine.refresh(manual=True)

    def subscribe(self, callback: Callable[[SettleEvent], None]) -> Callable[[], None]:
        return self._publisher.subscribe(callback)

    def subscribe_errors(self, callback: Callable[[NetifError], None]) -> Callable[[], None]:
        return self._publisher.subscribe_errors(callback)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    async def set_admin_state(self, name: str, enable: bool) -> None:
        """Enable or disable one interface.

        Failures are reported to error subscribers and re-raised.
        """
        try:
            await self._executor.set_admin_state(name, enable)
        except NetifCommandError as exc:
            self._publisher.report_error(exc)
            raise
        self._on_signal(ChangeSignal.COMMAND_COMPLETED)

    async def apply_admin_state(self, names: Iterable[str], enable: bool) -> dict[str, NetifCommandError | None]:
        """Enable or disable several interfaces, continuing past failures.

        Returns the outcome per name (``None`` on success). A single
        automatic refresh is requested afterwards.
        """
        outcomes: dict[str, NetifCommandError | None] = {}
        for name in names:
            try:
                await self._executor.set_admin_state(name, enable)
            except NetifCommandError as exc:
                self._publisher.report_error(exc)
                outcomes[name] = exc
            else:
                outcomes[name] = None
        if any(outcome is None for outcome in outcomes.values()):
            self._on_signal(ChangeSignal.COMMAND_COMPLETED)
        return outcomes

    async def connect(self, name: str, profile: str | None = None) -> None:
        try:
            await self._executor.set_connection_state(name, profile, True)
        except NetifCommandError as exc:
            self._publisher.report_error(exc)
            raise
        self._on_signal(ChangeSignal.COMMAND_COMPLETED)

    async def disconnect(self, name: str) -> None:
        try:
            await self._executor.set_connection_state(name, None, False)
        except NetifCommandError as exc:
            self._publisher.report_error(exc)
            raise
        self._on_signal(ChangeSignal.COMMAND_COMPLETED)

    async def list_wifi_profiles(self, interface: str | None = None) -> list[WifiProfile]:
        try:
            return await self._executor.list_wifi_profiles(interface)
        except NetifCommandError as exc:
            self._publisher.report_error(exc)
            raise
