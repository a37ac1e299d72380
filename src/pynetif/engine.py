"""Debounced polling-reconciliation engine.

The engine owns the last-known interface table and the set of interfaces
in an unsettled transition. All of its state is touched from one asyncio
loop; :meth:`ReconciliationEngine.refresh` and
:meth:`ReconciliationEngine.poll_tick` are serialized by a single lock.

After an interface is enabled, the OS reports
``Enabled`` immediately but ``Connected`` only once link negotiation
finishes. Automatic refreshes therefore hold back the visible update
until the transition is complete (or abandoned by timeout), whereas a
manual refresh always publishes the instantaneous truth.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import time
from collections.abc import Callable, Sequence
from enum import StrEnum

from pynetif.config import NetifConfig
from pynetif.debounce import DebounceGate
from pynetif.exceptions import NetifFetchError, NetifProbeError
from pynetif.ingestion.enrich import Enricher
from pynetif.ingestion.inventory import InterfaceProber, InventoryFetcher
from pynetif.models.interface import InterfaceRecord
from pynetif.publisher import StatePublisher
from pynetif.state.events import SettleEvent, SettleTrigger
from pynetif.state.policy import STABLE_OPERATIONAL_STATES, is_settled, is_timed_out, starts_transition
from pynetif.state.polling import PollSet
from pynetif.state.table import LastKnownTable

_logger = logging.getLogger(__name__)


class InterfaceState(StrEnum):
    STABLE = "stable"
    POLLING = "polling"


class EngineMode(StrEnum):
    IDLE = "idle"
    REFRESHING = "refreshing"


class ReconciliationEngine:
    """Reconcile change signals with slow-to-settle interface queries.

    Usage::

        engine = ReconciliationEngine(fetcher=..., prober=..., publisher=...)
        engine.start()            # inside a running loop
        await engine.refresh(manual=True)
        ...
        await engine.stop()
    """

    def __init__(
        self,
        *,
        fetcher: InventoryFetcher,
        prober: InterfaceProber,
        publisher: StatePublisher,
        config: NetifConfig | None = None,
        enricher: Enricher | None = None,
        clock: Callable[[], float] = time.monotonic,
        stable_states: frozenset[str] = STABLE_OPERATIONAL_STATES,
    ) -> None:
        self._fetcher = fetcher
        self._prober = prober
        self._publisher = publisher
        self._config = config or NetifConfig()
        self._enricher = enricher
        self._clock = clock
        self._stable_states = stable_states

        self._table = LastKnownTable()
        self._polls = PollSet()
        self._pending: list[InterfaceRecord] | None = None
        self._lock = asyncio.Lock()
        self._mode = EngineMode.IDLE
        self._gate: DebounceGate | None = None
        self._poll_task: asyncio.Task[None] | None = None
        self._refresh_tasks: set[asyncio.Task[SettleEvent | None]] = set()

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def start(self) -> None:
        """Bind the debounce gate to the running loop."""
        if self._gate is not None:
            return
        loop = asyncio.get_running_loop()
        self._gate = DebounceGate(loop=loop, on_trigger=self._on_debounced, delay=self._config.debounce_delay)

    async def stop(self) -> None:
        """Cancel the pending trigger, the poll loop and in-flight refreshes."""
        gate = self._gate
        self._gate = None
        if gate is not None:
            gate.cancel()

        tasks: list[asyncio.Task[object]] = list(self._refresh_tasks)
        if self._poll_task is not None:
            tasks.append(self._poll_task)
        self._poll_task = None
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        self._refresh_tasks.clear()
        self._polls.clear()
        self._pending = None

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @property
    def mode(self) -> EngineMode:
        return self._mode

    @property
    def gate(self) -> DebounceGate | None:
        return self._gate

    @property
    def polling_names(self) -> tuple[str, ...]:
        return self._polls.names()

    @property
    def is_polling(self) -> bool:
        task = self._poll_task
        return task is not None and not task.done()

    def interface_state(self, name: str) -> InterfaceState:
        return InterfaceState.POLLING if name in self._polls else InterfaceState.STABLE

    def snapshot(self) -> tuple[InterfaceRecord, ...]:
        """Current last-known table (read-only records)."""
        return self._table.snapshot()

    # ------------------------------------------------------------------
    # Triggers
    # ------------------------------------------------------------------

    def request_refresh(self) -> None:
        """Ask for an automatic refresh through the debounce gate."""
        if self._gate is None:
            _logger.debug("Refresh requested before start(); ignoring")
            return
        self._gate.notify()

    def request_refresh_threadsafe(self) -> None:
        """Same as :meth:`request_refresh`, callable from any thread."""
        gate = self._gate
        if gate is None:
            return
        gate.notify_threadsafe()

    def _on_debounced(self) -> None:
        task = asyncio.get_running_loop().create_task(self.refresh(manual=False), name="pynetif-refresh")
        self._refresh_tasks.add(task)
        task.add_done_callback(self._refresh_tasks.discard)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    async def refresh(self, manual: bool = False) -> SettleEvent | None:
        """Fetch the inventory and publish it, or defer to polling.

        Returns the published event, or ``None`` when the fetch failed or
        the publish was deferred because a transition started.
        """
        async with self._lock:
            self._mode = EngineMode.REFRESHING
            try:
                return await self._refresh_locked(manual)
            finally:
                self._mode = EngineMode.IDLE

    async def _refresh_locked(self, manual: bool) -> SettleEvent | None:
        try:
            fetched = await self._fetcher.fetch_inventory()
        except NetifFetchError as exc:
            self._publisher.report_error(exc)
            return None
        except Exception as exc:
            _logger.debug("Inventory fetcher raised unexpectedly", exc_info=True)
            self._publisher.report_error(NetifFetchError(f"Inventory query failed: {exc}"))
            return None

        now = self._clock()
        started: list[str] = []
        for record in fetched:
            if starts_transition(self._table.get(record.name), record) and self._polls.add(record.name, now):
                started.append(record.name)

        if started:
            _logger.debug("Transition detected, polling: %s", started)
            self._ensure_poll_loop()
            if not manual:
                self._pending = list(fetched)
                return None

        self._pending = None
        records = await self._enrich(fetched)
        self._table.replace(records)
        event = SettleEvent(
            interfaces=self._table.snapshot(),
            trigger=SettleTrigger.MANUAL if manual else SettleTrigger.AUTOMATIC,
        )
        self._publisher.publish(event)
        return event

    async def _enrich(self, records: Sequence[InterfaceRecord]) -> list[InterfaceRecord]:
        if self._enricher is None:
            return list(records)
        try:
            return await asyncio.to_thread(self._enricher.enrich, records)
        except Exception:
            _logger.debug("Enrichment failed; publishing unenriched records", exc_info=True)
            return list(records)

    # ------------------------------------------------------------------
    # Polling
    # ------------------------------------------------------------------

    def _ensure_poll_loop(self) -> None:
        task = self._poll_task
        if task is not None and not task.done():
            return
        self._poll_task = asyncio.get_running_loop().create_task(self._poll_loop(), name="pynetif-poll")

    async def _poll_loop(self) -> None:
        _logger.debug("Poll loop started")
        while self._polls:
            await asyncio.sleep(self._config.poll_interval)
            try:
                await self.poll_tick()
            except Exception:
                _logger.debug("Poll tick failed", exc_info=True)
        _logger.debug("Poll loop stopped")

    async def poll_tick(self) -> SettleEvent | None:
        """Probe every polled interface once.

        Returns the consolidated settle event, or ``None`` when nothing
        settled during this tick.
        """
        async with self._lock:
            return await self._poll_tick_locked()

    async def _poll_tick_locked(self) -> SettleEvent | None:
        if not self._polls:
            return None

        settled: list[str] = []
        merges: list[InterfaceRecord] = []
        removed: list[str] = []
        for entry in self._polls:
            latest: InterfaceRecord | None = None
            probed = False
            try:
                latest = await self._prober.probe(entry.name)
                probed = True
            except NetifProbeError:
                _logger.debug("Probe failed for %s; waiting for timeout", entry.name, exc_info=True)
            except Exception:
                _logger.debug("Prober raised unexpectedly for %s", entry.name, exc_info=True)

            if probed and latest is None:
                _logger.debug("Polled interface disappeared: %s", entry.name)
                self._polls.discard(entry.name)
                removed.append(entry.name)
                settled.append(entry.name)
                continue

            if latest is not None and is_settled(latest, self._stable_states):
                _logger.debug("Interface settled: %s (%s)", entry.name, latest.operational_state)
            elif is_timed_out(self._clock(), entry.started_at, self._config.poll_timeout):
                _logger.info(
                    "Interface %s did not settle within %.1fs; accepting current state",
                    entry.name,
                    self._config.poll_timeout,
                )
            else:
                continue

            self._polls.discard(entry.name)
            if latest is not None:
                merges.append(latest)
            settled.append(entry.name)

        if not settled:
            return None

        # The deferred inventory becomes the table before probe results apply.
        pending = self._pending
        self._pending = None
        if pending is not None:
            self._table.replace(await self._enrich(pending))
        for latest in merges:
            self._table.merge_states(latest)
        for name in removed:
            self._table.remove(name)

        event = SettleEvent(
            interfaces=self._table.snapshot(),
            trigger=SettleTrigger.POLL,
            settled=tuple(settled),
        )
        self._publisher.publish(event)
        return event

