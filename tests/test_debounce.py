from __future__ import annotations

import asyncio
import threading

import pytest

from pynetif.debounce import DebounceGate


@pytest.mark.asyncio
async def test_burst_yields_single_trigger() -> None:
    fired: list[float] = []
    loop = asyncio.get_running_loop()
    gate = DebounceGate(loop=loop, on_trigger=lambda: fired.append(loop.time()), delay=0.02)

    started = loop.time()
    scheduled = [gate.notify() for _ in range(50)]
    await asyncio.sleep(0.1)

    assert scheduled[0] is True
    assert not any(scheduled[1:])
    assert len(fired) == 1
    assert fired[0] - started >= 0.02
    assert not gate.pending


@pytest.mark.asyncio
async def test_notify_after_fire_schedules_again() -> None:
    fired: list[int] = []
    gate = DebounceGate(loop=asyncio.get_running_loop(), on_trigger=lambda: fired.append(1), delay=0.01)

    gate.notify()
    await asyncio.sleep(0.05)
    assert gate.notify() is True
    await asyncio.sleep(0.05)

    assert len(fired) == 2


@pytest.mark.asyncio
async def test_cancel_drops_pending_trigger() -> None:
    fired: list[int] = []
    gate = DebounceGate(loop=asyncio.get_running_loop(), on_trigger=lambda: fired.append(1), delay=0.01)

    gate.notify()
    assert gate.pending
    gate.cancel()
    await asyncio.sleep(0.05)

    assert fired == []
    assert not gate.pending


@pytest.mark.asyncio
async def test_notifications_from_foreign_threads_collapse() -> None:
    fired: list[int] = []
    fired_on: list[int] = []
    gate = DebounceGate(
        loop=asyncio.get_running_loop(),
        on_trigger=lambda: (fired.append(1), fired_on.append(threading.get_ident())),
        delay=0.05,
    )

    threads = [threading.Thread(target=gate.notify_threadsafe) for _ in range(10)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()
    await asyncio.sleep(0.2)

    assert len(fired) == 1
    assert fired_on == [threading.get_ident()]


@pytest.mark.asyncio
async def test_trigger_exception_keeps_gate_usable() -> None:
    calls: list[int] = []

    def _trigger() -> None:
        calls.append(1)
        raise RuntimeError("refresh scheduling failed")

    gate = DebounceGate(loop=asyncio.get_running_loop(), on_trigger=_trigger, delay=0.01)

    gate.notify()
    await asyncio.sleep(0.05)
    gate.notify()
    await asyncio.sleep(0.05)

    assert len(calls) == 2
