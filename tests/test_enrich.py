from __future__ import annotations

import socket
from types import SimpleNamespace

import pytest

from pynetif.ingestion import enrich
from pynetif.ingestion.enrich import PsutilEnricher
from pynetif.models.interface import InterfaceRecord

_LINK = next(iter(enrich._LINK_FAMILIES))  # noqa: SLF001


def test_enrich_fills_missing_fields(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        enrich.psutil,
        "net_if_stats",
        lambda: {"ethernet": SimpleNamespace(isup=True, speed=1000, mtu=1500)},
    )
    monkeypatch.setattr(
        enrich.psutil,
        "net_if_addrs",
        lambda: {
            "Ethernet": [
                SimpleNamespace(family=socket.AF_INET, address="10.0.0.5"),
                SimpleNamespace(family=_LINK, address="aa-bb-cc-dd-ee-ff"),
            ]
        },
    )
    records = [
        InterfaceRecord(name="Ethernet", admin_state="Enabled", operational_state="Connected"),
        InterfaceRecord(name="Wi-Fi", admin_state="Disabled", operational_state="Disconnected"),
    ]

    enriched = PsutilEnricher().enrich(records)

    assert enriched[0].speed_mbps == 1000
    assert enriched[0].mtu == 1500
    assert enriched[0].mac_address == "AA:BB:CC:DD:EE:FF"
    assert enriched[1] is records[1]


def test_enrich_keeps_zero_speed_unset(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(enrich.psutil, "net_if_stats", lambda: {"Wi-Fi": SimpleNamespace(isup=False, speed=0, mtu=0)})
    monkeypatch.setattr(enrich.psutil, "net_if_addrs", lambda: {})
    record = InterfaceRecord(name="Wi-Fi", admin_state="Disabled")

    assert PsutilEnricher().enrich([record]) == [record]


def test_enrich_failure_returns_records_unchanged(monkeypatch: pytest.MonkeyPatch) -> None:
    def _boom() -> dict[str, object]:
        raise OSError("no access")

    monkeypatch.setattr(enrich.psutil, "net_if_stats", _boom)
    record = InterfaceRecord(name="Ethernet", admin_state="Enabled")

    assert PsutilEnricher().enrich([record]) == [record]
