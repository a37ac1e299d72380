from __future__ import annotations

from typing import Any

import pytest

from pynetif import cli
from pynetif.client import NetifManager
from pynetif.config import NetifConfig
from pynetif.exceptions import NetifFetchError
from pynetif.models.interface import InterfaceRecord


def test_format_table_lists_records() -> None:
    table = cli.format_table(
        [
            InterfaceRecord(
                name="Ethernet 2",
                admin_state="Enabled",
                operational_state="Connected",
                interface_type="Dedicated",
                speed_mbps=1000,
                mac_address="AA:BB:CC:DD:EE:FF",
            ),
            InterfaceRecord(name="Wi-Fi", admin_state="Disabled", operational_state="Disconnected"),
        ]
    )

    lines = table.splitlines()
    assert lines[0].startswith("Name")
    assert set(lines[1]) == {"-"}
    assert lines[2].split() == ["Ethernet", "2", "Enabled", "Connected", "Dedicated", "1000", "AA:BB:CC:DD:EE:FF"]
    assert lines[3].split() == ["Wi-Fi", "Disabled", "Disconnected"]


def test_subcommand_is_required(capsys: pytest.CaptureFixture[str]) -> None:
    with pytest.raises(SystemExit):
        cli.main([])
    assert "usage" in capsys.readouterr().err


def test_config_error_exits_with_code_two(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("NETIF_POLL_TIMEOUT", "-1")

    assert cli.main(["list"]) == 2
    assert "poll_timeout" in capsys.readouterr().err


class _Fetcher:
    def __init__(self, records: list[InterfaceRecord] | None) -> None:
        self._records = records

    async def fetch_inventory(self) -> list[InterfaceRecord]:
        if self._records is None:
            raise NetifFetchError("netsh interface show interface failed")
        return self._records


class _Prober:
    async def probe(self, name: str) -> InterfaceRecord | None:  # pragma: no cover
        return None


def _patch_manager(monkeypatch: pytest.MonkeyPatch, records: list[InterfaceRecord] | None) -> None:
    def _factory(config: NetifConfig, **kwargs: Any) -> NetifManager:
        return NetifManager(config, fetcher=_Fetcher(records), prober=_Prober(), **kwargs)

    monkeypatch.setenv("NETIF_ENRICHMENT_ENABLED", "0")
    monkeypatch.setattr(cli, "NetifManager", _factory)


def test_list_fails_when_inventory_unavailable(
    monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    _patch_manager(monkeypatch, None)

    assert cli.main(["list"]) == 1
    captured = capsys.readouterr()
    assert "netsh interface show interface failed" in captured.err
    assert captured.out == ""


def test_list_prints_table(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    _patch_manager(monkeypatch, [InterfaceRecord(name="Ethernet", admin_state="Enabled", operational_state="Connected")])

    assert cli.main(["list"]) == 0
    assert "Ethernet" in capsys.readouterr().out
