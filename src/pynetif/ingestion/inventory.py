"""Inventory fetcher and single-interface prober.

The engine only depends on the :class:`InventoryFetcher` and
:class:`InterfaceProber` protocols; the ``netsh`` classes are the default
Windows implementations.
"""

from __future__ import annotations

import logging
from typing import Protocol

from pynetif._process import CommandRunner, SubprocessRunner
from pynetif.config import NetifConfig
from pynetif.exceptions import NetifCommandError, NetifFetchError, NetifProbeError
from pynetif.ingestion.netsh import is_not_found_output, parse_interface_detail, parse_interface_table
from pynetif.models.interface import InterfaceRecord

_logger = logging.getLogger(__name__)


class InventoryFetcher(Protocol):
    async def fetch_inventory(self) -> list[InterfaceRecord]:
        """Return every interface, or raise :class:`NetifFetchError`."""
        ...


class InterfaceProber(Protocol):
    async def probe(self, name: str) -> InterfaceRecord | None:
        """Return the named interface, ``None`` if it does not exist.

        Raises :class:`NetifProbeError` when the state cannot be queried.
        """
        ...


class NetshInventoryFetcher:
    """``netsh interface show interface``."""

    def __init__(self, config: NetifConfig, runner: CommandRunner | None = None) -> None:
        self._config = config
        self._runner = runner or SubprocessRunner()

    async def fetch_inventory(self) -> list[InterfaceRecord]:
        args = (self._config.netsh_path, "interface", "show", "interface")
        try:
            output = await self._runner.run(args, timeout=self._config.command_timeout)
        except NetifCommandError as exc:
            raise NetifFetchError(f"Inventory query failed: {exc}") from exc

        if not output.ok:
            raise NetifFetchError(
                f"Inventory query exited with code {output.returncode}",
                output=output.combined,
            )
        records = parse_interface_table(output.stdout)
        _logger.debug("Inventory fetched: %d interface(s)", len(records))
        return records


class NetshInterfaceProber:
    """``netsh interface show interface name="<name>"``."""

    def __init__(self, config: NetifConfig, runner: CommandRunner | None = None) -> None:
        self._config = config
        self._runner = runner or SubprocessRunner()

    async def probe(self, name: str) -> InterfaceRecord | None:
        args = (self._config.netsh_path, "interface", "show", "interface", f"name={name}")
        try:
            output = await self._runner.run(args, timeout=self._config.command_timeout)
        except NetifCommandError as exc:
            raise NetifProbeError(f"Probe for {name!r} failed: {exc}", interface=name) from exc

        if is_not_found_output(output.combined):
            return None
        if not output.ok:
            raise NetifProbeError(
                f"Probe for {name!r} exited with code {output.returncode}",
                interface=name,
                output=output.combined,
            )
        record = parse_interface_detail(output.stdout, name)
        if record is None:
            raise NetifProbeError(f"Probe for {name!r} returned no state", interface=name, output=output.combined)
        return record
