"""Elevated state-change commands.

The executor is independent from the reconciliation engine: a command
returning successfully only means ``netsh`` accepted it. The interface
settles later, which the engine picks up through polling.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Protocol

from pynetif._process import CommandOutput, CommandRunner, SubprocessRunner
from pynetif.config import NetifConfig
from pynetif.exceptions import ElevationDeniedError, NetifCommandError, NonZeroExitError
from pynetif.ingestion.netsh import parse_wifi_profiles
from pynetif.models.profile import WifiProfile

_logger = logging.getLogger(__name__)

_ELEVATION_MARKERS = (
    "requires elevation",
    "run as administrator",
    "access is denied",
    "operation was canceled by the user",
)


class CommandExecutor(Protocol):
    async def set_admin_state(self, name: str, enable: bool) -> None: ...

    async def set_connection_state(self, name: str, profile: str | None, connect: bool) -> None: ...

    async def list_wifi_profiles(self, interface: str | None = None) -> list[WifiProfile]: ...


def _raise_for_output(output: CommandOutput, *, command: str, interface: str) -> None:
    if output.ok:
        return
    text = output.combined
    folded = text.casefold()
    if any(marker in folded for marker in _ELEVATION_MARKERS):
        raise ElevationDeniedError(
            f"Administrator rights are required to {command} {interface!r}",
            command=command,
            interface=interface,
            output=text,
        )
    raise NonZeroExitError(
        f"netsh failed to {command} {interface!r} (exit code {output.returncode})",
        exit_code=output.returncode,
        command=command,
        interface=interface,
        output=text,
    )


class NetshCommandExecutor:
    """Issue ``netsh`` admin and WLAN commands.

    The process must already run elevated for admin changes; netsh reports
    missing rights in its output, which is mapped to
    :class:`ElevationDeniedError`.
    """

    def __init__(self, config: NetifConfig, runner: CommandRunner | None = None) -> None:
        self._config = config
        self._runner = runner or SubprocessRunner()

    async def _run(self, args: Sequence[str], *, command: str, interface: str) -> CommandOutput:
        argv = (self._config.netsh_path, *args)
        try:
            output = await self._runner.run(argv, timeout=self._config.command_timeout)
        except NetifCommandError as exc:
            exc.command = exc.command or command
            exc.interface = exc.interface or interface
            raise
        _raise_for_output(output, command=command, interface=interface)
        return output

    async def set_admin_state(self, name: str, enable: bool) -> None:
        """Enable or disable an interface."""
        command = "enable" if enable else "disable"
        _logger.debug("Setting admin state %s for %s", command, name)
        await self._run(
            ("interface", "set", "interface", f"name={name}", f"admin={command}"),
            command=command,
            interface=name,
        )

    async def set_connection_state(self, name: str, profile: str | None, connect: bool) -> None:
        """Connect a wireless interface to *profile*, or disconnect it.

        ``profile`` defaults to the interface name when connecting, matching
        how Windows names the auto-created profile of a network.
        """
        if connect:
            profile_name = profile or name
            _logger.debug("Connecting %s using profile %s", name, profile_name)
            await self._run(
                ("wlan", "connect", f"name={profile_name}", f"interface={name}"),
                command="connect",
                interface=name,
            )
            return
        _logger.debug("Disconnecting %s", name)
        await self._run(("wlan", "disconnect", f"interface={name}"), command="disconnect", interface=name)

    async def list_wifi_profiles(self, interface: str | None = None) -> list[WifiProfile]:
        """Saved WLAN profiles, optionally limited to one interface."""
        args: tuple[str, ...] = ("wlan", "show", "profiles")
        if interface:
            args = (*args, f"interface={interface}")
        output = await self._run(args, command="list profiles", interface=interface or "")
        return parse_wifi_profiles(output.stdout)
