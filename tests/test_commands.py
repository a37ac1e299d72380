from __future__ import annotations

from collections.abc import Sequence

import pytest

from pynetif._process import CommandOutput
from pynetif.commands import NetshCommandExecutor
from pynetif.config import NetifConfig
from pynetif.exceptions import (
    ElevationDeniedError,
    NetifCommandError,
    NonZeroExitError,
    ProcessFailedToStartError,
)


class _FakeRunner:
    def __init__(self, output: CommandOutput | Exception) -> None:
        self._output = output
        self.calls: list[tuple[str, ...]] = []

    async def run(self, args: Sequence[str], *, timeout: float) -> CommandOutput:
        self.calls.append(tuple(args))
        if isinstance(self._output, Exception):
            raise self._output
        return self._output


def _ok(stdout: str = "") -> CommandOutput:
    return CommandOutput(args=("netsh",), returncode=0, stdout=stdout)


def _failed(returncode: int, stdout: str) -> CommandOutput:
    return CommandOutput(args=("netsh",), returncode=returncode, stdout=stdout)


def _executor(runner: _FakeRunner) -> NetshCommandExecutor:
    return NetshCommandExecutor(NetifConfig(), runner)


@pytest.mark.asyncio
async def test_set_admin_state_builds_netsh_arguments() -> None:
    runner = _FakeRunner(_ok())

    await _executor(runner).set_admin_state("Ethernet 2", True)
    await _executor(runner).set_admin_state("Ethernet 2", False)

    assert runner.calls == [
        ("netsh", "interface", "set", "interface", "name=Ethernet 2", "admin=enable"),
        ("netsh", "interface", "set", "interface", "name=Ethernet 2", "admin=disable"),
    ]


@pytest.mark.asyncio
async def test_connect_defaults_profile_to_interface_name() -> None:
    runner = _FakeRunner(_ok())

    await _executor(runner).set_connection_state("Wi-Fi", None, True)
    await _executor(runner).set_connection_state("Wi-Fi", "HomeNet", True)
    await _executor(runner).set_connection_state("Wi-Fi", None, False)

    assert runner.calls == [
        ("netsh", "wlan", "connect", "name=Wi-Fi", "interface=Wi-Fi"),
        ("netsh", "wlan", "connect", "name=HomeNet", "interface=Wi-Fi"),
        ("netsh", "wlan", "disconnect", "interface=Wi-Fi"),
    ]


@pytest.mark.asyncio
async def test_elevation_output_maps_to_elevation_denied() -> None:
    runner = _FakeRunner(_failed(1, "The requested operation requires elevation (Run as administrator)."))

    with pytest.raises(ElevationDeniedError) as exc_info:
        await _executor(runner).set_admin_state("Wi-Fi", False)

    assert exc_info.value.command == "disable"
    assert exc_info.value.interface == "Wi-Fi"


@pytest.mark.asyncio
async def test_other_failures_map_to_non_zero_exit() -> None:
    runner = _FakeRunner(_failed(14, "The system cannot find the file specified."))

    with pytest.raises(NonZeroExitError) as exc_info:
        await _executor(runner).set_admin_state("Wi-Fi", True)

    assert exc_info.value.exit_code == 14
    assert "cannot find the file" in exc_info.value.output


@pytest.mark.asyncio
async def test_start_failure_carries_command_context() -> None:
    runner = _FakeRunner(ProcessFailedToStartError("Failed to start 'netsh'", command="netsh"))

    with pytest.raises(ProcessFailedToStartError) as exc_info:
        await _executor(runner).set_connection_state("Wi-Fi", None, False)

    assert isinstance(exc_info.value, NetifCommandError)
    assert exc_info.value.command == "netsh"
    assert exc_info.value.interface == "Wi-Fi"


@pytest.mark.asyncio
async def test_list_wifi_profiles() -> None:
    runner = _FakeRunner(
        _ok(
            "Profiles on interface Wi-Fi:\n\n"
            "User profiles\n-------------\n"
            "    All User Profile     : HomeNet\n"
        )
    )

    profiles = await _executor(runner).list_wifi_profiles("Wi-Fi")

    assert runner.calls == [("netsh", "wlan", "show", "profiles", "interface=Wi-Fi")]
    assert [(p.name, p.interface) for p in profiles] == [("HomeNet", "Wi-Fi")]
