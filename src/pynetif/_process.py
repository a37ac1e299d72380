"""Subprocess runner used by the netsh-backed leaves.

Every external query or command goes through a :class:`CommandRunner`, so
tests can pass a fake and the asyncio loop is never blocked on a child
process.
"""

from __future__ import annotations

import asyncio
import contextlib
import locale
import logging
import sys
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

from pynetif.exceptions import NetifCommandError, ProcessFailedToStartError

_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CommandOutput:
    """Captured result of one finished process."""

    args: tuple[str, ...]
    returncode: int
    stdout: str
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    @property
    def combined(self) -> str:
        if self.stderr:
            return f"{self.stdout}\n{self.stderr}".strip()
        return self.stdout.strip()


class CommandRunner(Protocol):
    """Structural runner interface.

    Having a protocol here makes it easy to pass test doubles while keeping
    the production implementation (:class:`SubprocessRunner`) concrete.
    """

    async def run(self, args: Sequence[str], *, timeout: float) -> CommandOutput: ...


def console_encoding() -> str:
    """Encoding console tools such as netsh write to a pipe.

    On Windows that is the OEM code page, not the ANSI one
    :func:`locale.getpreferredencoding` reports.
    """
    if sys.platform == "win32":
        return "oem"
    return locale.getpreferredencoding(False) or "utf-8"


class SubprocessRunner:
    """Run commands with :func:`asyncio.create_subprocess_exec`."""

    def __init__(self, encoding: str | None = None) -> None:
        self._encoding = encoding or console_encoding()

    async def run(self, args: Sequence[str], *, timeout: float) -> CommandOutput:
        argv = tuple(args)
        command = " ".join(argv)
        _logger.debug("Running command: %s", command)
        try:
            process = await asyncio.create_subprocess_exec(
                *argv,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise ProcessFailedToStartError(
                f"Failed to start {argv[0]!r}: {exc}",
                command=command,
            ) from exc

        try:
            stdout, stderr = await asyncio.wait_for(process.communicate(), timeout)
        except TimeoutError as exc:
            with contextlib.suppress(ProcessLookupError):
                process.kill()
            await process.wait()
            raise NetifCommandError(f"Command timed out after {timeout:g}s: {command}", command=command) from exc

        returncode = process.returncode if process.returncode is not None else -1
        output = CommandOutput(args=argv, returncode=returncode, stdout=self._decode(stdout), stderr=self._decode(stderr))
        _logger.debug("Command finished rc=%s: %s", output.returncode, command)
        return output

    def _decode(self, data: bytes) -> str:
        return data.decode(self._encoding, errors="replace")
