"""Custom exception hierarchy for pynetif."""

from __future__ import annotations


class NetifError(Exception):
    """Base exception for all pynetif errors."""


class NetifConfigError(NetifError):
    """Invalid or missing configuration."""


class NetifFetchError(NetifError):
    """The full interface inventory could not be queried."""

    def __init__(self, message: str, *, output: str = "") -> None:
        self.output = output
        super().__init__(message)


class NetifProbeError(NetifError):
    """A single-interface state query failed.

    The engine treats this as "cannot confirm settle yet"; the poll entry
    keeps running until it settles or times out.
    """

    def __init__(self, message: str, *, interface: str = "", output: str = "") -> None:
        self.interface = interface
        self.output = output
        super().__init__(message)


class NetifSignalSourceError(NetifError):
    """A change signal source could not be started."""


class NetifCommandError(NetifError):
    """A state-change command failed.

    Raised by the command executor only; it never alters engine state.
    """

    def __init__(
        self,
        message: str,
        *,
        command: str = "",
        interface: str = "",
        output: str = "",
    ) -> None:
        self.command = command
        self.interface = interface
        self.output = output
        super().__init__(message)


class ElevationDeniedError(NetifCommandError):
    """The command requires administrator rights that were not granted."""


class ProcessFailedToStartError(NetifCommandError):
    """The command executable could not be launched (missing, not permitted)."""


class NonZeroExitError(NetifCommandError):
    """The command ran but exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        *,
        exit_code: int,
        command: str = "",
        interface: str = "",
        output: str = "",
    ) -> None:
        self.exit_code = exit_code
        super().__init__(message, command=command, interface=interface, output=output)
