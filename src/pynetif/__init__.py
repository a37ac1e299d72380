"""pynetif - Async monitoring and toggling of host network interfaces."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pynetif")
except PackageNotFoundError:
    __version__ = "0+local"
from pynetif.client import NetifManager
from pynetif.commands import NetshCommandExecutor
from pynetif.config import NetifConfig
from pynetif.debounce import DebounceGate
from pynetif.engine import EngineMode, InterfaceState, ReconciliationEngine
from pynetif.exceptions import (
    ElevationDeniedError,
    NetifCommandError,
    NetifConfigError,
    NetifError,
    NetifFetchError,
    NetifProbeError,
    NetifSignalSourceError,
    NonZeroExitError,
    ProcessFailedToStartError,
)
from pynetif.models import AdminState, InterfaceRecord, WifiProfile
from pynetif.publisher import StatePublisher
from pynetif.state.events import ChangeSignal, SettleEvent, SettleTrigger

__all__ = [
    "__version__",
    "AdminState",
    "ChangeSignal",
    "DebounceGate",
    "ElevationDeniedError",
    "EngineMode",
    "InterfaceRecord",
    "InterfaceState",
    "NetifCommandError",
    "NetifConfig",
    "NetifConfigError",
    "NetifError",
    "NetifFetchError",
    "NetifManager",
    "NetifProbeError",
    "NetifSignalSourceError",
    "NetshCommandExecutor",
    "NonZeroExitError",
    "ProcessFailedToStartError",
    "ReconciliationEngine",
    "SettleEvent",
    "SettleTrigger",
    "StatePublisher",
    "WifiProfile",
]
