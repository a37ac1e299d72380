"""Runtime configuration for pynetif."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pynetif.exceptions import NetifConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_float(env_key: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as exc:
        raise NetifConfigError(f"{env_key} must be a number, got {value!r}") from exc


@dataclasses.dataclass(frozen=True)
class NetifConfig:
    """Engine, signal and command tunables.

    Parameters
    ----------
    debounce_delay : float
        Seconds a burst of change signals is collapsed into one refresh.
    poll_interval : float
        Seconds between poll ticks while at least one interface is
        transitioning.
    poll_timeout : float
        Seconds after which a transitioning interface is force-settled with
        whatever state was last reported.
    command_timeout : float
        Seconds allowed for a single ``netsh`` invocation.
    netsh_path : str
        Executable used for inventory, probe and command calls.
    signals_enabled : bool
        Start the background change signal sources. When disabled only
        manual refreshes (and explicit ``request_refresh`` calls) update state.
    adapter_events_enabled : bool
        Start the adapter-status source in addition to the address-change
        source. It is an enhancement; startup failures are tolerated.
    signal_poll_interval : float
        Seconds between host snapshots taken by the signal source threads.
    enrichment_enabled : bool
        Fill MAC/speed/MTU from ``psutil`` after each inventory fetch.
    """

    debounce_delay: float = 0.25
    poll_interval: float = 0.5
    poll_timeout: float = 5.0
    command_timeout: float = 30.0
    netsh_path: str = "netsh"
    signals_enabled: bool = True
    adapter_events_enabled: bool = True
    signal_poll_interval: float = 1.0
    enrichment_enabled: bool = True

    def __post_init__(self) -> None:
        for field_name in ("debounce_delay", "poll_interval", "poll_timeout", "command_timeout", "signal_poll_interval"):
            value = getattr(self, field_name)
            if value <= 0:
                raise NetifConfigError(f"{field_name} must be positive, got {value!r}")
        if not self.netsh_path.strip():
            raise NetifConfigError("netsh_path must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> NetifConfig:
        """Create configuration from ``NETIF_*`` environment variables.

        Explicit keyword arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        NetifConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_FLOAT_MAP = {
            "NETIF_DEBOUNCE_DELAY": "debounce_delay",
            "NETIF_POLL_INTERVAL": "poll_interval",
            "NETIF_POLL_TIMEOUT": "poll_timeout",
            "NETIF_COMMAND_TIMEOUT": "command_timeout",
            "NETIF_SIGNAL_POLL_INTERVAL": "signal_poll_interval",
        }
        _ENV_BOOL_MAP = {
            "NETIF_SIGNALS_ENABLED": ("signals_enabled", True),
            "NETIF_ADAPTER_EVENTS_ENABLED": ("adapter_events_enabled", True),
            "NETIF_ENRICHMENT_ENABLED": ("enrichment_enabled", True),
        }

        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        for env_key, (field_name, default) in _ENV_BOOL_MAP.items():
            if field_name not in overrides:
                config_kwargs[field_name] = _env_bool(env.get(env_key), default)

        netsh_env = env.get("NETIF_NETSH_PATH")
        if netsh_env is not None and "netsh_path" not in overrides:
            config_kwargs["netsh_path"] = netsh_env

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
