"""Optional enrichment of inventory records.

Enrichment never blocks state tracking: any failure leaves the records as
fetched.
"""

from __future__ import annotations

import logging
import socket
from collections.abc import Sequence
from typing import Any, Protocol

import psutil

from pynetif.models.interface import InterfaceRecord

_logger = logging.getLogger(__name__)

_LINK_FAMILIES = {
    family
    for family in (getattr(psutil, "AF_LINK", None), getattr(socket, "AF_PACKET", None))
    if family is not None
}


class Enricher(Protocol):
    def enrich(self, records: Sequence[InterfaceRecord]) -> list[InterfaceRecord]: ...


def _mac_address(addrs: Sequence[Any]) -> str | None:
    for addr in addrs:
        if addr.family in _LINK_FAMILIES and addr.address:
            return str(addr.address).replace("-", ":").upper()
    return None


class PsutilEnricher:
    """Fill MAC address, link speed and MTU from :mod:`psutil`.

    psutil keys interfaces by the same friendly name netsh reports, so
    lookup is by case-insensitive name. Fields already present on a record
    are kept.
    """

    def enrich(self, records: Sequence[InterfaceRecord]) -> list[InterfaceRecord]:
        try:
            stats = {name.casefold(): value for name, value in psutil.net_if_stats().items()}
            addrs = {name.casefold(): value for name, value in psutil.net_if_addrs().items()}
        except Exception:
            _logger.debug("psutil interface lookup failed; skipping enrichment", exc_info=True)
            return list(records)

        enriched: list[InterfaceRecord] = []
        for record in records:
            update: dict[str, Any] = {}
            stat = stats.get(record.key)
            if stat is not None:
                if record.speed_mbps is None and stat.speed > 0:
                    update["speed_mbps"] = stat.speed
                if record.mtu is None and stat.mtu > 0:
                    update["mtu"] = stat.mtu
            if record.mac_address is None:
                mac = _mac_address(addrs.get(record.key, ()))
                if mac is not None:
                    update["mac_address"] = mac
            enriched.append(record.model_copy(update=update) if update else record)
        return enriched
