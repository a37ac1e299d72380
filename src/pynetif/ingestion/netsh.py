"""Parsers for ``netsh`` text output.

``netsh`` prints whitespace-aligned tables meant for humans. The parsers
here are deliberately forgiving: headers, separators, blank lines and
anything that does not look like a data row are skipped instead of raising.
"""

from __future__ import annotations

import logging
import re

from pydantic import ValidationError

from pynetif.models.interface import InterfaceRecord
from pynetif.models.profile import WifiProfile

_logger = logging.getLogger(__name__)

# Admin State    State          Type             Interface Name
# Enabled        Connected      Dedicated        Ethernet 2
_TABLE_ROW = re.compile(
    r"^\s*(?P<admin>enabled|disabled)\s+(?P<state>\S+)\s+(?P<type>\S+)\s+(?P<name>\S.*?)\s*$",
    re.IGNORECASE,
)

_DETAIL_KEYS = {
    "type": "interface_type",
    "administrative state": "admin_state",
    "connect state": "operational_state",
}

_NOT_FOUND_MARKERS = (
    "not registered",
    "no such interface",
    "cannot find",
    "element not found",
)

_PROFILES_HEADER = re.compile(r"^\s*profiles on interface\s+(?P<iface>.+?):\s*$", re.IGNORECASE)
_PROFILE_ROW = re.compile(r"^\s*(?P<scope>[^:]*profile)\s*:\s*(?P<name>.+?)\s*$", re.IGNORECASE)


def parse_interface_table(text: str) -> list[InterfaceRecord]:
    """Parse ``netsh interface show interface`` into records.

    The name column is the greedy remainder of the row and may contain
    spaces. Row order is preserved.
    """
    records: list[InterfaceRecord] = []
    for line in text.splitlines():
        match = _TABLE_ROW.match(line)
        if match is None:
            continue
        try:
            records.append(
                InterfaceRecord(
                    name=match.group("name"),
                    admin_state=match.group("admin"),
                    operational_state=match.group("state"),
                    interface_type=match.group("type"),
                )
            )
        except ValidationError:
            _logger.debug("Skipping malformed interface row: %r", line, exc_info=True)
    return records


def is_not_found_output(text: str) -> bool:
    folded = text.casefold()
    return any(marker in folded for marker in _NOT_FOUND_MARKERS)


def parse_interface_detail(text: str, name: str) -> InterfaceRecord | None:
    """Parse ``netsh interface show interface name="<name>"``.

    Returns ``None`` when the output has no administrative state, which is
    how netsh answers for an unknown interface.
    """
    fields: dict[str, str] = {}
    for line in text.splitlines():
        key, sep, value = line.partition(":")
        if not sep:
            continue
        field_name = _DETAIL_KEYS.get(key.strip().casefold())
        if field_name is not None and value.strip():
            fields[field_name] = value.strip()

    if "admin_state" not in fields:
        return None
    try:
        return InterfaceRecord(name=name, **fields)
    except ValidationError:
        _logger.debug("Unparseable interface detail for %s: %r", name, text, exc_info=True)
        return None


def parse_wifi_profiles(text: str) -> list[WifiProfile]:
    """Parse ``netsh wlan show profiles``."""
    profiles: list[WifiProfile] = []
    interface: str | None = None
    for line in text.splitlines():
        header = _PROFILES_HEADER.match(line)
        if header is not None:
            interface = header.group("iface")
            continue
        row = _PROFILE_ROW.match(line)
        if row is None:
            continue
        name = row.group("name")
        if name.startswith("<") and name.endswith(">"):
            continue
        profiles.append(WifiProfile(name=name, interface=interface, scope=row.group("scope").strip()))
    return profiles
