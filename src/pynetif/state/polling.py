"""Poll entries for interfaces in an unsettled transition."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PollEntry:
    name: str
    started_at: float
    """Monotonic timestamp of the refresh that detected the transition."""


class PollSet:
    """At most one :class:`PollEntry` per interface name (case-insensitive)."""

    def __init__(self) -> None:
        self._entries: dict[str, PollEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __iter__(self) -> Iterator[PollEntry]:
        return iter(list(self._entries.values()))

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._entries

    def add(self, name: str, started_at: float) -> bool:
        """Start polling *name*; returns ``False`` if it is already polled."""
        key = name.casefold()
        if key in self._entries:
            return False
        self._entries[key] = PollEntry(name=name, started_at=started_at)
        return True

    def discard(self, name: str) -> None:
        self._entries.pop(name.casefold(), None)

    def clear(self) -> None:
        self._entries.clear()

    def names(self) -> tuple[str, ...]:
        return tuple(entry.name for entry in self._entries.values())
