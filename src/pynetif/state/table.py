"""Last-known interface table.

Only the reconciliation engine writes to this table.
"""

from __future__ import annotations

from collections.abc import Iterable

from pynetif.models.interface import InterfaceRecord


class LastKnownTable:
    """Ordered mapping of interface name (case-insensitive) to record.

    Records are frozen pydantic models, so :meth:`snapshot` can hand them
    out without copying.
    """

    def __init__(self) -> None:
        self._records: dict[str, InterfaceRecord] = {}

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and name.casefold() in self._records

    def get(self, name: str) -> InterfaceRecord | None:
        return self._records.get(name.casefold())

    def replace(self, records: Iterable[InterfaceRecord]) -> None:
        """Replace the whole table with a fresh inventory.

        Later duplicates of the same name win; order follows first
        appearance.
        """
        fresh: dict[str, InterfaceRecord] = {}
        for record in records:
            fresh[record.key] = record
        self._records = fresh

    def merge_states(self, latest: InterfaceRecord) -> bool:
        """Merge admin/operational values of *latest* into the existing entry.

        Names that are no longer in the table are ignored. Returns whether
        the table changed.
        """
        current = self._records.get(latest.key)
        if current is None:
            return False
        merged = current.with_states(latest)
        if merged is current:
            return False
        self._records[latest.key] = merged
        return True

    def remove(self, name: str) -> bool:
        return self._records.pop(name.casefold(), None) is not None

    def snapshot(self) -> tuple[InterfaceRecord, ...]:
        return tuple(self._records.values())
