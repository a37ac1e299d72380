"""Change signals and settle events.

Signal sources emit :class:`ChangeSignal` values; the engine emits one
:class:`SettleEvent` per completed settle cycle.
"""

from __future__ import annotations

from datetime import UTC, datetime
from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

from pynetif.models.interface import InterfaceRecord


class ChangeSignal(StrEnum):
    ADDRESS_CHANGED = "address_changed"
    ADAPTER_STATUS_CHANGED = "adapter_status_changed"
    COMMAND_COMPLETED = "command_completed"


class SettleTrigger(StrEnum):
    MANUAL = "manual"
    AUTOMATIC = "automatic"
    POLL = "poll"


class SettleEvent(BaseModel):
    """A consolidated, read-only snapshot published to the consumer."""

    model_config = ConfigDict(frozen=True)

    interfaces: tuple[InterfaceRecord, ...] = Field(default_factory=tuple)
    trigger: SettleTrigger
    settled: tuple[str, ...] = Field(
        default_factory=tuple,
        description="Names whose poll entry completed in this cycle (poll trigger only).",
    )
    published_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def get(self, name: str) -> InterfaceRecord | None:
        """Look up an interface by name, case-insensitively."""
        key = name.casefold()
        for record in self.interfaces:
            if record.key == key:
                return record
        return None
