"""Interface record model."""

from __future__ import annotations

from pydantic import AliasChoices, Field, field_validator

from pynetif.models._base import NetifBaseModel, NetifEnum

#: Operational state strings with dedicated meaning. Anything else is kept
#: verbatim as an "other" state.
CONNECTED = "Connected"
DISCONNECTED = "Disconnected"


class AdminState(NetifEnum):
    """Policy-controlled enabled/disabled flag of an interface."""

    ENABLED = "Enabled"
    DISABLED = "Disabled"
    UNKNOWN = "Unknown"


class InterfaceRecord(NetifBaseModel):
    """Last observed state of one host network interface.

    ``name`` is the identity key and compares case-insensitively (see
    :attr:`key`). The enrichment fields are optional and may be missing
    on any given fetch.
    """

    name: str = Field(..., min_length=1)
    """Interface name as reported by the OS (may contain spaces)."""
    admin_state: AdminState = Field(
        default=AdminState.UNKNOWN,
        validation_alias=AliasChoices("admin_state", "adminState"),
    )
    operational_state: str = Field(
        default="Unknown",
        validation_alias=AliasChoices("operational_state", "operationalState", "state"),
    )
    """Link-layer status; ``Connected``/``Disconnected`` or any other OS string."""

    description: str | None = None
    interface_type: str | None = Field(default=None, validation_alias=AliasChoices("interface_type", "type"))
    interface_id: str | None = Field(default=None, validation_alias=AliasChoices("interface_id", "id"))
    mac_address: str | None = None
    speed_mbps: int | None = None
    mtu: int | None = None

    @field_validator("admin_state", mode="before")
    @classmethod
    def _parse_admin_state(cls, value: object) -> AdminState:
        if isinstance(value, AdminState):
            return value
        return AdminState(str(value))

    @field_validator("operational_state")
    @classmethod
    def _canonical_operational_state(cls, value: str) -> str:
        folded = value.casefold()
        if folded == CONNECTED.casefold():
            return CONNECTED
        if folded == DISCONNECTED.casefold():
            return DISCONNECTED
        return value

    @property
    def key(self) -> str:
        """Case-insensitive identity key."""
        return self.name.casefold()

    @property
    def is_enabled(self) -> bool:
        return self.admin_state == AdminState.ENABLED

    @property
    def is_connected(self) -> bool:
        return self.operational_state == CONNECTED

    def with_states(self, latest: InterfaceRecord) -> InterfaceRecord:
        """Return a copy carrying *latest*'s admin/operational values.

        Enrichment fields are left untouched. Returns ``self`` when nothing
        changes, so re-applying the same record is a no-op.
        """
        if self.admin_state == latest.admin_state and self.operational_state == latest.operational_state:
            return self
        return self.model_copy(
            update={
                "admin_state": latest.admin_state,
                "operational_state": latest.operational_state,
            }
        )
