"""Settle policy.

This module contains *no* text parsing; it only decides, from already
parsed records, when polling must start and when it may stop.
"""

from __future__ import annotations

from pynetif.models.interface import AdminState, InterfaceRecord

#: Operational states accepted as "settled" for an enabled interface. Any
#: other value only settles through the poll timeout.
STABLE_OPERATIONAL_STATES: frozenset[str] = frozenset(
    {
        "Connected",
        "Disconnected",
        "Non-operational",
        "Operational",
    }
)


def starts_transition(previous: InterfaceRecord | None, current: InterfaceRecord) -> bool:
    """Whether *current* is an enable that has not reached ``Connected`` yet.

    Interfaces without a previous observation never start a transition.
    """
    if previous is None:
        return False
    return (
        previous.admin_state == AdminState.DISABLED
        and current.admin_state == AdminState.ENABLED
        and not current.is_connected
    )


def is_settled(
    record: InterfaceRecord,
    stable_states: frozenset[str] = STABLE_OPERATIONAL_STATES,
) -> bool:
    if record.admin_state != AdminState.ENABLED:
        return False
    folded = {state.casefold() for state in stable_states}
    return record.operational_state.casefold() in folded


def is_timed_out(now: float, started_at: float, timeout: float) -> bool:
    return (now - started_at) > timeout
