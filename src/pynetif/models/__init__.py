"""Data models for interface state."""

from pynetif.models._base import NetifBaseModel, NetifEnum
from pynetif.models.interface import CONNECTED, DISCONNECTED, AdminState, InterfaceRecord
from pynetif.models.profile import WifiProfile

__all__ = [
    "CONNECTED",
    "DISCONNECTED",
    "AdminState",
    "InterfaceRecord",
    "NetifBaseModel",
    "NetifEnum",
    "WifiProfile",
]
