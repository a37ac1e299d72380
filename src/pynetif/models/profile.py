"""Wi-Fi profile model."""

from __future__ import annotations

from pydantic import Field

from pynetif.models._base import NetifBaseModel


class WifiProfile(NetifBaseModel):
    """A saved WLAN profile usable with ``connect``."""

    name: str = Field(..., min_length=1)
    interface: str | None = None
    """Wireless interface the profile is stored on, when reported."""
    scope: str = "All User Profile"
