from __future__ import annotations

from pynetif.ingestion.netsh import (
    is_not_found_output,
    parse_interface_detail,
    parse_interface_table,
    parse_wifi_profiles,
)
from pynetif.models.interface import AdminState

_TABLE = """
Admin State    State          Type             Interface Name
-------------------------------------------------------------------------
Enabled        Connected      Dedicated        Ethernet
Disabled       Disconnected   Dedicated        Wi-Fi
Enabled        Disconnected   Dedicated        Ethernet 2 (USB)
enabled        Non-operational Loopback         Loopback Pseudo-Interface 1

"""

_DETAIL = """
Wi-Fi
   Type:                 Dedicated
   Administrative state: Enabled
   Connect state:        Disconnected
"""

_PROFILES = """
Profiles on interface Wi-Fi:

Group policy profiles (read only)
---------------------------------
    <None>

User profiles
-------------
    All User Profile     : HomeNet
    All User Profile     : Office Guest
    Current User Profile : Cafe
"""


def test_parse_interface_table_rows() -> None:
    records = parse_interface_table(_TABLE)

    assert [record.name for record in records] == [
        "Ethernet",
        "Wi-Fi",
        "Ethernet 2 (USB)",
        "Loopback Pseudo-Interface 1",
    ]
    assert records[0].admin_state == AdminState.ENABLED
    assert records[0].operational_state == "Connected"
    assert records[0].interface_type == "Dedicated"
    assert records[1].admin_state == AdminState.DISABLED
    assert records[3].admin_state == AdminState.ENABLED
    assert records[3].operational_state == "Non-operational"


def test_parse_interface_table_ignores_noise() -> None:
    assert parse_interface_table("") == []
    assert parse_interface_table("The following command was not found: interface show.") == []


def test_parse_interface_detail() -> None:
    record = parse_interface_detail(_DETAIL, "Wi-Fi")

    assert record is not None
    assert record.name == "Wi-Fi"
    assert record.admin_state == AdminState.ENABLED
    assert record.operational_state == "Disconnected"
    assert record.interface_type == "Dedicated"


def test_parse_interface_detail_without_admin_state() -> None:
    assert parse_interface_detail("Wi-Fi\n   Type: Dedicated\n", "Wi-Fi") is None


def test_not_found_markers() -> None:
    assert is_not_found_output("An interface with this name is not registered with the router.")
    assert is_not_found_output("Element not found.")
    assert not is_not_found_output(_DETAIL)


def test_parse_wifi_profiles() -> None:
    profiles = parse_wifi_profiles(_PROFILES)

    assert [profile.name for profile in profiles] == ["HomeNet", "Office Guest", "Cafe"]
    assert {profile.interface for profile in profiles} == {"Wi-Fi"}
    assert profiles[0].scope == "All User Profile"
    assert profiles[2].scope == "Current User Profile"
