"""Console entry point: ``python -m pynetif``."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import sys
from collections.abc import Sequence

from pynetif.client import NetifManager
from pynetif.config import NetifConfig
from pynetif.exceptions import NetifError
from pynetif.models.interface import InterfaceRecord
from pynetif.state.events import SettleEvent

_COLUMNS: tuple[tuple[str, str, int], ...] = (
    ("name", "Name", 28),
    ("admin_state", "Admin", 9),
    ("operational_state", "State", 16),
    ("interface_type", "Type", 12),
    ("speed_mbps", "Speed (Mbps)", 13),
    ("mac_address", "MAC Address", 17),
)


def _parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="pynetif", description="Monitor and toggle host network interfaces.")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logs.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="Print the current interface table.")

    watch = sub.add_parser("watch", help="Print every settle event until interrupted.")
    watch.add_argument(
        "--duration",
        type=float,
        default=0,
        help="Maximum runtime in seconds (0 = run until Ctrl+C).",
    )

    for name, help_text in (("enable", "Enable interfaces."), ("disable", "Disable interfaces.")):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("names", nargs="+", metavar="NAME")

    connect = sub.add_parser("connect", help="Connect a wireless interface.")
    connect.add_argument("name", metavar="NAME")
    connect.add_argument("--profile", default=None, help="WLAN profile (defaults to NAME).")

    disconnect = sub.add_parser("disconnect", help="Disconnect a wireless interface.")
    disconnect.add_argument("name", metavar="NAME")

    profiles = sub.add_parser("profiles", help="List saved Wi-Fi profiles.")
    profiles.add_argument("--interface", default=None)

    return parser.parse_args(argv)


def format_table(records: Sequence[InterfaceRecord]) -> str:
    header = "  ".join(title.ljust(width) for _field, title, width in _COLUMNS)
    lines = [header, "-" * len(header)]
    for record in records:
        cells = []
        for field, _title, width in _COLUMNS:
            value = getattr(record, field)
            cells.append(("" if value is None else str(value)).ljust(width))
        lines.append("  ".join(cells).rstrip())
    return "\n".join(lines)


def _print_event(event: SettleEvent) -> None:
    stamp = event.published_at.astimezone().strftime("%H:%M:%S")
    suffix = f" settled={', '.join(event.settled)}" if event.settled else ""
    print(f"[{stamp}] {event.trigger}{suffix}")
    print(format_table(event.interfaces))
    print()


def _print_error(error: NetifError) -> None:
    print(f"error: {error}", file=sys.stderr)


async def _run(args: argparse.Namespace, config: NetifConfig) -> int:
    watching = args.command == "watch"
    manager = NetifManager(
        dataclasses.replace(config, signals_enabled=watching and config.signals_enabled),
        on_settled=_print_event if watching else None,
        on_error=_print_error,
    )
    async with manager:
        if args.command == "list":
            if manager.publisher.last_event is None:
                return 1
            print(format_table(manager.snapshot()))
            return 0

        if args.command == "watch":
            if args.duration > 0:
                await asyncio.sleep(args.duration)
            else:
                await asyncio.Event().wait()
            return 0

        if args.command in ("enable", "disable"):
            outcomes = await manager.apply_admin_state(args.names, args.command == "enable")
            return 0 if all(outcome is None for outcome in outcomes.values()) else 1

        if args.command == "profiles":
            for profile in await manager.list_wifi_profiles(args.interface):
                where = f" ({profile.interface})" if profile.interface else ""
                print(f"{profile.name}{where}")
            return 0

        try:
            if args.command == "connect":
                await manager.connect(args.name, args.profile)
            else:
                await manager.disconnect(args.name)
        except NetifError:
            return 1
        return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = NetifConfig.from_env()
        return asyncio.run(_run(args, config))
    except KeyboardInterrupt:
        return 0
    except NetifError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return 2
