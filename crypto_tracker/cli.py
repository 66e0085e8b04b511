"""Command-line interface for the crypto tracker."""
from __future__ import annotations

import argparse
import asyncio
import sys

from .config import load_config
from .logging_setup import configure_logging
from .models import PreferenceFlag, SortMode
from .render.console import ConsoleRenderer
from .services import Dashboard


def build_parser() -> argparse.ArgumentParser:
    """Build the argparse CLI parser."""
    parser = argparse.ArgumentParser(
        prog="crypto-tracker",
        description="Cryptocurrency price tracker with a comparison panel",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to config.yaml (default: config.yaml in project root)",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO)",
    )

    sub = parser.add_subparsers(dest="command")

    watch_parser = sub.add_parser("watch", help="Poll prices continuously")
    watch_parser.add_argument(
        "--cycles",
        type=int,
        default=None,
        help="Stop after this many polling cycles (default: run forever)",
    )

    list_parser = sub.add_parser("list", help="Fetch once and print the asset list")
    list_parser.add_argument("--search", default="", help="Filter by name or symbol")
    list_parser.add_argument(
        "--sort",
        default=None,
        choices=[m.value for m in SortMode],
        help="Sort order",
    )

    sub.add_parser("compare", help="Fetch once and print the comparison panel")

    toggle_parser = sub.add_parser("toggle", help="Pin or unpin an asset")
    toggle_parser.add_argument("asset_id", help="Asset id, e.g. bitcoin")

    remove_parser = sub.add_parser("remove", help="Remove an asset from comparison")
    remove_parser.add_argument("asset_id", help="Asset id, e.g. bitcoin")

    pref_parser = sub.add_parser("pref", help="Set a display preference")
    pref_parser.add_argument("flag", choices=[f.value for f in PreferenceFlag])
    pref_parser.add_argument("value", choices=["on", "off"])

    sub.add_parser("prefs", help="Show current preferences")

    return parser


async def _run(args: argparse.Namespace) -> None:
    """Execute the selected command."""
    configure_logging(args.log_level)
    config = load_config(args.config)

    show_list = args.command in ("watch", "list")
    dashboard = Dashboard(config, renderers=[ConsoleRenderer(show_list=show_list)])
    state = dashboard.state
    controller = dashboard.controller

    if args.command == "watch":
        await dashboard.run(args.cycles)
    elif args.command == "list":
        dashboard.start()
        state.search_term = args.search.strip()
        if args.sort:
            state.sort_mode = SortMode(args.sort)
        await dashboard.scheduler.run_once()
    elif args.command == "compare":
        dashboard.start()
        await dashboard.scheduler.run_once()
    elif args.command == "toggle":
        dashboard.start()
        if not state.selection.contains(args.asset_id):
            await dashboard.scheduler.run_once()
        controller.toggle_selection(args.asset_id)
    elif args.command == "remove":
        dashboard.start()
        if controller.remove_from_comparison(args.asset_id) is None:
            print(f"{args.asset_id} is not in the comparison panel")
    elif args.command == "pref":
        state.load()
        controller.set_preference(args.flag, args.value == "on")
    elif args.command == "prefs":
        state.load()
        for flag in PreferenceFlag:
            print(f"{flag.value}: {'on' if state.preferences.get(flag) else 'off'}")
    else:
        build_parser().print_help()
        sys.exit(1)


def main() -> None:
    """Entry point."""
    parser = build_parser()
    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    try:
        asyncio.run(_run(args))
    except KeyboardInterrupt:
        pass
