"""CLI parser construction for the tuiman CLI/TUI."""

import argparse
from typing import Any, Mapping


def build_parser(commands: Any, themes: Mapping[str, Any], default_theme: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tuiman",
        description="tuiman - keyboard-driven terminal HTTP client",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--version", action="store_true", help="print the installed version and exit")

    sub = parser.add_subparsers(dest="command", help="Commands")

    # tui
    tui_p = sub.add_parser("tui", help="Start the interactive console (default)")
    tui_p.add_argument("--theme", choices=list(themes.keys()), default=None, help=f"palette (default: {default_theme})")
    tui_p.set_defaults(func=commands.cmd_tui)

    # list
    lp = sub.add_parser("list", help="List saved requests")
    lp.add_argument("--filter", default="", help="case-insensitive match on name, method or URL")
    lp.set_defaults(func=commands.cmd_list)

    # history
    hp = sub.add_parser("history", help="Show recent runs, newest first")
    hp.add_argument("--limit", type=int, default=20)
    hp.set_defaults(func=commands.cmd_history)

    # export
    ep = sub.add_parser("export", help="Export saved requests with secret refs scrubbed")
    ep.add_argument("directory", nargs="?", help="target directory (default ./tuiman-export-<timestamp>)")
    ep.set_defaults(func=commands.cmd_export)

    # import
    ip = sub.add_parser("import", help="Import requests from an export directory")
    ip.add_argument("directory")
    ip.set_defaults(func=commands.cmd_import)

    return parser


__all__ = ["build_parser"]
