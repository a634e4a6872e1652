#!/usr/bin/env python3
"""
tuiman - keyboard-driven terminal HTTP client.

Saved requests live as JSON files under the config directory, runs in a
SQLite history under the state directory. This module wires the
collaborators together and dispatches the CLI subcommands.
"""

import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path
from typing import Optional

from config import get_log_level, get_split_ratios, get_theme, set_split_ratios, set_theme
from core import TuimanError
from infrastructure.exchange import DirectoryExchange
from infrastructure.external_editor import ExternalEditor
from infrastructure.file_repository import FileRequestRepository
from infrastructure.history_store import SqliteHistoryRepository
from infrastructure.http_executor import RequestsExecutor
from infrastructure.keychain import KeychainSecretStore
from infrastructure.paths import AppPaths, get_paths
from util.responsive import SplitRatios

from .cli_parser import build_parser as build_cli_parser
from .tui_clipboard import NativeClipboard
from .tui_controller import RequestConsole
from .tui_models import ConsoleDeps
from .tui_state import ConsoleState
from .tui_themes import DEFAULT_THEME, THEMES

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(paths: Optional[AppPaths] = None, to_file: bool = True) -> None:
    """Route tuiman.* loggers to the state-dir log file (full screen) or stderr (scripting)."""
    level = getattr(logging, get_log_level(), logging.INFO)
    root = logging.getLogger("tuiman")
    for handler in list(root.handlers):
        root.removeHandler(handler)
    if to_file and paths is not None:
        paths.state_dir.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(paths.log_path, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
        level = max(level, logging.WARNING)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(level)
    root.propagate = False


def build_deps(paths: AppPaths) -> ConsoleDeps:
    paths.ensure()
    requests = FileRequestRepository(paths.requests_dir)
    secrets = KeychainSecretStore()
    return ConsoleDeps(
        requests=requests,
        history=SqliteHistoryRepository(paths.history_db_path),
        executor=RequestsExecutor(secrets=secrets),
        secrets=secrets,
        exchange=DirectoryExchange(requests),
        editor=ExternalEditor(),
        clipboard=NativeClipboard(),
    )


def build_console(paths: Optional[AppPaths] = None) -> RequestConsole:
    deps = build_deps(paths or get_paths())
    state = ConsoleState(ratios=SplitRatios.from_dict(get_split_ratios()))
    return RequestConsole(deps, state=state)


def save_ratios(ratios: SplitRatios) -> None:
    try:
        set_split_ratios(ratios.to_dict())
    except OSError as exc:
        logging.getLogger("tuiman.config").warning("could not persist split ratios: %s", exc)


def cmd_tui(args) -> int:
    from .tui_app import RequestConsoleTUI

    paths = get_paths()
    configure_logging(paths, to_file=True)
    theme = getattr(args, "theme", None)
    if theme:
        # an explicit --theme becomes the remembered default
        set_theme(theme)
    theme = theme or get_theme() or DEFAULT_THEME
    tui = RequestConsoleTUI(build_console(paths), theme=theme)
    save_ratios(tui.run())
    return 0


def cmd_list(args) -> int:
    repo = FileRequestRepository(get_paths().requests_dir)
    for item in repo.list():
        if item.matches(getattr(args, "filter", "")):
            print(f"{item.method:<7} {item.name:<30} {item.url}  ({item.id})")
    return 0


def cmd_history(args) -> int:
    history = SqliteHistoryRepository(get_paths().history_db_path)
    for run in history.list(max(1, args.limit)):
        suffix = f"  {run.error}" if run.error else ""
        print(f"{run.id:>5} {run.status_label:<6} {run.method:<7} {run.url}  {run.duration_ms}ms  {run.created_at}{suffix}")
    return 0


def cmd_export(args) -> int:
    paths = get_paths().ensure()
    exchange = DirectoryExchange(FileRequestRepository(paths.requests_dir))
    target = Path(args.directory).expanduser() if args.directory else None
    result = exchange.export_all(target)
    print(f"Exported {result.count} request(s) to {result.directory} (scrubbed {result.scrubbed_count} secret ref(s)).")
    return 0


def cmd_import(args) -> int:
    paths = get_paths().ensure()
    exchange = DirectoryExchange(FileRequestRepository(paths.requests_dir))
    count = exchange.import_all(Path(args.directory).expanduser())
    print(f"Imported {count} request(s) from {args.directory}.")
    return 0


def build_parser():
    return build_cli_parser(sys.modules[__name__], THEMES, DEFAULT_THEME)


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if getattr(args, "version", False):
        try:
            print(pkg_version("tuiman"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0
    if not getattr(args, "command", None):
        args = parser.parse_args(["tui"])
    if args.command != "tui":
        configure_logging(to_file=False)
    try:
        return args.func(args)
    except (TuimanError, ValueError) as exc:
        print(f"tuiman: {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
