"""Interpreter for the main screen's ':' command line."""

from pathlib import Path
from typing import List

from core import RequestItem, normalize_method

from .constants import MAIN_IDLE_HINT, Screen, URL_FIELD_INDEX
from .tui_editing import open_editor

IMPORT_USAGE = "Usage: :import <directory>"


def split_command(line: str) -> List[str]:
    parts = (line or "").strip().split()
    if parts:
        parts[0] = parts[0].lower()
    return parts


def command_rest(line: str) -> str:
    """Everything after the verb, inner spacing kept so directories may contain spaces."""
    pieces = (line or "").strip().split(None, 1)
    return pieces[1].strip() if len(pieces) > 1 else ""


def run_main_command(console, line: str) -> None:
    """Execute one submitted command line; unknown input only reports a status."""
    parts = split_command(line)
    if not parts:
        console.set_status_message(MAIN_IDLE_HINT)
        return
    command, args = parts[0], parts[1:]

    if command == "q":
        console.state.quit_requested = True
    elif command == "help":
        console.state.screen = Screen.HELP
        console.set_status_message("Help screen opened.")
    elif command == "history":
        console.open_history()
    elif command == "new":
        method = normalize_method(args[0]) if args else "GET"
        url = args[1] if len(args) > 1 else ""
        open_editor(console, RequestItem(method=method, url=url), URL_FIELD_INDEX)
    elif command == "edit":
        selected = console.state.selected_request
        if selected is None:
            console.set_status_message("No selected request to edit.", error=True)
            return
        open_editor(console, selected, 0)
    elif command == "export":
        target = command_rest(line)
        console.export_requests(Path(target).expanduser() if target else None)
    elif command == "import":
        source = command_rest(line)
        if not source:
            console.set_status_message(IMPORT_USAGE, error=True)
            return
        console.import_requests(Path(source).expanduser())
    else:
        console.set_status_message(f"Unknown command: {line.strip()}", error=True)


__all__ = ["run_main_command", "split_command", "command_rest", "IMPORT_USAGE"]
