"""Request editor screen: field navigation, insert mode and the :w/:q command line."""

import json
from typing import Optional, Tuple

from core import RequestItem, ValidationError, looks_like_json
from util.responsive import clamp

from .constants import Chord, EDITOR_FIELDS, EditorMode, MAIN_IDLE_HINT, Screen
from .tui_input import CONTROL, ENTER, ESCAPE, InputAction, KeyPress, printable_char
from .tui_navigation import nudge_editor_left
from .tui_state import EditorSession, scroll


def pretty_json_body(body: str) -> str:
    """Pretty-print JSON-looking bodies; raise ValidationError when they do not parse."""
    if not looks_like_json(body):
        return body
    try:
        parsed = json.loads(body)
    except ValueError as exc:
        raise ValidationError(f"Body JSON invalid: {exc}") from exc
    return json.dumps(parsed, indent=2, ensure_ascii=False)


def validate_draft(draft: RequestItem) -> RequestItem:
    if not draft.url.strip():
        raise ValidationError("URL is required before save.")
    return draft.copy(body=pretty_json_body(draft.body))


def open_editor(console, request: RequestItem, field_index: int = 0) -> None:
    state = console.state
    state.editor = EditorSession(draft=request.copy(), field_index=clamp(field_index, 0, len(EDITOR_FIELDS) - 1))
    state.chord = Chord.NONE
    state.screen = Screen.EDITOR
    console.set_status_message("Editor opened.")


def close_editor(console, message: str, error: bool = False) -> None:
    state = console.state
    state.screen = Screen.MAIN
    state.editor = None
    console.set_status_message(message or MAIN_IDLE_HINT, error=error)


def parse_editor_command(line: str) -> Tuple[str, str]:
    """Split ':secret VALUE' style input into (verb, argument).

    Only the single separator after 'secret' is consumed; the value keeps its
    inner and leading spacing. Any other line is returned whole as the verb.
    """
    stripped = (line or "").strip()
    if stripped == "secret" or stripped.startswith("secret "):
        return "secret", stripped[len("secret ") :]
    return stripped, ""


def run_editor_command(console, line: str) -> None:
    session: Optional[EditorSession] = console.state.editor
    if session is None:
        return
    verb, arg = parse_editor_command(line)
    if verb in ("w", "wq"):
        console.save_editor_draft()
        return
    if verb == "q":
        close_editor(console, "Editor cancelled.")
        return
    if verb == "secret":
        if not arg.strip():
            console.set_status_message("Usage: :secret VALUE", error=True)
            return
        ref = session.draft.auth_secret_ref.strip()
        if not ref:
            console.set_status_message("Set Secret Ref before :secret VALUE", error=True)
            return
        console.store_secret(ref, arg)
        return
    console.set_status_message(f"Unknown editor command: {line.strip()}", error=True)


def handle_editor_key(console, key: KeyPress, action: Optional[InputAction]) -> None:
    state = console.state
    session = state.editor
    if session is None:
        close_editor(console, "Editor closed: no draft.", error=True)
        return
    kind = action.kind if action else ""

    if session.mode == EditorMode.INSERT:
        if kind == ESCAPE:
            session.mode = EditorMode.NORMAL
            session.insert_buffer = ""
        elif kind == ENTER:
            session.set_field_value(session.insert_buffer)
            session.mode = EditorMode.NORMAL
            session.insert_buffer = ""
        else:
            updated = console.edit_buffer(session.insert_buffer, action)
            if updated is not None:
                session.insert_buffer = updated
        return

    if session.mode == EditorMode.COMMAND:
        if kind == ESCAPE:
            session.mode = EditorMode.NORMAL
            session.command_buffer = ""
        elif kind == ENTER:
            line = session.command_buffer
            session.command_buffer = ""
            session.mode = EditorMode.NORMAL
            run_editor_command(console, line)
        else:
            updated = console.edit_buffer(session.command_buffer, action)
            if updated is not None:
                session.command_buffer = updated
        return

    ch = printable_char(key)
    if kind == CONTROL and action.text == "s":
        console.save_editor_draft()
    elif kind == ESCAPE:
        close_editor(console, "Editor cancelled.")
    elif kind == "down" or ch == "j":
        session.move_field(1)
    elif kind == "up" or ch == "k":
        session.move_field(-1)
    elif kind == "left" or ch == "h":
        session.cycle_field(-1)
    elif kind == "right" or ch == "l":
        session.cycle_field(1)
    elif kind == ENTER or ch == "i":
        if session.field.editable:
            session.insert_buffer = session.field_value()
            session.mode = EditorMode.INSERT
    elif ch == ":":
        session.command_buffer = ""
        session.mode = EditorMode.COMMAND
    elif ch == "e":
        console.edit_draft_body()
    elif ch == "{":
        session.body_scroll = scroll(session.body_scroll, -1)
    elif ch == "}":
        session.body_scroll = scroll(session.body_scroll, 1)
    elif ch == "H":
        nudge_editor_left(console, -1)
    elif ch == "L":
        nudge_editor_left(console, 1)


__all__ = [
    "pretty_json_body",
    "validate_draft",
    "open_editor",
    "close_editor",
    "run_editor_command",
    "handle_editor_key",
]
