"""Header and status bar builders for the request console."""

from typing import List, Tuple

from prompt_toolkit.formatted_text import FormattedText
from prompt_toolkit.mouse_events import MouseButton, MouseEventType

from .constants import (
    ACTION_PROMPT,
    EDITOR_IDLE_HINT,
    HELP_IDLE_HINT,
    HISTORY_IDLE_HINT,
    MAIN_IDLE_HINT,
    EditorMode,
    HistoryMode,
    MainMode,
    Screen,
)
from .tui_mouse import stop_drag
from .tui_state import ConsoleState
from .tui_text import fit_to

_IDLE_HINTS = {
    Screen.MAIN: MAIN_IDLE_HINT,
    Screen.HISTORY: HISTORY_IDLE_HINT,
    Screen.EDITOR: EDITOR_IDLE_HINT,
    Screen.HELP: HELP_IDLE_HINT,
}


def bottom_prompt(state: ConsoleState) -> str:
    """Text of the bottom input line for modes that own it; empty when the status shows instead."""
    if state.screen == Screen.MAIN:
        if state.main_mode == MainMode.SEARCH:
            return f"{state.search_prefix}{state.search_input}"
        if state.main_mode == MainMode.COMMAND:
            return f":{state.command_input}"
        if state.main_mode == MainMode.ACTION:
            return ACTION_PROMPT
        if state.main_mode == MainMode.DELETE_CONFIRM:
            selected = state.selected_request
            name = selected.name if selected else ""
            return f"Delete '{name}'? y/n"
    elif state.screen == Screen.HISTORY and state.history_mode == HistoryMode.SEARCH:
        return f"/{state.history_search_input}"
    elif state.screen == Screen.EDITOR and state.editor is not None:
        session = state.editor
        if session.mode == EditorMode.INSERT:
            return f"[EDITOR MODE] INSERT {session.field.label}: {session.insert_buffer}"
        if session.mode == EditorMode.COMMAND:
            return f":{session.command_buffer}"
    return ""


def status_line(state: ConsoleState) -> Tuple[str, str]:
    """(style, text) for the status row."""
    prompt = bottom_prompt(state)
    if prompt:
        return "class:input", prompt
    if state.busy:
        return "class:status.busy", f"{state.busy}..."
    if state.status:
        return ("class:status.error" if state.status_error else "class:status"), state.status
    return "class:status", _IDLE_HINTS[state.screen]


def build_status_text(console) -> FormattedText:
    state = console.state
    style, text = status_line(state)
    return FormattedText([(style, fit_to(text, state.width))])


def build_header_text(console) -> FormattedText:
    state = console.state

    def back_handler(event):
        if event.event_type == MouseEventType.MOUSE_UP and event.button == MouseButton.LEFT:
            if stop_drag(console):
                console.after_event()
                return None
            if state.screen in (Screen.HISTORY, Screen.HELP):
                state.screen = Screen.MAIN
                console.set_status_message(MAIN_IDLE_HINT)
                console.after_event()
            return None
        return NotImplemented

    parts: List[Tuple] = [("class:header", " tuiman ")]
    if state.screen in (Screen.HISTORY, Screen.HELP):
        parts.append(("class:header", "[< back] ", back_handler))
    label = state.screen.value
    if state.screen == Screen.MAIN:
        label += f" {state.main_mode.value}"
    elif state.screen == Screen.HISTORY:
        label += f" {state.history_mode.value}"
    elif state.editor is not None:
        label += f" {state.editor.mode.value}"
    parts.append(("class:header", label))
    used = sum(len(p[1]) for p in parts)
    parts.append(("class:header", " " * max(0, state.width - used)))
    return FormattedText(parts)


__all__ = ["bottom_prompt", "status_line", "build_status_text", "build_header_text"]
