"""Screens, modes and fixed UI vocabulary for the request console."""

from enum import Enum
from typing import NamedTuple, Optional, Tuple

from core import AUTH_LOCATIONS, AUTH_TYPES, METHODS


class Screen(Enum):
    MAIN = "MAIN"
    HISTORY = "HISTORY"
    EDITOR = "EDITOR"
    HELP = "HELP"


class MainMode(Enum):
    NORMAL = "NORMAL"
    SEARCH = "SEARCH"
    COMMAND = "COMMAND"
    ACTION = "ACTION"
    DELETE_CONFIRM = "DELETE_CONFIRM"


class HistoryMode(Enum):
    NORMAL = "NORMAL"
    SEARCH = "SEARCH"


class EditorMode(Enum):
    NORMAL = "NORMAL"
    INSERT = "INSERT"
    COMMAND = "COMMAND"


class Chord(Enum):
    """First half of a two-key sequence; a single value keeps chords mutually exclusive."""
    NONE = ""
    G = "g"
    Z = "Z"


class DragTarget(Enum):
    NONE = "NONE"
    MAIN_VERTICAL = "MAIN_VERTICAL"
    MAIN_HORIZONTAL = "MAIN_HORIZONTAL"
    HISTORY_VERTICAL = "HISTORY_VERTICAL"
    EDITOR_VERTICAL = "EDITOR_VERTICAL"


class EditorField(NamedTuple):
    key: str
    label: str
    # fields with a fixed choice list are cycled with h/l instead of typed
    choices: Optional[Tuple[str, ...]] = None

    @property
    def editable(self) -> bool:
        return self.choices is None


EDITOR_FIELDS: Tuple[EditorField, ...] = (
    EditorField("name", "Name"),
    EditorField("method", "Method", METHODS),
    EditorField("url", "URL"),
    EditorField("header_key", "Header Key"),
    EditorField("header_value", "Header Value"),
    EditorField("auth_type", "Auth Type", AUTH_TYPES),
    EditorField("auth_secret_ref", "Secret Ref"),
    EditorField("auth_key_name", "Auth Key Name"),
    EditorField("auth_location", "Auth Location", AUTH_LOCATIONS),
    EditorField("auth_username", "Auth Username"),
)

URL_FIELD_INDEX = 2
AUTH_FIELD_INDEX = 5

HISTORY_LIMIT = 200

MAIN_IDLE_HINT = ":help for keybinds and commands"
HISTORY_IDLE_HINT = "History: / filter | r replay | K/J split | { } req body | [ ] resp body | Esc back"
EDITOR_IDLE_HINT = "Editor: j/k field | h/l cycle | i edit | :w save | Esc cancel"
HELP_IDLE_HINT = "Esc to return to main"
ACTION_PROMPT = "Action: y send | e edit body | a auth editor | Esc cancel"

HELP_LINES: Tuple[str, ...] = (
    "Main:",
    "  j/k, gg/G, Enter, /, ?, :, d, E, ZZ/ZQ, H/L, K/J, { }, [ ]",
    "Action: y send, e body edit, a auth editor, Esc/n cancel",
    "History: j/k, / filter, r replay, H/L split, K/J detail, { } req, [ ] resp, Esc",
    "Editor: j/k, h/l cycle method/auth, i/Enter edit, e body, :w/:q/:wq, :secret VALUE, Ctrl+s, Esc",
    "Commands: :q :help :history :new [METHOD] [URL] :edit :export [dir] :import <dir>",
    "Bottom input: Ctrl+v paste, Ctrl+y copy, Ctrl+Backspace/Delete or Ctrl+u clear",
    "Mouse: drag pane dividers, wheel moves the selection",
    "Press Esc to return.",
)
