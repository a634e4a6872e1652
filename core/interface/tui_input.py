"""Classify decoded key presses into textual-input actions.

Everything here is pure: the console feeds in a KeyPress built from the
terminal event and gets back an InputAction (or None when the key does not
contribute to text input at all).
"""

import re
from dataclasses import dataclass
from typing import Optional

BRACKETED_PASTE_START = "\x1b[200~"
BRACKETED_PASTE_END = "\x1b[201~"
CTRL_DELETE_SEQUENCES = frozenset({"\x08", "\x7f", "\x1b[3;5~", "\x1b[3;5u"})

ARROWS = ("up", "down", "left", "right")

# Action kinds
CHAR = "char"
PASTE = "paste"
BACKSPACE = "backspace"
CLEAR = "clear"
ESCAPE = "escape"
ENTER = "enter"
CONTROL = "control"

_LINE_BREAKS = re.compile(r"\r\n?|\n")


@dataclass(frozen=True)
class KeyPress:
    """Terminal key event after escape-sequence decoding."""
    sequence: str = ""
    name: str = ""
    ctrl: bool = False
    meta: bool = False
    option: bool = False
    shift: bool = False

    @property
    def plain(self) -> bool:
        return not (self.ctrl or self.meta or self.option)


@dataclass(frozen=True)
class InputAction:
    kind: str
    text: str = ""


def normalize_chunk(text: str) -> str:
    """Make raw (possibly pasted) text safe for a single-line buffer."""
    cleaned = (text or "").replace(BRACKETED_PASTE_START, "").replace(BRACKETED_PASTE_END, "")
    cleaned = _LINE_BREAKS.sub(" ", cleaned)
    return "".join(ch for ch in cleaned if ord(ch) >= 32 and ord(ch) != 127)


def _is_paste(key: KeyPress) -> bool:
    return key.name == "paste" or key.sequence.startswith(BRACKETED_PASTE_START)


def input_chunk(key: KeyPress) -> Optional[str]:
    """Text a key contributes to a buffer, or None for modifier combos and stray escapes."""
    if not key.plain:
        return None
    raw = key.sequence
    if raw.startswith("\x1b") and not _is_paste(key):
        # unparsed or truncated escape sequence
        return None
    chunk = normalize_chunk(raw)
    return chunk or None


def printable_char(key: KeyPress) -> Optional[str]:
    chunk = input_chunk(key)
    if chunk is None or len(chunk) != 1:
        return None
    return chunk


def is_clear(key: KeyPress) -> bool:
    if not key.ctrl:
        return False
    return key.name in ("backspace", "delete", "u") or key.sequence in CTRL_DELETE_SEQUENCES


def is_backspace(key: KeyPress) -> bool:
    if is_clear(key):
        return False
    return key.name == "backspace" or key.sequence in ("\x7f", "\x08")


def is_escape(key: KeyPress) -> bool:
    return key.name == "escape" or key.sequence == "\x1b"


def is_enter(key: KeyPress) -> bool:
    return key.name in ("return", "enter") or key.sequence in ("\r", "\n")


def classify(key: KeyPress) -> Optional[InputAction]:
    """Map a key press to one InputAction; None means the key is ignored for text input."""
    if is_clear(key):
        return InputAction(CLEAR)
    if is_backspace(key):
        return InputAction(BACKSPACE)
    if is_escape(key):
        return InputAction(ESCAPE)
    if is_enter(key):
        return InputAction(ENTER)
    if key.name in ARROWS and not _is_paste(key):
        return InputAction(key.name)
    if key.ctrl and len(key.name) == 1:
        return InputAction(CONTROL, key.name.lower())
    chunk = input_chunk(key)
    if chunk is None:
        return None
    if len(chunk) == 1 and not _is_paste(key):
        return InputAction(CHAR, chunk)
    return InputAction(PASTE, chunk)


__all__ = [
    "KeyPress",
    "InputAction",
    "normalize_chunk",
    "input_chunk",
    "printable_char",
    "is_clear",
    "is_backspace",
    "is_escape",
    "is_enter",
    "classify",
    "CHAR",
    "PASTE",
    "BACKSPACE",
    "CLEAR",
    "ESCAPE",
    "ENTER",
    "CONTROL",
]
