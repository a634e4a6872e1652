"""Translate prompt_toolkit key events into KeyPress descriptors."""

from typing import Optional

from prompt_toolkit.keys import Keys

from .tui_input import ARROWS, KeyPress

_NAMED = {
    Keys.Escape.value: "escape",
    Keys.ControlM.value: "return",
    Keys.ControlJ.value: "return",
    Keys.ControlI.value: "tab",
    Keys.Delete.value: "delete",
    Keys.Home.value: "home",
    Keys.End.value: "end",
    Keys.PageUp.value: "pageup",
    Keys.PageDown.value: "pagedown",
}


def _key_name(key) -> str:
    return key.value if isinstance(key, Keys) else str(key)


def key_press_from(key, data: str) -> Optional[KeyPress]:
    """Build a KeyPress from a prompt_toolkit key and its raw data; None for non-keyboard events."""
    name = _key_name(key)
    data = data or ""

    if name == Keys.BracketedPaste.value:
        return KeyPress(sequence=data, name="paste")
    if name == Keys.ControlH.value:
        # terminals send DEL for Backspace and BS for Ctrl+Backspace
        return KeyPress(sequence=data, name="backspace", ctrl=data == "\x08")
    if name == Keys.ControlDelete.value:
        return KeyPress(sequence=data or "\x1b[3;5~", name="delete", ctrl=True)
    if name in _NAMED:
        return KeyPress(sequence=data, name=_NAMED[name])
    if name in ARROWS:
        return KeyPress(sequence=data, name=name)
    if name.startswith("c-") and len(name) == 3:
        return KeyPress(sequence=data, name=name[2:], ctrl=True)
    if name.startswith("<"):
        # cpr responses, mouse reports and other synthetic keys
        return None
    if len(name) == 1:
        return KeyPress(sequence=data or name, name=name, shift=name.isupper())
    return KeyPress(sequence=data, name=name)


def key_press_from_event(event) -> Optional[KeyPress]:
    if not event.key_sequence:
        return None
    press = event.key_sequence[0]
    return key_press_from(press.key, press.data)


__all__ = ["key_press_from", "key_press_from_event"]
