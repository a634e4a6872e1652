"""Divider dragging and mouse routing for the console body.

Coordinates are body-relative and 0-based: column x, row y. A vertical
divider sits in the column right after the left pane; the main screen's
horizontal divider sits in the row right after the top panes.
"""

from prompt_toolkit.mouse_events import MouseButton, MouseEventType

from util.responsive import (
    EDITOR_VERTICAL,
    HISTORY_VERTICAL,
    MAIN_VERTICAL,
    editor_geometry,
    history_geometry,
    main_geometry,
    ratio_from_column,
    ratio_from_row,
)

from .constants import DragTarget, Screen
from .tui_navigation import main_resize_status, move_vertical_selection

DRAG_TOLERANCE = 1
_RATIO_EPSILON = 0.0001

_DRAG_LABELS = {
    DragTarget.MAIN_VERTICAL: "Dragging main pane divider...",
    DragTarget.MAIN_HORIZONTAL: "Dragging main pane divider...",
    DragTarget.HISTORY_VERTICAL: "Dragging history divider...",
    DragTarget.EDITOR_VERTICAL: "Dragging editor divider...",
}


def divider_at(console, x: int, y: int) -> DragTarget:
    """Which visible divider, if any, lies within DRAG_TOLERANCE of (x, y)."""
    state = console.state
    if state.screen == Screen.MAIN:
        geo = main_geometry(state.width, state.height, state.ratios)
        if geo.show_right and y < geo.top_rows and abs(x - geo.left) <= DRAG_TOLERANCE:
            return DragTarget.MAIN_VERTICAL
        if abs(y - geo.top_rows) <= DRAG_TOLERANCE:
            return DragTarget.MAIN_HORIZONTAL
    elif state.screen == Screen.HISTORY:
        geo = history_geometry(state.width, state.height, state.ratios)
        if geo.show_right and abs(x - geo.left) <= DRAG_TOLERANCE:
            return DragTarget.HISTORY_VERTICAL
    elif state.screen == Screen.EDITOR:
        geo = editor_geometry(state.width, state.height, state.ratios)
        if geo.show_right and abs(x - geo.left) <= DRAG_TOLERANCE:
            return DragTarget.EDITOR_VERTICAL
    return DragTarget.NONE


def _update(ratios, attr: str, value: float) -> None:
    if abs(getattr(ratios, attr) - value) >= _RATIO_EPSILON:
        setattr(ratios, attr, value)


def apply_drag(console, x: int, y: int) -> None:
    state = console.state
    ratios = state.ratios
    target = state.drag
    if target == DragTarget.MAIN_VERTICAL:
        _update(ratios, "main_split", ratio_from_column(x, state.width, MAIN_VERTICAL.min_left, MAIN_VERTICAL.min_right))
    elif target == DragTarget.MAIN_HORIZONTAL:
        _update(ratios, "main_response", ratio_from_row(y, state.height))
    elif target == DragTarget.HISTORY_VERTICAL:
        _update(ratios, "history_split", ratio_from_column(x, state.width, HISTORY_VERTICAL.min_left, HISTORY_VERTICAL.min_right))
    elif target == DragTarget.EDITOR_VERTICAL:
        _update(ratios, "editor_split", ratio_from_column(x, state.width, EDITOR_VERTICAL.min_left, EDITOR_VERTICAL.min_right))


def pointer_down(console, x: int, y: int) -> bool:
    if console.state.drag != DragTarget.NONE:
        return False
    target = divider_at(console, x, y)
    if target == DragTarget.NONE:
        return False
    console.state.drag = target
    console.set_status_message(_DRAG_LABELS[target])
    apply_drag(console, x, y)
    return True


def pointer_move(console, x: int, y: int) -> bool:
    if console.state.drag == DragTarget.NONE:
        return False
    apply_drag(console, x, y)
    return True


def stop_drag(console) -> bool:
    state = console.state
    target = state.drag
    if target == DragTarget.NONE:
        return False
    state.drag = DragTarget.NONE
    if target in (DragTarget.MAIN_VERTICAL, DragTarget.MAIN_HORIZONTAL):
        console.set_status_message(main_resize_status(console))
    elif target == DragTarget.HISTORY_VERTICAL:
        geo = history_geometry(state.width, state.height, state.ratios)
        console.set_status_message(f"History resize: left={geo.left} cols")
    else:
        geo = editor_geometry(state.width, state.height, state.ratios)
        console.set_status_message(f"Editor resize: left={geo.left} cols")
    return True


def handle_body_mouse(console, mouse_event):
    """Route prompt_toolkit mouse events for the console body."""
    x = mouse_event.position.x
    y = mouse_event.position.y
    etype = mouse_event.event_type
    handled = False
    if etype == MouseEventType.MOUSE_DOWN and mouse_event.button == MouseButton.LEFT:
        handled = pointer_down(console, x, y)
    elif etype == MouseEventType.MOUSE_MOVE:
        handled = pointer_move(console, x, y)
    elif etype == MouseEventType.MOUSE_UP:
        if console.state.drag != DragTarget.NONE:
            apply_drag(console, x, y)
        handled = stop_drag(console)
    elif etype == MouseEventType.SCROLL_DOWN:
        move_vertical_selection(console, 1)
        handled = True
    elif etype == MouseEventType.SCROLL_UP:
        move_vertical_selection(console, -1)
        handled = True
    if not handled:
        return NotImplemented
    console.after_event()
    return None


__all__ = [
    "divider_at",
    "apply_drag",
    "pointer_down",
    "pointer_move",
    "stop_drag",
    "handle_body_mouse",
]
