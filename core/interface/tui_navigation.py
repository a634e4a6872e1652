"""Selection movement and keyboard divider nudges for the request console."""

from util.responsive import (
    EDITOR_VERTICAL,
    HISTORY_VERTICAL,
    MAIN_VERTICAL,
    HISTORY_DETAIL_STEP,
    clamp,
    ratio_for_bottom,
    ratio_for_left,
    split_horizontal,
    split_vertical,
)

from .constants import Screen
from .tui_state import clamp_index


def move_vertical_selection(console, delta: int) -> None:
    """
    Move the active list pointer by `delta`, clamping to available items.

    Works for the request list, the run history and the editor field list.
    """
    state = console.state
    if state.screen == Screen.HISTORY:
        state.history_selected = clamp_index(state.history_selected + delta, len(state.visible_runs))
    elif state.screen == Screen.EDITOR and state.editor is not None:
        state.editor.move_field(delta)
    elif state.screen == Screen.MAIN:
        state.selected = clamp_index(state.selected + delta, len(state.visible_requests))


def jump_selection(console, last: bool) -> None:
    state = console.state
    if state.screen == Screen.HISTORY:
        total = len(state.visible_runs)
        state.history_selected = max(0, total - 1) if last else 0
    else:
        total = len(state.visible_requests)
        state.selected = max(0, total - 1) if last else 0


def main_resize_status(console) -> str:
    state = console.state
    split = split_vertical(state.width, state.ratios.main_split, MAIN_VERTICAL.min_left, MAIN_VERTICAL.min_right)
    rows = split_horizontal(state.height, state.ratios.main_response)
    return f"Resize: left={split.left} cols response={rows.bottom_rows} rows"


def nudge_main_left(console, delta: int) -> None:
    state = console.state
    split = split_vertical(state.width, state.ratios.main_split, MAIN_VERTICAL.min_left, MAIN_VERTICAL.min_right)
    left = clamp(split.left + delta, MAIN_VERTICAL.min_left, split.max_left)
    state.ratios.main_split = ratio_for_left(left, state.width)
    console.set_status_message(main_resize_status(console))


def nudge_main_response(console, delta: int) -> None:
    state = console.state
    rows = split_horizontal(state.height, state.ratios.main_response)
    bottom = clamp(rows.bottom_rows + delta, rows.bottom_min, rows.max_bottom)
    state.ratios.main_response = ratio_for_bottom(bottom, state.height)
    console.set_status_message(main_resize_status(console))


def nudge_history_left(console, delta: int) -> None:
    state = console.state
    divider = HISTORY_VERTICAL
    split = split_vertical(state.width, state.ratios.history_split, divider.min_left, divider.min_right)
    left = clamp(split.left + delta, divider.min_left, split.max_left)
    state.ratios.history_split = ratio_for_left(left, state.width)
    console.set_status_message(f"History resize: left={left} cols")


def nudge_history_detail(console, grow_response: bool) -> None:
    state = console.state
    state.ratios.nudge_history_detail(-HISTORY_DETAIL_STEP if grow_response else HISTORY_DETAIL_STEP)
    pane = "response" if grow_response else "request"
    console.set_status_message(f"History detail resize: {pane} pane grows")


def nudge_editor_left(console, delta: int) -> None:
    state = console.state
    divider = EDITOR_VERTICAL
    split = split_vertical(state.width, state.ratios.editor_split, divider.min_left, divider.min_right)
    left = clamp(split.left + delta, divider.min_left, split.max_left)
    state.ratios.editor_split = ratio_for_left(left, state.width)
    console.set_status_message(f"Editor resize: left={left} cols")


__all__ = [
    "move_vertical_selection",
    "jump_selection",
    "nudge_main_left",
    "nudge_main_response",
    "nudge_history_left",
    "nudge_history_detail",
    "nudge_editor_left",
    "main_resize_status",
]
