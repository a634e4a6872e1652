from core import RequestItem, RunEntry
from core.interface.constants import Chord
from core.interface.tui_commands import split_command
from core.interface.tui_state import ConsoleState, clamp_index, scroll, select_request_id, select_run_id, sync_selection


def _state():
    return ConsoleState(
        requests=[RequestItem(id=str(i), name=f"req {i}", url="u") for i in range(3)],
        runs=[RunEntry(id=i, request_name=f"run {i}") for i in (9, 8)],
    )


def test_clamp_index():
    assert clamp_index(5, 0) == 0
    assert clamp_index(-2, 3) == 0
    assert clamp_index(7, 3) == 2


def test_sync_resets_scroll_and_chord_only_on_change():
    state = _state()
    sync_selection(state)
    state.request_scroll = 4
    state.chord = Chord.G
    sync_selection(state)
    assert state.request_scroll == 4
    assert state.chord == Chord.G
    state.selected = 1
    sync_selection(state)
    assert state.request_scroll == 0
    assert state.chord == Chord.NONE


def test_sync_tracks_runs():
    state = _state()
    sync_selection(state)
    state.history_request_scroll = 3
    state.history_response_scroll = 2
    state.history_selected = 5
    sync_selection(state)
    assert state.history_selected == 1
    assert state.tracked_run_id == 8
    assert state.history_request_scroll == 0
    assert state.history_response_scroll == 0


def test_select_by_id():
    state = _state()
    assert select_request_id(state, "2")
    assert state.selected == 2
    assert not select_request_id(state, "missing")
    assert not select_request_id(state, None)
    assert select_run_id(state, 8)
    assert state.history_selected == 1
    assert not select_run_id(state, None)


def test_scroll_floors_at_zero():
    assert scroll(0, -1) == 0
    assert scroll(3, 2) == 5


def test_split_command_lowercases_verb_only():
    assert split_command("  NEW Post http://X ") == ["new", "Post", "http://X"]
    assert split_command("") == []
