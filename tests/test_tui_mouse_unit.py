from types import SimpleNamespace

from prompt_toolkit.mouse_events import MouseButton, MouseEventType

from core.interface import tui_mouse
from core.interface.constants import DragTarget, Screen

from conftest import press


def _mouse(event_type, x=0, y=0, button=MouseButton.LEFT):
    return SimpleNamespace(event_type=event_type, button=button, position=SimpleNamespace(x=x, y=y), modifiers=())


def test_divider_hit_testing_on_main(console_factory):
    console = console_factory()
    assert tui_mouse.divider_at(console, 66, 5) == DragTarget.MAIN_VERTICAL
    assert tui_mouse.divider_at(console, 67, 5) == DragTarget.MAIN_VERTICAL
    assert tui_mouse.divider_at(console, 10, 26) == DragTarget.MAIN_HORIZONTAL
    assert tui_mouse.divider_at(console, 30, 5) == DragTarget.NONE


def test_vertical_drag_updates_ratio_and_reports_on_release(console_factory):
    console = console_factory()
    assert tui_mouse.pointer_down(console, 66, 5)
    assert console.state.drag == DragTarget.MAIN_VERTICAL
    assert console.state.status == "Dragging main pane divider..."
    assert tui_mouse.pointer_move(console, 50, 5)
    assert console.state.ratios.main_split == 0.5
    assert tui_mouse.stop_drag(console)
    assert console.state.drag == DragTarget.NONE
    assert console.state.status == "Resize: left=50 cols response=10 rows"


def test_horizontal_drag(console_factory):
    console = console_factory()
    tui_mouse.pointer_down(console, 10, 26)
    tui_mouse.pointer_move(console, 10, 20)
    tui_mouse.stop_drag(console)
    assert console.state.status == "Resize: left=66 cols response=16 rows"


def test_no_vertical_divider_when_companion_hidden(console_factory):
    console = console_factory(width=80)
    assert not tui_mouse.pointer_down(console, 64, 5)
    assert console.state.drag == DragTarget.NONE


def test_pointer_down_during_drag_is_ignored(console_factory):
    console = console_factory()
    tui_mouse.pointer_down(console, 66, 5)
    assert not tui_mouse.pointer_down(console, 10, 26)
    assert console.state.drag == DragTarget.MAIN_VERTICAL


def test_move_and_release_without_drag_are_noops(console_factory):
    console = console_factory()
    ratios = console.state.ratios.to_dict()
    assert not tui_mouse.pointer_move(console, 40, 5)
    assert not tui_mouse.stop_drag(console)
    assert console.state.ratios.to_dict() == ratios


def test_history_divider_drag(console_factory):
    console = console_factory()
    console.state.screen = Screen.HISTORY
    assert tui_mouse.pointer_down(console, 42, 3)
    assert console.state.status == "Dragging history divider..."
    tui_mouse.pointer_move(console, 60, 3)
    tui_mouse.stop_drag(console)
    assert console.state.ratios.history_split == 0.6
    assert console.state.status == "History resize: left=60 cols"


def test_editor_divider_drag(console_factory):
    console = console_factory()
    press(console, "E")
    assert tui_mouse.pointer_down(console, 50, 3)
    tui_mouse.pointer_move(console, 30, 3)
    tui_mouse.stop_drag(console)
    assert console.state.status == "Editor resize: left=30 cols"


def test_body_mouse_release_applies_final_position(console_factory):
    console = console_factory()
    assert tui_mouse.handle_body_mouse(console, _mouse(MouseEventType.MOUSE_DOWN, 66, 5)) is None
    tui_mouse.handle_body_mouse(console, _mouse(MouseEventType.MOUSE_UP, 40, 5))
    assert console.state.ratios.main_split == 0.4
    assert console.state.drag == DragTarget.NONE


def test_wheel_moves_selection(console_factory):
    console = console_factory()
    assert tui_mouse.handle_body_mouse(console, _mouse(MouseEventType.SCROLL_DOWN)) is None
    assert console.state.selected == 1
    tui_mouse.handle_body_mouse(console, _mouse(MouseEventType.SCROLL_UP))
    assert console.state.selected == 0


def test_unhandled_events_fall_through(console_factory):
    console = console_factory()
    assert tui_mouse.handle_body_mouse(console, _mouse(MouseEventType.MOUSE_MOVE, 5, 5)) is NotImplemented
    click = _mouse(MouseEventType.MOUSE_DOWN, 30, 5, button=MouseButton.RIGHT)
    assert tui_mouse.handle_body_mouse(console, click) is NotImplemented
