from types import SimpleNamespace

from prompt_toolkit.mouse_events import MouseButton, MouseEventType

from core.interface.constants import ACTION_PROMPT, HISTORY_IDLE_HINT, DragTarget, Screen
from core.interface.tui_status import bottom_prompt, build_header_text, build_status_text, status_line

from conftest import ENTER, press


def test_prompts_follow_mode(console_factory):
    console = console_factory()
    press(console, "/", "al")
    assert bottom_prompt(console.state) == "/al"
    press(console, ENTER, "?")
    assert bottom_prompt(console.state) == "?al"
    press(console, ENTER, ":", "hist")
    assert bottom_prompt(console.state) == ":hist"


def test_action_and_delete_prompts(console_factory):
    console = console_factory()
    press(console, ENTER)
    assert status_line(console.state) == ("class:input", ACTION_PROMPT)
    press(console, "n", "d")
    assert bottom_prompt(console.state) == "Delete 'Alpha'? y/n"


def test_editor_prompts(console_factory):
    console = console_factory()
    press(console, "E", "i")
    assert bottom_prompt(console.state) == "[EDITOR MODE] INSERT Name: Alpha"
    press(console, ENTER, ":w")
    assert bottom_prompt(console.state) == ":w"


def test_status_priority(console_factory):
    console = console_factory()
    console.state.busy = "Sending GET http://api/alpha"
    assert status_line(console.state) == ("class:status.busy", "Sending GET http://api/alpha...")
    console.state.busy = ""
    console.set_status_message("boom", error=True)
    assert status_line(console.state) == ("class:status.error", "boom")
    console.set_status_message("")
    console.state.screen = Screen.HISTORY
    assert status_line(console.state) == ("class:status", HISTORY_IDLE_HINT)


def test_status_text_fits_width(console_factory):
    console = console_factory(width=20)
    console.set_status_message("x" * 50)
    [(style, text)] = build_status_text(console)
    assert style == "class:status"
    assert len(text) == 20
    assert text.endswith("...")


def test_header_shows_screen_and_mode(console_factory):
    console = console_factory()
    text = "".join(part[1] for part in build_header_text(console))
    assert text.startswith(" tuiman MAIN NORMAL")
    assert len(text) == 100


def test_header_back_link_returns_to_main(console_factory):
    console = console_factory()
    console.state.screen = Screen.HISTORY
    parts = build_header_text(console)
    back = [part for part in parts if len(part) == 3]
    assert back and back[0][1] == "[< back] "
    handler = back[0][2]
    release = SimpleNamespace(event_type=MouseEventType.MOUSE_UP, button=MouseButton.LEFT)
    assert handler(SimpleNamespace(event_type=MouseEventType.MOUSE_MOVE, button=MouseButton.LEFT)) is NotImplemented
    handler(release)
    assert console.state.screen == Screen.MAIN


def test_header_release_ends_drag_first(console_factory):
    console = console_factory()
    console.state.screen = Screen.HISTORY
    console.state.drag = DragTarget.HISTORY_VERTICAL
    handler = [part for part in build_header_text(console) if len(part) == 3][0][2]
    handler(SimpleNamespace(event_type=MouseEventType.MOUSE_UP, button=MouseButton.LEFT))
    assert console.state.drag == DragTarget.NONE
    assert console.state.screen == Screen.HISTORY
