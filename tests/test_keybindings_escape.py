from types import SimpleNamespace

import pytest
from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.key_binding.key_processor import KeyPress as PtKeyPress
from prompt_toolkit.keys import Keys
from prompt_toolkit.output import DummyOutput

from core.interface.tui_app import RequestConsoleTUI
from core.interface.tui_models import ApplicationDispatcher


@pytest.fixture
def tui(console_factory):
    with create_pipe_input() as pipe, create_app_session(input=pipe, output=DummyOutput()):
        yield RequestConsoleTUI(console_factory())


def _bindings_for(tui, key):
    return [b for b in tui.app.key_bindings.bindings if any(k == key for k in b.keys)]


def test_escape_does_not_wait_for_sequences(tui):
    assert tui.app.key_bindings.timeout == 0


def test_catch_all_binding_is_eager(tui):
    found = _bindings_for(tui, Keys.Any)
    assert found
    assert all(b.eager() for b in found)


def test_ttimeoutlen_env_override(console_factory, monkeypatch):
    monkeypatch.setenv("TUIMAN_TUI_TTIMEOUTLEN", "0.2")
    with create_pipe_input() as pipe, create_app_session(input=pipe, output=DummyOutput()):
        assert RequestConsoleTUI(console_factory()).app.ttimeoutlen == 0.2
    monkeypatch.setenv("TUIMAN_TUI_TTIMEOUTLEN", "slow")
    with create_pipe_input() as pipe, create_app_session(input=pipe, output=DummyOutput()):
        assert RequestConsoleTUI(console_factory()).app.ttimeoutlen == 0.05


def test_console_is_wired_to_the_application(tui):
    assert isinstance(tui.console.dispatcher, ApplicationDispatcher)
    assert tui.console.on_change is not None


def test_key_events_reach_the_console(tui):
    [binding] = _bindings_for(tui, Keys.Any)
    binding.handler(SimpleNamespace(key_sequence=[PtKeyPress("j", "j")], app=tui.app))
    assert tui.console.state.selected == 1
    binding.handler(SimpleNamespace(key_sequence=[PtKeyPress(Keys.CPRResponse, "\x1b[1;1R")], app=tui.app))
    assert tui.console.state.selected == 1


def test_body_content_renders_current_state(tui):
    body = tui.get_body_content()
    text = "".join(fragment[1] for fragment in body)
    assert "Alpha" in text
    assert tui.console.state.width == 80
