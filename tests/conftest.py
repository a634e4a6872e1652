"""In-memory collaborators for driving RequestConsole without a terminal."""

from pathlib import Path
from types import SimpleNamespace

import pytest

from core import HttpResult, RequestItem
from core.interface.tui_controller import RequestConsole
from core.interface.tui_input import KeyPress
from core.interface.tui_models import ConsoleDeps
from core.interface.tui_state import ConsoleState


class FakeRequests:
    def __init__(self, items=()):
        self.items = list(items)
        self.saved = []
        self.deleted = []
        self.list_calls = 0

    def list(self):
        self.list_calls += 1
        return list(self.items)

    def save(self, item):
        stored = item.copy(id=item.id or f"req-{len(self.saved) + 1}", name=item.name or "New Request")
        self.saved.append(stored)
        self.items = [i for i in self.items if i.id != stored.id] + [stored]
        return stored

    def delete(self, request_id):
        self.deleted.append(request_id)
        before = len(self.items)
        self.items = [i for i in self.items if i.id != request_id]
        return len(self.items) != before


class FakeHistory:
    def __init__(self, runs=()):
        self.runs = list(runs)
        self.recorded = []

    def list(self, limit=200):
        return list(self.runs)[:limit]

    def record(self, run):
        run_id = len(self.recorded) + 100
        self.recorded.append(run)
        self.runs.insert(0, run.__class__(**{**run.to_dict(), "id": run_id}))
        return run_id


class FakeExecutor:
    def __init__(self, result=None):
        self.result = result or HttpResult(status_code=200, duration_ms=12, body='{"ok": true}')
        self.calls = []

    def execute(self, item):
        self.calls.append(item)
        return self.result


class FakeSecrets:
    def __init__(self, error=None):
        self.values = {}
        self.error = error

    def get_secret(self, ref):
        return self.values.get(ref)

    def set_secret(self, ref, value):
        if self.error:
            raise self.error
        self.values[ref] = value


class FakeExchange:
    def __init__(self, imported=0):
        self.imported = imported
        self.export_calls = []
        self.import_calls = []

    def export_all(self, target_dir=None):
        self.export_calls.append(target_dir)
        return SimpleNamespace(directory=target_dir or Path("tuiman-export"), count=2, scrubbed_count=1)

    def import_all(self, source_dir):
        self.import_calls.append(source_dir)
        return self.imported


class FakeEditor:
    def __init__(self, result=None):
        self.result = result
        self.seen = []

    def edit(self, text):
        self.seen.append(text)
        return self.result


class FakeClipboard:
    def __init__(self, text="", error=None):
        self.text = text
        self.error = error
        self.written = []

    def read_text(self):
        if self.error:
            raise self.error
        return self.text

    def write_text(self, text):
        if self.error:
            raise self.error
        self.written.append(text)


def make_deps(items=(), runs=(), **overrides):
    deps = dict(
        requests=FakeRequests(items),
        history=FakeHistory(runs),
        executor=FakeExecutor(),
        secrets=FakeSecrets(),
        exchange=FakeExchange(),
        editor=FakeEditor(),
        clipboard=FakeClipboard(),
    )
    deps.update(overrides)
    return ConsoleDeps(**deps)


def sample_items():
    return [
        RequestItem(id="a", name="Alpha", method="GET", url="http://api/alpha"),
        RequestItem(id="b", name="Beta", method="POST", url="http://api/beta", body='{"x": 1}'),
        RequestItem(id="c", name="Gamma", method="DELETE", url="http://api/gamma"),
    ]


def key(ch: str) -> KeyPress:
    return KeyPress(sequence=ch, name=ch)


ESC = KeyPress(sequence="\x1b", name="escape")
ENTER = KeyPress(sequence="\r", name="return")
BACKSPACE = KeyPress(sequence="\x7f", name="backspace")
DOWN = KeyPress(sequence="\x1b[B", name="down")


def ctrl(letter: str) -> KeyPress:
    return KeyPress(sequence=chr(ord(letter) - 96), name=letter, ctrl=True)


def press(console, *keys):
    for item in keys:
        if isinstance(item, str):
            for ch in item:
                console.handle_key(key(ch))
        else:
            console.handle_key(item)


@pytest.fixture
def console_factory():
    def build(items=None, runs=(), width=100, height=40, **overrides):
        deps = make_deps(sample_items() if items is None else items, runs, **overrides)
        console = RequestConsole(deps, state=ConsoleState(width=width, height=height))
        console.start()
        return console

    return build
