#!/usr/bin/env python3
"""Collaborator bundle, task dispatchers and prompt_toolkit control helpers."""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable

from prompt_toolkit.application import Application, run_in_terminal
from prompt_toolkit.layout.controls import FormattedTextControl
from prompt_toolkit.mouse_events import MouseEvent

from application.ports import (
    Clipboard,
    HistoryRepository,
    RequestExchange,
    RequestExecutor,
    RequestRepository,
    SecretStore,
    TextEditor,
)

Work = Callable[[], Any]
Done = Callable[[Any], None]
Failed = Callable[[BaseException], None]


@dataclass
class ConsoleDeps:
    """External collaborators the console calls but does not implement."""
    requests: RequestRepository
    history: HistoryRepository
    executor: RequestExecutor
    secrets: SecretStore
    exchange: RequestExchange
    editor: TextEditor
    clipboard: Clipboard


class ImmediateDispatcher:
    """Runs collaborator work inline; used by tests and non-interactive callers."""

    def submit(self, work: Work, on_done: Done, on_error: Failed) -> None:
        try:
            result = work()
        except Exception as exc:
            on_error(exc)
            return
        on_done(result)

    def suspend(self, work: Work, on_done: Done, on_error: Failed) -> None:
        self.submit(work, on_done, on_error)


class ApplicationDispatcher:
    """Runs work off the event loop and re-enters the loop for the completion callback.

    Callbacks always execute on the prompt_toolkit event loop, one at a time,
    so they observe the live console state at completion time.
    """

    def __init__(self, app: Application):
        self.app = app

    def submit(self, work: Work, on_done: Done, on_error: Failed) -> None:
        self.app.create_background_task(self._run(work, on_done, on_error, suspend=False))

    def suspend(self, work: Work, on_done: Done, on_error: Failed) -> None:
        self.app.create_background_task(self._run(work, on_done, on_error, suspend=True))

    async def _run(self, work: Work, on_done: Done, on_error: Failed, suspend: bool) -> None:
        try:
            if suspend:
                # renderer is torn down for the subprocess and restored afterwards
                result = await run_in_terminal(work, in_executor=True)
            else:
                result = await asyncio.get_running_loop().run_in_executor(None, work)
        except Exception as exc:
            on_error(exc)
        else:
            on_done(result)
        finally:
            self.app.invalidate()


class InteractiveFormattedTextControl(FormattedTextControl):
    """FormattedTextControl with external mouse handler support."""

    def __init__(self, *args, mouse_handler=None, **kwargs):
        super().__init__(*args, **kwargs)
        self._external_mouse_handler = mouse_handler

    def mouse_handler(self, mouse_event: MouseEvent):
        if self._external_mouse_handler:
            result = self._external_mouse_handler(mouse_event)
            if result is not NotImplemented:
                return result
        return super().mouse_handler(mouse_event)


__all__ = [
    "ConsoleDeps",
    "ImmediateDispatcher",
    "ApplicationDispatcher",
    "InteractiveFormattedTextControl",
]
