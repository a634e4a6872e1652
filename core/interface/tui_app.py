#!/usr/bin/env python3
"""TUI application - RequestConsoleTUI wires the console into prompt_toolkit."""

import logging
import os
from prompt_toolkit.application import Application
from prompt_toolkit.key_binding import KeyBindings
from prompt_toolkit.keys import Keys
from prompt_toolkit.layout import HSplit, Layout, Window
from prompt_toolkit.layout.dimension import Dimension
from prompt_toolkit.mouse_events import MouseEvent, MouseEventType

from util.responsive import SplitRatios

from .tui_controller import RequestConsole
from .tui_footer import build_footer_text
from .tui_keys import key_press_from_event
from .tui_models import ApplicationDispatcher, InteractiveFormattedTextControl
from .tui_mouse import handle_body_mouse, stop_drag
from .tui_render import render_body
from .tui_status import build_header_text, build_status_text
from .tui_themes import DEFAULT_THEME, build_style

logger = logging.getLogger("tuiman.console")


class RequestConsoleTUI:
    @classmethod
    def build_style(cls, theme: str):
        return build_style(theme)

    def __init__(self, console: RequestConsole, theme: str = DEFAULT_THEME):
        self.console = console
        self.theme_name = theme
        self.style = self.build_style(theme)

        kb = KeyBindings()
        kb.timeout = 0

        @kb.add("c-c", eager=True)
        def _(event):
            self.console.state.quit_requested = True
            event.app.exit()

        @kb.add(Keys.Any, eager=True)
        def _(event):
            press = key_press_from_event(event)
            if press is None:
                return
            self._sync_size()
            self.console.handle_key(press)

        self.header = Window(
            content=InteractiveFormattedTextControl(
                self.get_header_text, show_cursor=False, focusable=False, mouse_handler=self._handle_chrome_mouse
            ),
            height=1,
            always_hide_cursor=True,
        )
        self.body_control = InteractiveFormattedTextControl(
            self.get_body_content, show_cursor=False, focusable=True, mouse_handler=self._handle_body_mouse
        )
        self.main_window = Window(content=self.body_control, always_hide_cursor=True, wrap_lines=False)
        self.status_bar = Window(
            content=InteractiveFormattedTextControl(
                self.get_status_text, show_cursor=False, focusable=False, mouse_handler=self._handle_chrome_mouse
            ),
            height=1,
            always_hide_cursor=True,
        )
        self.footer = Window(
            content=InteractiveFormattedTextControl(
                self.get_footer_text, show_cursor=False, focusable=False, mouse_handler=self._handle_chrome_mouse
            ),
            height=Dimension.exact(1),
            always_hide_cursor=True,
        )

        root = HSplit([self.header, self.main_window, self.status_bar, self.footer])

        self.app = Application(
            layout=Layout(root, focused_element=self.main_window),
            key_bindings=kb,
            style=self.style,
            full_screen=True,
            mouse_support=True,
        )
        # Make Esc responsive: prompt_toolkit defaults ttimeoutlen=0.5s to disambiguate
        # between a standalone Escape and ANSI key sequences (arrows, etc.).
        # Allow override for slow terminals/SSH sessions.
        try:
            self.app.ttimeoutlen = max(0.0, float(os.getenv("TUIMAN_TUI_TTIMEOUTLEN", "0.05")))
        except ValueError:
            self.app.ttimeoutlen = 0.05

        self.console.dispatcher = ApplicationDispatcher(self.app)
        self.console.on_change = self._on_change

    @staticmethod
    def get_terminal_width() -> int:
        """Get current terminal width, default to 100 if unavailable."""
        try:
            return os.get_terminal_size().columns
        except (AttributeError, ValueError, OSError):
            return 100

    @staticmethod
    def get_terminal_height() -> int:
        try:
            return os.get_terminal_size().lines
        except (AttributeError, ValueError, OSError):
            return 40

    def _sync_size(self) -> None:
        try:
            size = self.app.output.get_size()
            width, height = size.columns, size.rows
        except (AttributeError, OSError):
            width, height = self.get_terminal_width(), self.get_terminal_height()
        self.console.resize(width, height)

    def _on_change(self) -> None:
        if self.console.state.quit_requested:
            if self.app.is_running and not self.app.future.done():
                self.app.exit()
            return
        self.app.invalidate()

    def _handle_body_mouse(self, mouse_event: MouseEvent):
        self._sync_size()
        return handle_body_mouse(self.console, mouse_event)

    def _handle_chrome_mouse(self, mouse_event: MouseEvent):
        # releasing the pointer outside the body still ends a drag
        if mouse_event.event_type == MouseEventType.MOUSE_UP and stop_drag(self.console):
            self.console.after_event()
            return None
        return NotImplemented

    def get_header_text(self):
        self._sync_size()
        return build_header_text(self.console)

    def get_body_content(self):
        self._sync_size()
        return render_body(self.console.state)

    def get_status_text(self):
        return build_status_text(self.console)

    def get_footer_text(self):
        return build_footer_text(self.console)

    def run(self) -> SplitRatios:
        """Run until quit; returns the divider ratios so the caller can persist them."""
        self.app.run(pre_run=self.console.start)
        return self.console.state.ratios


__all__ = ["RequestConsoleTUI"]
