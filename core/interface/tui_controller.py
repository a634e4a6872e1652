#!/usr/bin/env python3
"""RequestConsole: the modal state machine that owns ConsoleState.

Every key and mouse event lands here, mutates the state in one go and
schedules collaborator work through the dispatcher. Completion callbacks
re-enter through the same object and read the live state, never a copy
captured at launch.
"""

import logging
from pathlib import Path
from typing import Callable, Optional

from core import (
    HistoryError,
    HttpResult,
    RequestItem,
    RunEntry,
    TuimanError,
    ValidationError,
    build_request_snapshot,
)
from infrastructure.file_repository import now_iso

from .constants import (
    ACTION_PROMPT,
    AUTH_FIELD_INDEX,
    Chord,
    HISTORY_IDLE_HINT,
    HISTORY_LIMIT,
    HistoryMode,
    MAIN_IDLE_HINT,
    MainMode,
    Screen,
)
from .tui_commands import run_main_command
from .tui_editing import close_editor, handle_editor_key, open_editor, pretty_json_body, validate_draft
from .tui_input import (
    BACKSPACE,
    CHAR,
    CLEAR,
    CONTROL,
    ENTER,
    ESCAPE,
    PASTE,
    InputAction,
    KeyPress,
    classify,
    normalize_chunk,
    printable_char,
)
from .tui_models import ConsoleDeps, ImmediateDispatcher
from .tui_navigation import (
    jump_selection,
    move_vertical_selection,
    nudge_history_detail,
    nudge_history_left,
    nudge_main_left,
    nudge_main_response,
)
from .tui_state import ConsoleState, ResponsePreview, scroll, select_request_id, select_run_id, sync_selection

logger = logging.getLogger("tuiman.console")

# collaborator failures that become status text instead of crashing the loop
COLLABORATOR_ERRORS = (TuimanError, OSError, ValueError)


class RequestConsole:
    def __init__(self, deps: ConsoleDeps, state: Optional[ConsoleState] = None, dispatcher=None):
        self.deps = deps
        self.state = state or ConsoleState()
        self.dispatcher = dispatcher or ImmediateDispatcher()
        self.on_change: Optional[Callable[[], None]] = None

    # ------------------------------------------------------------------ status

    def set_status_message(self, message: str, error: bool = False) -> None:
        self.state.status = message
        self.state.status_error = error

    def after_event(self) -> None:
        sync_selection(self.state)
        if self.on_change:
            self.on_change()

    def resize(self, width: int, height: int) -> None:
        self.state.width = max(1, int(width))
        self.state.height = max(1, int(height))

    def _report_failure(self, prefix: str, exc: BaseException) -> None:
        logger.warning("%s: %s", prefix, exc)
        self.set_status_message(f"{prefix}: {exc}", error=True)

    def _run(self, label: str, work, on_done, failure_prefix: str, suspend: bool = False) -> None:
        """Schedule collaborator work; callbacks clear the busy label and re-sync selection."""
        state = self.state
        if label:
            state.busy = label

        def done(result):
            if state.busy == label:
                state.busy = ""
            on_done(result)
            self.after_event()

        def failed(exc: BaseException):
            if state.busy == label:
                state.busy = ""
            self._report_failure(failure_prefix, exc)
            self.after_event()

        if suspend:
            self.dispatcher.suspend(work, done, failed)
        else:
            self.dispatcher.submit(work, done, failed)

    # ------------------------------------------------------------------ buffers

    def edit_buffer(self, value: str, action: Optional[InputAction]) -> Optional[str]:
        """Apply a textual action to a bottom-bar buffer; None means the buffer is unchanged."""
        if action is None:
            return None
        if action.kind in (CHAR, PASTE):
            return value + action.text
        if action.kind == BACKSPACE:
            return value[:-1]
        if action.kind == CLEAR:
            return ""
        if action.kind == CONTROL and action.text == "v":
            return self._paste_into(value)
        if action.kind == CONTROL and action.text == "y":
            self._copy_from(value)
        return None

    def _paste_into(self, value: str) -> Optional[str]:
        try:
            raw = self.deps.clipboard.read_text()
        except COLLABORATOR_ERRORS as exc:
            self._report_failure("Paste failed", exc)
            return None
        chunk = normalize_chunk(raw)
        if not chunk:
            self.set_status_message("Paste failed: clipboard is empty or non-printable.", error=True)
            return None
        return value + chunk

    def _copy_from(self, value: str) -> None:
        try:
            self.deps.clipboard.write_text(value)
        except COLLABORATOR_ERRORS as exc:
            self._report_failure("Copy failed", exc)
            return
        self.set_status_message("Copied bottom input to system clipboard.")

    # ------------------------------------------------------------------ keys

    def handle_key(self, key: KeyPress) -> None:
        action = classify(key)
        screen = self.state.screen
        if screen == Screen.EDITOR:
            handle_editor_key(self, key, action)
        elif screen == Screen.HISTORY:
            self._handle_history_key(key, action)
        elif screen == Screen.HELP:
            self._handle_help_key(key, action)
        else:
            self._handle_main_key(key, action)
        self.after_event()

    def _take_chord(self, ch: Optional[str]) -> bool:
        """Resolve g/G chords shared by both list screens; True when the key was consumed."""
        state = self.state
        pending = state.chord
        state.chord = Chord.NONE
        if ch == "g":
            if pending == Chord.G:
                jump_selection(self, last=False)
            else:
                state.chord = Chord.G
            return True
        if ch == "G":
            jump_selection(self, last=True)
            return True
        if ch == "Z" and pending != Chord.Z:
            state.chord = Chord.Z
            return True
        return False

    def _handle_main_key(self, key: KeyPress, action: Optional[InputAction]) -> None:
        state = self.state
        kind = action.kind if action else ""
        mode = state.main_mode

        if mode == MainMode.SEARCH:
            if kind == ESCAPE:
                state.filter_text = state.search_snapshot
                state.search_input = ""
                state.main_mode = MainMode.NORMAL
                self.set_status_message(MAIN_IDLE_HINT)
            elif kind == ENTER:
                state.main_mode = MainMode.NORMAL
                self.set_status_message(f"Filter locked: {state.filter_text or '(none)'}")
            else:
                updated = self.edit_buffer(state.search_input, action)
                if updated is not None:
                    state.search_input = updated
                    state.filter_text = updated
            return

        if mode == MainMode.COMMAND:
            if kind == ESCAPE:
                state.command_input = ""
                state.main_mode = MainMode.NORMAL
                self.set_status_message(MAIN_IDLE_HINT)
            elif kind == ENTER:
                line = state.command_input
                state.command_input = ""
                state.main_mode = MainMode.NORMAL
                run_main_command(self, line)
            else:
                updated = self.edit_buffer(state.command_input, action)
                if updated is not None:
                    state.command_input = updated
            return

        ch = printable_char(key)
        if mode == MainMode.ACTION:
            if ch == "y":
                state.main_mode = MainMode.NORMAL
                self.send_selected()
            elif ch == "e":
                state.main_mode = MainMode.NORMAL
                self.edit_selected_body()
            elif ch == "a":
                state.main_mode = MainMode.NORMAL
                selected = state.selected_request
                if selected is None:
                    self.set_status_message("No request selected.", error=True)
                else:
                    open_editor(self, selected, AUTH_FIELD_INDEX)
            elif ch == "n" or kind == ESCAPE:
                state.main_mode = MainMode.NORMAL
                self.set_status_message(MAIN_IDLE_HINT)
            return

        if mode == MainMode.DELETE_CONFIRM:
            if ch == "y":
                state.main_mode = MainMode.NORMAL
                self.delete_selected()
            elif ch == "n" or kind == ESCAPE:
                state.main_mode = MainMode.NORMAL
                self.set_status_message("Delete cancelled.")
            return

        self._handle_main_normal(ch, kind)

    def _handle_main_normal(self, ch: Optional[str], kind: str) -> None:
        state = self.state
        if state.chord == Chord.Z and ch in ("Z", "Q"):
            state.chord = Chord.NONE
            state.quit_requested = True
            return
        if self._take_chord(ch):
            return

        if kind == ESCAPE:
            state.filter_text = ""
            state.search_input = ""
            self.set_status_message(MAIN_IDLE_HINT)
        elif kind == ENTER:
            if state.selected_request is None:
                self.set_status_message("No request selected.", error=True)
                return
            state.main_mode = MainMode.ACTION
            self.set_status_message(ACTION_PROMPT)
        elif kind == "down" or ch == "j":
            move_vertical_selection(self, 1)
        elif kind == "up" or ch == "k":
            move_vertical_selection(self, -1)
        elif ch in ("/", "?"):
            state.search_snapshot = state.filter_text
            state.search_input = state.filter_text
            state.search_prefix = ch
            state.main_mode = MainMode.SEARCH
        elif ch == ":":
            state.command_input = ""
            state.main_mode = MainMode.COMMAND
        elif ch == "d":
            if state.selected_request is None:
                self.set_status_message("No selected request to delete.", error=True)
                return
            state.main_mode = MainMode.DELETE_CONFIRM
        elif ch == "E":
            selected = state.selected_request
            if selected is None:
                self.set_status_message("No selected request to edit.", error=True)
                return
            open_editor(self, selected, 0)
        elif ch == "H":
            nudge_main_left(self, -1)
        elif ch == "L":
            nudge_main_left(self, 1)
        elif ch == "K":
            nudge_main_response(self, 1)
        elif ch == "J":
            nudge_main_response(self, -1)
        elif ch == "{":
            state.request_scroll = scroll(state.request_scroll, -1)
        elif ch == "}":
            state.request_scroll = scroll(state.request_scroll, 1)
        elif ch == "[":
            state.response_scroll = scroll(state.response_scroll, -1)
        elif ch == "]":
            state.response_scroll = scroll(state.response_scroll, 1)

    def _handle_history_key(self, key: KeyPress, action: Optional[InputAction]) -> None:
        state = self.state
        kind = action.kind if action else ""

        if state.history_mode == HistoryMode.SEARCH:
            if kind == ESCAPE:
                state.history_filter = state.history_search_snapshot
                state.history_search_input = ""
                state.history_mode = HistoryMode.NORMAL
                self.set_status_message(HISTORY_IDLE_HINT)
            elif kind == ENTER:
                state.history_mode = HistoryMode.NORMAL
                self.set_status_message(f"History filter locked: {state.history_filter or '(none)'}")
            else:
                updated = self.edit_buffer(state.history_search_input, action)
                if updated is not None:
                    state.history_search_input = updated
                    state.history_filter = updated
            return

        ch = printable_char(key)
        if self._take_chord(ch if ch != "Z" else None):
            return

        if kind == ESCAPE or ch == "q":
            state.screen = Screen.MAIN
            self.set_status_message(MAIN_IDLE_HINT)
        elif ch == "/":
            state.history_search_snapshot = state.history_filter
            state.history_search_input = state.history_filter
            state.history_mode = HistoryMode.SEARCH
        elif kind == "down" or ch == "j":
            move_vertical_selection(self, 1)
        elif kind == "up" or ch == "k":
            move_vertical_selection(self, -1)
        elif ch == "r":
            self.replay_selected_run()
        elif ch == "H":
            nudge_history_left(self, -1)
        elif ch == "L":
            nudge_history_left(self, 1)
        elif ch == "K":
            nudge_history_detail(self, grow_response=True)
        elif ch == "J":
            nudge_history_detail(self, grow_response=False)
        elif ch == "{":
            state.history_request_scroll = scroll(state.history_request_scroll, -1)
        elif ch == "}":
            state.history_request_scroll = scroll(state.history_request_scroll, 1)
        elif ch == "[":
            state.history_response_scroll = scroll(state.history_response_scroll, -1)
        elif ch == "]":
            state.history_response_scroll = scroll(state.history_response_scroll, 1)

    def _handle_help_key(self, key: KeyPress, action: Optional[InputAction]) -> None:
        if (action and action.kind == ESCAPE) or printable_char(key) == "q":
            self.state.screen = Screen.MAIN
            self.set_status_message(MAIN_IDLE_HINT)

    # ------------------------------------------------------------------ collaborator flows

    def start(self) -> None:
        """Initial load of saved requests and recent runs."""
        def loaded(items):
            self.state.requests = list(items)
            self.set_status_message(f"Loaded {len(self.state.requests)} request(s).")
            self.reload_history()

        self._run("Loading requests", self.deps.requests.list, loaded, "Failed to load requests")

    def reload_requests(self, select_id: Optional[str] = None, then: Optional[Callable[[], None]] = None) -> None:
        def loaded(items):
            self.state.requests = list(items)
            select_request_id(self.state, select_id)
            sync_selection(self.state)
            if then:
                then()

        self._run("", self.deps.requests.list, loaded, "Failed to load requests")

    def reload_history(
        self,
        run_id: Optional[int] = None,
        then: Optional[Callable[[], None]] = None,
        failure_prefix: str = "Failed to load history",
    ) -> None:
        def loaded(runs):
            self.state.runs = list(runs)
            select_run_id(self.state, run_id)
            sync_selection(self.state)
            if then:
                then()

        self._run("", lambda: self.deps.history.list(HISTORY_LIMIT), loaded, failure_prefix)

    def open_history(self) -> None:
        def shown():
            self.state.screen = Screen.HISTORY
            self.state.history_mode = HistoryMode.NORMAL
            self.set_status_message("History loaded.")

        self.reload_history(then=shown)

    def send_selected(self) -> None:
        selected = self.state.selected_request
        if selected is None:
            self.set_status_message("No request selected.", error=True)
            return
        self.send_request(selected)

    def send_request(self, item: RequestItem, then: Optional[Callable[[RunEntry], None]] = None) -> None:
        """Execute a request, record the run and publish it as the last response."""
        def work():
            send_error = ""
            try:
                result = self.deps.executor.execute(item)
            except COLLABORATOR_ERRORS as exc:
                logger.warning("executor raised for %s %s: %s", item.method, item.url, exc)
                send_error = str(exc)
                result = HttpResult(error=send_error)
            run = RunEntry(
                request_id=item.id,
                request_name=item.name,
                method=item.method,
                url=item.url,
                status_code=result.status_code,
                duration_ms=result.duration_ms,
                error=result.error,
                created_at=now_iso(),
                request_snapshot=build_request_snapshot(item),
                response_body=result.body,
            )
            record_error = ""
            try:
                run.id = self.deps.history.record(run)
            except (HistoryError, OSError) as exc:
                logger.warning("failed to record run for %s: %s", item.id, exc)
                record_error = str(exc)
            return run, send_error, record_error

        def finished(outcome):
            run, send_error, record_error = outcome
            state = self.state
            state.last_response = ResponsePreview(
                request_id=item.id,
                request_name=item.name,
                method=item.method,
                url=item.url,
                status_code=run.status_code,
                duration_ms=run.duration_ms,
                error=run.error,
                at=run.created_at,
                body=run.response_body,
            )
            state.response_scroll = 0
            if state.screen == Screen.HISTORY:
                self.reload_history(run_id=run.id or None)
            if send_error:
                self.set_status_message(f"Failed to send request: {send_error}", error=True)
            elif run.error:
                self.set_status_message(f"Request finished with error: {run.error}", error=True)
            else:
                self.set_status_message(f"Sent {item.method} {item.url} ({run.status_code}, {run.duration_ms}ms)")
            if record_error:
                self.set_status_message(f"History write failed: {record_error}", error=True)
            if then:
                then(run)

        self._run(f"Sending {item.method} {item.url}", work, finished, "Failed to send request")

    def delete_selected(self) -> None:
        selected = self.state.selected_request
        if selected is None:
            self.set_status_message("No selected request to delete.", error=True)
            return

        def deleted(_):
            self.reload_requests(then=lambda: self.set_status_message("Request deleted."))

        self._run(f"Deleting {selected.name}", lambda: self.deps.requests.delete(selected.id), deleted, "Delete failed")

    def edit_selected_body(self) -> None:
        selected = self.state.selected_request
        if selected is None:
            self.set_status_message("No selected request for body edit.", error=True)
            return

        def edited(text):
            if text is None:
                self.set_status_message("External editor exited non-zero.", error=True)
                return
            try:
                body = pretty_json_body(text)
            except ValidationError as exc:
                self.set_status_message(str(exc), error=True)
                return
            self._run(
                f"Saving {selected.name}",
                lambda: self.deps.requests.save(selected.copy(body=body)),
                lambda saved: self.reload_requests(
                    select_id=saved.id,
                    then=lambda: self.set_status_message(f"Body updated for {saved.name}."),
                ),
                "Body save failed",
            )

        self._run("", lambda: self.deps.editor.edit(selected.body or ""), edited, "External editor failed", suspend=True)

    def edit_draft_body(self) -> None:
        session = self.state.editor
        if session is None:
            self.set_status_message("No editor draft for body edit.", error=True)
            return

        def edited(text):
            if text is None:
                self.set_status_message("External editor exited non-zero.", error=True)
                return
            try:
                body = pretty_json_body(text)
            except ValidationError as exc:
                self.set_status_message(str(exc), error=True)
                return
            # the session may have been closed while the editor ran
            if self.state.editor is not None:
                self.state.editor.draft.body = body
                self.set_status_message("Editor body updated from external editor.")

        self._run("", lambda: self.deps.editor.edit(session.draft.body or ""), edited, "External editor failed", suspend=True)

    def replay_selected_run(self) -> None:
        run = self.state.selected_run
        if run is None:
            self.set_status_message("No run selected.", error=True)
            return

        def listed(items):
            request = next((item for item in items if item.id == run.request_id), None)
            if request is None:
                self.set_status_message(f"Request no longer exists for run {run.id}.", error=True)
                return

            def replayed(_):
                self.state.screen = Screen.MAIN
                self.set_status_message(f"Replayed {request.name}.")

            self.send_request(request, then=replayed)

        self._run("", self.deps.requests.list, listed, "Replay failed")

    def save_editor_draft(self) -> None:
        session = self.state.editor
        if session is None:
            close_editor(self, "No draft to save.", error=True)
            return
        try:
            draft = validate_draft(session.draft)
        except ValidationError as exc:
            self.set_status_message(str(exc), error=True)
            return

        def failed(exc):
            logger.warning("save failed: %s", exc)
            close_editor(self, f"Save failed: {exc}", error=True)
            self.after_event()

        def done(item):
            self.reload_requests(select_id=item.id, then=lambda: close_editor(self, f"Saved {item.name}."))
            self.after_event()

        self.dispatcher.submit(lambda: self.deps.requests.save(draft), done, failed)

    def store_secret(self, ref: str, value: str) -> None:
        self._run(
            "Storing secret",
            lambda: self.deps.secrets.set_secret(ref, value),
            lambda _: self.set_status_message(f"Stored secret for ref '{ref}'."),
            "Secret write failed",
        )

    def export_requests(self, target_dir: Optional[Path] = None) -> None:
        def exported(result):
            self.set_status_message(
                f"Exported {result.count} request(s) to {result.directory} "
                f"(scrubbed {result.scrubbed_count} secret ref(s))."
            )

        self._run("Exporting", lambda: self.deps.exchange.export_all(target_dir), exported, "Export failed")

    def import_requests(self, source_dir: Path) -> None:
        def imported(count):
            self.reload_requests(then=lambda: self.set_status_message(f"Imported {count} request(s) from {source_dir}."))

        self._run("Importing", lambda: self.deps.exchange.import_all(source_dir), imported, "Import failed")


__all__ = ["RequestConsole", "COLLABORATOR_ERRORS"]
