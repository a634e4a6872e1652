"""Console state aggregate and the selection/scroll invariants around it."""

from dataclasses import dataclass, field
from typing import List, Optional

from core import RequestItem, RunEntry, cycle_choice
from util.responsive import SplitRatios, clamp

from .constants import (
    Chord,
    DragTarget,
    EDITOR_FIELDS,
    EditorField,
    EditorMode,
    HistoryMode,
    MAIN_IDLE_HINT,
    MainMode,
    Screen,
)


@dataclass
class ResponsePreview:
    """Last response shown in the main screen's bottom pane."""
    request_id: str
    request_name: str
    method: str
    url: str
    status_code: int
    duration_ms: int
    error: str
    at: str
    body: str


@dataclass
class EditorSession:
    draft: RequestItem
    field_index: int = 0
    mode: EditorMode = EditorMode.NORMAL
    insert_buffer: str = ""
    command_buffer: str = ""
    body_scroll: int = 0

    @property
    def field(self) -> EditorField:
        return EDITOR_FIELDS[clamp(self.field_index, 0, len(EDITOR_FIELDS) - 1)]

    def field_value(self, key: Optional[str] = None) -> str:
        return str(getattr(self.draft, key or self.field.key, "") or "")

    def set_field_value(self, value: str) -> None:
        setattr(self.draft, self.field.key, value)

    def move_field(self, delta: int) -> None:
        self.field_index = clamp(self.field_index + delta, 0, len(EDITOR_FIELDS) - 1)

    def cycle_field(self, delta: int) -> bool:
        current = self.field
        if current.choices is None:
            return False
        self.set_field_value(cycle_choice(current.choices, self.field_value(), delta))
        return True


@dataclass
class ConsoleState:
    width: int = 100
    height: int = 40

    screen: Screen = Screen.MAIN
    main_mode: MainMode = MainMode.NORMAL
    history_mode: HistoryMode = HistoryMode.NORMAL
    chord: Chord = Chord.NONE

    requests: List[RequestItem] = field(default_factory=list)
    selected: int = 0
    filter_text: str = ""
    search_input: str = ""
    search_snapshot: str = ""
    search_prefix: str = "/"
    command_input: str = ""

    runs: List[RunEntry] = field(default_factory=list)
    history_selected: int = 0
    history_filter: str = ""
    history_search_input: str = ""
    history_search_snapshot: str = ""

    request_scroll: int = 0
    response_scroll: int = 0
    history_request_scroll: int = 0
    history_response_scroll: int = 0

    last_response: Optional[ResponsePreview] = None
    editor: Optional[EditorSession] = None

    ratios: SplitRatios = field(default_factory=SplitRatios)
    drag: DragTarget = DragTarget.NONE

    status: str = MAIN_IDLE_HINT
    status_error: bool = False
    busy: str = ""
    quit_requested: bool = False

    tracked_request_id: Optional[str] = None
    tracked_run_id: Optional[int] = None

    @property
    def visible_requests(self) -> List[RequestItem]:
        return [item for item in self.requests if item.matches(self.filter_text)]

    @property
    def visible_runs(self) -> List[RunEntry]:
        return [run for run in self.runs if run.matches(self.history_filter)]

    @property
    def selected_request(self) -> Optional[RequestItem]:
        visible = self.visible_requests
        if 0 <= self.selected < len(visible):
            return visible[self.selected]
        return None

    @property
    def selected_run(self) -> Optional[RunEntry]:
        visible = self.visible_runs
        if 0 <= self.history_selected < len(visible):
            return visible[self.history_selected]
        return None


def clamp_index(index: int, total: int) -> int:
    if total <= 0:
        return 0
    return clamp(index, 0, total - 1)


def sync_selection(state: ConsoleState) -> None:
    """Re-clamp selections against the live filtered lists and reset per-entity view state on change."""
    state.selected = clamp_index(state.selected, len(state.visible_requests))
    state.history_selected = clamp_index(state.history_selected, len(state.visible_runs))

    current = state.selected_request
    current_id = current.id if current else None
    if current_id != state.tracked_request_id:
        state.tracked_request_id = current_id
        state.request_scroll = 0
        state.chord = Chord.NONE

    run = state.selected_run
    run_id = run.id if run else None
    if run_id != state.tracked_run_id:
        state.tracked_run_id = run_id
        state.history_request_scroll = 0
        state.history_response_scroll = 0


def select_request_id(state: ConsoleState, request_id: Optional[str]) -> bool:
    if not request_id:
        return False
    for idx, item in enumerate(state.visible_requests):
        if item.id == request_id:
            state.selected = idx
            return True
    return False


def select_run_id(state: ConsoleState, run_id: Optional[int]) -> bool:
    if run_id is None:
        return False
    for idx, run in enumerate(state.visible_runs):
        if run.id == run_id:
            state.history_selected = idx
            return True
    return False


def scroll(value: int, delta: int) -> int:
    """Offsets only floor at zero here; the windowing clamps the upper end when rendering."""
    return max(0, value + delta)


__all__ = [
    "ConsoleState",
    "EditorSession",
    "ResponsePreview",
    "clamp_index",
    "sync_selection",
    "select_request_id",
    "select_run_id",
    "scroll",
]
