"""Pane geometry: split ratios in, concrete cell counts out.

Ratios are stored unclamped; every allocation derived from them is clamped
against the pane minimums, so any terminal size yields non-negative,
non-empty panes.
"""

import math
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, NamedTuple, Optional

MAIN_MIN_LEFT_COLS = 20
MAIN_MIN_RIGHT_COLS = 12
HISTORY_MIN_LEFT_COLS = 22
HISTORY_MIN_RIGHT_COLS = 20
EDITOR_MIN_LEFT_COLS = 24
EDITOR_MIN_RIGHT_COLS = 18
MAIN_MIN_TOP_ROWS = 8
MAIN_MIN_BOTTOM_ROWS = 6

# header + status + footer rows around the body
CHROME_ROWS = 3

MAIN_COMPANION_MIN_WIDTH = 90
HISTORY_COMPANION_MIN_WIDTH = 84
EDITOR_COMPANION_MIN_WIDTH = 90

HISTORY_DETAIL_STEP = 0.04
HISTORY_DETAIL_MIN = 0.32
HISTORY_DETAIL_MAX = 0.75


def clamp(value, lo, hi):
    return max(lo, min(hi, value))


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class DividerSpec:
    name: str
    min_left: int
    min_right: int
    companion_min_width: int


MAIN_VERTICAL = DividerSpec("main-vertical", MAIN_MIN_LEFT_COLS, MAIN_MIN_RIGHT_COLS, MAIN_COMPANION_MIN_WIDTH)
HISTORY_VERTICAL = DividerSpec("history-vertical", HISTORY_MIN_LEFT_COLS, HISTORY_MIN_RIGHT_COLS, HISTORY_COMPANION_MIN_WIDTH)
EDITOR_VERTICAL = DividerSpec("editor-vertical", EDITOR_MIN_LEFT_COLS, EDITOR_MIN_RIGHT_COLS, EDITOR_COMPANION_MIN_WIDTH)


class VerticalSplit(NamedTuple):
    left: int
    right: int
    max_left: int


class HorizontalSplit(NamedTuple):
    content_rows: int
    top_rows: int
    bottom_rows: int
    top_min: int
    bottom_min: int
    max_bottom: int


def content_rows_for(height: int) -> int:
    return max(3, int(height) - CHROME_ROWS)


def max_left_cols(width: int, min_left: int, min_right: int) -> int:
    return max(min_left, int(width) - min_right - 1)


def split_vertical(width: int, ratio: float, min_left: int, min_right: int) -> VerticalSplit:
    """Columns left and right of a one-cell divider."""
    width = max(1, int(width))
    hi = max_left_cols(width, min_left, min_right)
    left = clamp(round_half_up(ratio * width), min_left, hi)
    right = max(min_right, width - left - 1)
    return VerticalSplit(left, right, hi)


def split_horizontal(height: int, ratio: float) -> HorizontalSplit:
    """Rows above and below the main screen's one-row divider; ratio sizes the bottom pane."""
    content = content_rows_for(height)
    top_min = min(MAIN_MIN_TOP_ROWS, max(1, content - MAIN_MIN_BOTTOM_ROWS - 1))
    bottom_min = min(MAIN_MIN_BOTTOM_ROWS, max(1, content - top_min - 1))
    max_bottom = max(bottom_min, content - top_min - 1)
    bottom = clamp(round_half_up(ratio * content), bottom_min, max_bottom)
    top = max(1, content - bottom - 1)
    return HorizontalSplit(content, top, bottom, top_min, bottom_min, max_bottom)


def ratio_from_column(x: float, width: int, min_left: int, min_right: int) -> float:
    """Inverse of split_vertical for a divider dragged to column x."""
    width = max(1, int(width))
    left = clamp(round_half_up(x), min_left, max_left_cols(width, min_left, min_right))
    return left / width


def ratio_from_row(y: float, height: int) -> float:
    """Inverse of split_horizontal for a divider dragged to body row y (0-based)."""
    split = split_horizontal(height, 0.5)
    row = clamp(round_half_up(y), 0, split.content_rows - 1)
    bottom = clamp(split.content_rows - row - 1, split.bottom_min, split.max_bottom)
    return bottom / split.content_rows


def ratio_for_left(left: int, width: int) -> float:
    return left / max(1, int(width))


def ratio_for_bottom(bottom: int, height: int) -> float:
    return bottom / content_rows_for(height)


def history_detail_rows(content_rows: int, ratio: float):
    """(request_rows, response_rows) inside the history detail column."""
    available = max(5, content_rows)
    request_rows = clamp(round_half_up(ratio * (available - 1)), 5, max(5, available - 1 - 4))
    response_rows = max(4, available - request_rows - 1)
    return request_rows, response_rows


@dataclass
class SplitRatios:
    """Divider positions as fractions of the terminal; survive resizes and screen switches."""
    main_split: float = 0.66
    main_response: float = 0.28
    history_split: float = 0.42
    history_detail: float = 0.52
    editor_split: float = 0.5

    def nudge_history_detail(self, delta: float) -> float:
        self.history_detail = clamp(self.history_detail + delta, HISTORY_DETAIL_MIN, HISTORY_DETAIL_MAX)
        return self.history_detail

    def to_dict(self) -> Dict[str, float]:
        return {k: round(v, 4) for k, v in asdict(self).items()}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "SplitRatios":
        ratios = cls()
        for f in fields(cls):
            raw = (data or {}).get(f.name)
            try:
                value = float(raw)
            except (TypeError, ValueError):
                continue
            if 0.0 < value < 1.0:
                setattr(ratios, f.name, value)
        return ratios


@dataclass(frozen=True)
class ScreenGeometry:
    """Concrete allocation for one frame of one screen."""
    width: int
    height: int
    content_rows: int
    show_right: bool
    left: int
    right: int
    max_left: int
    top_rows: int
    bottom_rows: int

    @property
    def list_cols(self) -> int:
        return self.left if self.show_right else self.width


def _geometry(width: int, height: int, ratio: float, divider: DividerSpec, top_rows: int, bottom_rows: int) -> ScreenGeometry:
    width = max(1, int(width))
    show_right = width >= divider.companion_min_width
    split = split_vertical(width, ratio, divider.min_left, divider.min_right)
    return ScreenGeometry(
        width=width,
        height=int(height),
        content_rows=content_rows_for(height),
        show_right=show_right,
        left=split.left if show_right else width,
        right=split.right if show_right else 0,
        max_left=split.max_left,
        top_rows=top_rows,
        bottom_rows=bottom_rows,
    )


def main_geometry(width: int, height: int, ratios: SplitRatios) -> ScreenGeometry:
    h = split_horizontal(height, ratios.main_response)
    return _geometry(width, height, ratios.main_split, MAIN_VERTICAL, h.top_rows, h.bottom_rows)


def history_geometry(width: int, height: int, ratios: SplitRatios) -> ScreenGeometry:
    content = content_rows_for(height)
    request_rows, response_rows = history_detail_rows(content, ratios.history_detail)
    return _geometry(width, height, ratios.history_split, HISTORY_VERTICAL, request_rows, response_rows)


def editor_geometry(width: int, height: int, ratios: SplitRatios) -> ScreenGeometry:
    content = content_rows_for(height)
    return _geometry(width, height, ratios.editor_split, EDITOR_VERTICAL, content, 0)


__all__ = [
    "SplitRatios",
    "ScreenGeometry",
    "DividerSpec",
    "VerticalSplit",
    "HorizontalSplit",
    "MAIN_VERTICAL",
    "HISTORY_VERTICAL",
    "EDITOR_VERTICAL",
    "split_vertical",
    "split_horizontal",
    "ratio_from_column",
    "ratio_from_row",
    "ratio_for_left",
    "ratio_for_bottom",
    "history_detail_rows",
    "content_rows_for",
    "main_geometry",
    "history_geometry",
    "editor_geometry",
    "clamp",
]
