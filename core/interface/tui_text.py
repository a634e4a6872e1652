"""Fixed-size text blocks: hard wrapping, windowing, trimming and padding.

All helpers floor widths and line counts to 1 so degenerate pane sizes
never produce empty or negative slices.
"""

import re
from typing import List, NamedTuple

from wcwidth import wcwidth

ELLIPSIS = "..."

_LINE_SPLIT = re.compile(r"\r?\n")
TAB_SIZE = 4


def display_width(text: str) -> int:
    """Printable width of text, counting wide characters as two cells."""
    width = 0
    for ch in text or "":
        w = wcwidth(ch)
        width += w if w and w > 0 else 0
    return width


def _trim_cells(text: str, width: int) -> str:
    acc = []
    used = 0
    for ch in text:
        w = wcwidth(ch) or 0
        if w < 0:
            w = 0
        if used + w > width:
            break
        acc.append(ch)
        used += w
    return "".join(acc)


def trim_to(text: str, width: int) -> str:
    """Cut text to width cells, marking the cut with a trailing ellipsis."""
    text = text or ""
    width = max(0, width)
    if display_width(text) <= width:
        return text
    return _trim_cells(text, max(0, width - len(ELLIPSIS))) + ELLIPSIS


def fit_to(text: str, width: int) -> str:
    """trim_to, then right-pad to exactly width cells (minimum 1)."""
    width = max(1, width)
    trimmed = trim_to(text, width)
    if display_width(trimmed) > width:
        trimmed = _trim_cells(trimmed, width)
    return trimmed + " " * (width - display_width(trimmed))


def _chunks(line: str, width: int) -> List[str]:
    if not line:
        return [" " * width]
    return [line[i : i + width].ljust(width) for i in range(0, len(line), width)]


def wrap_lines(text: str, width: int) -> List[str]:
    """Split on line breaks and hard-wrap every line into width-sized, space-padded chunks."""
    width = max(1, width)
    wrapped: List[str] = []
    for raw in _LINE_SPLIT.split(text or ""):
        # the terminal draws tab and lone CR as two-cell ^I / ^M
        wrapped.extend(_chunks(raw.expandtabs(TAB_SIZE).replace("\r", ""), width))
    return wrapped


def window_lines(lines: List[str], offset: int, max_lines: int, width: int = 1) -> List[str]:
    """Exactly max_lines rows starting at offset (clamped into the buffer), blank-padded."""
    width = max(1, width)
    max_lines = max(1, max_lines)
    blank = " " * width
    if not lines:
        return [blank] * max_lines
    start = max(0, min(offset, len(lines) - 1))
    window = list(lines[start : start + max_lines])
    window.extend([blank] * (max_lines - len(window)))
    return window


def body_window(text: str, offset: int, max_lines: int, width: int) -> List[str]:
    return window_lines(wrap_lines(text, width), offset, max_lines, width)


def wrap_fixed(text: str, width: int, max_lines: int) -> List[str]:
    """Chunk a single-line value into at most max_lines rows, ellipsis on overflow."""
    width = max(1, width)
    max_lines = max(1, max_lines)
    source = (text or "").replace("\r", " ").replace("\n", " ")
    chunks = _chunks(source, width)
    if len(chunks) > max_lines:
        chunks = chunks[:max_lines]
        tail = chunks[-1].rstrip()
        chunks[-1] = fit_to(tail[: max(0, width - len(ELLIPSIS))] + ELLIPSIS, width)
    chunks.extend([" " * width] * (max_lines - len(chunks)))
    return chunks


class LabelValue(NamedTuple):
    label: str
    label_width: int
    value_width: int
    lines: List[str]


def wrap_label_value(label: str, value: str, total_width: int, max_lines: int) -> LabelValue:
    """Lay out 'label: value' with the value wrapped in the space left of total_width."""
    label_width = len(label) + 1
    value_width = max(1, total_width - label_width)
    return LabelValue(label, label_width, value_width, wrap_fixed(value, value_width, max_lines))


__all__ = [
    "display_width",
    "trim_to",
    "fit_to",
    "wrap_lines",
    "window_lines",
    "body_window",
    "wrap_fixed",
    "wrap_label_value",
    "LabelValue",
]
