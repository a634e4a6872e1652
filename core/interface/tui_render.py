"""Body renderers: one FormattedText per screen, exactly content_rows lines tall."""

from typing import List, Optional, Tuple

from prompt_toolkit.formatted_text import FormattedText

from core import RequestItem, RunEntry, looks_like_json, parse_request_snapshot, status_style
from util.responsive import content_rows_for, editor_geometry, history_geometry, main_geometry

from .constants import EDITOR_FIELDS, HELP_LINES, EditorMode, Screen
from .tui_state import ConsoleState, ResponsePreview
from .tui_text import body_window, display_width, fit_to, wrap_label_value
from .tui_themes import method_style
from .tui_tokens import tokenize_line

Fragments = List[Tuple[str, str]]

DIVIDER_V = "│"
DIVIDER_H = "─"


def _plain(text: str, width: int, style: str = "class:text") -> Fragments:
    return [(style, fit_to(text, width))]


def _titled(title: str, width: int) -> Fragments:
    return [("class:section", fit_to(title, width))]


def _rule(width: int, title: str = "") -> Fragments:
    width = max(1, width)
    label = f"{DIVIDER_H} {title} " if title else ""
    if display_width(label) >= width:
        label = ""
    return [("class:divider", label + DIVIDER_H * (width - display_width(label)))]


def _code_lines(text: str, offset: int, rows: int, width: int, highlight: bool) -> List[Fragments]:
    """Windowed body text; JSON-looking bodies get token colouring."""
    lines = body_window(text, offset, rows, width)
    if not highlight:
        return [[("class:text", line)] for line in lines]
    return [[(f"class:json.{style}", chunk) for chunk, style in tokenize_line(line)] for line in lines]


def _method_url(method: str, url: str, width: int, max_lines: int = 2) -> List[Fragments]:
    """Method label followed by the URL, wrapped onto continuation rows under the label."""
    laid = wrap_label_value(method, url, width, max_lines)
    rows = []
    for idx, chunk in enumerate(laid.lines):
        if idx == 0:
            rows.append([(method_style(method), f"{method} "), ("class:text", chunk)])
        else:
            rows.append([("class:text", " " * laid.label_width + chunk)])
    return rows


def _fill(rows: List[Fragments], count: int, width: int) -> List[Fragments]:
    """Cut or pad a pane to exactly count rows."""
    rows = rows[:count]
    while len(rows) < count:
        rows.append(_plain("", width))
    return rows


def _side_by_side(left: List[Fragments], right: Optional[List[Fragments]]) -> List[Fragments]:
    if right is None:
        return left
    return [l + [("class:divider", DIVIDER_V)] + r for l, r in zip(left, right)]


def _list_window(selected: int, total: int, rows: int) -> int:
    """First visible row index that keeps the selection on screen."""
    if total <= rows or selected < rows:
        return 0
    return min(selected - rows + 1, total - rows)


def to_formatted(lines: List[Fragments]) -> FormattedText:
    parts: Fragments = []
    for idx, line in enumerate(lines):
        if idx:
            parts.append(("", "\n"))
        parts.extend(line)
    return FormattedText(parts)


# ---------------------------------------------------------------- main screen


def request_row(item: RequestItem, width: int, selected: bool) -> Fragments:
    marker = "> " if selected else "  "
    method = f"{item.method:<7}"
    rest = max(1, width - len(marker) - len(method))
    base = "class:selected" if selected else "class:text"
    method_cls = f"{base} {method_style(item.method)}" if selected else method_style(item.method)
    if width <= len(marker) + len(method):
        return _plain(f"{marker}{item.method} {item.name}", width, base)
    return [(base, marker), (method_cls, method), (base, fit_to(item.name or "(unnamed)", rest))]


def render_request_list(state: ConsoleState, width: int, rows: int) -> List[Fragments]:
    visible = state.visible_requests
    title = f"Requests {len(visible)}/{len(state.requests)}"
    if state.filter_text:
        title += f"  filter: {state.filter_text}"
    lines = [_titled(title, width)]
    body_rows = max(0, rows - 1)
    if not visible:
        hint = "No requests match the filter." if state.requests else "No requests yet. :new GET https://..."
        lines.append(_plain(hint, width, "class:hint"))
        return _fill(lines, rows, width)
    start = _list_window(state.selected, len(visible), body_rows)
    for idx in range(start, min(len(visible), start + body_rows)):
        lines.append(request_row(visible[idx], width, idx == state.selected))
    return _fill(lines, rows, width)


def render_request_preview(state: ConsoleState, width: int, rows: int) -> List[Fragments]:
    item = state.selected_request
    if item is None:
        return _fill([_titled("Request", width), _plain("No request selected.", width, "class:hint")], rows, width)
    auth = item.auth_type or "none"
    if item.auth_type != "none" and item.auth_secret_ref:
        auth += f" (ref {item.auth_secret_ref})"
    header = f"{item.header_key}: {item.header_value}" if (item.header_key or item.header_value) else "none"
    lines = [
        _titled(item.name or "(unnamed)", width),
        *_method_url(item.method, item.url, width),
        _plain(f"auth: {auth}", width, "class:hint"),
        _plain(f"header: {header}", width, "class:hint"),
        _rule(width, "body"),
    ]
    body_rows = rows - len(lines)
    if body_rows > 0:
        body = item.body if item.has_body else "(empty)"
        lines.extend(_code_lines(body, state.request_scroll, body_rows, width, looks_like_json(item.body)))
    return _fill(lines, rows, width)


def response_title(preview: ResponsePreview) -> Tuple[str, str]:
    if preview.status_code <= 0:
        code, style = "ERR", "class:error"
    else:
        code, style = str(preview.status_code), f"class:{status_style(preview.status_code)}"
    text = f"{code} {preview.method} {preview.url}  {preview.duration_ms}ms  {preview.at}"
    return text, style


def render_response(state: ConsoleState, width: int, rows: int) -> List[Fragments]:
    preview = state.last_response
    if preview is None:
        return _fill([_plain("No response yet. Enter then y sends the selected request.", width, "class:hint")], rows, width)
    title, style = response_title(preview)
    lines = [_plain(title, width, style)]
    if preview.error:
        lines.append(_plain(f"error: {preview.error}", width, "class:error"))
    body_rows = rows - len(lines)
    if body_rows > 0:
        body = preview.body or "(empty)"
        lines.extend(_code_lines(body, state.response_scroll, body_rows, width, looks_like_json(preview.body)))
    return _fill(lines, rows, width)


def render_main(state: ConsoleState) -> List[Fragments]:
    geo = main_geometry(state.width, state.height, state.ratios)
    top_left = render_request_list(state, geo.list_cols, geo.top_rows)
    top_right = render_request_preview(state, geo.right, geo.top_rows) if geo.show_right else None
    lines = _side_by_side(top_left, top_right)
    lines.append(_rule(geo.width, "response"))
    lines.extend(render_response(state, geo.width, geo.bottom_rows))
    return lines


# ---------------------------------------------------------------- history screen


def run_row(run: RunEntry, width: int, selected: bool) -> Fragments:
    marker = "> " if selected else "  "
    base = "class:selected" if selected else "class:text"
    label = f"{run.status_label:<6}"
    code_style = "class:error" if run.transport_failed else f"class:{status_style(run.status_code)}"
    rest = max(1, width - len(marker) - len(label))
    text = f"{run.method} {run.request_name or run.url}  {run.created_at}"
    if width <= len(marker) + len(label):
        return _plain(f"{marker}{run.status_label} {text}", width, base)
    return [(base, marker), (f"{base} {code_style}" if selected else code_style, label), (base, fit_to(text, rest))]


def render_run_list(state: ConsoleState, width: int, rows: int) -> List[Fragments]:
    visible = state.visible_runs
    title = f"History {len(visible)}/{len(state.runs)}"
    if state.history_filter:
        title += f"  filter: {state.history_filter}"
    lines = [_titled(title, width)]
    body_rows = max(0, rows - 1)
    if not visible:
        lines.append(_plain("No runs recorded yet." if not state.runs else "No runs match the filter.", width, "class:hint"))
        return _fill(lines, rows, width)
    start = _list_window(state.history_selected, len(visible), body_rows)
    for idx in range(start, min(len(visible), start + body_rows)):
        lines.append(run_row(visible[idx], width, idx == state.history_selected))
    return _fill(lines, rows, width)


def render_run_detail(state: ConsoleState, width: int, request_rows: int, response_rows: int) -> List[Fragments]:
    run = state.selected_run
    if run is None:
        return _fill([_titled("Run", width), _plain("No run selected.", width, "class:warn")], request_rows + 1 + response_rows, width)
    snapshot = parse_request_snapshot(run.request_snapshot)
    meta = snapshot.fields
    request = [
        _titled(f"Run {run.id}  {run.created_at}", width),
        *_method_url(run.method, meta.get("url", run.url), width),
        _plain(f"auth: {meta.get('auth', 'none')}  header: {meta.get('header', 'none')}", width, "class:hint"),
    ]
    body_rows = request_rows - len(request)
    if body_rows > 0:
        request.extend(
            _code_lines(snapshot.body, state.history_request_scroll, body_rows, width, looks_like_json(snapshot.body))
        )
    lines = _fill(request, request_rows, width)

    code_style = "class:error" if run.transport_failed else f"class:{status_style(run.status_code)}"
    lines.append(_rule(width, "response"))
    response = [_plain(f"{run.status_label} {run.duration_ms}ms  {run.error}".rstrip(), width, code_style)]
    body_rows = response_rows - 1
    if body_rows > 0:
        body = run.response_body or "(empty)"
        response.extend(
            _code_lines(body, state.history_response_scroll, body_rows, width, looks_like_json(run.response_body))
        )
    lines.extend(_fill(response, response_rows, width))
    return lines


def render_history(state: ConsoleState) -> List[Fragments]:
    geo = history_geometry(state.width, state.height, state.ratios)
    rows = geo.top_rows + 1 + geo.bottom_rows
    left = render_run_list(state, geo.list_cols, rows)
    right = render_run_detail(state, geo.right, geo.top_rows, geo.bottom_rows) if geo.show_right else None
    return _side_by_side(left, right)


# ---------------------------------------------------------------- editor screen


def editor_row(state: ConsoleState, index: int, width: int) -> Fragments:
    session = state.editor
    field = EDITOR_FIELDS[index]
    current = index == session.field_index
    value = session.field_value(field.key)
    if current and session.mode == EditorMode.INSERT:
        value = session.insert_buffer
    if field.choices is not None:
        value = f"< {value} >"
    marker = "> " if current else "  "
    style = "class:selected" if current else "class:text"
    return _plain(f"{marker}{field.label}: {value}", width, style)


def render_editor(state: ConsoleState) -> List[Fragments]:
    geo = editor_geometry(state.width, state.height, state.ratios)
    rows = geo.top_rows
    session = state.editor
    if session is None:
        return _fill([_plain("No draft open.", geo.width, "class:hint")], rows, geo.width)
    title = f"Edit {session.draft.name or 'new request'} [{session.mode.value}]"
    left = [_titled(title, geo.list_cols)]
    left.extend(editor_row(state, idx, geo.list_cols) for idx in range(len(EDITOR_FIELDS)))
    left = _fill(left, rows, geo.list_cols)
    if not geo.show_right:
        return left
    draft = session.draft
    right = [
        _titled("Body", geo.right),
        _plain(f"id: {draft.id or '(unsaved)'}  updated: {draft.updated_at or '-'}", geo.right, "class:hint"),
        _rule(geo.right),
    ]
    body_rows = rows - len(right)
    if body_rows > 0:
        body = draft.body if draft.has_body else "(empty)  e opens $EDITOR"
        right.extend(_code_lines(body, session.body_scroll, body_rows, geo.right, looks_like_json(draft.body)))
    return _side_by_side(left, _fill(right, rows, geo.right))


# ---------------------------------------------------------------- help screen


def render_help(state: ConsoleState) -> List[Fragments]:
    width = max(1, state.width)
    lines = [_titled("tuiman help", width)]
    lines.extend(_plain(line, width) for line in HELP_LINES)
    return _fill(lines, content_rows_for(state.height), width)


def render_body(state: ConsoleState) -> FormattedText:
    renderers = {
        Screen.MAIN: render_main,
        Screen.HISTORY: render_history,
        Screen.EDITOR: render_editor,
        Screen.HELP: render_help,
    }
    lines = renderers[state.screen](state)
    return to_formatted(lines[: content_rows_for(state.height)])


__all__ = [
    "render_body",
    "render_main",
    "render_history",
    "render_editor",
    "render_help",
    "request_row",
    "run_row",
    "to_formatted",
]
