"""Main screen state machine: navigation, chords, search, commands and actions."""

from pathlib import Path

from core import HttpResult, PlatformCapabilityError, RequestItem
from core.interface.constants import MAIN_IDLE_HINT, Chord, MainMode, Screen

from conftest import BACKSPACE, DOWN, ENTER, ESC, FakeClipboard, FakeEditor, FakeExchange, FakeExecutor, ctrl, key, press


def test_start_loads_requests_and_reports_count(console_factory):
    console = console_factory()
    assert [item.name for item in console.state.requests] == ["Alpha", "Beta", "Gamma"]
    assert console.state.status == "Loaded 3 request(s)."
    assert console.state.tracked_request_id == "a"


def test_j_k_and_arrows_move_with_clamping(console_factory):
    console = console_factory()
    press(console, "j", "j", "j")
    assert console.state.selected == 2
    press(console, "k")
    assert console.state.selected == 1
    press(console, DOWN, DOWN)
    assert console.state.selected == 2
    press(console, "kkkk")
    assert console.state.selected == 0


def test_gg_jumps_to_first_only_when_repeated(console_factory):
    console = console_factory()
    press(console, "G")
    assert console.state.selected == 2
    press(console, "g", "j")
    assert console.state.selected == 2
    assert console.state.chord == Chord.NONE
    press(console, "g", "k")
    assert console.state.selected == 1
    press(console, "g", "g")
    assert console.state.selected == 0


def test_zz_and_zq_quit_but_z_then_other_key_does_not(console_factory):
    console = console_factory()
    press(console, "Z", "j")
    assert not console.state.quit_requested
    assert console.state.chord == Chord.NONE
    press(console, "Z", "Z")
    assert console.state.quit_requested

    other = console_factory()
    press(other, "Z", "Q")
    assert other.state.quit_requested


def test_chords_are_mutually_exclusive(console_factory):
    console = console_factory()
    press(console, "G", "g", "Z")
    assert console.state.chord == Chord.Z
    press(console, "g")
    assert console.state.chord == Chord.G
    assert not console.state.quit_requested


def test_selection_clamps_when_reload_shrinks_list(console_factory):
    console = console_factory()
    press(console, "G")
    assert console.state.selected == 2
    console.deps.requests.items = console.deps.requests.items[:2]
    console.reload_requests()
    assert console.state.selected == 1
    assert console.state.selected_request.name == "Beta"


def test_selection_change_resets_scroll_and_chord(console_factory):
    console = console_factory()
    press(console, "}}}")
    assert console.state.request_scroll == 3
    press(console, "j")
    assert console.state.request_scroll == 0
    press(console, "{")
    assert console.state.request_scroll == 0


def test_search_is_live_and_escape_restores_snapshot(console_factory):
    console = console_factory()
    console.state.filter_text = "foo"
    press(console, "/")
    assert console.state.main_mode == MainMode.SEARCH
    assert console.state.search_input == "foo"
    press(console, "bar")
    assert console.state.filter_text == "foobar"
    press(console, ESC)
    assert console.state.filter_text == "foo"
    assert console.state.main_mode == MainMode.NORMAL


def test_search_enter_locks_filter_and_narrows_list(console_factory):
    console = console_factory()
    press(console, "?", "gam", ENTER)
    assert console.state.main_mode == MainMode.NORMAL
    assert console.state.status == "Filter locked: gam"
    assert [item.name for item in console.state.visible_requests] == ["Gamma"]
    assert console.state.search_prefix == "?"


def test_search_backspace_and_clear(console_factory):
    console = console_factory()
    press(console, "/", "alp", BACKSPACE)
    assert console.state.filter_text == "al"
    press(console, ctrl("u"))
    assert console.state.filter_text == ""
    assert console.state.main_mode == MainMode.SEARCH


def test_escape_in_normal_clears_filter(console_factory):
    console = console_factory()
    console.state.filter_text = "beta"
    press(console, ESC)
    assert console.state.filter_text == ""
    assert console.state.status == MAIN_IDLE_HINT


def test_filter_shrinking_list_reclamps_selection(console_factory):
    console = console_factory()
    press(console, "G")
    press(console, "/", "alpha")
    assert console.state.selected == 0
    assert console.state.selected_request.id == "a"


def test_paste_into_search_normalizes_line_breaks(console_factory):
    console = console_factory(clipboard=FakeClipboard(text="al\r\npha"))
    press(console, "/", ctrl("v"))
    assert console.state.search_input == "al pha"


def test_paste_reports_platform_limitation(console_factory):
    error = PlatformCapabilityError("System clipboard shortcuts", "needs pbpaste, wl-paste or xclip")
    console = console_factory(clipboard=FakeClipboard(error=error))
    press(console, "/", ctrl("v"))
    assert console.state.status.startswith("Paste failed: System clipboard shortcuts is not supported")
    assert console.state.status_error
    assert console.state.search_input == ""


def test_paste_of_empty_clipboard_is_an_error(console_factory):
    console = console_factory(clipboard=FakeClipboard(text="\x07"))
    press(console, ":", ctrl("v"))
    assert console.state.status == "Paste failed: clipboard is empty or non-printable."


def test_copy_bottom_input(console_factory):
    clipboard = FakeClipboard()
    console = console_factory(clipboard=clipboard)
    press(console, ":", "history", ctrl("y"))
    assert clipboard.written == ["history"]
    assert console.state.status == "Copied bottom input to system clipboard."
    assert console.state.command_input == "history"


def test_import_without_directory_is_usage_error(console_factory):
    exchange = FakeExchange()
    console = console_factory(exchange=exchange)
    press(console, ":", "import ", ENTER)
    assert console.state.status == "Usage: :import <directory>"
    assert console.state.status_error
    assert exchange.import_calls == []
    assert console.state.main_mode == MainMode.NORMAL


def test_import_reloads_requests(console_factory):
    exchange = FakeExchange(imported=4)
    console = console_factory(exchange=exchange)
    calls_before = console.deps.requests.list_calls
    press(console, ":", "import dump", ENTER)
    assert exchange.import_calls == [Path("dump")]
    assert console.deps.requests.list_calls == calls_before + 1
    assert console.state.status == "Imported 4 request(s) from dump."


def test_export_reports_counts(console_factory):
    exchange = FakeExchange()
    console = console_factory(exchange=exchange)
    press(console, ":", "export out", ENTER)
    assert exchange.export_calls == [Path("out")]
    assert console.state.status == "Exported 2 request(s) to out (scrubbed 1 secret ref(s))."


def test_export_and_import_keep_spaces_in_directory(console_factory):
    exchange = FakeExchange()
    console = console_factory(exchange=exchange)
    press(console, ":", "export /tmp/my exports ", ENTER)
    assert exchange.export_calls == [Path("/tmp/my exports")]
    press(console, ":", "import  /tmp/old  dumps", ENTER)
    assert exchange.import_calls == [Path("/tmp/old  dumps")]


def test_command_escape_discards_buffer(console_factory):
    console = console_factory()
    press(console, ":", "q", ESC)
    assert console.state.command_input == ""
    assert not console.state.quit_requested
    assert console.state.main_mode == MainMode.NORMAL


def test_unknown_and_empty_commands(console_factory):
    console = console_factory()
    press(console, ":", "frob now", ENTER)
    assert console.state.status == "Unknown command: frob now"
    assert console.state.status_error
    press(console, ":", ENTER)
    assert console.state.status == MAIN_IDLE_HINT
    assert not console.state.status_error


def test_quit_and_help_commands(console_factory):
    console = console_factory()
    press(console, ":", "HELP", ENTER)
    assert console.state.screen == Screen.HELP
    assert console.state.status == "Help screen opened."
    press(console, "q")
    assert console.state.screen == Screen.MAIN
    press(console, ":", "q", ENTER)
    assert console.state.quit_requested


def test_new_command_opens_editor_on_url_field(console_factory):
    console = console_factory()
    press(console, ":", "new post http://x/y", ENTER)
    assert console.state.screen == Screen.EDITOR
    session = console.state.editor
    assert session.field_index == 2
    assert session.draft.method == "POST"
    assert session.draft.url == "http://x/y"
    assert session.draft.id == ""


def test_enter_requires_selection(console_factory):
    console = console_factory(items=[])
    press(console, ENTER)
    assert console.state.main_mode == MainMode.NORMAL
    assert console.state.status == "No request selected."
    press(console, "d")
    assert console.state.status == "No selected request to delete."
    press(console, "E")
    assert console.state.status == "No selected request to edit."


def test_action_send_records_run_and_sets_preview(console_factory):
    console = console_factory()
    press(console, ENTER)
    assert console.state.main_mode == MainMode.ACTION
    console.state.response_scroll = 5
    press(console, "y")
    assert console.state.main_mode == MainMode.NORMAL
    assert [item.id for item in console.deps.executor.calls] == ["a"]
    recorded = console.deps.history.recorded[0]
    assert recorded.request_id == "a"
    assert recorded.request_snapshot.startswith("name: Alpha\nmethod: GET\nurl: http://api/alpha")
    assert recorded.created_at.endswith("Z")
    preview = console.state.last_response
    assert preview.status_code == 200
    assert preview.body == '{"ok": true}'
    assert console.state.response_scroll == 0
    assert console.state.status == "Sent GET http://api/alpha (200, 12ms)"
    assert console.state.busy == ""


def test_send_with_error_result(console_factory):
    executor = FakeExecutor(HttpResult(status_code=0, duration_ms=3, error="connection refused"))
    console = console_factory(executor=executor)
    press(console, ENTER, "y")
    assert console.state.status == "Request finished with error: connection refused"
    assert console.state.status_error
    assert console.state.last_response.status_code == 0


def test_action_cancel_has_no_side_effect(console_factory):
    console = console_factory()
    press(console, ENTER, "n")
    assert console.state.main_mode == MainMode.NORMAL
    press(console, ENTER, ESC)
    assert console.deps.executor.calls == []
    assert console.state.filter_text == ""


def test_action_auth_opens_editor_on_auth_field(console_factory):
    console = console_factory()
    press(console, ENTER, "a")
    assert console.state.screen == Screen.EDITOR
    assert console.state.editor.field.key == "auth_type"


def test_action_edit_body_saves_pretty_json(console_factory):
    editor = FakeEditor(result="[1,2]")
    console = console_factory(editor=editor)
    press(console, ENTER, "e")
    assert editor.seen == [""]
    saved = console.deps.requests.saved[-1]
    assert saved.body == "[\n  1,\n  2\n]"
    assert console.state.status == "Body updated for Alpha."
    assert console.state.selected_request.id == "a"


def test_action_edit_body_non_zero_exit(console_factory):
    console = console_factory(editor=FakeEditor(result=None))
    press(console, ENTER, "e")
    assert console.state.status == "External editor exited non-zero."
    assert console.deps.requests.saved == []


def test_action_edit_body_invalid_json_is_not_saved(console_factory):
    console = console_factory(editor=FakeEditor(result="{nope"))
    press(console, ENTER, "e")
    assert console.state.status.startswith("Body JSON invalid:")
    assert console.deps.requests.saved == []


def test_delete_confirm_gate(console_factory):
    console = console_factory()
    press(console, "d")
    assert console.state.main_mode == MainMode.DELETE_CONFIRM
    press(console, "x")
    assert console.state.main_mode == MainMode.DELETE_CONFIRM
    press(console, "n")
    assert console.state.status == "Delete cancelled."
    assert console.deps.requests.deleted == []
    press(console, "j", "d", "y")
    assert console.deps.requests.deleted == ["b"]
    assert console.state.status == "Request deleted."
    assert [item.id for item in console.state.requests] == ["a", "c"]


def test_store_failures_become_status(console_factory):
    console = console_factory()

    def broken(_id):
        raise OSError("disk full")

    console.deps.requests.delete = broken
    press(console, "d", "y")
    assert console.state.status == "Delete failed: disk full"
    assert console.state.status_error


def test_divider_nudges_report_sizes(console_factory):
    console = console_factory()
    press(console, "L")
    assert console.state.status == "Resize: left=67 cols response=10 rows"
    press(console, "K")
    assert console.state.status == "Resize: left=67 cols response=11 rows"
    press(console, "J", "H", "H")
    assert console.state.status == "Resize: left=65 cols response=10 rows"


def test_response_scroll_keys(console_factory):
    console = console_factory()
    press(console, "]]", "[")
    assert console.state.response_scroll == 1


def test_unmapped_keys_are_ignored(console_factory):
    console = console_factory()
    before = (console.state.selected, console.state.main_mode, console.state.filter_text)
    press(console, "x", "7", ctrl("b"))
    assert (console.state.selected, console.state.main_mode, console.state.filter_text) == before


def test_listing_keeps_non_matching_items_out_of_visible(console_factory):
    items = [RequestItem(id="1", name="Users", url="http://u"), RequestItem(id="2", name="Orders", url="http://o")]
    console = console_factory(items=items)
    console.state.filter_text = "ORD"
    assert [item.id for item in console.state.visible_requests] == ["2"]
