"""Footer key hints for the request console."""

from prompt_toolkit.formatted_text import FormattedText

from .constants import EditorMode, HistoryMode, MainMode, Screen
from .tui_text import fit_to

FOOTER_HINTS = {
    Screen.MAIN: "j/k move  Enter actions  / filter  : command  d delete  E edit  H/L K/J resize  ZZ quit",
    Screen.HISTORY: "j/k move  r replay  / filter  H/L K/J resize  { } [ ] scroll  Esc back",
    Screen.EDITOR: "j/k field  h/l cycle  i edit  e body  :w save  :secret VALUE  Ctrl+s save  Esc cancel",
    Screen.HELP: "Esc or q returns to the request list",
}

INPUT_HINT = "Enter submit  Esc cancel  Ctrl+v paste  Ctrl+y copy  Ctrl+u clear"


def footer_hint(state) -> str:
    if state.screen == Screen.MAIN and state.main_mode in (MainMode.SEARCH, MainMode.COMMAND):
        return INPUT_HINT
    if state.screen == Screen.HISTORY and state.history_mode == HistoryMode.SEARCH:
        return INPUT_HINT
    if state.screen == Screen.EDITOR and state.editor is not None and state.editor.mode != EditorMode.NORMAL:
        return INPUT_HINT
    return FOOTER_HINTS[state.screen]


def build_footer_text(console) -> FormattedText:
    state = console.state
    return FormattedText([("class:footer", fit_to(footer_hint(state), state.width))])


__all__ = ["build_footer_text", "footer_hint", "FOOTER_HINTS"]
