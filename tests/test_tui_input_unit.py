from core.interface.tui_input import (
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


def test_plain_character_is_char():
    assert classify(KeyPress(sequence="a", name="a")) == InputAction(CHAR, "a")


def test_bracketed_paste_is_one_chunk_with_line_breaks_flattened():
    key = KeyPress(sequence="\x1b[200~ab\r\ncd\x1b[201~", name="paste")
    assert classify(key) == InputAction(PASTE, "ab cd")


def test_multi_character_sequence_is_paste():
    assert classify(KeyPress(sequence="abc")) == InputAction(PASTE, "abc")


def test_single_character_paste_stays_paste():
    assert classify(KeyPress(sequence="x", name="paste")) == InputAction(PASTE, "x")


def test_backspace_variants():
    assert classify(KeyPress(sequence="\x7f", name="backspace")) == InputAction(BACKSPACE)
    assert classify(KeyPress(sequence="\x08", name="backspace", ctrl=True)) == InputAction(CLEAR)
    assert classify(KeyPress(sequence="\x1b[3;5~", name="delete", ctrl=True)) == InputAction(CLEAR)
    assert classify(KeyPress(sequence="\x15", name="u", ctrl=True)) == InputAction(CLEAR)


def test_escape_enter_and_arrows():
    assert classify(KeyPress(sequence="\x1b", name="escape")) == InputAction(ESCAPE)
    assert classify(KeyPress(sequence="\r", name="return")) == InputAction(ENTER)
    assert classify(KeyPress(sequence="\n")) == InputAction(ENTER)
    assert classify(KeyPress(sequence="\x1b[A", name="up")) == InputAction("up")


def test_control_letters_become_control_actions():
    assert classify(KeyPress(sequence="\x16", name="v", ctrl=True)) == InputAction(CONTROL, "v")
    assert classify(KeyPress(sequence="\x19", name="Y", ctrl=True)) == InputAction(CONTROL, "y")


def test_malformed_escape_sequence_is_ignored():
    assert classify(KeyPress(sequence="\x1b[99")) is None
    assert printable_char(KeyPress(sequence="\x1b[99")) is None


def test_modified_characters_are_not_text():
    assert classify(KeyPress(sequence="a", name="a", meta=True)) is None
    assert classify(KeyPress(sequence="a", name="a", option=True)) is None


def test_normalize_chunk_drops_control_characters():
    assert normalize_chunk("a\r\nb\rc\nd\x07\x7f") == "a b c d"
    assert normalize_chunk("") == ""
    assert normalize_chunk(None) == ""


def test_printable_char_requires_single_cell():
    assert printable_char(KeyPress(sequence="j", name="j")) == "j"
    assert printable_char(KeyPress(sequence="ab")) is None
    assert printable_char(KeyPress(sequence="j", name="j", ctrl=True)) is None
