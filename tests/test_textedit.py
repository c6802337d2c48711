import pytest

from gtlengine.textedit import Key, TextEditState
from gtlengine.textlayout import TextBuffer


def _at_end(text, single_line=False):
    buffer = TextBuffer(text)
    state = TextEditState(single_line)
    state.cursor = len(text)
    return buffer, state


def _chars(key):
    return chr(key) if key < 0x10000 else None


def test_input_text_inserts_and_moves_cursor():
    buffer = TextBuffer()
    state = TextEditState()
    state.input_text(buffer, "abc")
    assert buffer.text == "abc"
    assert state.cursor == len("abc")


def test_single_line_rejects_newline():
    buffer = TextBuffer("ab")
    state = TextEditState(single_line=True)
    state.input_text(buffer, "\n")
    assert buffer.text == "ab"
    assert state.cursor == 0


def test_undo_redo_round_trip():
    buffer = TextBuffer()
    state = TextEditState()
    state.input_text(buffer, "abc")
    assert state.undo(buffer) is True
    assert buffer.text == ""
    assert state.cursor == 0
    assert state.redo(buffer) is True
    assert buffer.text == "abc"
    assert state.cursor == len("abc")


def test_undo_with_nothing_returns_false():
    buffer = TextBuffer("abc")
    state = TextEditState()
    assert state.undo(buffer) is False
    assert state.redo(buffer) is False
    assert buffer.text == "abc"


def test_keys_typed_through_key_to_text():
    buffer = TextBuffer()
    state = TextEditState()
    for ch in "hi":
        state.key(buffer, ord(ch), _chars)
    assert buffer.text == "hi"
    state.key(buffer, Key.UNDO)
    state.key(buffer, Key.UNDO)
    assert buffer.text == ""


def test_unknown_key_without_translation_is_ignored():
    buffer = TextBuffer("abc")
    state = TextEditState()
    state.key(buffer, ord("x"))
    assert buffer.text == "abc"


def test_left_and_right_stay_in_bounds():
    buffer, state = _at_end("abc")
    state.key(buffer, Key.RIGHT)
    assert state.cursor == len("abc")
    state.key(buffer, Key.LEFT)
    assert state.cursor == len("abc") - 1
    state.cursor = 0
    state.key(buffer, Key.LEFT)
    assert state.cursor == 0


def test_shift_left_selects_and_backspace_deletes_selection():
    buffer, state = _at_end("abc")
    state.key(buffer, Key.LEFT | Key.SHIFT)
    state.key(buffer, Key.LEFT | Key.SHIFT)
    assert state.has_selection()
    assert state.select_start == len("abc")
    assert state.select_end == state.cursor == 1
    state.key(buffer, Key.BACKSPACE)
    assert buffer.text == "a"
    assert not state.has_selection()
    state.key(buffer, Key.UNDO)
    assert buffer.text == "abc"


def test_cut_removes_selection_once():
    buffer, state = _at_end("hello")
    state.key(buffer, Key.TEXTSTART | Key.SHIFT)
    assert state.cut(buffer) is True
    assert buffer.text == ""
    assert state.cut(buffer) is False


def test_paste_replaces_selection():
    buffer = TextBuffer("hello world")
    state = TextEditState()
    state.select_start, state.select_end, state.cursor = 0, len("hello"), len("hello")
    assert state.paste(buffer, "bye") is True
    assert buffer.text == "bye world"
    assert state.cursor == len("bye")
    state.undo(buffer)
    assert buffer.text == " world"
    state.undo(buffer)
    assert buffer.text == "hello world"


def test_paste_refused_when_buffer_full():
    buffer = TextBuffer("ab", max_length=3)
    state = TextEditState()
    assert state.paste(buffer, "xy") is False
    assert buffer.text == "ab"
    assert state.cursor == 0


def test_insert_mode_overwrites_and_undoes():
    buffer = TextBuffer("abc")
    state = TextEditState()
    state.key(buffer, Key.INSERT)
    assert state.insert_mode is True
    state.input_text(buffer, "X")
    assert buffer.text == "Xbc"
    state.undo(buffer)
    assert buffer.text == "abc"


def test_line_start_and_end_multiline():
    text = "ab\ncd"
    buffer, state = _at_end(text)
    state.cursor = text.index("d")
    state.key(buffer, Key.LINESTART)
    assert state.cursor == text.index("\n") + 1
    state.key(buffer, Key.LINEEND)
    assert state.cursor == len(text)


def test_line_end_with_shift_selects():
    text = "ab\ncd"
    buffer = TextBuffer(text)
    state = TextEditState()
    state.key(buffer, Key.LINEEND | Key.SHIFT)
    assert state.select_start == 0
    assert state.select_end == state.cursor == text.index("\n")


def test_down_then_up_keeps_column():
    text = "abc\ndef"
    buffer = TextBuffer(text)
    state = TextEditState()
    state.cursor = 1
    state.key(buffer, Key.DOWN)
    assert state.cursor == text.index("e")
    state.key(buffer, Key.UP)
    assert state.cursor == 1


def test_down_on_last_line_does_nothing():
    buffer = TextBuffer("abc")
    state = TextEditState()
    state.cursor = 1
    state.key(buffer, Key.DOWN)
    assert state.cursor == 1


def test_down_in_single_line_moves_right():
    buffer = TextBuffer("abc")
    state = TextEditState(single_line=True)
    state.cursor = 1
    state.key(buffer, Key.DOWN)
    assert state.cursor == 2
    state.key(buffer, Key.UP | Key.SHIFT)
    assert state.select_end == state.cursor == 1


def test_page_down_moves_by_page():
    text = "a\nb\nc"
    buffer = TextBuffer(text)
    state = TextEditState()
    state.row_count_per_page = 2
    state.key(buffer, Key.PGDOWN)
    assert state.cursor == text.index("c")


def test_click_and_drag_select():
    buffer = TextBuffer("abcd")
    state = TextEditState()
    state.click(buffer, 1.2, 0.5)
    assert state.cursor == 1
    assert not state.has_selection()
    state.drag(buffer, 3.2, 0.5)
    assert state.select_start == 1
    assert state.select_end == state.cursor == 3


def test_word_moves():
    text = "foo bar"
    buffer = TextBuffer(text)
    state = TextEditState()
    state.key(buffer, Key.WORDRIGHT)
    assert state.cursor == text.index("bar")
    state.cursor = len(text)
    state.key(buffer, Key.WORDLEFT)
    assert state.cursor == text.index("bar")


def test_delete_and_backspace_edges():
    buffer = TextBuffer("abc")
    state = TextEditState()
    state.key(buffer, Key.BACKSPACE)
    assert buffer.text == "abc"
    state.key(buffer, Key.DELETE)
    assert buffer.text == "bc"
    state.cursor = len(buffer)
    state.key(buffer, Key.DELETE)
    assert buffer.text == "bc"


def test_text_start_and_end():
    buffer, state = _at_end("hello")
    state.key(buffer, Key.TEXTSTART)
    assert state.cursor == 0
    state.key(buffer, Key.TEXTEND)
    assert state.cursor == len("hello")
    assert not state.has_selection()


def test_clamp_after_external_change():
    buffer, state = _at_end("hello")
    buffer.delete_chars(0, 3)
    state.clamp(buffer)
    assert state.cursor == len(buffer)


def test_sort_selection_orders_bounds():
    state = TextEditState()
    state.select_start, state.select_end = 4, 1
    state.sort_selection()
    assert (state.select_start, state.select_end) == (1, 4)


def test_initialize_resets_everything():
    buffer = TextBuffer()
    state = TextEditState()
    state.input_text(buffer, "abc")
    state.initialize(True)
    assert state.cursor == 0
    assert state.single_line is True
    assert state.undo(buffer) is False
    assert buffer.text == "abc"


@pytest.mark.parametrize("key", [Key.UNDO | Key.SHIFT, Key.INSERT | Key.SHIFT])
def test_shifted_command_keys_fall_through_to_text(key):
    buffer = TextBuffer("ab")
    state = TextEditState()
    state.key(buffer, key, lambda k: "z")
    assert buffer.text == "zab"
    assert state.insert_mode is False