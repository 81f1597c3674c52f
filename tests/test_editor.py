import pytest

from stbkit.buffer import MonospaceBuffer
from stbkit.editor import Key, TextEditState


def make(text, single_line=False, cursor=0):
    buf = MonospaceBuffer(text)
    state = TextEditState(single_line)
    state.cursor = cursor
    return buf, state


def test_typing_inserts_and_moves_cursor():
    buf, state = make("")
    state.text(buf, "abc")
    assert str(buf) == "abc"
    assert state.cursor == len("abc")


def test_undo_and_redo_round_trip():
    buf, state = make("hello", cursor=len("hello"))
    state.text(buf, " world")
    state.key(buf, Key.UNDO)
    assert str(buf) == "hello"
    state.key(buf, Key.REDO)
    assert str(buf) == "hello world"


def test_undo_with_empty_history_changes_nothing():
    buf, state = make("abc", cursor=2)
    state.key(buf, Key.UNDO)
    assert str(buf) == "abc"
    assert state.cursor == 2


def test_single_line_rejects_newline():
    buf, state = make("abc", single_line=True)
    state.text(buf, "\nx")
    assert str(buf) == "abc"


def test_left_at_start_stays_and_textend_goes_to_end():
    buf, state = make("abc")
    state.key(buf, Key.LEFT)
    assert state.cursor == 0
    state.key(buf, Key.TEXTEND)
    assert state.cursor == len(buf)
    assert not state.has_selection()


def test_right_is_clamped_at_end():
    text = "ab"
    buf, state = make(text, cursor=len(text))
    state.key(buf, Key.RIGHT)
    assert state.cursor == len(text)


def test_shift_left_builds_selection_and_backspace_removes_it():
    text = "abcdef"
    buf, state = make(text, cursor=len(text))
    state.key(buf, Key.LEFT | Key.SHIFT)
    state.key(buf, Key.LEFT | Key.SHIFT)
    assert state.select_start == len(text)
    assert state.select_end == len(text) - 2
    assert state.has_selection()
    state.key(buf, Key.BACKSPACE)
    assert str(buf) == text[:-2]
    assert state.cursor == len(text) - 2
    assert not state.has_selection()


def test_cut_only_with_selection():
    text = "abcdef"
    buf, state = make(text)
    assert state.cut(buf) is False
    state.key(buf, Key.TEXTEND | Key.SHIFT)
    assert state.cut(buf) is True
    assert str(buf) == ""


def test_paste_replaces_selection_and_undo_restores():
    buf, state = make("old text")
    state.key(buf, Key.TEXTSTART)
    state.key(buf, Key.TEXTEND | Key.SHIFT)
    assert state.paste(buf, "xyz") is True
    assert str(buf) == "xyz"
    assert state.cursor == len("xyz")
    state.key(buf, Key.UNDO)
    assert str(buf) == ""
    state.key(buf, Key.UNDO)
    assert str(buf) == "old text"


def test_down_and_up_keep_column():
    text = "abc\ndef"
    buf, state = make(text, cursor=text.index("b"))
    state.key(buf, Key.DOWN)
    assert state.cursor == text.index("e")
    state.key(buf, Key.UP)
    assert state.cursor == text.index("b")


def test_down_on_last_line_does_not_move():
    text = "abc\ndef"
    buf, state = make(text, cursor=text.index("e"))
    state.key(buf, Key.DOWN)
    assert state.cursor == text.index("e")


def test_shift_down_selects():
    text = "abc\ndef"
    buf, state = make(text, cursor=0)
    state.key(buf, Key.DOWN | Key.SHIFT)
    assert state.select_start == 0
    assert state.select_end == state.cursor == text.index("d")


def test_single_line_down_behaves_like_right():
    buf_a, state_a = make("abc", single_line=True, cursor=1)
    buf_b, state_b = make("abc", single_line=True, cursor=1)
    state_a.key(buf_a, Key.DOWN)
    state_b.key(buf_b, Key.RIGHT)
    assert state_a.cursor == state_b.cursor
    state_a.key(buf_a, Key.UP | Key.SHIFT)
    state_b.key(buf_b, Key.LEFT | Key.SHIFT)
    assert (state_a.select_start, state_a.select_end) == (
        state_b.select_start,
        state_b.select_end,
    )


def test_page_down_moves_by_page_rows():
    text = "a\nb\nc"
    buf, state = make(text)
    state.row_count_per_page = 2
    state.key(buf, Key.PGDOWN)
    assert state.cursor == text.index("c")
    state.key(buf, Key.PGUP)
    assert state.cursor == 0


def test_page_down_without_page_size_does_nothing():
    text = "a\nb\nc"
    buf, state = make(text)
    state.key(buf, Key.PGDOWN)
    assert state.cursor == 0


def test_line_start_and_line_end():
    text = "abc\ndef"
    buf, state = make(text, cursor=text.index("e"))
    state.key(buf, Key.LINESTART)
    assert state.cursor == text.index("d")
    state.key(buf, Key.LINEEND)
    assert state.cursor == len(text)
    buf2, state2 = make(text, cursor=text.index("b"))
    state2.key(buf2, Key.LINEEND)
    assert state2.cursor == text.index("\n")


def test_shift_line_start_selects_to_line_start():
    text = "abc\ndef"
    buf, state = make(text, cursor=len(text))
    state.key(buf, Key.LINESTART | Key.SHIFT)
    assert state.select_start == len(text)
    assert state.select_end == text.index("d")


def test_word_right_and_left():
    text = "foo bar baz"
    buf, state = make(text)
    state.key(buf, Key.WORDRIGHT)
    assert state.cursor == text.index("bar")
    state.key(buf, Key.WORDRIGHT)
    assert state.cursor == text.index("baz")
    state.key(buf, Key.WORDLEFT)
    assert state.cursor == text.index("bar")


def test_insert_mode_overwrites_and_undoes():
    buf, state = make("abc")
    state.key(buf, Key.INSERT)
    assert state.insert_mode is True
    state.text(buf, "X")
    assert str(buf) == "Xbc"
    state.key(buf, Key.UNDO)
    assert str(buf) == "abc"


def test_delete_key_removes_char_under_cursor():
    text = "abc"
    buf, state = make(text)
    state.key(buf, Key.DELETE)
    assert str(buf) == text[1:]
    assert state.cursor == 0


def test_click_and_drag_select_range():
    text = "hello"
    buf, state = make(text)
    state.click(buf, 2.2, 0.5)
    assert state.cursor == text.index("l")
    state.drag(buf, 4.9, 0.5)
    assert state.select_start == text.index("l")
    assert state.select_end == state.cursor == len(text)


def test_clamp_pulls_cursor_into_buffer():
    buf, state = make("abc")
    state.cursor = 100
    state.clamp(buf)
    assert state.cursor == len(buf)


def test_code_point_and_string_keys_type_text():
    buf, state = make("")
    state.key(buf, ord("z"))
    state.key(buf, "y")
    assert str(buf) == "zy"
    assert state.cursor == len("zy")


def test_clear_resets_state_and_history():
    buf, state = make("abc", cursor=3)
    state.text(buf, "d")
    state.clear(True)
    assert state.cursor == 0
    assert state.single_line is True
    state.key(buf, Key.UNDO)
    assert str(buf) == "abcd"


def test_delete_selection_when_reversed():
    text = "abcdef"
    buf, state = make(text)
    state.select_start = 4
    state.select_end = 1
    state.delete_selection(buf)
    assert str(buf) == text[:1] + text[4:]
    assert state.cursor == state.select_start == state.select_end == 1


def test_edit_past_end_raises_from_buffer():
    buf, state = make("abc")
    state.cursor = 10
    with pytest.raises(IndexError):
        buf.insert_chars(state.cursor, "x")