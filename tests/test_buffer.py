import pytest

from stbkit.buffer import NEWLINE, NEWLINE_WIDTH, MonospaceBuffer, Row, TextBuffer


def test_text_buffer_is_abstract():
    with pytest.raises(TypeError):
        TextBuffer()


def test_length_and_str_match_text():
    buf = MonospaceBuffer("hello\nworld")
    assert len(buf) == len("hello\nworld")
    assert str(buf) == "hello\nworld"


def test_char_at_returns_each_character():
    text = "ab\ncd"
    buf = MonospaceBuffer(text)
    assert [buf.char_at(i) for i in range(len(text))] == list(text)


@pytest.mark.parametrize("index", [-1, 3])
def test_char_at_out_of_range(index):
    buf = MonospaceBuffer("abc")
    with pytest.raises(IndexError):
        buf.char_at(index)


def test_insert_then_delete_round_trip():
    buf = MonospaceBuffer("hello world")
    assert buf.insert_chars(5, ",") is True
    assert str(buf) == "hello, world"
    buf.delete_chars(5, 1)
    assert str(buf) == "hello world"


def test_insert_at_end_and_start():
    buf = MonospaceBuffer("mid")
    buf.insert_chars(len(buf), "end")
    buf.insert_chars(0, "start")
    assert str(buf) == "startmidend"


def test_insert_out_of_range_raises():
    buf = MonospaceBuffer("abc")
    with pytest.raises(IndexError):
        buf.insert_chars(4, "x")


def test_delete_past_end_raises():
    buf = MonospaceBuffer("abc")
    with pytest.raises(IndexError):
        buf.delete_chars(2, 5)
    assert str(buf) == "abc"


def test_delete_negative_count_raises():
    buf = MonospaceBuffer("abc")
    with pytest.raises(ValueError):
        buf.delete_chars(0, -1)


def test_invalid_metrics_rejected():
    with pytest.raises(ValueError):
        MonospaceBuffer("x", char_width=0)
    with pytest.raises(ValueError):
        MonospaceBuffer("x", line_height=-2)


def test_rows_cover_the_whole_text():
    text = "one\ntwo three\n\nfour"
    buf = MonospaceBuffer(text)
    start = 0
    lines = []
    while start < len(buf):
        row = buf.layout_row(start)
        assert row.num_chars > 0
        lines.append(str(buf)[start : start + row.num_chars])
        start += row.num_chars
    assert start == len(buf)
    assert "".join(lines) == text
    assert all(line.endswith(NEWLINE) for line in lines[:-1])
    assert lines == text.splitlines(keepends=True)


def test_row_excludes_newline_from_width():
    buf = MonospaceBuffer("abc\nde", char_width=2.0, line_height=5.0)
    row = buf.layout_row(0)
    assert row.num_chars == len("abc\n")
    assert row.x1 == len("abc") * 2.0
    assert row.ymax - row.ymin == 5.0
    assert row.baseline_y_delta == 5.0


def test_row_at_end_is_empty():
    buf = MonospaceBuffer("abc")
    assert buf.layout_row(len(buf)).num_chars == 0
    assert MonospaceBuffer().layout_row(0) == Row(
        x0=0.0, x1=0.0, baseline_y_delta=1.0, ymin=0.0, ymax=1.0, num_chars=0
    )


def test_char_width_sums_to_row_width():
    buf = MonospaceBuffer("hello\nx", char_width=3.0)
    row = buf.layout_row(0)
    widths = [buf.char_width(0, k) for k in range(row.num_chars)]
    assert widths[-1] == NEWLINE_WIDTH
    assert sum(widths[:-1]) == row.x1


def test_char_indices_step_by_one():
    buf = MonospaceBuffer("abc")
    assert buf.next_char_index(1) == 2
    assert buf.prev_char_index(1) == 0
    assert buf.prev_char_index(buf.next_char_index(2)) == 2