"""Locating characters in laid-out text and moving between words."""

from __future__ import annotations

from dataclasses import dataclass

from .buffer import NEWLINE, Row, TextBuffer


@dataclass
class CharPosition:
    """Where a character sits in the layout.

    ``x`` and ``y`` are its position and ``height`` the height of its row.
    ``first_char`` and ``length`` describe that row. ``prev_first`` is the
    first character of the row before it.
    """

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


def locate_coord(buffer: TextBuffer, x: float, y: float) -> int:
    """Index of the character position nearest to the display point ``(x, y)``."""
    n = len(buffer)
    base_y = 0.0
    i = 0
    row = Row()

    # Find the row that straddles y.
    while i < n:
        row = buffer.layout_row(i)
        if row.num_chars <= 0:
            return n
        if i == 0 and y < base_y + row.ymin:
            return 0
        if y < base_y + row.ymax:
            break
        i += row.num_chars
        base_y += row.baseline_y_delta

    if i >= n:
        return n

    if x < row.x0:
        return i

    if x < row.x1:
        prev_x = row.x0
        k = 0
        while k < row.num_chars:
            w = buffer.char_width(i, k)
            if x < prev_x + w:
                if x < prev_x + w / 2:
                    return i + k
                return buffer.next_char_index(i + k)
            prev_x += w
            k = buffer.next_char_index(i + k) - i

    last = i + row.num_chars - 1
    if buffer.char_at(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(buffer: TextBuffer, n: int, single_line: bool) -> CharPosition:
    """Position of character ``n`` and details of the row that holds it."""
    z = len(buffer)

    if n == z and single_line:
        row = buffer.layout_row(0)
        return CharPosition(
            x=row.x1,
            y=0.0,
            height=row.ymax - row.ymin,
            first_char=0,
            length=z,
            prev_first=0,
        )

    y = 0.0
    prev_start = 0
    i = 0
    while True:
        row = buffer.layout_row(i)
        length = row.num_chars
        if n < i + length:
            break
        # The last line, when it does not end in a newline, holds the end position.
        if i + length == z and z > 0 and buffer.char_at(z - 1) != NEWLINE:
            break
        prev_start = i
        i += length
        y += row.baseline_y_delta
        if i == z:
            length = 0
            break

    first = i
    x = row.x0
    offset = 0
    while first + offset < n:
        x += buffer.char_width(first, offset)
        offset = buffer.next_char_index(first + offset) - first

    return CharPosition(
        x=x,
        y=y,
        height=row.ymax - row.ymin,
        first_char=first,
        length=length,
        prev_first=prev_start,
    )


def _is_space(ch: str) -> bool:
    return ch.isspace()


def is_word_boundary(buffer: TextBuffer, index: int) -> bool:
    """True where a word starts: after whitespace and on a non-space, or at 0."""
    if index <= 0:
        return True
    return _is_space(buffer.char_at(index - 1)) and not _is_space(buffer.char_at(index))


def move_word_left(buffer: TextBuffer, index: int) -> int:
    """Start of the word before ``index``; always moves at least one character."""
    c = index - 1
    while c >= 0 and not is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def move_word_right(buffer: TextBuffer, index: int) -> int:
    """Start of the word after ``index``, or the end of the text."""
    length = len(buffer)
    c = index + 1
    while c < length and not is_word_boundary(buffer, c):
        c += 1
    return min(c, length)