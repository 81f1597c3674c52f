"""Cursor, selection and keyboard handling for an editable text field."""

from __future__ import annotations

import enum
from typing import Union

from .buffer import NEWLINE, NEWLINE_WIDTH, TextBuffer
from .layout import find_charpos, locate_coord, move_word_left, move_word_right
from .undo import UndoHistory

_MAX_CODE_POINT = 0x10FFFF


class Key(enum.IntEnum):
    """Editing keys. Combine with ``Key.SHIFT`` to extend the selection.

    Key values lie above the Unicode range, so a plain code point passed to
    :meth:`TextEditState.key` is typed as a character.
    """

    LEFT = 0x200001
    RIGHT = 0x200002
    UP = 0x200003
    DOWN = 0x200004
    PGUP = 0x200005
    PGDOWN = 0x200006
    LINESTART = 0x200007
    LINEEND = 0x200008
    TEXTSTART = 0x200009
    TEXTEND = 0x20000A
    DELETE = 0x20000B
    BACKSPACE = 0x20000C
    UNDO = 0x20000D
    REDO = 0x20000E
    INSERT = 0x20000F
    WORDLEFT = 0x200010
    WORDRIGHT = 0x200011
    SHIFT = 0x400000


class TextEditState:
    """Cursor, selection, insert mode and undo history of one text field.

    The text itself lives in a :class:`~stbkit.buffer.TextBuffer` handed to
    each call.
    """

    def __init__(self, single_line: bool = False) -> None:
        self.history = UndoHistory()
        self.clear(single_line)

    def clear(self, single_line: bool = False) -> None:
        """Reset cursor, selection, modes and undo history."""
        self.history.clear()
        self.cursor = 0
        self.select_start = 0
        self.select_end = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    def has_selection(self) -> bool:
        """True when some text is selected."""
        return self.select_start != self.select_end

    # -- selection helpers -------------------------------------------------

    def clamp(self, buffer: TextBuffer) -> None:
        """Bring cursor and selection back inside ``buffer`` after outside edits."""
        n = len(buffer)
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        if self.cursor > n:
            self.cursor = n

    def _sort_selection(self) -> None:
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def _move_to_first(self) -> None:
        if self.has_selection():
            self._sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def _move_to_last(self, buffer: TextBuffer) -> None:
        if self.has_selection():
            self._sort_selection()
            self.clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self) -> None:
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    def _delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        self.history.record_delete(buffer, where, length)
        buffer.delete_chars(where, length)
        self.has_preferred_x = False

    # -- mouse -------------------------------------------------------------

    def _pointer_y(self, buffer: TextBuffer, y: float) -> float:
        # A single-line field ignores y so dragging off it keeps working.
        if self.single_line:
            return buffer.layout_row(0).ymin
        return y

    def click(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Place the cursor at the clicked point and drop the selection."""
        y = self._pointer_y(buffer, y)
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer: TextBuffer, x: float, y: float) -> None:
        """Move the cursor and selection end to the dragged point."""
        y = self._pointer_y(buffer, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        self.cursor = self.select_end = locate_coord(buffer, x, y)

    # -- editing -----------------------------------------------------------

    def delete_selection(self, buffer: TextBuffer) -> None:
        """Remove the selected text, if any, recording it for undo."""
        self.clamp(buffer)
        if not self.has_selection():
            return
        if self.select_start < self.select_end:
            self._delete(buffer, self.select_start, self.select_end - self.select_start)
            self.select_end = self.cursor = self.select_start
        else:
            self._delete(buffer, self.select_end, self.select_start - self.select_end)
            self.select_start = self.cursor = self.select_end
        self.has_preferred_x = False

    def cut(self, buffer: TextBuffer) -> bool:
        """Delete the selection; True if there was one.

        Copy the selected text elsewhere before calling this.
        """
        if self.has_selection():
            self.delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer: TextBuffer, text: str) -> bool:
        """Replace the selection with ``text``; False if the buffer refused it.

        A refused paste still leaves the selection deleted; undo restores it.
        """
        self.clamp(buffer)
        self.delete_selection(buffer)
        if buffer.insert_chars(self.cursor, text):
            self.history.record_insert(self.cursor, len(text))
            self.cursor += len(text)
            self.has_preferred_x = False
            return True
        return False

    def text(self, buffer: TextBuffer, text: str) -> None:
        """Type ``text`` at the cursor, over the selection or in insert mode."""
        if not text:
            return
        if text[0] == NEWLINE and self.single_line:
            return
        if self.insert_mode and not self.has_selection() and self.cursor < len(buffer):
            self.history.record_replace(buffer, self.cursor, 1, 1)
            buffer.delete_chars(self.cursor, 1)
            if buffer.insert_chars(self.cursor, text):
                self.cursor += len(text)
                self.has_preferred_x = False
        else:
            self.delete_selection(buffer)
            if buffer.insert_chars(self.cursor, text):
                self.history.record_insert(self.cursor, len(text))
                self.cursor += len(text)
                self.has_preferred_x = False

    # -- keyboard ----------------------------------------------------------

    def key(self, buffer: TextBuffer, key: Union[int, str]) -> None:
        """Handle one key press.

        ``key`` is a :class:`Key`, optionally or'd with ``Key.SHIFT``, a
        Unicode code point, or a string to type.
        """
        if isinstance(key, str):
            self.text(buffer, key)
            return

        code = int(key)
        shift = bool(code & Key.SHIFT)
        base = code & ~Key.SHIFT
        try:
            k = Key(base)
        except ValueError:
            if 0 < code <= _MAX_CODE_POINT:
                self.text(buffer, chr(code))
            return

        if k in (Key.UNDO, Key.REDO, Key.INSERT) and shift:
            return

        if k is Key.INSERT:
            self.insert_mode = not self.insert_mode
        elif k is Key.UNDO:
            cursor = self.history.undo(buffer)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif k is Key.REDO:
            cursor = self.history.redo(buffer)
            if cursor is not None:
                self.cursor = cursor
            self.has_preferred_x = False
        elif k is Key.LEFT:
            self._key_left(buffer, shift)
        elif k is Key.RIGHT:
            self._key_right(buffer, shift)
        elif k is Key.WORDLEFT:
            self._key_word(buffer, shift, move_word_left, forward=False)
        elif k is Key.WORDRIGHT:
            self._key_word(buffer, shift, move_word_right, forward=True)
        elif k in (Key.DOWN, Key.PGDOWN):
            is_page = k is Key.PGDOWN
            if not is_page and self.single_line:
                self.key(buffer, Key.RIGHT | (Key.SHIFT if shift else 0))
                return
            self._key_down(buffer, shift, self.row_count_per_page if is_page else 1)
        elif k in (Key.UP, Key.PGUP):
            is_page = k is Key.PGUP
            if not is_page and self.single_line:
                self.key(buffer, Key.LEFT | (Key.SHIFT if shift else 0))
                return
            self._key_up(buffer, shift, self.row_count_per_page if is_page else 1)
        elif k is Key.DELETE:
            if self.has_selection():
                self.delete_selection(buffer)
            elif self.cursor < len(buffer):
                nxt = buffer.next_char_index(self.cursor)
                self._delete(buffer, self.cursor, nxt - self.cursor)
            self.has_preferred_x = False
        elif k is Key.BACKSPACE:
            if self.has_selection():
                self.delete_selection(buffer)
            else:
                self.clamp(buffer)
                if self.cursor > 0:
                    prev = buffer.prev_char_index(self.cursor)
                    self._delete(buffer, prev, self.cursor - prev)
                    self.cursor = prev
            self.has_preferred_x = False
        elif k is Key.TEXTSTART:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif k is Key.TEXTEND:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = len(buffer)
            else:
                self.cursor = len(buffer)
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif k is Key.LINESTART:
            self.clamp(buffer)
            if shift:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if self.single_line:
                self.cursor = 0
            else:
                while self.cursor > 0 and buffer.char_at(self.cursor - 1) != NEWLINE:
                    self.cursor -= 1
            if shift:
                self.select_end = self.cursor
            self.has_preferred_x = False
        elif k is Key.LINEEND:
            n = len(buffer)
            self.clamp(buffer)
            if shift:
                self._prep_selection_at_cursor()
            else:
                self._move_to_first()
            if self.single_line:
                self.cursor = n
            else:
                while self.cursor < n and buffer.char_at(self.cursor) != NEWLINE:
                    self.cursor += 1
            if shift:
                self.select_end = self.cursor
            self.has_preferred_x = False

    def _key_left(self, buffer: TextBuffer, shift: bool) -> None:
        if shift:
            self.clamp(buffer)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end = buffer.prev_char_index(self.select_end)
            self.cursor = self.select_end
        elif self.has_selection():
            self._move_to_first()
        elif self.cursor > 0:
            self.cursor = buffer.prev_char_index(self.cursor)
        self.has_preferred_x = False

    def _key_right(self, buffer: TextBuffer, shift: bool) -> None:
        if shift:
            self._prep_selection_at_cursor()
            self.select_end = buffer.next_char_index(self.select_end)
            self.clamp(buffer)
            self.cursor = self.select_end
        else:
            if self.has_selection():
                self._move_to_last(buffer)
            else:
                self.cursor = buffer.next_char_index(self.cursor)
            self.clamp(buffer)
        self.has_preferred_x = False

    def _key_word(self, buffer: TextBuffer, shift: bool, move, forward: bool) -> None:
        if shift:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = move(buffer, self.cursor)
            self.select_end = self.cursor
            self.clamp(buffer)
        elif self.has_selection():
            if forward:
                self._move_to_last(buffer)
            else:
                self._move_to_first()
        else:
            self.cursor = move(buffer, self.cursor)
            self.clamp(buffer)

    def _seek_in_row(self, buffer: TextBuffer, start: int, goal_x: float) -> int:
        """Move the cursor along the row at ``start`` towards ``goal_x``; return its length."""
        self.cursor = start
        row = buffer.layout_row(start)
        x = row.x0
        for i in range(row.num_chars):
            dx = buffer.char_width(start, i)
            if dx == NEWLINE_WIDTH:
                break
            x += dx
            if x > goal_x:
                break
            self.cursor = buffer.next_char_index(self.cursor)
        self.clamp(buffer)
        return row.num_chars

    def _key_down(self, buffer: TextBuffer, shift: bool, row_count: int) -> None:
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_last(buffer)

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            # Going down from the last line must not jump to its end.
            if buffer.char_at(find.first_char + find.length - 1) != NEWLINE:
                break
            num_chars = self._seek_in_row(buffer, start, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shift:
                self.select_end = self.cursor
            find.first_char = start
            find.length = num_chars

    def _key_up(self, buffer: TextBuffer, shift: bool, row_count: int) -> None:
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self._move_to_first()

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break
            self._seek_in_row(buffer, find.prev_first, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shift:
                self.select_end = self.cursor
            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.char_at(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan