"""Bounded undo/redo history for text edits.

Undo and redo share one budget of records and one budget of stored
characters. When an edit needs room, the oldest undo entries go first.
When an undo needs room to keep the characters it removes, the oldest redo
entries go.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from .buffer import TextBuffer

DEFAULT_STATE_COUNT = 99
"""Default number of undo plus redo records kept."""

DEFAULT_CHAR_COUNT = 999
"""Default number of characters stored across all records."""


@dataclass(frozen=True)
class UndoRecord:
    """One reversible step.

    Applying the record deletes ``delete_length`` characters at ``where``.
    It then inserts ``chars`` there. ``chars`` holds ``insert_length``
    characters, or is empty when ``insert_length`` is 0.
    """

    where: int
    insert_length: int
    delete_length: int
    chars: str = ""


def _read(buffer: TextBuffer, where: int, length: int) -> str:
    return "".join(buffer.char_at(i) for i in range(where, where + length))


class UndoHistory:
    """Undo and redo stacks with shared record and character limits."""

    def __init__(
        self,
        state_count: int = DEFAULT_STATE_COUNT,
        char_count: int = DEFAULT_CHAR_COUNT,
    ) -> None:
        if state_count < 1:
            raise ValueError("state_count must be at least 1")
        if char_count < 0:
            raise ValueError("char_count must not be negative")
        self.state_count = state_count
        self.char_count = char_count
        self._undo: List[UndoRecord] = []
        self._redo: List[UndoRecord] = []

    @property
    def undo_depth(self) -> int:
        """Number of steps that can be undone."""
        return len(self._undo)

    @property
    def redo_depth(self) -> int:
        """Number of steps that can be redone."""
        return len(self._redo)

    @property
    def undo_char_count(self) -> int:
        """Characters held by undo records."""
        return sum(len(r.chars) for r in self._undo)

    @property
    def redo_char_count(self) -> int:
        """Characters held by redo records."""
        return sum(len(r.chars) for r in self._redo)

    def clear(self) -> None:
        """Forget all undo and redo steps."""
        self._undo.clear()
        self._redo.clear()

    def flush_redo(self) -> None:
        """Forget all redo steps."""
        self._redo.clear()

    def _discard_undo(self) -> None:
        if self._undo:
            del self._undo[0]

    def _discard_redo(self) -> None:
        if self._redo:
            del self._redo[0]

    def _make_room(self, numchars: int) -> bool:
        self.flush_redo()
        if len(self._undo) == self.state_count:
            self._discard_undo()
        if numchars > self.char_count:
            self._undo.clear()
            return False
        while self._undo and self.undo_char_count + numchars > self.char_count:
            self._discard_undo()
        return True

    def _push(
        self, where: int, insert_length: int, delete_length: int, chars: str
    ) -> None:
        if self._make_room(insert_length):
            self._undo.append(UndoRecord(where, insert_length, delete_length, chars))

    def record_insert(self, where: int, length: int) -> None:
        """Note that ``length`` characters are about to be inserted at ``where``."""
        self._push(where, 0, length, "")

    def record_delete(self, buffer: TextBuffer, where: int, length: int) -> None:
        """Note that ``length`` characters at ``where`` are about to be deleted."""
        self._push(where, length, 0, _read(buffer, where, length))

    def record_replace(
        self, buffer: TextBuffer, where: int, old_length: int, new_length: int
    ) -> None:
        """Note that ``old_length`` characters at ``where`` will become ``new_length`` new ones."""
        self._push(where, old_length, new_length, _read(buffer, where, old_length))

    def undo(self, buffer: TextBuffer) -> Optional[int]:
        """Revert the latest step in ``buffer``.

        Returns the new cursor position, or None when there is nothing to undo.
        """
        if not self._undo:
            return None
        u = self._undo[-1]
        redo_insert = u.delete_length
        redo_chars = ""

        if u.delete_length:
            undo_chars = self.undo_char_count
            if undo_chars + u.delete_length >= self.char_count:
                # No space is left to keep the removed characters for redo.
                redo_insert = 0
            else:
                while undo_chars + u.delete_length > self.char_count - self.redo_char_count:
                    if not self._redo:
                        return None
                    self._discard_redo()
                redo_chars = _read(buffer, u.where, u.delete_length)
            buffer.delete_chars(u.where, u.delete_length)

        if u.insert_length:
            buffer.insert_chars(u.where, u.chars)

        self._undo.pop()
        self._redo.append(UndoRecord(u.where, redo_insert, u.insert_length, redo_chars))
        return u.where + u.insert_length

    def redo(self, buffer: TextBuffer) -> Optional[int]:
        """Reapply the latest undone step in ``buffer``.

        Returns the new cursor position, or None when there is nothing to redo.
        """
        if not self._redo:
            return None
        r = self._redo[-1]
        undo_insert = r.delete_length
        undo_delete = r.insert_length
        undo_chars = ""

        if r.delete_length:
            free_end = self.char_count - self.redo_char_count
            if self.undo_char_count + undo_insert > free_end:
                undo_insert = 0
                undo_delete = 0
            else:
                undo_chars = _read(buffer, r.where, undo_insert)
            buffer.delete_chars(r.where, r.delete_length)

        if r.insert_length:
            buffer.insert_chars(r.where, r.chars)

        self._redo.pop()
        self._undo.append(UndoRecord(r.where, undo_insert, undo_delete, undo_chars))
        return r.where + r.insert_length