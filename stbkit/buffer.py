"""Text storage and layout interface used by the text editor."""

from __future__ import annotations

import abc
from dataclasses import dataclass
from typing import Iterable, List

NEWLINE = "\n"
"""The character that ends a line."""

NEWLINE_WIDTH = -1.0
"""Width reported by :class:`MonospaceBuffer` for a newline character."""


@dataclass
class Row:
    """Layout of one displayed row of characters.

    ``x0`` and ``x1`` are the start and end x positions, ``baseline_y_delta`` the
    distance from the previous row's baseline, ``ymin`` and ``ymax`` the extent
    of the row around its baseline and ``num_chars`` the characters it holds.
    """

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


class TextBuffer(abc.ABC):
    """A string being edited, together with the way it is laid out."""

    @abc.abstractmethod
    def __len__(self) -> int:
        """Number of characters in the buffer."""

    @abc.abstractmethod
    def char_at(self, index: int) -> str:
        """The character at ``index``."""

    @abc.abstractmethod
    def delete_chars(self, index: int, count: int) -> None:
        """Remove ``count`` characters starting at ``index``."""

    @abc.abstractmethod
    def insert_chars(self, index: int, chars: Iterable[str]) -> bool:
        """Insert ``chars`` at ``index``; False if they could not be inserted."""

    @abc.abstractmethod
    def layout_row(self, start: int) -> Row:
        """Lay out the row that begins at character ``start``."""

    @abc.abstractmethod
    def char_width(self, line_start: int, offset: int) -> float:
        """Width of the character ``offset`` places into the row at ``line_start``."""

    def next_char_index(self, index: int) -> int:
        """Index of the character after the one at ``index``."""
        return index + 1

    def prev_char_index(self, index: int) -> int:
        """Index of the character before the one at ``index``."""
        return index - 1


class MonospaceBuffer(TextBuffer):
    """An in-memory buffer in which every character has the same width.

    Rows end after each newline; there is no word wrapping.
    """

    def __init__(
        self, text: str = "", char_width: float = 1.0, line_height: float = 1.0
    ) -> None:
        if char_width <= 0 or line_height <= 0:
            raise ValueError("char_width and line_height must be positive")
        self._chars: List[str] = list(text)
        self._char_width = float(char_width)
        self._line_height = float(line_height)

    def __len__(self) -> int:
        return len(self._chars)

    def __str__(self) -> str:
        return "".join(self._chars)

    def _check_index(self, index: int, upper: int) -> None:
        if not 0 <= index <= upper:
            raise IndexError(f"index {index} out of range 0..{upper}")

    def char_at(self, index: int) -> str:
        self._check_index(index, len(self._chars) - 1)
        return self._chars[index]

    def delete_chars(self, index: int, count: int) -> None:
        if count < 0:
            raise ValueError("count must not be negative")
        self._check_index(index, len(self._chars))
        if index + count > len(self._chars):
            raise IndexError("deletion runs past the end of the buffer")
        del self._chars[index : index + count]

    def insert_chars(self, index: int, chars: Iterable[str]) -> bool:
        self._check_index(index, len(self._chars))
        self._chars[index:index] = list(chars)
        return True

    def layout_row(self, start: int) -> Row:
        self._check_index(start, len(self._chars))
        end = start
        visible = 0
        while end < len(self._chars):
            ch = self._chars[end]
            end += 1
            if ch == NEWLINE:
                break
            visible += 1
        return Row(
            x0=0.0,
            x1=visible * self._char_width,
            baseline_y_delta=self._line_height,
            ymin=0.0,
            ymax=self._line_height,
            num_chars=end - start,
        )

    def char_width(self, line_start: int, offset: int) -> float:
        if self.char_at(line_start + offset) == NEWLINE:
            return NEWLINE_WIDTH
        return self._char_width

    def next_char_index(self, index: int) -> int:
        """Index of the character after the one at ``index``."""
        return index + 1

    def prev_char_index(self, index: int) -> int:
        """Index of the character before the one at ``index``."""
        return index - 1