"""Skyline bottom-left rectangle packing for texture atlases."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, List, Optional

MAX_VALUE = 0x7FFFFFFF
"""Largest supported coordinate; also the position given to rectangles that did not fit."""

_SENTINEL_Y = 1 << 30


class Heuristic(enum.IntEnum):
    """Which skyline placement rule the packer uses."""

    SKYLINE_BL_SORT_HEIGHT = 0
    SKYLINE_BF_SORT_HEIGHT = 1

    SKYLINE_DEFAULT = 0


@dataclass
class Rect:
    """A rectangle to pack; ``x``, ``y`` and ``was_packed`` are filled in by the packer."""

    w: int
    h: int
    id: int = 0
    x: int = 0
    y: int = 0
    was_packed: bool = False


@dataclass
class _Node:
    x: int
    y: int


@dataclass
class _FindResult:
    index: Optional[int]
    x: int
    y: int


class Packer:
    """Packs rectangles into a fixed ``width`` by ``height`` target.

    ``num_nodes`` bounds the number of skyline segments that may exist at once;
    unless out-of-memory packing is allowed, widths are rounded up so that this
    bound is never exceeded.
    """

    def __init__(self, width: int, height: int, num_nodes: int) -> None:
        if num_nodes < 1:
            raise ValueError("num_nodes must be at least 1")
        if width < 0 or height < 0:
            raise ValueError("width and height must not be negative")
        self.width = width
        self.height = height
        self.num_nodes = num_nodes
        self.heuristic = Heuristic.SKYLINE_DEFAULT
        self._free = num_nodes
        # The first node spans the full width; the last one is a sentinel.
        self._skyline: List[_Node] = [_Node(0, 0), _Node(width, _SENTINEL_Y)]
        self.align = 1
        self.set_allow_out_of_mem(False)

    def set_allow_out_of_mem(self, allow: bool) -> None:
        """Choose between exact widths (may run out of nodes) and quantised widths."""
        if allow:
            self.align = 1
        else:
            self.align = max(1, (self.width + self.num_nodes - 1) // self.num_nodes)

    def set_heuristic(self, heuristic: int) -> None:
        """Select the placement heuristic; raises ValueError for unknown values."""
        self.heuristic = Heuristic(heuristic)

    def _find_min_y(self, first: int, x0: int, width: int) -> tuple[int, int]:
        sky = self._skyline
        x1 = x0 + width
        min_y = 0
        waste_area = 0
        visited_width = 0
        i = first
        while sky[i].x < x1:
            node, nxt = sky[i], sky[i + 1]
            if node.y > min_y:
                waste_area += visited_width * (node.y - min_y)
                min_y = node.y
                if node.x < x0:
                    visited_width += nxt.x - x0
                else:
                    visited_width += nxt.x - node.x
            else:
                under_width = nxt.x - node.x
                if under_width + visited_width > width:
                    under_width = width - visited_width
                waste_area += under_width * (min_y - node.y)
                visited_width += under_width
            i += 1
        return min_y, waste_area

    def _find_best_pos(self, width: int, height: int) -> _FindResult:
        sky = self._skyline
        width = width + self.align - 1
        width -= width % self.align

        if width > self.width or height > self.height:
            return _FindResult(None, 0, 0)

        best_waste = _SENTINEL_Y
        best_y = _SENTINEL_Y
        best: Optional[int] = None

        i = 0
        while sky[i].x + width <= self.width:
            y, waste = self._find_min_y(i, sky[i].x, width)
            if self.heuristic == Heuristic.SKYLINE_BL_SORT_HEIGHT:
                if y < best_y:
                    best_y = y
                    best = i
            elif y + height <= self.height:
                if y < best_y or (y == best_y and waste < best_waste):
                    best_y = y
                    best_waste = waste
                    best = i
            i += 1

        best_x = 0 if best is None else sky[best].x

        if self.heuristic == Heuristic.SKYLINE_BF_SORT_HEIGHT:
            tail = 0
            node = 0
            while sky[tail].x < width:
                tail += 1
            while tail < len(sky):
                xpos = sky[tail].x - width
                while sky[node + 1].x <= xpos:
                    node += 1
                y, waste = self._find_min_y(node, xpos, width)
                if y + height <= self.height and y <= best_y:
                    if (
                        y < best_y
                        or waste < best_waste
                        or (waste == best_waste and xpos < best_x)
                    ):
                        best_x = xpos
                        best_y = y
                        best_waste = waste
                        best = node
                tail += 1

        return _FindResult(best, best_x, best_y)

    def _pack_rectangle(self, width: int, height: int) -> _FindResult:
        res = self._find_best_pos(width, height)
        if res.index is None or res.y + height > self.height or self._free == 0:
            return _FindResult(None, res.x, res.y)

        sky = self._skyline
        new_node = _Node(res.x, res.y + height)
        start = res.index + 1 if sky[res.index].x < res.x else res.index

        right = res.x + width
        end = start
        while end + 1 < len(sky) and sky[end + 1].x <= right:
            end += 1
        cur = sky[end]
        if cur.x < right:
            cur.x = right

        released = end - start
        sky[start:end] = [new_node]
        self._free += released - 1
        return res

    def pack(self, rects: Iterable[Rect]) -> bool:
        """Assign positions to ``rects`` in place; True if every one of them fit."""
        rect_list = list(rects)
        order = sorted(
            range(len(rect_list)),
            key=lambda n: (-rect_list[n].h, -rect_list[n].w),
        )
        for n in order:
            rect = rect_list[n]
            if rect.w == 0 or rect.h == 0:
                rect.x = rect.y = 0
                continue
            found = self._pack_rectangle(rect.w, rect.h)
            if found.index is not None:
                rect.x, rect.y = found.x, found.y
            else:
                rect.x = rect.y = MAX_VALUE

        all_packed = True
        for rect in rect_list:
            rect.was_packed = not (rect.x == MAX_VALUE and rect.y == MAX_VALUE)
            all_packed = all_packed and rect.was_packed
        return all_packed