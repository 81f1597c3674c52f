# stbkit

Two small building blocks for games and custom UI toolkits. Neither one needs
any library outside the standard library.

- **`stbkit.rectpack`** is a skyline rectangle packer for building texture
  atlases. It offers a bottom-left heuristic and a best-fit heuristic.
- **`stbkit.editor`** holds the logic of a single-line or multi-line text
  field: cursor, selection, keyboard navigation, cut and paste, insert mode,
  and undo/redo. You supply the text storage and the layout. The editor turns
  input into edits and cursor moves.

The supporting modules are:

- **`stbkit.buffer`**: the `TextBuffer` interface, the `Row` layout record and
  the ready-made `MonospaceBuffer`.
- **`stbkit.layout`**: hit-testing and character positions (`locate_coord`,
  `find_charpos`), plus word movement (`is_word_boundary`, `move_word_left`,
  `move_word_right`).
- **`stbkit.undo`**: the bounded `UndoHistory` and its `UndoRecord` entries.

## Installation

```
pip install stbkit
```

## Packing rectangles

```python
from stbkit.rectpack import Packer, Rect, Heuristic

packer = Packer(width=256, height=256, num_nodes=256)
packer.set_heuristic(Heuristic.SKYLINE_BF_SORT_HEIGHT)

rects = [Rect(id=1, w=64, h=32), Rect(id=2, w=100, h=100), Rect(id=3, w=0, h=10)]
all_packed = packer.pack(rects)

for r in rects:
    print(r.id, r.x, r.y, r.was_packed)
```

`pack` sets `x`, `y` and `was_packed` on each rectangle. It returns `True` only
if every rectangle fit.

- The rectangles keep their order in the list. Internally they are placed
  tallest first.
- An empty rectangle, with a width or height of 0, is placed at `(0, 0)`.
- A rectangle that does not fit gets `x` and `y` equal to
  `stbkit.rectpack.MAX_VALUE`, and its `was_packed` is `False`.
- You can call `pack` more than once to keep filling the same target.

`set_heuristic` takes a `Heuristic` value and raises `ValueError` for any other
value. Rotation is not supported.

`num_nodes` bounds how many skyline segments can exist at once. By default,
widths are rounded up to a multiple of `ceil(width / num_nodes)`, so the packer
never runs out of segments. For the tightest packing, either pass a `num_nodes`
of at least `width`, or call `set_allow_out_of_mem(True)` to keep exact widths.
With exact widths, packing may fail when the segments run out.

## Editing text

The editor works against any `TextBuffer`. `MonospaceBuffer` is a ready-made
one:

- every character has the same width;
- rows end after each `"\n"`;
- there is no word wrapping.

```python
from stbkit.buffer import MonospaceBuffer
from stbkit.editor import Key, TextEditState

buf = MonospaceBuffer("hello\nworld", char_width=8.0, line_height=16.0)
state = TextEditState(single_line=False)

state.key(buf, Key.TEXTEND)
state.text(buf, "!")
state.key(buf, Key.LEFT | Key.SHIFT)
state.cut(buf)
state.key(buf, Key.UNDO)
print(repr(str(buf)), state.cursor)   # 'hello\nworld!' 12
```

### Keyboard input

`key(buffer, key)` accepts any of the following:

- a `Key` member, such as `LEFT`, `RIGHT`, `UP`, `DOWN`, `PGUP`, `PGDOWN`,
  `LINESTART`, `LINEEND`, `TEXTSTART`, `TEXTEND`, `WORDLEFT`, `WORDRIGHT`,
  `DELETE`, `BACKSPACE`, `UNDO`, `REDO` or `INSERT`. Or it with `Key.SHIFT` to
  extend the selection.
- a Unicode code point, which is typed as a character;
- a string, which is typed as it is.

Some keys need extra setup or behave differently in a single-line field:

- Page up and page down move by `state.row_count_per_page` rows. That value
  starts at 0, so set it before using those keys.
- In a single-line field, up and down act as left and right.
- A single-line field refuses text that starts with a newline.

### Other operations

- `click(buffer, x, y)` places the cursor and drops the selection.
- `drag(buffer, x, y)` extends the selection. Coordinates are relative to the
  top left of the text.
- `text(buffer, text)` types at the cursor. It replaces the selection if there
  is one. In insert mode it overwrites the character under the cursor.
- `paste(buffer, text)` replaces the selection with the given text.
- `cut(buffer)` deletes the selection and returns whether there was one. Copy
  the selected text out yourself first.
- `delete_selection(buffer)` deletes the selection.
- `clamp(buffer)` brings the cursor and selection back into range after the
  buffer was changed from outside.
- `clear()` resets the state.

Read `cursor`, `select_start` and `select_end` when drawing. Start and end may
be in either order.

### Your own storage

To edit your own storage, subclass `TextBuffer` and implement these methods:

- `__len__`
- `char_at`
- `delete_chars`
- `insert_chars`
- `layout_row`, which returns a `Row`
- `char_width`

If a character can span more than one index, also override `next_char_index`
and `prev_char_index`.

### Undo history

Undo history is kept per state, in `state.history`, an `UndoHistory`. By
default it holds 99 records and 999 stored characters, shared between undo and
redo. When it fills up, the oldest entries are dropped. A new edit clears the
redo steps.

## What this package does not do

stbkit is logic only. It does not:

- draw text, measure fonts or rasterise anything;
- read the keyboard, mouse or gamepads;
- open windows;
- touch the system clipboard.

Feed it events, and draw from the state it keeps, using whatever windowing and
rendering code you already have.