# gtlengine

The text-editing core of a game's in-engine user interface, in pure Python
with no runtime dependencies. It turns mouse and keyboard input into
edits of a text buffer, cursor movement, selection changes and undo/redo
history. Drawing the text is left to you.

The package has three modules:

- `gtlengine.textlayout`: `TextBuffer`, an editable string laid out in
  fixed-width characters with one row per line; `Row` and `FindState`,
  the results of layout queries; and the lookups `locate_coord`,
  `find_charpos`, `is_word_boundary`, `move_word_left` and
  `move_word_right`.
- `gtlengine.textundo`: `UndoState` and `UndoRecord`, an undo/redo
  history bounded by a number of records (99 by default) and a number of
  stored characters (999 by default). Recording a new edit drops the redo
  history; when the history is full the oldest records are dropped.
- `gtlengine.textedit`: `TextEditState`, the cursor, selection, insert
  mode and history of one text field, and `Key`, the editing keys.

## Installing

```
pip install .
```

## The text buffer

`TextBuffer(text="", char_width=1.0, line_height=1.0, max_length=None)`
stores characters in a list. Every character advances `char_width`
except a newline, which takes no horizontal space and ends its row.
Rows are `line_height` apart. With `max_length` set, `insert_chars`
refuses (returns `False`) any insertion that would make the text longer.
`get_char` raises `IndexError` outside the text; `text` gives the
current contents as a string.

`TextEditState` only uses the buffer through `length`, `get_char`,
`layout_row`, `get_width`, `delete_chars`, `insert_chars`,
`next_char_index`, `prev_char_index` and `is_space`, so any object with
those methods can take its place, for example one that measures a real
font or wraps words.

## Editing

```python
from gtlengine.textlayout import TextBuffer
from gtlengine.textedit import TextEditState, Key

buffer = TextBuffer("hello")
state = TextEditState()

state.key(buffer, Key.TEXTEND)
state.input_text(buffer, "!")
print(buffer.text, state.cursor)   # hello! 6

state.undo(buffer)
print(buffer.text, state.cursor)   # hello 5

state.redo(buffer)
print(buffer.text)                 # hello!
```

`TextEditState(single_line=False)` starts with the cursor at 0 and no
selection; `initialize(single_line)` resets it and clears the history.
In single-line mode newlines cannot be typed, clicks ignore the y
coordinate, and `UP`/`DOWN` act as `LEFT`/`RIGHT`.

Keys are `Key` values, optionally or'd with `Key.SHIFT` to extend the
selection: `LEFT`, `RIGHT`, `UP`, `DOWN`, `PGUP`, `PGDOWN`, `LINESTART`,
`LINEEND`, `TEXTSTART`, `TEXTEND`, `WORDLEFT`, `WORDRIGHT`, `DELETE`,
`BACKSPACE`, `UNDO`, `REDO` and `INSERT` (which toggles overwrite mode).
Paging moves by `state.row_count_per_page` rows, which is 0 until you set
it. Any other key is handed to the optional `key_to_text` callable given
to `key`; it returns the text to type, a positive character code, or
`None`:

```python
state.key(buffer, ord("x"), key_to_text=lambda k: k if k < 0x110000 else None)
```

Selecting with the mouse:

```python
buffer = TextBuffer("one\ntwo")
state = TextEditState()
state.click(buffer, 1.0, 0.5)      # cursor at index 1
state.drag(buffer, 2.0, 1.5)       # selection runs from 1 to 6
state.cut(buffer)                  # True; buffer.text == "owo"
```

`paste(buffer, chars)` replaces the selection with `chars` and returns
`False` if the buffer refused the text (the selection stays deleted; an
undo restores it). `has_selection`, `select_start`, `select_end` and
`cursor` tell you what to draw.

## What it does not do

- It draws nothing and reads no input devices; you pass in mouse
  positions and key codes and render the buffer yourself.
- It has no clipboard: `cut` only deletes the selection, so copy the
  selected text out of the buffer before calling it.
- `TextBuffer` does no word wrapping and knows no fonts; supply your own
  buffer for that.
- Beyond text editing there are no other engine parts here: no 3D math,
  scene, actors or game loop.

## Running the tests

```
pip install .[test]
pytest
```