"""Cursor, selection and keyboard handling for a multi-line text field.

The state works on any buffer with the interface of
:class:`gtlengine.textlayout.TextBuffer`. Keys are :class:`Key` values,
optionally combined with ``Key.SHIFT`` to extend the selection.
"""

from __future__ import annotations

from enum import IntEnum

from gtlengine.textlayout import NEWLINE, find_charpos, locate_coord, move_word_left, move_word_right
from gtlengine.textundo import UndoState


class Key(IntEnum):
    """Editing keys. ``SHIFT`` is a flag that may be or'd into any of the others."""

    LEFT = 0x200000
    RIGHT = 0x200001
    UP = 0x200002
    DOWN = 0x200003
    PGUP = 0x200004
    PGDOWN = 0x200005
    LINESTART = 0x200006
    LINEEND = 0x200007
    TEXTSTART = 0x200008
    TEXTEND = 0x200009
    DELETE = 0x20000A
    BACKSPACE = 0x20000B
    UNDO = 0x20000C
    REDO = 0x20000D
    INSERT = 0x20000E
    WORDLEFT = 0x20000F
    WORDRIGHT = 0x200010
    SHIFT = 0x400000


_UNSHIFTABLE = {Key.INSERT, Key.UNDO, Key.REDO}


class TextEditState:
    """Cursor position, selection, insert mode and undo history of one text field.

    ``select_start`` and ``select_end`` are equal when nothing is selected;
    ``select_start`` may lie after ``select_end`` when selecting backwards.
    """

    def __init__(self, single_line=False, undo_state=None):
        self.undo_state = undo_state if undo_state is not None else UndoState()
        self.initialize(single_line)

    def initialize(self, single_line):
        """Reset cursor, selection, modes and undo history."""
        self.undo_state.clear()
        self.select_start = 0
        self.select_end = 0
        self.cursor = 0
        self.has_preferred_x = False
        self.preferred_x = 0.0
        self.cursor_at_end_of_line = False
        self.initialized = True
        self.single_line = bool(single_line)
        self.insert_mode = False
        self.row_count_per_page = 0

    # selection helpers

    def has_selection(self):
        return self.select_start != self.select_end

    def clamp(self, buffer):
        """Keep cursor and selection inside the buffer after it changed underneath."""
        n = buffer.length()
        if self.has_selection():
            self.select_start = min(self.select_start, n)
            self.select_end = min(self.select_end, n)
            if self.select_start == self.select_end:
                self.cursor = self.select_start
        self.cursor = min(self.cursor, n)

    def _delete(self, buffer, where, length):
        self.undo_state.make_undo_delete(buffer, where, length)
        buffer.delete_chars(where, length)
        self.has_preferred_x = False

    def delete_selection(self, buffer):
        """Delete the selected text, leaving the cursor where it began."""
        self.clamp(buffer)
        if self.has_selection():
            if self.select_start < self.select_end:
                self._delete(buffer, self.select_start, self.select_end - self.select_start)
                self.select_end = self.cursor = self.select_start
            else:
                self._delete(buffer, self.select_end, self.select_start - self.select_end)
                self.select_start = self.cursor = self.select_end
            self.has_preferred_x = False

    def sort_selection(self):
        """Order the selection so that ``select_start <= select_end``."""
        if self.select_end < self.select_start:
            self.select_start, self.select_end = self.select_end, self.select_start

    def move_to_first(self):
        """Collapse the selection onto its first character."""
        if self.has_selection():
            self.sort_selection()
            self.cursor = self.select_start
            self.select_end = self.select_start
            self.has_preferred_x = False

    def move_to_last(self, buffer):
        """Collapse the selection onto its end."""
        if self.has_selection():
            self.sort_selection()
            self.clamp(buffer)
            self.cursor = self.select_end
            self.select_start = self.select_end
            self.has_preferred_x = False

    def _prep_selection_at_cursor(self):
        if not self.has_selection():
            self.select_start = self.select_end = self.cursor
        else:
            self.cursor = self.select_end

    # mouse

    def _single_line_y(self, buffer, y):
        if self.single_line:
            return buffer.layout_row(0).ymin
        return y

    def click(self, buffer, x, y):
        """Place the cursor at a mouse-down position and clear the selection."""
        y = self._single_line_y(buffer, y)
        self.cursor = locate_coord(buffer, x, y)
        self.select_start = self.cursor
        self.select_end = self.cursor
        self.has_preferred_x = False

    def drag(self, buffer, x, y):
        """Move the cursor and the selection end to a mouse-drag position."""
        y = self._single_line_y(buffer, y)
        if self.select_start == self.select_end:
            self.select_start = self.cursor
        self.cursor = self.select_end = locate_coord(buffer, x, y)

    # editing

    def cut(self, buffer):
        """Delete the selection; True if there was one."""
        if self.has_selection():
            self.delete_selection(buffer)
            self.has_preferred_x = False
            return True
        return False

    def paste(self, buffer, chars):
        """Replace the selection (if any) with ``chars``; False if the buffer refused them.

        A refused paste leaves the selection deleted; an undo restores it.
        """
        chars = list(chars)
        self.clamp(buffer)
        self.delete_selection(buffer)
        if buffer.insert_chars(self.cursor, chars):
            self.undo_state.make_undo_insert(self.cursor, len(chars))
            self.cursor += len(chars)
            self.has_preferred_x = False
            return True
        return False

    def input_text(self, buffer, chars):
        """Type ``chars`` at the cursor, overwriting in insert mode."""
        chars = list(chars)
        if not chars:
            return
        if chars[0] == NEWLINE and self.single_line:
            return

        if self.insert_mode and not self.has_selection() and self.cursor < buffer.length():
            self.undo_state.make_undo_replace(buffer, self.cursor, 1, 1)
            buffer.delete_chars(self.cursor, 1)
            if buffer.insert_chars(self.cursor, chars):
                self.cursor += len(chars)
                self.has_preferred_x = False
        else:
            self.delete_selection(buffer)
            if buffer.insert_chars(self.cursor, chars):
                self.undo_state.make_undo_insert(self.cursor, len(chars))
                self.cursor += len(chars)
                self.has_preferred_x = False

    def undo(self, buffer):
        """Revert the latest edit; True if one was reverted."""
        cursor = self.undo_state.undo(buffer)
        if cursor is None:
            return False
        self.cursor = cursor
        return True

    def redo(self, buffer):
        """Reapply the latest undone edit; True if one was reapplied."""
        cursor = self.undo_state.redo(buffer)
        if cursor is None:
            return False
        self.cursor = cursor
        return True

    # keyboard

    def _type_key(self, buffer, key, key_to_text):
        if key_to_text is None:
            return
        text = key_to_text(key)
        if isinstance(text, int):
            text = chr(text) if text > 0 else None
        if text:
            self.input_text(buffer, text)

    def key(self, buffer, key, key_to_text=None):
        """Handle one key press.

        Keys that are not editing keys are passed to ``key_to_text``, which
        returns the text to type (a string or a positive character code) or None.
        """
        while True:
            key = int(key)
            shift = bool(key & Key.SHIFT)
            try:
                base = Key(key & ~Key.SHIFT)
            except ValueError:
                base = None

            if base is None or base is Key.SHIFT or (shift and base in _UNSHIFTABLE):
                self._type_key(buffer, key, key_to_text)
                return

            if base in (Key.DOWN, Key.UP) and self.single_line:
                key = (Key.RIGHT if base is Key.DOWN else Key.LEFT) | (key & Key.SHIFT)
                continue
            break

        if base is Key.INSERT:
            self.insert_mode = not self.insert_mode
        elif base is Key.UNDO:
            self.undo(buffer)
            self.has_preferred_x = False
        elif base is Key.REDO:
            self.redo(buffer)
            self.has_preferred_x = False
        elif base is Key.LEFT:
            self._key_left(buffer, shift)
        elif base is Key.RIGHT:
            self._key_right(buffer, shift)
        elif base is Key.WORDLEFT:
            self._key_word(buffer, shift, move_word_left, left=True)
        elif base is Key.WORDRIGHT:
            self._key_word(buffer, shift, move_word_right, left=False)
        elif base in (Key.DOWN, Key.PGDOWN):
            self._key_down(buffer, shift, base is Key.PGDOWN)
        elif base in (Key.UP, Key.PGUP):
            self._key_up(buffer, shift, base is Key.PGUP)
        elif base is Key.DELETE:
            self._key_delete(buffer)
        elif base is Key.BACKSPACE:
            self._key_backspace(buffer)
        elif base is Key.TEXTSTART:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = 0
            else:
                self.cursor = self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base is Key.TEXTEND:
            if shift:
                self._prep_selection_at_cursor()
                self.cursor = self.select_end = buffer.length()
            else:
                self.cursor = buffer.length()
                self.select_start = self.select_end = 0
            self.has_preferred_x = False
        elif base is Key.LINESTART:
            self._key_line_start(buffer, shift)
        elif base is Key.LINEEND:
            self._key_line_end(buffer, shift)

    def _key_left(self, buffer, shift):
        if shift:
            self.clamp(buffer)
            self._prep_selection_at_cursor()
            if self.select_end > 0:
                self.select_end = buffer.prev_char_index(self.select_end)
            self.cursor = self.select_end
        elif self.has_selection():
            self.move_to_first()
        elif self.cursor > 0:
            self.cursor = buffer.prev_char_index(self.cursor)
        self.has_preferred_x = False

    def _key_right(self, buffer, shift):
        if shift:
            self._prep_selection_at_cursor()
            self.select_end = buffer.next_char_index(self.select_end)
            self.clamp(buffer)
            self.cursor = self.select_end
        else:
            if self.has_selection():
                self.move_to_last(buffer)
            else:
                self.cursor = buffer.next_char_index(self.cursor)
            self.clamp(buffer)
        self.has_preferred_x = False

    def _key_word(self, buffer, shift, move, left):
        if shift:
            if not self.has_selection():
                self._prep_selection_at_cursor()
            self.cursor = move(buffer, self.cursor)
            self.select_end = self.cursor
            self.clamp(buffer)
        elif self.has_selection():
            if left:
                self.move_to_first()
            else:
                self.move_to_last(buffer)
        else:
            self.cursor = move(buffer, self.cursor)
            self.clamp(buffer)

    def _scan_row_for_x(self, buffer, row_start, goal_x):
        self.cursor = row_start
        row = buffer.layout_row(row_start)
        x = row.x0
        for i in range(row.num_chars):
            if buffer.get_char(row_start + i) == NEWLINE:
                break
            x += buffer.get_width(row_start, i)
            if x > goal_x:
                break
            self.cursor = buffer.next_char_index(self.cursor)
        self.clamp(buffer)
        return row

    def _key_down(self, buffer, shift, is_page):
        row_count = self.row_count_per_page if is_page else 1
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self.move_to_last(buffer)

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            start = find.first_char + find.length
            if find.length == 0:
                break
            # on the last line, going down does not jump to its end
            if buffer.get_char(find.first_char + find.length - 1) != NEWLINE:
                break

            row = self._scan_row_for_x(buffer, start, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shift:
                self.select_end = self.cursor

            find.first_char = find.first_char + find.length
            find.length = row.num_chars

    def _key_up(self, buffer, shift, is_page):
        row_count = self.row_count_per_page if is_page else 1
        if shift:
            self._prep_selection_at_cursor()
        elif self.has_selection():
            self.move_to_first()

        self.clamp(buffer)
        find = find_charpos(buffer, self.cursor, self.single_line)

        for _ in range(row_count):
            goal_x = self.preferred_x if self.has_preferred_x else find.x
            if find.prev_first == find.first_char:
                break

            self._scan_row_for_x(buffer, find.prev_first, goal_x)
            self.has_preferred_x = True
            self.preferred_x = goal_x
            if shift:
                self.select_end = self.cursor

            prev_scan = find.prev_first - 1 if find.prev_first > 0 else 0
            while prev_scan > 0 and buffer.get_char(prev_scan - 1) != NEWLINE:
                prev_scan -= 1
            find.first_char = find.prev_first
            find.prev_first = prev_scan

    def _key_delete(self, buffer):
        if self.has_selection():
            self.delete_selection(buffer)
        elif self.cursor < buffer.length():
            end = buffer.next_char_index(self.cursor)
            self._delete(buffer, self.cursor, end - self.cursor)
        self.has_preferred_x = False

    def _key_backspace(self, buffer):
        if self.has_selection():
            self.delete_selection(buffer)
        else:
            self.clamp(buffer)
            if self.cursor > 0:
                prev = buffer.prev_char_index(self.cursor)
                self._delete(buffer, prev, self.cursor - prev)
                self.cursor = prev
        self.has_preferred_x = False

    def _key_line_start(self, buffer, shift):
        self.clamp(buffer)
        if shift:
            self._prep_selection_at_cursor()
        else:
            self.move_to_first()
        if self.single_line:
            self.cursor = 0
        else:
            while self.cursor > 0 and buffer.get_char(self.cursor - 1) != NEWLINE:
                self.cursor -= 1
        if shift:
            self.select_end = self.cursor
        self.has_preferred_x = False

    def _key_line_end(self, buffer, shift):
        n = buffer.length()
        self.clamp(buffer)
        if shift:
            self._prep_selection_at_cursor()
        else:
            self.move_to_first()
        if self.single_line:
            self.cursor = n
        else:
            while self.cursor < n and buffer.get_char(self.cursor) != NEWLINE:
                self.cursor += 1
        if shift:
            self.select_end = self.cursor
        self.has_preferred_x = False