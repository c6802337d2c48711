"""Text storage and row layout for the text editor, plus cursor lookups over it."""

from __future__ import annotations

from dataclasses import dataclass

NEWLINE = "\n"


@dataclass
class Row:
    """Layout of one displayed row of text.

    ``x0``/``x1`` are the start and end x of the row, ``baseline_y_delta`` is the
    distance from the previous row's baseline, ``ymin``/``ymax`` are the extent of
    the row around its baseline, and ``num_chars`` is how many characters it holds.
    """

    x0: float = 0.0
    x1: float = 0.0
    baseline_y_delta: float = 0.0
    ymin: float = 0.0
    ymax: float = 0.0
    num_chars: int = 0


@dataclass
class FindState:
    """Where a character sits: its x/y, the row's height, first char and length,
    and the first character of the row before it."""

    x: float = 0.0
    y: float = 0.0
    height: float = 0.0
    first_char: int = 0
    length: int = 0
    prev_first: int = 0


class TextBuffer:
    """An editable string laid out in fixed-width characters, one row per line.

    A row runs up to and including a newline. Newlines take no horizontal space.
    If ``max_length`` is set, insertions that would exceed it are refused.
    """

    def __init__(self, text="", char_width=1.0, line_height=1.0, max_length=None):
        self._chars = list(text)
        self.char_width = char_width
        self.line_height = line_height
        self.max_length = max_length

    @property
    def text(self):
        return "".join(self._chars)

    def __len__(self):
        return len(self._chars)

    def __str__(self):
        return self.text

    def length(self):
        return len(self._chars)

    def get_char(self, index):
        """The character at ``index``; raises IndexError outside the text."""
        if not 0 <= index < len(self._chars):
            raise IndexError(f"character index {index} out of range")
        return self._chars[index]

    def _char_width(self, char):
        return 0.0 if char == NEWLINE else self.char_width

    def layout_row(self, start):
        """Lay out the row that begins at character ``start``."""
        end = start
        total = len(self._chars)
        width = 0.0
        while end < total:
            char = self._chars[end]
            end += 1
            width += self._char_width(char)
            if char == NEWLINE:
                break
        return Row(
            x0=0.0,
            x1=width,
            baseline_y_delta=self.line_height,
            ymin=0.0,
            ymax=self.line_height,
            num_chars=end - start,
        )

    def get_width(self, line_start, index):
        """Horizontal advance of the ``index``'th character of the row at ``line_start``."""
        return self._char_width(self.get_char(line_start + index))

    def delete_chars(self, index, count):
        del self._chars[index:index + count]

    def insert_chars(self, index, chars):
        """Insert ``chars`` at ``index``; False (and no change) if it would not fit."""
        chars = list(chars)
        if self.max_length is not None and len(self._chars) + len(chars) > self.max_length:
            return False
        self._chars[index:index] = chars
        return True

    def next_char_index(self, index):
        return index + 1

    def prev_char_index(self, index):
        return index - 1

    def is_space(self, char):
        return str(char).isspace()


def locate_coord(buffer, x, y):
    """Index of the character nearest to the display position ``(x, y)``."""
    n = buffer.length()
    base_y = 0.0
    i = 0
    row = Row()

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
            w = buffer.get_width(i, k)
            if x < prev_x + w:
                if x < prev_x + w / 2:
                    return k + i
                return buffer.next_char_index(i + k)
            prev_x += w
            k = buffer.next_char_index(i + k) - i

    last = i + row.num_chars - 1
    if buffer.get_char(last) == NEWLINE:
        return last
    return i + row.num_chars


def find_charpos(buffer, n, single_line):
    """Locate character ``n``: its position and the row around it."""
    z = buffer.length()

    if n == z and single_line:
        row = buffer.layout_row(0)
        return FindState(
            x=row.x1,
            y=0.0,
            height=row.ymax - row.ymin,
            first_char=0,
            length=z,
            prev_first=0,
        )

    find = FindState()
    prev_start = 0
    i = 0
    while True:
        row = buffer.layout_row(i)
        if n < i + row.num_chars:
            break
        if i + row.num_chars == z and z > 0 and buffer.get_char(z - 1) != NEWLINE:
            break
        prev_start = i
        i += row.num_chars
        find.y += row.baseline_y_delta
        if i == z:
            row.num_chars = 0
            break

    first = i
    find.first_char = first
    find.length = row.num_chars
    find.height = row.ymax - row.ymin
    find.prev_first = prev_start

    find.x = row.x0
    offset = 0
    while first + offset < n:
        find.x += buffer.get_width(first, offset)
        offset = buffer.next_char_index(first + offset) - first
    return find


def is_word_boundary(buffer, index):
    """True where a word starts: after a space and on a non-space, or at the start."""
    if index <= 0:
        return True
    return buffer.is_space(buffer.get_char(index - 1)) and not buffer.is_space(
        buffer.get_char(index)
    )


def move_word_left(buffer, index):
    """Start of the word before ``index``, moving at least one character."""
    c = index - 1
    while c >= 0 and not is_word_boundary(buffer, c):
        c -= 1
    return max(c, 0)


def move_word_right(buffer, index):
    """Start of the next word after ``index``, or the end of the text."""
    length = buffer.length()
    c = index + 1
    while c < length and not is_word_boundary(buffer, c):
        c += 1
    return min(c, length)