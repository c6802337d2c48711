"""Bounded undo/redo history for the text editor.

Undo and redo records share one pool of record slots and one pool of stored
characters. Recording a new edit drops all redo history. When either pool runs
out, the oldest undo records are dropped first; while undoing, the oldest redo
records are dropped to make room for the characters a redo will need.
"""

from __future__ import annotations

from dataclasses import dataclass

UNDO_STATE_COUNT = 99
UNDO_CHAR_COUNT = 999


@dataclass
class UndoRecord:
    """One reversible edit.

    Applying the record deletes ``delete_length`` characters at ``where`` and
    then inserts ``chars`` there.
    """

    where: int
    delete_length: int = 0
    chars: tuple = ()

    @property
    def insert_length(self):
        return len(self.chars)


class UndoState:
    """Undo and redo history limited to ``state_count`` records and ``char_count`` characters."""

    def __init__(self, state_count=UNDO_STATE_COUNT, char_count=UNDO_CHAR_COUNT):
        if state_count <= 0 or char_count <= 0:
            raise ValueError("undo capacities must be positive")
        self.state_count = state_count
        self.char_count = char_count
        self.undo_records = []
        self.redo_records = []  # most recent last

    @property
    def undo_char_point(self):
        """Number of characters held by the undo records."""
        return sum(record.insert_length for record in self.undo_records)

    @property
    def redo_char_point(self):
        """Start of the character space held by the redo records."""
        return self.char_count - sum(record.insert_length for record in self.redo_records)

    @property
    def can_undo(self):
        return bool(self.undo_records)

    @property
    def can_redo(self):
        return bool(self.redo_records)

    def clear(self):
        """Forget all undo and redo history."""
        self.undo_records.clear()
        self.redo_records.clear()

    def flush_redo(self):
        """Forget all redo history."""
        self.redo_records.clear()

    def discard_undo(self):
        """Drop the oldest undo record, if any."""
        if self.undo_records:
            del self.undo_records[0]

    def discard_redo(self):
        """Drop the oldest redo record, if any."""
        if self.redo_records:
            del self.redo_records[0]

    def _create_undo(self, where, chars, delete_length):
        chars = tuple(chars)
        self.flush_redo()

        if len(self.undo_records) == self.state_count:
            self.discard_undo()

        if len(chars) > self.char_count:
            self.undo_records.clear()
            return None

        while self.undo_records and self.undo_char_point + len(chars) > self.char_count:
            self.discard_undo()

        record = UndoRecord(where, delete_length, chars)
        self.undo_records.append(record)
        return record

    def make_undo_insert(self, where, length):
        """Record that ``length`` characters were inserted at ``where``."""
        return self._create_undo(where, (), length)

    def make_undo_delete(self, buffer, where, length):
        """Record that ``length`` characters at ``where`` are about to be deleted."""
        chars = [buffer.get_char(where + i) for i in range(length)]
        return self._create_undo(where, chars, 0)

    def make_undo_replace(self, buffer, where, old_length, new_length):
        """Record that ``old_length`` characters at ``where`` are about to be
        replaced by ``new_length`` new ones."""
        chars = [buffer.get_char(where + i) for i in range(old_length)]
        return self._create_undo(where, chars, new_length)

    def undo(self, buffer):
        """Revert the latest edit in ``buffer``; the new cursor, or None if nothing was done."""
        if not self.undo_records:
            return None
        record = self.undo_records[-1]

        saved = ()
        if record.delete_length:
            if self.undo_char_point + record.delete_length < self.char_count:
                while self.undo_char_point + record.delete_length > self.redo_char_point:
                    if not self.redo_records:
                        return None
                    self.discard_redo()
                saved = tuple(
                    buffer.get_char(record.where + i) for i in range(record.delete_length)
                )
            buffer.delete_chars(record.where, record.delete_length)

        if record.insert_length:
            buffer.insert_chars(record.where, record.chars)

        self.undo_records.pop()
        self.redo_records.append(UndoRecord(record.where, record.insert_length, saved))
        return record.where + record.insert_length

    def redo(self, buffer):
        """Reapply the latest undone edit; the new cursor, or None if nothing was done."""
        if not self.redo_records:
            return None
        record = self.redo_records[-1]

        saved = ()
        undo_delete = record.insert_length
        if record.delete_length:
            if self.undo_char_point + record.delete_length > self.redo_char_point:
                undo_delete = 0
            else:
                saved = tuple(
                    buffer.get_char(record.where + i) for i in range(record.delete_length)
                )
            buffer.delete_chars(record.where, record.delete_length)

        if record.insert_length:
            buffer.insert_chars(record.where, record.chars)

        self.redo_records.pop()
        self.undo_records.append(UndoRecord(record.where, undo_delete, saved))
        return record.where + record.insert_length