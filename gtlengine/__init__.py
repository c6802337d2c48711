"""A multi-line text-editing state machine: text layout, cursor and selection handling, and undo/redo."""

__version__ = "0.1.0"