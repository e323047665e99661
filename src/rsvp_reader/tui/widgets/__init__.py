"""Custom widgets for the reader TUI."""

from rsvp_reader.tui.widgets.chapter_table import ChapterTable
from rsvp_reader.tui.widgets.error_dialog import ErrorDialog

__all__ = ["ChapterTable", "ErrorDialog"]
