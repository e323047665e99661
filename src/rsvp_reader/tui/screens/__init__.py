"""TUI screens for the reader."""

from rsvp_reader.tui.screens.reader import ReaderScreen

__all__ = [
    "ReaderScreen",
]
