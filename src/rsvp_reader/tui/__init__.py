"""Textual TUI for the interactive RSVP reader."""

from rsvp_reader.tui.app import ReaderApp
from rsvp_reader.tui.state import ReaderState

__all__ = ["ReaderApp", "ReaderState"]
