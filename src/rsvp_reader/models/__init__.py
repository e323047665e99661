"""Data models."""

from rsvp_reader.models.book import (
    DocumentMetadata,
    ExtractedDocument,
    ResolvedPackage,
    SpinePart,
)
from rsvp_reader.models.config import ReaderConfig
from rsvp_reader.models.playback import (
    ContextWindow,
    PlaybackState,
    PlaybackStatus,
)
from rsvp_reader.models.reading import (
    Chapter,
    SegmentedText,
    Token,
)

__all__ = [
    # Book models
    "DocumentMetadata",
    "SpinePart",
    "ResolvedPackage",
    "ExtractedDocument",
    # Reading models
    "Token",
    "Chapter",
    "SegmentedText",
    # Playback models
    "PlaybackStatus",
    "PlaybackState",
    "ContextWindow",
    # Configuration
    "ReaderConfig",
]
