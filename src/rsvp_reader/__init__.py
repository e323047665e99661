"""Read EPUB books one word at a time."""

from rsvp_reader.core.epub_parser import EpubParser
from rsvp_reader.core.errors import (
    ArchiveCorruptError,
    EpubError,
    FileTooLargeError,
    InvalidFileTypeError,
    MissingContainerPointerError,
    MissingPackagePathError,
    PackageNotFoundError,
)
from rsvp_reader.core.parser_factory import ParserFactory
from rsvp_reader.core.player import AsyncioClock, Clock, PlaybackScheduler
from rsvp_reader.core.session import ReadingSession
from rsvp_reader.core.timing import pause_multiplier, token_delay_ms
from rsvp_reader.core.tokenizer import get_progress_percentage, segment

__version__ = "0.1.0"

__all__ = [
    "EpubParser",
    "ParserFactory",
    "segment",
    "get_progress_percentage",
    "pause_multiplier",
    "token_delay_ms",
    "Clock",
    "AsyncioClock",
    "PlaybackScheduler",
    "ReadingSession",
    "EpubError",
    "InvalidFileTypeError",
    "FileTooLargeError",
    "ArchiveCorruptError",
    "MissingContainerPointerError",
    "MissingPackagePathError",
    "PackageNotFoundError",
]
