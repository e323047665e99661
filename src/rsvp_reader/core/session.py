"""Document load and teardown: parse, segment and build a scheduler."""

import logging
from pathlib import Path

from rsvp_reader.core.parser_factory import ParserFactory
from rsvp_reader.core.player import Clock, PlaybackScheduler
from rsvp_reader.core.tokenizer import segment
from rsvp_reader.models.book import ExtractedDocument
from rsvp_reader.models.config import ReaderConfig
from rsvp_reader.models.reading import SegmentedText

log = logging.getLogger(__name__)


class ReadingSession:
    """Owns the current document and its scheduler.

    Loading a new document tears down the previous scheduler before the new
    one is created, so no pending advancement outlives its document.
    """

    def __init__(self, config: ReaderConfig | None = None, clock: Clock | None = None):
        self.config = config or ReaderConfig()
        self.clock = clock
        self.document: ExtractedDocument | None = None
        self.text: SegmentedText | None = None
        self.scheduler: PlaybackScheduler | None = None

    @property
    def is_loaded(self) -> bool:
        return self.scheduler is not None

    def load_path(self, path: Path) -> PlaybackScheduler:
        """Validate, parse and load the EPUB at ``path``."""
        parser = ParserFactory.create(path, max_file_size=self.config.max_file_size)
        return self._load(parser.parse())

    def load_bytes(self, data: bytes, name: str | None = None) -> PlaybackScheduler:
        """Validate, parse and load an in-memory EPUB."""
        parser = ParserFactory.create_from_bytes(
            data, name=name, max_file_size=self.config.max_file_size
        )
        return self._load(parser.parse())

    def _load(self, document: ExtractedDocument) -> PlaybackScheduler:
        # Parse errors above leave the previous document untouched
        self.close()
        text = segment(document.text)
        log.info(
            "Loaded %r by %s: %d tokens, %d chapters",
            document.metadata.title,
            document.metadata.author,
            len(text.tokens),
            len(text.chapters),
        )
        self.document = document
        self.text = text
        self.scheduler = PlaybackScheduler(text, clock=self.clock, config=self.config)
        return self.scheduler

    def close(self) -> None:
        """Discard the current document and cancel its pending advancement."""
        if self.scheduler is not None:
            self.scheduler.close()
        self.document = None
        self.text = None
        self.scheduler = None
