"""EPUB parsing: container resolution followed by text extraction."""

import logging
from pathlib import Path

from rsvp_reader.core.container import ContainerResolver
from rsvp_reader.core.content_processor import ContentProcessor
from rsvp_reader.models.book import DocumentMetadata, ExtractedDocument, ResolvedPackage

log = logging.getLogger(__name__)


class EpubParser:
    """Parse an EPUB byte buffer into an ExtractedDocument."""

    def __init__(self, data: bytes, name: str | None = None):
        self.data = data
        self.name = name
        self.resolver = ContainerResolver()
        self.processor = ContentProcessor()
        self._package: ResolvedPackage | None = None

    @classmethod
    def from_path(cls, path: Path) -> "EpubParser":
        """Read the whole file into memory and create a parser for it."""
        return cls(path.read_bytes(), name=path.name)

    def resolve(self) -> ResolvedPackage:
        """Resolve the container once and reuse the result."""
        if self._package is None:
            self._package = self.resolver.resolve(self.data)
        return self._package

    def get_metadata(self) -> DocumentMetadata:
        """Extract book metadata."""
        return self.resolve().metadata

    def parse(self) -> ExtractedDocument:
        """Parse the EPUB and return metadata plus spine-ordered text."""
        package = self.resolve()
        texts = [self.processor.extract(part.content) for part in package.parts]
        text = self.processor.join(texts)

        if package.skipped:
            log.info(
                "%s: skipped %d unresolved spine entr%s",
                self.name or package.metadata.title,
                len(package.skipped),
                "y" if len(package.skipped) == 1 else "ies",
            )

        return ExtractedDocument(
            metadata=package.metadata,
            text=text,
            part_count=len(package.parts),
            skipped_parts=len(package.skipped),
        )
