"""Data models for document structure (container, package, extracted text)."""

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_TITLE = "Unknown Title"
DEFAULT_AUTHOR = "Unknown Author"


class DocumentMetadata(BaseModel):
    """Book-level metadata."""

    model_config = ConfigDict(frozen=True)

    title: str = DEFAULT_TITLE
    author: str = DEFAULT_AUTHOR
    byte_size: int = Field(default=0, ge=0)
    language: str | None = None
    publisher: str | None = None


class SpinePart(BaseModel):
    """Raw markup of one resolved spine item."""

    model_config = ConfigDict(frozen=True)

    idref: str
    href: str  # Absolute path inside the archive
    content: bytes = b""


class ResolvedPackage(BaseModel):
    """Container and package resolution result, before text extraction."""

    model_config = ConfigDict(frozen=True)

    metadata: DocumentMetadata
    package_path: str
    parts: list[SpinePart] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)  # Unresolved idrefs


class ExtractedDocument(BaseModel):
    """Metadata plus the spine-ordered plain text body."""

    model_config = ConfigDict(frozen=True)

    metadata: DocumentMetadata
    text: str = ""
    part_count: int = 0
    skipped_parts: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.text.strip()
