"""Validate book input and create a parser for it."""

from pathlib import Path

from rsvp_reader.core.epub_parser import EpubParser
from rsvp_reader.core.errors import FileTooLargeError, InvalidFileTypeError
from rsvp_reader.models.config import MAX_FILE_SIZE

ZIP_SIGNATURE = b"PK\x03\x04"


class ParserFactory:
    """Factory for validating input and creating an EpubParser."""

    SUPPORTED_FORMATS = {
        ".epub": "epub",
    }

    @classmethod
    def create(cls, path: Path, max_file_size: int = MAX_FILE_SIZE) -> EpubParser:
        """Create a parser for the given file.

        Args:
            path: Path to the book file
            max_file_size: Largest accepted file size in bytes

        Returns:
            EpubParser over the file's bytes

        Raises:
            FileNotFoundError: If file does not exist
            InvalidFileTypeError: If the file is not an EPUB or is too large
        """
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}")

        cls.validate_name(path.name)
        size = path.stat().st_size
        if size > max_file_size:
            raise FileTooLargeError(size, max_file_size)

        data = path.read_bytes()
        return cls.create_from_bytes(data, name=path.name, max_file_size=max_file_size)

    @classmethod
    def create_from_bytes(
        cls,
        data: bytes,
        name: str | None = None,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> EpubParser:
        """Validate an in-memory buffer and create a parser for it."""
        cls.validate(data, name=name, max_file_size=max_file_size)
        return EpubParser(data, name=name)

    @classmethod
    def validate(
        cls,
        data: bytes,
        name: str | None = None,
        max_file_size: int = MAX_FILE_SIZE,
    ) -> None:
        """Reject input that is clearly not an EPUB before parsing it.

        Raises:
            InvalidFileTypeError: Wrong extension or missing zip signature
            FileTooLargeError: Buffer exceeds ``max_file_size``
        """
        if name is not None:
            cls.validate_name(name)
        if len(data) > max_file_size:
            raise FileTooLargeError(len(data), max_file_size)
        if not data.startswith(ZIP_SIGNATURE):
            raise InvalidFileTypeError("Invalid file type: not a zip-based EPUB container")

    @classmethod
    def validate_name(cls, name: str) -> None:
        if not cls.is_supported(Path(name)):
            supported = ", ".join(cls.SUPPORTED_FORMATS.keys())
            raise InvalidFileTypeError(
                f"Invalid file type: {Path(name).suffix or name}. "
                f"Supported formats: {supported}"
            )

    @classmethod
    def detect_format(cls, path: Path) -> str:
        """Detect file format from extension ("epub" or "unknown")."""
        return cls.SUPPORTED_FORMATS.get(path.suffix.lower(), "unknown")

    @classmethod
    def is_supported(cls, path: Path) -> bool:
        """Check if file format is supported."""
        return path.suffix.lower() in cls.SUPPORTED_FORMATS
