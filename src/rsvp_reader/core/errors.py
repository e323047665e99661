"""Errors raised while validating and parsing EPUB input."""


class EpubError(Exception):
    """Base class for fatal parse failures."""


class InvalidFileTypeError(EpubError, ValueError):
    """Input does not look like an EPUB container."""


class FileTooLargeError(InvalidFileTypeError):
    """Input exceeds the configured size bound."""

    def __init__(self, size: int, limit: int):
        self.size = size
        self.limit = limit
        super().__init__(
            f"File is too large ({size / 1024 / 1024:.1f}MB). "
            f"Maximum file size: {limit // (1024 * 1024)}MB"
        )


class ArchiveCorruptError(EpubError):
    """Input bytes cannot be opened as a zip archive."""


class MissingContainerPointerError(EpubError):
    """META-INF/container.xml is absent."""


class MissingPackagePathError(EpubError):
    """container.xml has no usable rootfile full-path."""


class PackageNotFoundError(MissingPackagePathError):
    """The package file named by container.xml is not in the archive."""
