"""Resolve an EPUB archive into metadata and spine-ordered markup parts."""

import io
import logging
import posixpath
import zipfile
import zlib
from types import MappingProxyType
from typing import Mapping
from urllib.parse import unquote

from bs4 import BeautifulSoup, Tag

from rsvp_reader.core.errors import (
    ArchiveCorruptError,
    MissingContainerPointerError,
    MissingPackagePathError,
    PackageNotFoundError,
)
from rsvp_reader.models.book import (
    DEFAULT_AUTHOR,
    DEFAULT_TITLE,
    DocumentMetadata,
    ResolvedPackage,
    SpinePart,
)

log = logging.getLogger(__name__)

CONTAINER_PATH = "META-INF/container.xml"

# Errors that mean a single archive member could not be read
_MEMBER_READ_ERRORS = (zipfile.BadZipFile, zlib.error, OSError, EOFError)


def resolve_href(package_path: str, href: str) -> str:
    """Resolve a manifest href against the package file's directory.

    Fragments are dropped, URL escapes decoded and ``..`` segments collapsed.
    """
    path = unquote(href.split("#", 1)[0])
    base = posixpath.dirname(package_path)
    joined = posixpath.join(base, path) if base else path
    return posixpath.normpath(joined)


class ContainerResolver:
    """Open an EPUB byte buffer and walk its container, package and spine."""

    def resolve(self, data: bytes) -> ResolvedPackage:
        """Resolve ``data`` into metadata plus ordered raw markup parts."""
        try:
            archive = zipfile.ZipFile(io.BytesIO(data))
        except (zipfile.BadZipFile, ValueError, OSError) as e:
            raise ArchiveCorruptError(f"Invalid EPUB: cannot open archive ({e})") from e

        with archive:
            names = set(archive.namelist())
            package_path = self._find_package_path(archive, names)
            package = self._read_xml(archive, package_path)

            metadata = self._get_metadata(package, byte_size=len(data))
            manifest = self._build_manifest(package)
            parts, skipped = self._get_spine_parts(
                archive, names, package, manifest, package_path
            )

        log.debug(
            "Resolved %s: %d part(s), %d skipped", package_path, len(parts), len(skipped)
        )
        return ResolvedPackage(
            metadata=metadata,
            package_path=package_path,
            parts=parts,
            skipped=skipped,
        )

    def _read_xml(self, archive: zipfile.ZipFile, name: str) -> BeautifulSoup:
        try:
            raw = archive.read(name)
        except _MEMBER_READ_ERRORS as e:
            raise ArchiveCorruptError(f"Invalid EPUB: cannot read {name} ({e})") from e
        return BeautifulSoup(raw, "xml")

    def _find_package_path(self, archive: zipfile.ZipFile, names: set[str]) -> str:
        """Read the rootfile full-path from META-INF/container.xml."""
        if CONTAINER_PATH not in names:
            raise MissingContainerPointerError("Invalid EPUB: Missing container.xml")

        container = self._read_xml(archive, CONTAINER_PATH)
        rootfile = container.find("rootfile")
        full_path = rootfile.get("full-path") if isinstance(rootfile, Tag) else None
        if not isinstance(full_path, str) or not full_path.strip():
            raise MissingPackagePathError("Invalid EPUB: Missing OPF file reference")

        full_path = full_path.strip()
        if full_path not in names:
            raise PackageNotFoundError(f"Invalid EPUB: OPF file not found ({full_path})")
        return full_path

    def _get_metadata(self, package: BeautifulSoup, byte_size: int) -> DocumentMetadata:
        """Extract title, creator and a few optional fields."""
        block = package.find("metadata")
        scope = block if isinstance(block, Tag) else package

        return DocumentMetadata(
            title=self._first_text(scope, "title") or DEFAULT_TITLE,
            author=self._first_text(scope, "creator") or DEFAULT_AUTHOR,
            byte_size=byte_size,
            language=self._first_text(scope, "language"),
            publisher=self._first_text(scope, "publisher"),
        )

    def _first_text(self, scope: Tag, name: str) -> str | None:
        element = scope.find(name)
        if element is None:
            return None
        text = element.get_text(strip=True)
        return text or None

    def _build_manifest(self, package: BeautifulSoup) -> Mapping[str, str]:
        """Map manifest item ids to hrefs, skipping incomplete items."""
        manifest: dict[str, str] = {}
        block = package.find("manifest")
        scope = block if isinstance(block, Tag) else package
        for item in scope.find_all("item"):
            item_id = item.get("id")
            href = item.get("href")
            if item_id and href:
                manifest[item_id] = href
        return MappingProxyType(manifest)

    def _get_spine_parts(
        self,
        archive: zipfile.ZipFile,
        names: set[str],
        package: BeautifulSoup,
        manifest: Mapping[str, str],
        package_path: str,
    ) -> tuple[list[SpinePart], list[str]]:
        """Fetch spine items in reading order. Unresolved entries are skipped."""
        parts: list[SpinePart] = []
        skipped: list[str] = []

        spine = package.find("spine")
        if not isinstance(spine, Tag):
            log.warning("Package %s has no spine", package_path)
            return parts, skipped

        for itemref in spine.find_all("itemref"):
            idref = itemref.get("idref") or ""
            href = manifest.get(idref)
            if not href:
                log.warning("Skipping spine entry %r: not in manifest", idref)
                skipped.append(idref)
                continue

            full_path = resolve_href(package_path, href)
            if full_path not in names:
                log.warning("Skipping spine entry %r: %s not in archive", idref, full_path)
                skipped.append(idref)
                continue

            try:
                content = archive.read(full_path)
            except _MEMBER_READ_ERRORS as e:
                log.warning("Skipping spine entry %r: cannot read %s (%s)", idref, full_path, e)
                skipped.append(idref)
                continue

            parts.append(SpinePart(idref=idref, href=full_path, content=content))

        return parts, skipped
