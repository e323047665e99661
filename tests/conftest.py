from __future__ import annotations

import io
import zipfile
from dataclasses import dataclass, field
from typing import Callable

import pytest

from rsvp_reader.core.player import Clock

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""


def xhtml(body: str, title: str = "Part") -> str:
    return f"""<?xml version="1.0" encoding="utf-8"?>
<html xmlns="http://www.w3.org/1999/xhtml">
  <head><title>{title}</title></head>
  <body>{body}</body>
</html>
"""


def build_opf(
    items: list[tuple[str, str]],
    spine: list[str],
    title: str | None = "Sample Book",
    creator: str | None = "Sample Author",
) -> str:
    metadata = []
    if title is not None:
        metadata.append(f"<dc:title>{title}</dc:title>")
    if creator is not None:
        metadata.append(f"<dc:creator>{creator}</dc:creator>")
    metadata.append("<dc:language>en</dc:language>")
    metadata_xml = "".join(metadata)
    manifest = "\n    ".join(
        f'<item id="{item_id}" href="{href}" media-type="application/xhtml+xml"/>'
        for item_id, href in items
    )
    itemrefs = "\n    ".join(f'<itemref idref="{idref}"/>' for idref in spine)
    return f"""<?xml version="1.0" encoding="UTF-8"?>
<package version="3.0" unique-identifier="BookId" xmlns="http://www.idpf.org/2007/opf">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    {metadata_xml}
  </metadata>
  <manifest>
    {manifest}
  </manifest>
  <spine>
    {itemrefs}
  </spine>
</package>
"""


def build_epub(
    bodies: list[str],
    title: str | None = "Sample Book",
    creator: str | None = "Sample Author",
    opf_path: str = "OEBPS/content.opf",
    extra_spine: list[str] | None = None,
    extra_files: dict[str, str] | None = None,
) -> bytes:
    """Build an EPUB with one spine item per body, in order."""
    base = opf_path.rsplit("/", 1)[0] + "/" if "/" in opf_path else ""
    items = [(f"ch{i + 1}", f"ch{i + 1}.xhtml") for i in range(len(bodies))]
    spine = [item_id for item_id, _ in items] + (extra_spine or [])

    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        zf.writestr("mimetype", "application/epub+zip")
        zf.writestr("META-INF/container.xml", CONTAINER_XML.format(opf_path=opf_path))
        zf.writestr(opf_path, build_opf(items, spine, title=title, creator=creator))
        for (_, href), body in zip(items, bodies):
            zf.writestr(base + href, xhtml(body))
        for name, content in (extra_files or {}).items():
            zf.writestr(name, content)
    return buffer.getvalue()


def build_zip(files: dict[str, str]) -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as zf:
        for name, content in files.items():
            zf.writestr(name, content)
    return buffer.getvalue()


@dataclass
class FakeHandle:
    delay: float
    callback: Callable[[], None]
    cancelled: bool = False

    def cancel(self) -> None:
        self.cancelled = True


@dataclass
class FakeClock(Clock):
    """Clock that records scheduled callbacks and fires them on demand."""

    handles: list[FakeHandle] = field(default_factory=list)

    def call_later(self, delay: float, callback: Callable[[], None]) -> FakeHandle:
        handle = FakeHandle(delay, callback)
        self.handles.append(handle)
        return handle

    @property
    def pending(self) -> list[FakeHandle]:
        return [h for h in self.handles if not h.cancelled]

    def fire(self) -> FakeHandle:
        """Run the oldest pending callback."""
        handle = self.pending[0]
        handle.cancelled = True
        handle.callback()
        return handle

    def run_all(self, limit: int = 10_000) -> int:
        fired = 0
        while self.pending and fired < limit:
            self.fire()
            fired += 1
        return fired


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def sample_epub() -> bytes:
    return build_epub(
        [
            "<h1>Chapter 1</h1><p>It was a dark night.</p><p>Rain fell, hard.</p>",
            "<h1>Chapter 2</h1><p>Morning came — finally!</p>",
        ],
        title="Storm Book",
        creator="A. Writer",
    )
