"""Linearize HTML/XHTML content into plain text."""

import logging
import warnings
from typing import Iterable

from bs4 import BeautifulSoup, NavigableString, Tag, XMLParsedAsHTMLWarning
from bs4.element import PageElement, PreformattedString

log = logging.getLogger(__name__)

# Suppress XML parsing warnings - EPUB files often use XHTML
warnings.filterwarnings("ignore", category=XMLParsedAsHTMLWarning)

# <head> holds document metadata, not reading content
SKIP_TAGS = frozenset({"script", "style", "head"})
BLOCK_TAGS = frozenset({"p", "div", "h1", "h2", "h3", "h4", "h5", "h6", "li", "br"})

PART_SEPARATOR = "\n\n"


class ContentProcessor:
    """Extract reading-order plain text from markup."""

    def extract(self, markup: bytes | str) -> str:
        """Convert one markup document to text with block boundaries as newlines.

        Malformed markup never raises: lxml's HTML parser recovers a best-effort
        tree and extraction runs over whatever it produced.
        """
        try:
            soup = BeautifulSoup(markup, "lxml")
        except Exception as e:
            log.warning("Could not parse markup part: %s", e)
            return ""
        return "".join(self._walk(soup))

    def _walk(self, node: PageElement) -> Iterable[str]:
        """Depth-first traversal yielding text fragments."""
        if isinstance(node, NavigableString):
            # Comments, CDATA, doctypes and processing instructions
            if not isinstance(node, PreformattedString):
                yield str(node)
            return

        if not isinstance(node, Tag):
            return

        name = (node.name or "").lower()
        if name in SKIP_TAGS:
            return

        is_block = name in BLOCK_TAGS
        if is_block:
            yield "\n"
        for child in node.children:
            yield from self._walk(child)
        if is_block:
            yield "\n"

    def join(self, texts: Iterable[str]) -> str:
        """Join per-part texts in order, dropping parts with no text."""
        return PART_SEPARATOR.join(t.strip() for t in texts if t.strip())

    def get_stats(self, content: str) -> dict[str, int]:
        """Calculate content statistics."""
        words = content.split()
        paragraphs = [line for line in content.split("\n") if line.strip()]
        return {
            "word_count": len(words),
            "character_count": len(content),
            "paragraph_count": len(paragraphs),
        }
