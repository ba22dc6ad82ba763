# propextract/core/document.py
"""
Rendered listing page wrapper (HTML → queryable DOM).

Wraps a BeautifulSoup/lxml tree behind the few queries the extractors need:
first-match text/attribute lookup over an ordered selector list, and raw
element access for structured containers (script blobs, fact containers).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from pathlib import Path

from bs4 import BeautifulSoup, Tag

from propextract.schemas.models import Selector

logger = logging.getLogger(__name__)


class PageDocument:
    """
    Parsed listing page. `update()` swaps in new markup (e.g. after in-page
    navigation); memoized consumers must be invalidated separately.
    """

    def __init__(self, html: str = "") -> None:
        self._soup = BeautifulSoup(html, "lxml")

    @classmethod
    def from_source(cls, source: str | Path) -> PageDocument:
        """Build from an HTML string or a file path."""
        html = Path(source).read_text(encoding="utf-8") if isinstance(source, Path) else source
        return cls(html)

    @property
    def soup(self) -> BeautifulSoup:
        return self._soup

    def update(self, html: str) -> None:
        self._soup = BeautifulSoup(html, "lxml")

    # ---------- Queries ----------

    def select_one(self, css: str) -> Tag | None:
        try:
            return self._soup.select_one(css)
        except ValueError as exc:
            # soupsieve rejects malformed selectors with ValueError subclasses
            logger.warning("Invalid selector %r: %s", css, exc)
            return None

    def select(self, css: str) -> list[Tag]:
        try:
            return list(self._soup.select(css))
        except ValueError as exc:
            logger.warning("Invalid selector %r: %s", css, exc)
            return []

    def read(self, selector: Selector) -> str | None:
        """Text (or attribute) of the first element matching one selector; None when empty."""
        node = self.select_one(selector.css)
        if node is None:
            return None
        if selector.attr:
            return element_attribute(node, selector.attr)
        return element_text(node)

    def iter_texts(self, selectors: Iterable[Selector]) -> Iterator[tuple[Selector, str]]:
        """Yield (selector, text) for each selector that resolves to non-empty text, in order."""
        for sel in selectors:
            txt = self.read(sel)
            if txt:
                yield sel, txt


def element_text(node: Tag | None) -> str | None:
    if node is None:
        return None
    txt = node.get_text(" ", strip=True)
    return txt or None


def element_attribute(node: Tag | None, attr: str) -> str | None:
    if node is None:
        return None
    val = node.get(attr)
    if isinstance(val, list):
        val = " ".join(x for x in val if isinstance(x, str))
    val = (val or "").strip()
    return val or None


__all__ = ["PageDocument", "element_text", "element_attribute"]
