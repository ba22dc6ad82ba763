# propextract/core/blob.py
"""
Embedded listing JSON (script#__NEXT_DATA__) → StructuredBlob.

The page ships an outer JSON object whose `gdpClientCache` member is itself a
JSON *string* keyed by query name; one of its records carries the `property`
object we want. The locator unwraps both layers once per session and memoizes
the result until `clear_cache()` is called.
"""

from __future__ import annotations

import copy
import json
import logging
from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from propextract.core.document import PageDocument

logger = logging.getLogger(__name__)

DEFAULT_SCRIPT_ID = "__NEXT_DATA__"

# Outer object → (possibly string-encoded) client cache
_CLIENT_CACHE_PATH: tuple[str, ...] = ("props", "pageProps", "componentProps", "gdpClientCache")

KeyPath = tuple[str, ...]


def _walk(obj: Any, path: KeyPath) -> Any:
    cur = obj
    for key in path:
        if not isinstance(cur, Mapping):
            return None
        cur = cur.get(key)
        if cur is None:
            return None
    return cur


class StructuredBlob(Mapping[str, Any]):
    """
    Read-only view over the listing's `property` object.

    Attributes can live at different depths depending on listing type
    (`bedrooms` vs `resoFacts.bedrooms`); `first()` checks an ordered list of
    key paths and returns the first defined value.
    """

    def __init__(self, data: Mapping[str, Any]) -> None:
        # Private deep copy so later edits to the source dict never leak in
        self._data: Mapping[str, Any] = MappingProxyType(copy.deepcopy(dict(data)))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"StructuredBlob(keys={sorted(self._data)[:8]}...)"

    def path(self, *keys: str) -> Any:
        """Value at a nested key path, or None."""
        return _walk(self._data, keys)

    def first(self, *paths: KeyPath | str) -> Any:
        """First non-None value across candidate paths (a bare str is a top-level key)."""
        for p in paths:
            keys: KeyPath = (p,) if isinstance(p, str) else p
            val = _walk(self._data, keys)
            if val is not None:
                return val
        return None

    def text(self, *paths: KeyPath | str) -> str | None:
        """Like first(), restricted to non-empty strings."""
        for p in paths:
            val = self.first(p)
            if isinstance(val, str) and val.strip():
                return val
        return None


class StructuredBlobLocator:
    """
    Finds and parses the embedded data blob once per session.

    Never raises for a missing or malformed blob: extraction then degrades to
    the rendered-text path for every field.
    """

    def __init__(self, document: PageDocument, *, script_id: str = DEFAULT_SCRIPT_ID) -> None:
        self._document = document
        self._script_id = script_id
        self._cached: StructuredBlob | None = None

    @property
    def cached(self) -> bool:
        return self._cached is not None

    def clear_cache(self) -> None:
        """Force a re-parse on the next locate() call."""
        self._cached = None

    def locate(self) -> StructuredBlob | None:
        if self._cached is not None:
            return self._cached

        prop = self._parse()
        if prop is None:
            return None

        self._cached = StructuredBlob(prop)
        logger.debug("Structured blob located (%d top-level keys)", len(self._cached))
        return self._cached

    # ---------- Internals ----------

    def _parse(self) -> Mapping[str, Any] | None:
        script = self._document.select_one(f"script#{self._script_id}")
        raw = script.string if script is not None else None
        if not raw or not raw.strip():
            logger.debug("No script#%s container found", self._script_id)
            return None

        try:
            outer = json.loads(raw)
        except json.JSONDecodeError as exc:
            logger.warning("Malformed JSON in script#%s: %s", self._script_id, exc)
            return None

        client_cache = _walk(outer, _CLIENT_CACHE_PATH)
        if client_cache is None:
            logger.debug("No gdpClientCache in script#%s", self._script_id)
            return None

        # The cache is usually a JSON string inside the outer JSON
        if isinstance(client_cache, str):
            try:
                client_cache = json.loads(client_cache)
            except json.JSONDecodeError as exc:
                logger.warning("Malformed inner gdpClientCache JSON: %s", exc)
                return None

        if not isinstance(client_cache, Mapping):
            logger.warning("gdpClientCache is %s, expected an object", type(client_cache).__name__)
            return None

        for key, record in client_cache.items():
            if isinstance(record, Mapping) and isinstance(record.get("property"), Mapping):
                logger.debug("Using property object from cache entry %r", key)
                return record["property"]

        logger.debug("No property object found among %d cache entries", len(client_cache))
        return None


__all__ = ["DEFAULT_SCRIPT_ID", "KeyPath", "StructuredBlob", "StructuredBlobLocator"]
