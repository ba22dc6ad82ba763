# propextract/core/extractors/zip_code.py
from __future__ import annotations

import re

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor
from propextract.core.extractors.selectors import ZIP_PATHS, ZIP_SELECTORS

_ZIP_EXACT_RE = re.compile(r"^\d{5}$")
_ZIP_IN_TEXT_RE = re.compile(r"\b(\d{5})\b")


def find_zip(text: str | None) -> str | None:
    """First standalone 5-digit run ("Columbus, OH 43205-1234" → "43205")."""
    if not text:
        return None
    m = _ZIP_IN_TEXT_RE.search(text)
    return m.group(1) if m else None


class ZipCodeExtractor(FieldExtractor[str]):
    """Five-digit US zip. Structured values of any other shape are rejected outright."""

    field = "zip_code"

    def is_valid(self, value: str | None) -> bool:
        return value is not None and bool(_ZIP_EXACT_RE.match(value))

    def extract_from_structured(self, blob: StructuredBlob) -> str | None:
        raw = blob.first(*ZIP_PATHS)
        if isinstance(raw, bool) or not isinstance(raw, (str, int)):
            return None
        value = str(raw).strip()
        return value if _ZIP_EXACT_RE.match(value) else None

    def extract_from_text(self) -> str | None:
        return self.first_match(ZIP_SELECTORS, find_zip)
