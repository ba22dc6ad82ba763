# propextract/core/extractors/address.py
"""
Single-line street address.

Structured: the `address` object's street/city/state/zip joined with ", ".
Text: the first candidate element whose text usaddress recognizes as carrying
a house number or zip code (filters out "View map" style link text).
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping

import usaddress

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor
from propextract.core.extractors.selectors import ADDRESS_PARTS, ADDRESS_PATH, ADDRESS_SELECTORS

logger = logging.getLogger(__name__)

_ADDRESS_ANCHOR_LABELS = {"AddressNumber", "ZipCode"}

# Page titles often append "| MLS #123 | Zillow"
_TITLE_SUFFIX_RE = re.compile(r"\s*[|•]\s.*$")


def _clean_space(s: str) -> str:
    return re.sub(r"\s+", " ", s).strip(" ,;|\n\t")


def looks_like_address(text: str) -> bool:
    try:
        labels = {label for _, label in usaddress.parse(text)}
    except Exception as exc:  # noqa: BLE001
        # usaddress raises on some unparseable token sequences; treat as "not an address"
        logger.debug("usaddress could not parse %r: %s", text, exc)
        return False
    return bool(labels & _ADDRESS_ANCHOR_LABELS)


def clean_address(text: str | None) -> str | None:
    if not text:
        return None
    cand = _clean_space(_TITLE_SUFFIX_RE.sub("", text))
    if len(cand) < 8 or not looks_like_address(cand):
        return None
    return cand


def join_address(address: Mapping[str, object]) -> str | None:
    parts = []
    for key in ADDRESS_PARTS:
        val = address.get(key)
        if isinstance(val, (str, int)) and not isinstance(val, bool) and str(val).strip():
            parts.append(str(val).strip())
    return ", ".join(parts) if parts else None


class AddressExtractor(FieldExtractor[str]):
    field = "address"

    def is_valid(self, value: str | None) -> bool:
        return bool(value and value.strip())

    def extract_from_structured(self, blob: StructuredBlob) -> str | None:
        raw = blob.first(ADDRESS_PATH)
        if isinstance(raw, Mapping):
            return join_address(raw)
        if isinstance(raw, str):
            return _clean_space(raw) or None
        return None

    def extract_from_text(self) -> str | None:
        return self.first_match(ADDRESS_SELECTORS, clean_address)
