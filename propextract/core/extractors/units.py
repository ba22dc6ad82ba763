# propextract/core/extractors/units.py
from __future__ import annotations

import re

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor, positive
from propextract.core.extractors.selectors import DESCRIPTION_PATHS, UNITS_PATHS, UNITS_SELECTORS
from propextract.core.numbers import NUMBER_WORD_ALTERNATION, coerce_number, parse_number_words, safe_parse_int
from propextract.schemas.labels import MULTI_UNIT_NOUNS

_UNITS_DIGIT_RE = re.compile(r"(?i)\b(\d+)\s*-?\s*units?\b")
_UNITS_WORD_RE = re.compile(rf"(?i)\b(?:twenty[\s-]+\w+|{NUMBER_WORD_ALTERNATION})\s*-?\s*units?\b")
_UNITS_NOUN_RE = re.compile(r"(?i)\b(" + "|".join(MULTI_UNIT_NOUNS) + r")\b")


def parse_units(text: str | None) -> int | None:
    """
    Unit count from free text. Patterns are tried by priority, not position:
    "4 units" → "four units" → duplex/triplex/... nouns.
    """
    if not text:
        return None

    m = _UNITS_DIGIT_RE.search(text)
    if m:
        units = safe_parse_int(m.group(1))
        if positive(units):
            return units

    m = _UNITS_WORD_RE.search(text)
    if m:
        units = parse_number_words(m.group(0))
        if positive(units):
            return units

    m = _UNITS_NOUN_RE.search(text)
    if m:
        return MULTI_UNIT_NOUNS[m.group(1).lower()]

    return None


class UnitsExtractor(FieldExtractor[int]):
    field = "units"

    def is_valid(self, value: int | None) -> bool:
        return positive(value)

    def extract_from_structured(self, blob: StructuredBlob) -> int | None:
        units = coerce_number(blob.first(*UNITS_PATHS))
        if positive(units) and float(units).is_integer():
            return int(units)
        return parse_units(blob.text(*DESCRIPTION_PATHS))

    def extract_from_text(self) -> int | None:
        return self.first_match(UNITS_SELECTORS, parse_units)
