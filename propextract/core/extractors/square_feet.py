# propextract/core/extractors/square_feet.py
from __future__ import annotations

import re

from propextract.core.blob import StructuredBlob
from propextract.core.document import element_text
from propextract.core.extractors.base import FieldExtractor, positive
from propextract.core.extractors.selectors import LIVING_AREA_PATHS, SQFT_CONTAINER_CSS, SQFT_TEXT_SELECTORS
from propextract.core.numbers import coerce_number, safe_parse_int

_SQFT_RE = re.compile(
    r"(?i)\b((?:\d{1,3}(?:[,\u00a0\u202f]\d{3})+|\d{3,6}))\s*(?:sq\.?\s?ft\.?|ft²|sqft|square\s?feet)"
)
_SQFT_LABELS = {"sqft", "sq ft", "square feet"}


def parse_square_feet(text: str | None) -> int | None:
    if not text:
        return None
    m = _SQFT_RE.search(text)
    return safe_parse_int(m.group(1)) if m else None


class SquareFeetExtractor(FieldExtractor[int]):
    field = "square_feet"

    def is_valid(self, value: int | None) -> bool:
        return positive(value)

    def extract_from_structured(self, blob: StructuredBlob) -> int | None:
        area = coerce_number(blob.first(*LIVING_AREA_PATHS))
        return int(area) if positive(area) else None

    def extract_from_text(self) -> int | None:
        # Fact containers: <span>1,234</span><span>sqft</span>
        for css in SQFT_CONTAINER_CSS:
            for container in self.document.select(css):
                spans = container.find_all("span")
                if len(spans) < 2:
                    continue
                label = (element_text(spans[-1]) or "").lower()
                if label in _SQFT_LABELS:
                    sqft = safe_parse_int(element_text(spans[0]))
                    if positive(sqft):
                        return sqft

        return self.first_match(SQFT_TEXT_SELECTORS, parse_square_feet)
