# propextract/core/extractors/rent.py
from __future__ import annotations

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor, positive
from propextract.core.extractors.selectors import RENT_PATHS, RENT_SELECTORS
from propextract.core.numbers import coerce_number, parse_money


class RentEstimateExtractor(FieldExtractor[float]):
    """Primary monthly rent estimate published on the listing."""

    field = "rent_estimate"

    def is_valid(self, value: float | None) -> bool:
        return positive(value)

    def extract_from_structured(self, blob: StructuredBlob) -> float | None:
        return coerce_number(blob.first(*RENT_PATHS))

    def extract_from_text(self) -> float | None:
        return self.first_match(RENT_SELECTORS, parse_money)
