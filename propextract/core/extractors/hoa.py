# propextract/core/extractors/hoa.py
from __future__ import annotations

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor, non_negative
from propextract.core.extractors.selectors import HOA_PATHS, HOA_SELECTORS
from propextract.core.numbers import coerce_number, parse_money


class HoaFeesExtractor(FieldExtractor[float]):
    """Monthly HOA fees. A structured 0 is kept (no HOA), unlike counts."""

    field = "hoa_fees"

    def is_valid(self, value: float | None) -> bool:
        return non_negative(value)

    def extract_from_structured(self, blob: StructuredBlob) -> float | None:
        return coerce_number(blob.first(*HOA_PATHS))

    def extract_from_text(self) -> float | None:
        return self.first_match(HOA_SELECTORS, parse_money)
