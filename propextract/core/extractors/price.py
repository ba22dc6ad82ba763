# propextract/core/extractors/price.py
from __future__ import annotations

from propextract.core.blob import StructuredBlob
from propextract.core.document import PageDocument
from propextract.core.extractors.base import FieldExtractor, positive
from propextract.core.extractors.selectors import PRICE_PATHS, PRICE_SELECTORS
from propextract.core.numbers import coerce_number, parse_money


def find_page_price(document: PageDocument) -> float | None:
    """First positive `$` amount in the page's price elements."""
    for _, txt in document.iter_texts(PRICE_SELECTORS):
        price = parse_money(txt)
        if positive(price):
            return price
    return None


class PriceExtractor(FieldExtractor[float]):
    """List price. Zero is treated as unset."""

    field = "price"

    def is_valid(self, value: float | None) -> bool:
        return positive(value)

    def extract_from_structured(self, blob: StructuredBlob) -> float | None:
        return coerce_number(blob.first(*PRICE_PATHS))

    def extract_from_text(self) -> float | None:
        return find_page_price(self.document)
