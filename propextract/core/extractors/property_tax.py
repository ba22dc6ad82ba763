# propextract/core/extractors/property_tax.py
"""
Property tax as a percentage rate and/or a monthly amount.

Structured: explicit rate wins; otherwise rate = annual / price * 100.
Text: the monthly `$` amount from the payment breakdown, and the calculator's
rate input (used verbatim) when its id is recognized. No default rate is ever
assumed: if nothing is derivable both values stay None.
"""

from __future__ import annotations

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor, non_negative, positive
from propextract.core.extractors.price import find_page_price
from propextract.core.extractors.selectors import (
    PRICE_PATHS,
    TAX_ANNUAL_PATHS,
    TAX_MONTHLY_SELECTORS,
    TAX_RATE_PATHS,
    TAX_RATE_SELECTOR,
)
from propextract.core.numbers import coerce_number, parse_money, safe_parse_float
from propextract.schemas.models import PropertyTaxData


def rate_from_annual(annual: float | None, price: float | None) -> float | None:
    if annual is None or not positive(price):
        return None
    return round(annual / price * 100, 4)


def monthly_from_rate(rate: float | None, price: float | None) -> float | None:
    if rate is None or not positive(price):
        return None
    return round(rate / 100 * price / 12, 2)


class PropertyTaxExtractor(FieldExtractor[PropertyTaxData]):
    field = "property_tax"

    def is_valid(self, value: PropertyTaxData | None) -> bool:
        return value is not None and not value.empty

    def extract_from_structured(self, blob: StructuredBlob) -> PropertyTaxData | None:
        price = coerce_number(blob.first(*PRICE_PATHS))
        rate = coerce_number(blob.first(*TAX_RATE_PATHS))
        annual = coerce_number(blob.first(*TAX_ANNUAL_PATHS))
        if not positive(annual):
            annual = None
        if not non_negative(rate):
            rate = None

        if rate is None:
            rate = rate_from_annual(annual, price)

        monthly = round(annual / 12, 2) if annual is not None else monthly_from_rate(rate, price)
        return PropertyTaxData(rate=rate, monthly_amount=monthly)

    def extract_from_text(self) -> PropertyTaxData | None:
        monthly = self._monthly_amount()
        rate = self._rate_input()

        if rate is None and monthly is not None:
            rate = rate_from_annual(monthly * 12, find_page_price(self.document))

        return PropertyTaxData(rate=rate, monthly_amount=monthly)

    # ---------- Internals ----------

    def _monthly_amount(self) -> float | None:
        for _, txt in self.document.iter_texts(TAX_MONTHLY_SELECTORS):
            amount = parse_money(txt)
            if non_negative(amount):
                return amount
        return None

    def _rate_input(self) -> float | None:
        rate = safe_parse_float(self.document.read(TAX_RATE_SELECTOR))
        return rate if non_negative(rate) else None
