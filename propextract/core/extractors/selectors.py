# propextract/core/extractors/selectors.py
"""
Per-field candidate locations: structured key paths and rendered-page selectors.

Each tuple is tried in order; the first valid value wins.
"""

from __future__ import annotations

from propextract.core.blob import KeyPath
from propextract.schemas.models import Selector


def _sel(css: str, attr: str | None = None, label: str = "") -> Selector:
    return Selector(css=css, attr=attr, label=label or css)


# =========================
# Structured key paths
# =========================

PRICE_PATHS: tuple[KeyPath, ...] = (("price",), ("listPrice",))
BEDROOM_PATHS: tuple[KeyPath, ...] = (("bedrooms",), ("resoFacts", "bedrooms"))
BATHROOM_PATHS: tuple[KeyPath, ...] = (
    ("bathrooms",),
    ("resoFacts", "bathrooms"),
    ("resoFacts", "bathroomsFloat"),
)
DESCRIPTION_PATHS: tuple[KeyPath, ...] = (("description",), ("resoFacts", "description"))
HOME_TYPE_PATHS: tuple[KeyPath, ...] = (("homeType",), ("resoFacts", "homeType"))
LIVING_AREA_PATHS: tuple[KeyPath, ...] = (("livingArea",), ("resoFacts", "livingArea"))
ZIP_PATHS: tuple[KeyPath, ...] = (("zipcode",), ("address", "zipcode"))
RENT_PATHS: tuple[KeyPath, ...] = (("rentZestimate",),)
TAX_RATE_PATHS: tuple[KeyPath, ...] = (("propertyTaxRate",), ("resoFacts", "taxRate"))
TAX_ANNUAL_PATHS: tuple[KeyPath, ...] = (("taxAnnualAmount",), ("resoFacts", "taxAnnualAmount"))
HOA_PATHS: tuple[KeyPath, ...] = (("monthlyHoaFee",), ("resoFacts", "hoaFee"))
UNITS_PATHS: tuple[KeyPath, ...] = (
    ("units",),
    ("resoFacts", "units"),
    ("multiFamilyUnits", "totalUnits"),
)
ADDRESS_PATH: KeyPath = ("address",)
ADDRESS_PARTS: tuple[str, ...] = ("streetAddress", "city", "state", "zipcode")

# =========================
# Rendered-page selectors
# =========================

PRICE_SELECTORS: tuple[Selector, ...] = (
    _sel('[data-testid="price"]', label="price"),
    _sel("span.price-text", label="price-text"),
)

BED_BATH_SELECTORS: tuple[Selector, ...] = (
    _sel('[data-testid="bed-bath-section"]', label="bed-bath-section"),
    _sel('[data-testid="bed-bath-sqft-facts"]', label="bed-bath-sqft-facts"),
    _sel('[data-testid="description"]', label="description"),
)

PROPERTY_TYPE_SELECTORS: tuple[Selector, ...] = (
    _sel('meta[name="description"]', attr="content", label="meta-description"),
    _sel('meta[property="og:description"]', attr="content", label="og-description"),
    _sel('[data-testid="property-type"]', label="property-type"),
)

RENT_SELECTORS: tuple[Selector, ...] = (
    _sel('[data-testid="rent-zestimate"]', label="rent-zestimate"),
    _sel('[data-testid="rent-estimate"]', label="rent-estimate"),
)

TAX_MONTHLY_SELECTORS: tuple[Selector, ...] = (_sel('[data-testid="property-taxes"]', label="property-taxes"),)
TAX_RATE_INPUT_ID = "property-tax"
TAX_RATE_SELECTOR = _sel(f"#{TAX_RATE_INPUT_ID}", attr="value", label="property-tax-input")

HOA_SELECTORS: tuple[Selector, ...] = (
    _sel('[data-testid="hoa-fees"]', label="hoa-fees"),
    _sel('[data-testid="monthly-hoa"]', label="monthly-hoa"),
)

UNITS_SELECTORS: tuple[Selector, ...] = (
    _sel('[data-testid="units"]', label="units"),
    _sel('[data-testid="description"]', label="description"),
    _sel('[data-testid="property-details"]', label="property-details"),
)

ZIP_SELECTORS: tuple[Selector, ...] = (
    _sel('meta[property="og:title"]', attr="content", label="og-title"),
    _sel('[data-testid="zip-code"]', label="zip-code"),
    _sel('h1[data-testid="detail-address"]', label="detail-address"),
)

ADDRESS_SELECTORS: tuple[Selector, ...] = (
    _sel('h1[data-testid="detail-address"]', label="detail-address"),
    _sel('[data-testid="address"]', label="address"),
    _sel('[itemprop="address"]', label="itemprop-address"),
    _sel('meta[property="og:title"]', attr="content", label="og-title"),
)

SQFT_CONTAINER_CSS: tuple[str, ...] = (
    '[data-testid="bed-bath-sqft-fact-container"]',
    '[data-testid="square-feet-container"]',
)
SQFT_TEXT_SELECTORS: tuple[Selector, ...] = (
    _sel('[data-testid="bed-bath-sqft-facts"]', label="bed-bath-sqft-facts"),
    _sel('[data-testid="bed-bath-section"]', label="bed-bath-section"),
)
