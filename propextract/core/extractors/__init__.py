# propextract/core/extractors/__init__.py
from __future__ import annotations

from propextract.core.document import PageDocument

from .address import AddressExtractor
from .base import FieldExtractor
from .bed_bath import BedBathExtractor, parse_bed_bath
from .hoa import HoaFeesExtractor
from .price import PriceExtractor
from .property_tax import PropertyTaxExtractor
from .property_type import PropertyTypeExtractor
from .rent import RentEstimateExtractor
from .square_feet import SquareFeetExtractor
from .units import UnitsExtractor, parse_units
from .zip_code import ZipCodeExtractor

# Order only affects log interleaving; extractors are independent
EXTRACTOR_TYPES: tuple[type[FieldExtractor], ...] = (
    PriceExtractor,
    BedBathExtractor,
    PropertyTypeExtractor,
    SquareFeetExtractor,
    ZipCodeExtractor,
    RentEstimateExtractor,
    PropertyTaxExtractor,
    HoaFeesExtractor,
    UnitsExtractor,
    AddressExtractor,
)


def default_extractors(document: PageDocument) -> list[FieldExtractor]:
    """One fresh instance of every field extractor bound to `document`."""
    return [cls(document) for cls in EXTRACTOR_TYPES]


__all__ = [
    "FieldExtractor",
    "PriceExtractor",
    "BedBathExtractor",
    "PropertyTypeExtractor",
    "SquareFeetExtractor",
    "ZipCodeExtractor",
    "RentEstimateExtractor",
    "PropertyTaxExtractor",
    "HoaFeesExtractor",
    "UnitsExtractor",
    "AddressExtractor",
    "EXTRACTOR_TYPES",
    "default_extractors",
    "parse_bed_bath",
    "parse_units",
]
