# propextract/schemas/labels.py
from __future__ import annotations

from collections.abc import Mapping
from enum import Enum

# =========================
# Canonical label enums
# =========================


class PropertyType(str, Enum):
    """Closed set of property types surfaced on a PropertyRecord."""

    single_family = "Single Family"
    condo = "Condo"
    multi_family = "Multi Family"


# Structured "homeType" codes → canonical label. Anything else is treated as absent.
HOME_TYPE_MAP: Mapping[str, PropertyType] = {
    "SINGLE_FAMILY": PropertyType.single_family,
    "CONDO": PropertyType.condo,
    "MULTI_FAMILY": PropertyType.multi_family,
}

# Containment checks run in this order; first hit wins.
PROPERTY_TYPE_TEXT_PRIORITY: tuple[PropertyType, ...] = (
    PropertyType.single_family,
    PropertyType.condo,
    PropertyType.multi_family,
)

# Informal multi-unit nouns → unit count
MULTI_UNIT_NOUNS: Mapping[str, int] = {
    "duplex": 2,
    "triplex": 3,
    "quadplex": 4,
    "fourplex": 4,
    "fiveplex": 5,
    "sixplex": 6,
}


def map_home_type(code: object) -> PropertyType | None:
    """Map a structured home-type code (e.g. 'SINGLE_FAMILY') to a PropertyType."""
    if not isinstance(code, str):
        return None
    return HOME_TYPE_MAP.get(code.strip().upper())


def detect_property_type(text: str | None) -> PropertyType | None:
    """Substring containment against the canonical labels, in fixed priority order."""
    if not text:
        return None
    for label in PROPERTY_TYPE_TEXT_PRIORITY:
        if label.value in text:
            return label
    return None


__all__ = [
    "PropertyType",
    "HOME_TYPE_MAP",
    "PROPERTY_TYPE_TEXT_PRIORITY",
    "MULTI_UNIT_NOUNS",
    "map_home_type",
    "detect_property_type",
]
