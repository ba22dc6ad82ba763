# propextract/core/extractors/property_type.py
from __future__ import annotations

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor
from propextract.core.extractors.selectors import HOME_TYPE_PATHS, PROPERTY_TYPE_SELECTORS
from propextract.schemas.labels import PropertyType, detect_property_type, map_home_type


class PropertyTypeExtractor(FieldExtractor[PropertyType]):
    """
    Structured home-type codes go through a fixed map (unknown codes → None);
    the text path looks for the canonical labels in meta descriptions first.
    """

    field = "property_type"

    def extract_from_structured(self, blob: StructuredBlob) -> PropertyType | None:
        return map_home_type(blob.first(*HOME_TYPE_PATHS))

    def extract_from_text(self) -> PropertyType | None:
        return self.first_match(PROPERTY_TYPE_SELECTORS, detect_property_type)
