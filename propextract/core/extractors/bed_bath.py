# propextract/core/extractors/bed_bath.py
"""
Bedrooms + bathrooms.

Structured values of 0 usually mean "unset" upstream, so 0 (or missing) falls
through to the listing description and then to the rendered page. Each count
is resolved independently: digit pattern → number-word pattern → a combined
"<n> bed ... <m> bath" phrase split on "bed".
"""

from __future__ import annotations

import re

from propextract.core.blob import StructuredBlob
from propextract.core.extractors.base import FieldExtractor
from propextract.core.extractors.selectors import (
    BATHROOM_PATHS,
    BED_BATH_SELECTORS,
    BEDROOM_PATHS,
    DESCRIPTION_PATHS,
)
from propextract.core.numbers import (
    NUMBER_WORD_ALTERNATION,
    coerce_number,
    extract_number_from_text,
    parse_number_words,
    safe_parse_float,
)
from propextract.schemas.models import BedBathData

# ---------- Regex tables ----------

# A bed/bath word followed by a street suffix is part of an address ("123 Bath St", "Bedford Ave")
_NOT_STREET = r"(?!\w*\.?\s+(?:st|street|ave|avenue|rd|road|ln|lane|dr|drive|blvd|ct|court)\b)"
_BED_WORD = rf"(?:bed(?:room)?s?|bdrms?|bds?|br)\b{_NOT_STREET}"
_BATH_WORD = rf"(?:bath(?:room)?s?|ba)\b{_NOT_STREET}"
_BATH_NUM = r"\d+(?:\.\d+)?"

# "2 bed, 1 bath" / "2 bd / 1.5 ba" / "2 beds | 1 bath"
_COMBINED_DIGIT_RE = re.compile(rf"(?i)\b(\d+)\s*-?\s*{_BED_WORD}\s*[,/|;&]?\s*(?:and\s+)?({_BATH_NUM})\s*-?\s*{_BATH_WORD}")
_BED_DIGIT_RE = re.compile(rf"(?i)\b(\d+)\s*-?\s*{_BED_WORD}")
_BATH_DIGIT_RE = re.compile(rf"(?i)\b({_BATH_NUM})\s*-?\s*{_BATH_WORD}")

# "Bedrooms: 3" / "Bathrooms: 2.5"
_BED_LABEL_RE = re.compile(r"(?i)\bbed(?:room)?s?\s*:\s*(\d+)")
_BATH_LABEL_RE = re.compile(rf"(?i)\bbath(?:room)?s?\s*:\s*({_BATH_NUM})")

# "three bedroom", "two-bath"
_BED_WORDNUM_RE = re.compile(rf"(?i)\b(twenty[\s-]+\w+|{NUMBER_WORD_ALTERNATION})\s*-?\s*{_BED_WORD}")
_BATH_WORDNUM_RE = re.compile(rf"(?i)\b(twenty[\s-]+\w+|{NUMBER_WORD_ALTERNATION})\s*-?\s*{_BATH_WORD}")

_BED_SPLIT_RE = re.compile(rf"(?i)\bbed{_NOT_STREET}")
_BATH_SPLIT_RE = re.compile(rf"(?i)\bbath{_NOT_STREET}")


def _normalize_half_notation(s: str) -> str:
    # 1½ → 1.5 ; "1 1/2" → 1.5
    s = re.sub(r"\s*½", "½", s).replace("½", ".5")
    return re.sub(r"(\d)\s+1\s*/\s*2\b", r"\1.5", s)


def _as_bedrooms(value: float | int | None) -> int | None:
    if value is None or value <= 0 or not float(value).is_integer():
        return None
    return int(value)


def _as_bathrooms(value: float | int | None) -> float | None:
    if value is None or value <= 0:
        return None
    return float(value)


def _split_on_bed(text: str) -> tuple[int | None, float | None]:
    """
    Combined phrase fallback ("three bedrooms and two full baths"): the number
    just before "bed", and the number closest before the following "bath".
    """
    m = _BED_SPLIT_RE.search(text)
    if not m:
        return None, None
    before, after = text[: m.start()], text[m.end() :]
    beds = extract_number_from_text(" ".join(before.split()[-2:]), rf"(\d+)\s*-?\s*$")

    baths = None
    b = _BATH_SPLIT_RE.search(after)
    if b:
        segment = " ".join(after[: b.start()].split()[-2:])
        baths = extract_number_from_text(segment, rf"({_BATH_NUM})\s*-?\s*$")
    return _as_bedrooms(beds), _as_bathrooms(baths)


def parse_bed_bath(text: str | None) -> BedBathData:
    """Best-effort bedroom/bathroom counts from free text; missing counts stay None."""
    if not text:
        return BedBathData()
    text = _normalize_half_notation(text)

    beds: int | None = None
    baths: float | None = None

    m = _COMBINED_DIGIT_RE.search(text)
    if m:
        beds = _as_bedrooms(safe_parse_float(m.group(1)))
        baths = _as_bathrooms(safe_parse_float(m.group(2)))

    if beds is None:
        m = _BED_LABEL_RE.search(text) or _BED_DIGIT_RE.search(text)
        beds = _as_bedrooms(safe_parse_float(m.group(1))) if m else None
    if baths is None:
        m = _BATH_LABEL_RE.search(text) or _BATH_DIGIT_RE.search(text)
        baths = _as_bathrooms(safe_parse_float(m.group(1))) if m else None

    if beds is None:
        m = _BED_WORDNUM_RE.search(text)
        beds = _as_bedrooms(parse_number_words(m.group(1))) if m else None
    if baths is None:
        m = _BATH_WORDNUM_RE.search(text)
        baths = _as_bathrooms(parse_number_words(m.group(1))) if m else None

    if beds is None or baths is None:
        split_beds, split_baths = _split_on_bed(text)
        beds = beds if beds is not None else split_beds
        baths = baths if baths is not None else split_baths

    return BedBathData(bedrooms=beds, bathrooms=baths)


def _fill(base: BedBathData, extra: BedBathData) -> BedBathData:
    return BedBathData(
        bedrooms=base.bedrooms if base.bedrooms is not None else extra.bedrooms,
        bathrooms=base.bathrooms if base.bathrooms is not None else extra.bathrooms,
    )


class BedBathExtractor(FieldExtractor[BedBathData]):
    field = "bed_bath"

    def is_valid(self, value: BedBathData | None) -> bool:
        return value is not None and (value.bedrooms is not None or value.bathrooms is not None)

    def is_complete(self, value: BedBathData | None) -> bool:
        return value is not None and value.complete

    def merge(self, structured: BedBathData | None, text: BedBathData | None) -> BedBathData | None:
        return _fill(structured or BedBathData(), text or BedBathData())

    def extract_from_structured(self, blob: StructuredBlob) -> BedBathData | None:
        beds = coerce_number(blob.first(*BEDROOM_PATHS))
        baths = coerce_number(blob.first(*BATHROOM_PATHS))
        data = BedBathData(bedrooms=_as_bedrooms(beds), bathrooms=_as_bathrooms(baths))
        if data.complete:
            return data
        return _fill(data, parse_bed_bath(blob.text(*DESCRIPTION_PATHS)))

    def extract_from_text(self) -> BedBathData | None:
        data = BedBathData()
        for _, txt in self.document.iter_texts(BED_BATH_SELECTORS):
            data = _fill(data, parse_bed_bath(txt))
            if data.complete:
                break
        return data
