# propextract/core/numbers.py
"""
Number parsing shared by the structured and text extraction paths.

- parse_number_words: natural-language numbers ("two", "third", "twenty one",
  "single", "an") → int, first match in document order.
- extract_number_from_text: optional digit pattern first, then number words.
- safe_parse_int / safe_parse_float / parse_money / coerce_number: tolerant
  numeric cleaning that returns None instead of raising.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping
from re import Pattern

# ---------- Word tables ----------

_CARDINALS: Mapping[str, int] = {
    "zero": 0, "one": 1, "two": 2, "three": 3, "four": 4,
    "five": 5, "six": 6, "seven": 7, "eight": 8, "nine": 9,
    "ten": 10, "eleven": 11, "twelve": 12, "thirteen": 13,
    "fourteen": 14, "fifteen": 15, "sixteen": 16, "seventeen": 17,
    "eighteen": 18, "nineteen": 19, "twenty": 20,
}  # fmt: skip

_ORDINALS: Mapping[str, int] = {
    "first": 1, "second": 2, "third": 3, "fourth": 4,
    "fifth": 5, "sixth": 6, "seventh": 7, "eighth": 8,
    "ninth": 9, "tenth": 10, "eleventh": 11, "twelfth": 12,
    "thirteenth": 13, "fourteenth": 14, "fifteenth": 15,
    "sixteenth": 16, "seventeenth": 17, "eighteenth": 18,
    "nineteenth": 19, "twentieth": 20,
}  # fmt: skip

_SYNONYMS: Mapping[str, int] = {
    "single": 1,
    "double": 2,
    "triple": 3,
    "quadruple": 4,
    "a": 1,
    "an": 1,
}

NUMBER_WORDS: Mapping[str, int] = {**_CARDINALS, **_ORDINALS, **_SYNONYMS}


def _build_compounds() -> dict[str, int]:
    # "twenty one" .. "twenty nine", "twenty first" .. "twenty ninth"
    out: dict[str, int] = {}
    ones = [w for w, n in _CARDINALS.items() if 1 <= n <= 9]
    ones_ord = [w for w, n in _ORDINALS.items() if 1 <= n <= 9]
    for w in ones:
        out[f"twenty {w}"] = 20 + _CARDINALS[w]
    for w in ones_ord:
        out[f"twenty {w}"] = 20 + _ORDINALS[w]
    return out


COMPOUND_NUMBER_WORDS: Mapping[str, int] = _build_compounds()

# Alternation usable inside larger patterns (longest first so "fourteen" beats "four")
NUMBER_WORD_ALTERNATION = "|".join(sorted(NUMBER_WORDS, key=len, reverse=True))

_PUNCT_RE = re.compile(r"[^\w\s]|_")
_LEADING_INT_RE = re.compile(r"^\s*([-+]?\d+)")
_LEADING_FLOAT_RE = re.compile(r"^\s*([-+]?\d+(?:\.\d+)?|[-+]?\.\d+)")
_MONEY_RE = re.compile(r"\$\s*(\d[\d,]*(?:\.\d+)?)")


# ---------- Number words ----------


def _tokenize(text: str) -> list[str]:
    return _PUNCT_RE.sub(" ", text.lower()).split()


def parse_number_words(text: str | None) -> int | None:
    """
    Return the first number expressed in words, scanning tokens in order.

    At each position a two-token compound ("twenty one") is tried before the
    single token, so "twenty one units" → 21 rather than 20.
    """
    if not text:
        return None
    tokens = _tokenize(text)
    for i, tok in enumerate(tokens):
        if i + 1 < len(tokens):
            pair = f"{tok} {tokens[i + 1]}"
            if pair in COMPOUND_NUMBER_WORDS:
                return COMPOUND_NUMBER_WORDS[pair]
        if tok in NUMBER_WORDS:
            return NUMBER_WORDS[tok]
    return None


def extract_number_from_text(text: str | None, pattern: Pattern[str] | str | None = None) -> int | float | None:
    """
    Extract a number from text, trying the caller's digit pattern first (group 1,
    or the whole match when it has no group) and then falling back to number words.
    """
    if not text:
        return None

    if pattern is not None:
        m = re.search(pattern, text)
        if m:
            num = safe_parse_float(m.group(1) if m.re.groups else m.group(0))
            if num is not None:
                return int(num) if num.is_integer() else num

    return parse_number_words(text)


# ---------- Numeric cleaning ----------


def _strip_grouping(value: str) -> str:
    # Thousands groupings: comma, NBSP, thin and narrow no-break spaces
    return value.replace(",", "").replace("\u00a0", "").replace("\u2009", "").replace("\u202f", "")


def safe_parse_int(value: str | None) -> int | None:
    """Parse the leading integer of a string ("1,234 sqft" → 1234); None on failure."""
    if not value:
        return None
    m = _LEADING_INT_RE.match(_strip_grouping(value))
    return int(m.group(1)) if m else None


def safe_parse_float(value: str | None) -> float | None:
    """Parse the leading decimal of a string ("1.5 baths" → 1.5); None on failure."""
    if not value:
        return None
    m = _LEADING_FLOAT_RE.match(_strip_grouping(value))
    return float(m.group(1)) if m else None


def parse_money(text: str | None) -> float | None:
    """First `$`-prefixed amount in text ("Est. $1,901/mo" → 1901.0)."""
    if not text:
        return None
    m = _MONEY_RE.search(text)
    if not m:
        return None
    return safe_parse_float(m.group(1))


def coerce_number(value: object) -> float | None:
    """Structured values may arrive as numbers or numeric strings; bools are rejected."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        f = float(value)
        return f if math.isfinite(f) else None
    if isinstance(value, str):
        return safe_parse_float(value.replace("$", ""))
    return None


__all__ = [
    "NUMBER_WORDS",
    "COMPOUND_NUMBER_WORDS",
    "NUMBER_WORD_ALTERNATION",
    "parse_number_words",
    "extract_number_from_text",
    "safe_parse_int",
    "safe_parse_float",
    "parse_money",
    "coerce_number",
]
