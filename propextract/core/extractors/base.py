# propextract/core/extractors/base.py
"""
Two-stage field extractor contract.

Every field tries the structured blob first and falls back to the rendered
page text. A valid structured value always wins; absence on both sides is a
normal outcome (None), never an exception. Unexpected faults inside a stage
are re-raised as FieldExtractionError carrying the field and stage.
"""

from __future__ import annotations

import asyncio
import logging
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable
from typing import ClassVar, Generic, TypeVar

from propextract.core.blob import StructuredBlob
from propextract.core.document import PageDocument
from propextract.core.errors import extraction_error_guard
from propextract.schemas.models import Selector

T = TypeVar("T")

logger = logging.getLogger(__name__)


class FieldExtractor(ABC, Generic[T]):
    """Base for one extracted attribute (or one tightly-coupled group of attributes)."""

    field: ClassVar[str] = "field"

    def __init__(self, document: PageDocument) -> None:
        self.document = document

    # ---------- Per-field hooks ----------

    @abstractmethod
    def extract_from_structured(self, blob: StructuredBlob) -> T | None: ...

    @abstractmethod
    def extract_from_text(self) -> T | None: ...

    def is_valid(self, value: T | None) -> bool:
        return value is not None

    def is_complete(self, value: T | None) -> bool:
        """Whether a structured value is good enough to skip the text stage."""
        return self.is_valid(value)

    def merge(self, structured: T | None, text: T | None) -> T | None:
        return structured if self.is_valid(structured) else text

    # ---------- Contract ----------

    async def extract(self, blob: StructuredBlob | None) -> T | None:
        logger.debug("Starting %s extraction", self.field)

        structured: T | None = None
        if blob is not None:
            with extraction_error_guard(self.field, "structured"):
                structured = self.extract_from_structured(blob)
            if self.is_complete(structured):
                logger.debug("Extracted %s from structured data: %r", self.field, structured)
                return structured

        # Yield between stages so sibling extractors interleave
        await asyncio.sleep(0)

        with extraction_error_guard(self.field, "text"):
            text_value = self.extract_from_text()

        result = self.merge(structured, text_value)
        if self.is_valid(result):
            logger.debug("Extracted %s: %r", self.field, result)
            return result

        logger.debug("No %s found in structured data or page text", self.field)
        return None

    # ---------- Shared text helpers ----------

    def first_match(self, selectors: Iterable[Selector], parse: Callable[[str], T | None]) -> T | None:
        """Parse each selector's text in order; first valid value wins."""
        for sel, txt in self.document.iter_texts(selectors):
            value = parse(txt)
            if self.is_valid(value):
                logger.debug("%s matched selector %s", self.field, sel.label or sel.css)
                return value
        return None


def positive(value: float | int | None) -> bool:
    return value is not None and value > 0


def non_negative(value: float | int | None) -> bool:
    return value is not None and value >= 0


__all__ = ["FieldExtractor", "positive", "non_negative"]
