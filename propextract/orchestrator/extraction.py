# propextract/orchestrator/extraction.py
"""
Extraction orchestrator

Purpose
-------
Run every field extractor against one listing page and assemble a
PropertyRecord:
  1) Locate the embedded structured blob (once per session)
  2) Run all extractors concurrently and join them (no early exit)
  3) Assemble the record from the per-field results
  4) If the page carries no rent estimate, look up a benchmark rent by
     zip + bedrooms and attach it as `secondary_rent_estimate`
     (the matched row goes to `secondary_rent_source`)

Any extractor fault fails the whole call with ExtractionFailedError; an
absent field is never a fault.

Public API
----------
ExtractionOrchestrator(document, benchmarks=..., script_id=..., policy=...)
  .extract_property_data() -> PropertyRecord
  .extract_with_timeout(timeout_s) -> PropertyRecord
  .clear_cache()
ExtractionOrchestrator.from_html(html, settings=..., benchmarks=...)
RequiredFieldsPolicy(fields=...).check(record)
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from propextract.core.blob import DEFAULT_SCRIPT_ID, StructuredBlob, StructuredBlobLocator
from propextract.core.document import PageDocument
from propextract.core.errors import (
    DatasetLoadError,
    ExtractionFailedError,
    InvalidListingError,
)
from propextract.core.extractors import FieldExtractor, default_extractors
from propextract.inputs.settings import ExtractionSettings
from propextract.market.rent_benchmarks import RentBenchmarkCache, loader_for
from propextract.schemas.models import BedBathData, BenchmarkCacheEntry, PropertyRecord, PropertyTaxData

logger = logging.getLogger(__name__)

LEGACY_REQUIRED_FIELDS: tuple[str, ...] = ("price", "bedrooms", "bathrooms", "property_type", "zip_code")


@dataclass(frozen=True)
class RequiredFieldsPolicy:
    """Rejects records missing any of `fields` with InvalidListingError."""

    fields: tuple[str, ...] = LEGACY_REQUIRED_FIELDS

    def check(self, record: PropertyRecord) -> PropertyRecord:
        missing = record.missing_fields(self.fields)
        if missing:
            raise InvalidListingError(missing)
        return record


class ExtractionOrchestrator:
    def __init__(
        self,
        document: PageDocument,
        *,
        benchmarks: RentBenchmarkCache | None = None,
        script_id: str = DEFAULT_SCRIPT_ID,
        extractors: Sequence[FieldExtractor] | None = None,
        policy: RequiredFieldsPolicy | None = None,
    ) -> None:
        self.document = document
        self.benchmarks = benchmarks
        self.policy = policy
        self._locator = StructuredBlobLocator(document, script_id=script_id)
        self._extractors: list[FieldExtractor] = (
            list(extractors) if extractors is not None else default_extractors(document)
        )

    @classmethod
    def from_html(
        cls,
        html: str,
        *,
        settings: ExtractionSettings | None = None,
        benchmarks: RentBenchmarkCache | None = None,
    ) -> ExtractionOrchestrator:
        """Build an orchestrator for one page; a benchmark cache is created from settings when not given."""
        settings = settings or ExtractionSettings()
        if benchmarks is None:
            benchmarks = RentBenchmarkCache(
                loader_for(settings.benchmark_source), capacity=settings.benchmark_cache_size
            )
        return cls(
            PageDocument(html),
            benchmarks=benchmarks,
            script_id=settings.script_id,
            policy=RequiredFieldsPolicy() if settings.require_fields else None,
        )

    @property
    def extractors(self) -> tuple[FieldExtractor, ...]:
        return tuple(self._extractors)

    def clear_cache(self) -> None:
        """Invalidate the memoized blob (call after the page content changes)."""
        self._locator.clear_cache()

    # ---------- Entry points ----------

    async def extract_property_data(self) -> PropertyRecord:
        logger.info("Starting property data extraction")

        blob = self._locator.locate()
        if blob is None:
            logger.info("No structured data on page; using rendered text only")

        values = await self._run_extractors(blob)

        try:
            record = self._assemble(values)
        except Exception as exc:  # noqa: BLE001
            logger.error("Failed to assemble property record: %s", exc)
            raise ExtractionFailedError(f"Property data extraction failed: {exc}", stage="assemble") from exc

        record = await self._with_benchmark_rent(record)

        if self.policy is not None:
            self.policy.check(record)

        logger.info("Property data extraction completed: %s", record.summary())
        return record

    async def extract_with_timeout(self, timeout_s: float) -> PropertyRecord:
        try:
            return await asyncio.wait_for(self.extract_property_data(), timeout=timeout_s)
        except asyncio.TimeoutError as exc:
            logger.error("Property data extraction timed out after %.1fs", timeout_s)
            raise ExtractionFailedError(f"Property data extraction timed out after {timeout_s}s") from exc

    # ---------- Internals ----------

    async def _run_extractors(self, blob: StructuredBlob | None) -> dict[str, Any]:
        results = await asyncio.gather(*(ex.extract(blob) for ex in self._extractors), return_exceptions=True)

        values: dict[str, Any] = {}
        first_fault: BaseException | None = None
        for ex, res in zip(self._extractors, results):
            if isinstance(res, BaseException):
                logger.error("Extractor %s failed: %s", ex.field, res)
                first_fault = first_fault or res
                continue
            values[ex.field] = res

        if first_fault is not None:
            if isinstance(first_fault, (asyncio.CancelledError, KeyboardInterrupt, SystemExit)):
                raise first_fault
            field = getattr(first_fault, "field", None)
            stage = getattr(first_fault, "stage", None)
            raise ExtractionFailedError(
                f"Property data extraction failed: {first_fault}", field=field, stage=stage
            ) from first_fault

        return values

    @staticmethod
    def _assemble(values: dict[str, Any]) -> PropertyRecord:
        bed_bath: BedBathData = values.get("bed_bath") or BedBathData()
        tax: PropertyTaxData = values.get("property_tax") or PropertyTaxData()
        return PropertyRecord(
            price=values.get("price"),
            bedrooms=bed_bath.bedrooms,
            bathrooms=bed_bath.bathrooms,
            property_type=values.get("property_type"),
            square_feet=values.get("square_feet"),
            zip_code=values.get("zip_code"),
            rent_estimate=values.get("rent_estimate"),
            property_tax_rate=tax.rate,
            monthly_property_tax=tax.monthly_amount,
            hoa_fees=values.get("hoa_fees"),
            units=values.get("units"),
            address=values.get("address"),
        )

    async def _with_benchmark_rent(self, record: PropertyRecord) -> PropertyRecord:
        if record.rent_estimate is not None or self.benchmarks is None:
            return record
        if record.zip_code is None or record.bedrooms is None:
            logger.debug("Skipping benchmark rent lookup: zip or bedrooms missing")
            return record

        try:
            entry: BenchmarkCacheEntry | None = await self.benchmarks.get(record.zip_code, record.bedrooms)
        except DatasetLoadError as exc:
            logger.error("Benchmark rent unavailable: %s", exc)
            return record

        if entry is None:
            return record
        logger.debug("Attached benchmark rent %s", entry.summary())
        return record.model_copy(update={"secondary_rent_estimate": entry.rent, "secondary_rent_source": entry})


__all__ = ["ExtractionOrchestrator", "RequiredFieldsPolicy", "LEGACY_REQUIRED_FIELDS"]
