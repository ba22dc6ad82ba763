# propextract/core/errors.py
"""
Typed errors for the listing extraction pipeline.

Absence of a field is never an error; these types cover genuine faults only.

Exports
-------
- ExtractionError, FieldExtractionError, ExtractionFailedError,
  InvalidListingError, DatasetLoadError
- EXTRACTION_ERRORS
- extraction_error_guard(field, stage)
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Literal

Stage = Literal["structured", "text", "assemble", "fallback"]

# =========================
# Exception types
# =========================


class ExtractionError(RuntimeError):
    """Base class for extraction pipeline failures."""


class FieldExtractionError(ExtractionError):
    """An unexpected internal fault inside a single field extractor stage."""

    def __init__(self, field: str, stage: Stage, message: str) -> None:
        super().__init__(f"{field} [{stage}]: {message}")
        self.field = field
        self.stage = stage


class ExtractionFailedError(ExtractionError):
    """The single failure mode surfaced by the orchestrator to its caller."""

    def __init__(self, message: str = "Property data extraction failed", *, field: str | None = None, stage: str | None = None) -> None:
        super().__init__(message)
        self.field = field
        self.stage = stage


class InvalidListingError(ExtractionError):
    """Required-field policy rejected the record."""

    def __init__(self, missing: Sequence[str]) -> None:
        self.missing = tuple(missing)
        super().__init__(
            "This listing appears to be incomplete. Required information is missing: " + ", ".join(self.missing)
        )


class DatasetLoadError(ExtractionError):
    """The static rent-benchmark dataset could not be loaded."""


# Selector tuple for grouped exception handling
EXTRACTION_ERRORS = (
    FieldExtractionError,
    ExtractionFailedError,
    InvalidListingError,
    DatasetLoadError,
)


@contextmanager
def extraction_error_guard(field: str, stage: Stage) -> Iterator[None]:
    """Wrap unexpected exceptions from an extractor stage with field/stage context."""
    try:
        yield
    except EXTRACTION_ERRORS:
        raise
    except Exception as exc:  # noqa: BLE001
        raise FieldExtractionError(field, stage, f"{type(exc).__name__}: {exc}") from exc


__all__ = [
    "Stage",
    "ExtractionError",
    "FieldExtractionError",
    "ExtractionFailedError",
    "InvalidListingError",
    "DatasetLoadError",
    "EXTRACTION_ERRORS",
    "extraction_error_guard",
]
