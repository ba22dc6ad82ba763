# propextract/__init__.py
"""
propextract: property facts from rendered real-estate listing pages.

The entry point is `ExtractionOrchestrator` (see propextract.orchestrator.extraction);
benchmark rents come from `RentBenchmarkCache` (propextract.market.rent_benchmarks).
"""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
