# propextract/market/rent_benchmarks.py
"""
Rent benchmarks from the HUD Small Area Fair Market Rent dataset.

Dataset shape
-------------
{
  "metadata": {"lastUpdated": "2025-01-15", "version": "1.0", "source": "HUD FY2025 SAFMRs", ...},
  "data": {
    "zip_codes": {
      "43205": {
        "area_code": "METRO18140M18140",
        "area_name": "Columbus, OH MSA",
        "rents": {"0BR": 980, "0BR-90": 882, "0BR-110": 1078, "1BR": 1100, ...}
      }
    }
  }
}

Only the plain "<n>BR" keys (n = 0..4) are read; the 90%/110% payment
standard columns are ignored.

Public API
----------
- class RentBenchmarkCache:
    - await get(zip_code, bedrooms) -> BenchmarkCacheEntry | None
    - await initialize()
    - clear_cache()
    - metadata -> DatasetMetadata | None
- json_file_loader(path) / url_loader(url) / loader_for(source)
"""

from __future__ import annotations

import asyncio
import json
import logging
from collections import OrderedDict
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any, Final

import requests
from pydantic import ValidationError

from propextract.core.errors import DatasetLoadError
from propextract.schemas.models import BenchmarkCacheEntry, DatasetMetadata

logger = logging.getLogger(__name__)

DEFAULT_CACHE_SIZE: Final[int] = 100
DEFAULT_DATASET_PATH: Final[Path] = Path("data/sample/hud_rental_data.json")
SOURCE_LABEL: Final[str] = "HUD"
BEDROOM_RANGE: Final[range] = range(0, 5)

DatasetLoader = Callable[[], Mapping[str, Any]]


# =========================
# Loaders
# =========================


def json_file_loader(path: str | Path) -> DatasetLoader:
    """Loader reading the dataset from a local JSON file."""
    p = Path(path)

    def _load() -> Mapping[str, Any]:
        try:
            return json.loads(p.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as exc:
            raise DatasetLoadError(f"Failed to load rent benchmark data from {p}: {exc}") from exc

    return _load


def url_loader(url: str, *, timeout: float = 15.0) -> DatasetLoader:
    """Loader fetching the dataset over HTTP(S)."""

    def _load() -> Mapping[str, Any]:
        try:
            resp = requests.get(url, timeout=timeout)
            resp.raise_for_status()
            return resp.json()
        except (requests.RequestException, ValueError) as exc:
            raise DatasetLoadError(f"Failed to load rent benchmark data from {url}: {exc}") from exc

    return _load


def loader_for(source: str | Path) -> DatasetLoader:
    s = str(source)
    if s.startswith(("http://", "https://")):
        return url_loader(s)
    return json_file_loader(s)


# =========================
# Helpers
# =========================


def normalize_zip(zip_code: str | int | None) -> str | None:
    """
    "43205-1234" → "43205", "501" → "00501", 501 → "00501", "00501" → "00501".

    Returns None for anything that is not at most five digits.
    """
    if zip_code is None or isinstance(zip_code, bool):
        return None
    head = str(zip_code).strip().split("-", 1)[0].strip()
    if not head.isdigit() or len(head) > 5:
        return None
    return head.zfill(5)


def cache_key(zip_code: str, bedrooms: int) -> str:
    return f"{zip_code}-{bedrooms}"


def _optional_str(value: Any) -> str | None:
    if value is None or isinstance(value, (dict, list)):
        return None
    return str(value).strip() or None


# =========================
# Cache
# =========================


class RentBenchmarkCache:
    """
    Lazily-loaded benchmark dataset plus a bounded FIFO cache of hits.

    The dataset loads once (concurrent first callers share one load). A failed
    load raises DatasetLoadError and leaves the cache uninitialized so the next
    call retries. Misses are never cached.
    """

    def __init__(self, loader: DatasetLoader | None = None, *, capacity: int = DEFAULT_CACHE_SIZE) -> None:
        if capacity < 1:
            raise ValueError("capacity must be >= 1")
        self._loader = loader or json_file_loader(DEFAULT_DATASET_PATH)
        self._capacity = capacity
        self._dataset: Mapping[str, Any] | None = None
        self._metadata: DatasetMetadata | None = None
        self._entries: OrderedDict[str, BenchmarkCacheEntry] = OrderedDict()
        self._lock = asyncio.Lock()

    # ---------- State ----------

    @property
    def initialized(self) -> bool:
        return self._dataset is not None

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def metadata(self) -> DatasetMetadata | None:
        return self._metadata

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def keys(self) -> list[str]:
        """Cached keys, oldest first."""
        return list(self._entries)

    def clear_cache(self) -> None:
        """Drop cached entries; the loaded dataset is kept."""
        self._entries.clear()

    # ---------- Loading ----------

    async def initialize(self) -> None:
        if self._dataset is not None:
            return
        async with self._lock:
            if self._dataset is not None:
                return
            try:
                raw = await asyncio.to_thread(self._loader)
            except DatasetLoadError:
                logger.error("Rent benchmark dataset failed to load")
                raise
            except Exception as exc:  # noqa: BLE001
                logger.error("Rent benchmark dataset failed to load: %s", exc)
                raise DatasetLoadError(f"Failed to load rent benchmark data: {exc}") from exc

            if not isinstance(raw, Mapping):
                raise DatasetLoadError(f"Rent benchmark dataset must be an object, got {type(raw).__name__}")

            self._metadata = self._parse_metadata(raw.get("metadata"))
            self._dataset = raw
            logger.info(
                "Rent benchmark dataset loaded (%d zip codes, lastUpdated=%s)",
                len(self._zip_table()),
                self._metadata.last_updated if self._metadata else None,
            )

    @staticmethod
    def _parse_metadata(raw: Any) -> DatasetMetadata | None:
        if not isinstance(raw, Mapping):
            return None
        try:
            return DatasetMetadata.model_validate(raw)
        except ValidationError as exc:
            logger.warning("Ignoring malformed dataset metadata: %s", exc)
            return None

    def _zip_table(self) -> Mapping[str, Any]:
        data = (self._dataset or {}).get("data")
        table = data.get("zip_codes") if isinstance(data, Mapping) else None
        return table if isinstance(table, Mapping) else {}

    # ---------- Lookup ----------

    async def get(self, zip_code: str | int, bedrooms: int) -> BenchmarkCacheEntry | None:
        """Benchmark rent for (zip, bedrooms), or None when the dataset has no value."""
        await self.initialize()

        zip5 = normalize_zip(zip_code)
        if zip5 is None or bedrooms not in BEDROOM_RANGE:
            logger.debug("No benchmark lookup for zip=%r bedrooms=%r", zip_code, bedrooms)
            return None

        key = cache_key(zip5, bedrooms)
        hit = self._entries.get(key)
        if hit is not None:
            return hit

        entry = self._lookup(zip5, bedrooms)
        if entry is None:
            logger.debug("No benchmark rent for %s", key)
            return None

        self._store(key, entry)
        return entry

    def _lookup(self, zip5: str, bedrooms: int) -> BenchmarkCacheEntry | None:
        row = self._zip_table().get(zip5)
        if not isinstance(row, Mapping):
            return None
        rents = row.get("rents")
        if not isinstance(rents, Mapping):
            return None
        rent = rents.get(f"{bedrooms}BR")
        if isinstance(rent, bool) or not isinstance(rent, (int, float)) or rent <= 0:
            return None

        return BenchmarkCacheEntry(
            zip_code=zip5,
            bedrooms=bedrooms,
            rent=float(rent),
            area_name=_optional_str(row.get("area_name")),
            area_code=_optional_str(row.get("area_code")),
            source_label=SOURCE_LABEL,
            dataset_version_date=self._metadata.last_updated if self._metadata else None,
        )

    def _store(self, key: str, entry: BenchmarkCacheEntry) -> None:
        if len(self._entries) >= self._capacity:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted benchmark cache entry %s", evicted)
        self._entries[key] = entry


__all__ = [
    "DEFAULT_CACHE_SIZE",
    "DEFAULT_DATASET_PATH",
    "DatasetLoader",
    "RentBenchmarkCache",
    "cache_key",
    "json_file_loader",
    "loader_for",
    "normalize_zip",
    "url_loader",
]
