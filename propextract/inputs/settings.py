# propextract/inputs/settings.py
"""
Settings loader for the listing extractor.

JSON shape (all keys optional)
------------------------------
{
  "script_id": "__NEXT_DATA__",
  "benchmark_source": "data/sample/hud_rental_data.json",
  "benchmark_cache_size": 100,
  "timeout_s": 10.0,
  "require_fields": false,
  "debug": false
}

Environment overrides (optional)
--------------------------------
- PROPX_SCRIPT_ID         -> script_id
- PROPX_BENCHMARK_SOURCE  -> benchmark_source (path or http(s) URL)
- PROPX_CACHE_SIZE        -> benchmark_cache_size (int)
- PROPX_TIMEOUT           -> timeout_s (float)
- PROPX_REQUIRE_FIELDS    -> require_fields (1/true/yes)
- PROPX_DEBUG             -> debug (1/true/yes)

Unparseable env values are ignored and the file/default value is kept.

Public API
----------
- class SettingsLoader:
    - load(path: str | Path | None) -> ExtractionSettings
    - load_json(text: str) -> ExtractionSettings
    - with_overrides(settings, **kwargs) -> ExtractionSettings
- function load_settings(path) -> ExtractionSettings  (convenience)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, cast

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from propextract.core.blob import DEFAULT_SCRIPT_ID
from propextract.market.rent_benchmarks import DEFAULT_CACHE_SIZE, DEFAULT_DATASET_PATH

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

# ----------------------------
# Model
# ----------------------------


class ExtractionSettings(BaseModel):
    """Runtime options for one extraction session."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    script_id: str = Field(DEFAULT_SCRIPT_ID, min_length=1, description="id of the embedded JSON script element.")
    benchmark_source: str = Field(
        str(DEFAULT_DATASET_PATH), description="Rent benchmark dataset: local JSON path or http(s) URL."
    )
    benchmark_cache_size: int = Field(DEFAULT_CACHE_SIZE, ge=1, le=100_000)
    timeout_s: float | None = Field(None, gt=0, description="Overall extraction timeout; None disables it.")
    require_fields: bool = Field(False, description="Reject listings missing price/beds/baths/type/zip.")
    debug: bool = False


# ----------------------------
# Loader
# ----------------------------


def _parse_bool(raw: str) -> bool | None:
    v = raw.strip().lower()
    if v in _TRUTHY:
        return True
    if v in _FALSY:
        return False
    return None


@dataclass(frozen=True)
class SettingsLoader:
    """
    File-first settings loader with light env overrides.

    Default search (when path=None): ./config.json, else built-in defaults.
    """

    env_prefix: str = "PROPX_"

    # ---------- Public API ----------

    def load(self, path: str | Path | None = None) -> ExtractionSettings:
        p = self._resolve_path(path)
        raw: dict[str, Any] = self._read_json_file(p) if p is not None else {}
        settings = self._parse_root(raw)
        return self._apply_env_overrides(settings)

    def load_json(self, text: str) -> ExtractionSettings:
        try:
            raw = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON payload: {e}") from e
        if not isinstance(raw, dict):
            raise ValueError("Settings JSON must be an object")
        return self._apply_env_overrides(self._parse_root(raw))

    def with_overrides(self, settings: ExtractionSettings, **kwargs: Any) -> ExtractionSettings:
        """Return a new settings object with the non-None overrides applied."""
        updates = {k: v for k, v in kwargs.items() if v is not None}
        if not updates:
            return settings
        try:
            return ExtractionSettings.model_validate({**settings.model_dump(), **updates})
        except ValidationError as e:
            raise ValueError(f"Settings validation failed:\n{e}") from e

    # ---------- Internals ----------

    def _resolve_path(self, path: str | Path | None) -> Path | None:
        if path is not None:
            p = Path(path)
            if not p.exists():
                raise FileNotFoundError(f"Settings file not found: {p}")
            return p
        candidate = Path("config.json")
        return candidate if candidate.exists() else None

    def _read_json_file(self, p: Path) -> dict[str, Any]:
        if p.suffix.lower() != ".json":
            raise ValueError(f"Unsupported settings format for {p.name}; only .json is supported.")
        try:
            data = json.loads(p.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {p}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings in {p} must be a JSON object")
        return cast(dict[str, Any], data)

    def _parse_root(self, data: dict[str, Any]) -> ExtractionSettings:
        try:
            return ExtractionSettings.model_validate(data)
        except ValidationError as e:
            raise ValueError(f"Settings validation failed:\n{e}") from e

    def _apply_env_overrides(self, settings: ExtractionSettings) -> ExtractionSettings:
        prefix = self.env_prefix
        updates: dict[str, Any] = {}

        script_id = os.getenv(f"{prefix}SCRIPT_ID")
        if script_id and script_id.strip():
            updates["script_id"] = script_id.strip()

        source = os.getenv(f"{prefix}BENCHMARK_SOURCE")
        if source and source.strip():
            updates["benchmark_source"] = source.strip()

        cache_size = os.getenv(f"{prefix}CACHE_SIZE")
        if cache_size:
            try:
                size = int(cache_size)
                if size >= 1:
                    updates["benchmark_cache_size"] = size
            except ValueError:
                pass

        timeout = os.getenv(f"{prefix}TIMEOUT")
        if timeout:
            try:
                value = float(timeout)
                if value > 0:
                    updates["timeout_s"] = value
            except ValueError:
                pass

        for env_name, key in (("REQUIRE_FIELDS", "require_fields"), ("DEBUG", "debug")):
            raw = os.getenv(f"{prefix}{env_name}")
            flag = _parse_bool(raw) if raw else None
            if flag is not None:
                updates[key] = flag

        if not updates:
            return settings
        return settings.model_copy(update=updates)


# ----------------------------
# Convenience function
# ----------------------------


def load_settings(path: str | Path | None = None) -> ExtractionSettings:
    """Convenience wrapper for one-shot callers."""
    return SettingsLoader().load(path)


__all__ = ["ExtractionSettings", "SettingsLoader", "load_settings"]
