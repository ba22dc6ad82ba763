# tests/utils.py
"""
Single source of truth for test pages, structured blobs and benchmark datasets.
Update values here to cascade across the test suite.
"""

from __future__ import annotations

import asyncio
import copy
import json
from collections.abc import Coroutine, Mapping
from pathlib import Path
from typing import Any, TypeVar

from propextract.core.blob import StructuredBlob
from propextract.core.document import PageDocument

T = TypeVar("T")

# -----------------------------
# Global defaults (edit once)
# -----------------------------

DEFAULT_ZIP = "43205"
DEFAULT_ADDRESS = "123 Main St, Columbus, OH 43205"

DEFAULT_PROPERTY: dict[str, Any] = {
    "zpid": 12345,
    "price": 350000,
    "bedrooms": 3,
    "bathrooms": 2,
    "homeType": "SINGLE_FAMILY",
    "livingArea": 1850,
    "zipcode": DEFAULT_ZIP,
    "rentZestimate": 2100,
    "propertyTaxRate": 1.37,
    "taxAnnualAmount": 4800,
    "monthlyHoaFee": 0,
    "description": "Charming 3 bed, 2 bath home close to downtown.",
    "address": {
        "streetAddress": "123 Main St",
        "city": "Columbus",
        "state": "OH",
        "zipcode": DEFAULT_ZIP,
    },
    "resoFacts": {"bedrooms": 3, "bathrooms": 2, "homeType": "SINGLE_FAMILY"},
}

# Rendered markup mirroring DEFAULT_PROPERTY, used when a test needs text-only extraction
DEFAULT_BODY = f"""
<h1 data-testid="detail-address">{DEFAULT_ADDRESS}</h1>
<span data-testid="price">$350,000</span>
<div data-testid="bed-bath-section">3 bd | 2 ba</div>
<div data-testid="bed-bath-sqft-fact-container"><span>1,850</span><span>sqft</span></div>
<span data-testid="rent-zestimate">Rent Zestimate®: $2,100/mo</span>
<span data-testid="property-taxes">$400/mo</span>
<span data-testid="hoa-fees">$0/mo</span>
<div data-testid="description">Charming single family home close to downtown.</div>
"""

DEFAULT_HEAD = """
<meta name="description" content="Single Family home for sale in Columbus, OH.">
<meta property="og:title" content="123 Main St, Columbus, OH 43205 | MLS #1234">
"""


# -----------------------------
# Async helper
# -----------------------------


def run(coro: Coroutine[Any, Any, T]) -> T:
    """Drive one coroutine to completion on a fresh event loop."""
    return asyncio.run(coro)


# -----------------------------
# Page factories
# -----------------------------


def make_property(**overrides: Any) -> dict[str, Any]:
    """DEFAULT_PROPERTY deep copy with top-level overrides; a value of None removes the key."""
    prop = copy.deepcopy(DEFAULT_PROPERTY)
    for k, v in overrides.items():
        if v is None:
            prop.pop(k, None)
        else:
            prop[k] = v
    return prop


def make_next_data(prop: Mapping[str, Any] | None, *, double_encoded: bool = True, cache_key: str = "ForSaleDoubleScrollFullRenderQuery{\"zpid\":12345}") -> str:
    """Outer JSON of script#__NEXT_DATA__ with the client cache optionally string-encoded."""
    records: dict[str, Any] = {"SomeOtherQuery": {"meta": {"ok": True}}}
    if prop is not None:
        records[cache_key] = {"property": prop}
    client_cache: Any = json.dumps(records) if double_encoded else records
    outer = {"props": {"pageProps": {"componentProps": {"gdpClientCache": client_cache}}}, "page": "/homedetails"}
    return json.dumps(outer)


def make_page(
    prop: Mapping[str, Any] | None = None,
    *,
    body: str = "",
    head: str = "",
    double_encoded: bool = True,
    script_id: str = "__NEXT_DATA__",
    raw_script: str | None = None,
) -> str:
    """
    Listing page HTML. `prop` goes into the embedded blob; `raw_script` replaces
    the blob text verbatim (for malformed-JSON cases).
    """
    script = ""
    if raw_script is not None:
        script = f'<script id="{script_id}" type="application/json">{raw_script}</script>'
    elif prop is not None:
        script = f'<script id="{script_id}" type="application/json">{make_next_data(prop, double_encoded=double_encoded)}</script>'
    return f"<html><head>{head}</head><body>{body}{script}</body></html>"


def make_text_only_page(body: str = DEFAULT_BODY, head: str = DEFAULT_HEAD) -> str:
    return make_page(None, body=body, head=head)


def make_document(html: str) -> PageDocument:
    return PageDocument(html)


def make_blob(**overrides: Any) -> StructuredBlob:
    return StructuredBlob(make_property(**overrides))


def write_page(tmp_path: Path, html: str, filename: str = "listing.html") -> Path:
    p = tmp_path / filename
    p.write_text(html, encoding="utf-8")
    return p


# -----------------------------
# Benchmark dataset factories
# -----------------------------

DEFAULT_METADATA: dict[str, Any] = {
    "lastUpdated": "2025-01-15",
    "version": "1.0",
    "source": "HUD FY2025 SAFMRs",
    "description": "HUD Fair Market Rent data by zip code",
    "recordCount": 3,
}


def make_rents(base: int = 1000, *, step: int = 200, **overrides: Any) -> dict[str, Any]:
    """Plain and payment-standard rent columns for 0..4 BR; overrides use keys like BR3=None."""
    rents: dict[str, Any] = {}
    for n in range(5):
        rent = base + n * step
        rents[f"{n}BR"] = rent
        rents[f"{n}BR-90"] = round(rent * 0.9)
        rents[f"{n}BR-110"] = round(rent * 1.1)
    for k, v in overrides.items():
        rents[f"{k[2:]}BR"] = v
    return rents


def make_zip_row(area_name: str, area_code: str, rents: Mapping[str, Any]) -> dict[str, Any]:
    return {"area_code": area_code, "area_name": area_name, "rents": dict(rents)}


def make_dataset(zip_codes: Mapping[str, Any] | None = None, *, metadata: Mapping[str, Any] | None = None) -> dict[str, Any]:
    if zip_codes is None:
        zip_codes = {
            "43205": make_zip_row(
                "Columbus, OH HUD Metro FMR Area",
                "METRO18140M18140",
                {"0BR": 950, "1BR": 1060, "2BR": 1290, "3BR": 1600, "3BR-90": 1440, "3BR-110": 1760, "4BR": 1880},
            ),
            "00501": make_zip_row("Nassau County-Suffolk County, NY", "METRO35620MM5380", make_rents(2100)),
            "94110": make_zip_row("San Francisco, CA", "METRO41860MM7360", make_rents(2500, BR4=0, BR2=None)),
        }
    return {"metadata": dict(metadata or DEFAULT_METADATA), "data": {"zip_codes": dict(zip_codes)}}


def make_wide_dataset(n: int, *, start: int = 10000) -> dict[str, Any]:
    """`n` consecutive zips (start, start+1, ...) each with a full rent table."""
    rows = {str(start + i).zfill(5): make_zip_row(f"Area {i}", f"AREA{i:04d}", make_rents(900 + i)) for i in range(n)}
    return make_dataset(rows)


class CountingLoader:
    """In-memory dataset loader that records how often it was called and can fail on demand."""

    def __init__(self, dataset: Mapping[str, Any] | None = None, *, failures: int = 0) -> None:
        self.dataset = dataset if dataset is not None else make_dataset()
        self.failures = failures
        self.calls = 0

    def __call__(self) -> Mapping[str, Any]:
        self.calls += 1
        if self.calls <= self.failures:
            raise OSError("dataset unavailable")
        return self.dataset


def write_dataset(tmp_path: Path, dataset: Mapping[str, Any] | None = None, filename: str = "hud_rental_data.json") -> Path:
    p = tmp_path / filename
    p.write_text(json.dumps(dataset if dataset is not None else make_dataset()), encoding="utf-8")
    return p
