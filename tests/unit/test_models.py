# tests/unit/test_models.py

from __future__ import annotations

import pytest
from pydantic import ValidationError

from propextract.core.errors import InvalidListingError
from propextract.schemas.labels import PropertyType, detect_property_type, map_home_type
from propextract.schemas.models import BenchmarkCacheEntry, DatasetMetadata, PropertyRecord


def _entry(**kw) -> BenchmarkCacheEntry:
    base = dict(zip_code="43205", bedrooms=3, rent=1600, area_name="Columbus, OH", area_code="METRO18140M18140")
    base.update(kw)
    return BenchmarkCacheEntry(**base)


def test_property_record_is_frozen_and_all_optional():
    rec = PropertyRecord()
    assert rec.price is None and rec.secondary_rent_estimate is None
    with pytest.raises(ValidationError):
        rec.price = 1  # type: ignore[misc]


@pytest.mark.parametrize("bad", ["4320", "43205-1234", "abcde"])
def test_property_record_zip_must_be_five_digits(bad):
    with pytest.raises(ValidationError):
        PropertyRecord(zip_code=bad)


def test_effective_rent_prefers_primary_signal():
    assert PropertyRecord(rent_estimate=2100, secondary_rent_estimate=1600).effective_rent == 2100
    assert PropertyRecord(secondary_rent_estimate=1600, secondary_rent_source=_entry()).effective_rent == 1600
    assert PropertyRecord().effective_rent is None


def test_missing_fields_and_policy_message():
    rec = PropertyRecord(price=300000, bedrooms=3)
    missing = rec.missing_fields(("price", "bedrooms", "bathrooms", "zip_code"))
    assert missing == ["bathrooms", "zip_code"]

    err = InvalidListingError(missing)
    assert err.missing == ("bathrooms", "zip_code")
    assert str(err).startswith("This listing appears to be incomplete. Required information is missing")


def test_record_summary():
    rec = PropertyRecord(
        address="123 Main St, Columbus, OH, 43205",
        price=350000,
        bedrooms=3,
        bathrooms=2.5,
        square_feet=1850,
        property_type=PropertyType.single_family,
        secondary_rent_estimate=1600,
        secondary_rent_source=_entry(),
    )
    s = rec.summary()
    assert "price=$350,000" in s
    assert "2.5 ba" in s
    assert "1,850 sqft" in s
    assert "rent=$1,600/mo (benchmark)" in s
    assert PropertyRecord().summary() == "PropertyRecord: (no key facts)"


def test_benchmark_entry_defaults_and_summary():
    e = _entry()
    assert e.source_label == "HUD"
    assert e.summary() == "[HUD] 43205 3BR: $1,600/mo (Columbus, OH)"
    with pytest.raises(ValidationError):
        _entry(rent=0)


def test_dataset_metadata_aliases():
    meta = DatasetMetadata.model_validate({"lastUpdated": "2025-01-15", "recordCount": 10, "columns": ["0BR"]})
    assert meta.last_updated == "2025-01-15"
    assert meta.record_count == 10


def test_home_type_map_and_text_detection():
    assert map_home_type(" condo ") is PropertyType.condo
    assert map_home_type("TOWNHOUSE") is None
    assert map_home_type(None) is None
    assert detect_property_type("Beautiful Multi Family investment") is PropertyType.multi_family
    assert detect_property_type("single family") is None  # labels are matched case-sensitively
