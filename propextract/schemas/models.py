# propextract/schemas/models.py

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from propextract.schemas.labels import PropertyType

# =========================
# Selector configuration
# =========================


class Selector(BaseModel):
    """
    One candidate location in the rendered page.

    `css` is passed to BeautifulSoup's select_one(). When `attr` is set the
    attribute value is read (e.g. meta[content], input[value]); otherwise the
    element's visible text is used.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    css: str = Field(..., description="CSS selector for the candidate element.")
    attr: str | None = Field(None, description="Attribute to read instead of the element text.")
    label: str = Field("", description="Short name used in log lines.")


# =========================
# Per-field composite results
# =========================


class BedBathData(BaseModel):
    """Bedrooms and bathrooms are extracted together; either may be absent."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    bedrooms: int | None = Field(None, ge=0)
    bathrooms: float | None = Field(None, ge=0, description="Half baths allowed (e.g. 1.5).")

    @property
    def complete(self) -> bool:
        return self.bedrooms is not None and self.bathrooms is not None


class PropertyTaxData(BaseModel):
    """Property tax expressed as a percentage rate and/or a monthly amount."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    rate: float | None = Field(None, ge=0, description="Annual tax as a percentage of price (1.37 = 1.37%).")
    monthly_amount: float | None = Field(None, ge=0, description="Monthly property tax (currency units).")

    @property
    def empty(self) -> bool:
        return self.rate is None and self.monthly_amount is None


# =========================
# Rent benchmarks
# =========================


class DatasetMetadata(BaseModel):
    """Header of the static rent-benchmark dataset."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    last_updated: str | None = Field(None, alias="lastUpdated")
    version: str | None = None
    source: str | None = None
    description: str | None = None
    record_count: int | None = Field(None, alias="recordCount", ge=0)


class BenchmarkCacheEntry(BaseModel):
    """
    Benchmark rent for one (zip, bedroom count) pair.

    Created on the first successful dataset lookup and never mutated afterwards.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    zip_code: str = Field(..., min_length=5, max_length=5)
    bedrooms: int = Field(..., ge=0)
    rent: float = Field(..., gt=0, description="Monthly benchmark rent.")
    area_name: str | None = None
    area_code: str | None = None
    source_label: str = Field("HUD", description="Provenance of the benchmark.")
    dataset_version_date: str | None = Field(None, description="Dataset metadata.lastUpdated.")

    def summary(self) -> str:
        area = f" ({self.area_name})" if self.area_name else ""
        return f"[{self.source_label}] {self.zip_code} {self.bedrooms}BR: ${self.rent:,.0f}/mo{area}"


# =========================
# Extraction output
# =========================


class PropertyRecord(BaseModel):
    """
    Facts extracted from a single listing page. Every field is independently
    optional; None means neither source produced a valid value.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    price: float | None = Field(None, ge=0)
    bedrooms: int | None = Field(None, ge=0)
    bathrooms: float | None = Field(None, ge=0)
    property_type: PropertyType | None = None
    square_feet: int | None = Field(None, gt=0)
    zip_code: str | None = Field(None, description="Five digits, left-zero-padded.")
    rent_estimate: float | None = Field(None, ge=0, description="Primary rent signal from the page.")
    secondary_rent_estimate: float | None = Field(
        None, ge=0, description="Benchmark rent, only looked up when rent_estimate is absent."
    )
    secondary_rent_source: BenchmarkCacheEntry | None = Field(
        None, description="Benchmark row that produced secondary_rent_estimate."
    )
    property_tax_rate: float | None = Field(None, ge=0)
    monthly_property_tax: float | None = Field(None, ge=0)
    hoa_fees: float | None = Field(None, ge=0)
    units: int | None = Field(None, gt=0)
    address: str | None = None

    @field_validator("zip_code")
    @classmethod
    def _five_digits(cls, v: str | None) -> str | None:
        if v is not None and not (len(v) == 5 and v.isdigit()):
            raise ValueError("zip_code must be exactly 5 digits")
        return v

    @property
    def effective_rent(self) -> float | None:
        """Primary rent if present, else the benchmark rent."""
        if self.rent_estimate is not None:
            return self.rent_estimate
        return self.secondary_rent_estimate

    def missing_fields(self, names: tuple[str, ...]) -> list[str]:
        return [n for n in names if getattr(self, n) is None]

    def summary(self) -> str:
        bits: list[str] = []
        if self.address:
            bits.append(self.address)
        if self.price is not None:
            bits.append(f"price=${self.price:,.0f}")
        if self.bedrooms is not None:
            bits.append(f"{self.bedrooms} bd")
        if self.bathrooms is not None:
            bits.append(f"{self.bathrooms:g} ba")
        if self.square_feet is not None:
            bits.append(f"{self.square_feet:,} sqft")
        if self.property_type is not None:
            bits.append(self.property_type.value)
        if self.units is not None:
            bits.append(f"{self.units} units")
        rent = self.effective_rent
        if rent is not None:
            tag = "" if self.rent_estimate is not None else " (benchmark)"
            bits.append(f"rent=${rent:,.0f}/mo{tag}")
        return " | ".join(bits) if bits else "PropertyRecord: (no key facts)"
