"""Depreciation and tax-rate band models.

Every band is closed on its lower bound and open on its upper bound. The last
band of each list has no upper bound, so a validated list covers [0, inf).
"""

from collections.abc import Mapping
from decimal import Decimal
from types import MappingProxyType

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    field_serializer,
    field_validator,
    model_validator,
)

from vehicletax.exceptions import OutOfDomainError
from vehicletax.formatting import format_number, format_percent, plain
from vehicletax.models.enums import VehicleCategory


class DepreciationBand(BaseModel):
    """Vehicle age range mapped to the fraction of original cost retained."""

    model_config = ConfigDict(frozen=True)

    min_age: Decimal = Field(ge=0)
    max_age: Decimal | None = None
    fraction: Decimal = Field(gt=0, le=1)

    def contains(self, age_years: Decimal) -> bool:
        return self.min_age <= age_years and (self.max_age is None or age_years < self.max_age)

    @property
    def label(self) -> str:
        if self.max_age is None:
            return f"{plain(self.min_age)} years and more"
        if self.min_age == 0:
            return f"Less than {plain(self.max_age)} years"
        return f"{plain(self.min_age)} to {plain(self.max_age)} years"


class TaxRateBand(BaseModel):
    """Original-cost range mapped to a lifetime tax rate."""

    model_config = ConfigDict(frozen=True)

    min_cost: Decimal = Field(ge=0)
    max_cost: Decimal | None = None
    rate: Decimal = Field(gt=0, le=1)

    def contains(self, cost: Decimal) -> bool:
        return self.min_cost <= cost and (self.max_cost is None or cost < self.max_cost)

    @property
    def label(self) -> str:
        # Bounds are whole rupees, so [500001, 1000001) reads "5,00,001 to 10,00,000"
        if self.max_cost is None:
            return f"Above {format_number(self.min_cost - 1)}" if self.min_cost > 0 else "Any cost"
        upper = format_number(self.max_cost - 1)
        if self.min_cost == 0:
            return f"Up to {upper}"
        return f"{format_number(self.min_cost)} to {upper}"

    @property
    def rate_label(self) -> str:
        return format_percent(self.rate)


def _check_partition(bands: list, lower: str, upper: str, what: str) -> None:
    """Bands must start at 0, abut exactly, and end unbounded."""
    if not bands:
        raise ValueError(f"{what} has no bands")
    if getattr(bands[0], lower) != 0:
        raise ValueError(f"{what} must start at 0")
    for prev, band in zip(bands, bands[1:]):
        prev_upper = getattr(prev, upper)
        if prev_upper is None:
            raise ValueError(f"{what}: only the last band may be unbounded")
        if getattr(band, lower) != prev_upper:
            raise ValueError(
                f"{what}: band starting at {getattr(band, lower)} does not "
                f"continue from {prev_upper}"
            )
    for band in bands:
        band_upper = getattr(band, upper)
        if band_upper is not None and band_upper <= getattr(band, lower):
            raise ValueError(f"{what}: empty band at {getattr(band, lower)}")
    if getattr(bands[-1], upper) is not None:
        raise ValueError(f"{what}: last band must be unbounded")


class RateTables(BaseModel):
    """Immutable depreciation and per-category tax-rate tables."""

    model_config = ConfigDict(frozen=True)

    depreciation: tuple[DepreciationBand, ...]
    tax_rates: dict[VehicleCategory, tuple[TaxRateBand, ...]]

    @field_validator("depreciation")
    @classmethod
    def _depreciation_partitions_ages(
        cls, bands: tuple[DepreciationBand, ...]
    ) -> tuple[DepreciationBand, ...]:
        _check_partition(list(bands), "min_age", "max_age", "Depreciation table")
        return bands

    @field_validator("tax_rates")
    @classmethod
    def _rates_partition_costs(
        cls, tables: dict[VehicleCategory, tuple[TaxRateBand, ...]]
    ) -> Mapping[VehicleCategory, tuple[TaxRateBand, ...]]:
        for category, bands in tables.items():
            _check_partition(list(bands), "min_cost", "max_cost", f"{category} tax-rate table")
        # frozen=True does not cover the dict contents
        return MappingProxyType(dict(tables))

    @field_serializer("tax_rates")
    def _dump_tax_rates(self, tables):
        return dict(tables)

    @model_validator(mode="after")
    def _every_category_has_rates(self) -> "RateTables":
        missing = [c.value for c in VehicleCategory if c not in self.tax_rates]
        if missing:
            raise ValueError(f"No tax-rate table for: {', '.join(missing)}")
        return self

    def depreciation_band_for(self, age_years: Decimal) -> DepreciationBand:
        if age_years < 0:
            raise OutOfDomainError(age_years, "vehicle age")
        for band in self.depreciation:
            if band.contains(age_years):
                return band
        raise OutOfDomainError(age_years, "vehicle age")

    def depreciation_fraction_for(self, age_years: Decimal) -> Decimal:
        return self.depreciation_band_for(age_years).fraction

    def tax_rate_band_for(self, category: VehicleCategory, cost: Decimal) -> TaxRateBand:
        if cost <= 0:
            raise OutOfDomainError(cost, f"{category} cost")
        for band in self.tax_rates.get(category, ()):
            if band.contains(cost):
                return band
        raise OutOfDomainError(cost, f"{category} cost")

    def tax_rate_for(self, category: VehicleCategory, cost: Decimal) -> Decimal:
        return self.tax_rate_band_for(category, cost).rate
