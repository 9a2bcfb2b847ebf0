"""Estimate request and result models."""

from decimal import Decimal

from pydantic import BaseModel, Field

from vehicletax.models.enums import VehicleCategory
from vehicletax.models.tables import DepreciationBand, TaxRateBand


class EstimateRequest(BaseModel):
    category: VehicleCategory
    original_cost: Decimal  # invoice price, INR; must be > 0
    age_years: Decimal  # from first registration; must be >= 0


class EstimateResult(BaseModel):
    category: VehicleCategory
    original_cost: Decimal
    age_years: Decimal
    depreciation_band: DepreciationBand
    tax_rate_band: TaxRateBand
    applied_depreciation_fraction: Decimal
    applied_tax_rate: Decimal
    depreciated_value: Decimal = Field(ge=0)
    estimated_tax: Decimal = Field(ge=0)
    breakdown_text: str
    disclaimer: str
