"""Lifetime road-tax estimation engine.

Implements:
  - Depreciated value = original cost x depreciation fraction for the vehicle's age
  - Tax rate lookup by category and ORIGINAL cost (never the depreciated value)
  - Estimated tax = depreciated value x tax rate

Amounts stay unrounded Decimals; rounding is a presentation concern.
"""

import logging
from decimal import Decimal, InvalidOperation

from vehicletax.engines.rates import DEFAULT_RATE_TABLES, DISCLAIMER
from vehicletax.exceptions import InvalidInputError
from vehicletax.formatting import format_amount, format_percent, plain
from vehicletax.models.enums import VehicleCategory
from vehicletax.models.estimate import EstimateRequest, EstimateResult
from vehicletax.models.tables import DepreciationBand, RateTables, TaxRateBand

logger = logging.getLogger(__name__)

COST_MESSAGE = "Please enter a valid vehicle cost."
AGE_MESSAGE = "Please enter a valid vehicle age."
CATEGORY_MESSAGE = "Please choose a vehicle type: " + ", ".join(c.value for c in VehicleCategory)


def _parse_decimal(raw: str | int | float | Decimal, field: str, message: str) -> Decimal:
    if isinstance(raw, Decimal):
        value = raw
    else:
        # Accept "8,50,000" as typed into the form
        text = str(raw).strip().replace(",", "")
        if not text:
            raise InvalidInputError(field, message)
        try:
            value = Decimal(text)
        except InvalidOperation:
            raise InvalidInputError(field, message)
    if not value.is_finite():
        raise InvalidInputError(field, message)
    return value


def parse_category(raw: str | VehicleCategory) -> VehicleCategory:
    """Resolve 'Car', 'car' or 'MOTORCYCLE' to a VehicleCategory."""
    if isinstance(raw, VehicleCategory):
        return raw
    key = str(raw).strip().lower()
    for category in VehicleCategory:
        if key in (category.value.lower(), category.name.lower()):
            return category
    raise InvalidInputError("category", CATEGORY_MESSAGE)


def parse_cost(raw: str | int | float | Decimal) -> Decimal:
    cost = _parse_decimal(raw, "cost", COST_MESSAGE)
    if cost <= 0:
        raise InvalidInputError("cost", COST_MESSAGE)
    return cost


def parse_age(raw: str | int | float | Decimal) -> Decimal:
    age = _parse_decimal(raw, "age_years", AGE_MESSAGE)
    if age < 0:
        raise InvalidInputError("age_years", AGE_MESSAGE)
    return age


def parse_request(
    category: str | VehicleCategory,
    cost: str | int | float | Decimal,
    age_years: str | int | float | Decimal,
) -> EstimateRequest:
    """Validate raw form values into an EstimateRequest.

    Raises:
        InvalidInputError: unknown category, non-numeric value, cost <= 0 or age < 0.
    """
    return EstimateRequest(
        category=parse_category(category),
        original_cost=parse_cost(cost),
        age_years=parse_age(age_years),
    )


class VehicleTaxEstimator:
    """Estimates Karnataka lifetime tax for a vehicle migrating from another state."""

    def __init__(self, tables: RateTables = DEFAULT_RATE_TABLES) -> None:
        self.tables = tables

    def estimate(self, request: EstimateRequest) -> EstimateResult:
        """Compute the estimate for a request.

        Raises:
            InvalidInputError: original_cost <= 0 or age_years < 0.
            OutOfDomainError: the tables have no band for the inputs.
        """
        if request.original_cost <= 0:
            raise InvalidInputError("cost", COST_MESSAGE)
        if request.age_years < 0:
            raise InvalidInputError("age_years", AGE_MESSAGE)

        dep_band = self.tables.depreciation_band_for(request.age_years)
        depreciated_value = request.original_cost * dep_band.fraction

        # Rate band is chosen on the original cost
        rate_band = self.tables.tax_rate_band_for(request.category, request.original_cost)
        estimated_tax = depreciated_value * rate_band.rate

        logger.debug(
            "%s cost=%s age=%s: depreciation band %r (%s), rate band %r (%s)",
            request.category.value, request.original_cost, request.age_years,
            dep_band.label, dep_band.fraction, rate_band.label, rate_band.rate,
        )

        return EstimateResult(
            category=request.category,
            original_cost=request.original_cost,
            age_years=request.age_years,
            depreciation_band=dep_band,
            tax_rate_band=rate_band,
            applied_depreciation_fraction=dep_band.fraction,
            applied_tax_rate=rate_band.rate,
            depreciated_value=depreciated_value,
            estimated_tax=estimated_tax,
            breakdown_text=self.build_breakdown(
                request, dep_band, rate_band, depreciated_value, estimated_tax
            ),
            disclaimer=DISCLAIMER,
        )

    @staticmethod
    def build_breakdown(
        request: EstimateRequest,
        dep_band: DepreciationBand,
        rate_band: TaxRateBand,
        depreciated_value: Decimal,
        estimated_tax: Decimal,
    ) -> str:
        """Step-by-step explanation of the matched bands and the arithmetic."""
        cost = format_amount(request.original_cost)
        value = format_amount(depreciated_value)
        return "\n".join([
            f"Vehicle type: {request.category.label}",
            f"Original cost: INR {cost}",
            f"Vehicle age: {plain(request.age_years)} years",
            "",
            f"1. Depreciation band: {dep_band.label} -> "
            f"{format_percent(dep_band.fraction)} of original cost",
            f"   Depreciated value = {cost} x {plain(dep_band.fraction)} = INR {value}",
            f"2. Tax rate band (on original cost): {rate_band.label} -> "
            f"{format_percent(rate_band.rate)}",
            f"3. Estimated lifetime tax = {value} x {plain(rate_band.rate)} "
            f"= INR {format_amount(estimated_tax)}",
        ])


def estimate(
    category: str | VehicleCategory,
    cost: str | int | float | Decimal,
    age_years: str | int | float | Decimal,
) -> EstimateResult:
    """Parse raw values and estimate with the built-in Karnataka tables."""
    return VehicleTaxEstimator().estimate(parse_request(category, cost, age_years))
