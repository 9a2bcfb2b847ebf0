"""Karnataka lifetime road-tax tables for vehicles re-registered from other states.

Depreciation is keyed by age from first registration; tax rate is keyed by
vehicle category and ORIGINAL cost (not depreciated value). Never hardcode
bands in computation functions.

Source: Karnataka Motor Vehicles Taxation Act, 1957 (lifetime tax on
vehicles migrating from other states), as published by Karnataka RTOs.
"""

import logging
from decimal import Decimal
from pathlib import Path

from vehicletax.models.enums import VehicleCategory
from vehicletax.models.tables import DepreciationBand, RateTables, TaxRateBand

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Depreciation: [(min_age, max_age, fraction_of_original_cost), ...]
# max_age is exclusive, None for the top band.
# ---------------------------------------------------------------------------
DEPRECIATION_SCHEDULE: list[tuple[Decimal, Decimal | None, Decimal]] = [
    (Decimal("0"), Decimal("2"), Decimal("0.93")),
    (Decimal("2"), Decimal("3"), Decimal("0.87")),
    (Decimal("3"), Decimal("4"), Decimal("0.81")),
    (Decimal("4"), Decimal("5"), Decimal("0.75")),
    (Decimal("5"), Decimal("6"), Decimal("0.69")),
    (Decimal("6"), Decimal("7"), Decimal("0.64")),
    (Decimal("7"), Decimal("8"), Decimal("0.59")),
    (Decimal("8"), Decimal("9"), Decimal("0.54")),
    (Decimal("9"), Decimal("10"), Decimal("0.49")),
    (Decimal("10"), Decimal("11"), Decimal("0.45")),
    (Decimal("11"), Decimal("12"), Decimal("0.40")),
    (Decimal("12"), Decimal("13"), Decimal("0.35")),
    (Decimal("13"), Decimal("14"), Decimal("0.30")),
    (Decimal("14"), Decimal("15"), Decimal("0.25")),
    (Decimal("15"), None, Decimal("0.20")),
]

# ---------------------------------------------------------------------------
# Tax rate by original cost: {category: [(min_cost, max_cost, rate), ...]}
# Published in whole rupees ("Up to 5,00,000", "5,00,001 to 10,00,000",
# "Above 20,00,000"); stored half-open so 500000 -> 13% and 500001 -> 14%.
# Every boundary sits at the next whole rupee, so paise just above a published
# limit stay in the lower band: Car 2000000.50 -> 17%, not 18%.
# ---------------------------------------------------------------------------
TAX_RATE_SCHEDULE: dict[VehicleCategory, list[tuple[Decimal, Decimal | None, Decimal]]] = {
    VehicleCategory.CAR: [
        (Decimal("0"), Decimal("500001"), Decimal("0.13")),
        (Decimal("500001"), Decimal("1000001"), Decimal("0.14")),
        (Decimal("1000001"), Decimal("2000001"), Decimal("0.17")),
        (Decimal("2000001"), None, Decimal("0.18")),
    ],
    VehicleCategory.MOTORCYCLE: [
        (Decimal("0"), Decimal("50001"), Decimal("0.10")),
        (Decimal("50001"), Decimal("100001"), Decimal("0.12")),
        (Decimal("100001"), None, Decimal("0.18")),
    ],
}

DISCLAIMER = (
    "This is an estimate only. The final tax amount is decided by the "
    "Regional Transport Office (RTO) at the time of re-registration."
)


def build_rate_tables(
    depreciation: list[tuple[Decimal, Decimal | None, Decimal]],
    tax_rates: dict[VehicleCategory, list[tuple[Decimal, Decimal | None, Decimal]]],
) -> RateTables:
    """Build validated RateTables from (lower, upper, value) schedules."""
    return RateTables(
        depreciation=tuple(
            DepreciationBand(min_age=lo, max_age=hi, fraction=fraction)
            for lo, hi, fraction in depreciation
        ),
        tax_rates={
            category: tuple(
                TaxRateBand(min_cost=lo, max_cost=hi, rate=rate) for lo, hi, rate in bands
            )
            for category, bands in tax_rates.items()
        },
    )


DEFAULT_RATE_TABLES = build_rate_tables(DEPRECIATION_SCHEDULE, TAX_RATE_SCHEDULE)


def load_rate_tables(path: Path) -> RateTables:
    """Load and validate a JSON table set shaped like RateTables.model_dump(mode="json").

    Raises pydantic.ValidationError if the bands do not partition their domains.
    """
    tables = RateTables.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info(
        "Loaded rate tables from %s: %d depreciation band(s), %d categor(ies)",
        path, len(tables.depreciation), len(tables.tax_rates),
    )
    return tables
