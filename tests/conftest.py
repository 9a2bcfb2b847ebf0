"""Shared test fixtures for the vehicle tax estimator."""

from decimal import Decimal

import pytest

from vehicletax.engines.estimator import VehicleTaxEstimator
from vehicletax.engines.rates import DEFAULT_RATE_TABLES
from vehicletax.models.enums import VehicleCategory
from vehicletax.models.estimate import EstimateRequest, EstimateResult
from vehicletax.models.tables import RateTables


@pytest.fixture
def tables() -> RateTables:
    return DEFAULT_RATE_TABLES


@pytest.fixture
def estimator(tables: RateTables) -> VehicleTaxEstimator:
    return VehicleTaxEstimator(tables)


@pytest.fixture
def car_request() -> EstimateRequest:
    return EstimateRequest(
        category=VehicleCategory.CAR,
        original_cost=Decimal("850000"),
        age_years=Decimal("5"),
    )


@pytest.fixture
def car_result(estimator: VehicleTaxEstimator, car_request: EstimateRequest) -> EstimateResult:
    return estimator.estimate(car_request)
