"""Data models for the vehicle tax estimator."""

from vehicletax.models.enums import VehicleCategory
from vehicletax.models.estimate import EstimateRequest, EstimateResult
from vehicletax.models.tables import DepreciationBand, RateTables, TaxRateBand

__all__ = [
    "DepreciationBand",
    "EstimateRequest",
    "EstimateResult",
    "RateTables",
    "TaxRateBand",
    "VehicleCategory",
]
