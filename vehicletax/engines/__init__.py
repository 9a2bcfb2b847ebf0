"""Tax computation engines."""

from vehicletax.engines.estimator import VehicleTaxEstimator, estimate, parse_request
from vehicletax.engines.rates import DEFAULT_RATE_TABLES, load_rate_tables

__all__ = [
    "DEFAULT_RATE_TABLES",
    "VehicleTaxEstimator",
    "estimate",
    "load_rate_tables",
    "parse_request",
]
