"""Report generation for the vehicle tax estimator."""

from vehicletax.reports.estimate_summary import EstimateSummaryGenerator

__all__ = ["EstimateSummaryGenerator"]
