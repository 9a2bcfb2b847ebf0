"""Estimate summary report generator."""

from pathlib import Path

from jinja2 import Environment, FileSystemLoader

from vehicletax.formatting import format_inr, format_percent, plain
from vehicletax.models.estimate import EstimateResult

TEMPLATE_DIR = Path(__file__).parent / "templates"


class EstimateSummaryGenerator:
    """Generates a human-readable lifetime tax estimate summary."""

    def __init__(self) -> None:
        self.env = Environment(loader=FileSystemLoader(str(TEMPLATE_DIR)))
        self.env.filters["inr"] = format_inr
        self.env.filters["percent"] = format_percent
        self.env.filters["plain"] = plain

    def render(self, result: EstimateResult) -> str:
        """Render the estimate summary report."""
        template = self.env.get_template("estimate_summary.txt")
        return template.render(est=result)
