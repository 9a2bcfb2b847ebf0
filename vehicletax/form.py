"""Interactive estimate form.

Asks for vehicle type, original cost and age, re-asking any field the user
gets wrong, then shows the estimate with its breakdown and disclaimer.
"""

from __future__ import annotations

from decimal import Decimal

from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

from vehicletax.engines.estimator import VehicleTaxEstimator, parse_age, parse_cost
from vehicletax.engines.rates import DEFAULT_RATE_TABLES
from vehicletax.exceptions import InvalidInputError
from vehicletax.formatting import format_inr, format_percent
from vehicletax.models.enums import VehicleCategory
from vehicletax.models.estimate import EstimateRequest, EstimateResult
from vehicletax.models.tables import RateTables

_CATEGORY_CHOICES = [c.value for c in VehicleCategory]


def _prompt_field(label: str, parse, console: Console) -> Decimal:
    """Prompt until *parse* accepts the entry."""
    while True:
        raw = Prompt.ask(label, console=console)
        try:
            return parse(raw)
        except InvalidInputError as exc:
            console.print(f"[red]{exc.message}[/red]")


def display_estimate(result: EstimateResult, console: Console) -> None:
    """Pretty-print an EstimateResult using Rich."""
    table = Table(title="Estimation Result", show_header=False, padding=(0, 1))
    table.add_column("", style="cyan", min_width=24)
    table.add_column("", justify="right", style="green")
    table.add_row("Vehicle Type", result.category.label)
    table.add_row("Original Cost", format_inr(result.original_cost))
    table.add_row(
        "Depreciation",
        f"{result.depreciation_band.label} ({format_percent(result.applied_depreciation_fraction)})",
    )
    table.add_row("Depreciated Value", format_inr(result.depreciated_value))
    table.add_row(
        "Tax Rate",
        f"{result.tax_rate_band.label} ({format_percent(result.applied_tax_rate)})",
    )
    console.print(table)

    console.print(
        Panel(
            f"[bold]Estimated Lifetime Tax:[/bold] "
            f"[bold green]{format_inr(result.estimated_tax)}[/bold green]",
            title="[bold]Summary[/bold]",
            border_style="cyan",
        )
    )
    console.print(Panel(result.breakdown_text, title="Calculation Breakdown", border_style="dim"))
    console.print(f"[dim italic]{result.disclaimer}[/dim italic]")


def run_form(
    console: Console | None = None,
    tables: RateTables = DEFAULT_RATE_TABLES,
) -> EstimateResult:
    """Collect the three form inputs, estimate and display the result."""
    if console is None:
        console = Console()

    console.print(
        Panel(
            "[bold]Karnataka Vehicle Tax Estimator[/bold]\n"
            "For vehicles registered in other states",
            border_style="cyan",
        )
    )
    for category in VehicleCategory:
        console.print(f"  [cyan]{category.value}[/cyan]: {category.label}")

    category = VehicleCategory(
        Prompt.ask("Vehicle type", choices=_CATEGORY_CHOICES, default="Car", console=console)
    )
    cost = _prompt_field("Original vehicle cost (invoice price in INR)", parse_cost, console)
    age = _prompt_field("Age of vehicle (in years, from first registration)", parse_age, console)

    result = VehicleTaxEstimator(tables).estimate(
        EstimateRequest(category=category, original_cost=cost, age_years=age)
    )
    console.print()
    display_estimate(result, console)
    return result
