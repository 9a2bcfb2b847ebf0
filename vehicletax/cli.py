"""Typer CLI interface for the Karnataka vehicle tax estimator."""

import json
import logging
from decimal import Decimal
from pathlib import Path
from typing import Any

import typer

from vehicletax.explain import DEFAULT_MODEL
from vehicletax.models.tables import RateTables

app = typer.Typer(
    name="vehicletax",
    help="Karnataka lifetime road-tax estimator for vehicles registered in other states.",
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """Karnataka lifetime road-tax estimator for vehicles registered in other states."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )


class _DecimalEncoder(json.JSONEncoder):
    """JSON encoder that serializes Decimal as string."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, Decimal):
            return str(obj)
        return super().default(obj)


def _load_tables(tables_path: Path | None) -> RateTables:
    """Return the built-in tables, or a validated JSON override."""
    from pydantic import ValidationError

    from vehicletax.engines.rates import DEFAULT_RATE_TABLES, load_rate_tables

    if tables_path is None:
        return DEFAULT_RATE_TABLES
    if not tables_path.exists():
        typer.echo(f"Error: rate table file not found: {tables_path}", err=True)
        raise typer.Exit(1)
    try:
        return load_rate_tables(tables_path)
    except ValidationError as exc:
        typer.echo(f"Error: invalid rate table file {tables_path}:\n{exc}", err=True)
        raise typer.Exit(1)
    except (OSError, UnicodeDecodeError) as exc:
        typer.echo(f"Error: cannot read rate table file {tables_path}: {exc}", err=True)
        raise typer.Exit(1)


@app.command()
def estimate(
    category: str = typer.Argument(..., help="Vehicle type: Car or Motorcycle"),
    cost: str = typer.Option(
        ..., "--cost", "-c", help="Original vehicle cost (invoice price in INR)"
    ),
    age: str = typer.Option(
        ..., "--age", "-a", help="Age of vehicle in years, from first registration"
    ),
    output_format: str = typer.Option(
        "table",
        "--format",
        "-f",
        help="Output format: table, text, json",
    ),
    tables_path: Path | None = typer.Option(
        None, "--tables", help="JSON file overriding the built-in depreciation and tax-rate tables"
    ),
    explain: bool = typer.Option(
        False, "--explain", help="Add a plain-language explanation written by Claude"
    ),
    model: str = typer.Option(
        DEFAULT_MODEL,
        "--model",
        "-m",
        help="Claude model used by --explain",
    ),
) -> None:
    """Estimate the lifetime tax for a vehicle re-registered in Karnataka."""
    from vehicletax.engines.estimator import VehicleTaxEstimator, parse_request
    from vehicletax.exceptions import InvalidInputError, OutOfDomainError

    fmt = output_format.lower()
    if fmt not in ("table", "text", "json"):
        typer.echo(f"Error: unknown format {output_format!r}. Use table, text or json.", err=True)
        raise typer.Exit(1)

    tables = _load_tables(tables_path)

    try:
        request = parse_request(category, cost, age)
        result = VehicleTaxEstimator(tables).estimate(request)
    except InvalidInputError as exc:
        typer.echo(f"Error: {exc.message}", err=True)
        raise typer.Exit(1)
    except OutOfDomainError as exc:
        logging.getLogger(__name__).error("Estimate failed: %s", exc)
        typer.echo("Error: the estimate could not be computed. Please try again later.", err=True)
        raise typer.Exit(2)

    explanation: str | None = None
    if explain:
        from vehicletax.exceptions import ExplanationError
        from vehicletax.explain import Explainer

        try:
            explanation = Explainer(model=model).explain(result)
        except ExplanationError as exc:
            typer.echo(f"Warning: {exc}", err=True)

    if fmt == "json":
        payload = result.model_dump()
        if explanation is not None:
            payload["explanation"] = explanation
        typer.echo(json.dumps(payload, cls=_DecimalEncoder, indent=2, default=str))
        return

    if fmt == "text":
        from vehicletax.reports.estimate_summary import EstimateSummaryGenerator

        typer.echo(EstimateSummaryGenerator().render(result))
    else:
        from rich.console import Console

        from vehicletax.form import display_estimate

        display_estimate(result, Console())

    if explanation is not None:
        typer.echo("")
        typer.echo("Explanation")
        typer.echo(explanation)


@app.command()
def tables(
    tables_path: Path | None = typer.Option(
        None, "--tables", help="JSON file overriding the built-in depreciation and tax-rate tables"
    ),
) -> None:
    """Show the depreciation and tax-rate tables in use."""
    from rich.console import Console
    from rich.table import Table

    from vehicletax.formatting import format_percent

    rate_tables = _load_tables(tables_path)
    console = Console()

    dep = Table(title="Depreciation (fraction of original cost retained)")
    dep.add_column("Vehicle Age", style="cyan")
    dep.add_column("Retained", justify="right", style="green")
    for band in rate_tables.depreciation:
        dep.add_row(band.label, format_percent(band.fraction))
    console.print(dep)

    for category, bands in rate_tables.tax_rates.items():
        rates = Table(title=f"Tax Rate: {category.label} (by original cost, INR)")
        rates.add_column("Original Cost", style="cyan")
        rates.add_column("Rate", justify="right", style="green")
        for band in bands:
            rates.add_row(band.label, band.rate_label)
        console.print(rates)


@app.command()
def form(
    tables_path: Path | None = typer.Option(
        None, "--tables", help="JSON file overriding the built-in depreciation and tax-rate tables"
    ),
) -> None:
    """Fill in the estimate form interactively."""
    from vehicletax.form import run_form

    run_form(tables=_load_tables(tables_path))


if __name__ == "__main__":
    app()
