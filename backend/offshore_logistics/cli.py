"""offshore-logistics CLI: normalize logistics exports and compute derived metrics.

Commands:
  normalize : normalize one CSV export and report diagnostics
  metric    : compute a derived metric over a normalized CSV export
  catalog   : list reference facilities and their LC pools
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from offshore_logistics.config import settings

app = typer.Typer(
    name="offshore-logistics",
    help="Normalization, classification and derived metrics for offshore logistics exports.",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
console = Console()


@app.callback()
def main(
    catalog: Optional[Path] = typer.Option(None, "--catalog", help="Reference catalog YAML (overrides the bundled one)"),
):
    """Configure logging and load the reference catalog."""
    logging.basicConfig(level=settings.LOG_LEVEL)
    from offshore_logistics.modules.catalog import CatalogLoadFailure, reload_catalog

    try:
        reload_catalog(catalog)
    except CatalogLoadFailure as e:
        console.print(f"[red]Cannot load reference catalog: {e}[/red]")
        raise typer.Exit(2)


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.command("normalize")
def normalize_cmd(
    csv_path: Path = typer.Argument(..., help="CSV export to normalize"),
    source: str = typer.Option(..., "--source", "-s", help="Source type, e.g. cost_allocation, voyage_event"),
    limit: int = typer.Option(settings.MAX_DIAGNOSTICS_REPORTED, "--limit", help="Max diagnostics to print"),
):
    """Normalize a CSV export and print a summary with diagnostics."""
    from offshore_logistics.modules.ingest import summarize

    records, diagnostics = _load(csv_path, source)
    summary = summarize(records, diagnostics)

    console.print(
        f"[bold]{csv_path.name}[/bold]: {summary['records']} record(s), "
        f"{summary['rejected']} rejected, {summary['duplicates']} duplicate(s) dropped"
    )
    if not diagnostics:
        console.print("[green]No diagnostics.[/green]")
        return

    table = Table(title=f"Diagnostics ({len(diagnostics)})")
    table.add_column("Row", style="cyan")
    table.add_column("Severity")
    table.add_column("Reason")
    table.add_column("Field")
    table.add_column("Detail")
    colors = {"error": "red", "warning": "yellow", "info": "dim"}
    for d in diagnostics[:limit]:
        color = colors[d.severity.value]
        table.add_row(
            str(d.row_index),
            f"[{color}]{d.severity.value}[/{color}]",
            d.reason.value,
            d.field or "",
            d.detail or "",
        )
    console.print(table)
    if len(diagnostics) > limit:
        console.print(f"[dim]... {len(diagnostics) - limit} more not shown[/dim]")


@app.command("metric")
def metric_cmd(
    name: str = typer.Argument(..., help="Metric name, e.g. npt, vessel_delivery_capability"),
    csv_path: Path = typer.Argument(..., help="CSV export the metric is computed over"),
    source: str = typer.Option(..., "--source", "-s", help="Source type of the CSV"),
    facility: Optional[List[str]] = typer.Option(None, "--facility", "-f", help="Restrict to facility id(s)"),
    month: Optional[List[str]] = typer.Option(None, "--month", "-m", help="Restrict to YYYY-MM month(s)"),
    window_start: Optional[str] = typer.Option(None, "--window-start", help="Capability window first month"),
    window_months: Optional[int] = typer.Option(None, "--window-months", help="Capability window length"),
):
    """Compute one derived metric and print the result with its breakdown."""
    from offshore_logistics.modules.metrics import UnknownMetricError, compute_metric
    from offshore_logistics.schemas.metric import ScopeFilter

    records, _ = _load(csv_path, source)
    scope = ScopeFilter(
        facility_ids=frozenset(facility or ()),
        months=frozenset(month or ()),
        window_start=window_start,
        window_months=window_months,
    )
    try:
        result = compute_metric(name, records, scope)
    except UnknownMetricError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    console.print(f"[bold]{result.metric_name}[/bold] ({result.scope}): "
                  f"[green]{result.value:,.2f}[/green] {result.unit}")
    console.print(f"  Filters: {', '.join(result.filters_applied)}")
    if result.breakdown:
        table = Table(title="Breakdown")
        table.add_column("Key", style="cyan")
        table.add_column("Value", justify="right")
        for key in sorted(result.breakdown):
            table.add_row(key, f"{result.breakdown[key]:,.2f}")
        console.print(table)


@app.command("catalog")
def catalog_cmd():
    """List reference facilities with their drilling and production LC pools."""
    from offshore_logistics.modules.catalog import get_catalog

    catalog = get_catalog()
    table = Table(title=f"Facilities ({len(catalog.facilities)})")
    table.add_column("ID", style="cyan")
    table.add_column("Name")
    table.add_column("Type")
    table.add_column("Drilling LCs")
    table.add_column("Production LCs")
    for facility in sorted(catalog.facilities.values(), key=lambda f: f.sort_order):
        drilling, production = catalog.effective_lc_sets(facility.id)
        table.add_row(
            facility.id,
            facility.name,
            facility.facility_type.value,
            ", ".join(sorted(drilling)) or "-",
            ", ".join(sorted(production)) or "-",
        )
    console.print(table)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _load(csv_path: Path, source: str):
    """Read and normalize a CSV export, exiting with a message on bad input."""
    from offshore_logistics.modules.ingest import UnknownSourceTypeError, normalize, read_csv_rows

    if not csv_path.exists():
        console.print(f"[red]File not found: {csv_path}[/red]")
        raise typer.Exit(1)
    rows = read_csv_rows(csv_path)
    try:
        return normalize(rows, source)
    except UnknownSourceTypeError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
