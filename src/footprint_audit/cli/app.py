# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Main CLI application for footprint-audit."""

from __future__ import annotations

import logging
from typing import Any, Callable, Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from footprint_audit.ai.provider import TextProvider, build_provider
from footprint_audit.analysis.engine import AnalysisEngine, run_analysis
from footprint_audit.analysis.scenario import simulate as simulate_scenario
from footprint_audit.config import Settings, load_settings
from footprint_audit.data.models import (
    SCENARIO_LIMITS,
    BusinessCategory,
    ScenarioInput,
    SustainabilityReport,
    UsageRecord,
)
from footprint_audit.data.reference import ReferenceData, load_reference_data, size_bucket
from footprint_audit.reporting.terminal import TerminalRenderer

CATEGORY_CHOICES = [c.value for c in BusinessCategory]


def _usage_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Attach the usage-record options shared by ``analyze`` and ``simulate``."""
    options = [
        click.option(
            "--business-type", "-b",
            type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
            default="Other",
            help="Business category",
        ),
        click.option("--employees", "-e", type=int, default=1, help="Number of employees"),
        click.option("--revenue", type=float, default=None, help="Yearly revenue (optional)"),
        click.option("--electricity", type=float, default=0.0, help="Monthly electricity (kWh)"),
        click.option("--water", type=float, default=0.0, help="Monthly water (liters)"),
        click.option("--waste", type=float, default=0.0, help="Monthly waste (kg)"),
        click.option("--fuel", type=float, default=0.0, help="Monthly fuel (liters)"),
        click.option(
            "--config", "-c", type=click.Path(), default=None,
            help="Settings YAML file (defaults to $FOOTPRINT_AUDIT_CONFIG)",
        ),
    ]
    for option in reversed(options):
        func = option(func)
    return func


def _build_usage(
    business_type: str,
    employees: int,
    revenue: float | None,
    electricity: float,
    water: float,
    waste: float,
    fuel: float,
) -> UsageRecord:
    return UsageRecord(
        business_type=business_type,
        employees=employees,
        yearly_revenue=revenue,
        electricity_kwh=electricity,
        water_liters=water,
        waste_kg=waste,
        fuel_liters=fuel,
    )


def _load(ctx: click.Context, config: str | None) -> tuple[Settings, ReferenceData]:
    """Load settings and reference tables, exiting with status 1 on failure."""
    console: Console = ctx.obj["console"]
    try:
        settings = load_settings(config)
        reference = load_reference_data(settings.reference_dir)
        # --verbose wins over the configured level
        if not ctx.obj.get("verbose"):
            logging.getLogger("footprint_audit").setLevel(settings.log_level)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]{exc}[/]")
        raise SystemExit(1)
    return settings, reference


def _run_analysis(
    usage: UsageRecord,
    reference: ReferenceData,
    provider: Optional[TextProvider],
    console: Console,
) -> SustainabilityReport:
    """Run a full analysis and return the report."""
    engine = AnalysisEngine(reference)
    message = (
        "[bold cyan]Requesting generated analysis..."
        if provider is not None
        else "[bold cyan]Running static analysis..."
    )
    with console.status(message):
        return run_analysis(usage, engine, provider)


@click.group()
@click.version_option(version="0.1.0")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, no_color: bool, verbose: bool) -> None:
    """footprint-audit: Small-Business Sustainability Analysis

    Estimate the monthly carbon footprint of a small business from its
    utility usage and get:

    \b
      - A footprint score and achievement badge
      - Energy and waste recommendations with ROI
      - A comparison against peer businesses
      - What-if reduction scenarios
    """
    ctx.ensure_object(dict)
    console = Console(no_color=no_color)
    ctx.obj["console"] = console
    ctx.obj["verbose"] = verbose

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True, no_color=no_color))],
        force=True,
    )


@cli.command()
@_usage_options
@click.option("--no-ai", is_flag=True, help="Skip the text provider; static analysis only")
@click.option(
    "--export-json", type=click.Path(), default=None,
    help="Export the report as JSON at this path",
)
@click.option("--show-details/--no-details", default=True, help="Show ROI and incentives")
@click.pass_context
def analyze(
    ctx: click.Context,
    business_type: str,
    employees: int,
    revenue: float | None,
    electricity: float,
    water: float,
    waste: float,
    fuel: float,
    config: str | None,
    no_ai: bool,
    export_json: str | None,
    show_details: bool,
) -> None:
    """Analyze monthly usage and print a sustainability report."""
    console: Console = ctx.obj["console"]
    settings, reference = _load(ctx, config)
    provider = None if no_ai else build_provider(settings)

    usage = _build_usage(business_type, employees, revenue, electricity, water, waste, fuel)
    report = _run_analysis(usage, reference, provider, console)

    renderer = TerminalRenderer(console)
    renderer.render(report, show_details=show_details)

    if export_json:
        _export_json(report, export_json, console)


@cli.command()
@_usage_options
@click.option(
    "--cut-electricity", type=float, default=0.0,
    help=f"Electricity reduction % (max {SCENARIO_LIMITS['electricity']:.0f})",
)
@click.option(
    "--cut-water", type=float, default=0.0,
    help=f"Water reduction % (max {SCENARIO_LIMITS['water']:.0f})",
)
@click.option(
    "--cut-waste", type=float, default=0.0,
    help=f"Waste reduction % (max {SCENARIO_LIMITS['waste']:.0f})",
)
@click.option(
    "--cut-fuel", type=float, default=0.0,
    help=f"Fuel reduction % (max {SCENARIO_LIMITS['fuel']:.0f})",
)
@click.option("--insight", is_flag=True, help="Ask the text provider for a short insight")
@click.pass_context
def simulate(
    ctx: click.Context,
    business_type: str,
    employees: int,
    revenue: float | None,
    electricity: float,
    water: float,
    waste: float,
    fuel: float,
    config: str | None,
    cut_electricity: float,
    cut_water: float,
    cut_waste: float,
    cut_fuel: float,
    insight: bool,
) -> None:
    """Project the footprint and badge under a what-if reduction scenario."""
    console: Console = ctx.obj["console"]
    settings, _ = _load(ctx, config)
    provider = build_provider(settings) if insight else None

    usage = _build_usage(business_type, employees, revenue, electricity, water, waste, fuel)
    scenario = ScenarioInput(
        electricity=cut_electricity,
        water=cut_water,
        waste=cut_waste,
        fuel=cut_fuel,
    )
    with console.status("[bold cyan]Simulating scenario..."):
        result = simulate_scenario(usage, scenario, provider=provider)

    TerminalRenderer(console).render_scenario(result)


@cli.command()
@click.option(
    "--business-type", "-b",
    type=click.Choice(CATEGORY_CHOICES, case_sensitive=False),
    default=None,
    help="Only show this business category",
)
@click.option("--employees", "-e", type=int, default=None, help="Highlight this size bucket")
@click.option(
    "--config", "-c", type=click.Path(), default=None,
    help="Settings YAML file (defaults to $FOOTPRINT_AUDIT_CONFIG)",
)
@click.pass_context
def benchmarks(
    ctx: click.Context,
    business_type: str | None,
    employees: int | None,
    config: str | None,
) -> None:
    """List peer benchmark averages by category and size."""
    console: Console = ctx.obj["console"]
    _, reference = _load(ctx, config)

    highlight = size_bucket(max(employees, 1)).value if employees is not None else None
    wanted = BusinessCategory(business_type).value if business_type else None

    table = Table(title="Peer Benchmarks (kg CO2 / month)", header_style="bold")
    table.add_column("Category", style="bold")
    table.add_column("Size")
    table.add_column("Employees", justify="right")
    table.add_column("Average CO2", justify="right")

    for category, rows in reference.benchmarks.items():
        if wanted is not None and category != wanted:
            continue
        for bucket, row in rows.items():
            style = "bold cyan" if bucket == highlight else None
            table.add_row(
                category, bucket, row.employee_range, f"{row.average_co2:,.0f}", style=style
            )

    console.print(table)


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, type=int, help="Bind port")
@click.option(
    "--config", "-c", type=click.Path(), default=None,
    help="Settings YAML file (defaults to $FOOTPRINT_AUDIT_CONFIG)",
)
@click.pass_context
def serve(ctx: click.Context, host: str, port: int, config: str | None) -> None:
    """Start the REST API server."""
    from footprint_audit import check_dependency
    check_dependency("fastapi", "pip install -e '.[api]'")
    check_dependency("uvicorn", "pip install -e '.[api]'")

    console: Console = ctx.obj["console"]
    settings, reference = _load(ctx, config)
    console.print(f"[bold cyan]Starting API server on {host}:{port}...[/]")

    from footprint_audit.api.server import create_app
    import uvicorn

    app = create_app(settings=settings, reference=reference)
    uvicorn.run(app, host=host, port=port)


def _export_json(report: SustainabilityReport, path: str, console: Console) -> None:
    """Export to JSON."""
    with open(path, "w") as f:
        f.write(report.model_dump_json(indent=2, by_alias=True))
    console.print(f"  [green]JSON report exported to:[/green] {path}")
