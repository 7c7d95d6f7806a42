"""Rich terminal report renderer.

Composes Rich tables, panels, and ASCII charts into the user-facing
terminal output for sustainability reports and what-if scenarios.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.rule import Rule
from rich.table import Table
from rich.text import Text

from footprint_audit.data.models import (
    Badge,
    IncentiveEntry,
    Recommendation,
    ROIEntry,
    ScenarioResult,
    SustainabilityReport,
)
from footprint_audit.recommendations.templates import CURRENCY
from footprint_audit.reporting.ascii_charts import (
    footprint_gauge,
    horizontal_bar,
    percentage_bar,
)
from footprint_audit.reporting.summary import generate_summary

def _badge_style(badge: Badge) -> str:
    return f"bold {badge.color}"


class TerminalRenderer:
    """Renders analysis results to the terminal using Rich."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console()

    def render(self, report: SustainabilityReport, show_details: bool = True) -> None:
        """Render the full report to the terminal."""
        self._render_header(report)
        self._render_footprint(report)
        self._render_benchmark(report)
        self._render_recommendations(report.recommendations.all)
        if show_details:
            self._render_roi(report.roi)
            self._render_incentives(report.incentives)
        self._render_summary(report)
        self._render_footer(report)

    def render_scenario(self, result: ScenarioResult) -> None:
        """Render a what-if scenario projection."""
        self.console.print()
        self.console.print(Rule("[bold]WHAT-IF SCENARIO[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Resource", style="bold")
        table.add_column("Reduction", justify="right")
        for resource, pct in result.scenario.as_dict().items():
            table.add_row(resource.capitalize(), f"{pct:.0f}%")
        self.console.print(table)

        color = _badge_style(result.badge)
        self.console.print(
            f"\n  [bold]Monthly CO2:[/bold] {result.original_total:,.1f} kg "
            f"-> [green]{result.new_total:,.1f} kg[/green] "
            f"({result.reduction:,.1f} kg saved)"
        )
        self.console.print(
            "  " + percentage_bar("[bold]Reduction:[/bold]", result.reduction_percent)
        )
        self.console.print(
            f"  [bold]New footprint score:[/bold] "
            f"{footprint_gauge(result.footprint.footprint_score)}"
        )
        self.console.print(
            f"  [bold]Projected badge:[/bold] [{color}]{result.badge.value}[/]"
        )
        if result.insight:
            self.console.print()
            self.console.print(
                Panel(escape(result.insight), title="[bold]INSIGHT[/bold]", border_style="cyan")
            )

    # ------------------------------------------------------------------
    # Private rendering methods
    # ------------------------------------------------------------------

    def _render_header(self, report: SustainabilityReport) -> None:
        business = report.business_data
        header_text = Text()
        header_text.append("FOOTPRINT AUDIT", style="bold cyan")
        header_text.append(" | ", style="dim")
        header_text.append(business.business_type.value, style="bold")
        header_text.append(" | ", style="dim")
        header_text.append(f"{business.employees} employees")

        self.console.print()
        self.console.print(Panel(header_text, title="Sustainability Report"))

    def _render_footprint(self, report: SustainabilityReport) -> None:
        footprint = report.footprint
        breakdown = footprint.breakdown.as_dict()
        largest = max(breakdown.values()) if breakdown else 0.0

        self.console.print()
        self.console.print(
            f"  [bold]MONTHLY FOOTPRINT[/bold]: {footprint.total_co2:,.1f} kg CO2"
        )
        self.console.print(
            f"  [bold]FOOTPRINT SCORE[/bold]: {footprint_gauge(footprint.footprint_score)}"
        )
        color = _badge_style(report.badge)
        self.console.print(
            f"  [bold]BADGE[/bold]: [{color}]{report.badge.value}[/] "
            f"({report.recommendations.reduction_potential}% reduction potential)"
        )
        self.console.print()
        for resource, value in breakdown.items():
            self.console.print(horizontal_bar(resource.capitalize(), value, largest))

    def _render_benchmark(self, report: SustainabilityReport) -> None:
        benchmark = report.benchmark
        color = "red" if benchmark.direction == "above" else "green"
        self.console.print()
        self.console.print(Rule("[bold]PEER BENCHMARK[/bold]"))
        self.console.print(
            f"  Average: {benchmark.average_co2:,.0f} kg | You: {benchmark.your_co2:,.0f} kg | "
            f"[{color}]{benchmark.percentage}% {benchmark.direction}[/{color}] "
            f"[dim]({benchmark.source.value})[/dim]"
        )
        if benchmark.context:
            self.console.print(f"  [dim]{escape(benchmark.context)}[/dim]")

    def _render_recommendations(self, recommendations: list[Recommendation]) -> None:
        """Render recommendations table."""
        self.console.print()
        self.console.print(Rule("[bold]RECOMMENDATIONS[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("Area", justify="center", width=7)
        table.add_column("Recommendation", min_width=30)
        table.add_column("Savings", justify="right", min_width=14)
        table.add_column("Impact", justify="right", min_width=14)

        for rec in recommendations:
            area_color = "yellow" if rec.category == "energy" else "green"
            table.add_row(
                f"[{area_color}]{rec.category}[/{area_color}]",
                escape(rec.title),
                escape(rec.savings),
                escape(rec.impact),
            )

        self.console.print(table)

    def _render_roi(self, entries: list[ROIEntry]) -> None:
        if not entries:
            return
        self.console.print()
        self.console.print(Rule("[bold]RETURN ON INVESTMENT[/bold]"))

        table = Table(show_header=True, header_style="bold", padding=(0, 1))
        table.add_column("#", justify="right", style="bold", width=3)
        table.add_column("Action", min_width=30)
        table.add_column("Upfront", justify="right")
        table.add_column("Monthly Savings", justify="right")
        table.add_column("Payback", justify="right")

        for rank, entry in enumerate(entries, start=1):
            payback = (
                f"{entry.payback_months:.1f} mo" if entry.has_payback else "[dim]none[/dim]"
            )
            table.add_row(
                str(rank),
                escape(entry.title),
                f"{CURRENCY}{entry.upfront_cost:,}",
                f"{CURRENCY}{entry.monthly_savings:,}",
                payback,
            )
        self.console.print(table)

    def _render_incentives(self, incentives: list[IncentiveEntry]) -> None:
        if not incentives:
            return
        self.console.print()
        self.console.print(Rule("[bold]INCENTIVES[/bold]"))
        for incentive in incentives:
            self.console.print(
                f"  [bold]{escape(incentive.title)}[/bold] [dim]({incentive.category})[/dim]"
            )
            self.console.print(f"    {escape(incentive.description)}")
            if incentive.value:
                self.console.print(f"    [green]{escape(incentive.value)}[/green]")
            if incentive.application_url:
                self.console.print(f"    [dim]{escape(incentive.application_url)}[/dim]")

    def _render_summary(self, report: SustainabilityReport) -> None:
        self.console.print()
        self.console.print(
            Panel(
                escape(generate_summary(report)),
                title="[bold]SUMMARY[/bold]",
                border_style="cyan",
                padding=(1, 2),
            )
        )

    def _render_footer(self, report: SustainabilityReport) -> None:
        sources = ", ".join(f"{k}: {v.value}" for k, v in report.sources.items())
        self.console.print()
        self.console.print(Rule(style="dim"))
        self.console.print(
            f"  [dim]Generated: {report.generated_at.strftime('%Y-%m-%d %H:%M UTC')} | "
            f"{sources}[/dim]"
        )
        self.console.print()
