"""Generate a short plain-text summary of a sustainability report."""

from __future__ import annotations

from footprint_audit.data.models import Badge, SustainabilityReport
from footprint_audit.recommendations.templates import CURRENCY

_SCORE_DESCRIPTIONS = {
    15: "low for a business of this size",
    30: "moderate for a business of this size",
    50: "high for a business of this size",
    75: "very high for a business of this size",
}


def generate_summary(report: SustainabilityReport) -> str:
    """Build the summary text.

    Structure:
    1. One-sentence verdict
    2. Peer comparison
    3. Quick wins (up to three fastest-payback actions)
    4. Savings headline and badge
    """
    parts: list[str] = []
    footprint = report.footprint
    business = report.business_data

    # --- 1. Verdict ---
    parts.append(
        f"Your business ({business.business_type.value}) emits about "
        f"{footprint.total_co2:,.0f} kg CO2 per month. The footprint score is "
        f"{footprint.footprint_score}/100, which is "
        f"{_SCORE_DESCRIPTIONS.get(footprint.footprint_score, 'unrated')}."
    )

    # --- 2. Benchmark ---
    benchmark = report.benchmark
    parts.append("")
    parts.append(
        f"PEER COMPARISON: {benchmark.percentage}% {benchmark.direction} the "
        f"average of {benchmark.average_co2:,.0f} kg CO2/month."
    )
    if benchmark.context:
        parts.append(f"  {benchmark.context}")

    # --- 3. Quick wins ---
    quick_wins = [e for e in report.roi if e.has_payback][:3]
    if quick_wins:
        parts.append("")
        parts.append("QUICK WINS:")
        for entry in quick_wins:
            parts.append(
                f"  - {entry.title}: pays back in {entry.payback_months:.1f} months "
                f"({CURRENCY}{entry.monthly_savings:,}/month saved)"
            )

    # --- 4. Savings and badge ---
    savings = report.recommendations.cost_savings
    parts.append("")
    parts.append(
        f"POTENTIAL SAVINGS: {savings.monthly}/month ({savings.yearly}/year)"
    )
    parts.append(
        f"REDUCTION POTENTIAL: {report.recommendations.reduction_potential}% "
        f"-> {report.badge.value} badge"
    )
    if report.badge is not Badge.platinum:
        parts.append(
            "  Acting on the recommendations above is the quickest route to a higher tier."
        )

    return "\n".join(parts)
