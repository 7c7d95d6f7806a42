# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Static recommendation engine.

Selects recommendation templates from the reported usage, formats their
savings and impact estimates, and produces the deterministic
:class:`~footprint_audit.data.models.RecommendationSet` used whenever the
generated recommendations are missing or invalid.
"""

from __future__ import annotations

from typing import Iterable

from footprint_audit.data.models import (
    BusinessCategory,
    CostSavings,
    FootprintResult,
    Recommendation,
    RecommendationSet,
    UsageRecord,
)
from footprint_audit.data.reference import ReferenceData
from footprint_audit.recommendations.templates import (
    BASELINE_RECOMMENDATIONS,
    COMPOSTING,
    COST_SAVINGS_BREAKDOWN,
    CURRENCY,
    PAPERLESS,
    ROOFTOP_SOLAR,
    ROUTE_OPTIMIZATION,
    RecommendationTemplate,
)

# Electricity share of total emissions above which solar is suggested.
_SOLAR_SHARE_THRESHOLD = 0.5
# Monthly waste (kg) above which composting is suggested.
_COMPOSTING_WASTE_KG = 100.0

_COMPOSTING_CATEGORIES = {BusinessCategory.restaurant, BusinessCategory.small_farm}
_PAPERLESS_CATEGORIES = {BusinessCategory.office, BusinessCategory.retail_shop}


def format_currency(amount: float) -> str:
    return f"{CURRENCY}{amount:,.0f}"


def build_cost_savings(
    titles: Iterable[str], reference: ReferenceData
) -> CostSavings:
    """Summarise catalog savings for the given recommendation titles."""
    monthly = 0.0
    matched = 0
    for title in dict.fromkeys(titles):
        item = reference.catalog_item(title)
        if item is not None and item.monthly_savings > 0:
            monthly += item.monthly_savings
            matched += 1

    if not matched:
        return CostSavings(
            monthly="N/A",
            yearly="N/A",
            breakdown="Savings estimates are listed per recommendation",
        )
    return CostSavings(
        monthly=format_currency(monthly),
        yearly=format_currency(monthly * 12),
        breakdown=COST_SAVINGS_BREAKDOWN,
    )


class StaticRecommendationEngine:
    """Generate recommendations from local templates and reference data.

    Usage::

        engine = StaticRecommendationEngine(reference)
        recommendations = engine.generate(usage, footprint, potential)
    """

    def __init__(self, reference: ReferenceData) -> None:
        self.reference = reference

    def select_templates(
        self, usage: UsageRecord, footprint: FootprintResult
    ) -> list[RecommendationTemplate]:
        """Pick the templates that apply to this business, in display order."""
        selected = list(BASELINE_RECOMMENDATIONS)

        total = footprint.total_co2
        if total > 0 and footprint.breakdown.electricity / total >= _SOLAR_SHARE_THRESHOLD:
            selected.append(ROOFTOP_SOLAR)
        if usage.fuel_liters > 0:
            selected.append(ROUTE_OPTIMIZATION)
        if (
            usage.waste_kg > _COMPOSTING_WASTE_KG
            or usage.business_type in _COMPOSTING_CATEGORIES
        ):
            selected.append(COMPOSTING)
        if usage.business_type in _PAPERLESS_CATEGORIES:
            selected.append(PAPERLESS)
        return selected

    def generate(
        self,
        usage: UsageRecord,
        footprint: FootprintResult,
        reduction_potential: int,
    ) -> RecommendationSet:
        """Build the static recommendation set.

        Parameters
        ----------
        usage:
            The submitted usage record.
        footprint:
            Footprint computed from *usage*; its breakdown drives the
            per-recommendation CO2 impact estimate.
        reduction_potential:
            Already-clamped reduction potential to report.
        """
        breakdown = footprint.breakdown.as_dict()
        energy: list[Recommendation] = []
        waste: list[Recommendation] = []

        for template in self.select_templates(usage, footprint):
            item = self.reference.catalog_item(template.title)
            savings = (
                f"{format_currency(item.monthly_savings)}/month"
                if item is not None
                else template.savings_hint
            )
            impact_kg = breakdown.get(template.resource, 0.0) * template.reduction_fraction
            rec = Recommendation(
                category=template.category,
                title=template.title,
                description=template.description,
                savings=savings,
                impact=f"{impact_kg:,.0f} kg CO2/month",
            )
            (energy if template.category == "energy" else waste).append(rec)

        titles = [r.title for r in (*energy, *waste)]
        return RecommendationSet(
            energy=energy,
            waste=waste,
            cost_savings=build_cost_savings(titles, self.reference),
            reduction_potential=reduction_potential,
        )
