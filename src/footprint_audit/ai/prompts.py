# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Prompt builders for the analysis and scenario-insight requests."""

from __future__ import annotations

from footprint_audit.data.models import FootprintResult, ScenarioInput, UsageRecord
from footprint_audit.data.reference import ReferenceData

ANALYSIS_SYSTEM_PROMPT = (
    "You are an expert sustainability consultant. "
    "Always respond with valid JSON only, no additional text."
)

INSIGHT_SYSTEM_PROMPT = "You are a sustainability consultant."

_ANALYSIS_TEMPLATE = """\
Act as a sustainability consultant for small businesses. Based on the following \
business information, provide detailed recommendations in JSON format.

Business Type: {business_type}
Employees: {employees}
Monthly Electricity Usage: {electricity:g} kWh
Monthly Water Usage: {water:g} liters
Monthly Waste Generated: {waste:g} kg
Monthly Fuel Used: {fuel:g} liters
Monthly Carbon Footprint: {total:.1f} kg CO2
Current Carbon Footprint Score: {score}/100

Where they fit, prefer these recommendation titles so cost data can be joined:
{known_titles}

Provide a JSON response with the following structure:
{{
  "energy": [
    {{"title": "Recommendation title", "description": "Detailed explanation",
      "savings": "Estimated monthly savings in currency", "impact": "CO2 reduction in kg/month"}}
  ],
  "waste": [
    {{"title": "Recommendation title", "description": "Detailed explanation",
      "savings": "Estimated monthly savings", "impact": "CO2 reduction in kg/month"}}
  ],
  "costSavings": {{
    "monthly": "Total estimated monthly savings",
    "yearly": "Total estimated yearly savings",
    "breakdown": "Brief explanation of savings sources"
  }},
  "reductionPotential": {potential},
  "benchmark": {{
    "averageCO2": "Average monthly kg CO2 for similar {business_type} businesses (number)",
    "context": "One sentence describing the peer group"
  }},
  "roi": [
    {{"title": "Recommendation title", "upfrontCost": 0, "monthlySavings": 0,
      "category": "energy or waste"}}
  ],
  "incentives": [
    {{"title": "Programme name", "description": "What it offers", "eligibility": "Who qualifies",
      "value": "Typical value", "category": "solar|energy|waste|tax|other",
      "applicationUrl": "Optional URL"}}
  ]
}}

Make recommendations specific to {business_type} businesses. Be practical and actionable."""

_INSIGHT_TEMPLATE = """\
You are a sustainability consultant. Provide a brief, actionable insight \
(2-3 sentences) about the following carbon reduction scenario:

Business Type: {business_type}
Original Monthly CO2: {original:.1f} kg
New Monthly CO2: {new:.1f} kg
Reduction: {reduction_pct:.1f}%

Reduction Breakdown:
- Electricity: {electricity:g}%
- Water: {water:g}%
- Waste: {waste:g}%
- Fuel: {fuel:g}%

Provide a brief, encouraging insight about what this reduction means for the \
business, potential benefits, and next steps. Keep it under 100 words."""


def build_analysis_prompt(
    usage: UsageRecord,
    footprint: FootprintResult,
    reduction_potential: int,
    reference: ReferenceData | None = None,
) -> str:
    """Prompt asking for recommendations, benchmark, ROI and incentives."""
    titles = reference.catalog_titles() if reference is not None else []
    known_titles = "\n".join(f"- {t}" for t in titles) or "- (none)"
    return _ANALYSIS_TEMPLATE.format(
        business_type=usage.business_type.value,
        employees=usage.employees,
        electricity=usage.electricity_kwh,
        water=usage.water_liters,
        waste=usage.waste_kg,
        fuel=usage.fuel_liters,
        total=footprint.total_co2,
        score=footprint.footprint_score,
        potential=reduction_potential,
        known_titles=known_titles,
    )


def build_insight_prompt(
    scenario: ScenarioInput,
    original_footprint: float,
    new_footprint: float,
    business_type: str,
) -> str:
    """Prompt asking for a short natural-language note on a scenario."""
    reduction_pct = 0.0
    if original_footprint > 0:
        reduction_pct = (original_footprint - new_footprint) / original_footprint * 100
    return _INSIGHT_TEMPLATE.format(
        business_type=business_type,
        original=original_footprint,
        new=new_footprint,
        reduction_pct=reduction_pct,
        **scenario.as_dict(),
    )
