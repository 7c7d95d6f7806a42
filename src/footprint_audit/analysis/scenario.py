# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""What-if scenario simulation.

Applies per-resource percentage reductions to a usage record and re-runs
the scoring pipeline on the adjusted copy.  The original record and its
footprint are never modified.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from footprint_audit.ai.prompts import INSIGHT_SYSTEM_PROMPT, build_insight_prompt
from footprint_audit.ai.provider import TextProvider, request_text
from footprint_audit.data.models import ScenarioInput, ScenarioResult, UsageRecord
from footprint_audit.scoring.engine import ScoringEngine, build_footprint
from footprint_audit.scoring.thresholds import classify_badge

UNCONFIGURED_INSIGHT = (
    "With these reductions, you could significantly improve your carbon "
    "footprint and potentially qualify for better sustainability ratings."
)
FAILED_INSIGHT = (
    "This reduction would significantly improve your environmental impact "
    "and potentially reduce operational costs."
)


def adjust_usage(usage: UsageRecord, scenario: ScenarioInput) -> UsageRecord:
    """Return a copy of *usage* with each quantity reduced by its knob."""
    return usage.model_copy(
        update={
            "electricity_kwh": usage.electricity_kwh * (1 - scenario.electricity / 100),
            "water_liters": usage.water_liters * (1 - scenario.water / 100),
            "waste_kg": usage.waste_kg * (1 - scenario.waste / 100),
            "fuel_liters": usage.fuel_liters * (1 - scenario.fuel / 100),
        }
    )


def reduction_percent(original_total: float, new_total: float) -> float:
    """Percentage drop from *original_total*; 0 when the original is 0."""
    if original_total <= 0:
        return 0.0
    return (original_total - new_total) / original_total * 100


def simulate(
    usage: UsageRecord,
    scenario: ScenarioInput | Mapping[str, Any],
    provider: Optional[TextProvider] = None,
    scoring: ScoringEngine | None = None,
) -> ScenarioResult:
    """Project the footprint and badge under a reduction scenario.

    Knob values are clamped by :class:`ScenarioInput`.  When a *provider*
    is given, a short insight is attached; if it is unavailable the
    ``insight`` field is simply left unset.
    """
    if not isinstance(scenario, ScenarioInput):
        scenario = ScenarioInput.model_validate(dict(scenario))
    scoring = scoring or ScoringEngine()

    original, _, _ = scoring.score(usage)
    adjusted = adjust_usage(usage, scenario)
    projected = build_footprint(adjusted)

    percent = reduction_percent(original.total_co2, projected.total_co2)
    insight = None
    if provider is not None:
        insight = request_text(
            provider,
            INSIGHT_SYSTEM_PROMPT,
            build_insight_prompt(
                scenario,
                original.total_co2,
                projected.total_co2,
                usage.business_type.value,
            ),
        )

    return ScenarioResult(
        scenario=scenario,
        adjusted_usage=adjusted,
        footprint=projected,
        original_total=original.total_co2,
        new_total=projected.total_co2,
        reduction=original.total_co2 - projected.total_co2,
        reduction_percent=percent,
        badge=classify_badge(percent),
        insight=insight or None,
    )


def scenario_insight(
    provider: Optional[TextProvider],
    scenario: ScenarioInput,
    original_footprint: float,
    new_footprint: float,
    business_type: str,
) -> str:
    """Insight text for a scenario; always returns a string."""
    if provider is None:
        return UNCONFIGURED_INSIGHT
    text = request_text(
        provider,
        INSIGHT_SYSTEM_PROMPT,
        build_insight_prompt(scenario, original_footprint, new_footprint, business_type),
    )
    return text.strip() if text and text.strip() else FAILED_INSIGHT
