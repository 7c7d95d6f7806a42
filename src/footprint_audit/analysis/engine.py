# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Sustainability analysis engine.

Scores the usage record, reconciles an optional generated response, and
resolves each subsection independently: a valid generated subsection is
used as-is, anything else falls back to the deterministic path built from
the reference data.
"""

from __future__ import annotations

import logging
from typing import Optional

from footprint_audit.ai.prompts import ANALYSIS_SYSTEM_PROMPT, build_analysis_prompt
from footprint_audit.ai.provider import TextProvider, request_text
from footprint_audit.ai.reconciler import ReconciledSections, ResponseReconciler
from footprint_audit.data.models import (
    BenchmarkResult,
    FootprintResult,
    IncentiveEntry,
    Provenance,
    RecommendationSet,
    ROIEntry,
    SustainabilityReport,
    UsageRecord,
)
from footprint_audit.data.reference import ReferenceData
from footprint_audit.recommendations.benchmark import compare_to_average, static_benchmark
from footprint_audit.recommendations.engine import StaticRecommendationEngine, build_cost_savings
from footprint_audit.recommendations.incentives import select_incentives
from footprint_audit.recommendations.roi import rank_roi, roi_from_catalog
from footprint_audit.scoring.engine import ScoringEngine
from footprint_audit.scoring.thresholds import classify_badge

logger = logging.getLogger(__name__)


class AnalysisEngine:
    """Produce a :class:`SustainabilityReport` from a usage record.

    Usage::

        engine = AnalysisEngine(load_reference_data())
        report = engine.analyze(usage, generated_text)
    """

    def __init__(
        self,
        reference: ReferenceData,
        scoring: ScoringEngine | None = None,
        reconciler: ResponseReconciler | None = None,
    ) -> None:
        self.reference = reference
        self.scoring = scoring or ScoringEngine()
        self.reconciler = reconciler or ResponseReconciler()
        self.static_recommendations = StaticRecommendationEngine(reference)

    def analyze(
        self, usage: UsageRecord, generated: Optional[str] = None
    ) -> SustainabilityReport:
        """Build the full report.

        Args:
            usage: The submitted usage record.
            generated: Raw provider text, or ``None`` when the provider is
                unconfigured or failed.
        """
        footprint, potential, _ = self.scoring.score(usage)
        sections = self.reconciler.parse(generated)

        recommendations, rec_source = self._resolve_recommendations(
            sections, usage, footprint, potential
        )
        benchmark = self._resolve_benchmark(sections, usage, footprint)
        roi, roi_source = self._resolve_roi(sections, recommendations)
        incentives, incentive_source = self._resolve_incentives(sections, usage)

        return SustainabilityReport(
            footprint=footprint,
            recommendations=recommendations,
            badge=classify_badge(recommendations.reduction_potential),
            business_data=usage,
            benchmark=benchmark,
            roi=roi,
            incentives=incentives,
            sources={
                "recommendations": rec_source,
                "benchmark": benchmark.source,
                "roi": roi_source,
                "incentives": incentive_source,
            },
        )

    # ------------------------------------------------------------------
    # Per-subsection resolution
    # ------------------------------------------------------------------

    def _resolve_recommendations(
        self,
        sections: ReconciledSections,
        usage: UsageRecord,
        footprint: FootprintResult,
        potential: int,
    ) -> tuple[RecommendationSet, Provenance]:
        generated = sections.recommendations.value
        if not sections.recommendations.ok or generated is None:
            return (
                self.static_recommendations.generate(usage, footprint, potential),
                Provenance.static,
            )

        titles = [r.title for r in (*generated.energy, *generated.waste)]
        cost_savings = generated.cost_savings or build_cost_savings(titles, self.reference)
        reduction = (
            generated.reduction_potential
            if generated.reduction_potential is not None
            else potential
        )
        return (
            RecommendationSet(
                energy=generated.energy,
                waste=generated.waste,
                cost_savings=cost_savings,
                reduction_potential=reduction,
            ),
            Provenance.ai_generated,
        )

    def _resolve_benchmark(
        self,
        sections: ReconciledSections,
        usage: UsageRecord,
        footprint: FootprintResult,
    ) -> BenchmarkResult:
        generated = sections.benchmark.value
        if sections.benchmark.ok and generated is not None:
            return compare_to_average(
                footprint.total_co2,
                generated.average_co2,
                source=Provenance.ai_generated,
                context=generated.context,
            )
        return static_benchmark(footprint.total_co2, usage, self.reference)

    def _resolve_roi(
        self,
        sections: ReconciledSections,
        recommendations: RecommendationSet,
    ) -> tuple[list[ROIEntry], Provenance]:
        if sections.roi.ok and sections.roi.value:
            return rank_roi(sections.roi.value), Provenance.ai_generated
        return roi_from_catalog(recommendations.all, self.reference), Provenance.static

    def _resolve_incentives(
        self,
        sections: ReconciledSections,
        usage: UsageRecord,
    ) -> tuple[list[IncentiveEntry], Provenance]:
        if sections.incentives.ok and sections.incentives.value:
            return list(sections.incentives.value), Provenance.ai_generated
        return select_incentives(usage), Provenance.static


def run_analysis(
    usage: UsageRecord,
    engine: AnalysisEngine,
    provider: Optional[TextProvider] = None,
) -> SustainabilityReport:
    """Request a generated response (if a provider is set) and analyze.

    Provider absence or failure never fails the analysis; it only selects
    the static path for every subsection.
    """
    generated: Optional[str] = None
    if provider is not None:
        footprint, potential, _ = engine.scoring.score(usage)
        prompt = build_analysis_prompt(usage, footprint, potential, engine.reference)
        generated = request_text(provider, ANALYSIS_SYSTEM_PROMPT, prompt)
        if generated is None:
            logger.info("Continuing with static analysis for all sections")
    return engine.analyze(usage, generated)
