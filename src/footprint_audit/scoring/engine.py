# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Footprint scoring pipeline.

Emission model, footprint scorer and badge classifier composed into one
pure function so that the main analysis path and the scenario simulator
share exactly the same arithmetic.
"""

from __future__ import annotations

from footprint_audit.data.models import Badge, FootprintResult, UsageRecord
from footprint_audit.scoring.emissions import compute_emissions
from footprint_audit.scoring.thresholds import (
    bucket_score,
    classify_badge,
    raw_footprint_score,
    reduction_potential,
)


def score_footprint(total_co2: float, employees: int) -> int:
    """Bucketed footprint score for a monthly total and headcount."""
    return bucket_score(raw_footprint_score(total_co2, employees))


def build_footprint(usage: UsageRecord) -> FootprintResult:
    """Compute a fresh :class:`FootprintResult` for one usage record."""
    total, breakdown = compute_emissions(usage)
    return FootprintResult(
        total_co2=total,
        breakdown=breakdown,
        footprint_score=score_footprint(total, usage.employees),
    )


class ScoringEngine:
    """Runs the emission -> score -> reduction potential -> badge pipeline.

    Usage::

        engine = ScoringEngine()
        footprint, potential, badge = engine.score(usage)
    """

    def score(self, usage: UsageRecord) -> tuple[FootprintResult, int, Badge]:
        """Run the full scoring pipeline.

        Args:
            usage: The submitted usage record.

        Returns:
            A 3-tuple of ``(footprint, reduction_potential, badge)`` where
            *reduction_potential* is ``100 - footprint_score`` clamped to
            [10, 50] and *badge* is its tier.
        """
        footprint = build_footprint(usage)
        potential = reduction_potential(footprint.footprint_score)
        return footprint, potential, classify_badge(potential)
