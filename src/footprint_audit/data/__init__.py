# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Data models and static reference tables."""

from footprint_audit.data.models import (
    Badge,
    BenchmarkResult,
    BusinessCategory,
    CostSavings,
    EmissionBreakdown,
    FootprintResult,
    IncentiveEntry,
    Provenance,
    Recommendation,
    RecommendationSet,
    ROIEntry,
    ScenarioInput,
    ScenarioResult,
    SizeBucket,
    SustainabilityReport,
    UsageRecord,
)
from footprint_audit.data.reference import ReferenceData, load_reference_data, size_bucket

__all__ = [
    "Badge",
    "BenchmarkResult",
    "BusinessCategory",
    "CostSavings",
    "EmissionBreakdown",
    "FootprintResult",
    "IncentiveEntry",
    "Provenance",
    "ROIEntry",
    "Recommendation",
    "RecommendationSet",
    "ReferenceData",
    "ScenarioInput",
    "ScenarioResult",
    "SizeBucket",
    "SustainabilityReport",
    "UsageRecord",
    "load_reference_data",
    "size_bucket",
]
