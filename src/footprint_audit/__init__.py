# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Footprint Audit - Small-Business Sustainability Analysis Engine."""

__version__ = "0.1.0"


def check_dependency(package: str, install_hint: str) -> None:
    """Raise *ImportError* with a helpful message if *package* is missing."""
    try:
        __import__(package)
    except ImportError:
        raise ImportError(
            f"This feature requires '{package}'. Install with: {install_hint}"
        ) from None


from footprint_audit.data.models import (  # noqa: E402
    Badge,
    BusinessCategory,
    FootprintResult,
    Recommendation,
    ScenarioInput,
    ScenarioResult,
    SustainabilityReport,
    UsageRecord,
)
from footprint_audit.data.reference import ReferenceData, load_reference_data  # noqa: E402
from footprint_audit.scoring.engine import ScoringEngine  # noqa: E402
from footprint_audit.recommendations.engine import StaticRecommendationEngine  # noqa: E402
from footprint_audit.analysis.engine import AnalysisEngine, run_analysis  # noqa: E402
from footprint_audit.analysis.scenario import simulate  # noqa: E402

__all__ = [
    "AnalysisEngine",
    "Badge",
    "BusinessCategory",
    "FootprintResult",
    "Recommendation",
    "ReferenceData",
    "ScenarioInput",
    "ScenarioResult",
    "ScoringEngine",
    "StaticRecommendationEngine",
    "SustainabilityReport",
    "UsageRecord",
    "check_dependency",
    "load_reference_data",
    "run_analysis",
    "simulate",
]
