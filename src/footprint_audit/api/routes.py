# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""FastAPI router with REST endpoints for the footprint audit API."""

from __future__ import annotations

import logging
from typing import Optional

from footprint_audit import check_dependency

check_dependency("fastapi", "pip install -e '.[api]'")

from fastapi import APIRouter, Depends, HTTPException, Request  # noqa: E402

from footprint_audit.ai.provider import TextProvider  # noqa: E402
from footprint_audit.analysis.engine import AnalysisEngine, run_analysis  # noqa: E402
from footprint_audit.analysis.scenario import scenario_insight, simulate  # noqa: E402
from footprint_audit.api.models import (  # noqa: E402
    HealthResponse,
    ScenarioInsightRequest,
    ScenarioInsightResponse,
    ScenarioRequest,
)
from footprint_audit.data.models import (  # noqa: E402
    ScenarioResult,
    SustainabilityReport,
    UsageRecord,
)
from footprint_audit.data.reference import ReferenceData  # noqa: E402

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["footprint-audit"])


# ---------------------------------------------------------------------------
# Dependency injection: reference data and provider
# ---------------------------------------------------------------------------

def get_reference(request: Request) -> ReferenceData:
    """Reference tables loaded once by :func:`create_app`."""
    return request.app.state.reference


def get_provider(request: Request) -> Optional[TextProvider]:
    """The configured text provider, or ``None`` for static-only analysis."""
    return request.app.state.provider


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

@router.get("/health", response_model=HealthResponse)
async def health(
    provider: Optional[TextProvider] = Depends(get_provider),
) -> HealthResponse:
    """Return service health status and version information."""
    import footprint_audit

    return HealthResponse(
        status="ok",
        version=footprint_audit.__version__,
        provider_configured=provider is not None,
    )


@router.post("/analyze", response_model=SustainabilityReport)
def analyze(
    usage: UsageRecord,
    reference: ReferenceData = Depends(get_reference),
    provider: Optional[TextProvider] = Depends(get_provider),
) -> SustainabilityReport:
    """Score a usage record and return the full sustainability report.

    Provider failures never surface here; they only switch subsections
    to their static fallbacks.
    """
    try:
        return run_analysis(usage, AnalysisEngine(reference), provider)
    except Exception as exc:
        logger.exception("Analysis failed")
        raise HTTPException(status_code=500, detail=f"Analysis failed: {exc}") from exc


@router.post(
    "/scenario",
    response_model=ScenarioResult,
    response_model_exclude_none=True,
)
def scenario(
    request: ScenarioRequest,
    provider: Optional[TextProvider] = Depends(get_provider),
) -> ScenarioResult:
    """Project the footprint and badge under a what-if reduction scenario."""
    try:
        return simulate(
            request.usage,
            request.scenario,
            provider=provider if request.include_insight else None,
        )
    except Exception as exc:
        logger.exception("Scenario simulation failed")
        raise HTTPException(
            status_code=500, detail=f"Scenario simulation failed: {exc}"
        ) from exc


@router.post("/scenario-insights", response_model=ScenarioInsightResponse)
def scenario_insights(
    request: ScenarioInsightRequest,
    provider: Optional[TextProvider] = Depends(get_provider),
) -> ScenarioInsightResponse:
    """Return a short narrative for a scenario; a canned text when unavailable."""
    try:
        text = scenario_insight(
            provider,
            request.scenario,
            request.original_footprint,
            request.new_footprint,
            request.business_type,
        )
    except Exception as exc:
        logger.exception("Scenario insight generation failed")
        raise HTTPException(
            status_code=500, detail=f"Failed to generate insights: {exc}"
        ) from exc
    return ScenarioInsightResponse(insights=text)
