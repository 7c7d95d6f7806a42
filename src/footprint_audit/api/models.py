# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""API request/response Pydantic models for the REST interface.

Analysis and scenario responses reuse the domain models from
:mod:`footprint_audit.data.models`; only the envelopes live here.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from footprint_audit.data.models import ScenarioInput, UsageRecord


# ---------------------------------------------------------------------------
# Request models
# ---------------------------------------------------------------------------

class ScenarioRequest(BaseModel):
    """Request body for the ``POST /api/v1/scenario`` endpoint."""

    usage: UsageRecord = Field(
        ..., description="Baseline usage record in intake wire format."
    )
    scenario: ScenarioInput = Field(
        default_factory=ScenarioInput,
        description="Percentage reduction per resource (clamped server-side).",
    )
    include_insight: bool = Field(
        default=False,
        alias="includeInsight",
        description="Request a generated insight alongside the projection.",
    )

    model_config = {"populate_by_name": True}


class ScenarioInsightRequest(BaseModel):
    """Request body for the ``POST /api/v1/scenario-insights`` endpoint."""

    scenario: ScenarioInput = Field(default_factory=ScenarioInput)
    original_footprint: float = Field(
        ..., ge=0, alias="originalFootprint",
        description="Baseline monthly kg CO2.",
    )
    new_footprint: float = Field(
        ..., ge=0, alias="newFootprint",
        description="Projected monthly kg CO2 under the scenario.",
    )
    business_type: str = Field(
        default="Other", alias="businessType",
        description="Business category label used in the prompt.",
    )

    model_config = {"populate_by_name": True}


# ---------------------------------------------------------------------------
# Response models
# ---------------------------------------------------------------------------

class ScenarioInsightResponse(BaseModel):
    """Response body returned by the ``POST /api/v1/scenario-insights`` endpoint."""

    insights: str = Field(..., description="Short narrative about the scenario.")


class HealthResponse(BaseModel):
    """Response body returned by the ``GET /api/v1/health`` endpoint."""

    status: str = Field(
        ..., description="Service health status (e.g. 'ok')."
    )
    version: str = Field(
        ..., description="Application version string."
    )
    provider_configured: bool = Field(
        ..., description="Whether a generative text provider is configured."
    )
