# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Core Pydantic v2 data models for the footprint audit engine.

This module defines the data contract shared by the scoring, reconciler,
recommendation, reporting, API and CLI layers.  Wire names from the intake
form (``businessType``, ``electricityUsage`` ...) are accepted as aliases
and used when serialising, so the JSON shape stays stable for front-ends.
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------

class BusinessCategory(str, Enum):
    """Closed set of business categories offered by the intake form."""

    restaurant = "Restaurant"
    retail_shop = "Retail Shop"
    small_farm = "Small Farm"
    small_factory = "Small Factory"
    office = "Office"
    warehouse = "Warehouse"
    other = "Other"

    @classmethod
    def _missing_(cls, value: object) -> "BusinessCategory":
        # Case-insensitive match; anything unknown is treated as "Other".
        if isinstance(value, str):
            wanted = value.strip().lower()
            for member in cls:
                if member.value.lower() == wanted or member.name == wanted:
                    return member
        return cls.other


class SizeBucket(str, Enum):
    """Employee-count band used to pick a peer benchmark row."""

    small = "small"
    medium = "medium"
    large = "large"


class Provenance(str, Enum):
    """Where a report subsection came from."""

    ai_generated = "ai-generated"
    static = "static"


class Badge(str, Enum):
    """Achievement tier, ordered Bronze < Silver < Gold < Platinum."""

    bronze = "Bronze"
    silver = "Silver"
    gold = "Gold"
    platinum = "Platinum"

    @property
    def rank(self) -> int:
        """Position in the tier ordering (Bronze = 0)."""
        return list(Badge).index(self)

    @property
    def color(self) -> str:
        """Hex color used by report front-ends."""
        return {
            Badge.bronze: "#CD7F32",
            Badge.silver: "#C0C0C0",
            Badge.gold: "#FFD700",
            Badge.platinum: "#E5E4E2",
        }[self]


# ---------------------------------------------------------------------------
# Input coercion helpers
# ---------------------------------------------------------------------------

def coerce_quantity(value: Any) -> float:
    """Coerce a reported quantity to a non-negative float.

    Missing, unparsable, non-finite and negative values all become ``0.0``.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, str):
        value = value.strip().replace(",", "")
        if not value:
            return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number) or number < 0:
        return 0.0
    return number


# ---------------------------------------------------------------------------
# Intake
# ---------------------------------------------------------------------------

class UsageRecord(BaseModel):
    """Self-reported monthly utility usage for one business.

    Immutable once submitted.  Every numeric field tolerates string input
    and bad values rather than rejecting the submission.
    """

    model_config = {"frozen": True, "populate_by_name": True}

    business_type: BusinessCategory = Field(
        default=BusinessCategory.other,
        alias="businessType",
        description="Business category from the closed intake list",
    )
    employees: int = Field(
        default=1, ge=1, description="Number of employees (at least 1)"
    )
    yearly_revenue: Optional[float] = Field(
        default=None, alias="yearlyRevenue", description="Optional yearly revenue"
    )
    electricity_kwh: float = Field(
        default=0.0, ge=0, alias="electricityUsage",
        description="Monthly electricity use in kWh",
    )
    water_liters: float = Field(
        default=0.0, ge=0, alias="waterUsage",
        description="Monthly water use in liters",
    )
    waste_kg: float = Field(
        default=0.0, ge=0, alias="wasteGenerated",
        description="Monthly waste generated in kg",
    )
    fuel_liters: float = Field(
        default=0.0, ge=0, alias="fuelUsed",
        description="Monthly fuel use in liters",
    )

    @field_validator("business_type", mode="before")
    @classmethod
    def _coerce_category(cls, value: Any) -> Any:
        if value is None or (isinstance(value, str) and not value.strip()):
            return BusinessCategory.other
        if isinstance(value, BusinessCategory):
            return value
        return BusinessCategory(str(value))

    @field_validator("employees", mode="before")
    @classmethod
    def _coerce_employees(cls, value: Any) -> int:
        count = coerce_quantity(value)
        return max(int(count), 1)

    @field_validator("yearly_revenue", mode="before")
    @classmethod
    def _coerce_revenue(cls, value: Any) -> Optional[float]:
        if value is None or (isinstance(value, str) and not value.strip()):
            return None
        revenue = coerce_quantity(value)
        return revenue or None

    @field_validator(
        "electricity_kwh", "water_liters", "waste_kg", "fuel_liters", mode="before"
    )
    @classmethod
    def _coerce_usage(cls, value: Any) -> float:
        return coerce_quantity(value)

    @property
    def quantities(self) -> dict[str, float]:
        """Reported quantities keyed by resource name."""
        return {
            "electricity": self.electricity_kwh,
            "water": self.water_liters,
            "waste": self.waste_kg,
            "fuel": self.fuel_liters,
        }


# ---------------------------------------------------------------------------
# Footprint
# ---------------------------------------------------------------------------

class EmissionBreakdown(BaseModel):
    """Monthly CO2-equivalent (kg) attributed to each resource."""

    model_config = {"frozen": True}

    electricity: float = Field(default=0.0, ge=0)
    water: float = Field(default=0.0, ge=0)
    waste: float = Field(default=0.0, ge=0)
    fuel: float = Field(default=0.0, ge=0)

    def as_dict(self) -> dict[str, float]:
        return {
            "electricity": self.electricity,
            "water": self.water,
            "waste": self.waste,
            "fuel": self.fuel,
        }


class FootprintResult(BaseModel):
    """Emissions and bucketed footprint score derived from one usage record."""

    model_config = {"frozen": True, "populate_by_name": True}

    total_co2: float = Field(
        ..., ge=0, alias="totalCO2", description="Total kg CO2 per month"
    )
    breakdown: EmissionBreakdown = Field(
        ..., description="Per-resource kg CO2 per month"
    )
    footprint_score: Literal[15, 30, 50, 75] = Field(
        ..., alias="footprintScore",
        description="Bucketed severity score (15, 30, 50 or 75)",
    )


# ---------------------------------------------------------------------------
# Recommendations
# ---------------------------------------------------------------------------

class Recommendation(BaseModel):
    """A single efficiency recommendation."""

    model_config = {"frozen": True, "populate_by_name": True}

    category: Literal["energy", "waste"] = Field(..., description="Domain tag")
    title: str = Field(..., min_length=1, description="Unique title within category")
    description: str = Field(..., description="Human-readable explanation")
    savings: str = Field(default="N/A", description="Estimated monthly savings")
    impact: str = Field(default="N/A", description="Estimated CO2 reduction")


class CostSavings(BaseModel):
    """Headline savings summary shown alongside the recommendations."""

    model_config = {"frozen": True}

    monthly: str
    yearly: str
    breakdown: str


class RecommendationSet(BaseModel):
    """Energy and waste recommendations plus the derived reduction potential."""

    model_config = {"frozen": True, "populate_by_name": True}

    energy: list[Recommendation] = Field(default_factory=list)
    waste: list[Recommendation] = Field(default_factory=list)
    cost_savings: CostSavings = Field(..., alias="costSavings")
    reduction_potential: int = Field(
        ..., ge=10, le=50, alias="reductionPotential",
        description="Percentage headroom, clamped to [10, 50]",
    )

    @property
    def all(self) -> list[Recommendation]:
        """Energy recommendations followed by waste recommendations."""
        return [*self.energy, *self.waste]


# ---------------------------------------------------------------------------
# Benchmark, ROI, incentives
# ---------------------------------------------------------------------------

class BenchmarkResult(BaseModel):
    """Relative standing against a peer cohort average."""

    model_config = {"frozen": True, "populate_by_name": True}

    average_co2: float = Field(..., gt=0, alias="averageCO2")
    your_co2: float = Field(..., ge=0, alias="yourCO2")
    difference: int = Field(
        ..., description="Signed percentage difference vs. the average"
    )
    percentage: int = Field(..., ge=0, description="Absolute rounded difference")
    direction: Literal["above", "below"]
    context: Optional[str] = None
    employee_range: Optional[str] = Field(default=None, alias="employeeRange")
    source: Provenance


class ROIEntry(BaseModel):
    """Payback figures for one candidate action."""

    model_config = {"frozen": True, "populate_by_name": True}

    title: str
    upfront_cost: int = Field(..., alias="upfrontCost")
    monthly_savings: int = Field(..., alias="monthlySavings")
    payback_months: float = Field(..., ge=0, alias="paybackMonths")
    has_payback: bool = Field(
        ..., alias="hasPayback",
        description="False when monthly savings are zero or negative",
    )
    category: str = Field(default="energy")


class IncentiveEntry(BaseModel):
    """A financial incentive the business may be eligible for."""

    model_config = {"frozen": True, "populate_by_name": True}

    title: str
    description: str
    eligibility: str = ""
    value: str = ""
    category: Literal["solar", "energy", "waste", "tax", "other"] = "other"
    application_url: Optional[str] = Field(default=None, alias="applicationUrl")


# ---------------------------------------------------------------------------
# Scenario
# ---------------------------------------------------------------------------

SCENARIO_LIMITS: dict[str, float] = {
    "electricity": 50.0,
    "water": 40.0,
    "waste": 50.0,
    "fuel": 40.0,
}


class ScenarioInput(BaseModel):
    """Hypothetical percentage reductions per resource.

    Each knob is clamped to ``[0, SCENARIO_LIMITS[resource]]``.
    """

    model_config = {"frozen": True}

    electricity: float = 0.0
    water: float = 0.0
    waste: float = 0.0
    fuel: float = 0.0

    @field_validator("electricity", "water", "waste", "fuel", mode="before")
    @classmethod
    def _clamp_knob(cls, value: Any, info: ValidationInfo) -> float:
        return min(coerce_quantity(value), SCENARIO_LIMITS[info.field_name])

    def as_dict(self) -> dict[str, float]:
        return {
            "electricity": self.electricity,
            "water": self.water,
            "waste": self.waste,
            "fuel": self.fuel,
        }


class ScenarioResult(BaseModel):
    """Side-effect-free projection of a what-if scenario."""

    model_config = {"frozen": True, "populate_by_name": True}

    scenario: ScenarioInput
    adjusted_usage: UsageRecord = Field(..., alias="adjustedUsage")
    footprint: FootprintResult
    original_total: float = Field(..., ge=0, alias="originalFootprint")
    new_total: float = Field(..., ge=0, alias="newFootprint")
    reduction: float
    reduction_percent: float = Field(..., alias="reductionPercent")
    badge: Badge
    insight: Optional[str] = None


# ---------------------------------------------------------------------------
# Report
# ---------------------------------------------------------------------------

class SustainabilityReport(BaseModel):
    """Complete output of one analysis request.

    ``sources`` records the provenance of each reconciled subsection
    (``recommendations``, ``benchmark``, ``roi``, ``incentives``).
    """

    model_config = {"frozen": True, "populate_by_name": True}

    footprint: FootprintResult
    recommendations: RecommendationSet
    badge: Badge
    business_data: UsageRecord = Field(..., alias="businessData")
    benchmark: BenchmarkResult
    roi: list[ROIEntry] = Field(default_factory=list)
    incentives: list[IncentiveEntry] = Field(default_factory=list)
    sources: dict[str, Provenance] = Field(default_factory=dict)
    generated_at: datetime = Field(
        default_factory=lambda: datetime.now(timezone.utc),
        alias="generatedAt",
    )
