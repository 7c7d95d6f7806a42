# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Static recommendation and incentive definitions.

These back the deterministic fallback path.  Every recommendation title
here is also a key in the ROI catalog (``data/tables/roi_catalog.json``),
otherwise its ROI row would be silently dropped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from footprint_audit.data.models import BusinessCategory

CURRENCY = "₹"


@dataclass(frozen=True)
class RecommendationTemplate:
    """Immutable template for a single static recommendation."""

    title: str
    category: str  # "energy" or "waste"
    description: str
    resource: str  # emission breakdown key the action reduces
    reduction_fraction: float  # share of that resource's CO2 removed
    savings_hint: str  # used when the ROI catalog has no figure


LED_LIGHTING = RecommendationTemplate(
    title="Switch to LED Lighting",
    category="energy",
    description=(
        "Replace all incandescent and fluorescent bulbs with LED lights. "
        "LEDs use 75% less energy and last 25 times longer."
    ),
    resource="electricity",
    reduction_fraction=0.08,
    savings_hint=f"{CURRENCY}2,000-5,000/month",
)

HVAC_OPTIMIZATION = RecommendationTemplate(
    title="Optimize HVAC System",
    category="energy",
    description=(
        "Regular maintenance, programmable thermostats, and proper insulation "
        "can reduce energy consumption by 20-30%."
    ),
    resource="electricity",
    reduction_fraction=0.15,
    savings_hint=f"{CURRENCY}3,000-8,000/month",
)

ROOFTOP_SOLAR = RecommendationTemplate(
    title="Install Rooftop Solar Panels",
    category="energy",
    description=(
        "Electricity is the largest share of your footprint. A grid-tied "
        "rooftop system sized to daytime load offsets a large part of it."
    ),
    resource="electricity",
    reduction_fraction=0.35,
    savings_hint=f"{CURRENCY}6,000-12,000/month",
)

ROUTE_OPTIMIZATION = RecommendationTemplate(
    title="Optimize Delivery and Vehicle Routes",
    category="energy",
    description=(
        "Plan routes, consolidate trips and keep vehicles serviced to cut "
        "fuel consumption."
    ),
    resource="fuel",
    reduction_fraction=0.15,
    savings_hint=f"{CURRENCY}1,500-3,500/month",
)

WASTE_SEGREGATION = RecommendationTemplate(
    title="Implement Waste Segregation",
    category="waste",
    description=(
        "Separate recyclable materials to reduce landfill waste and "
        "potentially earn from recycling programs."
    ),
    resource="waste",
    reduction_fraction=0.2,
    savings_hint=f"{CURRENCY}500-1,500/month",
)

COMPOSTING = RecommendationTemplate(
    title="Start a Composting Program",
    category="waste",
    description=(
        "Compost food and organic waste on site instead of sending it to "
        "landfill, and reuse the output or sell it locally."
    ),
    resource="waste",
    reduction_fraction=0.25,
    savings_hint=f"{CURRENCY}800-2,000/month",
)

PAPERLESS = RecommendationTemplate(
    title="Go Paperless",
    category="waste",
    description=(
        "Move invoices, receipts and internal documents to digital tools "
        "to cut paper purchases and disposal."
    ),
    resource="waste",
    reduction_fraction=0.05,
    savings_hint=f"{CURRENCY}500-1,000/month",
)

BASELINE_RECOMMENDATIONS: tuple[RecommendationTemplate, ...] = (
    LED_LIGHTING,
    HVAC_OPTIMIZATION,
    WASTE_SEGREGATION,
)

COST_SAVINGS_BREAKDOWN = (
    "Combined savings from energy optimization and waste reduction"
)


# ---------------------------------------------------------------------------
# Incentives
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class IncentiveTemplate:
    """A financial incentive and the conditions under which it applies."""

    title: str
    description: str
    eligibility: str
    value: str
    category: str  # solar, energy, waste, tax, other
    application_url: Optional[str] = None
    requires_resource: Optional[str] = None  # reported quantity must be > 0
    business_types: Optional[frozenset[BusinessCategory]] = None


INCENTIVE_CATALOG: tuple[IncentiveTemplate, ...] = (
    IncentiveTemplate(
        title="Rooftop Solar Capital Subsidy",
        description=(
            "Central and state schemes subsidise part of the capital cost of "
            "grid-connected rooftop solar for commercial premises."
        ),
        eligibility="Businesses with a grid connection and usable roof space",
        value="Up to 30% of system cost, varies by state",
        category="solar",
        requires_resource="electricity",
    ),
    IncentiveTemplate(
        title="MSME Energy Efficiency Financing",
        description=(
            "Concessional loans for energy-efficient equipment such as LED "
            "lighting, efficient motors and HVAC upgrades."
        ),
        eligibility="Registered micro, small and medium enterprises",
        value="Reduced interest rate, collateral-free up to scheme limit",
        category="energy",
        application_url="https://www.sidbi.in",
        requires_resource="electricity",
    ),
    IncentiveTemplate(
        title="Waste Recycling Revenue Programme",
        description=(
            "Authorised recyclers and municipal programmes buy segregated dry "
            "waste and collect organic waste at reduced fees."
        ),
        eligibility="Businesses that segregate waste at source",
        value="Resale income plus lower disposal fees",
        category="waste",
        requires_resource="waste",
    ),
    IncentiveTemplate(
        title="Accelerated Depreciation on Energy-Saving Equipment",
        description=(
            "Qualifying renewable and energy-saving assets can be depreciated "
            "faster, lowering taxable income in the purchase year."
        ),
        eligibility="Tax-paying businesses purchasing qualifying equipment",
        value="Higher first-year depreciation on eligible assets",
        category="tax",
    ),
    IncentiveTemplate(
        title="ZED Certification Support",
        description=(
            "Subsidised Zero Defect Zero Effect certification for "
            "manufacturers improving quality and environmental performance."
        ),
        eligibility="Registered MSME manufacturers",
        value="Certification cost subsidy of up to 80% for micro enterprises",
        category="other",
        application_url="https://zed.msme.gov.in",
        business_types=frozenset(
            {BusinessCategory.small_factory, BusinessCategory.small_farm}
        ),
    ),
    IncentiveTemplate(
        title="Green Business Certification Support",
        description=(
            "Local chambers and state agencies offer assistance with energy "
            "audits and green certification for small businesses."
        ),
        eligibility="Small businesses completing an energy audit",
        value="Free or subsidised audit and certification guidance",
        category="other",
        application_url="https://beeindia.gov.in",
    ),
)
