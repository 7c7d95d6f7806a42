# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Emission factors and the resource -> CO2-equivalent conversion."""

from __future__ import annotations

from types import MappingProxyType

from footprint_audit.data.models import EmissionBreakdown, UsageRecord

# ---------------------------------------------------------------------------
# Emission factors (kg CO2e per unit)
# ---------------------------------------------------------------------------
ELECTRICITY_KG_PER_KWH = 0.82
WATER_KG_PER_LITER = 0.0003   # treatment and distribution
WASTE_KG_PER_KG = 1.9
FUEL_KG_PER_LITER = 2.31

EMISSION_FACTORS = MappingProxyType(
    {
        "electricity": ELECTRICITY_KG_PER_KWH,
        "water": WATER_KG_PER_LITER,
        "waste": WASTE_KG_PER_KG,
        "fuel": FUEL_KG_PER_LITER,
    }
)

RESOURCES: tuple[str, ...] = ("electricity", "water", "waste", "fuel")


def compute_emissions(usage: UsageRecord) -> tuple[float, EmissionBreakdown]:
    """Convert reported quantities into monthly kg CO2e.

    Returns ``(total, breakdown)``.  The total is the plain sum of the four
    per-resource products, so it always matches the breakdown.  Quantities
    are already coerced to non-negative floats by :class:`UsageRecord`.
    """
    quantities = usage.quantities
    products = {
        resource: quantities[resource] * EMISSION_FACTORS[resource]
        for resource in RESOURCES
    }
    total = (
        products["electricity"]
        + products["water"]
        + products["waste"]
        + products["fuel"]
    )
    return total, EmissionBreakdown(**products)
