# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Footprint score buckets, reduction-potential bounds and badge tiers.

The footprint score is deliberately coarse: consumers rely on the four
bucket values, never on the raw percentage.
"""

import math

from footprint_audit.data.models import Badge

# ---------------------------------------------------------------------------
# Footprint score
# ---------------------------------------------------------------------------
KG_PER_EMPLOYEE_FULL_SCALE = 50.0  # per-employee kg CO2 mapping to raw 100

RAW_SCORE_LOW = 20       # raw < 20  -> 15
RAW_SCORE_MODERATE = 40  # raw < 40  -> 30
RAW_SCORE_HIGH = 60      # raw < 60  -> 50, else 75

SCORE_LOW = 15
SCORE_MODERATE = 30
SCORE_HIGH = 50
SCORE_SEVERE = 75

FOOTPRINT_SCORE_LEVELS = (SCORE_LOW, SCORE_MODERATE, SCORE_HIGH, SCORE_SEVERE)

# ---------------------------------------------------------------------------
# Reduction potential (percent)
# ---------------------------------------------------------------------------
REDUCTION_POTENTIAL_MIN = 10
REDUCTION_POTENTIAL_MAX = 50

# ---------------------------------------------------------------------------
# Badge ladder (reduction potential percent)
# ---------------------------------------------------------------------------
PLATINUM_MIN = 50
GOLD_MIN = 30
SILVER_MIN = 20
# Below 20 = Bronze


# ---------------------------------------------------------------------------
# Utility functions
# ---------------------------------------------------------------------------

def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves always going up (20.5 -> 21)."""
    return int(math.floor(value + 0.5))


def raw_footprint_score(total_co2: float, employees: int) -> float:
    """Continuous 0-100 severity from emissions per employee."""
    per_employee = total_co2 / max(employees, 1)
    return min(100.0, (per_employee / KG_PER_EMPLOYEE_FULL_SCALE) * 100)


def bucket_score(raw: float) -> int:
    """Collapse a raw score into one of 15, 30, 50 or 75."""
    if raw < RAW_SCORE_LOW:
        return SCORE_LOW
    if raw < RAW_SCORE_MODERATE:
        return SCORE_MODERATE
    if raw < RAW_SCORE_HIGH:
        return SCORE_HIGH
    return SCORE_SEVERE


def clamp_reduction_potential(value: float) -> int:
    """Round a percentage and clamp it to the supported range."""
    return int(
        min(REDUCTION_POTENTIAL_MAX, max(REDUCTION_POTENTIAL_MIN, round_half_up(value)))
    )


def reduction_potential(footprint_score: int) -> int:
    """Headroom derived from the footprint score, clamped to [10, 50]."""
    return clamp_reduction_potential(100 - footprint_score)


def classify_badge(reduction_pct: float) -> Badge:
    """Map a reduction percentage to a badge tier (first match wins)."""
    if reduction_pct >= PLATINUM_MIN:
        return Badge.platinum
    if reduction_pct >= GOLD_MIN:
        return Badge.gold
    if reduction_pct >= SILVER_MIN:
        return Badge.silver
    return Badge.bronze
