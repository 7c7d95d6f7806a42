# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Return-on-investment ranking.

Every entry carries a simple payback period (upfront cost / monthly
savings).  The ranked list is ordered fastest payback first and the sort
is stable, so ties keep their input order.
"""

from __future__ import annotations

from typing import Iterable

from footprint_audit.data.models import Recommendation, ROIEntry
from footprint_audit.data.reference import ReferenceData


def payback_months(upfront_cost: float, monthly_savings: float) -> float:
    """Months to recoup *upfront_cost*, rounded to one decimal.

    Zero or negative savings report ``0.0`` by convention; callers that
    need to tell "no payback" apart use :attr:`ROIEntry.has_payback`.
    """
    if monthly_savings > 0:
        return round(upfront_cost / monthly_savings, 1)
    return 0.0


def make_roi_entry(
    title: str,
    upfront_cost: float,
    monthly_savings: float,
    category: str = "energy",
) -> ROIEntry:
    """Build an :class:`ROIEntry` with costs rounded to whole currency units."""
    cost = int(round(upfront_cost))
    savings = int(round(monthly_savings))
    return ROIEntry(
        title=title,
        upfront_cost=cost,
        monthly_savings=savings,
        payback_months=payback_months(cost, savings),
        has_payback=savings > 0,
        category=category,
    )


def rank_roi(entries: Iterable[ROIEntry]) -> list[ROIEntry]:
    """Order entries ascending by payback months (stable)."""
    return sorted(entries, key=lambda e: e.payback_months)


def roi_from_catalog(
    recommendations: Iterable[Recommendation],
    reference: ReferenceData,
) -> list[ROIEntry]:
    """Join recommendation titles against the ROI catalog and rank them.

    Titles missing from the catalog are dropped without error.
    """
    entries: list[ROIEntry] = []
    seen: set[str] = set()
    for rec in recommendations:
        if rec.title in seen:
            continue
        item = reference.catalog_item(rec.title)
        if item is None:
            continue
        seen.add(rec.title)
        entries.append(
            make_roi_entry(
                item.title, item.upfront_cost, item.monthly_savings, rec.category
            )
        )
    return rank_roi(entries)
