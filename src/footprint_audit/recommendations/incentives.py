# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Static incentive selection for the fallback path."""

from __future__ import annotations

from footprint_audit.data.models import IncentiveEntry, UsageRecord
from footprint_audit.recommendations.templates import (
    INCENTIVE_CATALOG,
    IncentiveTemplate,
)


def _applies(template: IncentiveTemplate, usage: UsageRecord) -> bool:
    if template.requires_resource is not None:
        if usage.quantities.get(template.requires_resource, 0.0) <= 0:
            return False
    if template.business_types is not None:
        return usage.business_type in template.business_types
    return True


def select_incentives(usage: UsageRecord) -> list[IncentiveEntry]:
    """Return catalog incentives that apply to *usage*, in catalog order."""
    return [
        IncentiveEntry(
            title=t.title,
            description=t.description,
            eligibility=t.eligibility,
            value=t.value,
            category=t.category,
            application_url=t.application_url,
        )
        for t in INCENTIVE_CATALOG
        if _applies(t, usage)
    ]
