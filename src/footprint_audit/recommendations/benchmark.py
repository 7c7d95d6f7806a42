# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Peer benchmark comparison."""

from __future__ import annotations

from typing import Optional

from footprint_audit.data.models import BenchmarkResult, Provenance, UsageRecord
from footprint_audit.data.reference import ReferenceData
from footprint_audit.scoring.thresholds import round_half_up


def compare_to_average(
    your_co2: float,
    average_co2: float,
    source: Provenance,
    context: Optional[str] = None,
    employee_range: Optional[str] = None,
) -> BenchmarkResult:
    """Compare a monthly total against a cohort average.

    ``difference`` is the signed percentage ``(yours - avg) / avg * 100``
    rounded to the nearest integer; direction is "above" only when that
    rounded value is positive.

    Raises:
        ValueError: If *average_co2* is not positive.
    """
    if average_co2 <= 0:
        raise ValueError(f"Benchmark average must be positive, got {average_co2}")
    difference = round_half_up((your_co2 - average_co2) / average_co2 * 100)
    return BenchmarkResult(
        average_co2=average_co2,
        your_co2=your_co2,
        difference=difference,
        percentage=abs(difference),
        direction="above" if difference > 0 else "below",
        context=context,
        employee_range=employee_range,
        source=source,
    )


def static_benchmark(
    your_co2: float,
    usage: UsageRecord,
    reference: ReferenceData,
) -> BenchmarkResult:
    """Benchmark against the static table row for the business's cohort."""
    row, bucket = reference.benchmark_for(usage.business_type, usage.employees)
    context = (
        f"Compared with {bucket.value} {usage.business_type.value} businesses "
        f"({row.employee_range})"
    )
    return compare_to_average(
        your_co2,
        row.average_co2,
        source=Provenance.static,
        context=context,
        employee_range=row.employee_range,
    )
