# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Static reference data: peer benchmarks and the ROI cost catalog.

Both tables ship as JSON documents under ``footprint_audit/data/tables``
and are loaded once into an immutable :class:`ReferenceData` object that
callers pass explicitly to every component that needs it.
"""

from __future__ import annotations

import json
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from pydantic import BaseModel, Field

from footprint_audit.data.models import BusinessCategory, SizeBucket

BENCHMARKS_FILE = "benchmarks.json"
ROI_CATALOG_FILE = "roi_catalog.json"

FALLBACK_CATEGORY = BusinessCategory.other.value

# Size bucket upper bounds (inclusive)
SMALL_MAX_EMPLOYEES = 10
MEDIUM_MAX_EMPLOYEES = 25


class BenchmarkRow(BaseModel):
    """Average monthly CO2 for one (category, size bucket) cohort."""

    model_config = {"frozen": True, "populate_by_name": True}

    average_co2: float = Field(..., gt=0, alias="averageCO2")
    employee_range: str = Field(..., alias="employeeRange")


class CatalogItem(BaseModel):
    """Cost and savings figures for one known recommendation title."""

    model_config = {"frozen": True, "populate_by_name": True}

    title: str
    category: str
    upfront_cost: float = Field(..., ge=0, alias="upfrontCost")
    monthly_savings: float = Field(..., alias="monthlySavings")
    description: str = ""


def size_bucket(employees: int) -> SizeBucket:
    """Map an employee count to its benchmark size bucket."""
    if employees <= SMALL_MAX_EMPLOYEES:
        return SizeBucket.small
    if employees <= MEDIUM_MAX_EMPLOYEES:
        return SizeBucket.medium
    return SizeBucket.large


class ReferenceData:
    """Read-only lookup tables shared by the analysis components.

    Usage::

        reference = load_reference_data()
        row, bucket = reference.benchmark_for(BusinessCategory.office, 12)
        item = reference.catalog_item("Switch to LED Lighting")
    """

    def __init__(
        self,
        benchmarks: Mapping[str, Mapping[str, BenchmarkRow]],
        catalog: Mapping[str, CatalogItem],
    ) -> None:
        if FALLBACK_CATEGORY not in benchmarks:
            raise ValueError(
                f"Benchmark table must contain a '{FALLBACK_CATEGORY}' category"
            )
        self._benchmarks = MappingProxyType(
            {name: MappingProxyType(dict(rows)) for name, rows in benchmarks.items()}
        )
        self._catalog = MappingProxyType(dict(catalog))

    @property
    def benchmarks(self) -> Mapping[str, Mapping[str, BenchmarkRow]]:
        return self._benchmarks

    @property
    def catalog(self) -> Mapping[str, CatalogItem]:
        return self._catalog

    def benchmark_for(
        self, category: BusinessCategory | str, employees: int
    ) -> tuple[BenchmarkRow, SizeBucket]:
        """Return the benchmark row for a business, falling back to "Other".

        The fallback applies both when the category is absent from the
        table and when the category lacks a row for the size bucket.
        """
        name = category.value if isinstance(category, BusinessCategory) else str(category)
        bucket = size_bucket(employees)
        rows = self._benchmarks.get(name)
        if rows is None or bucket.value not in rows:
            rows = self._benchmarks[FALLBACK_CATEGORY]
        return rows[bucket.value], bucket

    def catalog_item(self, title: str) -> CatalogItem | None:
        """Look up a catalog entry by exact title; ``None`` on a miss."""
        return self._catalog.get(title)

    def catalog_titles(self, category: str | None = None) -> list[str]:
        """Known catalog titles, optionally filtered by category."""
        return [
            title
            for title, item in self._catalog.items()
            if category is None or item.category == category
        ]


# ---------------------------------------------------------------------------
# Loading
# ---------------------------------------------------------------------------

def _read_table(directory: Path | None, filename: str) -> Any:
    if directory is not None:
        path = Path(directory) / filename
        if not path.exists():
            raise FileNotFoundError(f"Reference table not found: {path}")
        return json.loads(path.read_text(encoding="utf-8"))

    resource = resources.files("footprint_audit.data") / "tables" / filename
    return json.loads(resource.read_text(encoding="utf-8"))


def parse_benchmarks(raw: Mapping[str, Any]) -> dict[str, dict[str, BenchmarkRow]]:
    """Validate the nested category -> size bucket benchmark document."""
    table: dict[str, dict[str, BenchmarkRow]] = {}
    for category, rows in raw.items():
        table[category] = {
            bucket: BenchmarkRow.model_validate(row) for bucket, row in rows.items()
        }
    return table


def parse_catalog(raw: Mapping[str, Any]) -> dict[str, CatalogItem]:
    """Flatten the category -> title catalog document into a title index."""
    catalog: dict[str, CatalogItem] = {}
    for category, items in raw.items():
        for title, fields in items.items():
            if title in catalog:
                raise ValueError(f"Duplicate ROI catalog title: {title!r}")
            catalog[title] = CatalogItem.model_validate(
                {**fields, "title": title, "category": category}
            )
    return catalog


def load_reference_data(directory: str | Path | None = None) -> ReferenceData:
    """Load both reference tables.

    Args:
        directory: Optional directory holding ``benchmarks.json`` and
            ``roi_catalog.json``.  Defaults to the tables bundled with the
            package.

    Raises:
        FileNotFoundError: If *directory* is given and a table is missing.
    """
    base = Path(directory) if directory is not None else None
    benchmarks = parse_benchmarks(_read_table(base, BENCHMARKS_FILE))
    catalog = parse_catalog(_read_table(base, ROI_CATALOG_FILE))
    return ReferenceData(benchmarks, catalog)
