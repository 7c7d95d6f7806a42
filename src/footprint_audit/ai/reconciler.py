# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Reconciliation of untrusted generated text with the report schema.

The provider returns free-form text that may or may not contain the JSON
object that was asked for.  The first balanced ``{...}`` substring is
extracted and parsed, then each report subsection (recommendations,
benchmark, ROI, incentives) is validated on its own.  Every step returns a
:class:`ParseResult` rather than raising, so a broken subsection only
costs that subsection: the analysis engine falls back to static data for
it and keeps whatever else was usable.
"""

from __future__ import annotations

import json
import logging
import math
import re
from dataclasses import dataclass, field
from typing import Any, Generic, Optional, TypeVar

from pydantic import ValidationError

from footprint_audit.data.models import CostSavings, IncentiveEntry, Recommendation, ROIEntry
from footprint_audit.recommendations.roi import make_roi_entry
from footprint_audit.scoring.thresholds import clamp_reduction_potential

logger = logging.getLogger(__name__)

T = TypeVar("T")

INCENTIVE_CATEGORIES = frozenset({"solar", "energy", "waste", "tax", "other"})
ROI_CATEGORIES = frozenset({"energy", "waste"})

_CURRENCY_PREFIX = re.compile(r"^(?:rs\.?|inr|usd|[\u20b9$\u20ac\u00a3])\s*", re.IGNORECASE)
_LEADING_NUMBER = re.compile(r"^-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?")
# "1000-1500", "1000 to 1500": a second number means a range, not a figure
_RANGE_TAIL = re.compile(r"^\s*(?:-|\u2013|to)\s*\d", re.IGNORECASE)


@dataclass(frozen=True)
class ParseResult(Generic[T]):
    """Either a parsed value or the reason parsing failed."""

    value: Optional[T] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @classmethod
    def success(cls, value: T) -> "ParseResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str) -> "ParseResult[T]":
        return cls(error=error)


@dataclass(frozen=True)
class GeneratedRecommendations:
    """Validated recommendation lists from a generated response."""

    energy: list[Recommendation]
    waste: list[Recommendation]
    cost_savings: Optional[CostSavings] = None
    reduction_potential: Optional[int] = None


@dataclass(frozen=True)
class GeneratedBenchmark:
    """A generated peer average with optional descriptive context."""

    average_co2: float
    context: Optional[str] = None


@dataclass(frozen=True)
class ReconciledSections:
    """Independent parse outcome for each report subsection."""

    recommendations: ParseResult[GeneratedRecommendations] = field(
        default_factory=lambda: ParseResult.failure("no response")
    )
    benchmark: ParseResult[GeneratedBenchmark] = field(
        default_factory=lambda: ParseResult.failure("no response")
    )
    roi: ParseResult[list[ROIEntry]] = field(
        default_factory=lambda: ParseResult.failure("no response")
    )
    incentives: ParseResult[list[IncentiveEntry]] = field(
        default_factory=lambda: ParseResult.failure("no response")
    )


# ---------------------------------------------------------------------------
# Primitive coercion
# ---------------------------------------------------------------------------

def _to_number(value: Any) -> Optional[float]:
    """Read a number from a JSON value, tolerating currency formatting."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        cleaned = _CURRENCY_PREFIX.sub("", value.strip()).replace(",", "")
        match = _LEADING_NUMBER.match(cleaned)
        if match is None or _RANGE_TAIL.match(cleaned[match.end():]):
            return None
        number = float(match.group())
    else:
        return None
    return number if math.isfinite(number) else None


def _to_text(value: Any) -> Optional[str]:
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, (int, float)):
        return str(value)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


# ---------------------------------------------------------------------------
# Extraction
# ---------------------------------------------------------------------------

def find_balanced_object(text: str) -> Optional[str]:
    """Return the first balanced ``{...}`` substring of *text*, if any.

    Braces inside JSON string literals are ignored.
    """
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    in_string = False
    escaped = False
    for index in range(start, len(text)):
        char = text[index]
        if in_string:
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char == "{":
            depth += 1
        elif char == "}":
            depth -= 1
            if depth == 0:
                return text[start : index + 1]
    return None


def extract_json_object(text: Optional[str]) -> ParseResult[dict[str, Any]]:
    """Extract and decode the structured payload embedded in *text*."""
    if text is None or not text.strip():
        return ParseResult.failure("empty response")
    candidate = find_balanced_object(text)
    if candidate is None:
        return ParseResult.failure("no balanced JSON object in response")
    try:
        payload = json.loads(candidate)
    except json.JSONDecodeError as exc:
        return ParseResult.failure(f"invalid JSON: {exc.msg}")
    if not isinstance(payload, dict):
        return ParseResult.failure("top-level JSON value is not an object")
    return ParseResult.success(payload)


# ---------------------------------------------------------------------------
# Subsection parsers
# ---------------------------------------------------------------------------

def _parse_recommendation_list(items: list[Any], category: str) -> list[Recommendation]:
    recommendations: list[Recommendation] = []
    seen: set[str] = set()
    for item in items:
        if not isinstance(item, dict):
            continue
        title = _to_text(item.get("title"))
        description = _to_text(item.get("description"))
        if title is None or description is None or title in seen:
            continue
        try:
            rec = Recommendation(
                category=category,
                title=title,
                description=description,
                savings=_to_text(item.get("savings")) or "N/A",
                impact=_to_text(item.get("impact")) or "N/A",
            )
        except ValidationError:
            continue
        seen.add(title)
        recommendations.append(rec)
    return recommendations


def _parse_cost_savings(raw: Any) -> Optional[CostSavings]:
    if not isinstance(raw, dict):
        return None
    monthly = _to_text(raw.get("monthly"))
    yearly = _to_text(raw.get("yearly"))
    if monthly is None or yearly is None:
        return None
    return CostSavings(
        monthly=monthly,
        yearly=yearly,
        breakdown=_to_text(raw.get("breakdown")) or "",
    )


def parse_recommendations(payload: dict[str, Any]) -> ParseResult[GeneratedRecommendations]:
    """Validate the ``energy``/``waste`` lists and their companions.

    Both lists must be present.  Items without a title or description, and
    repeated titles within a category, are dropped.  At least one item must
    survive.  ``costSavings`` and ``reductionPotential`` are optional.
    """
    energy_raw = payload.get("energy")
    waste_raw = payload.get("waste")
    if not isinstance(energy_raw, list) or not isinstance(waste_raw, list):
        return ParseResult.failure("'energy' and 'waste' must both be lists")

    energy = _parse_recommendation_list(energy_raw, "energy")
    waste = _parse_recommendation_list(waste_raw, "waste")
    if not energy and not waste:
        return ParseResult.failure("no valid recommendations")

    potential_raw = _to_number(payload.get("reductionPotential"))
    potential = (
        clamp_reduction_potential(potential_raw) if potential_raw is not None else None
    )
    return ParseResult.success(
        GeneratedRecommendations(
            energy=energy,
            waste=waste,
            cost_savings=_parse_cost_savings(payload.get("costSavings")),
            reduction_potential=potential,
        )
    )


def parse_benchmark(payload: dict[str, Any]) -> ParseResult[GeneratedBenchmark]:
    """Validate the ``benchmark`` object; its average must be positive."""
    raw = payload.get("benchmark")
    if not isinstance(raw, dict):
        return ParseResult.failure("'benchmark' missing or not an object")
    average = _to_number(raw.get("averageCO2"))
    if average is None or average <= 0:
        return ParseResult.failure("'benchmark.averageCO2' must be a positive number")
    return ParseResult.success(
        GeneratedBenchmark(average_co2=average, context=_to_text(raw.get("context")))
    )


def parse_roi(payload: dict[str, Any]) -> ParseResult[list[ROIEntry]]:
    """Validate ``roi`` entries; each needs title, upfrontCost and monthlySavings."""
    raw = payload.get("roi")
    if not isinstance(raw, list):
        return ParseResult.failure("'roi' missing or not a list")

    entries: list[ROIEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        title = _to_text(item.get("title"))
        cost = _to_number(item.get("upfrontCost"))
        savings = _to_number(item.get("monthlySavings"))
        if title is None or cost is None or savings is None or cost < 0:
            continue
        category = (_to_text(item.get("category")) or "energy").lower()
        entries.append(
            make_roi_entry(
                title, cost, savings, category if category in ROI_CATEGORIES else "other"
            )
        )
    if not entries:
        return ParseResult.failure("no usable ROI entries")
    return ParseResult.success(entries)


def parse_incentives(payload: dict[str, Any]) -> ParseResult[list[IncentiveEntry]]:
    """Validate ``incentives``; unknown categories are filed under "other"."""
    raw = payload.get("incentives")
    if not isinstance(raw, list):
        return ParseResult.failure("'incentives' missing or not a list")

    incentives: list[IncentiveEntry] = []
    for item in raw:
        if not isinstance(item, dict):
            continue
        title = _to_text(item.get("title"))
        description = _to_text(item.get("description"))
        if title is None or description is None:
            continue
        category = (_to_text(item.get("category")) or "other").lower()
        url = _to_text(item.get("applicationUrl"))
        try:
            incentives.append(
                IncentiveEntry(
                    title=title,
                    description=description,
                    eligibility=_to_text(item.get("eligibility")) or "",
                    value=_to_text(item.get("value")) or "",
                    category=category if category in INCENTIVE_CATEGORIES else "other",
                    application_url=url if url and url.startswith("http") else None,
                )
            )
        except ValidationError:
            continue
    if not incentives:
        return ParseResult.failure("no valid incentives")
    return ParseResult.success(incentives)


# ---------------------------------------------------------------------------
# Reconciler
# ---------------------------------------------------------------------------

class ResponseReconciler:
    """Parse a generated response into independently validated sections.

    Usage::

        sections = ResponseReconciler().parse(raw_text)
        if sections.benchmark.ok:
            ...
    """

    def parse(self, text: Optional[str]) -> ReconciledSections:
        """Parse *text*; never raises.

        When the text holds no decodable object every section fails with
        the same reason; otherwise each section succeeds or fails alone.
        """
        extracted = extract_json_object(text)
        if not extracted.ok:
            if text is not None:
                logger.info("Generated response unusable: %s", extracted.error)
            reason = extracted.error or "no response"
            return ReconciledSections(
                recommendations=ParseResult.failure(reason),
                benchmark=ParseResult.failure(reason),
                roi=ParseResult.failure(reason),
                incentives=ParseResult.failure(reason),
            )

        payload = extracted.value or {}
        sections = ReconciledSections(
            recommendations=parse_recommendations(payload),
            benchmark=parse_benchmark(payload),
            roi=parse_roi(payload),
            incentives=parse_incentives(payload),
        )
        for name in ("recommendations", "benchmark", "roi", "incentives"):
            result: ParseResult[Any] = getattr(sections, name)
            if not result.ok:
                logger.info("Generated %s section rejected: %s", name, result.error)
        return sections
