# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Terminal-friendly visualizations using Unicode characters.

These functions return Rich-markup strings that render as bars and
gauges in the terminal via the Rich library.
"""

from __future__ import annotations

from footprint_audit.scoring.thresholds import SCORE_HIGH, SCORE_MODERATE


def horizontal_bar(
    label: str,
    value: float,
    max_value: float,
    width: int = 30,
    color: str = "cyan",
    unit: str = "kg",
) -> str:
    """Render a horizontal bar chart line using Unicode block characters.

    Returns a Rich-markup string like:
        Electricity......... [cyan]████████████░░░░░░[/] 1,230.0 kg
    """
    if max_value <= 0:
        return f"  {label:.<20} [dim]no data[/]"
    ratio = min(value / max_value, 1.0)
    filled = int(ratio * width)
    bar = "█" * filled + "░" * (width - filled)
    return f"  {label:.<20} [{color}]{bar}[/] {value:>10,.1f} {unit}"


def footprint_gauge(score: int, width: int = 20) -> str:
    """Gauge for the bucketed footprint score; higher is worse."""
    clamped = max(0, min(100, score))
    filled = int(clamped / 100 * width)

    if clamped > SCORE_HIGH:
        color = "red"
    elif clamped > SCORE_MODERATE:
        color = "yellow"
    else:
        color = "green"

    bar = "█" * filled + "░" * (width - filled)
    return f"[{color}]{bar}[/] {clamped}/100"


def percentage_bar(
    label: str,
    pct: float,
    width: int = 20,
) -> str:
    """Simple percentage bar: [label] ████░░░░ 45%"""
    clamped = max(0.0, min(100.0, pct))
    filled = int(clamped / 100 * width)
    empty = width - filled

    if clamped >= 30:
        color = "green"
    elif clamped >= 10:
        color = "yellow"
    else:
        color = "red"

    bar = "█" * filled + "░" * empty
    return f"{label} [{color}]{bar}[/] {clamped:.0f}%"
