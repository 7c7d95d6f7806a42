# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Report assembly and what-if scenario simulation."""

from footprint_audit.analysis.engine import AnalysisEngine, run_analysis
from footprint_audit.analysis.scenario import scenario_insight, simulate

__all__ = ["AnalysisEngine", "run_analysis", "scenario_insight", "simulate"]
