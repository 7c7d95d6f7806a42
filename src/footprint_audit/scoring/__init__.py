# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Emission model, footprint scorer and badge classifier."""

from footprint_audit.scoring.engine import ScoringEngine, build_footprint, score_footprint

__all__ = ["ScoringEngine", "build_footprint", "score_footprint"]
