# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Static recommendations, ROI ranking, benchmarks and incentives."""

from footprint_audit.recommendations.engine import StaticRecommendationEngine

__all__ = ["StaticRecommendationEngine"]
