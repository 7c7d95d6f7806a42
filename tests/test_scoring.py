# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the emission model, footprint scorer and badge classifier."""

from __future__ import annotations

import pytest

from footprint_audit.data.models import Badge, UsageRecord
from footprint_audit.scoring.emissions import EMISSION_FACTORS, compute_emissions
from footprint_audit.scoring.engine import ScoringEngine, build_footprint, score_footprint
from footprint_audit.scoring.thresholds import (
    FOOTPRINT_SCORE_LEVELS,
    bucket_score,
    classify_badge,
    clamp_reduction_potential,
    raw_footprint_score,
    reduction_potential,
    round_half_up,
)


class TestEmissions:
    def test_factors(self):
        assert dict(EMISSION_FACTORS) == {
            "electricity": 0.82,
            "water": 0.0003,
            "waste": 1.9,
            "fuel": 2.31,
        }

    def test_breakdown(self, office_usage: UsageRecord):
        total, breakdown = compute_emissions(office_usage)
        assert breakdown.electricity == pytest.approx(1230.0)
        assert breakdown.water == pytest.approx(1.5)
        assert breakdown.waste == pytest.approx(380.0)
        assert breakdown.fuel == pytest.approx(231.0)
        assert total == pytest.approx(1842.5)

    def test_total_matches_breakdown(self, office_usage: UsageRecord):
        total, breakdown = compute_emissions(office_usage)
        assert total == pytest.approx(sum(breakdown.as_dict().values()))

    def test_zero_usage(self):
        total, breakdown = compute_emissions(UsageRecord())
        assert total == 0.0
        assert breakdown.as_dict() == {
            "electricity": 0.0, "water": 0.0, "waste": 0.0, "fuel": 0.0,
        }


class TestFootprintScore:
    @pytest.mark.parametrize(
        "raw, expected",
        [(0, 15), (19.99, 15), (20, 30), (39.9, 30), (40, 50), (59.9, 50), (60, 75), (100, 75)],
    )
    def test_buckets(self, raw, expected):
        assert bucket_score(raw) == expected

    def test_raw_score_capped(self):
        assert raw_footprint_score(10_000, 1) == 100.0

    def test_raw_score_per_employee(self):
        # 100 kg over 10 employees = 10 kg each = 20% of the 50 kg scale
        assert raw_footprint_score(100, 10) == pytest.approx(20.0)

    def test_score_only_takes_bucket_values(self):
        for total in (0, 50, 150, 250, 1000, 99999):
            assert score_footprint(total, 5) in FOOTPRINT_SCORE_LEVELS

    def test_build_footprint(self, office_usage: UsageRecord):
        footprint = build_footprint(office_usage)
        assert footprint.total_co2 == pytest.approx(1842.5)
        assert footprint.footprint_score == 75


class TestReductionPotential:
    @pytest.mark.parametrize(
        "score, expected", [(15, 50), (30, 50), (50, 50), (75, 25)]
    )
    def test_from_score(self, score, expected):
        assert reduction_potential(score) == expected

    def test_clamped_high(self):
        assert clamp_reduction_potential(55) == 50

    def test_clamped_low(self):
        assert clamp_reduction_potential(8) == 10

    def test_rounded(self):
        assert clamp_reduction_potential(24.6) == 25

    def test_half_rounds_up(self):
        assert clamp_reduction_potential(20.5) == 21
        assert classify_badge(clamp_reduction_potential(19.5)) is Badge.silver

    @pytest.mark.parametrize("value, expected", [(0.5, 1), (2.5, 3), (-0.5, 0), (12.49, 12)])
    def test_round_half_up(self, value, expected):
        assert round_half_up(value) == expected


class TestBadge:
    @pytest.mark.parametrize(
        "pct, expected",
        [
            (0, Badge.bronze),
            (19.9, Badge.bronze),
            (20, Badge.silver),
            (29.9, Badge.silver),
            (30, Badge.gold),
            (49.9, Badge.gold),
            (50, Badge.platinum),
            (80, Badge.platinum),
        ],
    )
    def test_ladder(self, pct, expected):
        assert classify_badge(pct) is expected

    def test_monotonic(self):
        previous = classify_badge(0).rank
        for pct in range(0, 101):
            rank = classify_badge(pct).rank
            assert rank >= previous
            previous = rank

    def test_clamped_potentials(self):
        assert classify_badge(clamp_reduction_potential(55)) is Badge.platinum
        assert classify_badge(clamp_reduction_potential(8)) is Badge.bronze


class TestScoringEngine:
    def test_returns_three_tuple(self, office_usage: UsageRecord):
        result = ScoringEngine().score(office_usage)
        assert len(result) == 3

    def test_office_pipeline(self, office_usage: UsageRecord):
        footprint, potential, badge = ScoringEngine().score(office_usage)
        assert footprint.footprint_score == 75
        assert potential == 25
        assert badge is Badge.silver

    def test_low_footprint_is_platinum(self):
        usage = UsageRecord(employees=20, electricity_kwh=100)
        footprint, potential, badge = ScoringEngine().score(usage)
        assert footprint.footprint_score == 15
        assert potential == 50
        assert badge is Badge.platinum

    def test_deterministic(self, office_usage: UsageRecord):
        engine = ScoringEngine()
        assert engine.score(office_usage) == engine.score(office_usage)
