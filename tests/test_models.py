# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for Pydantic data models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from footprint_audit.data.models import (
    Badge,
    BusinessCategory,
    ScenarioInput,
    UsageRecord,
    coerce_quantity,
)


class TestBusinessCategory:
    def test_exact_value(self):
        assert BusinessCategory("Retail Shop") is BusinessCategory.retail_shop

    def test_case_insensitive(self):
        assert BusinessCategory("restaurant") is BusinessCategory.restaurant
        assert BusinessCategory("SMALL FARM") is BusinessCategory.small_farm

    def test_unknown_becomes_other(self):
        assert BusinessCategory("Spaceport") is BusinessCategory.other


class TestCoerceQuantity:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            (None, 0.0),
            ("", 0.0),
            ("abc", 0.0),
            (-5, 0.0),
            ("1,500", 1500.0),
            (" 42.5 ", 42.5),
            (float("nan"), 0.0),
            (True, 0.0),
            (7, 7.0),
        ],
    )
    def test_coercion(self, raw, expected):
        assert coerce_quantity(raw) == expected


class TestUsageRecord:
    def test_wire_aliases(self, office_usage: UsageRecord):
        assert office_usage.business_type is BusinessCategory.office
        assert office_usage.electricity_kwh == 1500
        assert office_usage.water_liters == 5000
        assert office_usage.waste_kg == 200
        assert office_usage.fuel_liters == 100

    def test_field_names_accepted(self):
        usage = UsageRecord(business_type="Warehouse", employees=3, electricity_kwh=10)
        assert usage.business_type is BusinessCategory.warehouse
        assert usage.electricity_kwh == 10

    def test_bad_numbers_become_zero(self):
        usage = UsageRecord.model_validate(
            {"electricityUsage": "lots", "waterUsage": -10, "wasteGenerated": None}
        )
        assert usage.electricity_kwh == 0.0
        assert usage.water_liters == 0.0
        assert usage.waste_kg == 0.0
        assert usage.fuel_liters == 0.0

    def test_employees_at_least_one(self):
        assert UsageRecord(employees=0).employees == 1
        assert UsageRecord(employees="x").employees == 1
        assert UsageRecord(employees="12").employees == 12

    def test_blank_revenue_is_none(self):
        assert UsageRecord(yearlyRevenue="").yearly_revenue is None
        assert UsageRecord(yearlyRevenue="250000").yearly_revenue == 250000.0

    def test_frozen(self, office_usage: UsageRecord):
        with pytest.raises(ValidationError):
            office_usage.employees = 99

    def test_serializes_by_alias(self, office_usage: UsageRecord):
        data = office_usage.model_dump(by_alias=True)
        assert data["businessType"] == "Office"
        assert data["electricityUsage"] == 1500


class TestScenarioInput:
    def test_defaults_are_zero(self):
        assert ScenarioInput().as_dict() == {
            "electricity": 0.0, "water": 0.0, "waste": 0.0, "fuel": 0.0,
        }

    def test_clamped_to_limits(self):
        scenario = ScenarioInput(electricity=80, water=100, waste=51, fuel=45)
        assert scenario.as_dict() == {
            "electricity": 50.0, "water": 40.0, "waste": 50.0, "fuel": 40.0,
        }

    def test_negative_becomes_zero(self):
        assert ScenarioInput(electricity=-10).electricity == 0.0


class TestBadge:
    def test_ordering(self):
        ranks = [b.rank for b in (Badge.bronze, Badge.silver, Badge.gold, Badge.platinum)]
        assert ranks == [0, 1, 2, 3]

    def test_colors_are_hex(self):
        for badge in Badge:
            assert badge.color.startswith("#")
            assert len(badge.color) == 7
