# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Shared test fixtures for the footprint audit test suite."""

from __future__ import annotations

import json

import pytest

from footprint_audit.ai.provider import ProviderError
from footprint_audit.data.models import UsageRecord
from footprint_audit.data.reference import ReferenceData, load_reference_data


class FakeProvider:
    """Returns canned text and records every prompt it receives."""

    def __init__(self, response: str) -> None:
        self.response = response
        self.calls: list[tuple[str, str]] = []

    def generate(self, system: str, prompt: str) -> str:
        self.calls.append((system, prompt))
        return self.response


class FailingProvider:
    """Always fails the way an unreachable provider does."""

    def __init__(self) -> None:
        self.calls = 0

    def generate(self, system: str, prompt: str) -> str:
        self.calls += 1
        raise ProviderError("connection refused")


@pytest.fixture(autouse=True)
def _no_provider_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep real credentials and config files out of every test."""
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    monkeypatch.delenv("FOOTPRINT_AUDIT_CONFIG", raising=False)


@pytest.fixture(scope="session")
def reference() -> ReferenceData:
    """The bundled benchmark and ROI catalog tables."""
    return load_reference_data()


@pytest.fixture()
def office_usage() -> UsageRecord:
    """A 10-person office: 1842.5 kg CO2/month, score 75, Silver."""
    return UsageRecord.model_validate(
        {
            "businessType": "Office",
            "employees": 10,
            "electricityUsage": 1500,
            "waterUsage": 5000,
            "wasteGenerated": 200,
            "fuelUsed": 100,
        }
    )


@pytest.fixture()
def generated_payload() -> dict:
    """A complete, well-formed generated analysis payload."""
    return {
        "energy": [
            {
                "title": "Switch to LED Lighting",
                "description": "Replace fluorescent tubes.",
                "savings": "₹3,000/month",
                "impact": "100 kg CO2/month",
            }
        ],
        "waste": [
            {
                "title": "Go Paperless",
                "description": "Digitise invoices.",
                "savings": "₹800/month",
                "impact": "20 kg CO2/month",
            }
        ],
        "costSavings": {"monthly": "₹3,800", "yearly": "₹45,600", "breakdown": "Lighting and paper"},
        "reductionPotential": 35,
        "benchmark": {"averageCO2": 1000, "context": "Typical small offices"},
        "roi": [
            {"title": "Switch to LED Lighting", "upfrontCost": 3000, "monthlySavings": 100},
            {"title": "Go Paperless", "upfrontCost": 1000, "monthlySavings": 200},
        ],
        "incentives": [
            {
                "title": "State Solar Scheme",
                "description": "Capital subsidy",
                "category": "solar",
                "applicationUrl": "https://example.org/solar",
            }
        ],
    }


@pytest.fixture()
def generated_text(generated_payload: dict) -> str:
    """The payload wrapped in chatter, as providers tend to return it."""
    return "Here is your analysis:\n```json\n" + json.dumps(generated_payload) + "\n```\nGood luck!"


@pytest.fixture()
def fake_provider(generated_text: str) -> FakeProvider:
    """A provider answering with :func:`generated_text`; set ``.response`` to change it."""
    return FakeProvider(generated_text)


@pytest.fixture()
def failing_provider() -> FailingProvider:
    return FailingProvider()
