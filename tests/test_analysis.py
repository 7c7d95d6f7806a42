# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for report assembly with and without generated sections."""

from __future__ import annotations

import io
import json

import pytest
from rich.console import Console

from footprint_audit.analysis.engine import AnalysisEngine, run_analysis
from footprint_audit.data.models import Badge, Provenance, SustainabilityReport, UsageRecord
from footprint_audit.data.reference import ReferenceData
from footprint_audit.reporting.summary import generate_summary
from footprint_audit.reporting.terminal import TerminalRenderer


@pytest.fixture()
def engine(reference: ReferenceData) -> AnalysisEngine:
    return AnalysisEngine(reference)


class TestStaticAnalysis:
    def test_report_shape(self, engine: AnalysisEngine, office_usage: UsageRecord):
        report = engine.analyze(office_usage)
        assert isinstance(report, SustainabilityReport)
        assert report.footprint.total_co2 == pytest.approx(1842.5)
        assert report.footprint.footprint_score == 75
        assert report.recommendations.reduction_potential == 25
        assert report.badge is Badge.silver
        assert report.business_data == office_usage

    def test_all_sources_static(self, engine: AnalysisEngine, office_usage: UsageRecord):
        report = engine.analyze(office_usage)
        assert set(report.sources.values()) == {Provenance.static}
        assert set(report.sources) == {"recommendations", "benchmark", "roi", "incentives"}

    def test_roi_ranked_from_catalog(self, engine: AnalysisEngine, office_usage: UsageRecord):
        report = engine.analyze(office_usage)
        assert [e.title for e in report.roi][:3] == [
            "Optimize Delivery and Vehicle Routes",
            "Go Paperless",
            "Switch to LED Lighting",
        ]
        paybacks = [e.payback_months for e in report.roi]
        assert paybacks == sorted(paybacks)

    def test_benchmark(self, engine: AnalysisEngine, office_usage: UsageRecord):
        benchmark = engine.analyze(office_usage).benchmark
        assert benchmark.average_co2 == 800
        assert benchmark.direction == "above"

    def test_deterministic(self, engine: AnalysisEngine, office_usage: UsageRecord):
        first = engine.analyze(office_usage).model_dump(exclude={"generated_at"})
        second = engine.analyze(office_usage).model_dump(exclude={"generated_at"})
        assert first == second

    def test_garbage_text_falls_back(self, engine: AnalysisEngine, office_usage: UsageRecord):
        report = engine.analyze(office_usage, "I cannot help with that.")
        assert set(report.sources.values()) == {Provenance.static}

    def test_wire_format(self, engine: AnalysisEngine, office_usage: UsageRecord):
        data = json.loads(engine.analyze(office_usage).model_dump_json(by_alias=True))
        assert data["footprint"]["totalCO2"] == pytest.approx(1842.5)
        assert data["footprint"]["footprintScore"] == 75
        assert data["recommendations"]["reductionPotential"] == 25
        assert data["badge"] == "Silver"
        assert data["businessData"]["businessType"] == "Office"
        assert "generatedAt" in data


class TestGeneratedAnalysis:
    def test_all_sections_used(self, engine, office_usage, generated_text):
        report = engine.analyze(office_usage, generated_text)
        assert set(report.sources.values()) == {Provenance.ai_generated}
        assert [r.title for r in report.recommendations.energy] == ["Switch to LED Lighting"]
        assert report.recommendations.cost_savings.monthly == "₹3,800"
        assert report.benchmark.average_co2 == 1000
        assert report.benchmark.source is Provenance.ai_generated

    def test_badge_follows_generated_potential(self, engine, office_usage, generated_text):
        report = engine.analyze(office_usage, generated_text)
        assert report.recommendations.reduction_potential == 35
        assert report.badge is Badge.gold

    def test_footprint_never_generated(self, engine, office_usage, generated_payload):
        generated_payload["totalCO2"] = 1
        generated_payload["footprintScore"] = 15
        report = engine.analyze(office_usage, json.dumps(generated_payload))
        assert report.footprint.total_co2 == pytest.approx(1842.5)
        assert report.footprint.footprint_score == 75

    def test_generated_roi_ranked(self, engine, office_usage, generated_text):
        report = engine.analyze(office_usage, generated_text)
        assert [e.title for e in report.roi] == ["Go Paperless", "Switch to LED Lighting"]

    def test_partial_fallback(self, engine, office_usage, generated_payload):
        del generated_payload["benchmark"]
        generated_payload["incentives"] = []
        report = engine.analyze(office_usage, json.dumps(generated_payload))
        assert report.sources["recommendations"] is Provenance.ai_generated
        assert report.sources["roi"] is Provenance.ai_generated
        assert report.sources["benchmark"] is Provenance.static
        assert report.sources["incentives"] is Provenance.static
        assert report.benchmark.average_co2 == 800
        assert report.incentives

    def test_missing_cost_savings_filled_from_catalog(self, engine, office_usage, generated_payload):
        del generated_payload["costSavings"]
        report = engine.analyze(office_usage, json.dumps(generated_payload))
        assert report.recommendations.cost_savings.monthly == "₹4,300"

    def test_missing_potential_uses_computed(self, engine, office_usage, generated_payload):
        del generated_payload["reductionPotential"]
        report = engine.analyze(office_usage, json.dumps(generated_payload))
        assert report.recommendations.reduction_potential == 25


class TestRunAnalysis:
    def test_without_provider(self, engine, office_usage):
        report = run_analysis(office_usage, engine, provider=None)
        assert report.sources["recommendations"] is Provenance.static

    def test_with_provider(self, engine, office_usage, fake_provider):
        report = run_analysis(office_usage, engine, fake_provider)
        assert report.sources["benchmark"] is Provenance.ai_generated
        assert len(fake_provider.calls) == 1
        system, prompt = fake_provider.calls[0]
        assert "JSON" in system
        assert "Business Type: Office" in prompt
        assert "Switch to LED Lighting" in prompt

    def test_failing_provider_falls_back(self, engine, office_usage, failing_provider):
        report = run_analysis(office_usage, engine, failing_provider)
        assert failing_provider.calls == 1
        assert set(report.sources.values()) == {Provenance.static}
        assert report.footprint.footprint_score == 75


class TestSummary:
    def test_mentions_key_figures(self, engine, office_usage):
        text = generate_summary(engine.analyze(office_usage))
        assert "1,842 kg CO2" in text
        assert "75/100" in text
        assert "130% above" in text
        assert "Silver" in text
        assert "QUICK WINS" in text


class TestTerminalRenderer:
    def test_badge_uses_badge_color(self, engine, office_usage):
        out = io.StringIO()
        console = Console(file=out, force_terminal=True, color_system="truecolor", width=100)
        report = engine.analyze(office_usage)
        TerminalRenderer(console).render(report)
        assert report.badge is Badge.silver
        # #C0C0C0
        assert "38;2;192;192;192" in out.getvalue()
