# Copyright (c) 2025 Keshav
# Licensed under the GNU Affero General Public License v3.0
# See LICENSE file for details.
"""Tests for the CLI layer using Click's CliRunner."""

from __future__ import annotations

import json
from pathlib import Path

from click.testing import CliRunner

from footprint_audit.cli.app import cli

OFFICE_ARGS = [
    "-b", "Office",
    "-e", "10",
    "--electricity", "1500",
    "--water", "5000",
    "--waste", "200",
    "--fuel", "100",
]


class TestCLI:
    """Tests for CLI commands."""

    def test_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "footprint-audit" in result.output

    def test_analyze_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["analyze", "--help"])
        assert result.exit_code == 0
        assert "--electricity" in result.output
        assert "--no-ai" in result.output

    def test_analyze_static(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["--no-color", "analyze", *OFFICE_ARGS])
        assert result.exit_code == 0, result.output
        assert "MONTHLY FOOTPRINT" in result.output
        assert "1,842.5 kg CO2" in result.output
        assert "Silver" in result.output
        assert "RECOMMENDATIONS" in result.output
        assert "PEER BENCHMARK" in result.output

    def test_analyze_no_details(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["analyze", *OFFICE_ARGS, "--no-details"])
        assert result.exit_code == 0
        assert "RETURN ON INVESTMENT" not in result.output

    def test_business_type_case_insensitive(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["analyze", "-b", "small factory", "--electricity", "100"])
        assert result.exit_code == 0, result.output
        assert "Small Factory" in result.output

    def test_export_json(self, tmp_path: Path):
        out = tmp_path / "report.json"
        runner = CliRunner()
        result = runner.invoke(cli, ["analyze", *OFFICE_ARGS, "--no-ai", "--export-json", str(out)])
        assert result.exit_code == 0
        data = json.loads(out.read_text())
        assert data["footprint"]["footprintScore"] == 75
        assert data["badge"] == "Silver"

    def test_missing_config_exits(self, tmp_path: Path):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["analyze", *OFFICE_ARGS, "-c", str(tmp_path / "missing.yaml")]
        )
        assert result.exit_code == 1
        assert "Config file not found" in result.output

    def test_unknown_log_level_exits(self, tmp_path: Path):
        config = tmp_path / "settings.yaml"
        config.write_text("log_level: LOUD\n")
        runner = CliRunner()
        result = runner.invoke(cli, ["analyze", *OFFICE_ARGS, "--no-ai", "-c", str(config)])
        assert result.exit_code == 1
        assert "log_level" in result.output
        assert not isinstance(result.exception, ValueError)

    def test_simulate(self):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["--no-color", "simulate", *OFFICE_ARGS, "--cut-electricity", "50", "--cut-waste", "50"]
        )
        assert result.exit_code == 0, result.output
        assert "WHAT-IF SCENARIO" in result.output
        assert "Projected badge" in result.output

    def test_benchmarks(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["benchmarks", "-b", "Office"])
        assert result.exit_code == 0
        assert "800" in result.output
        assert "Restaurant" not in result.output

    def test_benchmarks_all(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["benchmarks"])
        assert result.exit_code == 0
        assert "Warehouse" in result.output
        assert "Other" in result.output
