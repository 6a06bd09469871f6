"""Integration tests for the stocknest CLI.

These tests run each command end-to-end against job files in
tests/fixtures/jobs and check output and exit codes:
- 0 for success
- 1 for unreadable, invalid or incompatible jobs
- 2 for valid jobs with warnings (validate only)
- 3 for nesting runs that leave pieces unplaced
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from stocknest.cli.main import EXIT_INCOMPLETE, app

FIXTURES_PATH = Path(__file__).parent.parent / "fixtures" / "jobs"


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


def _job(name: str) -> str:
    return str(FIXTURES_PATH / name)


class TestValidateCommand:
    """Tests for the validate command."""

    def test_valid_job(self, runner: CliRunner) -> None:
        """A job whose parts all fit passes with exit code 0."""
        result = runner.invoke(app, ["validate", _job("kitchen_doors.json")])

        assert result.exit_code == 0
        assert "Validation passed. Job is valid." in result.output

    def test_warnings_exit_code(self, runner: CliRunner) -> None:
        """A part too large for the sheet gives exit code 2."""
        result = runner.invoke(app, ["validate", _job("oversized_top.json")])

        assert result.exit_code == 2
        assert "Warnings:" in result.output
        assert "parts[0]" in result.output
        assert "Validation passed with 1 warning(s)" in result.output

    def test_incompatible_part(self, runner: CliRunner) -> None:
        """A sheet part without height fails with exit code 1."""
        result = runner.invoke(app, ["validate", _job("missing_height.json")])

        assert result.exit_code == 1
        assert "requires width and height" in result.output
        assert "Validation failed" in result.output

    def test_file_not_found(self, runner: CliRunner) -> None:
        """A missing file fails with exit code 1."""
        result = runner.invoke(app, ["validate", _job("nonexistent.json")])

        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_invalid_json_syntax(self, runner: CliRunner) -> None:
        """Malformed JSON fails with a line number."""
        result = runner.invoke(app, ["validate", _job("invalid_json.json")])

        assert result.exit_code == 1
        assert "Invalid JSON syntax" in result.output
        assert "Line " in result.output

    def test_unknown_field_rejected(self, runner: CliRunner) -> None:
        """Unknown fields fail schema validation."""
        result = runner.invoke(app, ["validate", _job("unknown_field.json")])

        assert result.exit_code == 1
        assert "parts[0].grain" in result.output


class TestNestCommand:
    """Tests for the nest command."""

    def test_sheet_job_text(self, runner: CliRunner) -> None:
        """A sheet job prints its layout and costs."""
        result = runner.invoke(app, ["nest", _job("kitchen_doors.json")])

        assert result.exit_code == 0
        assert "Job: Kitchen doors" in result.output
        assert "SHEET NESTING - MDF 18" in result.output
        assert "Mean utilization: 87.5%" in result.output
        assert "Total cost:    210.00" in result.output
        assert "Total weight:  34.00 kg" in result.output

    def test_summary_omits_placements(self, runner: CliRunner) -> None:
        """The summary option keeps per-sheet lines but drops placements."""
        result = runner.invoke(app, ["nest", _job("kitchen_doors.json"), "--summary"])

        assert result.exit_code == 0
        assert "Sheet 1: 4 pieces, 87.5% utilization" in result.output
        assert "DOOR-1" not in result.output

    def test_sheet_job_json(self, runner: CliRunner) -> None:
        """JSON output is a single parseable document."""
        result = runner.invoke(
            app, ["nest", _job("kitchen_doors.json"), "--format", "json"]
        )

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["total_sheets"] == 1
        assert data["costs"]["material"] == 180.0
        assert data["total_weight"] == 34.0

    def test_linear_job(self, runner: CliRunner) -> None:
        """A tube job prints the linear cutting report."""
        result = runner.invoke(app, ["nest", _job("gate_frame.json")])

        assert result.exit_code == 0
        assert "LINEAR CUTTING - Tube 6m" in result.output
        assert "Bars required:   3" in result.output

    def test_linear_job_json(self, runner: CliRunner) -> None:
        """A tube job exports bars and cost as JSON."""
        result = runner.invoke(app, ["nest", _job("gate_frame.json"), "-f", "json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert data["category"] == "tube"
        assert data["costs"]["total"] == 312.0

    def test_incomplete_layout(self, runner: CliRunner) -> None:
        """Unplaced pieces are reported with the incomplete exit code."""
        result = runner.invoke(app, ["nest", _job("oversized_top.json")])

        assert result.exit_code == EXIT_INCOMPLETE
        assert "UNPLACED PIECES (1)" in result.output
        assert "layout is incomplete" in result.output

    def test_incompatible_part(self, runner: CliRunner) -> None:
        """Incompatible parts stop nesting with exit code 1."""
        result = runner.invoke(app, ["nest", _job("missing_height.json")])

        assert result.exit_code == 1
        assert "incompatible with the material" in result.output

    def test_unknown_format(self, runner: CliRunner) -> None:
        """An unknown output format is rejected."""
        result = runner.invoke(
            app, ["nest", _job("kitchen_doors.json"), "--format", "xml"]
        )

        assert result.exit_code == 1
        assert "Unknown format: xml" in result.output


class TestCompareCommand:
    """Tests for the compare command."""

    def test_recommends_best_sheet(self, runner: CliRunner) -> None:
        """The comparison table ends with the recommended sheet."""
        result = runner.invoke(app, ["compare", _job("kitchen_doors.json")])

        assert result.exit_code == 0
        assert "SHEET COMPARISON" in result.output
        assert "Recommended sheet: 2000x1250" in result.output

    def test_json(self, runner: CliRunner) -> None:
        """The comparison can be exported as JSON."""
        result = runner.invoke(
            app, ["compare", _job("kitchen_doors.json"), "--format", "json"]
        )

        assert result.exit_code == 0
        assert json.loads(result.stdout)["best"] == "2000x1250"

    def test_linear_job_rejected(self, runner: CliRunner) -> None:
        """Linear jobs cannot be compared across sheets."""
        result = runner.invoke(app, ["compare", _job("gate_frame.json")])

        assert result.exit_code == 1
        assert "only supports sheet jobs" in result.output


class TestEstimateCommand:
    """Tests for the estimate command."""

    def test_sheet_estimate(self, runner: CliRunner) -> None:
        """The arithmetic estimate is shown without packing."""
        result = runner.invoke(app, ["estimate", _job("kitchen_doors.json")])

        assert result.exit_code == 0
        assert "Sheets required: 2" in result.output

    def test_bar_estimate(self, runner: CliRunner) -> None:
        """Linear jobs are estimated in bars."""
        result = runner.invoke(app, ["estimate", _job("gate_frame.json")])

        assert result.exit_code == 0
        assert "Bars required: 2" in result.output

    def test_incompatible_part(self, runner: CliRunner) -> None:
        """Incompatible parts fail the estimate."""
        result = runner.invoke(app, ["estimate", _job("missing_height.json")])

        assert result.exit_code == 1
        assert "requires width and height" in result.output
