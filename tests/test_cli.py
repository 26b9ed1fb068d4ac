"""
Tests for the command-line interface.
"""

import json

import pytest
from click.testing import CliRunner

from ride_analysis import cli as cli_module
from ride_analysis.cli import cli


@pytest.fixture(autouse=True)
def offline_settings(monkeypatch):
    """No weather credentials: the CLI must not reach the network."""
    for provider in ("openweathermap", "weatherapi", "weatherbit", "visualcrossing"):
        monkeypatch.setattr(cli_module.settings, f"{provider}_api_key", None)


@pytest.fixture
def gpx_file(tmp_path, make_gpx, straight_points):
    path = tmp_path / "ride.gpx"
    path.write_text(make_gpx(straight_points(11), name="Commute"))
    return path


class TestAnalyzeCommand:
    """ride-analysis analyze"""

    def test_summary(self, gpx_file):
        result = CliRunner().invoke(cli, ["analyze", str(gpx_file), "--no-terrain-api", "--weight", "70"])

        assert result.exit_code == 0, result.output
        assert "Route: Commute" in result.output
        assert "Weather:    no data" in result.output
        assert "Calories:" in result.output

    def test_json(self, gpx_file):
        result = CliRunner().invoke(cli, ["analyze", str(gpx_file), "--no-terrain-api", "--json"])

        assert result.exit_code == 0, result.output
        payload = json.loads(result.output)
        assert payload["route_name"] == "Commute"
        assert payload["weather"]["has_data"] is False

    def test_invalid_file(self, tmp_path):
        path = tmp_path / "bad.gpx"
        path.write_text("not a gpx")
        result = CliRunner().invoke(cli, ["analyze", str(path), "--no-terrain-api"])

        assert result.exit_code == 1
        assert "Error" in result.output


class TestProvidersCommand:
    """ride-analysis providers"""

    def test_lists_all(self):
        result = CliRunner().invoke(cli, ["providers"])

        assert result.exit_code == 0
        for name in ("openweathermap", "weatherapi", "weatherbit", "visualcrossing"):
            assert name in result.output
        assert "36500d" in result.output
