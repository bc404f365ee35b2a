"""
Tests for the Typer command line interface.
"""

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

from slotengine import __version__
from slotengine.cli.app import app

runner = CliRunner()

DATA = {
    "providers": [
        {"id": "p1", "name": "Anna", "workingHours": {"start": "10:00", "end": "13:00"}},
        {"id": "p2", "name": "Ben"},
    ],
    "services": [
        {"id": "s1", "name": "Consultation", "providerId": "p1", "duration": 60},
        {"id": "s2", "name": "Repair", "providerId": "p2", "duration": 60},
    ],
    "bookings": [
        {"id": "b1", "providerId": "p1", "scheduledDate": "2024-11-25", "scheduledTime": "11:00",
         "duration": 60, "status": "confirmed"},
    ],
}


@pytest.fixture
def config_file(tmp_path: Path) -> Path:
    (tmp_path / "bookings.json").write_text(json.dumps(DATA), encoding="utf-8")
    path = tmp_path / "config.yaml"
    path.write_text("timezone: Europe/Berlin\ndata_file: bookings.json\n", encoding="utf-8")
    return path


class TestSlotsCommand:
    """Tests for the slots command."""

    def test_lists_slots(self, config_file: Path):
        result = runner.invoke(app, [
            "slots", "p1", "s1", "--date", "2024-11-25",
            "--config", str(config_file), "--now", "2024-11-20T08:00:00",
        ])

        assert result.exit_code == 0, result.output
        assert "10:00 AM" in result.output
        assert "12:00 PM" in result.output
        assert "booked" in result.output

    def test_available_only(self, config_file: Path):
        result = runner.invoke(app, [
            "slots", "p1", "s1", "--date", "2024-11-25", "--available-only",
            "--config", str(config_file), "--now", "2024-11-20T08:00:00",
        ])

        assert result.exit_code == 0, result.output
        assert "booked" not in result.output
        assert "11:00 AM" not in result.output

    def test_no_slots_left_today(self, config_file: Path):
        result = runner.invoke(app, [
            "slots", "p1", "s1", "--date", "2024-11-25",
            "--config", str(config_file), "--now", "2024-11-25T12:30:00",
        ])

        assert result.exit_code == 0, result.output
        assert "No slots available" in result.output

    def test_unknown_provider(self, config_file: Path):
        result = runner.invoke(app, [
            "slots", "p9", "s1", "--date", "2024-11-25", "--config", str(config_file),
        ])

        assert result.exit_code == 1
        assert "Provider not found" in result.output

    def test_invalid_date(self, config_file: Path):
        result = runner.invoke(app, [
            "slots", "p1", "s1", "--date", "25.11.2024", "--config", str(config_file),
        ])

        assert result.exit_code == 1

    def test_missing_config(self, tmp_path: Path):
        result = runner.invoke(app, [
            "slots", "p1", "s1", "--config", str(tmp_path / "missing.yaml"),
        ])

        assert result.exit_code == 1
        assert "Config file not found" in result.output


class TestCheckCommand:
    """Tests for the check command."""

    def test_open_slot(self, config_file: Path):
        result = runner.invoke(app, [
            "check", "p1", "s1", "2024-11-25", "10:00",
            "--config", str(config_file), "--now", "2024-11-20T08:00:00",
        ])

        assert result.exit_code == 0, result.output
        assert "is open" in result.output

    def test_booked_slot(self, config_file: Path):
        result = runner.invoke(app, [
            "check", "p1", "s1", "2024-11-25", "11:00",
            "--config", str(config_file), "--now", "2024-11-20T08:00:00",
        ])

        assert result.exit_code == 1
        assert "Not bookable" in result.output

    def test_invalid_time(self, config_file: Path):
        result = runner.invoke(app, [
            "check", "p1", "s1", "2024-11-25", "25:00",
            "--config", str(config_file), "--now", "2024-11-20T08:00:00",
        ])

        assert result.exit_code == 1
        assert "Invalid time" in result.output


class TestOtherCommands:
    """Tests for providers and version."""

    def test_providers(self, config_file: Path):
        result = runner.invoke(app, ["providers", "--config", str(config_file)])

        assert result.exit_code == 0, result.output
        assert "Anna" in result.output
        assert "10:00 - 13:00" in result.output
        assert "09:00 - 17:00" in result.output

    def test_version(self):
        result = runner.invoke(app, ["version"])

        assert result.exit_code == 0
        assert __version__ in result.output
