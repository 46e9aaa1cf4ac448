"""Tests for the command-line calculator (scripts/compute_penalty.py)."""

import json

import pytest

from scripts.compute_penalty import EXIT_ENGINE_ERROR, EXIT_OK, main


def _stderr_error(err: str) -> dict:
    return json.loads(err.strip().splitlines()[-1])


class TestGSTCommand:

    def test_late_with_interest(self, capsys):
        code = main([
            "--log-level", "WARNING",
            "gst", "--return-type", "GSTR3B",
            "--amount", "50000", "--due", "2025-01-31", "--filing", "2025-03-31",
            "--tax-paid-late",
        ])

        out = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert out["daysLate"] == 59
        assert out["lateFee"] == "5000"
        assert out["interestAmount"] == "1455"
        assert out["totalPenalty"] == "6455"
        assert out["statusLabel"] == "late"

    def test_grace_period(self, capsys):
        code = main([
            "--log-level", "WARNING",
            "gst", "--return-type", "GSTR9",
            "--amount", "0", "--due", "2025-01-31", "--filing", "2025-02-15",
        ])

        out = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert out["statusLabel"] == "grace period"
        assert out["totalPenalty"] == "0"

    def test_unknown_return_type(self, capsys):
        code = main([
            "--log-level", "WARNING",
            "gst", "--return-type", "GSTR4",
            "--amount", "100", "--due", "2025-01-31", "--filing", "2025-02-15",
        ])

        captured = capsys.readouterr()
        assert code == EXIT_ENGINE_ERROR
        assert captured.out == ""
        assert _stderr_error(captured.err)["code"] == "UNKNOWN_RULE_KEY"

    def test_filing_before_due(self, capsys):
        code = main([
            "--log-level", "WARNING",
            "gst", "--return-type", "GSTR1",
            "--amount", "100", "--due", "2025-02-15", "--filing", "2025-01-31",
        ])

        assert code == EXIT_ENGINE_ERROR
        assert _stderr_error(capsys.readouterr().err)["code"] == "INVALID_DATE"


class TestTDSCommand:

    def test_deposit_date(self, capsys):
        code = main([
            "--log-level", "WARNING",
            "tds", "--deduction-type", "rent",
            "--amount", "50000", "--due", "2025-01-15", "--filing", "2025-02-09",
            "--deposit", "2025-02-01",
        ])

        out = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert out["lateFee"] == "5000"
        assert out["interestDays"] == 17
        assert out["totalPenalty"] == "5419"

    def test_negative_amount(self, capsys):
        code = main([
            "--log-level", "WARNING",
            "tds", "--deduction-type", "salary",
            "--amount", "-5", "--due", "2025-01-15", "--filing", "2025-02-09",
        ])

        assert code == EXIT_ENGINE_ERROR
        assert _stderr_error(capsys.readouterr().err)["code"] == "INVALID_AMOUNT"


class TestConfigOption:

    def test_alternative_schedule(self, capsys, tmp_path):
        path = tmp_path / "schedule.yaml"
        path.write_text(
            "config_id: CLI\n"
            "effective_from: '2025-01-01'\n"
            "settings:\n"
            "  log_level: WARNING\n"
            "policies:\n"
            "  - rule_key: GSTR1\n"
            "    grace_days: 30\n"
            "    daily_rate: '100'\n"
            "    fee_cap: '5000'\n"
            "    interest_annual_rate_percent: '18'\n"
            "    fee_basis: days_beyond_grace\n",
            encoding="utf-8",
        )

        code = main([
            "--config", str(path),
            "gst", "--return-type", "GSTR1",
            "--amount", "1000", "--due", "2025-01-31", "--filing", "2025-03-17",
        ])

        out = json.loads(capsys.readouterr().out)
        assert code == EXIT_OK
        assert out["lateFee"] == "1500"
        assert out["policy"]["feeBasis"] == "days_beyond_grace"

    def test_invalid_schedule(self, capsys, tmp_path):
        path = tmp_path / "broken.yaml"
        path.write_text("config_id: BROKEN\n", encoding="utf-8")

        code = main([
            "--config", str(path),
            "gst", "--return-type", "GSTR1",
            "--amount", "1000", "--due", "2025-01-31", "--filing", "2025-03-17",
        ])

        assert code == EXIT_ENGINE_ERROR
        assert _stderr_error(capsys.readouterr().err)["code"] == "INVALID_CONFIGURATION"


def test_subcommand_required():
    with pytest.raises(SystemExit) as exc_info:
        main([])

    assert exc_info.value.code == 2
