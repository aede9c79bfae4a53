"""Tests for the freeflow_app entry point."""

from pathlib import Path

import pytest

import freeflow_app
from freeflow import __version__
from freeflow.engine.models import DiveOutcome
from freeflow.engine.variants import get_variant


@pytest.fixture
def cli_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clean_logging) -> Path:
    """Isolated working dir and log path for main()."""
    for var in ("FREEFLOW_VARIANT", "FREEFLOW_DEBUG", "FREEFLOW_TIME_SCALE"):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("FREEFLOW_LOG_PATH", str(tmp_path / "logs"))
    return tmp_path


class TestInfoFlags:
    def test_version(self, capsys: pytest.CaptureFixture) -> None:
        assert freeflow_app.main(["--version"]) == 0
        assert __version__ in capsys.readouterr().out

    def test_list_variants(self, capsys: pytest.CaptureFixture) -> None:
        assert freeflow_app.main(["--list-variants"]) == 0
        out = capsys.readouterr().out
        for name in ("decay", "depth", "budget", "spam", "fixed"):
            assert name in out

    def test_simulate_and_headless_exclusive(self) -> None:
        with pytest.raises(SystemExit):
            freeflow_app.main(["--simulate", "--headless"])


class TestSimulate:
    def test_fixed_dive_completes(self) -> None:
        summary = freeflow_app.simulate(get_variant("fixed"))
        assert summary.outcome is DiveOutcome.COMPLETED
        assert summary.max_depth == 40.0
        assert summary.spawns == 799

    def test_budget_dive_exhausts(self) -> None:
        summary = freeflow_app.simulate(get_variant("budget"), taps=5)
        assert summary.outcome is DiveOutcome.BUDGET_EXHAUSTED
        assert summary.taps == 5
        assert summary.budget_remaining == 0

    def test_taps_below_quota_complete(self) -> None:
        summary = freeflow_app.simulate(get_variant("budget"), taps=2)
        assert summary.outcome is DiveOutcome.COMPLETED
        assert summary.budget_remaining == 3

    def test_early_penalties_still_reach_bottom(self) -> None:
        summary = freeflow_app.simulate(get_variant("depth"), taps=3)
        assert summary.taps == 3
        assert summary.max_depth == pytest.approx(25.0)


class TestMain:
    def test_simulate_prints_report(self, cli_env: Path, capsys: pytest.CaptureFixture) -> None:
        assert freeflow_app.main(["--simulate", "--variant", "fixed"]) == 0
        out = capsys.readouterr().out
        assert "DIVE COMPLETE" in out
        assert "Max depth: 40.0m" in out
        assert (cli_env / "logs" / "freeflow.log").exists()

    def test_variant_from_environment(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture
    ) -> None:
        monkeypatch.setenv("FREEFLOW_VARIANT", "budget")
        assert freeflow_app.main(["--simulate", "--taps", "5"]) == 0
        assert "Budget left: 0/5" in capsys.readouterr().out

    def test_unknown_variant_exit_code(self, cli_env: Path) -> None:
        assert freeflow_app.main(["--simulate", "--variant", "snorkel"]) == 2

    def test_bad_time_scale_exit_code(
        self, cli_env: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("FREEFLOW_TIME_SCALE", "fast")
        assert freeflow_app.main(["--simulate"]) == 2
