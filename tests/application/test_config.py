from pathlib import Path

import pytest
from pydantic import ValidationError

from examprep.application.config import StatsSettings, resolve_settings
from examprep.domain.exceptions import ConfigurationError


def test_defaults():
    settings = StatsSettings()
    assert settings.papers == ["paper1", "paper2", "paper3"]
    assert settings.period_days == 30
    assert settings.history_limit == 50
    assert settings.streak_strategy == "seed"
    assert settings.records_path is None


def test_verbosity_is_not_a_setting(monkeypatch):
    monkeypatch.setenv("EXAMPREP_VERBOSE", "3")
    assert "verbose" not in StatsSettings().model_dump()


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("EXAMPREP_PAPERS", "paper1, paper4")
    monkeypatch.setenv("EXAMPREP_PERIOD_DAYS", "7")
    monkeypatch.setenv("EXAMPREP_STREAK_STRATEGY", "dates")

    settings = StatsSettings()

    assert settings.papers == ["paper1", "paper4"]
    assert settings.period_days == 7
    assert settings.streak_strategy == "dates"


def test_env_papers_as_json_list(monkeypatch):
    monkeypatch.setenv("EXAMPREP_PAPERS", '["a", "b"]')
    assert StatsSettings().papers == ["a", "b"]


def test_toml_file_is_lowest_priority(isolated_config, monkeypatch):
    isolated_config.write_text('papers = ["p1", "p2"]\nperiod_days = 14\nhistory_limit = 5\n')
    monkeypatch.setenv("EXAMPREP_PERIOD_DAYS", "21")

    settings = resolve_settings({"history_limit": 9})

    assert settings.papers == ["p1", "p2"]
    assert settings.period_days == 21
    assert settings.history_limit == 9


def test_resolve_settings_drops_none(tmp_path):
    records = tmp_path / "records.json"
    settings = resolve_settings(
        {"period_days": None, "records_path": records, "streak_strategy": None}
    )
    assert settings.period_days == 30
    assert settings.records_path == records.resolve()
    assert isinstance(settings.records_path, Path)


def test_invalid_values_rejected():
    with pytest.raises(ValidationError):
        StatsSettings(period_days=0)
    with pytest.raises(ValidationError):
        StatsSettings(streak_strategy="weekly")


def test_resolve_settings_wraps_validation_errors():
    with pytest.raises(ConfigurationError) as exc:
        resolve_settings({"period_days": 0})
    assert exc.value.context["errors"][0]["loc"] == ("period_days",)


def test_unparseable_config_file(isolated_config):
    isolated_config.write_text("papers = [\n")
    with pytest.raises(ConfigurationError):
        resolve_settings()
