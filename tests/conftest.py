from datetime import UTC, datetime

import pytest

# Wednesday; the week starts on Sunday 2025-03-09
NOW = datetime(2025, 3, 12, 12, 0, tzinfo=UTC)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def today():
    return NOW.date()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp path and clear EXAMPREP_* env vars."""
    import examprep.application.config as config_module

    monkeypatch.setattr(config_module, "CONFIG_FILE", tmp_path / "config.toml")
    for key in ("PAPERS", "PERIOD_DAYS", "HISTORY_LIMIT", "STREAK_STRATEGY", "RECORDS_PATH"):
        monkeypatch.delenv(f"EXAMPREP_{key}", raising=False)
    return tmp_path / "config.toml"
