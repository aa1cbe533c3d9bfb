"""Tests for the stats and config commands."""

import json
from dataclasses import dataclass
from datetime import UTC, date, datetime

import pytest
import yaml
from typer.testing import CliRunner

from examprep.interface.cli import app
from examprep.interface.serialize import to_camel_dict

runner = CliRunner()

NOW = "2025-03-12T12:00:00+00:00"


@pytest.fixture
def records_file(tmp_path):
    path = tmp_path / "records.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "cards": [
                    {"id": "c1", "paper": "paper1", "repetitions": 4, "interval_days": 30,
                     "total_reviews": 4, "correct_reviews": 3},
                    {"id": "c2", "paper": "paper2", "next_review_date": "2025-03-10"},
                ],
                "sessions": [
                    {"completed_at": "2025-03-11T09:00:00Z", "questions_reviewed": 10,
                     "correct_answers": 8, "session_duration": 600},
                ],
                "review_history": [
                    {"card_id": "c1", "reviewed_at": "2025-03-11T09:00:00Z",
                     "was_correct": True, "time_taken": 8},
                    {"card_id": "c2", "reviewed_at": "2025-03-11T09:05:00Z",
                     "was_correct": False, "time_taken": 14},
                ],
                "streak": {"current_streak": 3, "longest_streak": 6, "total_days": 12},
                "topic_progress": [{"topic": "Ethics", "accuracy": 40, "attempts": 2}],
                "quiz_attempts": [
                    {"completed_at": "2025-03-01T10:00:00Z", "score": 70, "time_taken": 300},
                    {"completed_at": "2025-03-05T10:00:00Z", "score": 90},
                ],
            }
        )
    )
    return path


def test_cli_help():
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    assert "study statistics for exam preparation" in result.stdout
    assert "stats" in result.stdout


def test_stats_report(records_file):
    result = runner.invoke(app, ["stats", str(records_file), "--now", NOW])

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["period"] == 30
    assert payload["lastUpdated"] == "2025-03-12T12:00:00Z"
    assert "recentHistory" not in payload
    assert "recommendations" not in payload

    stats = payload["stats"]
    assert stats["cards"]["total"] == 2
    assert stats["cards"]["byStatus"]["mature"] == 1
    assert stats["retention"]["overall"] == 50
    assert stats["streak"] == {"current": 3, "longest": 6, "totalDays": 12}
    assert set(stats["papers"]) == {"paper1", "paper2", "paper3"}
    assert stats["predictions"]["paper1"] == 75

    attempts = payload["attempts"]
    assert attempts["quizzes"]["totalAttempts"] == 2
    assert attempts["quizzes"]["bestScore"] == 90
    assert attempts["quizzes"]["recentAttempts"][0]["completedAt"] == "2025-03-05T10:00:00Z"
    assert attempts["tests"]["totalAttempts"] == 0
    assert attempts["averageScore"] == 40
    assert attempts["studyTime"] == 300
    assert payload["progress"]["weakAreas"][0]["topic"] == "Ethics"


def test_stats_with_history_and_recommendations(records_file):
    result = runner.invoke(
        app,
        ["stats", str(records_file), "--now", NOW, "--include-history",
         "--include-recommendations"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert [r["cardId"] for r in payload["recentHistory"]] == ["c2", "c1"]
    assert "overdue" in [r["type"] for r in payload["recommendations"]]
    assert payload["topicRecommendations"][0]["topic"] == "Ethics"


def test_stats_period_and_papers(records_file):
    result = runner.invoke(
        app,
        ["stats", str(records_file), "--now", NOW, "--period", "7", "--paper", "paper1"],
    )

    assert result.exit_code == 0
    payload = json.loads(result.stdout)
    assert payload["period"] == 7
    assert list(payload["stats"]["papers"]) == ["paper1"]


def test_stats_dates_streak(records_file):
    result = runner.invoke(
        app, ["stats", str(records_file), "--now", NOW, "--streak", "dates"]
    )

    assert result.exit_code == 0
    # one session yesterday, none today
    assert json.loads(result.stdout)["stats"]["streak"]["current"] == 0


def test_stats_rejects_unknown_streak(records_file):
    result = runner.invoke(app, ["stats", str(records_file), "--streak", "weekly"])
    assert result.exit_code == 2


def test_stats_rejects_bad_now(records_file):
    result = runner.invoke(app, ["stats", str(records_file), "--now", "yesterday"])
    assert result.exit_code == 2


def test_stats_missing_file(tmp_path):
    result = runner.invoke(app, ["stats", str(tmp_path / "missing.json")])
    assert result.exit_code == 1


def test_stats_without_path():
    result = runner.invoke(app, ["stats"])
    assert result.exit_code == 2


def test_stats_uses_configured_path(records_file, isolated_config):
    isolated_config.write_text(f'records_path = "{records_file.as_posix()}"\n')

    result = runner.invoke(app, ["stats", "--now", NOW])

    assert result.exit_code == 0
    assert json.loads(result.stdout)["stats"]["cards"]["total"] == 2


def test_config_show(monkeypatch):
    monkeypatch.setenv("EXAMPREP_PERIOD_DAYS", "14")

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 0
    shown = json.loads(result.stdout)
    assert shown["papers"] == ["paper1", "paper2", "paper3"]
    assert shown["period_days"] == 14
    assert shown["records_path"] is None


@dataclass
class _Inner:
    due_on: date
    by_rating: dict[int, int]


@dataclass
class _Outer:
    last_updated: datetime
    items: tuple[_Inner, ...]


def test_to_camel_dict():
    value = _Outer(
        last_updated=datetime(2025, 3, 12, tzinfo=UTC),
        items=(_Inner(due_on=date(2025, 3, 1), by_rating={1: 2}),),
    )

    assert to_camel_dict(value) == {
        "lastUpdated": "2025-03-12T00:00:00Z",
        "items": [{"dueOn": "2025-03-01", "byRating": {"1": 2}}],
    }


def test_config_show_reports_bad_config(isolated_config):
    isolated_config.write_text('streak_strategy = "weekly"\n')

    result = runner.invoke(app, ["config", "show"])

    assert result.exit_code == 1
