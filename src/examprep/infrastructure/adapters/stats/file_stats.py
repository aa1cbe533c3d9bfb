"""
File Stats Repository: Infrastructure adapter for exported study records.

Implements StatsRepository over a single JSON or YAML document holding one
user's records:

    cards: [...]
    sessions: [...]
    review_history: [...]
    streak: {current_streak, longest_streak, total_days}
    topic_progress: [...]
    quiz_attempts: [...]
    test_attempts: [...]
"""

import json
import logging
from datetime import date, datetime
from pathlib import Path
from typing import Any

import yaml

from examprep.domain.exceptions import StatsRepositoryError
from examprep.domain.stats.models import (
    Attempt,
    Card,
    ReviewEntry,
    StreakSeed,
    StudySession,
    TopicProgress,
)
from examprep.domain.stats.ports import AttemptKind, StatsRepository

from .records import (
    AttemptRecord,
    CardRecord,
    ReviewRecord,
    SessionRecord,
    StreakRecord,
    TopicProgressRecord,
    parse_records,
)

logger = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}


class FileStatsRepository(StatsRepository):
    """
    Reads study records from a JSON or YAML export.

    The document is loaded once, on first access.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._document: dict[str, Any] | None = None

    async def get_cards(self) -> list[Card]:
        return parse_records(self._section("cards"), CardRecord, "card")

    async def get_sessions(self, since: datetime | None = None) -> list[StudySession]:
        sessions: list[StudySession] = parse_records(
            self._section("sessions"), SessionRecord, "session"
        )
        if since is not None:
            sessions = [s for s in sessions if s.completed_at >= since]
        return sorted(sessions, key=lambda s: s.completed_at, reverse=True)

    async def get_review_history(self, since: datetime | None = None) -> list[ReviewEntry]:
        reviews: list[ReviewEntry] = parse_records(
            self._section("review_history"), ReviewRecord, "review"
        )
        if since is not None:
            reviews = [r for r in reviews if r.reviewed_at >= since]
        return sorted(reviews, key=lambda r: r.reviewed_at, reverse=True)

    async def get_streak_seed(self) -> StreakSeed:
        raw = self._load().get("streak") or {}
        seeds = parse_records([raw], StreakRecord, "streak")
        return seeds[0] if seeds else StreakSeed()

    async def get_session_dates(self) -> list[date]:
        sessions = await self.get_sessions()
        return sorted({s.completed_at.date() for s in sessions}, reverse=True)

    async def get_topic_progress(self) -> list[TopicProgress]:
        return parse_records(
            self._section("topic_progress"), TopicProgressRecord, "topic progress"
        )

    async def get_attempts(self, kind: AttemptKind) -> list[Attempt]:
        attempts: list[Attempt] = parse_records(
            self._section(f"{kind}_attempts"), AttemptRecord, f"{kind} attempt"
        )
        return sorted(attempts, key=lambda a: a.completed_at, reverse=True)

    def _section(self, key: str) -> list[Any]:
        rows = self._load().get(key) or []
        if not isinstance(rows, list):
            raise StatsRepositoryError(
                f"Section '{key}' must be a list", context={"path": str(self.path)}
            )
        return rows

    def _load(self) -> dict[str, Any]:
        if self._document is not None:
            return self._document

        try:
            text = self.path.read_text(encoding="utf-8")
            if self.path.suffix.lower() in YAML_SUFFIXES:
                document = yaml.safe_load(text)
            else:
                document = json.loads(text)
        except OSError as e:
            raise StatsRepositoryError(
                f"Could not read records file: {e}", context={"path": str(self.path)}
            ) from e
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise StatsRepositoryError(
                f"Could not parse records file: {e}", context={"path": str(self.path)}
            ) from e

        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise StatsRepositoryError(
                "Records file must contain a mapping", context={"path": str(self.path)}
            )

        logger.debug(f"Loaded records from {self.path}")
        self._document = document
        return document
