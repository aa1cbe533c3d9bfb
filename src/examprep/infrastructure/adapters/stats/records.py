"""
Boundary models for raw study records.

Raw rows (exported JSON/YAML, database rows) are validated here and turned
into domain records. Missing or malformed optional fields degrade to
defaults; a row missing a required field is skipped with a warning so one
bad row never blanks the whole report.
"""

import logging
from abc import ABC, abstractmethod
from collections.abc import Iterable
from datetime import UTC, date, datetime
from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError, field_validator

from examprep.domain.constants import DEFAULT_EASE_FACTOR, DIFFICULTY_RATINGS
from examprep.domain.stats.models import (
    Attempt,
    Card,
    ReviewEntry,
    StreakSeed,
    StudySession,
    TopicProgress,
)

logger = logging.getLogger(__name__)


def _to_float(v: Any) -> float:
    if v is None or isinstance(v, bool):
        return 0.0
    try:
        return max(float(v), 0.0)
    except (TypeError, ValueError):
        return 0.0


def _to_int(v: Any) -> int:
    return int(_to_float(v))


def _to_utc(v: datetime) -> datetime:
    if v.tzinfo is None:
        return v.replace(tzinfo=UTC)
    return v.astimezone(UTC)


class _Record(BaseModel, ABC):
    model_config = ConfigDict(extra="ignore", frozen=True)

    @abstractmethod
    def to_domain(self) -> Any:
        pass


class CardRecord(_Record):
    id: str
    paper: str
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    repetitions: int = 0
    next_review_date: date | None = None
    total_reviews: int = 0
    correct_reviews: int = 0

    @field_validator("id", "paper", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int | float) and not isinstance(v, bool) else v

    @field_validator("ease_factor", mode="before")
    @classmethod
    def default_ease(cls, v: Any) -> float:
        value = _to_float(v)
        return value if value >= 1 else DEFAULT_EASE_FACTOR

    @field_validator(
        "interval_days", "repetitions", "total_reviews", "correct_reviews", mode="before"
    )
    @classmethod
    def coerce_count(cls, v: Any) -> int:
        return _to_int(v)

    @field_validator("next_review_date", mode="before")
    @classmethod
    def parse_due(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, date):
            return v
        if not isinstance(v, str) or not v:
            return None
        try:
            return date.fromisoformat(v.split("T", 1)[0])
        except ValueError:
            return None

    def to_domain(self) -> Card:
        return Card(
            id=self.id,
            paper=self.paper,
            ease_factor=self.ease_factor,
            interval_days=self.interval_days,
            repetitions=self.repetitions,
            next_review_date=self.next_review_date,
            total_reviews=self.total_reviews,
            correct_reviews=min(self.correct_reviews, self.total_reviews),
        )


class ReviewRecord(_Record):
    card_id: str
    reviewed_at: datetime
    was_correct: bool = False
    time_taken: float = 0.0
    difficulty_rating: int | None = None

    @field_validator("card_id", mode="before")
    @classmethod
    def stringify(cls, v: Any) -> Any:
        return str(v) if isinstance(v, int) and not isinstance(v, bool) else v

    @field_validator("was_correct", mode="before")
    @classmethod
    def default_correct(cls, v: Any) -> Any:
        return False if v is None else v

    @field_validator("time_taken", mode="before")
    @classmethod
    def coerce_time(cls, v: Any) -> float:
        return _to_float(v)

    @field_validator("difficulty_rating", mode="before")
    @classmethod
    def rating_in_range(cls, v: Any) -> int | None:
        if v is None or isinstance(v, bool):
            return None
        try:
            rating = int(v)
        except (TypeError, ValueError):
            return None
        return rating if rating in DIFFICULTY_RATINGS else None

    @field_validator("reviewed_at")
    @classmethod
    def normalize_tz(cls, v: datetime) -> datetime:
        return _to_utc(v)

    def to_domain(self) -> ReviewEntry:
        return ReviewEntry(
            card_id=self.card_id,
            reviewed_at=self.reviewed_at,
            was_correct=self.was_correct,
            time_taken=self.time_taken,
            difficulty_rating=self.difficulty_rating,
        )


class SessionRecord(_Record):
    completed_at: datetime
    questions_reviewed: int = 0
    correct_answers: int = 0
    session_duration: float = 0.0

    @field_validator("questions_reviewed", "correct_answers", mode="before")
    @classmethod
    def coerce_count(cls, v: Any) -> int:
        return _to_int(v)

    @field_validator("session_duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> float:
        return _to_float(v)

    @field_validator("completed_at")
    @classmethod
    def normalize_tz(cls, v: datetime) -> datetime:
        return _to_utc(v)

    def to_domain(self) -> StudySession:
        return StudySession(
            completed_at=self.completed_at,
            questions_reviewed=self.questions_reviewed,
            correct_answers=min(self.correct_answers, self.questions_reviewed),
            session_duration=self.session_duration,
        )


class AttemptRecord(_Record):
    completed_at: datetime
    score: float = 0.0
    time_taken: float = 0.0

    @field_validator("score", "time_taken", mode="before")
    @classmethod
    def coerce_number(cls, v: Any) -> float:
        return _to_float(v)

    @field_validator("completed_at")
    @classmethod
    def normalize_tz(cls, v: datetime) -> datetime:
        return _to_utc(v)

    def to_domain(self) -> Attempt:
        return Attempt(
            completed_at=self.completed_at, score=self.score, time_taken=self.time_taken
        )


class StreakRecord(_Record):
    current_streak: int = 0
    longest_streak: int = 0
    total_days: int = 0

    @field_validator("current_streak", "longest_streak", "total_days", mode="before")
    @classmethod
    def coerce_count(cls, v: Any) -> int:
        return _to_int(v)

    def to_domain(self) -> StreakSeed:
        return StreakSeed(
            current_streak=self.current_streak,
            longest_streak=self.longest_streak,
            total_days=self.total_days,
        )


class TopicProgressRecord(_Record):
    topic: str = Field(validation_alias=AliasChoices("topic", "chapter"))
    accuracy: float = Field(
        default=0.0, validation_alias=AliasChoices("accuracy", "average_score")
    )
    attempts: int = 0
    last_practiced: datetime | None = Field(
        default=None, validation_alias=AliasChoices("last_practiced", "last_attempted")
    )

    @field_validator("accuracy", mode="before")
    @classmethod
    def coerce_accuracy(cls, v: Any) -> float:
        return min(_to_float(v), 100.0)

    @field_validator("attempts", mode="before")
    @classmethod
    def coerce_attempts(cls, v: Any) -> int:
        return _to_int(v)

    @field_validator("last_practiced", mode="before")
    @classmethod
    def parse_last_practiced(cls, v: Any) -> datetime | None:
        if isinstance(v, datetime):
            return v
        if isinstance(v, date):
            return datetime(v.year, v.month, v.day)
        if not isinstance(v, str) or not v:
            return None
        try:
            return datetime.fromisoformat(v)
        except ValueError:
            return None

    @field_validator("last_practiced")
    @classmethod
    def normalize_tz(cls, v: datetime | None) -> datetime | None:
        return _to_utc(v) if v is not None else None

    def to_domain(self) -> TopicProgress:
        return TopicProgress(
            topic=self.topic,
            accuracy=self.accuracy,
            attempts=self.attempts,
            last_practiced=self.last_practiced,
        )


def parse_records(rows: Iterable[Any], model: type[_Record], kind: str) -> list[Any]:
    """
    Validate raw rows with ``model`` and convert them to domain records.

    Rows that fail validation are logged and skipped.
    """
    records: list[Any] = []
    skipped = 0

    for index, row in enumerate(rows or []):
        if not isinstance(row, dict):
            skipped += 1
            logger.warning(f"Skipping {kind} row {index}: expected a mapping")
            continue
        try:
            records.append(model.model_validate(row).to_domain())
        except ValidationError as e:
            skipped += 1
            logger.warning(f"Skipping {kind} row {index}: {e.error_count()} invalid field(s)")

    if skipped:
        logger.debug(f"Parsed {len(records)} {kind} rows, skipped {skipped}")
    return records
