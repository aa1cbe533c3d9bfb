"""
Domain models for study statistics.

These are pure data structures with no I/O or external dependencies.
Raw rows are validated and defaulted by the infrastructure layer before
they are turned into these records.
"""

from dataclasses import dataclass
from datetime import date, datetime

from examprep.domain.constants import DEFAULT_EASE_FACTOR


@dataclass(frozen=True)
class Card:
    """
    A spaced-repetition card.

    Attributes:
        id: Card identifier, referenced by review entries.
        paper: Subject-area tag (e.g. "paper1").
        ease_factor: SM-2 ease factor (>= 1.3 in practice).
        interval_days: Current review interval in days.
        repetitions: Consecutive successful reviews.
        next_review_date: Calendar date the card is next due.
        total_reviews: Lifetime review count for this card.
        correct_reviews: Lifetime correct review count for this card.
    """

    id: str
    paper: str
    ease_factor: float = DEFAULT_EASE_FACTOR
    interval_days: int = 0
    repetitions: int = 0
    next_review_date: date | None = None
    total_reviews: int = 0
    correct_reviews: int = 0


@dataclass(frozen=True)
class ReviewEntry:
    """
    A single review log entry.

    Attributes:
        card_id: The card that was reviewed.
        reviewed_at: When the review happened.
        was_correct: Whether the answer was correct.
        time_taken: Response time in seconds (0 when not recorded).
        difficulty_rating: Self-reported difficulty 1-5, if given.
    """

    card_id: str
    reviewed_at: datetime
    was_correct: bool
    time_taken: float = 0.0
    difficulty_rating: int | None = None


@dataclass(frozen=True)
class StudySession:
    """A completed study session."""

    completed_at: datetime
    questions_reviewed: int = 0
    correct_answers: int = 0
    session_duration: float = 0.0  # seconds


@dataclass(frozen=True)
class StreakSeed:
    """Streak figures precomputed outside the engine (e.g. by the database)."""

    current_streak: int = 0
    longest_streak: int = 0
    total_days: int = 0


@dataclass(frozen=True)
class TopicProgress:
    """
    Aggregated quiz/test progress for one topic (chapter).

    accuracy is the average score as a 0-100 percentage.
    """

    topic: str
    accuracy: float
    attempts: int = 0
    last_practiced: datetime | None = None


@dataclass(frozen=True)
class Attempt:
    """
    One finished quiz or test.

    Attributes:
        completed_at: When the attempt was submitted.
        score: Percentage score.
        time_taken: Seconds spent (0 when not recorded).
    """

    completed_at: datetime
    score: float = 0.0
    time_taken: float = 0.0
