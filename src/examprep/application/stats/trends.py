"""
Performance trends: accuracy, speed and volume labels plus weekly progress.

Review history and sessions are both expected most recent first, the order
the repository returns them in.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Literal

from examprep.application.utils.numbers import mean, percent
from examprep.domain.constants import (
    INSUFFICIENT_DATA,
    TREND_ACCURACY_DELTA,
    TREND_MIN_REVIEWS,
    TREND_MIN_SESSIONS,
    TREND_SPEED_DELTA,
    TREND_VOLUME_WINDOW,
    WEEKLY_PROGRESS_WEEKS,
)
from examprep.domain.stats.models import ReviewEntry, StudySession

TrendLabel = Literal["improving", "declining", "stable", "insufficient_data"]
VolumeLabel = Literal["increasing", "stable", "insufficient_data"]


@dataclass(frozen=True)
class WeekProgress:
    week: date  # Sunday the week starts on
    sessions: int = 0
    questions: int = 0
    total_correct: int = 0
    accuracy: int = 0


@dataclass(frozen=True)
class TrendStats:
    accuracy_trend: TrendLabel = INSUFFICIENT_DATA
    speed_trend: TrendLabel = INSUFFICIENT_DATA
    volume_trend: VolumeLabel = INSUFFICIENT_DATA
    weekly_progress: list[WeekProgress] = field(default_factory=list)


def analyze_trends(reviews: list[ReviewEntry], sessions: list[StudySession]) -> TrendStats:
    """
    Compare the newer half of the review history against the older half.

    Needs at least 10 reviews; below that every label is
    ``insufficient_data`` and no weekly series is produced.
    """
    if len(reviews) < TREND_MIN_REVIEWS:
        return TrendStats()

    midpoint = len(reviews) // 2
    newer = reviews[:midpoint]
    older = reviews[midpoint:]

    newer_accuracy = _accuracy(newer)
    older_accuracy = _accuracy(older)
    if newer_accuracy > older_accuracy + TREND_ACCURACY_DELTA:
        accuracy_trend = "improving"
    elif newer_accuracy < older_accuracy - TREND_ACCURACY_DELTA:
        accuracy_trend = "declining"
    else:
        accuracy_trend = "stable"

    # Missing response times count as 0 here, over the whole half.
    newer_speed = mean([r.time_taken for r in newer])
    older_speed = mean([r.time_taken for r in older])
    if newer_speed < older_speed - TREND_SPEED_DELTA:
        speed_trend = "improving"
    elif newer_speed > older_speed + TREND_SPEED_DELTA:
        speed_trend = "declining"
    else:
        speed_trend = "stable"

    return TrendStats(
        accuracy_trend=accuracy_trend,
        speed_trend=speed_trend,
        volume_trend=volume_trend(sessions),
        weekly_progress=weekly_progress(sessions),
    )


def volume_trend(sessions: list[StudySession]) -> VolumeLabel:
    """
    Compare questions in the 3 most recent sessions with the 3 oldest.

    There is no "declining" label: fewer recent questions reads as stable.
    """
    if len(sessions) < TREND_MIN_SESSIONS:
        return INSUFFICIENT_DATA

    recent = sum(s.questions_reviewed for s in sessions[:TREND_VOLUME_WINDOW])
    oldest = sum(s.questions_reviewed for s in sessions[-TREND_VOLUME_WINDOW:])
    return "increasing" if recent > oldest else "stable"


def week_start(day: date) -> date:
    """Sunday on or before ``day``."""
    return day - timedelta(days=(day.weekday() + 1) % 7)


def weekly_progress(
    sessions: list[StudySession], weeks: int = WEEKLY_PROGRESS_WEEKS
) -> list[WeekProgress]:
    """Bucket sessions by week, oldest first, keeping the last ``weeks`` buckets."""
    buckets: dict[date, list[StudySession]] = {}
    for session in sessions:
        key = week_start(session.completed_at.date())
        buckets.setdefault(key, []).append(session)

    progress = []
    for key in sorted(buckets):
        bucket = buckets[key]
        questions = sum(s.questions_reviewed for s in bucket)
        correct = sum(s.correct_answers for s in bucket)
        progress.append(
            WeekProgress(
                week=key,
                sessions=len(bucket),
                questions=questions,
                total_correct=correct,
                accuracy=percent(correct, questions),
            )
        )

    return progress[-weeks:] if weeks > 0 else []


def _accuracy(reviews: list[ReviewEntry]) -> float:
    if not reviews:
        return 0.0
    return sum(1 for r in reviews if r.was_correct) / len(reviews) * 100
