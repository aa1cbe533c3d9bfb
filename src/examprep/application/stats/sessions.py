"""
Session and time summaries.

Both functions take ``now``/sessions explicitly and never read the clock.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from examprep.application.utils.numbers import percent, round_int
from examprep.domain.constants import MONTH_DAYS, WEEK_DAYS
from examprep.domain.stats.models import ReviewEntry, StudySession


@dataclass(frozen=True)
class SessionStats:
    total: int = 0
    average_questions: int = 0
    average_accuracy: int = 0
    average_duration: int = 0
    longest_session: float = 0
    total_time: float = 0
    this_week: int = 0
    this_month: int = 0


@dataclass(frozen=True)
class TimeStats:
    average_response_time: int = 0
    fastest_response: float = 0
    slowest_response: float = 0
    total_study_time: float = 0
    daily_average: int = 0


def summarize_sessions(sessions: list[StudySession], now: datetime) -> SessionStats:
    """
    Aggregate counts and averages over study sessions.

    Args:
        sessions: Completed sessions, in any order.
        now: Reference time for the trailing 7/30-day windows.
    """
    if not sessions:
        return SessionStats()

    count = len(sessions)
    week_ago = now - timedelta(days=WEEK_DAYS)
    month_ago = now - timedelta(days=MONTH_DAYS)

    total_questions = sum(s.questions_reviewed for s in sessions)
    total_correct = sum(s.correct_answers for s in sessions)
    total_duration = sum(s.session_duration for s in sessions)

    return SessionStats(
        total=count,
        average_questions=round_int(total_questions / count),
        average_accuracy=percent(total_correct, total_questions),
        average_duration=round_int(total_duration / count),
        longest_session=max((s.session_duration for s in sessions), default=0),
        total_time=total_duration,
        this_week=sum(1 for s in sessions if s.completed_at >= week_ago),
        this_month=sum(1 for s in sessions if s.completed_at >= month_ago),
    )


def calculate_time_stats(
    reviews: list[ReviewEntry], sessions: list[StudySession]
) -> TimeStats:
    """
    Response-time and study-time statistics.

    Reviews without a recorded time (time_taken <= 0) are excluded from the
    response aggregates rather than counted as instant answers.
    """
    response_times = [r.time_taken for r in reviews if r.time_taken > 0]
    total_study_time = sum(s.session_duration for s in sessions)

    study_days = {s.completed_at.date() for s in sessions}
    daily_average = total_study_time / len(study_days) if study_days else 0

    if not response_times:
        return TimeStats(
            total_study_time=total_study_time,
            daily_average=round_int(daily_average),
        )

    return TimeStats(
        average_response_time=round_int(sum(response_times) / len(response_times)),
        fastest_response=min(response_times),
        slowest_response=max(response_times),
        total_study_time=total_study_time,
        daily_average=round_int(daily_average),
    )
