"""
Quiz and test attempt summaries.
"""

from dataclasses import dataclass, field

from examprep.application.utils.numbers import mean, round_int
from examprep.domain.constants import RECENT_ATTEMPTS_LIMIT
from examprep.domain.stats.models import Attempt


@dataclass(frozen=True)
class AttemptStats:
    total_attempts: int = 0
    average_score: int = 0
    best_score: float = 0
    total_time: float = 0
    recent_attempts: list[Attempt] = field(default_factory=list)


@dataclass(frozen=True)
class AttemptOverview:
    quizzes: AttemptStats = field(default_factory=AttemptStats)
    tests: AttemptStats = field(default_factory=AttemptStats)
    total_attempts: int = 0
    average_score: int = 0
    study_time: float = 0


def summarize_attempts(attempts: list[Attempt]) -> AttemptStats:
    """
    Count, average and best score over attempts ordered most recent first.

    Missing times were already defaulted to 0, so they add nothing to
    ``total_time``.
    """
    if not attempts:
        return AttemptStats()

    return AttemptStats(
        total_attempts=len(attempts),
        average_score=round_int(mean([a.score for a in attempts])),
        best_score=max(a.score for a in attempts),
        total_time=sum(a.time_taken for a in attempts),
        recent_attempts=attempts[:RECENT_ATTEMPTS_LIMIT],
    )


def combine_attempts(quizzes: AttemptStats, tests: AttemptStats) -> AttemptOverview:
    """
    Combine quiz and test summaries.

    The overall average is the mean of the two averages, so a kind with no
    attempts pulls it towards 0.
    """
    return AttemptOverview(
        quizzes=quizzes,
        tests=tests,
        total_attempts=quizzes.total_attempts + tests.total_attempts,
        average_score=round_int((quizzes.average_score + tests.average_score) / 2),
        study_time=quizzes.total_time + tests.total_time,
    )
