"""
Retention (correctness ratio) over review history.
"""

import math
from collections.abc import Callable, Hashable
from dataclasses import dataclass

from examprep.application.utils.numbers import percent
from examprep.domain.constants import (
    INSUFFICIENT_DATA,
    RECENT_REVIEW_WINDOW,
    RETENTION_TREND_DELTA,
    RETENTION_TREND_MIN_REVIEWS,
)
from examprep.domain.stats.models import ReviewEntry


@dataclass(frozen=True)
class RetentionStats:
    overall: int = 0
    total_reviews: int = 0
    correct_reviews: int = 0
    recent: int = 0
    trend: str = INSUFFICIENT_DATA


def calculate_retention(reviews: list[ReviewEntry]) -> RetentionStats:
    """
    Percent of correct reviews, overall and over the recent window.

    ``reviews`` is ordered most recent first, so the recent window is the
    front of the list: the last min(20, ceil(n / 2)) reviews made.
    """
    if not reviews:
        return RetentionStats()

    total = len(reviews)
    correct = sum(1 for r in reviews if r.was_correct)
    overall_exact = correct / total * 100

    # Newest reviews, not the tail of the list: the tail is the oldest history
    recent_count = min(RECENT_REVIEW_WINDOW, math.ceil(total * 0.5))
    recent_correct = sum(1 for r in reviews[:recent_count] if r.was_correct)
    recent_exact = recent_correct / recent_count * 100

    trend = "stable"
    if total >= RETENTION_TREND_MIN_REVIEWS:
        diff = recent_exact - overall_exact
        if diff > RETENTION_TREND_DELTA:
            trend = "improving"
        elif diff < -RETENTION_TREND_DELTA:
            trend = "declining"

    return RetentionStats(
        overall=percent(correct, total),
        total_reviews=total,
        correct_reviews=correct,
        recent=percent(recent_correct, recent_count),
        trend=trend,
    )


def retention_by(
    reviews: list[ReviewEntry], key: Callable[[ReviewEntry], Hashable | None]
) -> dict[Hashable, RetentionStats]:
    """
    Retention per group.

    Entries for which ``key`` returns None are left out of every group.
    """
    groups: dict[Hashable, list[ReviewEntry]] = {}
    for review in reviews:
        group = key(review)
        if group is None:
            continue
        groups.setdefault(group, []).append(review)

    return {group: calculate_retention(entries) for group, entries in groups.items()}
