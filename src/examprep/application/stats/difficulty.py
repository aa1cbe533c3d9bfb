"""
Difficulty-rating distribution and its correlation with correctness.
"""

import math
from dataclasses import dataclass, field

from examprep.application.utils.numbers import round_half_up
from examprep.domain.constants import DIFFICULTY_RATINGS, MIN_CORRELATION_SAMPLES
from examprep.domain.stats.models import ReviewEntry


def _empty_distribution() -> dict[int, int]:
    return {rating: 0 for rating in DIFFICULTY_RATINGS}


@dataclass(frozen=True)
class DifficultyStats:
    average_difficulty: float = 0.0
    difficulty_distribution: dict[int, int] = field(default_factory=_empty_distribution)
    correlation_accuracy: float = 0.0


def analyze_difficulty(reviews: list[ReviewEntry]) -> DifficultyStats:
    rated = [r for r in reviews if r.difficulty_rating in DIFFICULTY_RATINGS]
    if not rated:
        return DifficultyStats()

    distribution = _empty_distribution()
    for review in rated:
        distribution[review.difficulty_rating] += 1

    average = sum(r.difficulty_rating for r in rated) / len(rated)

    return DifficultyStats(
        average_difficulty=round_half_up(average, 1),
        difficulty_distribution=distribution,
        correlation_accuracy=difficulty_accuracy_correlation(rated),
    )


def difficulty_accuracy_correlation(reviews: list[ReviewEntry]) -> float:
    """
    Pearson correlation between difficulty rating and correctness (0/1).

    Returns 0 with fewer than 5 samples or when either variable is constant.
    The result is rounded to 2 decimals and kept within [-1, 1].
    """
    if len(reviews) < MIN_CORRELATION_SAMPLES:
        return 0.0

    n = len(reviews)
    xs = [r.difficulty_rating or 0 for r in reviews]
    ys = [1 if r.was_correct else 0 for r in reviews]

    sum_x = sum(xs)
    sum_y = sum(ys)
    sum_xy = sum(x * y for x, y in zip(xs, ys))
    sum_x2 = sum(x * x for x in xs)
    sum_y2 = sum(y * y for y in ys)

    numerator = n * sum_xy - sum_x * sum_y
    variance_product = (n * sum_x2 - sum_x * sum_x) * (n * sum_y2 - sum_y * sum_y)
    if variance_product <= 0:
        return 0.0

    correlation = numerator / math.sqrt(variance_product)
    return round_half_up(max(-1.0, min(1.0, correlation)), 2)
