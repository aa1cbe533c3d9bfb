"""
Study recommendations from topic progress and card state.
"""

from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal

from examprep.application.stats.cards import classify_cards
from examprep.application.stats.retention import RetentionStats
from examprep.application.utils.numbers import round_int
from examprep.domain.constants import (
    LEARNING_BACKLOG,
    LOW_RETENTION,
    STALE_TOPIC_DAYS,
    STRONG_TOPIC_ACCURACY,
    TOPIC_AREA_LIMIT,
    WEAK_TOPIC_ACCURACY,
)
from examprep.domain.stats.models import Card, TopicProgress

Priority = Literal["high", "medium", "low"]
MasteryLevel = Literal["novice", "beginner", "intermediate", "advanced", "expert"]

_PRIORITY_ORDER = {"high": 3, "medium": 2, "low": 1}


@dataclass(frozen=True)
class Recommendation:
    type: str
    priority: Priority
    title: str
    description: str
    action: str
    topic: str | None = None
    count: int | None = None


@dataclass(frozen=True)
class TopicSummary:
    total_topics: int = 0
    completed_topics: int = 0
    strong_areas: list[TopicProgress] = field(default_factory=list)
    weak_areas: list[TopicProgress] = field(default_factory=list)
    mastery_distribution: dict[str, int] = field(default_factory=dict)


def recommend_topics(progress: list[TopicProgress], now: datetime) -> list[Recommendation]:
    """
    Suggest at most two actions from per-topic progress.

    1. improvement: the weakest topic below 60% accuracy.
    2. review: the strongest topic at 80%+ not practised for over 7 days.
    """
    recommendations: list[Recommendation] = []

    weak = [p for p in progress if p.accuracy < WEAK_TOPIC_ACCURACY]
    if weak:
        worst = min(weak, key=lambda p: p.accuracy)
        recommendations.append(
            Recommendation(
                type="improvement",
                priority="high",
                title="Focus on Weak Areas",
                description=(
                    f"Practice {worst.topic} - your accuracy is {round_int(worst.accuracy)}%"
                ),
                action="Take Quiz",
                topic=worst.topic,
            )
        )

    strong = sorted(
        (p for p in progress if p.accuracy >= STRONG_TOPIC_ACCURACY),
        key=lambda p: p.accuracy,
        reverse=True,
    )
    stale = next((p for p in strong if _days_since(p.last_practiced, now) > STALE_TOPIC_DAYS), None)
    if stale:
        recommendations.append(
            Recommendation(
                type="review",
                priority="medium",
                title="Review Strong Areas",
                description=(
                    f"Review {stale.topic} - maintain your {round_int(stale.accuracy)}% accuracy"
                ),
                action="Take Quiz",
                topic=stale.topic,
            )
        )

    return recommendations


def recommend_for_deck(
    cards: list[Card], retention: RetentionStats, today: date
) -> list[Recommendation]:
    """Card-driven suggestions, highest priority first."""
    buckets = classify_cards(cards, today)
    recommendations: list[Recommendation] = []

    if buckets.overdue:
        recommendations.append(
            Recommendation(
                type="overdue",
                priority="high",
                title="Overdue Reviews",
                description=(
                    f"You have {len(buckets.overdue)} overdue cards "
                    "that need immediate attention."
                ),
                action="Review overdue cards",
                count=len(buckets.overdue),
            )
        )

    if retention.total_reviews > 0 and retention.overall < LOW_RETENTION:
        recommendations.append(
            Recommendation(
                type="retention",
                priority="medium",
                title="Low Retention Rate",
                description=(
                    f"Your overall retention rate is {retention.overall}%. "
                    "Consider reviewing explanations more carefully."
                ),
                action="Focus on understanding",
            )
        )

    if buckets.new:
        recommendations.append(
            Recommendation(
                type="new_cards",
                priority="low",
                title="New Cards Available",
                description=f"{len(buckets.new)} new cards are ready for introduction.",
                action="Learn new cards",
                count=len(buckets.new),
            )
        )

    if len(buckets.learning) > LEARNING_BACKLOG:
        recommendations.append(
            Recommendation(
                type="learning",
                priority="medium",
                title="Cards in Learning Phase",
                description=(
                    f"{len(buckets.learning)} cards are in the learning phase "
                    "and need regular practice."
                ),
                action="Practice learning cards",
                count=len(buckets.learning),
            )
        )

    # sorted() is stable, so equal priorities keep insertion order
    return sorted(recommendations, key=lambda r: _PRIORITY_ORDER[r.priority], reverse=True)


def mastery_level(average_score: float, attempts: int) -> MasteryLevel:
    if attempts >= 5 and average_score >= 90:
        return "expert"
    if attempts >= 3 and average_score >= 80:
        return "advanced"
    if attempts >= 2 and average_score >= 70:
        return "intermediate"
    if attempts >= 1 and average_score >= 60:
        return "beginner"
    return "novice"


def summarize_topics(progress: list[TopicProgress]) -> TopicSummary:
    """Strong and weak areas (best/worst first, top 5 each) and mastery counts."""
    if not progress:
        return TopicSummary()

    ranked = sorted(progress, key=lambda p: p.accuracy, reverse=True)
    strong = [p for p in ranked if p.accuracy >= STRONG_TOPIC_ACCURACY]
    weak = sorted(
        (p for p in progress if p.accuracy < WEAK_TOPIC_ACCURACY), key=lambda p: p.accuracy
    )
    distribution = Counter(mastery_level(p.accuracy, p.attempts) for p in progress)

    return TopicSummary(
        total_topics=len(progress),
        completed_topics=sum(1 for p in progress if p.attempts >= 3),
        strong_areas=strong[:TOPIC_AREA_LIMIT],
        weak_areas=weak[:TOPIC_AREA_LIMIT],
        mastery_distribution=dict(distribution),
    )


def _days_since(moment: datetime | None, now: datetime) -> int:
    # never practised counts as stale
    if moment is None:
        return STALE_TOPIC_DAYS + 1
    return (now - moment).days
