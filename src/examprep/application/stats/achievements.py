"""
Threshold-based badges and upcoming milestones.
"""

from dataclasses import dataclass, field

from examprep.application.stats.retention import RetentionStats
from examprep.application.stats.streaks import StreakSummary
from examprep.domain.constants import (
    ACCURACY_TIERS,
    CARD_TIERS,
    MAX_NEXT_MILESTONES,
    STREAK_TIERS,
    VOLUME_TIERS,
)
from examprep.domain.stats.models import StudySession


@dataclass(frozen=True)
class Achievement:
    type: str
    level: str
    title: str


@dataclass(frozen=True)
class Milestone:
    type: str
    target: int
    current: int
    title: str


@dataclass(frozen=True)
class Achievements:
    unlocked: list[Achievement] = field(default_factory=list)
    next_milestones: list[Milestone] = field(default_factory=list)


_BADGE_TITLES = {
    "cards": "{}+ Cards Created",
    "streak": "{}-Day Streak",
    "accuracy": "{}%+ Accuracy",
    "volume": "{}+ Reviews",
}

_MILESTONE_TITLES = {
    "cards": "Create {} Cards",
    "streak": "{}-Day Streak",
    "accuracy": "Reach {}% Accuracy",
    "volume": "Complete {} Reviews",
}


def calculate_achievements(
    card_count: int,
    sessions: list[StudySession],
    streak: StreakSummary,
    retention: RetentionStats,
) -> Achievements:
    """
    Pick at most one badge per category and up to 3 next milestones.

    Categories: cards created, current streak, overall accuracy and total
    questions reviewed across sessions.
    """
    total_reviews = sum(s.questions_reviewed for s in sessions)
    categories = [
        ("cards", card_count, CARD_TIERS),
        ("streak", streak.current, STREAK_TIERS),
        ("accuracy", retention.overall, ACCURACY_TIERS),
        ("volume", total_reviews, VOLUME_TIERS),
    ]

    unlocked: list[Achievement] = []
    milestones: list[Milestone] = []

    for kind, value, tiers in categories:
        badge = _highest_met(kind, value, tiers)
        if badge:
            unlocked.append(badge)

        milestone = _next_unmet(kind, value, tiers)
        if milestone:
            milestones.append(milestone)

    return Achievements(unlocked=unlocked, next_milestones=milestones[:MAX_NEXT_MILESTONES])


def _highest_met(kind: str, value: int, tiers: tuple[tuple[int, str], ...]) -> Achievement | None:
    for threshold, level in tiers:
        if value >= threshold:
            return Achievement(type=kind, level=level, title=_BADGE_TITLES[kind].format(threshold))
    return None


def _next_unmet(kind: str, value: int, tiers: tuple[tuple[int, str], ...]) -> Milestone | None:
    # tiers run highest first; the next target is the lowest one not reached
    for threshold, _level in reversed(tiers):
        if value < threshold:
            return Milestone(
                type=kind,
                target=threshold,
                current=value,
                title=_MILESTONE_TITLES[kind].format(threshold),
            )
    return None
