# Domain Stats Package
from .models import Attempt, Card, ReviewEntry, StreakSeed, StudySession, TopicProgress
from .ports import AttemptKind, StatsRepository

__all__ = [
    "Attempt",
    "AttemptKind",
    "Card",
    "ReviewEntry",
    "StudySession",
    "StreakSeed",
    "TopicProgress",
    "StatsRepository",
]
