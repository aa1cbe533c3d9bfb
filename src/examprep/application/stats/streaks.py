"""
Study streaks.

Two strategies exist because the figures come from two places: a
precomputed seed (e.g. a database routine) or the raw list of study days.
Which one is authoritative is chosen by configuration, not here.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date, timedelta

from examprep.domain.stats.models import StreakSeed


@dataclass(frozen=True)
class StreakSummary:
    current: int = 0
    longest: int = 0
    total_days: int = 0


class StreakStrategy(ABC):
    @abstractmethod
    def summarize(self, today: date) -> StreakSummary:
        pass


class StreakFromSeed(StreakStrategy):
    """Pass precomputed streak figures through unchanged."""

    def __init__(self, seed: StreakSeed | None):
        self.seed = seed or StreakSeed()

    def summarize(self, today: date) -> StreakSummary:
        return StreakSummary(
            current=max(self.seed.current_streak, 0),
            longest=max(self.seed.longest_streak, 0),
            total_days=max(self.seed.total_days, 0),
        )


class StreakFromDates(StreakStrategy):
    """Derive streak figures from the days a session happened."""

    def __init__(self, dates: list[date]):
        self.dates = dates

    def summarize(self, today: date) -> StreakSummary:
        return StreakSummary(
            current=calculate_streak(self.dates, today),
            longest=longest_streak(self.dates),
            total_days=len(set(self.dates)),
        )


def calculate_streak(dates: list[date], today: date) -> int:
    """
    Count consecutive study days ending today.

    ``dates`` is ordered most recent first. A date matching the cursor
    extends the streak and moves the cursor back a day; a date before the
    cursor is a gap and ends the walk. Dates after the cursor (duplicates
    or future dates) are skipped. No session today means a streak of 0.
    """
    streak = 0
    cursor = today

    for day in dates:
        if day == cursor:
            streak += 1
            cursor -= timedelta(days=1)
        elif day < cursor:
            break

    return streak


def longest_streak(dates: list[date]) -> int:
    if not dates:
        return 0

    days = sorted(set(dates))
    longest = run = 1
    for previous, current in zip(days, days[1:]):
        if current - previous == timedelta(days=1):
            run += 1
            longest = max(longest, run)
        else:
            run = 1

    return longest
