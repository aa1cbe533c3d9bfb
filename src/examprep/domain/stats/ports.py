"""
Ports (interfaces) for stats retrieval.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Literal

from .models import Attempt, Card, ReviewEntry, StreakSeed, StudySession, TopicProgress

AttemptKind = Literal["quiz", "test"]


class StatsRepository(ABC):
    """
    Port for fetching one user's study records.

    Implementations:
        - FileStatsRepository: Reads a JSON or YAML export of the records.

    Implementations raise StatsRepositoryError when a fetch fails.
    """

    @abstractmethod
    async def get_cards(self) -> list[Card]:
        """Fetch all spaced-repetition cards."""
        pass

    @abstractmethod
    async def get_sessions(self, since: datetime | None = None) -> list[StudySession]:
        """
        Fetch study sessions completed at or after ``since``.

        Returns:
            Sessions sorted by completed_at descending (most recent first).
        """
        pass

    @abstractmethod
    async def get_review_history(self, since: datetime | None = None) -> list[ReviewEntry]:
        """
        Fetch review entries made at or after ``since``.

        Returns:
            Entries sorted by reviewed_at descending (most recent first).
        """
        pass

    @abstractmethod
    async def get_streak_seed(self) -> StreakSeed:
        """Fetch precomputed streak figures."""
        pass

    @abstractmethod
    async def get_session_dates(self) -> list[date]:
        """
        Fetch the distinct calendar days on which a session happened.

        Returns:
            Dates sorted descending (most recent first).
        """
        pass

    @abstractmethod
    async def get_topic_progress(self) -> list[TopicProgress]:
        """Fetch per-topic quiz/test progress."""
        pass

    @abstractmethod
    async def get_attempts(self, kind: AttemptKind) -> list[Attempt]:
        """
        Fetch finished quiz or test attempts.

        Returns:
            Attempts sorted by completed_at descending (most recent first).
        """
        pass
