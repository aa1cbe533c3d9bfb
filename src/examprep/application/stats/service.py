"""
Stats Service: Application layer orchestrator.

Fetches a user's records through the repository port, filters them to the
reporting period and hands them to the pure StatsAggregator.
"""

import logging
from collections.abc import Awaitable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import TypeVar

from examprep.application.config import StatsSettings
from examprep.domain.exceptions import StatsRepositoryError
from examprep.domain.stats.models import ReviewEntry, StreakSeed
from examprep.domain.stats.ports import StatsRepository

from .aggregator import StatisticsResult, StatsAggregator
from .attempts import AttemptOverview, combine_attempts, summarize_attempts
from .recommendations import (
    Recommendation,
    TopicSummary,
    recommend_for_deck,
    recommend_topics,
    summarize_topics,
)
from .streaks import StreakFromDates, StreakFromSeed, StreakStrategy

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class StatsReport:
    """Composite statistics plus the optional extras a caller asked for."""

    stats: StatisticsResult
    period: int
    last_updated: datetime
    attempts: AttemptOverview = field(default_factory=AttemptOverview)
    progress: TopicSummary = field(default_factory=TopicSummary)
    recent_history: list[ReviewEntry] | None = None
    recommendations: list[Recommendation] | None = None
    topic_recommendations: list[Recommendation] = field(default_factory=list)


class StatsService:
    """
    Application service for building statistics reports.

    Follows Dependency Inversion: depends on the StatsRepository abstraction,
    not a concrete adapter. Repository failures for one collection are
    logged and replaced with an empty default so the rest of the report
    still renders.
    """

    def __init__(
        self,
        stats_repo: StatsRepository,
        settings: StatsSettings | None = None,
        aggregator: StatsAggregator | None = None,
    ):
        """
        Args:
            stats_repo: The repository (port) for fetching records.
            settings: Reporting settings; defaults are used if not provided.
            aggregator: Optional custom aggregator; built from settings if not provided.
        """
        self._repo = stats_repo
        self._settings = settings or StatsSettings()
        self._aggregator = aggregator or StatsAggregator(papers=self._settings.papers)

    async def get_report(
        self,
        *,
        now: datetime,
        period_days: int | None = None,
        include_history: bool = False,
        include_recommendations: bool = False,
    ) -> StatsReport:
        """
        Build the statistics report for the configured user.

        Args:
            now: Reference time for the period window and all calculators.
            period_days: Trailing window for sessions and reviews; settings default.
            include_history: Attach the most recent review entries.
            include_recommendations: Attach deck and topic recommendations.
        """
        period = period_days or self._settings.period_days
        since = now - timedelta(days=period)

        cards = await self._fetch("cards", self._repo.get_cards(), [])
        sessions = await self._fetch("sessions", self._repo.get_sessions(since), [])
        reviews = await self._fetch("review history", self._repo.get_review_history(since), [])

        # Adapters are asked for the window, but keep the contract even if one ignores it
        sessions = [s for s in sessions if s.completed_at >= since]
        reviews = [r for r in reviews if r.reviewed_at >= since]

        streak = await self._streak_strategy()
        logger.info(
            f"Computing stats for {len(cards)} cards, {len(sessions)} sessions, "
            f"{len(reviews)} reviews over {period} days"
        )

        stats = self._aggregator.compute(cards, sessions, reviews, streak, now=now)

        # Quiz and test history is summarized over all time, not the period
        quizzes = await self._fetch("quiz attempts", self._repo.get_attempts("quiz"), [])
        tests = await self._fetch("test attempts", self._repo.get_attempts("test"), [])
        attempts = combine_attempts(summarize_attempts(quizzes), summarize_attempts(tests))

        progress = await self._fetch("topic progress", self._repo.get_topic_progress(), [])

        recent_history = None
        if include_history:
            recent_history = reviews[: self._settings.history_limit]

        recommendations = None
        topic_recommendations: list[Recommendation] = []
        if include_recommendations:
            recommendations = recommend_for_deck(cards, stats.retention, now.date())
            topic_recommendations = recommend_topics(progress, now)

        return StatsReport(
            stats=stats,
            period=period,
            last_updated=now,
            attempts=attempts,
            progress=summarize_topics(progress),
            recent_history=recent_history,
            recommendations=recommendations,
            topic_recommendations=topic_recommendations,
        )

    async def _streak_strategy(self) -> StreakStrategy:
        if self._settings.streak_strategy == "dates":
            dates = await self._fetch("session dates", self._repo.get_session_dates(), [])
            return StreakFromDates(dates)

        seed = await self._fetch("streak", self._repo.get_streak_seed(), StreakSeed())
        return StreakFromSeed(seed)

    async def _fetch(self, what: str, call: Awaitable[T], default: T) -> T:
        try:
            return await call
        except StatsRepositoryError as e:
            logger.warning(f"Error fetching {what}: {e}")
            return default
