"""
Stats aggregator: assembles the composite statistics object.

This is a pure computation module with no I/O. ``now`` is always supplied
by the caller so results are reproducible.
"""

from dataclasses import dataclass, field
from datetime import datetime

from examprep.domain.constants import DEFAULT_PAPERS
from examprep.domain.stats.models import Card, ReviewEntry, StudySession

from .achievements import Achievements, calculate_achievements
from .cards import CardOverview, summarize_cards
from .difficulty import DifficultyStats, analyze_difficulty
from .papers import PaperStats, paper_breakdown, predict_scores
from .retention import RetentionStats, calculate_retention
from .sessions import SessionStats, TimeStats, calculate_time_stats, summarize_sessions
from .streaks import StreakStrategy, StreakSummary
from .trends import TrendStats, analyze_trends


@dataclass(frozen=True)
class StatisticsResult:
    """Everything the dashboard shows for one user, derived fresh per call."""

    cards: CardOverview
    retention: RetentionStats
    sessions: SessionStats
    time: TimeStats
    streak: StreakSummary
    papers: dict[str, PaperStats]
    difficulty: DifficultyStats
    trends: TrendStats
    predictions: dict[str, int]
    achievements: Achievements = field(default_factory=Achievements)


class StatsAggregator:
    """
    Runs every calculator over the same input collections.

    Stateless and side-effect free; safe to share between requests.
    """

    def __init__(self, papers: list[str] | None = None):
        """
        Args:
            papers: Paper tags to break statistics down by.
        """
        self.papers = list(papers) if papers is not None else list(DEFAULT_PAPERS)

    def compute(
        self,
        cards: list[Card],
        sessions: list[StudySession],
        reviews: list[ReviewEntry],
        streak: StreakStrategy,
        *,
        now: datetime,
    ) -> StatisticsResult:
        """
        Compute the composite statistics.

        Args:
            cards: All of the user's cards.
            sessions: Sessions in the reporting period, most recent first.
            reviews: Review history in the reporting period, most recent first.
            streak: Strategy producing the streak figures.
            now: Reference time for windows, due dates and streaks.
        """
        today = now.date()
        retention = calculate_retention(reviews)
        streak_summary = streak.summarize(today)

        return StatisticsResult(
            cards=summarize_cards(cards, today),
            retention=retention,
            sessions=summarize_sessions(sessions, now),
            time=calculate_time_stats(reviews, sessions),
            streak=streak_summary,
            papers=paper_breakdown(cards, reviews, self.papers),
            difficulty=analyze_difficulty(reviews),
            trends=analyze_trends(reviews, sessions),
            predictions=predict_scores(cards, self.papers),
            achievements=calculate_achievements(len(cards), sessions, streak_summary, retention),
        )
