# Application Stats Package
from .aggregator import StatisticsResult, StatsAggregator
from .service import StatsReport, StatsService
from .streaks import StreakFromDates, StreakFromSeed, StreakStrategy

__all__ = [
    "StatsAggregator",
    "StatisticsResult",
    "StatsService",
    "StatsReport",
    "StreakStrategy",
    "StreakFromSeed",
    "StreakFromDates",
]
