"""Centralized constants for examprep.

All magic numbers and thresholds live here so the calculators and the
service import from a single source of truth.
"""

# ---------- Card status ----------
GRADUATION_REPETITIONS = 3  # below this a reviewed card is still learning
MATURE_INTERVAL_DAYS = 21  # strictly greater means mature
DUE_WINDOW_DAYS = 7

# ---------- Retention ----------
RECENT_REVIEW_WINDOW = 20
RETENTION_TREND_MIN_REVIEWS = 10
RETENTION_TREND_DELTA = 10

# ---------- Sessions ----------
WEEK_DAYS = 7
MONTH_DAYS = 30

# ---------- Trends ----------
TREND_MIN_REVIEWS = 10
TREND_MIN_SESSIONS = 7
TREND_VOLUME_WINDOW = 3
TREND_ACCURACY_DELTA = 5
TREND_SPEED_DELTA = 5
WEEKLY_PROGRESS_WEEKS = 12
INSUFFICIENT_DATA = "insufficient_data"

# ---------- Difficulty ----------
DIFFICULTY_RATINGS = (1, 2, 3, 4, 5)
MIN_CORRELATION_SAMPLES = 5

# ---------- Predictions ----------
PREDICTION_WEIGHT_CAP = 10

# ---------- Achievements ----------
# (threshold, level) ordered highest first
CARD_TIERS = ((100, "expert"), (50, "advanced"), (10, "beginner"))
STREAK_TIERS = ((30, "expert"), (7, "advanced"), (3, "beginner"))
ACCURACY_TIERS = ((90, "expert"), (80, "advanced"), (70, "beginner"))
VOLUME_TIERS = ((1000, "expert"), (500, "advanced"), (100, "beginner"))
MAX_NEXT_MILESTONES = 3

# ---------- Recommendations ----------
WEAK_TOPIC_ACCURACY = 60
STRONG_TOPIC_ACCURACY = 80
STALE_TOPIC_DAYS = 7
LOW_RETENTION = 70
LEARNING_BACKLOG = 5
TOPIC_AREA_LIMIT = 5

# ---------- Quizzes and tests ----------
RECENT_ATTEMPTS_LIMIT = 10

# ---------- Defaults ----------
DEFAULT_PAPERS = ("paper1", "paper2", "paper3")
DEFAULT_PERIOD_DAYS = 30
DEFAULT_HISTORY_LIMIT = 50
DEFAULT_EASE_FACTOR = 2.5
