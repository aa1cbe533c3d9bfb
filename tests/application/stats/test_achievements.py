from collections import Counter
from datetime import timedelta

from examprep.application.stats.achievements import calculate_achievements
from examprep.application.stats.retention import RetentionStats
from examprep.application.stats.streaks import StreakSummary
from examprep.domain.stats.models import StudySession


def sessions_totalling(now, questions):
    return [StudySession(now - timedelta(days=1), questions_reviewed=questions)]


def test_nothing_unlocked(now):
    result = calculate_achievements(0, [], StreakSummary(), RetentionStats())

    assert result.unlocked == []
    assert [(m.type, m.target, m.current) for m in result.next_milestones] == [
        ("cards", 10, 0),
        ("streak", 3, 0),
        ("accuracy", 70, 0),
    ]


def test_top_tier_only_gets_top_badge(now):
    result = calculate_achievements(
        150,
        sessions_totalling(now, 1200),
        StreakSummary(current=40),
        RetentionStats(overall=95, total_reviews=100, correct_reviews=95),
    )

    assert [(a.type, a.level) for a in result.unlocked] == [
        ("cards", "expert"),
        ("streak", "expert"),
        ("accuracy", "expert"),
        ("volume", "expert"),
    ]
    assert result.unlocked[0].title == "100+ Cards Created"
    assert result.next_milestones == []


def test_middle_tiers(now):
    result = calculate_achievements(
        60,
        sessions_totalling(now, 120),
        StreakSummary(current=3),
        RetentionStats(overall=72),
    )

    levels = {a.type: (a.level, a.title) for a in result.unlocked}
    assert levels == {
        "cards": ("advanced", "50+ Cards Created"),
        "streak": ("beginner", "3-Day Streak"),
        "accuracy": ("beginner", "70%+ Accuracy"),
        "volume": ("beginner", "100+ Reviews"),
    }
    assert [(m.type, m.target) for m in result.next_milestones] == [
        ("cards", 100),
        ("streak", 7),
        ("accuracy", 80),
    ]


def test_volume_milestone_when_others_are_maxed(now):
    result = calculate_achievements(
        100, sessions_totalling(now, 250), StreakSummary(current=30), RetentionStats(overall=90)
    )
    assert [(m.type, m.target, m.current) for m in result.next_milestones] == [
        ("volume", 500, 250)
    ]


def test_at_most_one_badge_per_category(now):
    for cards in (0, 10, 55, 500):
        for streak in (0, 3, 8, 31):
            result = calculate_achievements(
                cards,
                sessions_totalling(now, cards * 3),
                StreakSummary(current=streak),
                RetentionStats(overall=streak * 3),
            )
            counts = Counter(a.type for a in result.unlocked)
            assert all(n == 1 for n in counts.values())
            assert len(result.next_milestones) <= 3
