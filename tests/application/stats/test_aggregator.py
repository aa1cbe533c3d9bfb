import copy
from datetime import timedelta

import pytest

from examprep.application.stats.aggregator import StatsAggregator
from examprep.application.stats.streaks import StreakFromDates, StreakFromSeed
from examprep.domain.stats.models import Card, ReviewEntry, StreakSeed, StudySession


@pytest.fixture
def aggregator():
    return StatsAggregator()


@pytest.fixture
def cards(today):
    mature = [
        Card(id=f"m{i}", paper="paper1", interval_days=25, repetitions=4,
             next_review_date=today + timedelta(days=3))
        for i in range(3)
    ]
    new = [Card(id=f"n{i}", paper="paper2", next_review_date=today) for i in range(2)]
    return mature + new


@pytest.fixture
def reviews(now):
    outcomes = [True] * 7 + [False] * 3
    card_ids = ["m0", "m1", "m2", "n0", "n1"] * 2
    return [
        ReviewEntry(card_id=cid, reviewed_at=now - timedelta(hours=i), was_correct=ok,
                    time_taken=12, difficulty_rating=(i % 5) + 1)
        for i, (cid, ok) in enumerate(zip(card_ids, outcomes))
    ]


@pytest.fixture
def sessions(now):
    return [
        StudySession(now - timedelta(days=i), questions_reviewed=10, correct_answers=7,
                     session_duration=300)
        for i in range(3)
    ]


def test_empty_inputs(aggregator, now):
    result = aggregator.compute([], [], [], StreakFromSeed(None), now=now)

    assert result.cards.total == 0
    assert result.retention.overall == 0
    assert result.sessions.total == 0
    assert result.sessions.longest_session == 0
    assert result.time.daily_average == 0
    assert result.streak.current == 0
    assert set(result.papers) == {"paper1", "paper2", "paper3"}
    assert all(p.accuracy == 0 for p in result.papers.values())
    assert result.difficulty.correlation_accuracy == 0
    assert result.trends.accuracy_trend == "insufficient_data"
    assert result.trends.weekly_progress == []
    assert result.predictions["overall"] == 0
    assert result.achievements.unlocked == []


def test_example_scenario(aggregator, cards, reviews, sessions, now):
    streak = StreakFromSeed(StreakSeed(current_streak=3, longest_streak=5, total_days=9))

    result = aggregator.compute(cards, sessions, reviews, streak, now=now)

    assert result.retention.overall == 70
    assert result.papers["paper1"].total_cards == 3
    assert result.papers["paper1"].mature_cards == 3
    assert result.cards.by_status["mature"] == 3
    assert result.cards.by_status["new"] == 2
    assert result.cards.due_today == 2
    assert result.sessions.this_week == 3
    assert result.time.average_response_time == 12
    assert result.streak.longest == 5
    assert ("accuracy", "beginner") in [(a.type, a.level) for a in result.achievements.unlocked]
    assert ("streak", "beginner") in [(a.type, a.level) for a in result.achievements.unlocked]


def test_streak_from_dates_feeds_achievements(aggregator, now, today):
    dates = [today - timedelta(days=i) for i in range(7)]

    result = aggregator.compute([], [], [], StreakFromDates(dates), now=now)

    assert result.streak.current == 7
    assert result.achievements.unlocked[0].title == "7-Day Streak"


def test_inputs_are_not_mutated(aggregator, cards, reviews, sessions, now):
    before = (copy.deepcopy(cards), copy.deepcopy(reviews), copy.deepcopy(sessions))

    aggregator.compute(cards, sessions, reviews, StreakFromSeed(None), now=now)

    assert (cards, reviews, sessions) == before


def test_same_input_same_output(aggregator, cards, reviews, sessions, now):
    streak = StreakFromSeed(StreakSeed(2, 2, 2))
    first = aggregator.compute(cards, sessions, reviews, streak, now=now)
    second = aggregator.compute(cards, sessions, reviews, streak, now=now)
    assert first == second


def test_custom_papers(cards, reviews, sessions, now):
    result = StatsAggregator(papers=["paper2"]).compute(
        cards, sessions, reviews, StreakFromSeed(None), now=now
    )
    assert list(result.papers) == ["paper2"]
    assert set(result.predictions) == {"paper2", "overall"}
