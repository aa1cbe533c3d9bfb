"""
Card classification and due-date forecasting.

Every card falls into exactly one of new / learning / review / mature.
Overdue is evaluated separately and overlaps the other buckets.
"""

from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import Literal

from examprep.domain.constants import (
    DUE_WINDOW_DAYS,
    GRADUATION_REPETITIONS,
    MATURE_INTERVAL_DAYS,
)
from examprep.domain.stats.models import Card

CardStatus = Literal["new", "learning", "review", "mature"]


@dataclass(frozen=True)
class CardBuckets:
    new: tuple[Card, ...] = ()
    learning: tuple[Card, ...] = ()
    review: tuple[Card, ...] = ()
    mature: tuple[Card, ...] = ()
    overdue: tuple[Card, ...] = ()


@dataclass(frozen=True)
class DueForecast:
    due_today: int = 0
    due_tomorrow: int = 0
    due_this_week: int = 0  # includes overdue cards


@dataclass(frozen=True)
class CardOverview:
    total: int = 0
    by_status: dict[str, int] = field(default_factory=dict)
    due_today: int = 0
    due_tomorrow: int = 0
    due_this_week: int = 0


def is_mature(card: Card) -> bool:
    return card.repetitions >= GRADUATION_REPETITIONS and card.interval_days > MATURE_INTERVAL_DAYS


def is_overdue(card: Card, today: date) -> bool:
    return card.next_review_date is not None and card.next_review_date < today


def card_status(card: Card) -> CardStatus:
    """Primary status of a card, independent of its due date."""
    if card.repetitions <= 0:
        return "new"
    if card.repetitions < GRADUATION_REPETITIONS:
        return "learning"
    if is_mature(card):
        return "mature"
    return "review"


def classify_cards(cards: list[Card], today: date) -> CardBuckets:
    """
    Bucket cards by status.

    Args:
        cards: Cards to classify.
        today: Reference date for the overdue overlay.

    Returns:
        CardBuckets with a strict partition over new/learning/review/mature
        and an independent overdue bucket.
    """
    grouped: dict[str, list[Card]] = {"new": [], "learning": [], "review": [], "mature": []}
    overdue: list[Card] = []

    for card in cards:
        grouped[card_status(card)].append(card)
        if is_overdue(card, today):
            overdue.append(card)

    return CardBuckets(
        new=tuple(grouped["new"]),
        learning=tuple(grouped["learning"]),
        review=tuple(grouped["review"]),
        mature=tuple(grouped["mature"]),
        overdue=tuple(overdue),
    )


def due_forecast(cards: list[Card], today: date) -> DueForecast:
    tomorrow = today + timedelta(days=1)
    week_end = today + timedelta(days=DUE_WINDOW_DAYS)
    dated = [c.next_review_date for c in cards if c.next_review_date is not None]

    return DueForecast(
        due_today=sum(1 for d in dated if d == today),
        due_tomorrow=sum(1 for d in dated if d == tomorrow),
        due_this_week=sum(1 for d in dated if d <= week_end),
    )


def summarize_cards(cards: list[Card], today: date) -> CardOverview:
    buckets = classify_cards(cards, today)
    forecast = due_forecast(cards, today)

    return CardOverview(
        total=len(cards),
        by_status={
            "new": len(buckets.new),
            "learning": len(buckets.learning),
            "review": len(buckets.review),
            "mature": len(buckets.mature),
            "overdue": len(buckets.overdue),
        },
        due_today=forecast.due_today,
        due_tomorrow=forecast.due_tomorrow,
        due_this_week=forecast.due_this_week,
    )
