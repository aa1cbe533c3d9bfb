"""
Per-paper rollups and predicted scores.
"""

from dataclasses import dataclass

from examprep.application.stats.cards import is_mature
from examprep.application.stats.retention import RetentionStats, retention_by
from examprep.application.utils.numbers import mean, round_half_up, round_int
from examprep.domain.constants import PREDICTION_WEIGHT_CAP
from examprep.domain.stats.models import Card, ReviewEntry


@dataclass(frozen=True)
class PaperStats:
    total_cards: int = 0
    total_reviews: int = 0
    accuracy: int = 0
    average_ease_factor: float = 0.0
    average_interval: float = 0.0
    mature_cards: int = 0


def paper_breakdown(
    cards: list[Card], reviews: list[ReviewEntry], papers: list[str]
) -> dict[str, PaperStats]:
    """
    Roll cards and reviews up by paper.

    Reviews are joined to their card through an id index built once and
    grouped by paper with retention_by, so the join is linear in the number
    of reviews. Reviews whose card is unknown are ignored.

    Args:
        cards: All cards.
        reviews: Review entries referencing cards by id.
        papers: Paper tags to report, in output order.

    Returns:
        Mapping of paper tag to PaperStats (every requested paper present).
    """
    paper_of = {card.id: card.paper for card in cards}
    retention = retention_by(reviews, key=lambda r: paper_of.get(r.card_id))

    cards_by_paper: dict[str, list[Card]] = {paper: [] for paper in papers}
    for card in cards:
        if card.paper in cards_by_paper:
            cards_by_paper[card.paper].append(card)

    stats: dict[str, PaperStats] = {}
    for paper in papers:
        paper_cards = cards_by_paper[paper]
        paper_retention = retention.get(paper, RetentionStats())

        stats[paper] = PaperStats(
            total_cards=len(paper_cards),
            total_reviews=paper_retention.total_reviews,
            accuracy=paper_retention.overall,
            average_ease_factor=round_half_up(mean([c.ease_factor for c in paper_cards]), 2),
            average_interval=round_half_up(mean([c.interval_days for c in paper_cards]), 2),
            mature_cards=sum(1 for c in paper_cards if is_mature(c)),
        )

    return stats


def predict_scores(cards: list[Card], papers: list[str]) -> dict[str, int]:
    """
    Predict an exam score per paper from card-level accuracy.

    Each card's accuracy is weighted by its review count (capped at 10), so
    well-practised cards count more. ``overall`` is the mean of the paper
    predictions.
    """
    predictions: dict[str, int] = {}

    for paper in papers:
        weighted = 0.0
        total_weight = 0
        for card in cards:
            if card.paper != paper or card.total_reviews <= 0:
                continue
            accuracy = card.correct_reviews / card.total_reviews * 100
            weight = min(card.total_reviews, PREDICTION_WEIGHT_CAP)
            weighted += accuracy * weight
            total_weight += weight

        predictions[paper] = round_int(weighted / total_weight) if total_weight > 0 else 0

    predictions["overall"] = round_int(mean([predictions[p] for p in papers]))
    return predictions
