"""Weighted keyword scoring per category."""

from dataclasses import dataclass
from typing import Iterable

from inboxsort.models import Message

from .config import FieldWeights, TaxonomyConfig


@dataclass(frozen=True)
class CategoryScore:
    """Keyword score of one message for one category."""

    category: str
    score: float


def keyword_score(
    message: Message,
    keywords: Iterable[str],
    weights: FieldWeights,
) -> float:
    """
    Score a message against one category's keywords.

    Each keyword adds the field weight once for every field it appears in.
    Matching is case-insensitive substring containment, so a keyword inside
    a longer word still counts ("art" matches "smart").

    Args:
        message: Message to score.
        keywords: Lowercase keywords of a single category.
        weights: Per-field weights.

    Returns:
        Non-negative score.
    """
    subject = message.subject.lower()
    snippet = message.snippet.lower()
    sender = message.sender.lower()

    score = 0.0
    for keyword in keywords:
        keyword = keyword.lower()
        if keyword in subject:
            score += weights.subject
        if keyword in snippet:
            score += weights.snippet
        if keyword in sender:
            score += weights.sender

    return score


def score_categories(message: Message, config: TaxonomyConfig) -> list[CategoryScore]:
    """
    Score a message against every category.

    Returns:
        One CategoryScore per category, in taxonomy order.
    """
    return [
        CategoryScore(category, keyword_score(message, config.keywords[category], config.weights))
        for category in config.categories
    ]


def rank_scores(
    scores: Iterable[CategoryScore],
    config: TaxonomyConfig,
) -> list[CategoryScore]:
    """
    Sort scores highest first.

    Equal scores are ordered by the category's declaration index, so the
    earlier category always wins a tie.
    """
    return sorted(scores, key=lambda s: (-s.score, config.index_of(s.category)))
