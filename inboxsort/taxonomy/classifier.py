"""Email classification by overrides, provider labels and keywords."""

from dataclasses import dataclass, field
from typing import Any, Iterable, Optional, Union

import structlog

from inboxsort.errors import StorageError
from inboxsort.models import Message
from inboxsort.storage.overrides import OverrideStore

from .config import TaxonomyConfig, default_config
from .labels import map_provider_labels
from .scorer import CategoryScore, rank_scores, score_categories

logger = structlog.get_logger(__name__)

SOURCE_OVERRIDE = "override"
SOURCE_PROVIDER_LABEL = "provider_label"
SOURCE_KEYWORDS = "keywords"
SOURCE_FALLBACK = "fallback"

MessageLike = Union[Message, dict[str, Any]]


@dataclass(frozen=True)
class Classification:
    """Chosen category and the signal that decided it."""

    category: str
    source: str
    scores: list[CategoryScore] = field(default_factory=list)

    @property
    def top_score(self) -> float:
        return self.scores[0].score if self.scores else 0.0


def _as_message(message: MessageLike) -> Message:
    if isinstance(message, Message):
        return message
    return Message.from_record(message)


def get_override(
    store: OverrideStore,
    message_id: str,
    config: TaxonomyConfig,
) -> Optional[str]:
    """
    Look up a user override without ever failing classification.

    A store that cannot be read, or that returns a value outside the
    taxonomy, is logged and treated as having no override.

    Returns:
        The overridden category, or None.
    """
    try:
        category = store.get(message_id)
    except StorageError as e:
        logger.warning("override_lookup_failed", message_id=message_id, error=str(e))
        return None

    if category is None:
        return None

    if not config.is_category(category):
        logger.warning(
            "override_lookup_failed",
            message_id=message_id,
            error=f"stored category {category!r} is not in the taxonomy",
        )
        return None

    return category


def record_correction(
    store: OverrideStore,
    message_id: str,
    category: str,
    config: Optional[TaxonomyConfig] = None,
) -> None:
    """
    Record a user's category choice for a message.

    Repeating the same call is harmless and the last write wins.

    Args:
        store: Override store to write to.
        message_id: Message being corrected.
        category: Category chosen by the user.
        config: Taxonomy the category must belong to.

    Raises:
        ConfigError: If the category is not in the taxonomy.
        ValueError: If the message ID is empty.
        StorageError: If the store cannot be written.
    """
    config = config or default_config()
    config.require_category(category)

    if not message_id:
        raise ValueError("message_id is required to record a correction")

    store.set(message_id, category)
    logger.info("override_recorded", message_id=message_id, category=category)


def explain_classification(
    message: MessageLike,
    config: Optional[TaxonomyConfig] = None,
    store: Optional[OverrideStore] = None,
) -> Classification:
    """
    Classify a message and report which signal decided.

    Signals are tried in order: user override (only when the message has an
    ID and a store is given), provider label, keyword score at or above the
    threshold, then the fallback category.

    Args:
        message: Message or flat record with subject, snippet and sender.
        config: Taxonomy configuration. Uses the packaged default if None.
        store: Override store to consult.

    Returns:
        Classification with the category and deciding source.
    """
    config = config or default_config()
    message = _as_message(message)

    if store is not None and message.message_id:
        category = get_override(store, message.message_id, config)
        if category is not None:
            logger.debug("override_applied", message_id=message.message_id, category=category)
            return Classification(category, SOURCE_OVERRIDE)

    category = map_provider_labels(message.label_ids, config)
    if category is not None:
        logger.debug(
            "provider_label_matched",
            message_id=message.message_id,
            category=category,
        )
        return Classification(category, SOURCE_PROVIDER_LABEL)

    ranked = rank_scores(score_categories(message, config), config)
    top = ranked[0]
    if top.score >= config.threshold:
        logger.debug(
            "keyword_match",
            message_id=message.message_id,
            category=top.category,
            score=top.score,
        )
        return Classification(top.category, SOURCE_KEYWORDS, ranked)

    logger.debug(
        "fallback_used",
        message_id=message.message_id,
        top_score=top.score,
        threshold=config.threshold,
    )
    return Classification(config.fallback, SOURCE_FALLBACK, ranked)


def classify_message(
    message: MessageLike,
    config: Optional[TaxonomyConfig] = None,
    store: Optional[OverrideStore] = None,
) -> str:
    """
    Classify a message into exactly one category.

    Never raises for any message content; empty fields fall through to the
    fallback category.

    Returns:
        Category name string.
    """
    return explain_classification(message, config, store).category


def classify_batch(
    messages: Iterable[MessageLike],
    config: Optional[TaxonomyConfig] = None,
    store: Optional[OverrideStore] = None,
) -> list[tuple[Message, str]]:
    """
    Classify a batch of messages.

    Returns:
        (message, category) pairs in input order.
    """
    config = config or default_config()
    results = []
    for msg in messages:
        msg = _as_message(msg)
        results.append((msg, classify_message(msg, config, store)))
    return results
