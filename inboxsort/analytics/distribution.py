"""Category distribution across a set of messages."""

from typing import Any, Iterable, Optional

from inboxsort.storage.overrides import OverrideStore
from inboxsort.taxonomy.classifier import MessageLike, classify_message
from inboxsort.taxonomy.config import TaxonomyConfig, default_config


def summarize(
    messages: Iterable[MessageLike],
    config: Optional[TaxonomyConfig] = None,
    store: Optional[OverrideStore] = None,
) -> dict[str, int]:
    """
    Count messages per category.

    Every taxonomy category is present in the result, in declaration order,
    even when no message falls into it. Overrides apply to messages that
    carry an ID.

    Args:
        messages: Messages or flat records to classify.
        config: Taxonomy configuration. Uses the packaged default if None.
        store: Override store to consult.

    Returns:
        Dictionary mapping category to message count.
    """
    config = config or default_config()
    counts = {category: 0 for category in config.categories}

    for msg in messages:
        counts[classify_message(msg, config, store)] += 1

    return counts


def get_category_distribution(
    messages: Iterable[MessageLike],
    config: Optional[TaxonomyConfig] = None,
    store: Optional[OverrideStore] = None,
) -> dict[str, Any]:
    """
    Get category distribution with percentage shares.

    Args:
        messages: Messages or flat records to classify.
        config: Taxonomy configuration. Uses the packaged default if None.
        store: Override store to consult.

    Returns:
        Dictionary with total, per-category rows sorted by count, and the
        top category.
    """
    config = config or default_config()
    counts = summarize(messages, config, store)
    total = sum(counts.values())

    rows = sorted(
        counts.items(),
        key=lambda item: (-item[1], config.index_of(item[0])),
    )

    distribution = [
        {
            "category": category,
            "count": count,
            "percentage": round((count / total) * 100, 2) if total > 0 else 0.0,
        }
        for category, count in rows
    ]

    return {
        "total": total,
        "counts": counts,
        "distribution": distribution,
        "top_category": distribution[0]["category"] if total > 0 else None,
    }
