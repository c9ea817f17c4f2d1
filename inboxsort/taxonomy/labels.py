"""Map provider-assigned labels onto taxonomy categories."""

from typing import Iterable, Optional

from .config import TaxonomyConfig


def map_provider_labels(
    label_ids: Optional[Iterable[str]],
    config: TaxonomyConfig,
) -> Optional[str]:
    """
    Find the category implied by the provider's own labels.

    Label IDs are scanned in the order the provider supplied them and the
    first one present in the mapping wins.

    Args:
        label_ids: Provider label identifiers, possibly empty or None.
        config: Taxonomy configuration holding the label mapping.

    Returns:
        Mapped category, or None if no label is mapped.
    """
    if not label_ids:
        return None

    for label_id in label_ids:
        category = config.provider_labels.get(label_id)
        if category is not None:
            return category

    return None
