"""Taxonomy module for email classification."""

from .classifier import (
    Classification,
    classify_batch,
    classify_message,
    explain_classification,
    get_override,
    record_correction,
)
from .config import FieldWeights, TaxonomyConfig, default_config, load_config
from .labels import map_provider_labels
from .rules import CATEGORIES, FALLBACK_CATEGORY
from .scorer import CategoryScore, keyword_score, rank_scores, score_categories

__all__ = [
    "CATEGORIES",
    "FALLBACK_CATEGORY",
    "CategoryScore",
    "Classification",
    "FieldWeights",
    "TaxonomyConfig",
    "classify_batch",
    "classify_message",
    "default_config",
    "explain_classification",
    "get_override",
    "keyword_score",
    "load_config",
    "map_provider_labels",
    "rank_scores",
    "record_correction",
    "score_categories",
]
