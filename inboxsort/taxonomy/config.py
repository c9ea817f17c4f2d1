"""Immutable taxonomy configuration built once at start-up."""

import json
import math
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping, Optional

from inboxsort.errors import ConfigError

from .rules import (
    CATEGORIES,
    CATEGORY_THRESHOLD,
    FALLBACK_CATEGORY,
    FIELD_WEIGHTS,
    KEYWORDS_BY_CATEGORY,
    PROVIDER_LABEL_MAPPING,
)


@dataclass(frozen=True)
class FieldWeights:
    """Multipliers applied to a keyword match in each message field."""

    subject: float = FIELD_WEIGHTS["subject"]
    snippet: float = FIELD_WEIGHTS["snippet"]
    sender: float = FIELD_WEIGHTS["sender"]

    def __post_init__(self) -> None:
        for name in ("subject", "snippet", "sender"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigError(f"Weight '{name}' must be a number, got {value!r}")
            if not math.isfinite(value) or value <= 0:
                raise ConfigError(f"Weight '{name}' must be positive, got {value}")


@dataclass(frozen=True)
class TaxonomyConfig:
    """
    Categories, keywords, weights, threshold and provider label map.

    Instances are validated on construction and never mutated afterwards.
    Keyword lists are lowercased and frozen into tuples, and the mappings
    are exposed read-only.

    Raises:
        ConfigError: If the configuration is structurally invalid.
    """

    categories: tuple[str, ...]
    keywords: Mapping[str, tuple[str, ...]]
    weights: FieldWeights = field(default_factory=FieldWeights)
    threshold: float = CATEGORY_THRESHOLD
    fallback: str = FALLBACK_CATEGORY
    provider_labels: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        categories = tuple(self.categories)
        if not categories:
            raise ConfigError("Taxonomy must declare at least one category")
        for category in categories:
            if not isinstance(category, str) or not category.strip():
                raise ConfigError(f"Category names must be non-empty strings, got {category!r}")
        if len(set(categories)) != len(categories):
            raise ConfigError(f"Taxonomy has duplicate categories: {list(categories)}")

        unknown = set(self.keywords) - set(categories)
        if unknown:
            raise ConfigError(f"Keywords given for unknown categories: {sorted(unknown)}")

        keywords = {}
        for category in categories:
            entries = tuple(
                str(k).lower() for k in self.keywords.get(category, ()) if str(k).strip()
            )
            if not entries:
                raise ConfigError(f"Category '{category}' has no keywords")
            keywords[category] = entries

        if isinstance(self.threshold, bool) or not isinstance(self.threshold, (int, float)):
            raise ConfigError(f"Threshold must be a number, got {self.threshold!r}")
        if not math.isfinite(self.threshold) or self.threshold < 0:
            raise ConfigError(
                f"Threshold must be a finite non-negative number, got {self.threshold}"
            )

        if self.fallback not in categories:
            raise ConfigError(f"Fallback category '{self.fallback}' is not in the taxonomy")

        for label_id, category in self.provider_labels.items():
            if category not in categories:
                raise ConfigError(
                    f"Provider label '{label_id}' maps to unknown category '{category}'"
                )

        object.__setattr__(self, "categories", categories)
        object.__setattr__(self, "keywords", MappingProxyType(keywords))
        object.__setattr__(
            self, "provider_labels", MappingProxyType(dict(self.provider_labels))
        )

    def is_category(self, value: Any) -> bool:
        """Check whether a value is a member of the taxonomy."""
        return isinstance(value, str) and value in self.keywords

    def require_category(self, value: Any) -> str:
        """
        Return the value if it is a taxonomy member.

        Raises:
            ConfigError: If the value is not a category of this taxonomy.
        """
        if not self.is_category(value):
            raise ConfigError(
                f"Unknown category {value!r}; expected one of {list(self.categories)}"
            )
        return value

    def index_of(self, category: str) -> int:
        """Declaration index of a category, used for tie-breaking."""
        return self.categories.index(category)


def default_config() -> TaxonomyConfig:
    """Build the configuration shipped with the package."""
    return TaxonomyConfig(
        categories=CATEGORIES,
        keywords=KEYWORDS_BY_CATEGORY,
        weights=FieldWeights(),
        threshold=CATEGORY_THRESHOLD,
        fallback=FALLBACK_CATEGORY,
        provider_labels=PROVIDER_LABEL_MAPPING,
    )


def get_taxonomy_path() -> Optional[Path]:
    """Get the taxonomy override file from environment, if any."""
    path = os.getenv("INBOXSORT_TAXONOMY_FILE")
    return Path(path) if path else None


def _env_float(name: str) -> Optional[float]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ConfigError(f"{name} must be a number, got {raw!r}") from None
    if not math.isfinite(value):
        raise ConfigError(f"{name} must be a finite number, got {raw!r}")
    return value


def _read_taxonomy_file(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise ConfigError(f"Cannot read taxonomy file {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Taxonomy file {path} is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Taxonomy file {path} must contain a JSON object")
    return data


def load_config(path: Optional[Path] = None) -> TaxonomyConfig:
    """
    Load the taxonomy configuration.

    Starts from the packaged defaults, applies an optional JSON file and then
    the weight/threshold environment overrides.

    Args:
        path: JSON taxonomy file. Defaults to INBOXSORT_TAXONOMY_FILE env var.

    Returns:
        Validated TaxonomyConfig.

    Raises:
        ConfigError: If the file or the resulting configuration is invalid.
    """
    data: dict[str, Any] = {}
    path = path or get_taxonomy_path()
    if path is not None:
        data = _read_taxonomy_file(Path(path))

    categories = data.get("categories", CATEGORIES)
    if not isinstance(categories, (list, tuple)):
        raise ConfigError("'categories' must be a list")

    keywords = data.get("keywords", KEYWORDS_BY_CATEGORY)
    if not isinstance(keywords, dict) or not all(
        isinstance(v, (list, tuple)) for v in keywords.values()
    ):
        raise ConfigError("'keywords' must map categories to lists of keywords")

    file_weights = data.get("weights", {})
    if not isinstance(file_weights, dict):
        raise ConfigError("'weights' must be an object")
    weights = {**FIELD_WEIGHTS, **file_weights}
    for name, env_name in (
        ("subject", "INBOXSORT_SUBJECT_WEIGHT"),
        ("snippet", "INBOXSORT_SNIPPET_WEIGHT"),
        ("sender", "INBOXSORT_SENDER_WEIGHT"),
    ):
        value = _env_float(env_name)
        if value is not None:
            weights[name] = value

    unknown_weights = set(weights) - set(FIELD_WEIGHTS)
    if unknown_weights:
        raise ConfigError(f"Unknown weight fields: {sorted(unknown_weights)}")

    threshold = data.get("threshold", CATEGORY_THRESHOLD)
    env_threshold = _env_float("INBOXSORT_THRESHOLD")
    if env_threshold is not None:
        threshold = env_threshold

    # A custom category list uses its last entry as fallback unless told otherwise
    if "categories" in data:
        default_fallback = categories[-1] if categories else ""
        default_labels: dict[str, str] = {}
    else:
        default_fallback = FALLBACK_CATEGORY
        default_labels = PROVIDER_LABEL_MAPPING

    provider_labels = data.get("provider_labels", default_labels)
    if not isinstance(provider_labels, dict):
        raise ConfigError("'provider_labels' must be an object")

    return TaxonomyConfig(
        categories=tuple(categories),
        keywords=keywords,
        weights=FieldWeights(**weights),
        threshold=threshold,
        fallback=data.get("fallback", default_fallback),
        provider_labels=provider_labels,
    )
