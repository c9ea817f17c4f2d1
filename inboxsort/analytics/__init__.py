"""Analytics module for category reporting."""

from .distribution import get_category_distribution, summarize

__all__ = [
    "get_category_distribution",
    "summarize",
]
