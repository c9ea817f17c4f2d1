"""Exceptions raised by the classification engine."""


class InboxSortError(Exception):
    """Base exception for inboxsort errors."""


class ConfigError(InboxSortError):
    """
    Invalid taxonomy configuration or an unknown category.

    Raised at start-up for a structurally invalid taxonomy and at runtime
    when a caller tries to record a category outside the taxonomy.
    """


class StorageError(InboxSortError):
    """The override store is unreachable or holds corrupt data."""
