"""inboxsort - deterministic email categorization with user corrections."""

__version__ = "0.1.0"
