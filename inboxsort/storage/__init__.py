"""Storage module for persisted user corrections."""

from .overrides import (
    MemoryOverrideStore,
    OverrideStore,
    SQLiteOverrideStore,
    get_override_db_path,
)

__all__ = [
    "MemoryOverrideStore",
    "OverrideStore",
    "SQLiteOverrideStore",
    "get_override_db_path",
]
