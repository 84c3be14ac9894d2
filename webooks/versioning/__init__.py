"""
Per-category version keys for client cache invalidation.
"""

from webooks.versioning.store import (
    DEFAULT_CATEGORIES,
    INITIAL_TOKEN,
    VersionKeyStore,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "INITIAL_TOKEN",
    "VersionKeyStore",
]
