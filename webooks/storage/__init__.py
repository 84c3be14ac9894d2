"""
Storage abstractions.

The real deployment keeps accounts and spaces in an external database;
the core only talks to these interfaces.
"""

from webooks.storage.base import (
    AccountStore,
    SpaceStore,
    StorageProvider,
)
from webooks.storage.memory import (
    InMemoryAccountStore,
    InMemorySpaceStore,
    create_memory_storage,
)

__all__ = [
    "AccountStore",
    "SpaceStore",
    "StorageProvider",
    "InMemoryAccountStore",
    "InMemorySpaceStore",
    "create_memory_storage",
]
