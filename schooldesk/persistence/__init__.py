"""
Persistence module: durable backing stores and persistent collections.
"""

from .database import (
    SQLiteKeyValueStore, FileKeyValueStore, MemoryKeyValueStore, KeyValueStoreFactory
)
from .collection import PersistentCollection, PersistentSlot

__all__ = [
    "SQLiteKeyValueStore",
    "FileKeyValueStore",
    "MemoryKeyValueStore",
    "KeyValueStoreFactory",
    "PersistentCollection",
    "PersistentSlot",
]
