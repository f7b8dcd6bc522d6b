"""
Core interfaces and abstract base classes for the SchoolDesk state layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional


class KeyValueStore(ABC):
    """Durable string-keyed text store.

    This is the only I/O boundary of the state layer. All operations are
    synchronous and must survive process restarts (except the in-memory
    implementation, which exists for tests and demos).
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Return the text stored under ``key`` or ``None`` when absent."""
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """Remove ``key``. Removing an absent key is a no-op."""
        pass

    @abstractmethod
    def keys(self) -> List[str]:
        """List the keys currently present."""
        pass

    def contains(self, key: str) -> bool:
        """Check whether ``key`` is present."""
        return self.get(key) is not None
