"""
Persistent collections mirrored onto a single backing-store key.

Stored text is untrusted: it is validated against the entity model on every
load, and anything that fails degrades to the empty default with a warning.
"""

import json
import logging
import threading
from typing import Callable, Generic, Iterable, Iterator, List, Optional, Tuple, Type, TypeVar

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..core.entities import StoredModel
from ..core.exceptions import PersistenceError
from ..core.interfaces import KeyValueStore

logger = logging.getLogger(__name__)

T = TypeVar('T', bound=StoredModel)


class PersistentCollection(Generic[T]):
    """Immutable ordered snapshot of ``T`` kept in sync with one storage key.

    Mutations never edit the snapshot in place: callers compute the next
    sequence and hand it to :meth:`replace`, which writes it synchronously
    and only then swaps the in-memory snapshot.
    """

    def __init__(self, backend: KeyValueStore, key: str, item_type: Type[T],
                 check: Optional[Callable[[Tuple[T, ...]], None]] = None):
        self._backend = backend
        self._key = key
        self._item_type = item_type
        self._check = check
        self._adapter = TypeAdapter(List[item_type])
        self._lock = threading.RLock()
        self._items: Tuple[T, ...] = self.load()

    @property
    def key(self) -> str:
        return self._key

    @property
    def items(self) -> Tuple[T, ...]:
        return self._items

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def exists(self) -> bool:
        """Check whether the key is present in the backing store."""
        return self._backend.contains(self._key)

    def load(self) -> Tuple[T, ...]:
        """Parse the stored collection. Never raises."""
        try:
            raw = self._backend.get(self._key)
        except PersistenceError as e:
            logger.warning("Could not read %r, using an empty collection: %s", self._key, e.message)
            return ()

        if raw is None:
            return ()

        try:
            items = tuple(self._adapter.validate_json(raw))
        except PydanticValidationError as e:
            logger.warning(
                "Discarding malformed %r collection (%d validation errors)",
                self._key, e.error_count(),
            )
            return ()

        if self._check is not None:
            try:
                self._check(items)
            except ValueError as e:
                logger.warning("Discarding inconsistent %r collection: %s", self._key, e)
                return ()
        return items

    def reload(self) -> Tuple[T, ...]:
        """Re-read the backing store, dropping the current snapshot."""
        with self._lock:
            self._items = self.load()
            return self._items

    def replace(self, items: Iterable[T]) -> Tuple[T, ...]:
        """Write ``items`` and make them the current snapshot."""
        snapshot = tuple(items)
        with self._lock:
            payload = json.dumps([item.to_dict() for item in snapshot])
            self._backend.set(self._key, payload)
            self._items = snapshot
            return snapshot

    def update(self, fn: Callable[[Tuple[T, ...]], Iterable[T]]) -> Tuple[T, ...]:
        """Compute the next snapshot from the current one and persist it."""
        with self._lock:
            return self.replace(fn(self._items))


class PersistentSlot(Generic[T]):
    """A single optional ``T`` stored under one key."""

    def __init__(self, backend: KeyValueStore, key: str, item_type: Type[T]):
        self._backend = backend
        self._key = key
        self._item_type = item_type

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> Optional[T]:
        """Parse the stored value. Never raises."""
        try:
            raw = self._backend.get(self._key)
        except PersistenceError as e:
            logger.warning("Could not read %r: %s", self._key, e.message)
            return None

        if raw is None:
            return None

        try:
            return self._item_type.model_validate_json(raw)
        except PydanticValidationError as e:
            logger.warning("Ignoring malformed %r value (%d validation errors)", self._key, e.error_count())
            return None

    def store(self, value: T) -> None:
        self._backend.set(self._key, json.dumps(value.to_dict()))

    def clear(self) -> None:
        self._backend.remove(self._key)
