"""Simple in-memory store for response records."""

from __future__ import annotations

import threading
from collections.abc import Iterable
from typing import Any

from ..adapters.base import Store, StoreKey
from .models import EntityKind


class InMemoryStore(Store):
    """Keep the latest record seen for every kind and key.

    The store is intentionally lightweight. Writes overwrite; nothing expires.
    A lock guards the dictionaries so a dispatcher thread can write while
    resolutions read. The lock is only held for the dict access itself.
    """

    def __init__(self) -> None:
        """Initialise an empty store."""
        self._lock = threading.RLock()
        self._records: dict[EntityKind, dict[StoreKey, Any]] = {
            kind: {} for kind in EntityKind
        }

    # ------------------------------------------------------------------
    # Lookup
    def get(self, kind: EntityKind, key: StoreKey) -> Any | None:
        """Return the record stored under ``kind``/``key`` or ``None``."""
        with self._lock:
            return self._records[kind].get(key)

    def all(self, kind: EntityKind) -> Iterable[Any]:
        """Return a snapshot of every stored record of ``kind``."""
        with self._lock:
            return list(self._records[kind].values())

    # ------------------------------------------------------------------
    # Mutation
    def put(self, kind: EntityKind, key: StoreKey, record: Any) -> None:
        """Store ``record``, replacing whatever was under ``key``."""
        with self._lock:
            self._records[kind][key] = record

    def remove(self, kind: EntityKind, key: StoreKey) -> Any | None:
        """Drop and return the record under ``key`` if present."""
        with self._lock:
            return self._records[kind].pop(key, None)
