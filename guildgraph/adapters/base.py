"""Collaborator interfaces the entity layer calls into.

Implementations are expected to be safe to call from concurrent resolutions:
the store in particular is shared by every entity and is written to by
whatever keeps it fresh (usually a gateway event dispatcher).
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from ..core.models import EntityKind

StoreKey = str | tuple[str, str]


def store_key(kind: EntityKind, entity_id: str, guild_id: str | None = None) -> StoreKey:
    """Return the key ``kind``/``entity_id`` is cached under.

    Guilds and users are global; every other kind is keyed by
    ``(guild_id, entity_id)``.
    """
    if not kind.guild_scoped:
        return entity_id
    if guild_id is None:
        raise ValueError(f"{kind.value} lookups require a guild id")
    return (guild_id, entity_id)


class Store(ABC):
    """Synchronous lookup of already-known records."""

    @abstractmethod
    def get(self, kind: EntityKind, key: StoreKey) -> Any | None:
        """Return the cached record for ``kind``/``key`` or ``None``."""


class Transport(ABC):
    """The only network-issuing primitive."""

    @abstractmethod
    async def fetch(
        self, kind: EntityKind, entity_id: str, guild_id: str | None = None
    ) -> Any:
        """Request ``kind``/``entity_id`` and return the mapped record."""
