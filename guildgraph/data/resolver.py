"""Cache-then-network resolution of entity relationships.

Ordering
--------
Each call to :meth:`Resolver.fetch` is independent. Two resolutions started
concurrently (for example ``asyncio.gather(member.guild(), member.presence())``)
may finish in either order, and a failure in one does not affect the other.
Callers that need ordering must await one before starting the next.

Cancellation
------------
Nothing is started until the caller awaits the coroutine or iterates the
async generator. Cancelling the task (or calling ``aclose()`` on a
multi-valued relationship) abandons at most the request already in flight.
The resolver never writes to the store and never retries.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Iterable
from typing import Any

from ..adapters.base import Store, Transport, store_key
from ..core.models import EntityKind

log = logging.getLogger(__name__)


class Resolver:
    """Turn identifiers into records through a store and a transport."""

    def __init__(self, store: Store, transport: Transport) -> None:
        self.store = store
        self.transport = transport

    async def fetch(
        self, kind: EntityKind, entity_id: str, guild_id: str | None = None
    ) -> Any:
        """Return the record for ``kind``/``entity_id``.

        A store hit is returned without touching the network. On a miss
        exactly one :meth:`Transport.fetch` call is made. Errors raised by the
        transport (:class:`~guildgraph.core.errors.NotFound`,
        :class:`~guildgraph.core.errors.Unauthorized`,
        :class:`~guildgraph.core.errors.TransportError`) propagate unchanged.
        """
        key = store_key(kind, entity_id, guild_id)
        cached = self.store.get(kind, key)
        if cached is not None:
            log.debug("Cache hit for %s %s", kind.value, key)
            return cached
        log.debug("Cache miss for %s %s, fetching", kind.value, key)
        return await self.transport.fetch(kind, entity_id, guild_id)

    async def fetch_many(
        self, kind: EntityKind, entity_ids: Iterable[str], guild_id: str | None = None
    ) -> AsyncIterator[Any]:
        """Yield one record per id, resolving each only when it is requested.

        The first failure ends the iteration; records already yielded stay
        valid.
        """
        for entity_id in entity_ids:
            yield await self.fetch(kind, entity_id, guild_id)


def resolve(entity: Any, relationship: str) -> Any:
    """Return the not-yet-started handle for ``entity``'s ``relationship``.

    The result is an awaitable for single-valued relationships and an async
    iterator for multi-valued ones. Raises :class:`KeyError` when the entity
    has no relationship of that name.
    """
    names = getattr(type(entity), "relationships", frozenset())
    if relationship not in names:
        raise KeyError(f"{type(entity).__name__} has no relationship {relationship!r}")
    return getattr(entity, relationship)()
