"""Discord transport implementing :class:`~guildgraph.adapters.base.Transport`.

The transport only knows how to issue a single ``GET`` per entity and map the
body to a response record. It uses :mod:`httpx` to communicate with Discord's
HTTP API. Retries and rate limiting are left to whoever owns the
:class:`httpx.AsyncClient`.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import DEFAULT_API_BASE, Settings
from ..core.errors import NotFound, TransportError, Unauthorized
from ..core.mapper import parse_payload
from ..core.models import EntityKind
from .base import Transport

log = logging.getLogger(__name__)

ROUTES: dict[EntityKind, str] = {
    EntityKind.GUILD: "/guilds/{guild_id}",
    EntityKind.MEMBER: "/guilds/{guild_id}/members/{entity_id}",
    EntityKind.ROLE: "/guilds/{guild_id}/roles/{entity_id}",
    EntityKind.EMOJI: "/guilds/{guild_id}/emojis/{entity_id}",
    EntityKind.VOICE_STATE: "/guilds/{guild_id}/voice-states/{entity_id}",
    EntityKind.USER: "/users/{entity_id}",
}


class DiscordTransport(Transport):
    """Transport that sends requests directly to the Discord HTTP API."""

    def __init__(
        self,
        token: str,
        client: httpx.AsyncClient | None = None,
        api_base: str = DEFAULT_API_BASE,
    ) -> None:
        """Store authentication ``token`` and optional HTTP ``client``."""
        self.token = token
        self.api_base = api_base.rstrip("/")
        self.client = client or httpx.AsyncClient()

    @classmethod
    def from_settings(cls, settings: Settings) -> DiscordTransport:
        """Build a transport with the token, base URL and timeout in ``settings``."""
        client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout))
        return cls(settings.token, client=client, api_base=settings.api_base)

    # ------------------------------------------------------------------
    def url_for(self, kind: EntityKind, entity_id: str, guild_id: str | None) -> str:
        """Return the absolute URL of ``kind``/``entity_id``.

        Raises :class:`NotFound` for kinds with no REST route (presences are
        only delivered over the gateway).
        """
        route = ROUTES.get(kind)
        if route is None:
            raise NotFound(kind.value, entity_id, "not available over HTTP")
        if kind is EntityKind.GUILD:
            guild_id = entity_id
        elif kind.guild_scoped and guild_id is None:
            raise ValueError(f"{kind.value} requests require a guild id")
        return self.api_base + route.format(guild_id=guild_id, entity_id=entity_id)

    async def fetch(
        self, kind: EntityKind, entity_id: str, guild_id: str | None = None
    ) -> Any:
        """Fetch one entity and map it to its response record.

        Parameters
        ----------
        kind:
            Entity kind being requested.
        entity_id:
            Snowflake of the entity (the user's id for members, voice states
            and presences).
        guild_id:
            Owning guild, required for guild-scoped kinds.

        """
        url = self.url_for(kind, entity_id, guild_id)
        headers = {"Authorization": f"Bot {self.token}"}
        log.debug("GET %s", url)
        try:
            response = await self.client.get(url, headers=headers)
        except httpx.HTTPError as exc:
            log.warning("Request for %s %s failed: %s", kind.value, entity_id, exc)
            raise TransportError(
                f"Request for {kind.value} {entity_id} failed: {exc}", url=url
            ) from exc

        status = response.status_code
        if status in (401, 403):
            log.warning("HTTP %s for %s %s", status, kind.value, entity_id)
            raise Unauthorized(kind.value, entity_id, status)
        if status == 404:
            raise NotFound(kind.value, entity_id)
        if not response.is_success:
            log.warning("HTTP %s for %s %s", status, kind.value, entity_id)
            raise TransportError(
                f"Request for {kind.value} {entity_id} returned HTTP {status}",
                status_code=status,
                url=url,
            )

        try:
            data: Any = response.json()
        except ValueError as exc:
            raise TransportError(
                f"Response for {kind.value} {entity_id} is not JSON",
                status_code=status,
                url=url,
            ) from exc
        if (
            kind is EntityKind.VOICE_STATE
            and isinstance(data, dict)
            and data.get("guild_id") is None
        ):
            data["guild_id"] = guild_id
        return parse_payload(kind, data)

    async def aclose(self) -> None:
        """Close the underlying :class:`httpx.AsyncClient`."""
        await self.client.aclose()
