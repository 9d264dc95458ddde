"""Payload builders and collaborator stand-ins shared by the tests."""

from __future__ import annotations

import asyncio
from typing import Any

from guildgraph.adapters.base import Store, Transport, store_key
from guildgraph.core.errors import NotFound
from guildgraph.core.mapper import parse_payload
from guildgraph.core.models import EntityKind
from guildgraph.core.storage import InMemoryStore

GUILD_ID = "81384788765712384"
USER_ID = "80351110224678912"


def run(coro: Any) -> Any:
    """Run an async coroutine synchronously for tests."""
    return asyncio.run(coro)


async def collect(aiter: Any) -> list[Any]:
    return [item async for item in aiter]


def user_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": USER_ID,
        "username": "Nelly",
        "discriminator": "1337",
        "avatar": "8342729096ea3675442027381ff50dfe",
    }
    data.update(overrides)
    return data


def member_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "user": user_payload(),
        "nick": None,
        "roles": ["1", "2"],
        "joined_at": "2015-04-26T06:26:56.936000+00:00",
        "deaf": False,
        "mute": False,
    }
    data.update(overrides)
    return data


def role_payload(role_id: str, **overrides: Any) -> dict[str, Any]:
    data = {
        "id": role_id,
        "name": f"role-{role_id}",
        "color": 3447003,
        "hoist": True,
        "position": 1,
        "permissions": "66321471",
        "managed": False,
        "mentionable": False,
    }
    data.update(overrides)
    return data


def guild_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": GUILD_ID,
        "name": "Discord Developers",
        "icon": None,
        "owner_id": USER_ID,
        "roles": [role_payload(GUILD_ID, name="@everyone"), role_payload("1")],
        "emojis": [],
    }
    data.update(overrides)
    return data


def emoji_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "id": "9",
        "name": "pepe",
        "roles": ["1", "2"],
        "require_colons": True,
        "managed": False,
    }
    data.update(overrides)
    return data


def voice_state_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "guild_id": GUILD_ID,
        "channel_id": "157733188964188161",
        "user_id": USER_ID,
        "session_id": "90326bd25d71d39b9ef95b299e3872ff",
        "deaf": False,
        "mute": False,
        "self_deaf": False,
        "self_mute": True,
        "suppress": False,
    }
    data.update(overrides)
    return data


def presence_payload(**overrides: Any) -> dict[str, Any]:
    data = {
        "user": {"id": USER_ID},
        "guild_id": GUILD_ID,
        "status": "online",
        "activities": [{"name": "Rocket League", "type": 0}],
    }
    data.update(overrides)
    return data


class ExplodingStore(Store):
    """Store that fails the test on any lookup."""

    def get(self, kind: EntityKind, key: Any) -> Any:
        raise AssertionError(f"unexpected store lookup of {kind.value} {key}")


class ExplodingTransport(Transport):
    """Transport that fails the test on any request."""

    async def fetch(self, kind: EntityKind, entity_id: str, guild_id: str | None = None) -> Any:
        raise AssertionError(f"unexpected fetch of {kind.value} {entity_id}")


class RecordingTransport(Transport):
    """Serve records from ``payloads`` and remember every request made.

    ``payloads`` maps ``(kind, entity_id)`` to a wire payload or to an
    exception instance to raise instead.
    """

    def __init__(self, payloads: dict[tuple[EntityKind, str], Any] | None = None) -> None:
        self.payloads = payloads or {}
        self.calls: list[tuple[EntityKind, str, str | None]] = []

    async def fetch(self, kind: EntityKind, entity_id: str, guild_id: str | None = None) -> Any:
        self.calls.append((kind, entity_id, guild_id))
        await asyncio.sleep(0)
        payload = self.payloads.get((kind, entity_id))
        if payload is None:
            raise NotFound(kind.value, entity_id)
        if isinstance(payload, Exception):
            raise payload
        return parse_payload(kind, payload)


def cache(
    store: InMemoryStore,
    kind: EntityKind,
    payload: dict[str, Any],
    entity_id: str,
    guild_id: str | None = None,
) -> None:
    """Put the mapped ``payload`` into ``store`` under its lookup key."""
    store.put(kind, store_key(kind, entity_id, guild_id), parse_payload(kind, payload))
