"""Core package for guildgraph.

This module exposes the response records, the domain entities and the
collaborator plumbing so that consumers of the package can simply import
them from ``guildgraph``.

Typical wiring::

    store = InMemoryStore()                      # kept fresh by the gateway
    transport = DiscordTransport.from_settings(load_settings())
    resolver = Resolver(store, transport)
    member = Member(parse_payload(EntityKind.MEMBER, payload), guild_id, resolver)
    guild = await member.guild()
"""

from .adapters.base import Store, Transport, store_key
from .adapters.discord import DiscordTransport
from .config import Settings, load_settings
from .core.errors import (
    GuildGraphError,
    MalformedPayload,
    NotFound,
    TransportError,
    Unauthorized,
)
from .core.ids import Snowflake, as_snowflake, snowflake_time
from .core.mapper import parse_payload, to_payload, wire_fields
from .core.models import (
    ActivityResponse,
    ActivityType,
    EmojiResponse,
    EntityKind,
    GuildResponse,
    MemberResponse,
    PartialUserResponse,
    PresenceResponse,
    RoleResponse,
    Status,
    UserResponse,
    VoiceStateResponse,
)
from .core.storage import InMemoryStore
from .data.entities import (
    Guild,
    GuildEmoji,
    Member,
    Presence,
    Role,
    User,
    UserLike,
    VoiceState,
)
from .data.resolver import Resolver, resolve
from .logging_config import setup_logging

__all__ = [
    "ActivityResponse",
    "ActivityType",
    "DiscordTransport",
    "EmojiResponse",
    "EntityKind",
    "Guild",
    "GuildEmoji",
    "GuildGraphError",
    "GuildResponse",
    "InMemoryStore",
    "MalformedPayload",
    "Member",
    "MemberResponse",
    "NotFound",
    "PartialUserResponse",
    "Presence",
    "PresenceResponse",
    "Resolver",
    "Role",
    "RoleResponse",
    "Settings",
    "Snowflake",
    "Status",
    "Store",
    "Transport",
    "TransportError",
    "Unauthorized",
    "User",
    "UserLike",
    "UserResponse",
    "VoiceState",
    "VoiceStateResponse",
    "as_snowflake",
    "load_settings",
    "parse_payload",
    "resolve",
    "setup_logging",
    "snowflake_time",
    "store_key",
    "to_payload",
    "wire_fields",
]
