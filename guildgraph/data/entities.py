"""Domain entities wrapping response records.

An entity is a read-only view over one record snapshot plus the context
needed to reach related entities (the owning guild's id and a
:class:`~guildgraph.data.resolver.Resolver`). Building one never touches the
store or the network. Properties only read the record; methods listed in
``relationships`` are coroutines (or async generators) that go through the
resolver and return freshly built entities.

Two entities for the same remote object taken at different times are not
reconciled: a caller holding an old snapshot keeps seeing old values.
"""

from __future__ import annotations

import datetime
from collections.abc import AsyncIterator
from dataclasses import dataclass, field
from typing import ClassVar, Protocol, runtime_checkable

from ..core.ids import as_snowflake, snowflake_time
from ..core.models import (
    ActivityResponse,
    EmojiResponse,
    EntityKind,
    GuildResponse,
    MemberResponse,
    PresenceResponse,
    RoleResponse,
    Status,
    UserResponse,
    VoiceStateResponse,
)
from .resolver import Resolver

CDN_BASE = "https://cdn.discordapp.com"


@runtime_checkable
class UserLike(Protocol):
    """Anything that identifies a Discord account."""

    @property
    def id(self) -> str: ...

    @property
    def username(self) -> str: ...

    @property
    def discriminator(self) -> str: ...


def _avatar_url(user: UserResponse) -> str:
    if user.avatar is None:
        # Default avatars are picked by discriminator, or by id for
        # accounts migrated to unique usernames ("0").
        if user.discriminator == "0":
            index = (int(user.id) >> 22) % 6
        else:
            index = int(user.discriminator) % 5
        return f"{CDN_BASE}/embed/avatars/{index}.png"
    ext = "gif" if user.avatar.startswith("a_") else "png"
    return f"{CDN_BASE}/avatars/{user.id}/{user.avatar}.{ext}"


def _tag(user: UserResponse) -> str:
    if user.discriminator == "0":
        return user.username
    return f"{user.username}#{user.discriminator}"


def _unique(ids: list[str]) -> list[str]:
    return list(dict.fromkeys(ids))


@dataclass(frozen=True, eq=False)
class User:
    data: UserResponse
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset()

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def username(self) -> str:
        return self.data.username

    @property
    def discriminator(self) -> str:
        return self.data.discriminator

    @property
    def avatar(self) -> str | None:
        return self.data.avatar

    @property
    def is_bot(self) -> bool:
        return self.data.is_bot

    @property
    def tag(self) -> str:
        return _tag(self.data)

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"

    @property
    def avatar_url(self) -> str:
        return _avatar_url(self.data)

    @property
    def created_at(self) -> datetime.datetime:
        return snowflake_time(self.id)

    async def as_member(self, guild_id: str) -> Member:
        """Resolve this user's membership in ``guild_id``."""
        guild_id = as_snowflake(guild_id)
        data = await self._resolver.fetch(EntityKind.MEMBER, self.id, guild_id)
        return Member(data, guild_id, self._resolver)


@dataclass(frozen=True, eq=False)
class Member:
    """A Discord user associated to a guild.

    Attributes
    ----------
    data:
        The member record this view was built from.
    guild_id:
        Id of the guild the membership belongs to.

    """

    data: MemberResponse
    guild_id: str
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset(
        {"guild", "roles", "voice_state", "presence"}
    )

    # ------------------------------------------------------------------
    # Identity (shared shape with User)
    @property
    def id(self) -> str:
        return self.data.user.id

    @property
    def username(self) -> str:
        return self.data.user.username

    @property
    def discriminator(self) -> str:
        return self.data.user.discriminator

    @property
    def avatar(self) -> str | None:
        return self.data.user.avatar

    @property
    def is_bot(self) -> bool:
        return self.data.user.is_bot

    def as_user(self) -> User:
        """Return the embedded user; no lookup is needed."""
        return User(self.data.user, self._resolver)

    # ------------------------------------------------------------------
    # Guild-specific fields
    @property
    def nickname(self) -> str | None:
        return self.data.nickname

    @property
    def role_ids(self) -> frozenset[str]:
        return frozenset(self.data.roles)

    @property
    def join_time(self) -> datetime.datetime:
        return self.data.join_time

    @property
    def deafened(self) -> bool:
        return self.data.deafened

    @property
    def muted(self) -> bool:
        return self.data.muted

    # ------------------------------------------------------------------
    # Derived values
    @property
    def display_name(self) -> str:
        """The name shown in clients: the nickname if set, else the username."""
        if self.nickname is not None:
            return self.nickname
        return self.username

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"

    @property
    def nickname_mention(self) -> str:
        """The raw mention format that renders the member's nickname."""
        return f"<@!{self.id}>"

    @property
    def tag(self) -> str:
        return _tag(self.data.user)

    @property
    def avatar_url(self) -> str:
        return _avatar_url(self.data.user)

    @property
    def created_at(self) -> datetime.datetime:
        return snowflake_time(self.id)

    # ------------------------------------------------------------------
    # Relationships
    async def guild(self) -> Guild:
        data = await self._resolver.fetch(EntityKind.GUILD, self.guild_id)
        return Guild(data, self._resolver)

    async def roles(self) -> AsyncIterator[Role]:
        """Yield the member's roles in the order the server listed them."""
        async for data in self._resolver.fetch_many(
            EntityKind.ROLE, _unique(self.data.roles), self.guild_id
        ):
            yield Role(data, self.guild_id, self._resolver)

    async def voice_state(self) -> VoiceState:
        data = await self._resolver.fetch(EntityKind.VOICE_STATE, self.id, self.guild_id)
        return VoiceState(data, self.guild_id, self._resolver)

    async def presence(self) -> Presence:
        data = await self._resolver.fetch(EntityKind.PRESENCE, self.id, self.guild_id)
        return Presence(data, self.guild_id, self._resolver)


@dataclass(frozen=True, eq=False)
class Guild:
    data: GuildResponse
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset({"owner", "roles", "emojis"})

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def owner_id(self) -> str:
        return self.data.owner_id

    @property
    def icon(self) -> str | None:
        return self.data.icon

    @property
    def icon_url(self) -> str | None:
        if self.icon is None:
            return None
        ext = "gif" if self.icon.startswith("a_") else "png"
        return f"{CDN_BASE}/icons/{self.id}/{self.icon}.{ext}"

    @property
    def region(self) -> str | None:
        return self.data.region

    @property
    def afk_channel_id(self) -> str | None:
        return self.data.afk_channel_id

    @property
    def member_count(self) -> int | None:
        return self.data.member_count

    @property
    def verification_level(self) -> int:
        return self.data.verification_level

    @property
    def role_ids(self) -> frozenset[str]:
        return frozenset(role.id for role in self.data.roles)

    @property
    def emoji_ids(self) -> frozenset[str]:
        return frozenset(emoji.id for emoji in self.data.emojis)

    @property
    def created_at(self) -> datetime.datetime:
        return snowflake_time(self.id)

    async def owner(self) -> Member:
        return await self.get_member(self.owner_id)

    async def get_member(self, user_id: str) -> Member:
        data = await self._resolver.fetch(EntityKind.MEMBER, as_snowflake(user_id), self.id)
        return Member(data, self.id, self._resolver)

    async def get_role(self, role_id: str) -> Role:
        data = await self._resolver.fetch(EntityKind.ROLE, as_snowflake(role_id), self.id)
        return Role(data, self.id, self._resolver)

    async def get_emoji(self, emoji_id: str) -> GuildEmoji:
        data = await self._resolver.fetch(EntityKind.EMOJI, as_snowflake(emoji_id), self.id)
        return GuildEmoji(data, self.id, self._resolver)

    async def roles(self) -> AsyncIterator[Role]:
        """Yield the guild's roles, looking each one up in the store first."""
        ids = _unique([role.id for role in self.data.roles])
        async for data in self._resolver.fetch_many(EntityKind.ROLE, ids, self.id):
            yield Role(data, self.id, self._resolver)

    async def emojis(self) -> AsyncIterator[GuildEmoji]:
        ids = _unique([emoji.id for emoji in self.data.emojis])
        async for data in self._resolver.fetch_many(EntityKind.EMOJI, ids, self.id):
            yield GuildEmoji(data, self.id, self._resolver)


@dataclass(frozen=True, eq=False)
class Role:
    data: RoleResponse
    guild_id: str
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset({"guild"})

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def color(self) -> int:
        return self.data.color

    @property
    def hoisted(self) -> bool:
        return self.data.hoisted

    @property
    def position(self) -> int:
        return self.data.position

    @property
    def permissions(self) -> int:
        return self.data.permissions

    @property
    def managed(self) -> bool:
        return self.data.managed

    @property
    def mentionable(self) -> bool:
        return self.data.mentionable

    @property
    def mention(self) -> str:
        return f"<@&{self.id}>"

    @property
    def is_everyone(self) -> bool:
        """The @everyone role shares its id with the guild."""
        return self.id == self.guild_id

    @property
    def created_at(self) -> datetime.datetime:
        return snowflake_time(self.id)

    async def guild(self) -> Guild:
        data = await self._resolver.fetch(EntityKind.GUILD, self.guild_id)
        return Guild(data, self._resolver)


@dataclass(frozen=True, eq=False)
class GuildEmoji:
    data: EmojiResponse
    guild_id: str
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset({"guild", "roles", "user"})

    @property
    def id(self) -> str:
        return self.data.id

    @property
    def name(self) -> str:
        return self.data.name

    @property
    def role_ids(self) -> frozenset[str]:
        return frozenset(self.data.roles)

    @property
    def require_colons(self) -> bool:
        return self.data.require_colons

    @property
    def managed(self) -> bool:
        return self.data.managed

    @property
    def animated(self) -> bool:
        return self.data.animated

    @property
    def user_id(self) -> str | None:
        """Id of the uploader, or ``None`` when the server did not send it."""
        if self.data.user is None:
            return None
        return self.data.user.id

    @property
    def image_url(self) -> str:
        ext = "gif" if self.animated else "png"
        return f"{CDN_BASE}/emojis/{self.id}.{ext}"

    @property
    def created_at(self) -> datetime.datetime:
        return snowflake_time(self.id)

    def as_format(self) -> str:
        """Return the markup used to render this emoji in a message."""
        prefix = "a" if self.animated else ""
        return f"<{prefix}:{self.name}:{self.id}>"

    async def guild(self) -> Guild:
        data = await self._resolver.fetch(EntityKind.GUILD, self.guild_id)
        return Guild(data, self._resolver)

    async def roles(self) -> AsyncIterator[Role]:
        """Yield the roles allowed to use this emoji."""
        async for data in self._resolver.fetch_many(
            EntityKind.ROLE, _unique(self.data.roles), self.guild_id
        ):
            yield Role(data, self.guild_id, self._resolver)

    async def user(self) -> User | None:
        """Resolve the uploader; ``None`` if the emoji carries no user."""
        if self.user_id is None:
            return None
        data = await self._resolver.fetch(EntityKind.USER, self.user_id)
        return User(data, self._resolver)


@dataclass(frozen=True, eq=False)
class VoiceState:
    data: VoiceStateResponse
    guild_id: str
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset({"guild", "user", "member"})

    @property
    def user_id(self) -> str:
        return self.data.user_id

    @property
    def channel_id(self) -> str | None:
        return self.data.channel_id

    @property
    def session_id(self) -> str:
        return self.data.session_id

    @property
    def deafened(self) -> bool:
        return self.data.deafened

    @property
    def muted(self) -> bool:
        return self.data.muted

    @property
    def self_deafened(self) -> bool:
        return self.data.self_deafened

    @property
    def self_muted(self) -> bool:
        return self.data.self_muted

    @property
    def suppressed(self) -> bool:
        return self.data.suppressed

    @property
    def is_connected(self) -> bool:
        return self.channel_id is not None

    async def guild(self) -> Guild:
        data = await self._resolver.fetch(EntityKind.GUILD, self.guild_id)
        return Guild(data, self._resolver)

    async def user(self) -> User:
        data = await self._resolver.fetch(EntityKind.USER, self.user_id)
        return User(data, self._resolver)

    async def member(self) -> Member:
        data = await self._resolver.fetch(EntityKind.MEMBER, self.user_id, self.guild_id)
        return Member(data, self.guild_id, self._resolver)


@dataclass(frozen=True, eq=False)
class Presence:
    data: PresenceResponse
    guild_id: str
    _resolver: Resolver = field(repr=False)

    relationships: ClassVar[frozenset[str]] = frozenset({"user", "member"})

    @property
    def user_id(self) -> str:
        return self.data.user.id

    @property
    def status(self) -> Status:
        return self.data.status

    @property
    def activity(self) -> ActivityResponse | None:
        """The first listed activity, if any."""
        if not self.data.activities:
            return None
        return self.data.activities[0]

    async def user(self) -> User:
        data = await self._resolver.fetch(EntityKind.USER, self.user_id)
        return User(data, self._resolver)

    async def member(self) -> Member:
        data = await self._resolver.fetch(EntityKind.MEMBER, self.user_id, self.guild_id)
        return Member(data, self.guild_id, self._resolver)
