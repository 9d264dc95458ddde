"""Response records mirroring Discord's wire schema.

The records are implemented using :mod:`pydantic` so that they provide
runtime validation and convenient serialisation to and from dictionaries.
They carry no behaviour: domain logic lives in
:mod:`guildgraph.data.entities`.

Wire names that differ from the Python field name are declared with
``Field(alias=...)``. That alias table is the exact mapping for each record;
nothing is converted heuristically. Optional fields that are absent on the
wire are ``None``; a present but empty value (``""``, ``[]``) is kept as is.
"""

from __future__ import annotations

import datetime
import enum
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field

from .ids import Snowflake


class EntityKind(str, enum.Enum):
    """Every entity kind the resolver knows how to look up."""

    GUILD = "guild"
    MEMBER = "member"
    ROLE = "role"
    USER = "user"
    EMOJI = "emoji"
    VOICE_STATE = "voice_state"
    PRESENCE = "presence"

    @property
    def guild_scoped(self) -> bool:
        """Whether lookups of this kind need the owning guild's id."""
        return self not in (EntityKind.GUILD, EntityKind.USER)


class Status(str, enum.Enum):
    ONLINE = "online"
    IDLE = "idle"
    DND = "dnd"
    INVISIBLE = "invisible"
    OFFLINE = "offline"


class ActivityType(enum.IntEnum):
    PLAYING = 0
    STREAMING = 1
    LISTENING = 2
    WATCHING = 3
    CUSTOM = 4
    COMPETING = 5


def _known_activity_type(value: int) -> int:
    # Types added to the API later stay plain ints.
    try:
        return ActivityType(value)
    except ValueError:
        return value


ActivityTypeValue = Annotated[int, AfterValidator(_known_activity_type)]


class Record(BaseModel):
    """Common configuration for every response record."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")


class UserResponse(Record):
    """A Discord user as delivered by ``GET /users/{id}`` or embedded."""

    id: Snowflake
    username: str
    discriminator: str = Field(pattern=r"^[0-9]+$")
    avatar: str | None = None
    is_bot: bool = Field(default=False, alias="bot")


class PartialUserResponse(Record):
    """A user reference in which only ``id`` is guaranteed (presence updates)."""

    id: Snowflake
    username: str | None = None
    discriminator: str | None = Field(default=None, pattern=r"^[0-9]+$")
    avatar: str | None = None


class EmojiResponse(Record):
    """A custom guild emoji.

    Attributes
    ----------
    roles:
        Ids of the roles allowed to use the emoji. Foreign keys only.
    user:
        The user that uploaded the emoji. Only sent to callers with the
        emoji management permission, otherwise absent.

    """

    id: Snowflake
    name: str
    roles: list[Snowflake]
    user: UserResponse | None = None
    require_colons: bool
    managed: bool
    animated: bool = False


class RoleResponse(Record):
    id: Snowflake
    name: str
    color: int
    hoisted: bool = Field(alias="hoist")
    position: int
    permissions: int
    managed: bool
    mentionable: bool


class MemberResponse(Record):
    """A user's membership in a guild; ``user`` is always co-delivered."""

    user: UserResponse
    nickname: str | None = Field(default=None, alias="nick")
    roles: list[Snowflake]
    join_time: datetime.datetime = Field(alias="joined_at")
    deafened: bool = Field(default=False, alias="deaf")
    muted: bool = Field(default=False, alias="mute")


class GuildResponse(Record):
    id: Snowflake
    name: str
    icon: str | None = None
    owner_id: Snowflake
    region: str | None = None
    afk_channel_id: Snowflake | None = None
    member_count: int | None = None
    verification_level: int = 0
    roles: list[RoleResponse] = Field(default_factory=list)
    emojis: list[EmojiResponse] = Field(default_factory=list)


class VoiceStateResponse(Record):
    guild_id: Snowflake | None = None
    channel_id: Snowflake | None = None
    user_id: Snowflake
    session_id: str
    deafened: bool = Field(alias="deaf")
    muted: bool = Field(alias="mute")
    self_deafened: bool = Field(alias="self_deaf")
    self_muted: bool = Field(alias="self_mute")
    suppressed: bool = Field(alias="suppress")


class ActivityResponse(Record):
    name: str
    type: ActivityTypeValue
    url: str | None = None


class PresenceResponse(Record):
    user: PartialUserResponse
    guild_id: Snowflake | None = None
    status: Status
    activities: list[ActivityResponse] = Field(default_factory=list)


RECORD_TYPES: dict[EntityKind, type[Record]] = {
    EntityKind.GUILD: GuildResponse,
    EntityKind.MEMBER: MemberResponse,
    EntityKind.ROLE: RoleResponse,
    EntityKind.USER: UserResponse,
    EntityKind.EMOJI: EmojiResponse,
    EntityKind.VOICE_STATE: VoiceStateResponse,
    EntityKind.PRESENCE: PresenceResponse,
}
