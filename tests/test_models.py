"""Tests for the response records and the payload mapper."""

import datetime
from datetime import UTC

import pytest
from pydantic import ValidationError

from guildgraph.core.errors import MalformedPayload
from guildgraph.core.mapper import parse_payload, to_payload, wire_fields
from guildgraph.core.models import (
    ActivityType,
    EmojiResponse,
    EntityKind,
    GuildResponse,
    MemberResponse,
    PresenceResponse,
    RoleResponse,
    Status,
    VoiceStateResponse,
)
from helpers import (
    GUILD_ID,
    USER_ID,
    emoji_payload,
    guild_payload,
    member_payload,
    presence_payload,
    role_payload,
    user_payload,
    voice_state_payload,
)


def test_emoji_payload_maps_to_record() -> None:
    """The documented example payload produces the expected record."""
    record = parse_payload(
        EntityKind.EMOJI,
        {"id": "9", "name": "pepe", "roles": ["1", "2"], "require_colons": True, "managed": False},
    )
    assert isinstance(record, EmojiResponse)
    assert record.id == "9"
    assert record.name == "pepe"
    assert record.roles == ["1", "2"]
    assert record.require_colons is True
    assert record.managed is False
    assert record.user is None
    assert record.animated is False


def test_parse_accepts_record_class() -> None:
    record = parse_payload(EmojiResponse, emoji_payload())
    assert isinstance(record, EmojiResponse)


@pytest.mark.parametrize("missing", ["id", "name", "roles", "require_colons", "managed"])
def test_missing_required_emoji_field(missing: str) -> None:
    """Dropping any required field yields ``MalformedPayload``."""
    payload = emoji_payload()
    del payload[missing]
    with pytest.raises(MalformedPayload) as excinfo:
        parse_payload(EntityKind.EMOJI, payload)
    assert excinfo.value.kind == "EmojiResponse"
    assert any(err["loc"] == (missing,) for err in excinfo.value.errors)
    assert missing in str(excinfo.value)


def test_unknown_fields_are_ignored() -> None:
    payload = emoji_payload(available=True, some_future_field={"nested": [1, 2]})
    record = parse_payload(EntityKind.EMOJI, payload)
    assert record.name == "pepe"
    assert not hasattr(record, "some_future_field")


@pytest.mark.parametrize(
    "overrides",
    [
        {"id": "not-a-snowflake"},
        {"id": -5},
        {"managed": "sometimes"},
        {"roles": "1,2"},
        {"roles": [True]},
    ],
)
def test_bad_values_fail_coercion(overrides: dict) -> None:
    with pytest.raises(MalformedPayload):
        parse_payload(EntityKind.EMOJI, emoji_payload(**overrides))


def test_non_mapping_payload_is_malformed() -> None:
    with pytest.raises(MalformedPayload):
        parse_payload(EntityKind.GUILD, ["not", "an", "object"])


def test_integer_snowflakes_are_normalised() -> None:
    record = parse_payload(EntityKind.EMOJI, emoji_payload(id=9, roles=[1, "2"]))
    assert record.id == "9"
    assert record.roles == ["1", "2"]


def test_optional_user_absent_vs_present() -> None:
    """An absent or null user is ``None``; a present one is a full record."""
    assert parse_payload(EntityKind.EMOJI, emoji_payload()).user is None
    assert parse_payload(EntityKind.EMOJI, emoji_payload(user=None)).user is None

    record = parse_payload(
        EntityKind.EMOJI,
        emoji_payload(user={"id": "5", "username": "uploader", "discriminator": "0001"}),
    )
    assert record.user is not None
    assert record.user.username == "uploader"


def test_empty_values_are_kept_distinct_from_absent() -> None:
    record = parse_payload(EntityKind.MEMBER, member_payload(nick="", roles=[]))
    assert record.nickname == ""
    assert record.roles == []


def test_member_wire_names_map_to_fields() -> None:
    record = parse_payload(EntityKind.MEMBER, member_payload(nick="Rex", deaf=True))
    assert isinstance(record, MemberResponse)
    assert record.nickname == "Rex"
    assert record.deafened is True
    assert record.muted is False
    assert record.user.id == USER_ID
    assert record.join_time == datetime.datetime(2015, 4, 26, 6, 26, 56, 936000, tzinfo=UTC)


def test_role_permissions_string_is_coerced() -> None:
    record = parse_payload(EntityKind.ROLE, role_payload("1"))
    assert isinstance(record, RoleResponse)
    assert record.permissions == 66321471
    assert record.hoisted is True


def test_guild_embeds_roles_and_emojis() -> None:
    record = parse_payload(EntityKind.GUILD, guild_payload(emojis=[emoji_payload()]))
    assert isinstance(record, GuildResponse)
    assert [role.id for role in record.roles] == [GUILD_ID, "1"]
    assert record.emojis[0].name == "pepe"
    assert record.region is None


def test_voice_state_flags() -> None:
    record = parse_payload(EntityKind.VOICE_STATE, voice_state_payload(channel_id=None))
    assert isinstance(record, VoiceStateResponse)
    assert record.channel_id is None
    assert record.self_muted is True
    assert record.suppressed is False


def test_presence_status_and_activities() -> None:
    record = parse_payload(EntityKind.PRESENCE, presence_payload())
    assert isinstance(record, PresenceResponse)
    assert record.status is Status.ONLINE
    assert record.activities[0].type is ActivityType.PLAYING
    assert record.user.username is None

    with pytest.raises(MalformedPayload):
        parse_payload(EntityKind.PRESENCE, presence_payload(status="asleep"))


def test_unknown_activity_type_is_kept_as_int() -> None:
    record = parse_payload(
        EntityKind.PRESENCE,
        presence_payload(activities=[{"name": "x", "type": 6}, {"name": "y", "type": 3}]),
    )
    assert record.activities[0].type == 6
    assert not isinstance(record.activities[0].type, ActivityType)
    assert record.activities[1].type is ActivityType.WATCHING
    assert to_payload(record)["activities"][0]["type"] == 6


@pytest.mark.parametrize("discriminator", ["abcd", "", "12 3"])
def test_non_numeric_discriminator_is_malformed(discriminator: str) -> None:
    with pytest.raises(MalformedPayload) as excinfo:
        parse_payload(EntityKind.USER, user_payload(avatar=None, discriminator=discriminator))
    assert "discriminator" in str(excinfo.value)

    with pytest.raises(MalformedPayload):
        parse_payload(
            EntityKind.PRESENCE,
            presence_payload(user={"id": USER_ID, "discriminator": discriminator}),
        )


def test_records_are_frozen() -> None:
    record = parse_payload(EntityKind.EMOJI, emoji_payload())
    with pytest.raises(ValidationError):
        record.name = "other"  # type: ignore[misc]


def test_to_payload_uses_wire_names() -> None:
    record = parse_payload(EntityKind.MEMBER, member_payload(nick="Rex"))
    payload = to_payload(record)
    assert payload["nick"] == "Rex"
    assert payload["joined_at"].startswith("2015-04-26T06:26:56.936")
    assert payload["user"]["bot"] is False
    assert "nickname" not in payload
    assert parse_payload(EntityKind.MEMBER, payload) == record


def test_to_payload_omits_absent_optionals() -> None:
    payload = to_payload(parse_payload(EntityKind.EMOJI, emoji_payload()))
    assert "user" not in payload
    assert payload["require_colons"] is True


def test_wire_field_tables() -> None:
    assert wire_fields(EntityKind.MEMBER) == {
        "user": "user",
        "nick": "nickname",
        "roles": "roles",
        "joined_at": "join_time",
        "deaf": "deafened",
        "mute": "muted",
    }
    assert wire_fields(EntityKind.ROLE)["hoist"] == "hoisted"
    assert wire_fields(VoiceStateResponse)["self_deaf"] == "self_deafened"


@pytest.mark.parametrize(
    ("kind", "payload"),
    [
        (EntityKind.USER, user_payload()),
        (EntityKind.MEMBER, member_payload(nick="Rex")),
        (EntityKind.ROLE, role_payload("1")),
        (EntityKind.GUILD, guild_payload(emojis=[emoji_payload()])),
        (EntityKind.EMOJI, emoji_payload(user=user_payload())),
        (EntityKind.VOICE_STATE, voice_state_payload()),
        (EntityKind.PRESENCE, presence_payload()),
    ],
)
def test_records_survive_a_wire_round_trip(kind: EntityKind, payload: dict) -> None:
    record = parse_payload(kind, payload)
    assert parse_payload(kind, to_payload(record)) == record
