"""Discord snowflake identifiers.

A snowflake is Discord's 64-bit global entity id. On the wire it is sent as a
decimal string; here it stays a plain ``str`` so it is immutable, hashable and
compares by value, which makes it usable as a lookup key everywhere.

INVARIANT: a snowflake never changes once created.
"""

from __future__ import annotations

import datetime
from datetime import UTC
from typing import Annotated, Any

from pydantic import BeforeValidator

# 2015-01-01T00:00:00Z in milliseconds.
DISCORD_EPOCH = 1420070400000
_EPOCH = datetime.datetime(2015, 1, 1, tzinfo=UTC)


def as_snowflake(value: Any) -> str:
    """Coerce ``value`` to the canonical snowflake string.

    Accepts non-negative integers and strings of ASCII digits. Leading
    zeros are dropped, so ``"007"`` and ``7`` give the same id. Raises
    :class:`ValueError` for anything else.
    """
    if isinstance(value, bool):
        raise ValueError("a boolean is not a snowflake")
    if isinstance(value, int):
        if value < 0:
            raise ValueError(f"snowflake must be non-negative, got {value}")
        return str(value)
    if isinstance(value, str) and value.isascii() and value.isdigit():
        return str(int(value))
    raise ValueError(f"invalid snowflake: {value!r}")


Snowflake = Annotated[str, BeforeValidator(as_snowflake)]


def snowflake_time(snowflake: str) -> datetime.datetime:
    """Return the creation time encoded in ``snowflake``."""
    return _EPOCH + datetime.timedelta(milliseconds=int(snowflake) >> 22)
