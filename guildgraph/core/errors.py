"""Error taxonomy surfaced by the mapper and the relationship resolver.

Nothing in :mod:`guildgraph` catches these on the caller's behalf: mapping
errors come straight out of :func:`~guildgraph.core.mapper.parse_payload` and
resolution errors come out of the awaited accessor (or the async iterator, for
multi-valued relationships).
"""

from __future__ import annotations

from typing import Any


class GuildGraphError(Exception):
    """Base class for every error raised by this package."""


class MalformedPayload(GuildGraphError):
    """A wire payload could not be mapped to its response record.

    Attributes
    ----------
    kind:
        Name of the record type being built.
    errors:
        Validation error details, one dict per offending field.

    """

    def __init__(self, kind: str, errors: list[dict[str, Any]] | None = None) -> None:
        self.kind = kind
        self.errors = errors or []
        fields = ", ".join(
            ".".join(str(part) for part in err.get("loc", ())) or "<payload>"
            for err in self.errors
        )
        detail = f" (bad fields: {fields})" if fields else ""
        super().__init__(f"Malformed {kind} payload{detail}")


class NotFound(GuildGraphError):
    """The target of a resolution no longer exists (or never did)."""

    def __init__(self, kind: str, entity_id: str, detail: str | None = None) -> None:
        self.kind = kind
        self.entity_id = entity_id
        message = f"{kind} {entity_id} not found"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class Unauthorized(GuildGraphError):
    """The collaborator's credentials do not grant access to the target."""

    def __init__(self, kind: str, entity_id: str, status_code: int) -> None:
        self.kind = kind
        self.entity_id = entity_id
        self.status_code = status_code
        super().__init__(f"Not authorized to fetch {kind} {entity_id} (HTTP {status_code})")


class TransportError(GuildGraphError):
    """The underlying request failed.

    ``status_code`` is ``None`` when no response was received at all
    (timeouts, connection errors). Callers decide whether to retry.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        url: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(message)
