"""Mapping between wire payloads and response records."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeVar

from pydantic import ValidationError

from .errors import MalformedPayload
from .models import RECORD_TYPES, EntityKind, Record

R = TypeVar("R", bound=Record)


def _record_type(kind: EntityKind | type[R]) -> type[Record]:
    if isinstance(kind, EntityKind):
        return RECORD_TYPES[kind]
    return kind


def parse_payload(kind: EntityKind | type[R], payload: Any) -> Any:
    """Decode ``payload`` into the response record for ``kind``.

    ``kind`` is either an :class:`EntityKind` or a record class. Extra wire
    fields are ignored. Raises :class:`MalformedPayload` if the payload is not
    a mapping, a required field is missing or a value fails coercion.
    """
    model = _record_type(kind)
    if not isinstance(payload, Mapping):
        raise MalformedPayload(
            model.__name__,
            [{"loc": (), "msg": f"expected an object, got {type(payload).__name__}"}],
        )
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise MalformedPayload(model.__name__, exc.errors(include_url=False)) from exc


def to_payload(record: Record) -> dict[str, Any]:
    """Encode ``record`` back into wire form.

    Field names follow the wire alias table and optional fields that are
    absent are left out.
    """
    return record.model_dump(mode="json", by_alias=True, exclude_none=True)


def wire_fields(kind: EntityKind | type[R]) -> dict[str, str]:
    """Return the ``{wire_name: field_name}`` table for ``kind``."""
    model = _record_type(kind)
    return {
        (info.alias or name): name for name, info in model.model_fields.items()
    }
