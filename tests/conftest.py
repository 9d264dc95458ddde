"""Fixtures wiring a resolver to an in-memory store and a recording transport."""

from __future__ import annotations

import pytest

from guildgraph.core.storage import InMemoryStore
from guildgraph.data.resolver import Resolver
from helpers import ExplodingStore, ExplodingTransport, RecordingTransport


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def resolver(store: InMemoryStore, transport: RecordingTransport) -> Resolver:
    return Resolver(store, transport)


@pytest.fixture
def offline_resolver() -> Resolver:
    """A resolver whose collaborators fail on any call."""
    return Resolver(ExplodingStore(), ExplodingTransport())
