"""Shared pytest fixtures."""

import json
from collections import defaultdict
from types import SimpleNamespace
from typing import Any

import pytest

from duochat.config import Config
from duochat.core.modules.message.models import ChatEvent, ChatEventKind
from duochat.core.modules.room.connection import Connection
from duochat.core.modules.room.room import Room

# "Hello!\xde\xad\xbe\xef" and the RFC 4226 test key "12345678901234567890"
SECRET_1 = "JBSWY3DPEHPK3PXP"
SECRET_2 = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"
SESSION_KEY = "test-signing-key"


class FakeConnection(Connection):
    """Connection that records every frame it is sent."""

    def __init__(self, name: str = "", fail: bool = False) -> None:
        super().__init__()
        self.name = name
        self.fail = fail
        self.sent: list[dict[str, Any]] = []
        self.closed: tuple[int, str] | None = None

    async def send(self, payload: str) -> None:
        if self.fail:
            raise ConnectionError("peer is gone")
        self.sent.append(json.loads(payload))

    async def close(self, code: int = 1000, reason: str = "") -> None:
        self.closed = (code, reason)

    def types(self) -> list[str]:
        return [frame["type"] for frame in self.sent]

    def __repr__(self) -> str:
        return f"FakeConnection({self.name!r})"


class InMemoryMessageStore:
    """Message store keeping events in a list per room."""

    def __init__(self) -> None:
        self.events: dict[str, list[ChatEvent]] = defaultdict(list)

    async def append(self, room: str, kind: ChatEventKind, author: str, text: str, timestamp: int) -> ChatEvent:
        event = ChatEvent(id=len(self.events[room]) + 1, kind=kind, author=author, text=text, timestamp=timestamp)
        self.events[room].append(event)
        return event

    async def recent(self, room: str, limit: int) -> list[ChatEvent]:
        return list(reversed(self.events[room]))[:limit]


@pytest.fixture
def config():
    """Configuration with both secrets and a signing key set."""
    return Config(
        database_url="mongodb://localhost:27017/duochat_test",
        session_secret_key=SESSION_KEY,
        totp_secret_1=SECRET_1,
        totp_secret_2=SECRET_2,
        cookie_secure=False,
    )


@pytest.fixture
def fake_core(config):
    """Minimal stand-in for Core exposing only the config."""
    return SimpleNamespace(config=config)


@pytest.fixture
def store():
    return InMemoryMessageStore()


@pytest.fixture
def room(store):
    return Room("main", store, clock=lambda: 1_700_000_000_000)


@pytest.fixture
def make_connection():
    return FakeConnection


@pytest.fixture
def join():
    """Connect a new FakeConnection to a room as ``identity``."""

    async def _join(room: Room, identity: str) -> FakeConnection:
        connection = FakeConnection(identity)
        await room.on_connect(identity, connection)
        return connection

    return _join
