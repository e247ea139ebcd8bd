from typing import Protocol

from duochat.core.modules.message.models import ChatEvent, ChatEventKind


class MessageStore(Protocol):
    """Append-only event log consumed by the room coordinator."""

    async def append(self, room: str, kind: ChatEventKind, author: str, text: str, timestamp: int) -> ChatEvent: ...

    async def recent(self, room: str, limit: int) -> list[ChatEvent]: ...
