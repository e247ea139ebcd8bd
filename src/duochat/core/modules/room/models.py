"""Per-connection state and wire payloads exchanged over room connections."""

from typing import Literal, Self

from pydantic import BaseModel, ConfigDict, Field

from duochat.core.modules.message.models import ChatEvent


class SessionAttachment(BaseModel):
    """Identity bound to a connection when it joins.

    Serialized onto the connection handle itself and decoded again on every
    later event, so nothing about the connection has to survive in memory.
    """

    model_config = ConfigDict(frozen=True)

    identity: str
    connected_at: int  # Unix milliseconds

    def to_blob(self) -> bytes:
        return self.model_dump_json().encode("utf-8")

    @classmethod
    def from_blob(cls, blob: bytes) -> Self:
        return cls.model_validate_json(blob)


class InboundMessage(BaseModel):
    """Client to server chat message. Extra keys are ignored."""

    text: str = Field(..., min_length=1)


class HistoryEntry(BaseModel):
    id: int
    type: str
    author: str
    text: str
    timestamp: int

    @classmethod
    def from_event(cls, event: ChatEvent) -> "HistoryEntry":
        return cls(id=event.id, type=event.kind.value, author=event.author, text=event.text, timestamp=event.timestamp)


class HistoryPayload(BaseModel):
    type: Literal["history"] = "history"
    messages: list[HistoryEntry]  # Chronological


class MessagePayload(BaseModel):
    type: Literal["message"] = "message"
    id: int
    author: str
    text: str
    timestamp: int

    @classmethod
    def from_event(cls, event: ChatEvent) -> "MessagePayload":
        return cls(id=event.id, author=event.author, text=event.text, timestamp=event.timestamp)


class SystemPayload(BaseModel):
    type: Literal["system"] = "system"
    id: int | None = None
    text: str


class ErrorPayload(BaseModel):
    type: Literal["error"] = "error"
    error: str


OutboundPayload = HistoryPayload | MessagePayload | SystemPayload | ErrorPayload
