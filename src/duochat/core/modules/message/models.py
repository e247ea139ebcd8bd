"""Persisted chat room events."""

from enum import StrEnum

from duochat.core.db import MongoModel

SYSTEM_AUTHOR = "system"


class ChatEventKind(StrEnum):
    MESSAGE = "message"
    SYSTEM = "system"


class ChatEvent(MongoModel):
    """One entry of a room's history.

    Stored in the ``messages`` collection together with its room identifier.
    Indexed on (room, id) - unique.
    """

    id: int  # Sequential per room, starting at 1
    kind: ChatEventKind
    author: str
    text: str
    timestamp: int  # Unix milliseconds
