from typing import Any

import structlog
from pymongo.asynchronous.database import AsyncDatabase

from duochat.core.core import Service
from duochat.core.modules.message.models import ChatEvent, ChatEventKind

logger = structlog.get_logger(__name__)


class MessageService(Service):
    """MongoDB-backed event log with gap-free sequential ids per room.

    Callers must not append to the same room concurrently; the room
    coordinator guarantees this with its per-room lock.
    """

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._collection = database.get_collection("messages")

    async def on_start(self) -> None:
        """Create indexes for room/id lookup."""
        await self._collection.create_index([("room", 1), ("id", 1)], unique=True)

    async def append(self, room: str, kind: ChatEventKind, author: str, text: str, timestamp: int) -> ChatEvent:
        """Persist an event and return it with its assigned id."""
        last_event = await self._collection.find_one({"room": room}, sort=[("id", -1)])
        next_id = 1 if last_event is None else last_event["id"] + 1

        event = ChatEvent(id=next_id, kind=kind, author=author, text=text, timestamp=timestamp)
        await self._collection.insert_one({"room": room, **event.to_mongo()})
        logger.debug("chat_event_stored", room=room, event_id=event.id, kind=kind)
        return event

    async def recent(self, room: str, limit: int) -> list[ChatEvent]:
        """Get the latest ``limit`` events of a room, newest first."""
        cursor = self._collection.find({"room": room}).sort("id", -1).limit(limit)
        return await ChatEvent.list_cursor(cursor)
