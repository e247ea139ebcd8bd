from typing import Any

from pymongo.asynchronous.database import AsyncDatabase

from duochat.core.core import Service
from duochat.core.modules.room.room import Room

MAIN_ROOM = "main"


class RoomService(Service):
    """Owns one Room per identifier, created on first use."""

    def __init__(self, database: AsyncDatabase[dict[str, Any]]) -> None:
        super().__init__(database)
        self._rooms: dict[str, Room] = {}

    def get_room(self, room_id: str = MAIN_ROOM) -> Room:
        if room_id not in self._rooms:
            config = self.core.config
            self._rooms[room_id] = Room(
                room_id,
                self.core.services.message,
                history_limit=config.history_limit,
                max_message_length=config.max_message_length,
            )
        return self._rooms[room_id]
