import asyncio
from collections.abc import Callable

import pydantic
import structlog

from duochat.core.modules.message.models import SYSTEM_AUTHOR, ChatEvent, ChatEventKind
from duochat.core.modules.message.store import MessageStore
from duochat.core.modules.room.connection import Connection
from duochat.core.modules.room.models import (
    ErrorPayload,
    HistoryEntry,
    HistoryPayload,
    InboundMessage,
    MessagePayload,
    OutboundPayload,
    SessionAttachment,
    SystemPayload,
)
from duochat.core.modules.room.registry import ConnectionRegistry
from duochat.errors import SessionAttachmentError
from duochat.utils import now_ms

logger = structlog.get_logger(__name__)

DEFAULT_HISTORY_LIMIT = 50
DEFAULT_MAX_MESSAGE_LENGTH = 4000

INVALID_MESSAGE_FORMAT = "Invalid message format"
MESSAGE_TOO_LONG = "Message too long"


class Room:
    """Coordinates one chat room: history, persistence and fan-out.

    Every handler runs under the room lock, so at most one of them is in
    flight at a time. This is what keeps event ids gap-free and guarantees a
    joining client gets its history before its own join notice.

    Per-connection state lives only in the attachment blob on the connection
    handle; handlers decode it again on every call.
    """

    def __init__(
        self,
        room_id: str,
        store: MessageStore,
        history_limit: int = DEFAULT_HISTORY_LIMIT,
        max_message_length: int = DEFAULT_MAX_MESSAGE_LENGTH,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        self.room_id = room_id
        self.registry = ConnectionRegistry()
        self._store = store
        self._history_limit = history_limit
        self._max_message_length = max_message_length
        self._clock = clock
        self._lock = asyncio.Lock()

    async def on_connect(self, identity: str, connection: Connection) -> None:
        """Send history to a new connection, register it and announce the join."""
        async with self._lock:
            events = await self._store.recent(self.room_id, self._history_limit)
            history = HistoryPayload(messages=[HistoryEntry.from_event(event) for event in reversed(events)])
            await connection.send(history.model_dump_json())

            attachment = SessionAttachment(identity=identity, connected_at=self._clock())
            connection.serialize_attachment(attachment.to_blob())
            self.registry.add(connection)

            await self._announce(f"{identity} joined the room.")
        logger.info("room_joined", room=self.room_id, identity=identity, history_size=len(events))

    async def on_message(self, connection: Connection, raw_payload: str | bytes) -> ChatEvent | None:
        """Persist and broadcast a chat message.

        Malformed payloads get an error reply on the sending connection only
        and are neither stored nor broadcast.

        Raises:
            SessionAttachmentError: If the connection carries no usable attachment
        """
        async with self._lock:
            attachment = self._recover_attachment(connection)

            try:
                inbound = InboundMessage.model_validate_json(raw_payload)
            except pydantic.ValidationError:
                await self._send(connection, ErrorPayload(error=INVALID_MESSAGE_FORMAT).model_dump_json())
                return None

            if len(inbound.text) > self._max_message_length:
                await self._send(connection, ErrorPayload(error=MESSAGE_TOO_LONG).model_dump_json())
                return None

            event = await self._store.append(
                self.room_id, ChatEventKind.MESSAGE, attachment.identity, inbound.text, self._clock()
            )
            await self.broadcast(MessagePayload.from_event(event))
            return event

    async def on_disconnect(self, connection: Connection, code: int = 1000, reason: str = "") -> None:
        """Unregister a closed connection and announce the leave to the rest of the room."""
        async with self._lock:
            self.registry.discard(connection)
            try:
                attachment = self._recover_attachment(connection)
            except SessionAttachmentError:
                # Closed before joining completed
                logger.warning("room_leave_without_attachment", room=self.room_id, code=code)
                return

            await self._announce(f"{attachment.identity} left the room.")
        logger.info("room_left", room=self.room_id, identity=attachment.identity, code=code, reason=reason)

    async def broadcast(self, payload: OutboundPayload) -> None:
        """Send a payload to every live connection.

        The payload is serialized once. A failed send is logged and dropped;
        the dead connection is removed when its own close arrives. Callers
        must hold the room lock.
        """
        message = payload.model_dump_json()
        await asyncio.gather(*(self._send(connection, message) for connection in self.registry.live()))

    async def _announce(self, text: str) -> None:
        event = await self._store.append(self.room_id, ChatEventKind.SYSTEM, SYSTEM_AUTHOR, text, self._clock())
        await self.broadcast(SystemPayload(id=event.id, text=event.text))

    async def _send(self, connection: Connection, message: str) -> None:
        try:
            await connection.send(message)
        except Exception as e:
            logger.warning("room_send_failed", room=self.room_id, error=str(e))

    @staticmethod
    def _recover_attachment(connection: Connection) -> SessionAttachment:
        blob = connection.deserialize_attachment()
        try:
            return SessionAttachment.from_blob(blob)
        except pydantic.ValidationError as e:
            raise SessionAttachmentError("Connection attachment is corrupt") from e
