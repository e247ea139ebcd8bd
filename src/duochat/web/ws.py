from fastapi import WebSocket
from starlette.websockets import WebSocketState

from duochat.core.modules.room.connection import Connection


class WebSocketConnection(Connection):
    """Room connection backed by a Starlette WebSocket."""

    def __init__(self, websocket: WebSocket) -> None:
        super().__init__()
        self._websocket = websocket

    async def send(self, payload: str) -> None:
        await self._websocket.send_text(payload)

    async def close(self, code: int = 1000, reason: str = "") -> None:
        if self._websocket.application_state != WebSocketState.DISCONNECTED:
            await self._websocket.close(code=code, reason=reason)
