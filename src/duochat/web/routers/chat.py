"""Chat room WebSocket endpoint."""

import structlog
from fastapi import APIRouter, WebSocket, WebSocketDisconnect, status

from duochat.errors import AuthenticationError, SessionAttachmentError
from duochat.web.deps import AUTH_COOKIE, AppDep
from duochat.web.ws import WebSocketConnection

logger = structlog.get_logger(__name__)

router = APIRouter(tags=["chat"])

SESSION_STATE_LOST = "Session state lost"
INTERNAL_ERROR = "Internal error"


@router.websocket("/ws")
async def chat_socket(websocket: WebSocket, app: AppDep) -> None:
    """Join the room and relay frames until the client goes away.

    The session cookie is checked before the handshake is accepted; a rejected
    handshake is closed with 1008 and never reaches the room. Once accepted,
    the connection always leaves the room when the handler ends, whatever
    ended it.
    """
    try:
        identity = app.get_identity(websocket.cookies.get(AUTH_COOKIE))
    except AuthenticationError:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    await websocket.accept()
    connection = WebSocketConnection(websocket)
    close_code, close_reason = status.WS_1000_NORMAL_CLOSURE, ""
    try:
        await app.join_room(identity, connection)
        while True:
            message = await websocket.receive()
            if message["type"] == "websocket.disconnect":
                close_code = message.get("code", status.WS_1000_NORMAL_CLOSURE)
                close_reason = message.get("reason") or ""
                return

            payload = message.get("text")
            if payload is None:
                payload = message.get("bytes") or b""
            await app.post_message(connection, payload)
    except WebSocketDisconnect as e:
        # Client went away while a frame was being sent to it
        close_code, close_reason = e.code, e.reason or ""
    except SessionAttachmentError:
        logger.exception("chat_connection_unusable", identity=identity)
        close_code, close_reason = status.WS_1011_INTERNAL_ERROR, SESSION_STATE_LOST
        await connection.close(close_code, close_reason)
    except Exception:
        logger.exception("chat_socket_failed", identity=identity)
        close_code, close_reason = status.WS_1011_INTERNAL_ERROR, INTERNAL_ERROR
        await connection.close(close_code, close_reason)
    finally:
        await app.leave_room(connection, close_code, close_reason)
