from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from duochat.config import Config
from duochat.core.core import Core
from duochat.core.modules.message.models import ChatEvent
from duochat.core.modules.room.connection import Connection
from duochat.core.modules.room.service import MAIN_ROOM
from duochat.core.modules.session.models import AuthToken


class App:
    """Facade for all application operations, authenticates before delegating to Core."""

    def __init__(self, config: Config) -> None:
        self._core = Core(config)

    @asynccontextmanager
    async def lifespan(self) -> AsyncGenerator[None]:
        """Application lifespan management - delegates to Core."""
        async with self._core.lifespan():
            yield

    def login(self, code: str) -> tuple[str, AuthToken]:
        """Exchange a TOTP code for the matching identity and a session token."""
        identity = self._core.services.otp.identify(code)
        return identity, self._core.services.session.issue_token(identity)

    def get_identity(self, auth_token: str | None) -> str:
        """Resolve a session token to its identity. Raises AuthenticationError if invalid."""
        return self._core.services.session.verify_token(auth_token)

    # === Chat room ===
    async def join_room(self, identity: str, connection: Connection) -> None:
        """Admit an accepted connection, already authenticated as ``identity``, to the room."""
        await self._core.services.room.get_room(MAIN_ROOM).on_connect(identity, connection)

    async def post_message(self, connection: Connection, payload: str | bytes) -> ChatEvent | None:
        """Handle an inbound frame from a joined connection."""
        return await self._core.services.room.get_room(MAIN_ROOM).on_message(connection, payload)

    async def leave_room(self, connection: Connection, code: int, reason: str) -> None:
        """Handle a connection closing."""
        await self._core.services.room.get_room(MAIN_ROOM).on_disconnect(connection, code, reason)
