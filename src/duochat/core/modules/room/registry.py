from duochat.core.modules.room.connection import Connection


class ConnectionRegistry:
    """Set of currently open connections of a room.

    Membership changes only when a connection joins or leaves. Broadcasts
    iterate over a snapshot, so a connection leaving mid-broadcast is safe.
    """

    def __init__(self) -> None:
        self._connections: set[Connection] = set()

    def add(self, connection: Connection) -> None:
        self._connections.add(connection)

    def discard(self, connection: Connection) -> None:
        self._connections.discard(connection)

    def live(self) -> list[Connection]:
        return list(self._connections)

    def __contains__(self, connection: object) -> bool:
        return connection in self._connections

    def __len__(self) -> int:
        return len(self._connections)
