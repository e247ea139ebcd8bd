from abc import ABC, abstractmethod

from duochat.errors import SessionAttachmentError


class Connection(ABC):
    """A live bidirectional text connection to one client.

    The handle carries an opaque attachment blob. It is the only place
    per-connection state is kept between events.
    """

    def __init__(self) -> None:
        self._attachment: bytes | None = None

    @abstractmethod
    async def send(self, payload: str) -> None:
        """Send one text frame."""

    @abstractmethod
    async def close(self, code: int = 1000, reason: str = "") -> None:
        """Close the connection."""

    def serialize_attachment(self, blob: bytes) -> None:
        """Bind state to this connection. A connection accepts exactly one attachment."""
        if self._attachment is not None:
            raise SessionAttachmentError("Connection already has an attachment")
        self._attachment = blob

    def deserialize_attachment(self) -> bytes:
        """Return the blob given to ``serialize_attachment``."""
        if self._attachment is None:
            raise SessionAttachmentError("Connection has no attachment")
        return self._attachment
