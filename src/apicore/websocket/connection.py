"""WebSocket connection wrapper.

Every primitive delegates to the underlying ``websockets`` client
connection. Frames are reported as ``(message_type, payload)`` pairs using
the RFC 6455 opcodes.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from typing import Any
from typing import Callable
from typing import Optional
from typing import Tuple

from websockets.asyncio.client import ClientConnection
from websockets.exceptions import ConnectionClosed
from websockets.exceptions import WebSocketException

from apicore.errors import WebSocketError
from apicore.utils import utc_now

logger = logging.getLogger(__name__)

# Text data message; the payload is UTF-8 encoded text.
WEBSOCKET_TEXT_MESSAGE = 1

# Binary data message.
WEBSOCKET_BINARY_MESSAGE = 2

# Close control message.
WEBSOCKET_CLOSE_MESSAGE = 8

CloseHandler = Callable[[int, str], None]


def _default_close_handler(code: int, reason: str) -> None:
    logger.debug(f"WebSocket close frame received (code: {code}, reason: {reason!r})")


class WebSocketConnection:
    """A dialed WebSocket connection."""

    def __init__(self, conn: ClientConnection) -> None:
        """Wrap a client connection.

        Args:
            conn: Open ``websockets`` client connection
        """
        self._conn = conn
        self._read_deadline: Optional[datetime] = None
        self._close_handler: CloseHandler = _default_close_handler
        self._closed_locally = False

    async def __aenter__(self) -> WebSocketConnection:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.close()

    @property
    def remote_address(self) -> Any:
        """Remote address of the connection."""
        return self._conn.remote_address

    @property
    def local_address(self) -> Any:
        """Local address of the connection."""
        return self._conn.local_address

    @property
    def subprotocol(self) -> Optional[str]:
        """Subprotocol negotiated during the handshake."""
        return self._conn.subprotocol

    def set_read_deadline(self, deadline: Optional[datetime]) -> None:
        """Set the deadline for future reads.

        A read still pending at the deadline fails. ``None`` disables the
        deadline.

        Args:
            deadline: Timezone-aware point in time, or None
        """
        self._read_deadline = deadline

    def set_read_limit(self, limit: Optional[int]) -> None:
        """Set the maximum size in bytes of an incoming message.

        Applies to messages whose first frame has not arrived yet.

        Args:
            limit: Size limit, None for no limit
        """
        protocol = self._conn.protocol
        # websockets >= 16 splits the limit into message and fragment sizes
        if hasattr(protocol, "max_message_size"):
            protocol.max_message_size = limit
        else:
            protocol.max_size = limit

    def close_handler(self) -> CloseHandler:
        """Get the handler called when a close frame is received."""
        return self._close_handler

    def set_close_handler(self, handler: Optional[CloseHandler]) -> None:
        """Set the handler called with ``(code, reason)`` on a close frame.

        Args:
            handler: Close handler, None restores the default
        """
        self._close_handler = handler or _default_close_handler

    async def read_message(self) -> Tuple[int, bytes]:
        """Read one message.

        Returns:
            Message type and payload. A close frame sent by the peer is
            reported as ``(WEBSOCKET_CLOSE_MESSAGE, b"")``.

        Raises:
            WebSocketError: Read failed, the read deadline passed, or the
                connection was closed from this side
        """
        try:
            if self._read_deadline is None:
                message = await self._conn.recv()
            else:
                remaining = (self._read_deadline - utc_now()).total_seconds()
                message = await asyncio.wait_for(self._conn.recv(), timeout=max(remaining, 0.0))
        except ConnectionClosed as e:
            if self._closed_locally or e.rcvd_then_sent is False:
                code = e.rcvd.code if e.rcvd else None
                reason = e.rcvd.reason if e.rcvd else None
                raise WebSocketError("Connection closed", code=code, reason=reason) from e
            if e.rcvd is None:
                raise WebSocketError("Connection closed without close frame") from e
            self._close_handler(e.rcvd.code, e.rcvd.reason)
            return WEBSOCKET_CLOSE_MESSAGE, b""
        except asyncio.TimeoutError as e:
            raise WebSocketError("Read deadline exceeded") from e
        except WebSocketException as e:
            raise WebSocketError(f"Read failed: {e}") from e

        if isinstance(message, str):
            return WEBSOCKET_TEXT_MESSAGE, message.encode("utf-8")
        return WEBSOCKET_BINARY_MESSAGE, bytes(message)

    async def write_message(self, message_type: int, payload: bytes) -> None:
        """Write one message.

        Args:
            message_type: Text, binary or close message type
            payload: Message payload; UTF-8 text for text messages

        Raises:
            WebSocketError: Unsupported message type or write failed
        """
        try:
            if message_type == WEBSOCKET_TEXT_MESSAGE:
                await self._conn.send(payload.decode("utf-8"))
            elif message_type == WEBSOCKET_BINARY_MESSAGE:
                await self._conn.send(payload)
            elif message_type == WEBSOCKET_CLOSE_MESSAGE:
                await self.close()
            else:
                raise WebSocketError(f"Unsupported message type: {message_type}")
        except UnicodeDecodeError as e:
            raise WebSocketError("Text message payload is not valid UTF-8") from e
        except ConnectionClosed as e:
            code = e.rcvd.code if e.rcvd else None
            reason = e.rcvd.reason if e.rcvd else None
            raise WebSocketError("Connection closed", code=code, reason=reason) from e
        except WebSocketException as e:
            raise WebSocketError(f"Write failed: {e}") from e

    async def close(self) -> None:
        """Close the connection.

        A pending read fails with :class:`WebSocketError` and the close
        handler is not called.
        """
        self._closed_locally = True
        await self._conn.close()
