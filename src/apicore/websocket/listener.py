"""Blocking listen loops over a WebSocket connection."""

from __future__ import annotations

import inspect
import logging
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Container
from typing import Optional

from apicore.websocket.connection import WEBSOCKET_BINARY_MESSAGE
from apicore.websocket.connection import WEBSOCKET_CLOSE_MESSAGE
from apicore.websocket.connection import WEBSOCKET_TEXT_MESSAGE

logger = logging.getLogger(__name__)

MessageHandler = Callable[[bytes], Optional[Awaitable[None]]]

DATA_MESSAGE_TYPES = (WEBSOCKET_TEXT_MESSAGE, WEBSOCKET_BINARY_MESSAGE)


async def listen_for_websocket_messages(
    conn: Any,
    message_handler: MessageHandler,
    message_types: Container[int] = DATA_MESSAGE_TYPES,
) -> None:
    """Read messages until the connection closes.

    Each message of a selected type is passed to ``message_handler`` (and
    awaited, if the handler is async) before the next read. Other message
    types are skipped.

    Args:
        conn: Connection exposing ``read_message()``
        message_handler: Called with each message payload
        message_types: Message types dispatched to the handler

    Returns:
        None once a close frame is received

    Raises:
        WebSocketError: A read failed
    """
    while True:
        message_type, message = await conn.read_message()

        if message_type == WEBSOCKET_CLOSE_MESSAGE:
            return

        if message_type in message_types:
            result = message_handler(message)
            if inspect.isawaitable(result):
                await result
        else:
            logger.debug(f"Skipping WebSocket message of type {message_type}")


async def listen_for_websocket_text_messages(
    conn: Any,
    message_handler: MessageHandler,
) -> None:
    """Read messages until the connection closes, dispatching text only."""
    await listen_for_websocket_messages(
        conn, message_handler, message_types=(WEBSOCKET_TEXT_MESSAGE,)
    )
