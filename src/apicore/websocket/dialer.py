"""WebSocket dialing."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from dataclasses import field
from ssl import SSLContext
from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Union
from urllib.parse import urlsplit

import websockets
from websockets.exceptions import WebSocketException

from apicore.errors import WebSocketError
from apicore.websocket.connection import WebSocketConnection

logger = logging.getLogger(__name__)

# Used when the dialer config leaves the handshake timeout unset.
DEFAULT_HANDSHAKE_TIMEOUT = 10.0  # seconds


@dataclass
class DialerConfig:
    """WebSocket dial configuration.

    Everything except ``url`` is passed through to ``websockets.connect``.
    Limits left as None keep the library defaults.
    """
    # Full ws:// or wss:// URL; a bare host is dialed as wss://<host>
    url: str

    # Extra headers sent with the opening handshake
    request_header: Dict[str, str] = field(default_factory=dict)

    # Proxy URL; True reads proxy settings from the environment, None disables
    proxy: Union[str, bool, None] = True

    # TLS context for wss:// URLs, default context if None
    tls_context: Optional[SSLContext] = None

    # Seconds allowed for the opening handshake; <= 0 uses the default
    handshake_timeout: float = 0.0

    # Maximum incoming message size in bytes
    read_limit: Optional[int] = None

    # High-water mark of the write buffer in bytes
    write_limit: Optional[int] = None

    # Maximum number of incoming messages buffered by the library
    max_queue: Optional[int] = None

    subprotocols: List[str] = field(default_factory=list)

    # Negotiate permessage-deflate (RFC 7692)
    enable_compression: bool = False

    user_agent: Optional[str] = None

    # Any other ``websockets.connect`` option, e.g. a pre-connected ``sock``
    extra_options: Dict[str, Any] = field(default_factory=dict)

    def resolved_url(self) -> str:
        """URL to dial, with ``wss://`` added to a bare host."""
        if "://" not in self.url:
            return f"wss://{self.url}"
        return self.url

    def connect_options(self) -> Dict[str, Any]:
        """Keyword arguments for ``websockets.connect``."""
        options: Dict[str, Any] = {
            "additional_headers": dict(self.request_header),
            "proxy": self.proxy,
            "open_timeout": (
                self.handshake_timeout if self.handshake_timeout > 0 else DEFAULT_HANDSHAKE_TIMEOUT
            ),
            "compression": "deflate" if self.enable_compression else None,
        }
        if self.tls_context is not None:
            options["ssl"] = self.tls_context
        if self.read_limit is not None:
            options["max_size"] = self.read_limit
        if self.write_limit is not None:
            options["write_limit"] = self.write_limit
        if self.max_queue is not None:
            options["max_queue"] = self.max_queue
        if self.subprotocols:
            options["subprotocols"] = list(self.subprotocols)
        if self.user_agent is not None:
            options["user_agent_header"] = self.user_agent
        options.update(self.extra_options)
        return options


def default_dialer_config(url: str) -> DialerConfig:
    """Dialer config with a 5 second handshake and proxies from the environment."""
    return DialerConfig(url=url, handshake_timeout=5.0, proxy=True)


async def dial_websocket(config: DialerConfig) -> WebSocketConnection:
    """Open a WebSocket connection.

    Args:
        config: Dial configuration

    Returns:
        Open connection

    Raises:
        WebSocketError: Invalid URL or the dial failed
    """
    url = config.resolved_url()
    parts = urlsplit(url)
    if parts.scheme not in ("ws", "wss") or not parts.hostname:
        raise WebSocketError(f"Invalid WebSocket URL: {url}")

    logger.debug(f"Dialing WebSocket: {url}")
    try:
        conn = await websockets.connect(url, **config.connect_options())
    except (WebSocketException, OSError, asyncio.TimeoutError, ValueError) as e:
        raise WebSocketError(f"Connection failed: {e}") from e

    return WebSocketConnection(conn)
