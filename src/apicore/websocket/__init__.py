"""WebSocket components for apicore."""

from .connection import WEBSOCKET_BINARY_MESSAGE
from .connection import WEBSOCKET_CLOSE_MESSAGE
from .connection import WEBSOCKET_TEXT_MESSAGE
from .connection import WebSocketConnection
from .dialer import DialerConfig
from .dialer import default_dialer_config
from .dialer import dial_websocket
from .listener import listen_for_websocket_messages
from .listener import listen_for_websocket_text_messages

__all__ = [
    "WEBSOCKET_BINARY_MESSAGE",
    "WEBSOCKET_CLOSE_MESSAGE",
    "WEBSOCKET_TEXT_MESSAGE",
    "DialerConfig",
    "WebSocketConnection",
    "default_dialer_config",
    "dial_websocket",
    "listen_for_websocket_messages",
    "listen_for_websocket_text_messages",
]
