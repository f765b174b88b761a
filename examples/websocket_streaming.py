"""WebSocket streaming examples for apicore."""

import asyncio
import json
from datetime import timedelta

from apicore.errors import WebSocketError
from apicore.utils import utc_now
from apicore.websocket import WEBSOCKET_TEXT_MESSAGE
from apicore.websocket import DialerConfig
from apicore.websocket import default_dialer_config
from apicore.websocket import dial_websocket
from apicore.websocket import listen_for_websocket_text_messages


async def basic_streaming():
    """Subscribe to a channel and print messages until the server closes."""

    conn = await dial_websocket(default_dialer_config("wss://stream.example.com/ws"))

    async with conn:
        subscribe = {"type": "subscribe", "channel": "ticker", "product_ids": ["BTC-USD"]}
        await conn.write_message(WEBSOCKET_TEXT_MESSAGE, json.dumps(subscribe).encode("utf-8"))

        def on_message(message: bytes) -> None:
            print(json.loads(message))

        await listen_for_websocket_text_messages(conn, on_message)
        print("Server closed the stream")


async def stream_with_timeout():
    """Stop listening when no message arrives in time."""

    config = DialerConfig(
        url="stream.example.com/ws",
        request_header={"X-Access-Key": "your_access_key"},
        handshake_timeout=3.0,
        read_limit=1 << 20,
        enable_compression=True,
    )

    async with await dial_websocket(config) as conn:
        conn.set_close_handler(lambda code, reason: print(f"Closed: {code} {reason}"))

        try:
            while True:
                conn.set_read_deadline(utc_now() + timedelta(seconds=30))
                message_type, message = await conn.read_message()
                if message_type != WEBSOCKET_TEXT_MESSAGE:
                    break
                print(message.decode("utf-8"))
        except WebSocketError as e:
            print(f"Stream stopped: {e}")


if __name__ == "__main__":
    asyncio.run(basic_streaming())

    # asyncio.run(stream_with_timeout())
