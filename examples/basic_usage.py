"""Basic usage examples for apicore."""

import asyncio
import hmac
from base64 import b64decode
from base64 import b64encode
from datetime import datetime
from hashlib import sha256
from typing import List
from typing import Optional

import httpx
from pydantic import BaseModel

from apicore import ApiError
from apicore import Client
from apicore import Credentials
from apicore import EMPTY_QUERY_PARAMS
from apicore import HTTPConfig
from apicore import append_http_query_param
from apicore import get
from apicore import http_post
from apicore import post
from apicore.env_config import load_config_from_env
from apicore.env_config import load_credentials_from_env


class Product(BaseModel):
    product_id: str
    base_increment: str
    quote_increment: str


class CreateOrderRequest(BaseModel):
    product_id: str
    side: str
    quantity: str
    limit_price: Optional[str] = None


class CreateOrderResponse(BaseModel):
    order_id: str
    status: str


def add_signed_headers(
    request: httpx.Request,
    path: str,
    body: bytes,
    client: Client,
    timestamp: datetime,
) -> None:
    """Sign a request with the client's credentials."""
    credentials = client.credentials
    ts = str(int(timestamp.timestamp()))

    # Signature covers timestamp, method, path and body
    message = f"{ts}{request.method}{path}".encode("utf-8") + body
    signature = hmac.new(b64decode(credentials.signing_key), message, sha256).digest()

    request.headers["X-CB-ACCESS-KEY"] = credentials.access_key
    request.headers["X-CB-ACCESS-PASSPHRASE"] = credentials.passphrase
    request.headers["X-CB-ACCESS-TIMESTAMP"] = ts
    request.headers["X-CB-ACCESS-SIGNATURE"] = b64encode(signature).decode("utf-8")
    request.headers["Content-Type"] = "application/json"


async def basic_client_usage():
    """Make signed calls with the convenience entry points."""

    credentials = Credentials(
        access_key="your_access_key",
        passphrase="your_passphrase",
        signing_key=b64encode(b"your_signing_key").decode("utf-8"),
    )
    config = HTTPConfig(base_url="https://api.example.com")

    async with Client.from_config(config, credentials) as client:
        query = append_http_query_param(EMPTY_QUERY_PARAMS, "limit", "10")
        products = await get(
            client, "/v1/products", query,
            response_type=List[Product], headers_func=add_signed_headers,
        )
        for product in products:
            print(f"{product.product_id}: {product.quote_increment}")

        order = await post(
            client, "/v1/orders",
            request=CreateOrderRequest(product_id="BTC-USD", side="BUY", quantity="0.01"),
            response_type=CreateOrderResponse,
            headers_func=add_signed_headers,
        )
        print(f"Created order {order.order_id} ({order.status})")


async def explicit_status_codes():
    """Accept a status other than 200."""

    config = load_config_from_env()
    credentials = load_credentials_from_env()

    async with Client.from_config(config, credentials) as client:
        order = await http_post(
            client, "/v1/orders", EMPTY_QUERY_PARAMS, [200, 201],
            CreateOrderRequest(product_id="ETH-USD", side="SELL", quantity="1", limit_price="4000"),
            CreateOrderResponse,
            headers_func=add_signed_headers,
            timeout=10.0,
        )
        print(f"Order {order.order_id}: {order.status}")


async def error_handling_example():
    """Inspect a failed call."""

    config = HTTPConfig(base_url="https://api.example.com")
    credentials = Credentials(access_key="invalid", signing_key=b64encode(b"invalid").decode("utf-8"))

    async with Client.from_config(config, credentials) as client:
        try:
            await get(client, "/v1/accounts", headers_func=add_signed_headers)
        except ApiError as e:
            print(f"Call failed: {e.message}")
            print(f"Expected {e.code_expected}, received {e.code_received} from {e.parsed_url}")


if __name__ == "__main__":
    print("=== Basic Client Usage ===")
    asyncio.run(basic_client_usage())

    # print("\n=== Explicit Status Codes ===")
    # asyncio.run(explicit_status_codes())

    # print("\n=== Error Handling ===")
    # asyncio.run(error_handling_example())
