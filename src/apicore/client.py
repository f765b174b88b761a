"""Client configuration shared by every call."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Optional

import httpx

from apicore.config import HTTPConfig

logger = logging.getLogger(__name__)


def default_http_client(config: Optional[HTTPConfig] = None) -> httpx.AsyncClient:
    """Create the default transport for API calls.

    Connect, response and pool timeouts default to 5 seconds, idle
    connections are kept for reuse and HTTP/2 is negotiated where the server
    supports it. Proxies are taken from the environment.

    Args:
        config: HTTP configuration, defaults are used if None

    Returns:
        Configured async HTTP client
    """
    config = config or HTTPConfig()

    timeout = httpx.Timeout(
        connect=config.connect_timeout,
        read=config.read_timeout,
        write=config.write_timeout,
        pool=config.pool_timeout,
    )
    limits = httpx.Limits(
        max_connections=config.max_connections,
        max_keepalive_connections=config.max_keepalive_connections,
        keepalive_expiry=config.keepalive_expiry,
    )

    return httpx.AsyncClient(
        timeout=timeout,
        limits=limits,
        http2=config.http2,
        headers={"User-Agent": config.user_agent},
        trust_env=True,
    )


@dataclass(frozen=True)
class Client:
    """Caller-held configuration for API calls.

    A client is never mutated by a call and can be shared by any number of
    concurrent calls. ``credentials`` is opaque to the core: it is only
    checked for presence by the entry points that require it, and handed to
    the header function for signing.
    """

    http_base_url: str
    credentials: Optional[Any] = None
    http_client: httpx.AsyncClient = field(default_factory=default_http_client, repr=False)

    @classmethod
    def from_config(
        cls,
        config: HTTPConfig,
        credentials: Optional[Any] = None,
    ) -> Client:
        """Create a client from HTTP configuration.

        Args:
            config: HTTP configuration
            credentials: Credentials passed to the header function

        Returns:
            Client with a default transport built from ``config``
        """
        config.validate()
        logger.debug(f"Creating client for {config.base_url}")
        return cls(
            http_base_url=config.base_url,
            credentials=credentials,
            http_client=default_http_client(config),
        )

    async def __aenter__(self) -> Client:
        """Async context manager entry."""
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """Async context manager exit."""
        await self.aclose()

    async def aclose(self) -> None:
        """Close the underlying transport."""
        await self.http_client.aclose()
