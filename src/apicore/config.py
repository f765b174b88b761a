"""
Configuration for the apicore HTTP transport.

The defaults mirror what the SDKs built on this core expect from the shared
transport: short connect/header timeouts, a small keep-alive pool and HTTP/2
where the server supports it.
"""

from dataclasses import dataclass, fields
from typing import Any, Dict, Optional

from .errors import ConfigurationError


DEFAULT_TIMEOUT = 5.0  # seconds
DEFAULT_USER_AGENT = 'apicore-python/1.0.0'


@dataclass
class HTTPConfig:
    """HTTP transport configuration."""
    base_url: Optional[str] = None

    # Timeouts (seconds)
    connect_timeout: float = DEFAULT_TIMEOUT
    read_timeout: float = DEFAULT_TIMEOUT
    write_timeout: float = DEFAULT_TIMEOUT
    pool_timeout: float = DEFAULT_TIMEOUT

    # Connection reuse
    max_connections: int = 10
    max_keepalive_connections: int = 5
    keepalive_expiry: float = 90.0

    http2: bool = True
    user_agent: str = DEFAULT_USER_AGENT

    def validate(self) -> None:
        """Validate the configuration."""
        if not self.base_url:
            raise ConfigurationError("base_url is required")

        if not self.base_url.startswith(('http://', 'https://')):
            raise ConfigurationError("base_url must start with http:// or https://")

        for name in ('connect_timeout', 'read_timeout', 'write_timeout', 'pool_timeout'):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"{name} must be positive")

        if self.max_connections < 1:
            raise ConfigurationError("max_connections must be at least 1")

        if self.max_keepalive_connections > self.max_connections:
            raise ConfigurationError(
                "max_keepalive_connections cannot exceed max_connections"
            )

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'HTTPConfig':
        """Create configuration from dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in known})
