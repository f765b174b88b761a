"""
Environment variable configuration loader for apicore.

Lets SDKs built on the core pick up transport settings and credentials from
the environment (or a ``.env`` file) without code changes.
"""

import os
import logging
from typing import Optional

from dotenv import load_dotenv

from .config import HTTPConfig
from .models import Credentials

logger = logging.getLogger(__name__)

ENV_PREFIX = 'APICORE_'

_FLOAT_SETTINGS = {
    'CONNECT_TIMEOUT': 'connect_timeout',
    'READ_TIMEOUT': 'read_timeout',
    'WRITE_TIMEOUT': 'write_timeout',
    'POOL_TIMEOUT': 'pool_timeout',
    'KEEPALIVE_EXPIRY': 'keepalive_expiry',
}

_INT_SETTINGS = {
    'MAX_CONNECTIONS': 'max_connections',
    'MAX_KEEPALIVE_CONNECTIONS': 'max_keepalive_connections',
}


def load_config_from_env(dotenv: bool = True) -> HTTPConfig:
    """
    Load HTTP configuration from environment variables.

    Environment variables:
        APICORE_BASE_URL: Base API URL
        APICORE_CONNECT_TIMEOUT: Connect timeout in seconds
        APICORE_READ_TIMEOUT: Read (response header) timeout in seconds
        APICORE_WRITE_TIMEOUT: Write timeout in seconds
        APICORE_POOL_TIMEOUT: Pool acquire timeout in seconds
        APICORE_MAX_CONNECTIONS: Maximum open connections
        APICORE_MAX_KEEPALIVE_CONNECTIONS: Maximum idle connections
        APICORE_KEEPALIVE_EXPIRY: Idle connection expiry in seconds
        APICORE_HTTP2: Enable HTTP/2 (true/false)
        APICORE_USER_AGENT: User agent string

    Args:
        dotenv: Load a ``.env`` file first

    Returns:
        HTTPConfig: Configuration loaded from environment
    """
    if dotenv:
        load_dotenv()

    config = HTTPConfig()

    if base_url := os.getenv(f'{ENV_PREFIX}BASE_URL'):
        config.base_url = base_url.rstrip('/')

    for suffix, attr in _FLOAT_SETTINGS.items():
        if value := os.getenv(f'{ENV_PREFIX}{suffix}'):
            try:
                setattr(config, attr, float(value))
            except ValueError:
                logger.warning(f"Invalid {attr} value: {value}, using default: {getattr(config, attr)}")

    for suffix, attr in _INT_SETTINGS.items():
        if value := os.getenv(f'{ENV_PREFIX}{suffix}'):
            try:
                setattr(config, attr, int(value))
            except ValueError:
                logger.warning(f"Invalid {attr} value: {value}, using default: {getattr(config, attr)}")

    if (http2 := os.getenv(f'{ENV_PREFIX}HTTP2')) is not None:
        config.http2 = _parse_bool(http2)

    if user_agent := os.getenv(f'{ENV_PREFIX}USER_AGENT'):
        config.user_agent = user_agent

    return config


def load_credentials_from_env(dotenv: bool = True) -> Optional[Credentials]:
    """
    Load API credentials from environment variables.

    Environment variables:
        APICORE_ACCESS_KEY: Access key (required for credentials to load)
        APICORE_PASSPHRASE: Passphrase
        APICORE_SIGNING_KEY: Signing key
        APICORE_PORTFOLIO_ID: Default portfolio ID

    Returns:
        Credentials, or None when no access key is set
    """
    if dotenv:
        load_dotenv()

    access_key = os.getenv(f'{ENV_PREFIX}ACCESS_KEY')
    if not access_key:
        logger.debug("No access key in environment, credentials not loaded")
        return None

    return Credentials(
        access_key=access_key,
        passphrase=os.getenv(f'{ENV_PREFIX}PASSPHRASE', ''),
        signing_key=os.getenv(f'{ENV_PREFIX}SIGNING_KEY', ''),
        portfolio_id=os.getenv(f'{ENV_PREFIX}PORTFOLIO_ID') or None,
    )


def _parse_bool(value: str) -> bool:
    """Parse boolean value from string."""
    return value.lower() in ('true', '1', 'yes', 'on', 'enabled')
