"""apicore - shared HTTP and WebSocket core for REST API SDKs."""

__version__ = "1.0.0"

from .client import Client, default_http_client
from .config import HTTPConfig
from .errors import (
    ApiError,
    ConfigurationError,
    CoreError,
    DataError,
    DeserializationError,
    SerializationError,
    TransportError,
    UnexpectedStatusError,
    URLError,
    WebSocketError,
)
from .http import (
    ApiRequest,
    ApiResponse,
    HeaderFunc,
    call,
    delete,
    get,
    http_delete,
    http_get,
    http_patch,
    http_post,
    http_put,
    patch,
    post,
    put,
)
from .models import Credentials, HTTPMethod
from .utils import EMPTY_QUERY_PARAMS, append_http_query_param

__all__ = [
    "ApiError",
    "ApiRequest",
    "ApiResponse",
    "Client",
    "ConfigurationError",
    "CoreError",
    "Credentials",
    "DataError",
    "DeserializationError",
    "EMPTY_QUERY_PARAMS",
    "HTTPConfig",
    "HTTPMethod",
    "HeaderFunc",
    "SerializationError",
    "TransportError",
    "URLError",
    "UnexpectedStatusError",
    "WebSocketError",
    "append_http_query_param",
    "call",
    "default_http_client",
    "delete",
    "get",
    "http_delete",
    "http_get",
    "http_patch",
    "http_post",
    "http_put",
    "patch",
    "post",
    "put",
    "__version__",
]
