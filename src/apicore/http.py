"""Async HTTP call pipeline with status classification.

A call goes through three steps: :func:`build_request` serializes the
caller's request value, :func:`make_call` sends it after the caller's header
function has signed it, and :func:`classify_response` checks the status
against the expected set. Nothing is retried.
"""

from __future__ import annotations

import inspect
import json
import logging
from dataclasses import dataclass
from dataclasses import field
from datetime import datetime
from typing import Any
from typing import Awaitable
from typing import Callable
from typing import Iterable
from typing import Optional
from typing import Tuple
from typing import Union

import httpx
from pydantic import BaseModel
from pydantic import TypeAdapter
from pydantic import ValidationError

from apicore.client import Client
from apicore.errors import ApiError
from apicore.errors import ConfigurationError
from apicore.errors import DeserializationError
from apicore.errors import SerializationError
from apicore.errors import TransportError
from apicore.errors import UnexpectedStatusError
from apicore.errors import URLError
from apicore.models import BODY_CARRYING_METHODS
from apicore.models import ErrorBody
from apicore.models import HTTPMethod
from apicore.utils import EMPTY_QUERY_PARAMS
from apicore.utils import utc_now

logger = logging.getLogger(__name__)

HeaderFunc = Callable[
    [httpx.Request, str, bytes, Client, datetime],
    Optional[Awaitable[None]],
]

_json_adapter: TypeAdapter[Any] = TypeAdapter(Any)


@dataclass(frozen=True)
class ApiRequest:
    """One outgoing call, created per call and discarded afterwards."""

    path: str
    query: str
    http_method: str
    body: bytes
    expected_http_status_codes: Tuple[int, ...]
    client: Client = field(repr=False)


@dataclass
class ApiResponse:
    """Result of one call.

    When ``error`` is set the body must not be decoded into the caller's
    response type.
    """

    request: ApiRequest
    body: bytes = b""
    http_status_code: int = 0
    http_status_msg: str = ""
    error: Optional[ApiError] = None

    @property
    def ok(self) -> bool:
        """Whether the call completed with an expected status."""
        return self.error is None


def serialize_request(value: Any) -> bytes:
    """Encode a request value as JSON.

    Args:
        value: Pydantic model, or any JSON-compatible value

    Returns:
        JSON bytes

    Raises:
        SerializationError: Value cannot be encoded
    """
    try:
        if isinstance(value, BaseModel):
            return value.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")
        return _json_adapter.dump_json(value, by_alias=True)
    except (ValueError, TypeError) as e:
        raise SerializationError(f"Failed to serialize request: {e}", value=value) from e


def build_request(
    client: Client,
    path: str,
    query: str,
    http_method: Union[HTTPMethod, str],
    expected_http_status_codes: Iterable[int],
    request: Any,
) -> ApiRequest:
    """Assemble the descriptor for one call.

    Args:
        client: Client the call is made with
        path: Path appended to the client's base URL
        query: Query string, empty or starting with ``?``
        http_method: HTTP method
        expected_http_status_codes: Status codes treated as success
        request: Request value, serialized to the JSON body

    Returns:
        Request descriptor

    Raises:
        SerializationError: Request value cannot be encoded
    """
    method = http_method.value if isinstance(http_method, HTTPMethod) else str(http_method)
    return ApiRequest(
        path=path,
        query=query,
        http_method=method.upper(),
        body=serialize_request(request),
        expected_http_status_codes=tuple(expected_http_status_codes),
        client=client,
    )


def request_body(request: ApiRequest) -> bytes:
    """Body sent on the wire: POST, PUT and PATCH carry one, others are empty."""
    if request.http_method in BODY_CARRYING_METHODS:
        return request.body
    return b""


async def make_call(
    request: ApiRequest,
    headers_func: HeaderFunc,
    *,
    timeout: Optional[float] = None,
) -> ApiResponse:
    """Send a request and classify the response.

    URL, transport, body read and status failures are reported through
    ``ApiResponse.error``. Exceptions raised by ``headers_func`` propagate
    unchanged, as does task cancellation.

    Args:
        request: Request descriptor
        headers_func: Called once with the built request to add headers
        timeout: Deadline for this call in seconds, client default if None

    Returns:
        Response envelope
    """
    response = ApiResponse(request=request)
    client = request.client

    call_url = f"{client.http_base_url}{request.path}{request.query}"

    try:
        parsed_url = httpx.URL(call_url)
    except (httpx.InvalidURL, ValueError, TypeError) as e:
        response.error = URLError(f"invalid URL: {call_url} - {e}", parsed_url=call_url)
        return response

    if parsed_url.scheme not in ("http", "https") or not parsed_url.host:
        response.error = URLError(
            f"invalid URL: {call_url} - missing http(s) scheme or host",
            parsed_url=call_url,
        )
        return response

    body = request_body(request)

    build_kwargs: dict = {}
    if timeout is not None:
        build_kwargs["timeout"] = timeout

    try:
        http_request = client.http_client.build_request(
            request.http_method,
            parsed_url,
            content=body,
            **build_kwargs,
        )
    except (httpx.InvalidURL, httpx.HTTPError, ValueError, TypeError) as e:
        response.error = ApiError(str(e), parsed_url=call_url)
        return response

    result = headers_func(http_request, parsed_url.path, body, client, utc_now())
    if inspect.isawaitable(result):
        await result

    try:
        http_response = await client.http_client.send(http_request, stream=True)
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        logger.debug(f"{request.http_method} {call_url} failed: {e}")
        response.error = TransportError(str(e) or e.__class__.__name__, parsed_url=call_url)
        return response

    try:
        response_body = await http_response.aread()
    except httpx.HTTPError as e:
        logger.debug(f"{request.http_method} {call_url} body read failed: {e}")
        response.error = TransportError(str(e) or e.__class__.__name__, parsed_url=call_url)
        return response
    finally:
        await http_response.aclose()

    response.body = response_body
    response.http_status_code = http_response.status_code
    response.http_status_msg = f"{http_response.status_code} {http_response.reason_phrase}".strip()

    logger.debug(f"{request.http_method} {call_url} -> {response.http_status_msg}")

    response.error = classify_response(response, call_url)
    return response


def classify_response(response: ApiResponse, call_url: str) -> Optional[UnexpectedStatusError]:
    """Check a received status against the expected set.

    On mismatch the body is parsed as ``{"message": ...}``; when that fails
    the raw body text becomes the message. Expected codes, received code and
    URL are always taken from the call.

    Args:
        response: Envelope with body and status populated
        call_url: Resolved URL that was called

    Returns:
        None on success, otherwise the error
    """
    expected = response.request.expected_http_status_codes
    if response.http_status_code in expected:
        return None

    try:
        message = ErrorBody.model_validate_json(response.body).message
    except ValueError:
        message = response.body.decode("utf-8", errors="replace")

    return UnexpectedStatusError(
        message,
        code_expected=expected,
        code_received=response.http_status_code,
        parsed_url=call_url,
    )


def deserialize_response(body: bytes, response_type: Optional[Any] = None) -> Any:
    """Decode a successful response body.

    Args:
        body: Raw response body
        response_type: Pydantic model or type to validate into; None returns
            the parsed JSON (None for an empty body)

    Returns:
        Decoded response value

    Raises:
        DeserializationError: Body does not match the expected shape
    """
    try:
        if response_type is None:
            return json.loads(body) if body else None
        if isinstance(response_type, type) and issubclass(response_type, BaseModel):
            return response_type.model_validate_json(body)
        return TypeAdapter(response_type).validate_json(body)
    except (ValidationError, ValueError) as e:
        raise DeserializationError(f"Failed to decode response: {e}", body=body) from e


async def call(
    client: Client,
    path: str,
    query: str,
    http_method: Union[HTTPMethod, str],
    expected_http_status_codes: Iterable[int],
    request: Any,
    response_type: Optional[Any],
    headers_func: HeaderFunc,
    *,
    timeout: Optional[float] = None,
    require_credentials: bool = False,
) -> Any:
    """Make an API call and decode its response.

    Args:
        client: Client the call is made with
        path: Path appended to the client's base URL
        query: Query string, empty or starting with ``?``
        http_method: HTTP method
        expected_http_status_codes: Status codes treated as success
        request: Request value, serialized to the JSON body
        response_type: Type the response body is decoded into
        headers_func: Called once with the built request to add headers
        timeout: Deadline for this call in seconds
        require_credentials: Fail if the client has no credentials

    Returns:
        Decoded response value

    Raises:
        ConfigurationError: Credentials required but not set
        SerializationError: Request value cannot be encoded
        ApiError: Call failed or returned an unexpected status
        DeserializationError: Response body cannot be decoded
    """
    if require_credentials and client.credentials is None:
        raise ConfigurationError("credentials not set")

    api_request = build_request(
        client, path, query, http_method, expected_http_status_codes, request
    )

    response = await make_call(api_request, headers_func, timeout=timeout)
    if response.error is not None:
        raise response.error

    return deserialize_response(response.body, response_type)


# Explicit status variants

async def http_get(
    client: Client,
    path: str,
    query: str,
    expected_http_status_codes: Iterable[int],
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make GET request accepting the given status codes."""
    return await call(
        client, path, query, HTTPMethod.GET, expected_http_status_codes,
        request, response_type, headers_func, timeout=timeout,
    )


async def http_post(
    client: Client,
    path: str,
    query: str,
    expected_http_status_codes: Iterable[int],
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make POST request accepting the given status codes."""
    return await call(
        client, path, query, HTTPMethod.POST, expected_http_status_codes,
        request, response_type, headers_func, timeout=timeout,
    )


async def http_put(
    client: Client,
    path: str,
    query: str,
    expected_http_status_codes: Iterable[int],
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make PUT request accepting the given status codes."""
    return await call(
        client, path, query, HTTPMethod.PUT, expected_http_status_codes,
        request, response_type, headers_func, timeout=timeout,
    )


async def http_patch(
    client: Client,
    path: str,
    query: str,
    expected_http_status_codes: Iterable[int],
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make PATCH request accepting the given status codes."""
    return await call(
        client, path, query, HTTPMethod.PATCH, expected_http_status_codes,
        request, response_type, headers_func, timeout=timeout,
    )


async def http_delete(
    client: Client,
    path: str,
    query: str,
    expected_http_status_codes: Iterable[int],
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make DELETE request accepting the given status codes."""
    return await call(
        client, path, query, HTTPMethod.DELETE, expected_http_status_codes,
        request, response_type, headers_func, timeout=timeout,
    )


# Convenience variants: 200 only, credentials required

OK_STATUS_CODES = (200,)


async def get(
    client: Client,
    path: str,
    query: str = EMPTY_QUERY_PARAMS,
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make GET request expecting 200."""
    return await call(
        client, path, query, HTTPMethod.GET, OK_STATUS_CODES, request,
        response_type, headers_func, timeout=timeout, require_credentials=True,
    )


async def post(
    client: Client,
    path: str,
    query: str = EMPTY_QUERY_PARAMS,
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make POST request expecting 200."""
    return await call(
        client, path, query, HTTPMethod.POST, OK_STATUS_CODES, request,
        response_type, headers_func, timeout=timeout, require_credentials=True,
    )


async def put(
    client: Client,
    path: str,
    query: str = EMPTY_QUERY_PARAMS,
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make PUT request expecting 200."""
    return await call(
        client, path, query, HTTPMethod.PUT, OK_STATUS_CODES, request,
        response_type, headers_func, timeout=timeout, require_credentials=True,
    )


async def patch(
    client: Client,
    path: str,
    query: str = EMPTY_QUERY_PARAMS,
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make PATCH request expecting 200."""
    return await call(
        client, path, query, HTTPMethod.PATCH, OK_STATUS_CODES, request,
        response_type, headers_func, timeout=timeout, require_credentials=True,
    )


async def delete(
    client: Client,
    path: str,
    query: str = EMPTY_QUERY_PARAMS,
    request: Any = None,
    response_type: Optional[Any] = None,
    *,
    headers_func: HeaderFunc,
    timeout: Optional[float] = None,
) -> Any:
    """Make DELETE request expecting 200."""
    return await call(
        client, path, query, HTTPMethod.DELETE, OK_STATUS_CODES, request,
        response_type, headers_func, timeout=timeout, require_credentials=True,
    )
