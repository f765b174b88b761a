"""Exception classes for the apicore SDK core."""

from __future__ import annotations

from typing import Any
from typing import Dict
from typing import List
from typing import Optional
from typing import Sequence


class CoreError(Exception):
    """Base exception for all apicore errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize core error.

        Args:
            message: Error message
            error_code: Optional error code
            details: Optional error details
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        """String representation of the error."""
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message

    def __repr__(self) -> str:
        """Detailed representation of the error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r})"
        )


class ApiError(CoreError):
    """Structured error returned for any failed HTTP call.

    ``code_received`` is 0 when the call failed before a response was
    received. ``code_expected`` and ``parsed_url`` always come from the call
    itself, never from the response body.
    """

    def __init__(
        self,
        message: str,
        code_expected: Optional[Sequence[int]] = None,
        code_received: int = 0,
        parsed_url: str = "",
        error_code: Optional[str] = "API_ERROR",
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize API error.

        Args:
            message: Error message
            code_expected: Status codes that would have been accepted
            code_received: Status code received, 0 if none
            parsed_url: Fully resolved URL that was called
            error_code: Optional error code
            details: Optional error details
        """
        super().__init__(message, error_code, details)
        self.code_expected: List[int] = list(code_expected or [])
        self.code_received = code_received
        self.parsed_url = parsed_url

    def __str__(self) -> str:
        """String representation of the API error."""
        return (
            f"Unexpected response: {self.message}, "
            f"Expected Status Codes: {self.code_expected}, "
            f"Received Status Code: {self.code_received}, "
            f"URL: {self.parsed_url}"
        )

    def __repr__(self) -> str:
        """Detailed representation of the API error."""
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"code_expected={self.code_expected!r}, "
            f"code_received={self.code_received!r}, "
            f"parsed_url={self.parsed_url!r})"
        )


class URLError(ApiError):
    """Base URL, path and query did not form a valid URL."""

    def __init__(self, message: str, parsed_url: str = "") -> None:
        super().__init__(message, parsed_url=parsed_url, error_code="INVALID_URL")


class TransportError(ApiError):
    """Connection, TLS, DNS, timeout or body read failure."""

    def __init__(self, message: str, parsed_url: str = "") -> None:
        super().__init__(message, parsed_url=parsed_url, error_code="TRANSPORT_ERROR")


class UnexpectedStatusError(ApiError):
    """Response received with a status code outside the expected set."""

    def __init__(
        self,
        message: str,
        code_expected: Sequence[int],
        code_received: int,
        parsed_url: str,
    ) -> None:
        super().__init__(
            message,
            code_expected=code_expected,
            code_received=code_received,
            parsed_url=parsed_url,
            error_code="UNEXPECTED_STATUS",
        )


class SerializationError(CoreError):
    """Request value could not be encoded."""

    def __init__(
        self,
        message: str,
        value: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize serialization error.

        Args:
            message: Error message
            value: Value that failed to serialize
            details: Optional error details
        """
        super().__init__(message, "SERIALIZATION_ERROR", details)
        self.value = value


class DeserializationError(CoreError):
    """Response body on an accepted status could not be decoded."""

    def __init__(
        self,
        message: str,
        body: Optional[bytes] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize deserialization error.

        Args:
            message: Error message
            body: Raw response body
            details: Optional error details
        """
        super().__init__(message, "DESERIALIZATION_ERROR", details)
        self.body = body


class ConfigurationError(CoreError):
    """Configuration error."""

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize configuration error.

        Args:
            message: Error message
            details: Optional error details
        """
        super().__init__(message, "CONFIGURATION_ERROR", details)


class WebSocketError(CoreError):
    """WebSocket connection or communication error."""

    def __init__(
        self,
        message: str,
        code: Optional[int] = None,
        reason: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize WebSocket error.

        Args:
            message: Error message
            code: WebSocket close code
            reason: Close reason
            details: Optional error details
        """
        super().__init__(message, "WEBSOCKET_ERROR", details)
        self.code = code
        self.reason = reason

    def __str__(self) -> str:
        """String representation of the WebSocket error."""
        base = super().__str__()
        if self.code and self.reason:
            return f"{base} (code: {self.code}, reason: {self.reason})"
        elif self.code:
            return f"{base} (code: {self.code})"
        return base


class DataError(CoreError):
    """Data parsing or validation error."""

    def __init__(
        self,
        message: str,
        data: Optional[Any] = None,
        details: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Initialize data error.

        Args:
            message: Error message
            data: Invalid data that caused the error
            details: Optional error details
        """
        super().__init__(message, "DATA_ERROR", details)
        self.data = data
