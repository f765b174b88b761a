"""Pydantic models for apicore wire payloads and credentials."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class CoreBaseModel(BaseModel):
    """Base model with common configuration."""

    model_config = ConfigDict(
        # Use enum values instead of enum objects
        use_enum_values=True,
        # Validate field assignment
        validate_assignment=True,
        # Allow population by field name and alias
        populate_by_name=True,
        extra="forbid",
    )


class HTTPMethod(str, Enum):
    """HTTP methods."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


# Methods whose request body is sent on the wire.
BODY_CARRYING_METHODS = frozenset({
    HTTPMethod.POST.value,
    HTTPMethod.PUT.value,
    HTTPMethod.PATCH.value,
})


class Credentials(CoreBaseModel):
    """API credentials shared by the SDKs built on this core."""
    access_key: str = Field(..., description="API access key")
    passphrase: str = Field("", description="API passphrase", repr=False)
    signing_key: str = Field("", description="Request signing key", repr=False)
    portfolio_id: Optional[str] = Field(None, description="Default portfolio ID")


class ErrorBody(CoreBaseModel):
    """Error payload returned by the server on an unexpected status."""

    model_config = ConfigDict(extra="ignore")

    # Required: ``{}`` and ``{"message": null}`` fall back to the raw body
    # text instead of producing an empty message.

    message: str = Field(..., description="Human-readable error message")
