"""Tests for pydantic models."""

import pytest
from pydantic import ValidationError

from apicore.models import BODY_CARRYING_METHODS
from apicore.models import Credentials
from apicore.models import ErrorBody
from apicore.models import HTTPMethod


class TestCredentials:
    """Test the credentials model."""

    def test_valid_credentials(self, credentials):
        """Test valid credentials."""
        assert credentials.access_key == "test_access_key"
        assert credentials.portfolio_id == "portfolio_123"

    def test_secrets_hidden_from_repr(self, credentials):
        """Test passphrase and signing key are not shown."""
        text = repr(credentials)

        assert "test_access_key" in text
        assert "test_passphrase" not in text
        assert "test_signing_key" not in text

    def test_access_key_required(self):
        """Test missing access key."""
        with pytest.raises(ValidationError):
            Credentials(passphrase="phrase")

    def test_unknown_fields_rejected(self):
        """Test extra fields are forbidden."""
        with pytest.raises(ValidationError):
            Credentials(access_key="key", api_secret="secret")


class TestErrorBody:
    """Test the error payload model."""

    def test_message_with_extra_fields(self):
        """Test unknown fields are ignored."""
        body = ErrorBody.model_validate_json(b'{"message":"bad request","code":"E1"}')
        assert body.message == "bad request"

    @pytest.mark.parametrize("payload", [b"{}", b"oops", b"[]", b'{"message":null}'])
    def test_invalid_payloads(self, payload):
        """Test payloads without a string message fail validation."""
        with pytest.raises(ValidationError):
            ErrorBody.model_validate_json(payload)


class TestHTTPMethod:
    """Test HTTP method enum."""

    def test_values(self):
        """Test methods compare equal to their names."""
        assert HTTPMethod.PATCH == "PATCH"
        assert [m.value for m in HTTPMethod] == ["GET", "POST", "PUT", "PATCH", "DELETE"]

    def test_body_carrying_methods(self):
        """Test which methods send a body."""
        assert BODY_CARRYING_METHODS == {"POST", "PUT", "PATCH"}
