"""
Unit tests for exception hierarchy.
"""

import pytest
from cirrusdb.exceptions import (
    CirrusError,
    ConfigurationError,
    InvalidConfigurationError,
    MissingTokenError,
    CapacityError,
    RequestError,
    SerializationError,
    TransportError,
    ProtocolError,
    ApplicationError,
)


class TestExceptionHierarchy:
    """Test that exception hierarchy is correctly defined."""

    def test_base_exception(self):
        """Test that CirrusError is the base exception."""
        error = CirrusError("test error")
        assert isinstance(error, Exception)
        assert str(error) == "test error"

    def test_configuration_errors_inherit_from_base(self):
        """Test that configuration errors inherit from CirrusError."""
        assert issubclass(ConfigurationError, CirrusError)
        assert issubclass(InvalidConfigurationError, ConfigurationError)
        assert issubclass(MissingTokenError, ConfigurationError)

    def test_capacity_error_inherits_from_base(self):
        """Test that CapacityError is not a request error."""
        assert issubclass(CapacityError, CirrusError)
        assert not issubclass(CapacityError, RequestError)

    def test_request_errors_inherit_from_base(self):
        """Test that request errors inherit from RequestError."""
        assert issubclass(RequestError, CirrusError)
        assert issubclass(SerializationError, RequestError)
        assert issubclass(TransportError, RequestError)
        assert issubclass(ProtocolError, RequestError)
        assert issubclass(ApplicationError, RequestError)


class TestApplicationError:
    """Test ApplicationError attributes."""

    def test_message_and_status(self):
        error = ApplicationError("bad", status_code=400)
        assert str(error) == "bad"
        assert error.message == "bad"
        assert error.status_code == 400

    def test_status_optional(self):
        assert ApplicationError("bad").status_code is None

    def test_repr(self):
        error = ApplicationError("bad", status_code=400)
        assert repr(error) == "ApplicationError(message='bad', status_code=400)"

    def test_caught_as_base(self):
        with pytest.raises(CirrusError):
            raise ApplicationError("Record not found", status_code=404)
