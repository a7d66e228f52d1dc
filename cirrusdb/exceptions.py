"""
Exception hierarchy for the CirrusDB client.

All custom exceptions inherit from CirrusError base class.
"""

from typing import Optional


class CirrusError(Exception):
    """Base exception for all CirrusDB client errors."""
    pass


# Configuration Errors
class ConfigurationError(CirrusError):
    """Base exception for configuration-related errors."""
    pass


class InvalidConfigurationError(ConfigurationError):
    """Raised when configuration is invalid or malformed."""
    pass


class MissingTokenError(ConfigurationError):
    """Raised when an authorized call is attempted without a user token."""
    pass


# Admission Errors
class CapacityError(CirrusError):
    """Raised when the throttle queue is full and the overflow policy rejects."""
    pass


# Request Errors
class RequestError(CirrusError):
    """Base exception for errors raised while performing a request."""
    pass


class SerializationError(RequestError):
    """Raised when a request body cannot be encoded to JSON."""
    pass


class TransportError(RequestError):
    """Raised when the underlying connection fails."""
    pass


class ProtocolError(RequestError):
    """Raised when a reply is not a valid response envelope."""
    pass


class ApplicationError(RequestError):
    """
    Raised when the remote service answers with ``success: false``.

    Attributes:
        message: Human-readable message taken from the envelope
        status_code: HTTP status code of the reply, when known
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ApplicationError(message={self.message!r}, status_code={self.status_code!r})"
