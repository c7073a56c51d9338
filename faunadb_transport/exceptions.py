"""
Exception classes for the FaunaDB transport layer.
"""

from typing import Optional


class FaunaTransportError(Exception):
    """Base exception for all transport errors."""

    pass


class InvalidArgument(FaunaTransportError, TypeError):
    """
    Invalid call argument.

    Raised before any network activity when a request is malformed,
    e.g. a stream consumer without callable ``on_data``/``on_error``.
    """

    pass


class ConfigurationError(FaunaTransportError, ValueError):
    """Connection configuration error."""

    pass


class NetworkError(FaunaTransportError):
    """
    Network connectivity error.

    Raised by adapters when the underlying HTTP library fails.
    """

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url


class TimeoutError(NetworkError):
    """
    Request timeout error.

    Raised when a request exceeds the client's request timeout.
    """

    pass


class RequestAborted(FaunaTransportError):
    """Raised when a request is cancelled through its abort signal."""

    pass
