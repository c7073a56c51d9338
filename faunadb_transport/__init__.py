"""
FaunaDB HTTP transport

Builds request headers, picks an HTTP/2 or fetch-style adapter and tracks
the last seen transaction time for one logical connection.
"""

from .__version__ import __version__, __api_version__
from .config import Config
from .client import HttpClient
from .environment import EnvironmentProbe, ProcessEnvironment
from .headers import get_default_headers
from .http import HTTPAdapter, HttpResponse, Http2Adapter, FetchAdapter
from .exceptions import (
    FaunaTransportError,
    InvalidArgument,
    ConfigurationError,
    NetworkError,
    TimeoutError,
    RequestAborted,
)

__all__ = [
    "Config",
    "HttpClient",
    "EnvironmentProbe",
    "ProcessEnvironment",
    "get_default_headers",
    "HTTPAdapter",
    "HttpResponse",
    "Http2Adapter",
    "FetchAdapter",
    "FaunaTransportError",
    "InvalidArgument",
    "ConfigurationError",
    "NetworkError",
    "TimeoutError",
    "RequestAborted",
    "__version__",
    "__api_version__",
]
