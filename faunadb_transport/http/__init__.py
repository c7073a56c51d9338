"""
HTTP adapters for the FaunaDB transport.
"""

from .adapter import HTTPAdapter, HttpResponse, validate_stream_consumer
from .httpx_adapter import Http2Adapter
from .aiohttp_adapter import FetchAdapter

__all__ = [
    "HTTPAdapter",
    "HttpResponse",
    "Http2Adapter",
    "FetchAdapter",
    "validate_stream_consumer",
]
