"""
Base HTTP adapter interface.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Awaitable, Dict, Mapping, Optional, TypeVar
import asyncio

from ..exceptions import InvalidArgument, RequestAborted

T = TypeVar("T")

STREAM_BODY = "[stream]"


@dataclass(frozen=True)
class HttpResponse:
    """Raw response handed back to the caller; the body is not interpreted."""

    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: str = ""

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300


def validate_stream_consumer(stream_consumer: Any) -> None:
    """
    Check that a stream consumer exposes callable ``on_data`` and ``on_error``.

    Raises:
        InvalidArgument: If either member is missing or not callable
    """
    if stream_consumer is None:
        return
    on_data = getattr(stream_consumer, "on_data", None)
    on_error = getattr(stream_consumer, "on_error", None)
    if not callable(on_data) or not callable(on_error):
        raise InvalidArgument('Invalid "stream_consumer" provided')


def build_url(origin: str, path: str) -> str:
    return origin + "/" + path.lstrip("/")


def clean_query(query: Optional[Mapping[str, Any]]) -> Optional[Dict[str, str]]:
    if not query:
        return None
    return {key: str(value) for key, value in query.items() if value is not None}


async def run_cancellable(
    request: Awaitable[T], signal: Optional[asyncio.Event] = None
) -> T:
    """
    Await ``request``, cancelling it as soon as ``signal`` is set.

    Args:
        request: Coroutine performing the request
        signal: Optional abort event

    Returns:
        The request's result

    Raises:
        RequestAborted: If the signal fires before the request completes
    """
    if signal is None:
        return await request

    if signal.is_set():
        if asyncio.iscoroutine(request):
            request.close()
        raise RequestAborted("Request aborted before it was sent")

    task = asyncio.ensure_future(request)

    waiter = asyncio.ensure_future(signal.wait())
    try:
        await asyncio.wait({task, waiter}, return_when=asyncio.FIRST_COMPLETED)
    except asyncio.CancelledError:
        task.cancel()
        raise
    finally:
        waiter.cancel()

    if not task.done():
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        raise RequestAborted("Request aborted")

    return task.result()


class HTTPAdapter(ABC):
    """
    Abstract base class for HTTP adapters.

    An adapter moves one request over the wire and returns the raw response.
    It owns its connection resources; :meth:`close` releases them.
    """

    @abstractmethod
    async def execute(
        self,
        *,
        origin: str,
        path: str = "/",
        query: Optional[Mapping[str, Any]] = None,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[Any] = None,
        signal: Optional[asyncio.Event] = None,
        timeout: Optional[int] = None,
        stream_consumer: Optional[Any] = None,
    ) -> HttpResponse:
        """
        Send HTTP request.

        Args:
            origin: Scheme, host and port, e.g. "https://db.fauna.com:443"
            path: Request path
            query: Query string parameters; None values are dropped
            method: HTTP method
            headers: Request headers
            body: Request body
            signal: Abort event
            timeout: Request timeout in milliseconds
            stream_consumer: Object with on_data(chunk) and on_error(exc)

        Returns:
            HttpResponse

        Raises:
            NetworkError: On network connectivity issues
            TimeoutError: On request timeout
            RequestAborted: When the signal is set
        """
        raise NotImplementedError

    async def close(self) -> None:
        """Release connection resources."""
        pass
