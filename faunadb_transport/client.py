"""
The driver's internal HTTP client.
"""

from typing import Any, Awaitable, Dict, Mapping, Optional
import asyncio
import logging
import math
import threading

from .config import Config
from .environment import EnvironmentProbe, ProcessEnvironment, probe
from .headers import get_default_headers
from .http.adapter import HTTPAdapter, HttpResponse, validate_stream_consumer
from .http.aiohttp_adapter import FetchAdapter
from .http.httpx_adapter import Http2Adapter
from .logging_setup import sanitize_headers
from .utils import remove_none_values

logger = logging.getLogger("faunadb_transport.http")


class HttpClient:
    """
    HTTP transport for one logical connection.

    Holds the base URL, default headers, request timeout and the adapter,
    all fixed at construction, plus the last seen transaction time used for
    read-your-writes consistency.

    Examples:
        >>> client = HttpClient(Config(secret="fnA..."))
        >>> response = await client.execute(method="POST", body='{"now": null}')
        >>> client.sync_last_txn_time(int(response.headers["x-txn-time"]))
    """

    def __init__(
        self,
        config: Config,
        environment: Optional[EnvironmentProbe] = None,
        http_adapter: Optional[HTTPAdapter] = None,
    ):
        """
        Initialize the HTTP client.

        Args:
            config: Connection configuration
            environment: Optional environment probe (default: ProcessEnvironment())
            http_adapter: Optional adapter used instead of the selected one
        """
        environment = environment or ProcessEnvironment()
        is_https = config.is_https

        # A falsy port means the scheme's default
        port = config.port or (443 if is_https else 80)

        self._adapter = http_adapter or self._select_adapter(
            config, environment, is_https
        )
        self._base_url = f"{config.scheme}://{config.domain}:{port}"
        self._secret = config.secret
        self._headers = {**config.headers, **get_default_headers(environment)}
        self._query_timeout = config.query_timeout
        self._timeout = math.floor(config.timeout * 1000)
        self._last_seen: Optional[int] = None
        self._last_seen_lock = threading.Lock()

    @staticmethod
    def _select_adapter(
        config: Config, environment: EnvironmentProbe, is_https: bool
    ) -> HTTPAdapter:
        # A fetch override always selects the fetch adapter
        use_http2 = (
            config.fetch is None
            and bool(probe(environment.is_hosted_runtime).value)
            and bool(probe(environment.supports_multiplexed_streams).value)
        )

        if use_http2:
            logger.debug("Using HTTP/2 adapter")
            return Http2Adapter()

        logger.debug("Using fetch adapter (https=%s)", is_https)
        return FetchAdapter(
            is_https=is_https,
            fetch=config.fetch,
            keep_alive=config.keep_alive,
        )

    @property
    def adapter(self) -> HTTPAdapter:
        return self._adapter

    @property
    def base_url(self) -> str:
        return self._base_url

    @property
    def default_headers(self) -> Mapping[str, str]:
        return dict(self._headers)

    @property
    def timeout(self) -> int:
        """Request timeout in milliseconds."""
        return self._timeout

    def get_last_txn_time(self) -> Optional[int]:
        """
        Returns last seen transaction time.

        Returns:
            The last seen transaction time, or None
        """
        return self._last_seen

    def sync_last_txn_time(self, time: int) -> None:
        """
        Sets the last seen transaction time if the given timestamp is greater
        than the known one.

        Args:
            time: Transaction timestamp
        """
        with self._last_seen_lock:
            if self._last_seen is None or self._last_seen < time:
                self._last_seen = time

    def execute(
        self,
        method: Optional[str] = None,
        path: Optional[str] = None,
        body: Optional[Any] = None,
        query: Optional[Mapping[str, Any]] = None,
        secret: Optional[str] = None,
        query_timeout: Optional[int] = None,
        headers: Optional[Dict[str, str]] = None,
        stream_consumer: Optional[Any] = None,
        signal: Optional[asyncio.Event] = None,
    ) -> Awaitable[HttpResponse]:
        """
        Executes an HTTP request.

        Not a coroutine function: argument validation happens at call time
        and the adapter's awaitable is returned as is.

        Args:
            method: Request method (default: GET)
            path: Request path (default: /)
            body: Request body
            query: Query string parameters
            secret: Secret overriding the configured one; falsy values fall back to it
            query_timeout: Query timeout in milliseconds overriding the configured one
            headers: Accepted for signature compatibility; not sent
            stream_consumer: Object with on_data(chunk) and on_error(exc); when
                given, the response body is streamed into on_data
            signal: asyncio.Event aborting the request when set

        Returns:
            Awaitable resolving to the adapter's HttpResponse

        Raises:
            InvalidArgument: If stream_consumer lacks callable on_data/on_error
        """
        validate_stream_consumer(stream_consumer)

        secret = secret or self._secret
        if query_timeout is None:
            query_timeout = self._query_timeout

        request_headers = dict(self._headers)
        request_headers["Authorization"] = secret_header(secret) if secret else None
        request_headers["X-Last-Seen-Txn"] = _header_value(self._last_seen)
        request_headers["X-Query-Timeout"] = _header_value(query_timeout)
        request_headers = remove_none_values(request_headers)

        method = method or "GET"
        path = path or "/"
        url = self._base_url + path
        logger.debug(
            "Request %s %s",
            method,
            url,
            extra={
                "method": method,
                "url": url,
                "headers": sanitize_headers(request_headers),
            },
        )

        return self._adapter.execute(
            origin=self._base_url,
            path=path,
            query=query,
            method=method,
            headers=request_headers,
            body=body,
            signal=signal,
            timeout=self._timeout,
            stream_consumer=stream_consumer,
        )

    async def close(self) -> None:
        """Release the adapter's connections."""
        await self._adapter.close()

    async def __aenter__(self) -> "HttpClient":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        await self.close()


def secret_header(secret: str) -> str:
    return "Bearer " + secret


def _header_value(value: Optional[Any]) -> Optional[str]:
    return None if value is None else str(value)
