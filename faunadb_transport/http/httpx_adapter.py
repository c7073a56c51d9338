"""
Httpx-based HTTP/2 adapter (multiplexed streams).
"""

from typing import Any, Dict, Mapping, Optional
import asyncio
import logging

import httpx

from .adapter import (
    STREAM_BODY,
    HTTPAdapter,
    HttpResponse,
    build_url,
    clean_query,
    run_cancellable,
)
from ..exceptions import NetworkError, TimeoutError as FaunaTimeoutError

logger = logging.getLogger("faunadb_transport.http.http2")


class Http2Adapter(HTTPAdapter):
    """
    Asynchronous HTTP/2 adapter using httpx.

    Features:
    - Concurrent requests multiplexed over one connection per origin
    - Incremental delivery of streamed responses
    - Lazily created client, so construction opens no sockets
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP/2 adapter.

        Args:
            client: Optional httpx.AsyncClient instance
            transport: Optional transport for a lazily created client
        """
        self._external_client = client is not None
        self.client = client
        self._transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        if self.client is None:
            self.client = httpx.AsyncClient(http2=True, transport=self._transport)
        return self.client

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
        url = build_url(origin, path)
        return await run_cancellable(
            self._send(
                method, url, clean_query(query), headers, body, timeout, stream_consumer
            ),
            signal,
        )

    async def _send(
        self,
        method: str,
        url: str,
        params: Optional[Dict[str, str]],
        headers: Optional[Dict[str, str]],
        body: Optional[Any],
        timeout: Optional[int],
        stream_consumer: Optional[Any],
    ) -> HttpResponse:
        client = self._get_client()
        request = client.build_request(
            method,
            url,
            params=params,
            headers=headers,
            content=body,
            timeout=timeout / 1000 if timeout else None,
        )

        try:
            response = await client.send(request, stream=True)
        except httpx.TimeoutException as e:
            raise FaunaTimeoutError(f"Request timed out: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Network request failed: {e}", url=url) from e

        try:
            if stream_consumer is None or not response.is_success:
                await response.aread()
                return HttpResponse(response.status_code, dict(response.headers), response.text)

            try:
                async for chunk in response.aiter_text():
                    stream_consumer.on_data(chunk)
            except httpx.HTTPError as e:
                logger.debug("Stream from %s failed: %s", url, e)
                stream_consumer.on_error(NetworkError(f"Stream failed: {e}", url=url))

            return HttpResponse(response.status_code, dict(response.headers), STREAM_BODY)
        except httpx.TimeoutException as e:
            raise FaunaTimeoutError(f"Request timed out: {e}", url=url) from e
        except httpx.HTTPError as e:
            raise NetworkError(f"Network request failed: {e}", url=url) from e
        finally:
            await response.aclose()

    async def close(self) -> None:
        """Close the client."""
        if not self._external_client and self.client is not None:
            await self.client.aclose()
            self.client = None
