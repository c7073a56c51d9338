"""
Aiohttp-based fetch adapter (fallback).
"""

from typing import Any, Awaitable, Callable, Dict, Mapping, Optional
import asyncio
import codecs
import inspect
import logging

import aiohttp

from .adapter import (
    STREAM_BODY,
    HTTPAdapter,
    HttpResponse,
    build_url,
    clean_query,
    run_cancellable,
)
from ..exceptions import NetworkError, TimeoutError as FaunaTimeoutError

logger = logging.getLogger("faunadb_transport.http.fetch")

Fetch = Callable[..., Awaitable[Any]]


class FetchAdapter(HTTPAdapter):
    """
    Asynchronous HTTP/1.1 adapter using aiohttp.

    Used when HTTP/2 is unavailable or when the caller supplies its own
    ``fetch`` function. ``fetch`` must accept the arguments of
    ``aiohttp.ClientSession.request`` and return an object exposing
    ``status``, ``headers``, ``text()`` and ``content.iter_any()``.
    """

    def __init__(
        self,
        is_https: bool = True,
        fetch: Optional[Fetch] = None,
        keep_alive: bool = True,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        """
        Initialize fetch adapter.

        Args:
            is_https: Whether the target origin uses TLS
            fetch: Optional aiohttp-compatible request function
            keep_alive: Reuse connections between requests
            session: Optional aiohttp.ClientSession instance
        """
        self.is_https = is_https
        self.keep_alive = keep_alive
        self._fetch = fetch
        self._external_session = session is not None
        self.session = session

    def _get_fetch(self) -> Fetch:
        if self._fetch is not None:
            return self._fetch
        if self.session is None:
            connector = aiohttp.TCPConnector(
                force_close=not self.keep_alive,
                enable_cleanup_closed=self.is_https,
            )
            self.session = aiohttp.ClientSession(connector=connector)
        return self.session.request

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
        fetch = self._get_fetch()
        timeout_obj = aiohttp.ClientTimeout(total=timeout / 1000 if timeout else None)

        try:
            response = await fetch(
                method,
                url,
                params=params,
                headers=headers,
                data=body,
                timeout=timeout_obj,
            )
        except asyncio.TimeoutError as e:
            raise FaunaTimeoutError(f"Request timed out: {e}", url=url) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network request failed: {e}", url=url) from e

        try:
            status = response.status
            resp_headers = dict(response.headers)

            if stream_consumer is None or not (200 <= status < 300):
                text = await response.text()
                return HttpResponse(status, resp_headers, text)

            decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
            try:
                async for chunk in response.content.iter_any():
                    text = decoder.decode(chunk) if isinstance(chunk, bytes) else chunk
                    if text:
                        stream_consumer.on_data(text)
                tail = decoder.decode(b"", final=True)
                if tail:
                    stream_consumer.on_data(tail)
            except (aiohttp.ClientError, asyncio.TimeoutError) as e:
                logger.debug("Stream from %s failed: %s", url, e)
                stream_consumer.on_error(NetworkError(f"Stream failed: {e}", url=url))

            return HttpResponse(status, resp_headers, STREAM_BODY)
        except asyncio.TimeoutError as e:
            raise FaunaTimeoutError(f"Request timed out: {e}", url=url) from e
        except aiohttp.ClientError as e:
            raise NetworkError(f"Network request failed: {e}", url=url) from e
        finally:
            release = getattr(response, "release", None)
            released = release() if release is not None else None
            if inspect.isawaitable(released):
                await released

    async def close(self) -> None:
        """Close the session."""
        if not self._external_session and self.session is not None:
            await self.session.close()
            self.session = None
