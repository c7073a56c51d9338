"""
Configuration module for the FaunaDB transport.
"""

from typing import Any, Callable, Dict, Optional
import os

from .exceptions import ConfigurationError

SCHEMES = ("http", "https")


class Config:
    """
    Connection configuration.

    Supports environment variables for easy configuration:
    - FAUNADB_SCHEME: URL scheme (default: https)
    - FAUNADB_DOMAIN: Server host (default: db.fauna.com)
    - FAUNADB_PORT: Server port (default: 443 for https, 80 for http)
    - FAUNADB_SECRET: Default secret used for requests
    """

    def __init__(
        self,
        scheme: Optional[str] = None,
        domain: Optional[str] = None,
        port: Optional[int] = None,
        secret: Optional[str] = None,
        timeout: float = 60,
        query_timeout: Optional[int] = None,
        keep_alive: bool = True,
        headers: Optional[Dict[str, str]] = None,
        fetch: Optional[Callable[..., Any]] = None,
    ):
        """
        Initialize connection configuration.

        Args:
            scheme: "http" or "https"
            domain: Server host name
            port: Server port; falsy values select the scheme's default port
            secret: Default secret sent as a bearer token
            timeout: Request timeout in seconds
            query_timeout: Default server-side query timeout in milliseconds
            keep_alive: Keep connections open between requests (fallback adapter)
            headers: Extra headers sent with every request
            fetch: aiohttp-compatible request function; forces the fallback adapter
        """
        self.scheme = (scheme or os.getenv("FAUNADB_SCHEME", "https")).lower()
        self.domain = domain or os.getenv("FAUNADB_DOMAIN", "db.fauna.com")
        self.port = port if port is not None else _env_port()
        self.secret = secret if secret is not None else os.getenv("FAUNADB_SECRET")
        self.timeout = timeout
        self.query_timeout = query_timeout
        self.keep_alive = keep_alive
        self.headers = dict(headers or {})
        self.fetch = fetch

        if self.scheme not in SCHEMES:
            raise ConfigurationError(
                f"Invalid scheme {self.scheme!r}. Must be 'http' or 'https'"
            )

        if not self.domain:
            raise ConfigurationError("domain is required")

        if self.port is not None and (
            not isinstance(self.port, int) or self.port < 0
        ):
            raise ConfigurationError(f"Invalid port {self.port!r}")

        if self.timeout is None or self.timeout < 0:
            raise ConfigurationError("timeout must be a non-negative number")

        if self.query_timeout is not None and self.query_timeout < 0:
            raise ConfigurationError("query_timeout must be a non-negative number")

    @property
    def is_https(self) -> bool:
        return self.scheme == "https"

    def __repr__(self) -> str:
        return (
            f"Config(scheme={self.scheme!r}, "
            f"domain={self.domain!r}, "
            f"port={self.port!r}, "
            f"secret=***REDACTED***, "
            f"timeout={self.timeout!r})"
        )


def _env_port() -> Optional[int]:
    value = os.getenv("FAUNADB_PORT")
    if not value:
        return None
    try:
        return int(value)
    except ValueError:
        raise ConfigurationError(f"Invalid FAUNADB_PORT {value!r}") from None
