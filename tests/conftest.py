"""
Pytest configuration and fixtures
"""

import asyncio
from typing import Any, Dict, List, Optional

import pytest

from faunadb_transport.config import Config
from faunadb_transport.environment import EnvironmentProbe
from faunadb_transport.http.adapter import HTTPAdapter, HttpResponse


class FakeEnvironment(EnvironmentProbe):
    """Environment probe with fixed answers; any answer may be an exception."""

    def __init__(
        self,
        hosted: Any = True,
        http2: Any = True,
        service_worker: Any = False,
        runtime: Any = "CPython-3.11.4",
        env: Any = "unknown",
        os_details: Any = "Linux-6.1.0",
        browser_runtime: Any = "Mozilla/5.0 Firefox/118.0",
        browser_os: Any = "MacIntel",
    ):
        self.answers = {
            "hosted": hosted,
            "http2": http2,
            "service_worker": service_worker,
            "runtime": runtime,
            "env": env,
            "os": os_details,
            "browser_runtime": browser_runtime,
            "browser_os": browser_os,
        }

    def _answer(self, key: str) -> Any:
        value = self.answers[key]
        if isinstance(value, BaseException):
            raise value
        return value

    def is_hosted_runtime(self) -> bool:
        return self._answer("hosted")

    def is_service_worker(self) -> bool:
        return self._answer("service_worker")

    def supports_multiplexed_streams(self) -> bool:
        return self._answer("http2")

    def runtime_details(self) -> str:
        return self._answer("runtime")

    def hosted_runtime_env(self) -> str:
        return self._answer("env")

    def os_details(self) -> str:
        return self._answer("os")

    def browser_runtime_details(self) -> str:
        return self._answer("browser_runtime")

    def browser_os_details(self) -> str:
        return self._answer("browser_os")


class DummyAdapter(HTTPAdapter):
    """Mock HTTP adapter for testing."""

    def __init__(self):
        self.requests: List[Dict[str, Any]] = []
        self.response = HttpResponse(200, {"x-txn-time": "1000"}, '{"resource": 1}')
        self.error: Optional[Exception] = None
        self.closed = False

    @property
    def last_request(self) -> Dict[str, Any]:
        return self.requests[-1]

    async def execute(self, **kwargs: Any) -> HttpResponse:
        """Mock execute method."""
        self.requests.append(kwargs)
        # Let concurrent calls interleave
        await asyncio.sleep(0)
        if self.error is not None:
            raise self.error
        return self.response

    async def close(self) -> None:
        self.closed = True


class StreamConsumer:
    """Collects streamed chunks and errors."""

    def __init__(self):
        self.chunks: List[str] = []
        self.errors: List[Exception] = []

    def on_data(self, chunk: str) -> None:
        self.chunks.append(chunk)

    def on_error(self, error: Exception) -> None:
        self.errors.append(error)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep FAUNADB_* variables from the developer's shell out of tests"""
    for name in ("FAUNADB_SCHEME", "FAUNADB_DOMAIN", "FAUNADB_PORT", "FAUNADB_SECRET"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def environment():
    return FakeEnvironment()


@pytest.fixture
def adapter():
    return DummyAdapter()


@pytest.fixture
def config():
    """Create test configuration fixture"""
    return Config(secret="fn_default_secret", domain="localhost", scheme="http", port=8443)
