"""
Runtime environment probing.

The transport never reads interpreter or process globals directly. It asks an
:class:`EnvironmentProbe`, so tests can supply a fake and production code uses
:class:`ProcessEnvironment`.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, Mapping, NamedTuple, Optional
import importlib.util
import logging
import os
import platform
import sys

logger = logging.getLogger("faunadb_transport.env")

UNKNOWN = None


class ProbeResult(NamedTuple):
    """Outcome of a single probe call: a value, or UNKNOWN and the error."""

    value: Any
    error: Optional[BaseException] = None

    @property
    def known(self) -> bool:
        return self.value is not UNKNOWN


def probe(fn: Callable[[], Any]) -> ProbeResult:
    """
    Run one probe call and capture its failure instead of raising it.

    Args:
        fn: Zero-argument callable reading some environment detail

    Returns:
        ProbeResult holding the value, or UNKNOWN and the exception
    """
    try:
        return ProbeResult(fn())
    except Exception as e:
        logger.debug("Environment probe %s failed: %s", getattr(fn, "__name__", fn), e)
        return ProbeResult(UNKNOWN, e)


class EnvironmentProbe(ABC):
    """
    Abstract environment capability.

    Implementations may raise from any detail method; callers wrap every call
    with :func:`probe`.
    """

    @abstractmethod
    def is_hosted_runtime(self) -> bool:
        """True for a regular server-side interpreter process."""
        raise NotImplementedError

    def is_service_worker(self) -> bool:
        return False

    @abstractmethod
    def supports_multiplexed_streams(self) -> bool:
        """True when an HTTP/2 implementation is importable in process."""
        raise NotImplementedError

    @abstractmethod
    def runtime_details(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def hosted_runtime_env(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def os_details(self) -> str:
        raise NotImplementedError

    def browser_runtime_details(self) -> str:
        raise NotImplementedError

    def browser_os_details(self) -> str:
        raise NotImplementedError


# Hosting platforms, checked in order; the first match wins.
_RUNTIME_ENVS = (
    ("Netlify", lambda env: "NETLIFY_IMAGES_CDN_DOMAIN" in env),
    ("Vercel", lambda env: "VERCEL" in env),
    ("Heroku", lambda env: ".heroku" in env.get("PATH", "")),
    ("AWS Lambda", lambda env: "AWS_LAMBDA_FUNCTION_VERSION" in env),
    ("GCP Cloud Functions", lambda env: "google" in env.get("_", "")),
    ("GCP Compute Instances", lambda env: "GOOGLE_CLOUD_PROJECT" in env),
    (
        "Azure Cloud Functions",
        lambda env: "WEBSITE_FUNCTIONS_AZUREMONITOR_CATEGORIES" in env,
    ),
    (
        "Azure Compute",
        lambda env: env.get("ORYX_ENV_TYPE") == "AppService"
        and "WEBSITE_INSTANCE_ID" in env,
    ),
    ("Render", lambda env: "RENDER_SERVICE_ID" in env),
    ("Begin", lambda env: "BEGIN_DATA_SCOPE_ID" in env),
)


def detect_runtime_env(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Name the hosting platform from its well-known environment variables.

    Args:
        environ: Environment mapping (default: os.environ)

    Returns:
        Platform name, or "unknown"

    Example:
        >>> detect_runtime_env({"VERCEL": "1"})
        'Vercel'
    """
    env = os.environ if environ is None else environ
    for name, check in _RUNTIME_ENVS:
        if check(env):
            return name
    return "unknown"


class ProcessEnvironment(EnvironmentProbe):
    """Probe backed by the current interpreter."""

    def is_hosted_runtime(self) -> bool:
        # Pyodide runs inside a browser or a web worker
        return sys.platform != "emscripten"

    def is_service_worker(self) -> bool:
        if self.is_hosted_runtime():
            return False
        import js  # type: ignore[import-not-found]

        return not hasattr(js, "document")

    def supports_multiplexed_streams(self) -> bool:
        return importlib.util.find_spec("h2") is not None

    def runtime_details(self) -> str:
        return "-".join([platform.python_implementation(), platform.python_version()])

    def hosted_runtime_env(self) -> str:
        return detect_runtime_env()

    def os_details(self) -> str:
        return "-".join([platform.system(), platform.release()])

    def browser_runtime_details(self) -> str:
        import js  # type: ignore[import-not-found]

        return str(js.navigator.userAgent)

    def browser_os_details(self) -> str:
        import js  # type: ignore[import-not-found]

        return str(js.navigator.platform)
