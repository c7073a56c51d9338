"""
Default request headers.

Builds the headers every request carries: the protocol version and, in hosted
runtimes only, the ``X-Driver-Env`` fingerprint describing the caller's
environment for server-side diagnostics.
"""

from typing import Dict, Optional

from .__version__ import __api_version__, __version__
from .environment import EnvironmentProbe, ProbeResult, ProcessEnvironment, probe

API_VERSION_HEADER = "X-FaunaDB-API-Version"
DRIVER_ENV_HEADER = "X-Driver-Env"


def driver_env(environment: EnvironmentProbe) -> Dict[str, str]:
    """
    Collect the fingerprint fields, omitting any that cannot be determined.

    Args:
        environment: Environment probe

    Returns:
        Ordered mapping of driver, runtime, env and os
    """
    fields = {"driver": "-".join(["python", __version__])}

    if probe(environment.is_hosted_runtime).value:
        details = {
            "runtime": probe(environment.runtime_details),
            "env": probe(environment.hosted_runtime_env),
            "os": probe(environment.os_details),
        }
    elif probe(environment.is_service_worker).value:
        fields["runtime"] = "Service Worker"
        details = {}
    else:
        details = {
            "runtime": probe(environment.browser_runtime_details),
            "env": ProbeResult("browser"),
            "os": probe(environment.browser_os_details),
        }

    for key, result in details.items():
        if result.known and result.value:
            fields[key] = str(result.value)

    return fields


def format_driver_env(fields: Dict[str, str]) -> str:
    """
    Example:
        >>> format_driver_env({"driver": "python-0.1.0", "os": "Linux-6.1"})
        'driver=python-0.1.0; os=linux-6.1'
    """
    return "; ".join("=".join([key, value.lower()]) for key, value in fields.items())


def get_default_headers(
    environment: Optional[EnvironmentProbe] = None,
) -> Dict[str, str]:
    """
    Build the headers sent with every request.

    Never raises because of environment probing: a detail that cannot be
    read is left out of the fingerprint.

    Args:
        environment: Environment probe (default: ProcessEnvironment())

    Returns:
        Header mapping
    """
    environment = environment or ProcessEnvironment()
    headers = {API_VERSION_HEADER: __api_version__}

    # Only server-side runtimes can send the fingerprint without a CORS preflight
    if probe(environment.is_hosted_runtime).value:
        headers[DRIVER_ENV_HEADER] = format_driver_env(driver_env(environment))

    return headers
