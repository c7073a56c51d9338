"""
Tests for environment probing.
"""

import platform

import pytest

from faunadb_transport.environment import (
    UNKNOWN,
    ProcessEnvironment,
    detect_runtime_env,
    probe,
)


class TestDetectRuntimeEnv:
    """Test hosting platform detection."""

    @pytest.mark.parametrize(
        "environ,expected",
        [
            ({"NETLIFY_IMAGES_CDN_DOMAIN": "x"}, "Netlify"),
            ({"VERCEL": "1"}, "Vercel"),
            ({"PATH": "/app/.heroku/python/bin:/usr/bin"}, "Heroku"),
            ({"AWS_LAMBDA_FUNCTION_VERSION": "$LATEST"}, "AWS Lambda"),
            ({"_": "/layers/google.python.runtime/python/bin/python3"}, "GCP Cloud Functions"),
            ({"GOOGLE_CLOUD_PROJECT": "demo"}, "GCP Compute Instances"),
            ({"WEBSITE_FUNCTIONS_AZUREMONITOR_CATEGORIES": "x"}, "Azure Cloud Functions"),
            ({"ORYX_ENV_TYPE": "AppService", "WEBSITE_INSTANCE_ID": "1"}, "Azure Compute"),
            ({"RENDER_SERVICE_ID": "srv"}, "Render"),
            ({"BEGIN_DATA_SCOPE_ID": "scope"}, "Begin"),
            ({"PATH": "/usr/bin"}, "unknown"),
            ({}, "unknown"),
        ],
    )
    def test_platforms(self, environ, expected):
        assert detect_runtime_env(environ) == expected

    def test_first_match_wins(self):
        assert detect_runtime_env({"VERCEL": "1", "RENDER_SERVICE_ID": "srv"}) == "Vercel"

    def test_azure_compute_requires_app_service(self):
        environ = {"ORYX_ENV_TYPE": "Other", "WEBSITE_INSTANCE_ID": "1"}
        assert detect_runtime_env(environ) == "unknown"

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("RENDER_SERVICE_ID", "srv")
        monkeypatch.delenv("NETLIFY_IMAGES_CDN_DOMAIN", raising=False)
        monkeypatch.delenv("VERCEL", raising=False)
        monkeypatch.setenv("PATH", "/usr/bin")
        monkeypatch.delenv("AWS_LAMBDA_FUNCTION_VERSION", raising=False)
        monkeypatch.setenv("_", "/usr/bin/python3")
        monkeypatch.delenv("GOOGLE_CLOUD_PROJECT", raising=False)
        monkeypatch.delenv("WEBSITE_FUNCTIONS_AZUREMONITOR_CATEGORIES", raising=False)
        monkeypatch.delenv("ORYX_ENV_TYPE", raising=False)

        assert detect_runtime_env() == "Render"


class TestProbe:
    """Test probe result wrapping."""

    def test_value(self):
        result = probe(lambda: "linux")
        assert result.value == "linux"
        assert result.error is None
        assert result.known

    def test_failure(self):
        def broken():
            raise OSError("no uname")

        result = probe(broken)

        assert result.value is UNKNOWN
        assert isinstance(result.error, OSError)
        assert not result.known


class TestProcessEnvironment:
    """Test the interpreter-backed probe."""

    def test_hosted(self):
        environment = ProcessEnvironment()
        assert environment.is_hosted_runtime() is True
        assert environment.is_service_worker() is False

    def test_runtime_details(self):
        details = ProcessEnvironment().runtime_details()
        assert details == f"{platform.python_implementation()}-{platform.python_version()}"

    def test_os_details(self):
        details = ProcessEnvironment().os_details()
        assert details.startswith(platform.system())

    def test_supports_multiplexed_streams(self):
        pytest.importorskip("h2")
        assert ProcessEnvironment().supports_multiplexed_streams() is True
