"""
Structured JSON Logging for the FaunaDB transport

Provides a JSON formatter for structured logging output and helpers that
keep secrets out of log records.
"""

import logging
import sys
import json
from typing import Any, Dict, Mapping

SENSITIVE_HEADERS = {"authorization", "proxy-authorization", "cookie"}


class JsonFormatter(logging.Formatter):
    """Formats log records as JSON for structured logging"""

    def format(self, record: logging.LogRecord) -> str:
        payload: Dict[str, Any] = {
            "ts": int(record.created * 1000),  # milliseconds
            "name": record.name,
            "level": record.levelname,
            "msg": record.getMessage(),
        }

        if record.exc_info:
            payload["exc"] = self.formatException(record.exc_info)

        for attr in ("method", "url", "headers"):
            if hasattr(record, attr):
                payload[attr] = getattr(record, attr)

        return json.dumps(payload, default=str)


def setup_structured_logger(level: int = logging.INFO) -> None:
    """
    Configure structured JSON logging for the transport.

    Args:
        level: Logging level (default: logging.INFO)

    Example:
        >>> from faunadb_transport.logging_setup import setup_structured_logger
        >>> setup_structured_logger(logging.DEBUG)
    """
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())

    transport_logger = logging.getLogger("faunadb_transport")
    transport_logger.setLevel(level)
    transport_logger.handlers = [handler]
    transport_logger.propagate = False


def sanitize_headers(headers: Mapping[str, Any]) -> Dict[str, Any]:
    """
    Redact credentials from a header mapping before logging it.

    Example:
        >>> sanitize_headers({"Authorization": "Bearer s3cr3t", "X-Query-Timeout": "5"})
        {'Authorization': '***REDACTED***', 'X-Query-Timeout': '5'}
    """
    return {
        key: "***REDACTED***" if key.lower() in SENSITIVE_HEADERS else value
        for key, value in headers.items()
    }
