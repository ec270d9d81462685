"""Logger helpers for the connector; handlers are left to the host application."""

import logging
from typing import Any

LOGGER_NAMESPACE = "servicenow_connector"
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

_SENSITIVE_KEYS = {
    "password",
    "pass",
    "token",
    "secret",
    "authorization",
}

logging.getLogger(LOGGER_NAMESPACE).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{LOGGER_NAMESPACE}.{name}")


def enable_console_logging(level: int | str = logging.INFO) -> logging.Handler:
    """Attach a stream handler to the connector's logger namespace only.

    Opt-in convenience for scripts; the root logger is never touched.
    """
    package_logger = logging.getLogger(LOGGER_NAMESPACE)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    return handler


def redact_config(values: dict[str, Any]) -> dict[str, Any]:
    """Mask credential values before a config mapping is logged."""
    redacted: dict[str, Any] = {}
    for key, value in values.items():
        if key.lower() in _SENSITIVE_KEYS and value is not None:
            redacted[key] = "***"
        else:
            redacted[key] = value
    return redacted
