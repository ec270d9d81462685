"""Public entrypoints for the ServiceNow table API connector."""

from ._config import load_connection_config
from ._logging import enable_console_logging
from .config import CallOptions, ServiceNowConfig
from .connector import FETCH_QUERY, ServiceNowConnector, build_uri, is_hibernating
from .data_contract import RequestResult
from .errors import (
    HIBERNATING_MESSAGE,
    REQUEST_ERROR_MESSAGE,
    HibernatingInstanceError,
    ServiceNowError,
    ServiceNowRequestError,
)

__all__ = [
    "ServiceNowConnector",
    "ServiceNowConfig",
    "CallOptions",
    "RequestResult",
    "ServiceNowError",
    "HibernatingInstanceError",
    "ServiceNowRequestError",
    "HIBERNATING_MESSAGE",
    "REQUEST_ERROR_MESSAGE",
    "FETCH_QUERY",
    "build_uri",
    "is_hibernating",
    "load_connection_config",
    "enable_console_logging",
]
