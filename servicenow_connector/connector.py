import re
from typing import Any, Callable
from urllib.parse import urljoin

import requests

from ._config import load_connection_config
from ._logging import get_logger, redact_config
from .config import TABLE_KEY_ALIASES, CallOptions, ServiceNowConfig
from .data_contract import RequestResult
from .errors import HibernatingInstanceError, ServiceNowRequestError

TABLE_API_PATH = "/api/now/table"
FETCH_QUERY = "sysparm_limit=1"

_VALID_STATUS = re.compile(r"^2\d\d$")

ResultCallback = Callable[[dict[str, Any] | None, str | None], Any]


def build_uri(service_now_table: str | None, query: str | None = None) -> str:
    """Return the table API path, with ``?query`` appended when one is given."""
    uri = f"{TABLE_API_PATH}/{service_now_table or ''}"
    if query:
        uri = f"{uri}?{query}"
    return uri


def is_hibernating(response: Any, body: str | bytes | None) -> bool:
    """Detect the HTML wake-up page a hibernating instance serves with a 200."""
    if response is None or not body:
        return False
    if isinstance(body, bytes):
        body = body.decode("utf-8", errors="replace")
    return "hibernating" in body and "<html>" in body and getattr(response, "status_code", None) == 200


def _build_request_url(base_url: str, uri: str) -> str:
    return urljoin(base_url.rstrip("/") + "/", uri.lstrip("/"))


def _load_httpx():
    try:
        import httpx  # type: ignore
    except ImportError as exc:
        raise RuntimeError("httpx is not installed. Add it to requirements to use client_library='httpx'.") from exc
    return httpx


class ServiceNowConnector:
    """Connector for the ServiceNow table API of one table.

    ``fetch`` reads a single record and ``create`` posts to the table. Both
    return a :class:`RequestResult` and, when a callback is passed, call it
    once as ``callback(data, error_message)``.
    """

    def __init__(
        self,
        url: str | None = None,
        username: str | None = None,
        password: str | None = None,
        service_now_table: str | None = None,
        timeout_seconds: int = 30,
        client_library: str = "requests",
        config: dict | None = None,
        file_path: str | None = None,
        env_prefix: str = "SERVICENOW",
    ):
        merged_config = load_connection_config(
            config,
            file_path=file_path,
            env_prefix=env_prefix,
            required=("url",),
            defaults={
                "timeout_seconds": timeout_seconds,
                "client_library": client_library,
            },
            overrides={
                "url": url,
                "username": username,
                "password": password,
                "service_now_table": service_now_table,
            },
            aliases=TABLE_KEY_ALIASES,
        )
        self.config = ServiceNowConfig.model_validate(merged_config)
        self.logger = get_logger("connector")

        self._httpx = _load_httpx() if self.config.client_library == "httpx" else None
        self.logger.info(
            "ServiceNow connector ready using %s with config=%s",
            self.config.client_library,
            redact_config(self.config.model_dump(mode="json")),
        )

    def fetch(self, callback: ResultCallback | None = None) -> RequestResult:
        """Read at most one record from the configured table."""
        result = self.send_request(self.config.call_options("GET", FETCH_QUERY))
        return self._complete(result, callback)

    def create(self, callback: ResultCallback | None = None, *, payload: Any = None) -> RequestResult:
        """POST to the configured table; ``payload`` is sent as-is as the JSON body."""
        result = self.send_request(self.config.call_options("POST"), payload=payload)
        return self._complete(result, callback)

    get = fetch
    post = create

    def test_connection(self, *, expected_status: int = 200, raise_on_error: bool = False) -> bool:
        """Return True when a single-record read answers with ``expected_status``."""
        try:
            result = self.fetch()
            return result.ok and getattr(result.response, "status_code", None) == expected_status
        except Exception:
            if raise_on_error:
                raise
            self.logger.exception("ServiceNow connection check failed")
            return False

    def send_request(self, call_options: CallOptions, *, payload: Any = None) -> RequestResult:
        uri = build_uri(call_options.service_now_table, call_options.query)
        request_url = _build_request_url(str(call_options.url), uri)
        self.logger.info("ServiceNow %s %s", call_options.method, uri)

        error: Exception | None = None
        response = None
        body = ""
        try:
            response = self._transport_request(call_options, request_url, payload)
        except self._transport_errors() as exc:
            error = exc
        else:
            body = response.text

        return self.process_request_results(error, response, body)

    def process_request_results(self, error: Any, response: Any, body: str | bytes | None) -> RequestResult:
        """Classify one transport outcome: hibernating, transport error, or success."""
        if is_hibernating(response, body):
            self.logger.error("ServiceNow is hibernating - wake it up")
            return RequestResult.failure(HibernatingInstanceError())

        if error is not None:
            self.logger.error("ServiceNow request failed: %s", error)
            failure = ServiceNowRequestError()
            if isinstance(error, BaseException):
                failure.__cause__ = error
            return RequestResult.failure(failure)

        status_code = getattr(response, "status_code", None)
        if not _VALID_STATUS.match(str(status_code)):
            # Non-2xx bodies are still handed back as data.
            self.logger.warning("ServiceNow responded with status %s, returning response as data", status_code)
        return RequestResult.success(response)

    def _transport_request(self, call_options: CallOptions, request_url: str, payload: Any):
        auth = None
        if call_options.username:
            auth = (call_options.username, call_options.password or "")

        client = self._httpx if self._httpx is not None else requests
        return client.request(
            call_options.method,
            request_url,
            auth=auth,
            json=payload,
            timeout=call_options.timeout_seconds,
        )

    def _transport_errors(self) -> tuple[type[Exception], ...]:
        if self._httpx is not None:
            return (self._httpx.HTTPError,)
        return (requests.RequestException,)

    def _complete(self, result: RequestResult, callback: ResultCallback | None) -> RequestResult:
        if callback is not None:
            callback(*result.as_callback_args())
        return result
