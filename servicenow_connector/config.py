from typing import Literal

from pydantic import AnyHttpUrl, BaseModel, ConfigDict, Field

TABLE_KEY_ALIASES = {
    "serviceNowTable": "service_now_table",
    "table": "service_now_table",
    "servicenowtable": "service_now_table",
}


class ServiceNowConfig(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    url: AnyHttpUrl
    username: str | None = None
    password: str | None = None
    service_now_table: str | None = None
    timeout_seconds: int = Field(default=30, ge=1)
    client_library: Literal["requests", "httpx"] = "requests"

    def call_options(self, method: str, query: str | None = None) -> "CallOptions":
        """Return fresh per-call options derived from this connection."""
        return CallOptions.model_validate({**self.model_dump(mode="json"), "method": method, "query": query})


class CallOptions(ServiceNowConfig):
    method: Literal["GET", "POST"]
    query: str | None = None
