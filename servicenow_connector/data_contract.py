from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

from .errors import ServiceNowError


class RequestResult(BaseModel):
    """Outcome of one table API call.

    Exactly one of ``data`` and ``error_message`` is set. ``data`` wraps the
    raw transport response as ``{"response": response}``; ``error`` carries the
    exception behind ``error_message`` for diagnostics.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    data: dict[str, Any] | None = None
    error_message: str | None = None
    error: ServiceNowError | None = None

    @model_validator(mode="after")
    def _exactly_one_outcome(self) -> "RequestResult":
        has_data = self.data is not None
        has_error = bool(self.error_message)
        if has_data == has_error:
            raise ValueError("RequestResult requires exactly one of data or error_message")
        if has_data and self.error is not None:
            raise ValueError("A successful RequestResult cannot carry an error")
        return self

    @classmethod
    def success(cls, response: Any) -> "RequestResult":
        return cls(data={"response": response})

    @classmethod
    def failure(cls, error: ServiceNowError) -> "RequestResult":
        return cls(error_message=str(error), error=error)

    @property
    def ok(self) -> bool:
        return self.data is not None

    @property
    def response(self) -> Any:
        return self.data["response"] if self.data is not None else None

    def as_callback_args(self) -> tuple[dict[str, Any] | None, str | None]:
        return self.data, self.error_message
