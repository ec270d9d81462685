"""Errors reported through ``RequestResult.error``; classification never raises them."""

HIBERNATING_MESSAGE = "service is hibernating"
REQUEST_ERROR_MESSAGE = "there was an error in the request"


class ServiceNowError(Exception):
    """Base class for request outcomes the connector reports as failures."""


class HibernatingInstanceError(ServiceNowError):
    def __init__(self, message: str = HIBERNATING_MESSAGE):
        super().__init__(message)


class ServiceNowRequestError(ServiceNowError):
    """Transport failure; the original exception is kept as ``__cause__``."""

    def __init__(self, message: str = REQUEST_ERROR_MESSAGE):
        super().__init__(message)
