"""
zip_weather.errors

Error taxonomy shared by the gateway and resolver services.

Responsibilities:
- Name each failure mode of the request chain (input, upstream, decoding).
- Carry the HTTP status each failure maps to, so handlers stay declarative.
"""

from __future__ import annotations

from starlette.status import (
    HTTP_400_BAD_REQUEST,
    HTTP_422_UNPROCESSABLE_CONTENT,
    HTTP_500_INTERNAL_SERVER_ERROR,
)


class ServiceError(Exception):
    """
    Base class for failures surfaced to the caller as an HTTP response.
    """

    status_code: int = HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail


class InputValidationError(ServiceError):
    status_code = HTTP_400_BAD_REQUEST


class InvalidPostalCodeError(InputValidationError):
    status_code = HTTP_422_UNPROCESSABLE_CONTENT

    def __init__(self, detail: str = "invalid zipcode") -> None:
        super().__init__(detail)


class PostalCodeNotFoundError(ServiceError):
    status_code = HTTP_422_UNPROCESSABLE_CONTENT

    def __init__(self, detail: str = "can not find zipcode") -> None:
        super().__init__(detail)


class UpstreamUnavailableError(ServiceError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class DecodeError(ServiceError):
    status_code = HTTP_500_INTERNAL_SERVER_ERROR


class ClientDisconnectedError(ServiceError):
    """
    Caller went away before the answer was ready; outbound work was abandoned.
    """

    # nginx convention; nobody is left to read it, it only shows up in logs.
    status_code = 499

    def __init__(self, detail: str = "client closed request") -> None:
        super().__init__(detail)


class RelayedUpstreamError(ServiceError):
    """
    Resolver answered with a non-200 status; the gateway hands it back verbatim.
    """

    def __init__(self, *, status_code: int, body: bytes, content_type: str | None) -> None:
        super().__init__(f"resolver returned non-OK status: {status_code}")
        self.status_code = status_code
        self.body = body
        self.content_type = content_type


# --- Module Notes -----------------------------------------------------------
# The mapping to responses lives in `zip_weather.api.errors`; raising happens
# inside the active span so the failure is recorded on the trace first.
