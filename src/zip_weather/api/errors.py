"""
zip_weather.api.errors

Maps `zip_weather.errors` exceptions to HTTP responses.

Responsibilities:
- JSON `{"detail": ...}` bodies for locally raised errors.
- Byte-for-byte relay of resolver error responses on the gateway.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.responses import Response

from zip_weather.errors import RelayedUpstreamError, ServiceError
from zip_weather.observability.logging import get_logger

log = get_logger(__name__)


async def _service_error_handler(_: Request, exc: ServiceError) -> Response:
    log.warning(
        "request_failed",
        status_code=exc.status_code,
        error_type=type(exc).__name__,
        detail=exc.detail,
    )
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail})


async def _relayed_error_handler(_: Request, exc: RelayedUpstreamError) -> Response:
    log.warning("relaying_resolver_error", status_code=exc.status_code)
    return Response(content=exc.body, status_code=exc.status_code, media_type=exc.content_type)


def register_exception_handlers(app: FastAPI) -> None:
    # Starlette resolves handlers by MRO, so the subclass handler wins for relays.
    app.add_exception_handler(ServiceError, _service_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RelayedUpstreamError, _relayed_error_handler)  # type: ignore[arg-type]
