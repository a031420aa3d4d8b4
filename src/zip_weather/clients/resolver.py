"""
zip_weather.clients.resolver

Gateway-side client for the resolver service.

Responsibilities:
- Call `GET /city-weather` with the current trace context injected.
- Surface resolver error responses unchanged so the gateway can relay them.
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError
from starlette.status import HTTP_200_OK

from zip_weather.domain.models import TemperatureReport
from zip_weather.errors import DecodeError, RelayedUpstreamError, UpstreamUnavailableError
from zip_weather.observability.logging import get_logger
from zip_weather.observability.tracing import client_span, outbound_headers

log = get_logger(__name__)


class ResolverClient:
    def __init__(self, *, http: httpx.AsyncClient, base_url: str, timeout: float) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def city_weather(self, *, postal_code: str) -> TemperatureReport:
        with client_span("resolve_city_weather") as span:
            span.set_attribute("zipcode", postal_code)

            try:
                # httpx times each phase separately; this bounds the whole exchange.
                async with asyncio.timeout(self._timeout):
                    r = await self._http.get(
                        f"{self._base_url}/city-weather",
                        params={"zipcode": postal_code},
                        headers=outbound_headers(),
                    )
            except httpx.RequestError as e:
                raise UpstreamUnavailableError(f"failed to call resolver: {e}") from e
            except TimeoutError as e:
                raise UpstreamUnavailableError(
                    f"failed to call resolver: no response within {self._timeout}s"
                ) from e

            span.set_attribute("http.response.status_code", r.status_code)
            if r.status_code != HTTP_200_OK:
                log.warning("resolver_non_ok_status", status_code=r.status_code)
                raise RelayedUpstreamError(
                    status_code=r.status_code,
                    body=r.content,
                    content_type=r.headers.get("content-type"),
                )

            try:
                return TemperatureReport.model_validate_json(r.content)
            except ValidationError as e:
                raise DecodeError("failed to decode resolver response") from e
