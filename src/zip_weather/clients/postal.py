"""
zip_weather.clients.postal

ViaCEP postal-lookup client.

Responsibilities:
- Resolve a postal code into a `LocalityRecord`.
- Treat the `erro` flag or an empty locality as "not found".
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError
from starlette.status import HTTP_200_OK

from zip_weather.domain.models import LocalityRecord
from zip_weather.errors import DecodeError, PostalCodeNotFoundError, UpstreamUnavailableError
from zip_weather.observability.logging import get_logger
from zip_weather.observability.tracing import client_span, outbound_headers

log = get_logger(__name__)


class ViaCepClient:
    def __init__(self, *, http: httpx.AsyncClient, base_url: str, timeout: float) -> None:
        self._http = http
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def lookup(self, *, postal_code: str) -> LocalityRecord:
        with client_span("lookup_postal_code") as span:
            span.set_attribute("zipcode", postal_code)
            url = f"{self._base_url}/ws/{postal_code}/json/"

            try:
                async with asyncio.timeout(self._timeout):
                    r = await self._http.get(url, headers=outbound_headers())
            except httpx.RequestError as e:
                raise UpstreamUnavailableError(f"failed to make HTTP request (viacep): {e}") from e
            except TimeoutError as e:
                raise UpstreamUnavailableError(
                    f"failed to make HTTP request (viacep): no response within {self._timeout}s"
                ) from e

            span.set_attribute("http.response.status_code", r.status_code)
            if r.status_code != HTTP_200_OK:
                log.warning("viacep_unexpected_status", status_code=r.status_code)
                raise UpstreamUnavailableError(f"unexpected status code (viacep): {r.status_code}")

            try:
                record = LocalityRecord.model_validate_json(r.content)
            except ValidationError as e:
                raise DecodeError("failed to decode response (viacep)") from e

            if record.not_found:
                raise PostalCodeNotFoundError()

            span.set_attribute("city", record.locality)
            return record
