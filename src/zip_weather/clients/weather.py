"""
zip_weather.clients.weather

WeatherAPI.com current-conditions client.

Responsibilities:
- Fetch the current weather for a city name.
- Decode the payload into a `WeatherReading`.
"""

from __future__ import annotations

import asyncio

import httpx
from pydantic import ValidationError
from starlette.status import HTTP_200_OK

from zip_weather.domain.models import WeatherReading
from zip_weather.errors import DecodeError, UpstreamUnavailableError
from zip_weather.observability.logging import get_logger
from zip_weather.observability.tracing import client_span, outbound_headers

log = get_logger(__name__)


class WeatherApiClient:
    def __init__(
        self,
        *,
        http: httpx.AsyncClient,
        api_key: str,
        base_url: str,
        timeout: float,
    ) -> None:
        self._http = http
        self._api_key = api_key
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout

    async def current(self, *, city: str) -> WeatherReading:
        with client_span("fetch_current_weather") as span:
            span.set_attribute("city", city)
            url = f"{self._base_url}/current.json"
            # httpx URL-escapes query params (spaces, accents in city names).
            params = {"key": self._api_key, "q": city}

            try:
                async with asyncio.timeout(self._timeout):
                    r = await self._http.get(url, params=params, headers=outbound_headers())
            except httpx.RequestError as e:
                raise UpstreamUnavailableError(f"failed to make HTTP request (weather): {e}") from e
            except TimeoutError as e:
                raise UpstreamUnavailableError(
                    f"failed to make HTTP request (weather): no response within {self._timeout}s"
                ) from e

            span.set_attribute("http.response.status_code", r.status_code)
            if r.status_code != HTTP_200_OK:
                log.warning("weather_unexpected_status", status_code=r.status_code, city=city)
                raise UpstreamUnavailableError(f"unexpected status code (weather): {r.status_code}")

            try:
                return WeatherReading.model_validate_json(r.content)
            except ValidationError as e:
                raise DecodeError("failed to decode response (weather)") from e


# --- Module Notes -----------------------------------------------------------
# The API key travels as a query parameter (WeatherAPI convention); it is never logged.
