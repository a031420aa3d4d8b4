"""
zip_weather.api.routers.resolver

Internal resolver endpoint.

Responsibilities:
- Require the `zipcode` query parameter.
- Delegate to `CityWeatherService` and return the temperature report.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from zip_weather.api.deps import city_weather_service_dep
from zip_weather.api.disconnect import cancel_on_disconnect
from zip_weather.domain.models import TemperatureReport
from zip_weather.errors import InputValidationError
from zip_weather.observability.tracing import server_span
from zip_weather.services.city_weather import CityWeatherService

router = APIRouter(tags=["resolver"])


@router.get("/city-weather", response_model=TemperatureReport)
async def city_weather(
    request: Request,
    zipcode: str | None = None,
    service: CityWeatherService = Depends(city_weather_service_dep),
) -> TemperatureReport:
    with server_span("city_weather", request.headers) as span:
        if not zipcode:
            raise InputValidationError("missing 'zipcode' parameter")

        span.set_attribute("zipcode", zipcode)
        return await cancel_on_disconnect(request, service.resolve(postal_code=zipcode))


# --- Module Notes -----------------------------------------------------------
# Format validation happens in the service so it also guards direct callers.
