"""
zip_weather.services.city_weather

Postal code -> city -> current temperature pipeline (resolver service).

Responsibilities:
- Resolve the locality through ViaCEP.
- Fetch current conditions for that locality through WeatherAPI.
- Shape the result into a `TemperatureReport`.
"""

from __future__ import annotations

from zip_weather.clients.postal import ViaCepClient
from zip_weather.clients.weather import WeatherApiClient
from zip_weather.domain.models import TemperatureReport
from zip_weather.domain.postal_code import ensure_valid_postal_code
from zip_weather.observability.logging import get_logger

log = get_logger(__name__)


class CityWeatherService:
    def __init__(self, *, postal: ViaCepClient, weather: WeatherApiClient) -> None:
        self._postal = postal
        self._weather = weather

    async def resolve(self, *, postal_code: str) -> TemperatureReport:
        ensure_valid_postal_code(postal_code)

        # A not-found postal code raises here, so the weather API is never reached.
        locality = await self._postal.lookup(postal_code=postal_code)
        reading = await self._weather.current(city=locality.locality)

        report = TemperatureReport.from_celsius(
            celsius=reading.current.temp_c,
            city=locality.locality,
        )
        log.info("city_weather_resolved", city=report.city, temp_c=report.celsius)
        return report


# --- Module Notes -----------------------------------------------------------
# The city name sent to WeatherAPI is ViaCEP's `localidade`, not the name WeatherAPI
# echoes back in `location.name`; the response reports the former.
