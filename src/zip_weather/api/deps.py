"""
zip_weather.api.deps

FastAPI dependency wiring for the API layer.

Responsibilities:
- Encapsulate app.state access patterns (settings, clients, services).
"""

from __future__ import annotations

from fastapi import Request

from zip_weather.clients.resolver import ResolverClient
from zip_weather.services.city_weather import CityWeatherService
from zip_weather.settings import ServiceSettings


def settings_dep(request: Request) -> ServiceSettings:
    # Stored once by the app factory; handlers never touch the environment.
    return request.app.state.settings  # type: ignore[attr-defined]


def resolver_client_dep(request: Request) -> ResolverClient:
    # Created in the gateway lifespan (see `zip_weather.api.app.create_gateway_app`).
    return request.app.state.resolver_client  # type: ignore[attr-defined]


def city_weather_service_dep(request: Request) -> CityWeatherService:
    return request.app.state.city_weather_service  # type: ignore[attr-defined]
