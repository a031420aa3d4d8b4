"""
zip_weather.api.app

FastAPI app factories for the gateway and resolver services.

Responsibilities:
- Build each FastAPI application and register routers/middleware/error handlers.
- Create and dispose the process-wide HTTP client in the app lifespan.
- Provide a single composition root per service where cross-cutting concerns live.
"""

from __future__ import annotations

from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

import httpx
from fastapi import FastAPI

from zip_weather import __version__
from zip_weather.api.errors import register_exception_handlers
from zip_weather.api.routers.gateway import router as gateway_router
from zip_weather.api.routers.health import router as health_router
from zip_weather.api.routers.resolver import router as resolver_router
from zip_weather.clients.postal import ViaCepClient
from zip_weather.clients.resolver import ResolverClient
from zip_weather.clients.weather import WeatherApiClient
from zip_weather.observability.logging import get_logger
from zip_weather.observability.middleware import RequestContextMiddleware
from zip_weather.services.city_weather import CityWeatherService
from zip_weather.settings import GatewaySettings, ResolverSettings, ServiceSettings

log = get_logger(__name__)

Lifespan = Callable[[FastAPI], AbstractAsyncContextManager[None]]


def _http_client(
    settings: ServiceSettings, transport: httpx.AsyncBaseTransport | None
) -> httpx.AsyncClient:
    # One pooled client per process. Per-phase limits here; each client also
    # enforces a total deadline of the same length.
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        transport=transport,
    )


def _build_app(*, title: str, settings: ServiceSettings, lifespan: Lifespan) -> FastAPI:
    app = FastAPI(title=title, version=__version__, lifespan=lifespan)
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(health_router, tags=["health"])
    return app


def create_gateway_app(
    *,
    settings: GatewaySettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """
    `transport` replaces the network layer of the resolver client (tests pass an
    `httpx.ASGITransport` wrapping the resolver app, or an `httpx.MockTransport`).
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with _http_client(settings, transport) as http:
            app.state.resolver_client = ResolverClient(
                http=http,
                base_url=settings.resolver_base_url,
                timeout=settings.http_timeout_seconds,
            )
            log.info("startup", env=settings.env, resolver=settings.resolver_base_url)
            yield
        log.info("shutdown")

    app = _build_app(title="Zip Weather Gateway", settings=settings, lifespan=lifespan)
    app.include_router(gateway_router)
    return app


def create_resolver_app(
    *,
    settings: ResolverSettings,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        async with _http_client(settings, transport) as http:
            app.state.city_weather_service = CityWeatherService(
                postal=ViaCepClient(
                    http=http,
                    base_url=settings.viacep_base_url,
                    timeout=settings.http_timeout_seconds,
                ),
                weather=WeatherApiClient(
                    http=http,
                    api_key=settings.weather_api_key,
                    base_url=settings.weather_api_base_url,
                    timeout=settings.http_timeout_seconds,
                ),
            )
            if not settings.weather_api_key:
                log.warning("weather_api_key_missing")
            log.info("startup", env=settings.env)
            yield
        log.info("shutdown")

    app = _build_app(title="Zip Weather Resolver", settings=settings, lifespan=lifespan)
    app.include_router(resolver_router)
    return app


# --- Module Notes -----------------------------------------------------------
# The tracer provider is not created here: it must outlive the server (see
# `zip_weather.api.__main__`), and tests install their own in-memory provider.
# Logging is configured by the entrypoint too, before the tracer provider logs.
