"""
tests.conftest

Shared fixtures for the gateway/resolver test suite.

Responsibilities:
- Install an in-memory tracer provider once per session so spans can be asserted.
- Fake the ViaCEP and WeatherAPI upstreams with `httpx.MockTransport`.
- Run apps in-process (lifespan included) behind `httpx.ASGITransport`.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import httpx
import pytest
from fastapi import FastAPI
from opentelemetry import trace
from opentelemetry.propagate import set_global_textmap
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor
from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter
from opentelemetry.trace.propagation.tracecontext import TraceContextTextMapPropagator

from zip_weather.settings import GatewaySettings, ResolverSettings

# The global provider can only be set once per process.
_EXPORTER = InMemorySpanExporter()
_PROVIDER = TracerProvider()
_PROVIDER.add_span_processor(SimpleSpanProcessor(_EXPORTER))
trace.set_tracer_provider(_PROVIDER)
set_global_textmap(TraceContextTextMapPropagator())

VIACEP_HOST = "viacep.test"
WEATHER_HOST = "weather.test"

VIACEP_OK: dict[str, Any] = {
    "cep": "01001-000",
    "logradouro": "Praça da Sé",
    "complemento": "lado ímpar",
    "bairro": "Sé",
    "localidade": "São Paulo",
    "uf": "SP",
    "ibge": "3550308",
    "gia": "1004",
    "ddd": "11",
    "siafi": "7107",
}


def weather_payload(temp_c: float, *, name: str = "Sao Paulo") -> dict[str, Any]:
    return {
        "location": {
            "name": name,
            "region": "Sao Paulo",
            "country": "Brazil",
            "lat": -23.53,
            "lon": -46.62,
            "tz_id": "America/Sao_Paulo",
            "localtime_epoch": 1706300000,
            "localtime": "2024-01-26 17:13",
        },
        "current": {"temp_c": temp_c, "condition": {"text": "Sunny"}},
    }


@dataclass
class FakeUpstreams:
    """
    Scripted ViaCEP/WeatherAPI. Tests mutate the fields, then inspect `requests`.
    """

    viacep_status: int = 200
    viacep_body: Any = field(default_factory=lambda: dict(VIACEP_OK))
    viacep_error: Exception | None = None

    weather_status: int = 200
    weather_body: Any = field(default_factory=lambda: weather_payload(25.0))
    weather_error: Exception | None = None

    # Seconds the fake ViaCEP waits before answering.
    delay: float = 0.0
    # Set when that wait is cancelled by the caller.
    cancelled: asyncio.Event = field(default_factory=asyncio.Event)

    requests: list[httpx.Request] = field(default_factory=list)

    def hits(self, host: str) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.host == host]

    async def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if request.url.host == VIACEP_HOST:
            if self.delay:
                try:
                    await asyncio.sleep(self.delay)
                except asyncio.CancelledError:
                    self.cancelled.set()
                    raise
            return self._respond(self.viacep_status, self.viacep_body, self.viacep_error)
        if request.url.host == WEATHER_HOST:
            return self._respond(self.weather_status, self.weather_body, self.weather_error)
        raise AssertionError(f"unexpected upstream call: {request.url}")

    @staticmethod
    def _respond(status: int, body: Any, error: Exception | None) -> httpx.Response:
        if error is not None:
            raise error
        if isinstance(body, bytes):
            return httpx.Response(status, content=body)
        return httpx.Response(status, json=body)

    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)


@pytest.fixture
def spans() -> Iterator[InMemorySpanExporter]:
    _EXPORTER.clear()
    yield _EXPORTER
    _EXPORTER.clear()


@pytest.fixture
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture
def resolver_settings() -> ResolverSettings:
    return ResolverSettings(
        env="test",
        tracing_enabled=False,
        viacep_base_url=f"http://{VIACEP_HOST}",
        weather_api_base_url=f"http://{WEATHER_HOST}/v1",
        weather_api_key="test-key",
    )


@pytest.fixture
def gateway_settings() -> GatewaySettings:
    return GatewaySettings(
        env="test",
        tracing_enabled=False,
        resolver_base_url="http://resolver.test",
    )


@asynccontextmanager
async def running(app: FastAPI) -> AsyncIterator[httpx.AsyncClient]:
    # httpx ASGITransport does not manage lifespan automatically; do it explicitly.
    async with app.router.lifespan_context(app):
        transport = httpx.ASGITransport(app=app)
        async with httpx.AsyncClient(transport=transport, base_url="http://test") as client:
            yield client
