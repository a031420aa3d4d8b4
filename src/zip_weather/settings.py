"""
zip_weather.settings

Central configuration models (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the gateway and resolver services.
- Hide secrets from repr/logging (e.g., weather API key).
- Offer cached settings instances for process bootstrap.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ServiceSettings(BaseSettings):
    """
    Settings shared by both services:
    - Env variable names follow the OpenTelemetry conventions where one exists
    - Built once at startup and passed explicitly into the app factory
    """

    model_config = SettingsConfigDict(
        env_prefix="ZIP_WEATHER_",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    env: Literal["dev", "test", "prod"] = "dev"
    log_level: str = "INFO"

    service_name: str = Field(default="zip-weather", validation_alias="OTEL_SERVICE_NAME")
    otlp_endpoint: str = Field(
        default="otel-collector:4317",
        validation_alias="OTEL_EXPORTER_OTLP_ENDPOINT",
    )
    tracing_enabled: bool = True

    api_host: str = "0.0.0.0"
    http_port: int = Field(default=8080, validation_alias="HTTP_PORT")

    # Upper bound for every outbound call made while serving a request.
    http_timeout_seconds: float = 5.0
    # Time in-flight requests get to finish after SIGINT/SIGTERM.
    shutdown_grace_seconds: int = 30


class GatewaySettings(ServiceSettings):
    service_name: str = Field(default="zip-weather-gateway", validation_alias="OTEL_SERVICE_NAME")
    http_port: int = Field(default=8080, validation_alias="HTTP_PORT")

    resolver_base_url: str = Field(
        default="http://localhost:8181",
        validation_alias="EXTERNAL_CALL_URL",
    )


class ResolverSettings(ServiceSettings):
    service_name: str = Field(default="zip-weather-resolver", validation_alias="OTEL_SERVICE_NAME")
    http_port: int = Field(default=8181, validation_alias="HTTP_PORT")

    viacep_base_url: str = "http://viacep.com.br"
    weather_api_base_url: str = "http://api.weatherapi.com/v1"
    weather_api_key: str = Field(default="", validation_alias="WEATHER_API_KEY", repr=False)


@lru_cache(maxsize=1)
def get_gateway_settings() -> GatewaySettings:
    # Cache avoids re-parsing env vars when the entrypoint asks more than once.
    return GatewaySettings()


@lru_cache(maxsize=1)
def get_resolver_settings() -> ResolverSettings:
    return ResolverSettings()


# --- Module Notes -----------------------------------------------------------
# Handlers never read the environment directly; they receive these objects via
# `app.state.settings` (see `zip_weather.api.deps`).
