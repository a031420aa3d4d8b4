"""
zip_weather.api.__main__

Entrypoint for running either service via `python -m zip_weather.api {gateway|resolver}`.

Responsibilities:
- Load settings.
- Hold the tracer provider open for the lifetime of the server.
- Create the app and start uvicorn.
"""

from __future__ import annotations

import argparse
from collections.abc import Sequence

from zip_weather.api.app import create_gateway_app, create_resolver_app
from zip_weather.api.server import serve
from zip_weather.observability.logging import configure_logging, get_logger
from zip_weather.observability.tracing import tracer_provider
from zip_weather.settings import get_gateway_settings, get_resolver_settings

log = get_logger(__name__)


def run_gateway() -> None:
    settings = get_gateway_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    with tracer_provider(settings=settings):
        app = create_gateway_app(settings=settings)
        log.info("server_starting", port=settings.http_port)
        serve(app, settings=settings)
    log.info("server_stopped")


def run_resolver() -> None:
    settings = get_resolver_settings()
    configure_logging(service_name=settings.service_name, level=settings.log_level)

    with tracer_provider(settings=settings):
        app = create_resolver_app(settings=settings)
        log.info("server_starting", port=settings.http_port)
        serve(app, settings=settings)
    log.info("server_stopped")


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="python -m zip_weather.api")
    parser.add_argument("service", choices=("gateway", "resolver"))
    args = parser.parse_args(argv)

    if args.service == "gateway":
        run_gateway()
    else:
        run_resolver()


if __name__ == "__main__":
    main()


# --- Module Notes -----------------------------------------------------------
# In docker-compose each container runs one of the console scripts
# (`zip-weather-gateway` / `zip-weather-resolver`) with its own env.
