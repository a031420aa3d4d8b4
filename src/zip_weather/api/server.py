"""
zip_weather.api.server

uvicorn bootstrap with graceful shutdown.

Responsibilities:
- Build a uvicorn server bound to the configured host/port.
- Give in-flight requests a bounded grace period on SIGINT/SIGTERM.
"""

from __future__ import annotations

import uvicorn
from fastapi import FastAPI

from zip_weather.settings import ServiceSettings


def build_server(app: FastAPI, *, settings: ServiceSettings) -> uvicorn.Server:
    config = uvicorn.Config(
        app,
        host=settings.api_host,
        port=settings.http_port,
        log_config=None,  # structlog
        timeout_graceful_shutdown=settings.shutdown_grace_seconds,
    )
    return uvicorn.Server(config)


def serve(app: FastAPI, *, settings: ServiceSettings) -> None:
    # Blocks until a signal arrives: listeners close first, in-flight requests get
    # the grace period, then the app lifespan shuts down.
    build_server(app, settings=settings).run()


# --- Module Notes -----------------------------------------------------------
# uvicorn installs its own SIGINT/SIGTERM handlers; no custom signal plumbing is needed.
