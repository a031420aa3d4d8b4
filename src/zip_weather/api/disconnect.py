"""
zip_weather.api.disconnect

Ties outbound work to the lifetime of the inbound connection.

Responsibilities:
- Run a handler's outbound awaitable alongside a watcher on the ASGI receive channel.
- Cancel the outbound work as soon as the caller disconnects, so the upstream
  connection is released instead of running on to its deadline.
"""

from __future__ import annotations

import asyncio
import contextlib
from collections.abc import Awaitable
from typing import TypeVar

from fastapi import Request

from zip_weather.errors import ClientDisconnectedError
from zip_weather.observability.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")


async def cancel_on_disconnect(request: Request, work: Awaitable[T]) -> T:
    """
    Await `work`, unless the client disconnects first.

    Must be called after the request body has been read (or when there is none):
    the watcher drains the receive channel.
    """

    # Tasks copy the current context, so the active span and log bindings carry over.
    task = asyncio.ensure_future(work)
    watcher = asyncio.create_task(_wait_for_disconnect(request))
    try:
        done, _ = await asyncio.wait({task, watcher}, return_when=asyncio.FIRST_COMPLETED)
    finally:
        watcher.cancel()
        if not task.done():
            task.cancel()
            # Let httpx close the upstream connection before returning.
            with contextlib.suppress(asyncio.CancelledError):
                await task

    if task in done:
        return task.result()

    log.info("client_disconnected")
    raise ClientDisconnectedError()


async def _wait_for_disconnect(request: Request) -> None:
    while True:
        message = await request.receive()
        if message["type"] == "http.disconnect":
            return
