"""
Stream Notifier

Produces server-sent events for /stream: one fixed JSON payload per interval,
until the client goes away. Each open stream owns exactly one ticker (the
sleep between events); it is released when the generator is closed, whether
by a detected disconnect or by the response task being cancelled.
"""
import asyncio
import json
import logging
from typing import AsyncGenerator, Optional

from fastapi import Request

from gateway.config import settings

logger = logging.getLogger("uvicorn.error")

STREAM_MESSAGE = {"message": "Tokens received"}

_open_streams = 0


def open_stream_count() -> int:
    """Number of streams whose ticker is currently alive."""
    return _open_streams


def format_event(payload: dict) -> str:
    """Frame a payload as a single SSE "data:" event."""
    return f"data: {json.dumps(payload)}\n\n"


async def notification_events(
    request: Optional[Request] = None,
    interval: Optional[float] = None,
) -> AsyncGenerator[str, None]:
    """
    Yield STREAM_MESSAGE as an SSE event every `interval` seconds.

    Stops when request.is_disconnected() reports the client is gone. When the
    surrounding response task is cancelled instead, CancelledError propagates
    out of the sleep and the finally block still releases the ticker.
    """
    global _open_streams
    if interval is None:
        interval = settings.stream_interval_seconds

    _open_streams += 1
    logger.info("[stream] opened (open=%s)", _open_streams)
    try:
        while True:
            if request is not None and await request.is_disconnected():
                break
            yield format_event(STREAM_MESSAGE)
            await asyncio.sleep(interval)
    finally:
        _open_streams -= 1
        logger.info("[stream] closed (open=%s)", _open_streams)
