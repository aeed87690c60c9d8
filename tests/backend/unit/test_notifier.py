"""
Unit tests for services.notifier module.
Tests event framing and ticker lifetime of the SSE generator.
"""
import json

import pytest
from unittest.mock import AsyncMock, MagicMock

from gateway.services import notifier
from gateway.services.notifier import STREAM_MESSAGE, format_event, notification_events


def _fake_request(disconnected_after: int):
    """Request whose is_disconnected() turns True after N checks."""
    request = MagicMock()
    request.is_disconnected = AsyncMock(side_effect=[False] * disconnected_after + [True])
    return request


class TestFormatEvent:

    def test_format_event_is_sse_data_frame(self):
        frame = format_event({"message": "hi"})
        assert frame.startswith("data: ")
        assert frame.endswith("\n\n")
        assert json.loads(frame[len("data: "):]) == {"message": "hi"}


class TestNotificationEvents:

    @pytest.mark.asyncio
    async def test_emits_until_disconnected(self):
        before = notifier.open_stream_count()
        events = [e async for e in notification_events(_fake_request(3), interval=0)]

        assert events == [format_event(STREAM_MESSAGE)] * 3
        assert notifier.open_stream_count() == before

    @pytest.mark.asyncio
    async def test_ticker_counted_while_open_and_released_on_close(self):
        before = notifier.open_stream_count()
        gen = notification_events(interval=0)

        first = await gen.__anext__()
        assert json.loads(first[len("data: "):]) == {"message": "Tokens received"}
        assert notifier.open_stream_count() == before + 1

        await gen.aclose()
        assert notifier.open_stream_count() == before

    @pytest.mark.asyncio
    async def test_already_disconnected_client_gets_nothing(self):
        events = [e async for e in notification_events(_fake_request(0), interval=0)]
        assert events == []
