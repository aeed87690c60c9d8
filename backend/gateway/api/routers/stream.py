# gateway/api/routers/stream.py
from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse

from gateway.services.notifier import notification_events

router = APIRouter(tags=["stream"])


@router.get("/stream")
async def stream(request: Request):
    """
    Server-sent event stream.

    Emits data: {"message": "Tokens received"} every STREAM_INTERVAL_SECONDS
    until the client disconnects. No authentication.
    """
    return StreamingResponse(
        notification_events(request),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",
        },
    )
