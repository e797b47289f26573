"""Real-time history change stream (SSE)."""
import json

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from ..engine import MoodEngine, get_engine

router = APIRouter(prefix="/api/mood", tags=["Change Stream"])


@router.get("/stream")
async def stream_changes(engine: MoodEngine = Depends(get_engine)):
    """
    Stream history change signals via Server-Sent Events (SSE).

    Every successful append or purge emits one `entries-changed` event with
    no entry data; clients re-fetch /api/mood/entries on receipt.

    Usage with JavaScript:
        const source = new EventSource('/api/mood/stream');
        source.addEventListener('entries-changed', () => refreshHistory());
    """
    feed = engine.feed

    async def event_generator():
        async for change in feed.subscribe():
            data = json.dumps(change.to_dict())
            yield f"event: {change.event}\ndata: {data}\n\n"

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no",  # Disable nginx buffering
        },
    )


@router.get("/stream/stats")
async def get_stream_stats(engine: MoodEngine = Depends(get_engine)):
    """Subscriber and publish counters for the change stream."""
    return engine.feed.get_stats()
