"""Summary API routes."""

from collections.abc import AsyncIterator

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, StreamingResponse
from pydantic import BaseModel

from ...models.post import Post
from ...models.summary import SummaryResult
from ...reveal import reveal_prefixes
from ...summarizer import SummaryOrchestrator
from ._client import create_client
from ._errors import error_status

router = APIRouter(tags=["summary"])


class SummaryRequest(BaseModel):
    """Request body for summarizing a parsed post."""

    post: Post
    regenerate: bool = False
    stream: bool = False


async def _reveal_deltas(text: str, interval: float, step: int) -> AsyncIterator[str]:
    shown = 0
    async for prefix in reveal_prefixes(text, interval=interval, step=step):
        yield prefix[shown:]
        shown = len(prefix)


@router.post("/summary")
async def create_summary(request: Request, body: SummaryRequest):
    """
    Summarize a post.

    With ``stream`` set, a successful summary is sent as ``text/plain`` chunks
    paced like the progressive reveal; concatenated they form the full text.
    Failures are always JSON with the classified error kind.
    """
    settings = request.app.state.settings
    async with create_client(request) as client:
        orchestrator = SummaryOrchestrator(request.app.state.credentials, client, settings)
        include_media = not body.regenerate or settings.summary.regenerate_includes_media
        result: SummaryResult = await orchestrator.request_summary(body.post, include_media=include_media)

    if result.error is not None:
        return JSONResponse(result.model_dump(mode="json"), status_code=error_status(result.error))

    if body.stream:
        return StreamingResponse(
            _reveal_deltas(result.text, settings.reveal.interval_seconds, settings.reveal.step),
            media_type="text/plain; charset=utf-8",
        )
    return result
