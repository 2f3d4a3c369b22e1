"""Post parsing API routes."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from ...errors import TweetsumError
from ...fetcher import read_post
from ...models.post import Post
from ._client import create_client
from ._errors import error_status

router = APIRouter(tags=["posts"])


class PostRequest(BaseModel):
    """Request body for loading a post."""

    url: str


@router.post("/post")
async def load_post(request: Request, body: PostRequest) -> Post:
    """Fetch a status page through the rendering proxy and parse it."""
    settings = request.app.state.settings
    async with create_client(request) as client:
        try:
            return await read_post(
                client,
                body.url,
                proxy_base=settings.fetch.proxy_base,
                avatar_base=settings.avatar.base_url,
                timeout=settings.fetch.timeout_seconds,
            )
        except TweetsumError as exc:
            raise HTTPException(status_code=error_status(exc.kind), detail=str(exc)) from exc
