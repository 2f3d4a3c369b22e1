"""Outbound HTTP client shared by the routes."""

import httpx
from fastapi import Request

from ... import __version__


def create_client(request: Request) -> httpx.AsyncClient:
    settings = request.app.state.settings
    return httpx.AsyncClient(
        transport=request.app.state.transport,
        headers={"User-Agent": f"tweetsum/{__version__}"},
        timeout=settings.llm.timeout_seconds,
    )
