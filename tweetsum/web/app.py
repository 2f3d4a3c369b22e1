"""FastAPI application for the tweetsum API."""

import httpx
from fastapi import FastAPI

from .. import __version__
from ..auth import CredentialState
from ..config import load_settings
from ..models.config import TweetsumConfig
from .routes import keys, posts, summary


def create_app(
    settings: TweetsumConfig | None = None,
    credentials: CredentialState | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    *transport* is handed to every outbound ``httpx.AsyncClient``; tests pass
    an ``httpx.MockTransport`` here.
    """
    app = FastAPI(
        title="Tweetsum",
        description="X/Twitter post parser and summarizer",
        version=__version__,
    )

    if settings is None:
        settings = load_settings()
    if credentials is None:
        credentials = CredentialState.from_environment(key_name=settings.llm.api_key_env)

    app.state.settings = settings
    app.state.credentials = credentials
    app.state.transport = transport

    app.include_router(posts.router, prefix="/api")
    app.include_router(summary.router, prefix="/api")
    app.include_router(keys.router, prefix="/api")

    return app
