"""Pydantic model for a post parsed from a markdown rendering."""

from __future__ import annotations

from pydantic import BaseModel


class Post(BaseModel):
    """Structured post extracted from the rendering proxy's markdown."""

    author_name: str = ""
    handle: str = ""
    avatar_url: str = ""
    content: str = ""
    media: list[str] = []
    timestamp: str = ""
    url: str = ""
    verified: bool = True
