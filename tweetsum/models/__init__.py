"""Pydantic models for the tweetsum application."""

from __future__ import annotations

from .config import (
    AvatarConfig,
    FetchConfig,
    LLMConfig,
    PathsConfig,
    RevealConfig,
    SummaryConfig,
    TweetsumConfig,
)
from .post import Post
from .summary import ErrorKind, SummaryResult

__all__ = [
    "AvatarConfig",
    "ErrorKind",
    "FetchConfig",
    "LLMConfig",
    "PathsConfig",
    "Post",
    "RevealConfig",
    "SummaryConfig",
    "SummaryResult",
    "TweetsumConfig",
]
