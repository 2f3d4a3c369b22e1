"""Pydantic models for tweetsum configuration."""

from __future__ import annotations

from pydantic import BaseModel


class LLMConfig(BaseModel):
    """Generation endpoint configuration."""

    api_url: str = "https://api.fireworks.ai/inference/v1/chat/completions"
    model: str = "accounts/sentientfoundation/models/dobby-unhinged-llama-3-3-70b-new"
    max_tokens: int = 700
    temperature: float = 1.0
    timeout_seconds: float = 60.0
    api_key_env: str = "FIREWORKS_API_KEY"


class FetchConfig(BaseModel):
    """Rendering proxy configuration."""

    proxy_base: str = "https://r.jina.ai"
    timeout_seconds: float = 30.0


class RevealConfig(BaseModel):
    """Incremental reveal timing."""

    interval_seconds: float = 0.008
    step: int = 1


class SummaryConfig(BaseModel):
    """Summary prompt behaviour."""

    regenerate_includes_media: bool = False


class AvatarConfig(BaseModel):
    """Avatar mirror configuration."""

    base_url: str = "https://unavatar.io"


class PathsConfig(BaseModel):
    """Paths configuration."""

    data_dir: str | None = None


class TweetsumConfig(BaseModel):
    """Top-level tweetsum configuration."""

    llm: LLMConfig = LLMConfig()
    fetch: FetchConfig = FetchConfig()
    reveal: RevealConfig = RevealConfig()
    summary: SummaryConfig = SummaryConfig()
    avatar: AvatarConfig = AvatarConfig()
    paths: PathsConfig = PathsConfig()
