"""Tweet Summarizer - structured X/Twitter posts and LLM summaries from markdown renderings."""

try:
    from importlib.metadata import version

    __version__ = version("tweetsum")
except Exception:
    __version__ = "0.0.0-dev"
