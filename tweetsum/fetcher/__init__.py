"""Rendering-proxy fetcher and markdown post parser."""

from .extractors import (
    AuthorInfo,
    TweetBody,
    extract_media,
    find_body_section,
    is_media_noise,
    parse_author,
    parse_post,
    parse_timestamp,
    parse_tweet,
    render_content,
)
from .reader import fetch_markdown, read_post

__all__ = [
    "AuthorInfo",
    "TweetBody",
    "extract_media",
    "fetch_markdown",
    "find_body_section",
    "is_media_noise",
    "parse_author",
    "parse_post",
    "parse_timestamp",
    "parse_tweet",
    "read_post",
    "render_content",
]
