"""Utilities for validating post URLs and building derived URLs."""

from __future__ import annotations

import re

_POST_URL_RE = re.compile(r"^https?://(?:www\.)?x\.com/[a-zA-Z0-9_]+/status/[0-9]+")
_STATUS_ID_RE = re.compile(r"/status/([0-9]+)")

DEFAULT_PROXY_BASE = "https://r.jina.ai"
DEFAULT_AVATAR_BASE = "https://unavatar.io"


def is_valid_post_url(value: str | None) -> bool:
    """Return True when *value* starts with an x.com status URL.

    Leading and trailing whitespace is ignored and anything after the status
    id (query strings, ``/photo/1`` and so on) is allowed.
    """
    if not value:
        return False
    return _POST_URL_RE.match(value.strip()) is not None


def parse_post_status_id(url: str | None) -> str | None:
    """Extract the numeric status id from a post URL."""
    if not url:
        return None
    match = _STATUS_ID_RE.search(url)
    if not match:
        return None
    return match.group(1)


def build_proxy_url(post_url: str, proxy_base: str = DEFAULT_PROXY_BASE) -> str:
    """Return the rendering-proxy URL that serves *post_url* as markdown."""
    return f"{proxy_base.rstrip('/')}/{post_url.strip()}"


def build_avatar_url(handle: str, base_url: str = DEFAULT_AVATAR_BASE) -> str:
    """Return the avatar-mirror URL for *handle*. Never fetched here."""
    return f"{base_url.rstrip('/')}/x/{handle.replace('@', '', 1)}"
