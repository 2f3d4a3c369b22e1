"""Rendering-proxy interaction: fetch a status page as markdown and parse it."""

import logging

import httpx

from ..errors import FetchError, InvalidUrlError
from ..link_utils import (
    DEFAULT_AVATAR_BASE,
    DEFAULT_PROXY_BASE,
    build_proxy_url,
    is_valid_post_url,
    parse_post_status_id,
)
from ..models.post import Post
from .extractors import parse_post

log = logging.getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0


async def fetch_markdown(
    client: httpx.AsyncClient,
    post_url: str,
    *,
    proxy_base: str = DEFAULT_PROXY_BASE,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> str:
    """Fetch the markdown rendering of *post_url*.

    Raises ``FetchError`` on transport failure or any non-200 response. There
    is no retry.
    """
    proxy_url = build_proxy_url(post_url, proxy_base)
    try:
        response = await client.get(proxy_url, timeout=timeout)
    except httpx.HTTPError as exc:
        log.error("Fetching %s failed: %s", proxy_url, exc)
        raise FetchError(f"Failed to load post: {exc}") from exc

    if response.status_code != 200:
        log.error("Rendering proxy returned %d for %s", response.status_code, proxy_url)
        raise FetchError(
            f"Failed to load post: proxy returned {response.status_code}",
            status_code=response.status_code,
        )

    return response.text


async def read_post(
    client: httpx.AsyncClient,
    post_url: str,
    *,
    proxy_base: str = DEFAULT_PROXY_BASE,
    avatar_base: str = DEFAULT_AVATAR_BASE,
    timeout: float = DEFAULT_FETCH_TIMEOUT,
) -> Post:
    """Validate, fetch and parse a single post.

    ``InvalidUrlError`` is raised before any network call when the URL does
    not match the x.com status shape.
    """
    if not is_valid_post_url(post_url):
        raise InvalidUrlError(post_url)

    post_url = post_url.strip()
    markdown = await fetch_markdown(client, post_url, proxy_base=proxy_base, timeout=timeout)
    post = parse_post(markdown, url=post_url, avatar_base=avatar_base)
    log.debug(
        "Parsed status %s: handle=%r media=%d content_chars=%d",
        parse_post_status_id(post_url),
        post.handle,
        len(post.media),
        len(post.content),
    )
    return post
