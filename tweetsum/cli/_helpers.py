"""Shared CLI utilities."""

import html
import logging
import re

import httpx
from rich.logging import RichHandler
from rich.panel import Panel
from rich.text import Text

from .. import __version__
from ..models.config import TweetsumConfig
from ..models.post import Post
from ._console import console, err_console

USER_AGENT = f"tweetsum/{__version__}"

_BOLD_SPLIT_RE = re.compile(r"(<b>.*?</b>)", re.DOTALL)
_BREAK_RE = re.compile(r"<br\s*/?>")


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )
    # httpx logs every request at INFO
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)


def _create_client(settings: TweetsumConfig) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        headers={"User-Agent": USER_AGENT},
        timeout=settings.llm.timeout_seconds,
    )


def content_to_text(content: str) -> Text:
    """Render parsed post markup (``<b>``, ``<br />``) as Rich text."""
    text = Text()
    for chunk in _BOLD_SPLIT_RE.split(_BREAK_RE.sub("\n", content)):
        if not chunk:
            continue
        if chunk.startswith("<b>") and chunk.endswith("</b>"):
            text.append(html.unescape(chunk[3:-4]), style="bold")
        else:
            text.append(html.unescape(chunk))
    return text


def post_panel(post: Post) -> Panel:
    title = Text(post.author_name or "Unknown author", style="bold")
    if post.verified:
        title.append(" ✓", style="bold deep_sky_blue1")

    body = Text()
    if post.handle:
        body.append(post.handle, style="dim")
        body.append("\n\n")
    body.append_text(content_to_text(post.content) if post.content else Text("(no text)", style="dim italic"))
    for url in post.media:
        body.append(f"\n{url}", style="cyan")
    return Panel(
        body,
        title=title,
        subtitle=post.timestamp or None,
        title_align="left",
        subtitle_align="right",
    )


def print_post(post: Post) -> None:
    console.print(post_panel(post))


def mask_key(key: str) -> str:
    if len(key) <= 8:
        return "*" * len(key)
    return f"{key[:3]}…{key[-4:]}"
