"""Post parsing and extraction from the rendering proxy's markdown output.

The proxy renders an x.com status page into loosely structured markdown.
Everything here is best-effort: a pattern that does not match leaves the
corresponding field at its default and parsing never raises.
"""

import html
import re
from collections.abc import Callable
from dataclasses import dataclass, field

from ..link_utils import DEFAULT_AVATAR_BASE, build_avatar_url
from ..models.post import Post

# [Display Name ![badge](...)](https://x.com/handle)
_AUTHOR_NAME_RE = re.compile(r"\[(.*?) !\[.*?\]\(.*?\)\]\(https://x\.com/[a-zA-Z0-9_]+\)")
# [@handle](https://x.com/handle), target must repeat the label's handle
_HANDLE_RE = re.compile(r"\[@([a-zA-Z0-9_]+)\]\(https://x\.com/\1\)")
# Body runs from the paragraph after "Conversation" up to the engagement
# counters, which start a paragraph with an ASCII digit.
_BODY_RE = re.compile(r"Conversation.*?\n\n(.*?)\n\n[0-9]", re.DOTALL)
_TIMESTAMP_RE = re.compile(r"\[(.*?) · (.*?)\]\(")

_IMAGE_RE = re.compile(r"!\[.*?\]\((.*?)\)")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_EMPTY_LINK_RE = re.compile(r"\[\]\([^)]+\)")
_BOLD_RE = re.compile(r"\*\*(.*?)\*\*")
_TRAILING_BREAKS_RE = re.compile(r"(?:<br\s*/?>)+$")

TIMESTAMP_SEPARATOR = " · "

# Image targets in the body that are page chrome rather than post media.
MEDIA_NOISE_PATTERNS = (
    "abs-0.twimg.com/emoji",
    "unavatar.io",
    "profile_images",
)


@dataclass(frozen=True)
class AuthorInfo:
    """Author fields found in the markdown."""

    author_name: str = ""
    handle: str = ""


@dataclass(frozen=True)
class TweetBody:
    """Body fields found in the markdown."""

    content: str = ""
    timestamp: str = ""
    media: list[str] = field(default_factory=list)


def parse_author(markdown: str) -> AuthorInfo:
    """Extract the author's display name and ``@handle``.

    The display name falls back to the bare handle when only the handle
    link is present.
    """
    author_name = ""
    handle = ""

    name_match = _AUTHOR_NAME_RE.search(markdown)
    if name_match:
        author_name = name_match.group(1).strip()

    handle_match = _HANDLE_RE.search(markdown)
    if handle_match:
        handle = f"@{handle_match.group(1)}"

    if not author_name:
        author_name = handle.replace("@", "", 1)

    return AuthorInfo(author_name=author_name, handle=handle)


def find_body_section(markdown: str) -> str | None:
    """Return the raw markdown of the post body, or None.

    This depends on the proxy's page layout: the body follows the
    ``Conversation`` heading and ends before the first paragraph starting
    with a digit (view/like counters).
    """
    match = _BODY_RE.search(markdown)
    if not match:
        return None
    return match.group(1)


def is_media_noise(url: str) -> bool:
    """Check whether an image URL is page chrome (emoji, avatars)."""
    return any(pattern in url for pattern in MEDIA_NOISE_PATTERNS)


def extract_media(section: str) -> list[str]:
    """Return image/video URLs in order of appearance, minus page chrome."""
    return [url for url in _IMAGE_RE.findall(section) if not is_media_noise(url)]


def render_content(section: str) -> str:
    """Convert body markdown to display markup.

    Images are dropped and links flattened to their label. The remaining
    text is HTML-escaped so the only markup left is ``<b>`` and ``<br />``.
    """
    text = _IMAGE_RE.sub("", section)
    text = _LINK_RE.sub(r"\1", text)
    text = _EMPTY_LINK_RE.sub("", text)
    text = text.strip()

    text = html.escape(text, quote=False)
    text = _BOLD_RE.sub(r"<b>\1</b>", text)
    text = text.replace("\n", "<br />")
    return _TRAILING_BREAKS_RE.sub("", text)


def parse_timestamp(markdown: str) -> str:
    """Return the ``"<date> · <time>"`` permalink label, or ``""``."""
    match = _TIMESTAMP_RE.search(markdown)
    if not match:
        return ""
    return f"{match.group(1)}{TIMESTAMP_SEPARATOR}{match.group(2)}"


def parse_tweet(
    markdown: str,
    find_section: Callable[[str], str | None] = find_body_section,
) -> TweetBody:
    """Extract body content, media and timestamp from the markdown."""
    content = ""
    media: list[str] = []

    section = find_section(markdown)
    if section is not None:
        media = extract_media(section)
        content = render_content(section)

    return TweetBody(content=content, timestamp=parse_timestamp(markdown), media=media)


def parse_post(markdown: str, *, url: str = "", avatar_base: str = DEFAULT_AVATAR_BASE) -> Post:
    """Assemble a full ``Post`` from the markdown rendering of a status page."""
    author = parse_author(markdown)
    body = parse_tweet(markdown)
    return Post(
        author_name=author.author_name,
        handle=author.handle,
        avatar_url=build_avatar_url(author.handle, avatar_base),
        content=body.content,
        media=body.media,
        timestamp=body.timestamp,
        url=url.strip(),
    )
