"""Parse command."""

import asyncio
from pathlib import Path

import rich_click as click

from ..config import load_settings
from ..errors import INVALID_URL_MESSAGE, FetchError
from ..fetcher import parse_post, read_post
from ..link_utils import is_valid_post_url
from ..models.config import TweetsumConfig
from ..models.post import Post
from ._console import console
from ._helpers import _create_client, print_post


@click.command()
@click.argument("url", required=False)
@click.option(
    "--file",
    "-f",
    "markdown_file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Parse a saved markdown rendering instead of fetching",
)
@click.option("--json", "as_json", is_flag=True, default=False, help="Print the parsed post as JSON")
def parse(url: str | None, markdown_file: Path | None, as_json: bool):
    """Show the structured post extracted from a status page."""
    settings = load_settings()

    if markdown_file is not None:
        post = parse_post(
            markdown_file.read_text(encoding="utf-8"),
            url=url or "",
            avatar_base=settings.avatar.base_url,
        )
    elif url:
        if not is_valid_post_url(url):
            raise click.BadParameter(INVALID_URL_MESSAGE, param_hint="URL")
        try:
            post = asyncio.run(_fetch(url, settings))
        except FetchError as exc:
            raise click.ClickException(str(exc)) from exc
    else:
        raise click.UsageError("Provide a post URL or --file")

    if as_json:
        console.print_json(post.model_dump_json())
    else:
        print_post(post)


async def _fetch(url: str, settings: TweetsumConfig) -> Post:
    async with _create_client(settings) as client:
        return await read_post(
            client,
            url,
            proxy_base=settings.fetch.proxy_base,
            avatar_base=settings.avatar.base_url,
            timeout=settings.fetch.timeout_seconds,
        )
