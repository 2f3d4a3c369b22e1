"""Summarize command."""

import asyncio
import sys

import rich_click as click
from rich.live import Live
from rich.markdown import Markdown

from ..auth import CredentialState
from ..config import load_settings
from ..errors import INVALID_URL_MESSAGE, FetchError
from ..fetcher import read_post
from ..link_utils import is_valid_post_url
from ..models.config import TweetsumConfig
from ..models.post import Post
from ..models.summary import ErrorKind, SummaryResult
from ..reveal import Revealer
from ..session import SummarySession
from ..summarizer import EMPTY_RESPONSE_MESSAGE, MISSING_KEY_MESSAGE, SummaryOrchestrator
from ._console import console, failure_text
from ._helpers import _create_client, print_post

_REPROMPT_ERRORS = (ErrorKind.MISSING_CREDENTIAL, ErrorKind.AUTH_REJECTED)


@click.command()
@click.argument("url")
@click.option("--reveal/--no-reveal", default=True, help="Reveal the summary progressively")
@click.option(
    "--interactive",
    "-i",
    is_flag=True,
    default=False,
    help="Prompt for an API key when needed and offer to regenerate",
)
def summarize(url: str, reveal: bool, interactive: bool):
    """Fetch an X/Twitter post and summarize it."""
    if not is_valid_post_url(url):
        raise click.BadParameter(INVALID_URL_MESSAGE, param_hint="URL")

    settings = load_settings()
    credentials = CredentialState.from_environment(key_name=settings.llm.api_key_env)

    try:
        result = asyncio.run(_summarize(url, settings, credentials, reveal=reveal, interactive=interactive))
    except FetchError as exc:
        raise click.ClickException(str(exc)) from exc

    if not result.ok:
        sys.exit(1)


async def _summarize(
    url: str,
    settings: TweetsumConfig,
    credentials: CredentialState,
    *,
    reveal: bool,
    interactive: bool,
) -> SummaryResult:
    async with _create_client(settings) as client:
        console.print("Fetching post...")
        post = await read_post(
            client,
            url,
            proxy_base=settings.fetch.proxy_base,
            avatar_base=settings.avatar.base_url,
            timeout=settings.fetch.timeout_seconds,
        )
        print_post(post)

        orchestrator = SummaryOrchestrator(credentials, client, settings)
        if reveal:
            revealer = Revealer(settings.reveal.interval_seconds, settings.reveal.step)
        else:
            revealer = Revealer(0.0, sys.maxsize)
        session = SummarySession(orchestrator, revealer)

        regenerate = False
        try:
            while True:
                if not credentials.active_key:
                    if not interactive:
                        missing = SummaryResult.failure(ErrorKind.MISSING_CREDENTIAL, MISSING_KEY_MESSAGE)
                        console.print(failure_text(missing))
                        console.print(f"Set ${settings.llm.api_key_env} or run [bold]tweetsum key set[/bold].")
                        return missing
                    _prompt_for_key(credentials)

                result = await _show_summary(session, post, regenerate=regenerate, reveal=reveal)

                if not interactive:
                    return result
                if result.error in _REPROMPT_ERRORS:
                    regenerate = False
                    continue
                if not click.confirm("Regenerate?", default=False):
                    return result
                regenerate = True
        finally:
            session.close()


def _prompt_for_key(credentials: CredentialState) -> None:
    console.print("Add your Fireworks API key to generate summaries (https://app.fireworks.ai/settings/users/api-keys)")
    while not credentials.active_key:
        key = click.prompt("Fireworks API key", hide_input=True, default="", show_default=False)
        credentials.save_user_key(key)


async def _show_summary(session: SummarySession, post: Post, *, regenerate: bool, reveal: bool) -> SummaryResult:
    console.print("[dim]Summarizing...[/dim]")
    if not reveal:
        session.on_frame = None
        _trigger(session, post, regenerate)
        result = await session.wait()
    else:
        with Live(console=console, refresh_per_second=30) as live:
            session.on_frame = lambda prefix: live.update(Markdown(prefix))
            _trigger(session, post, regenerate)
            result = await session.wait()

    if result is None:
        result = SummaryResult.failure(ErrorKind.EMPTY_RESPONSE, EMPTY_RESPONSE_MESSAGE)
    if not reveal:
        console.print(Markdown(result.text) if result.ok else failure_text(result))
    return result


def _trigger(session: SummarySession, post: Post, regenerate: bool) -> None:
    if regenerate and session.post is not None:
        session.regenerate()
    else:
        session.set_post(post)
