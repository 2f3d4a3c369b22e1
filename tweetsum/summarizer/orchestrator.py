"""Summary request lifecycle: credentials, request, classification, supersession."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

import httpx

from ..auth import CredentialState
from ..models.config import TweetsumConfig
from ..models.post import Post
from ..models.summary import ErrorKind, SummaryResult
from .llm_client import build_chat_payload, extract_completion_text, is_auth_failure, post_chat_completion
from .prompts import build_summary_prompt

log = logging.getLogger(__name__)

MISSING_KEY_MESSAGE = "Missing API key. Add your Fireworks API key to proceed."
AUTH_REJECTED_MESSAGE = "Error: API key invalid or expired"
EMPTY_RESPONSE_MESSAGE = "No response. Please try again."


def upstream_error_message(status_code: int) -> str:
    return f"Error: API error: {status_code}"


class SummaryOrchestrator:
    """Builds, sends and classifies summary requests for one display surface.

    ``request_summary`` is the bare procedure. ``submit`` wraps it so that only
    the newest request may publish its result: starting a request cancels the
    one in flight, and a result whose generation token is stale is dropped.
    """

    def __init__(
        self,
        credentials: CredentialState,
        client: httpx.AsyncClient,
        settings: TweetsumConfig | None = None,
    ) -> None:
        self.credentials = credentials
        self.client = client
        self.settings = settings or TweetsumConfig()
        self.latest: SummaryResult | None = None
        self._generation = 0
        self._inflight: asyncio.Task[SummaryResult] | None = None

    @property
    def in_flight(self) -> bool:
        return self._inflight is not None and not self._inflight.done()

    async def request_summary(self, post: Post, *, include_media: bool = True) -> SummaryResult:
        """Request one summary of *post* using the active key.

        Only an auth rejection has side effects: the rejected key is
        invalidated through the credential state.
        """
        api_key = self.credentials.active_key
        if not api_key:
            return SummaryResult.failure(ErrorKind.MISSING_CREDENTIAL, MISSING_KEY_MESSAGE)

        llm = self.settings.llm
        prompt = build_summary_prompt(post, include_media=include_media)
        payload = build_chat_payload(
            prompt,
            model=llm.model,
            max_tokens=llm.max_tokens,
            temperature=llm.temperature,
        )

        try:
            response = await post_chat_completion(
                self.client,
                llm.api_url,
                api_key,
                payload,
                timeout=llm.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            log.error("Summary request failed: %s", exc)
            return SummaryResult.failure(ErrorKind.UPSTREAM_ERROR, f"Error: {exc}")

        if is_auth_failure(response.status_code):
            log.warning("Generation endpoint rejected the API key (%d)", response.status_code)
            self.credentials.handle_auth_failure(api_key)
            return SummaryResult.failure(ErrorKind.AUTH_REJECTED, AUTH_REJECTED_MESSAGE, response.status_code)

        if not response.is_success:
            log.error("Generation endpoint returned %d", response.status_code)
            return SummaryResult.failure(
                ErrorKind.UPSTREAM_ERROR,
                upstream_error_message(response.status_code),
                response.status_code,
            )

        try:
            data = response.json()
        except ValueError:
            data = None

        text = extract_completion_text(data)
        if not text:
            return SummaryResult.failure(ErrorKind.EMPTY_RESPONSE, EMPTY_RESPONSE_MESSAGE, response.status_code)
        return SummaryResult(text=text)

    def submit(
        self,
        post: Post,
        *,
        regenerate: bool = False,
        on_result: Callable[[SummaryResult], None] | None = None,
    ) -> asyncio.Task[SummaryResult]:
        """Start a request for *post*, superseding any request in flight.

        Must be called from a running event loop. Regeneration leaves media
        out of the prompt unless ``summary.regenerate_includes_media`` is set.
        """
        self.cancel()
        self._generation += 1
        include_media = not regenerate or self.settings.summary.regenerate_includes_media
        task = asyncio.create_task(self._run(self._generation, post, include_media, on_result))
        self._inflight = task
        return task

    async def wait(self) -> SummaryResult | None:
        """Wait for the request in flight, then return the latest result."""
        if self._inflight is not None:
            await asyncio.wait({self._inflight})
        return self.latest

    def cancel(self) -> None:
        """Cancel the request in flight, if any."""
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()
        self._inflight = None

    async def _run(
        self,
        token: int,
        post: Post,
        include_media: bool,
        on_result: Callable[[SummaryResult], None] | None,
    ) -> SummaryResult:
        result = await self.request_summary(post, include_media=include_media)
        if token != self._generation:
            log.debug("Dropping superseded summary result (generation %d)", token)
            return result
        self.latest = result
        if on_result is not None:
            on_result(result)
        return result
