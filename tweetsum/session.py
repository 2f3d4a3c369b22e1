"""Per-surface summary session: trigger policy, regeneration and teardown."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable

from .auth import CredentialState
from .models.post import Post
from .models.summary import SummaryResult
from .reveal import Revealer
from .summarizer.orchestrator import SummaryOrchestrator

log = logging.getLogger(__name__)


class SummarySession:
    """Keeps one post, one credential state and one reveal in step.

    A summary is requested automatically as soon as a post and a non-empty
    key are both present. Every finished (non-superseded) result is revealed
    progressively through *on_frame*.
    """

    def __init__(
        self,
        orchestrator: SummaryOrchestrator,
        revealer: Revealer | None = None,
        on_frame: Callable[[str], None] | None = None,
        on_result: Callable[[SummaryResult], None] | None = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.revealer = revealer or Revealer()
        self.on_frame = on_frame
        self.on_result = on_result
        self.post: Post | None = None

    @property
    def credentials(self) -> CredentialState:
        return self.orchestrator.credentials

    @property
    def result(self) -> SummaryResult | None:
        return self.orchestrator.latest

    def set_post(self, post: Post | None) -> asyncio.Task[SummaryResult] | None:
        self.post = post
        return self._maybe_trigger()

    def save_user_key(self, key: str | None) -> asyncio.Task[SummaryResult] | None:
        """Store a user key and, if a post is loaded, summarize with it."""
        if not self.credentials.save_user_key(key):
            return None
        return self._maybe_trigger()

    def regenerate(self) -> asyncio.Task[SummaryResult] | None:
        """Request a fresh summary of the current post."""
        if self.post is None:
            return None
        return self._start(self.post, regenerate=True)

    async def wait(self) -> SummaryResult | None:
        """Wait for the request in flight and for its reveal to finish."""
        await self.orchestrator.wait()
        await self.revealer.wait()
        return self.result

    def close(self) -> None:
        """Stop any request and reveal in progress."""
        self.orchestrator.cancel()
        self.revealer.cancel()

    def _maybe_trigger(self) -> asyncio.Task[SummaryResult] | None:
        if self.post is None or not self.credentials.active_key:
            return None
        return self._start(self.post, regenerate=False)

    def _start(self, post: Post, *, regenerate: bool) -> asyncio.Task[SummaryResult]:
        self.revealer.cancel()
        log.debug("Requesting summary for %s (regenerate=%s)", post.handle or "?", regenerate)
        return self.orchestrator.submit(post, regenerate=regenerate, on_result=self._handle_result)

    def _handle_result(self, result: SummaryResult) -> None:
        if self.on_result is not None:
            self.on_result(result)
        self.revealer.start(result.display_text, self.on_frame)
