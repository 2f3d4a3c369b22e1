"""Progressive display of an already complete summary."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Callable, Iterator

DEFAULT_INTERVAL_SECONDS = 0.008


def iter_prefixes(text: str, step: int = 1) -> Iterator[str]:
    """Yield growing prefixes of *text*, ending with *text* itself.

    Calling it again starts over. Nothing is yielded for an empty string.
    """
    if step < 1:
        raise ValueError("step must be at least 1")
    length = len(text)
    for end in range(step, length + step, step):
        yield text[: min(end, length)]


async def reveal_prefixes(
    text: str,
    *,
    interval: float = DEFAULT_INTERVAL_SECONDS,
    step: int = 1,
) -> AsyncIterator[str]:
    """Async variant of ``iter_prefixes`` that waits *interval* between items."""
    first = True
    for prefix in iter_prefixes(text, step):
        if not first:
            await asyncio.sleep(interval)
        first = False
        yield prefix


class Revealer:
    """Runs one reveal at a time as a cancellable task.

    ``current`` always holds the last prefix shown; after an uncancelled
    reveal it equals the full text.
    """

    def __init__(self, interval: float = DEFAULT_INTERVAL_SECONDS, step: int = 1) -> None:
        self.interval = interval
        self.step = step
        self.current = ""
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self, text: str, on_frame: Callable[[str], None] | None = None) -> asyncio.Task[None]:
        """Begin revealing *text*, cancelling any reveal still running."""
        self.cancel()
        self.current = ""
        self._task = asyncio.create_task(self._play(text, on_frame))
        return self._task

    def cancel(self) -> None:
        if self._task is not None and not self._task.done():
            self._task.cancel()

    async def wait(self) -> None:
        """Wait for the current reveal to finish or be cancelled."""
        if self._task is not None:
            await asyncio.wait({self._task})

    async def _play(self, text: str, on_frame: Callable[[str], None] | None) -> None:
        async for prefix in reveal_prefixes(text, interval=self.interval, step=self.step):
            self.current = prefix
            if on_frame is not None:
                on_frame(prefix)
