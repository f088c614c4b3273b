"""Animated per-job status line shown under the audio element.

The animation runs as a repeating ``asyncio`` task owned by an async
context manager, so every way out of a pipeline stage (success, failure,
cancellation) stops the timer before the status text is replaced.
"""

import asyncio
import logging
from collections.abc import AsyncIterator, Callable
from contextlib import asynccontextmanager, suppress

from notescribe.document.dom import Element

logger = logging.getLogger(__name__)

PROGRESS_CLASS = "transcription-progress"


class DotCycle:
    """Trailing-dot counter: ticks 1-5 give 1-5 dots, tick 6 gives none and restarts."""

    def __init__(self, max_dots: int = 5) -> None:
        self.max_dots = max_dots
        self._count = 0

    def advance(self) -> str:
        if self._count < self.max_dots:
            self._count += 1
        else:
            self._count = 0
        return "." * self._count


class ProgressReporter:
    """Status element for one job.

    Args:
        anchor: Element the status line is inserted after.
        label: Initial text.
        interval: Seconds between animation ticks.
    """

    def __init__(self, anchor: Element, label: str, interval: float = 0.5) -> None:
        self.interval = interval
        self.ticks = 0
        self.element = Element("div", text=label, classes=[PROGRESS_CLASS])
        self._task: asyncio.Task | None = None
        if anchor.parent is not None:
            anchor.parent.insert_after(self.element, anchor)
        else:
            logger.debug("Anchor %r is detached; progress stays off-document", anchor)

    @property
    def text(self) -> str:
        return self.element.text

    @property
    def is_animating(self) -> bool:
        return self._task is not None and not self._task.done()

    @asynccontextmanager
    async def animate(self, render: Callable[[str], str]) -> AsyncIterator["ProgressReporter"]:
        """Redraw the status with ``render(dots)`` every ``interval`` while inside the block."""
        self.element.text = render("")
        self._task = asyncio.create_task(self._tick(render, DotCycle()))
        try:
            yield self
        finally:
            self._task.cancel()
            with suppress(asyncio.CancelledError):
                await self._task
            self._task = None

    async def _tick(self, render: Callable[[str], str], cycle: DotCycle) -> None:
        while True:
            await asyncio.sleep(self.interval)
            self.ticks += 1
            self.element.text = render(cycle.advance())

    def show(self, text: str) -> None:
        """Replace the status with a fixed (terminal) message."""
        self.element.text = text

    async def dismiss(self, delay: float) -> None:
        """Keep the current message visible for ``delay`` seconds, then remove it."""
        try:
            await asyncio.sleep(delay)
        finally:
            self.element.remove()
