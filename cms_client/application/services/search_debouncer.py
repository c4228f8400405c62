"""Debounced commit of search text typed by the user."""

import asyncio
import logging
from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5


class SearchDebouncer:
    """Commits a value only after it has been stable for ``delay`` seconds.

    Each ``submit`` cancels the pending commit, so during rapid typing only
    the last value reaches ``on_commit``.
    """

    def __init__(
        self,
        on_commit: Callable[[str], Awaitable[None]],
        delay: float = DEFAULT_DEBOUNCE_SECONDS,
    ) -> None:
        self._on_commit = on_commit
        self._delay = delay
        self._pending: asyncio.Task | None = None
        self._committed: str | None = None

    @property
    def committed(self) -> str | None:
        """Last value handed to ``on_commit``."""
        return self._committed

    @property
    def pending(self) -> bool:
        return self._pending is not None and not self._pending.done()

    def submit(self, value: str) -> None:
        """Must be called from a running event loop."""
        if self.pending:
            self._pending.cancel()
        self._pending = asyncio.get_running_loop().create_task(self._commit_later(value))

    async def flush(self) -> None:
        """Wait for the pending commit, if any."""
        if self._pending is not None:
            try:
                await self._pending
            except asyncio.CancelledError:
                pass

    async def cancel(self) -> None:
        if self.pending:
            self._pending.cancel()
        await self.flush()

    async def _commit_later(self, value: str) -> None:
        await asyncio.sleep(self._delay)
        self._committed = value
        logger.debug("Committing search text %r", value)
        await self._on_commit(value)
