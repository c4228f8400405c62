"""Change-signal watcher: asyncio poller that refreshes views after local mutations."""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence

from .snapshot_store import SnapshotStore

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0


class ChangeSignalWatcher:
    """Polls the change markers of one or more snapshot stores.

    When any store reports a deletion or update marker, the markers are
    cleared and ``on_change`` is awaited once. The store markers are shared
    through the persistence backend, so this also picks up mutations made
    by other processes using the same durable store.
    """

    def __init__(
        self,
        stores: Sequence[SnapshotStore],
        on_change: Callable[[], Awaitable[None]],
        interval: float = DEFAULT_POLL_INTERVAL,
    ) -> None:
        self._stores = list(stores)
        self._on_change = on_change
        self._interval = interval
        self._running = False
        self._task: asyncio.Task | None = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self) -> None:
        """Start polling; the first check runs immediately."""
        self._running = True
        self._task = asyncio.create_task(self._loop())
        logger.debug("ChangeSignalWatcher started (interval=%.1fs)", self._interval)

    async def stop(self) -> None:
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.debug("ChangeSignalWatcher stopped")

    async def check_now(self) -> bool:
        """Consume pending markers; returns True when a refresh was triggered."""
        taken = []
        for store in self._stores:
            signals = await store.take_change_signals()
            if signals.any:
                logger.debug("Change markers on %s: %s", store.name, signals)
                taken.append((store, signals))
        if not taken:
            return False

        try:
            await self._on_change()
        except Exception:
            # Markers go back so the next poll retries the refresh.
            for store, signals in taken:
                await store.restore_change_signals(signals)
            raise
        return True

    async def _loop(self) -> None:
        while self._running:
            try:
                await self.check_now()
            except asyncio.CancelledError:
                break
            except Exception:
                logger.exception("ChangeSignalWatcher polling error")

            await asyncio.sleep(self._interval)
