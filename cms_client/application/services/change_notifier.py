"""Change notifier: in-process broadcaster for snapshot mutations."""

import asyncio
import logging
from collections.abc import AsyncGenerator
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    CREATED = "created"
    UPDATED = "updated"
    DELETED = "deleted"
    RESET = "reset"


@dataclass(frozen=True)
class ChangeEvent:
    """One mutation applied to a snapshot store."""

    store: str
    kind: ChangeKind
    entity_id: str | None = None


class ChangeNotifier:
    """Fans mutation events out to every active subscriber.

    Each subscriber gets its own asyncio.Queue; publishing pushes the event
    to all queues. Consumers iterate ``subscribe()`` and stop by closing
    the generator or via ``shutdown()``.
    """

    def __init__(self) -> None:
        self._queues: list[asyncio.Queue[ChangeEvent | None]] = []

    async def subscribe(self) -> AsyncGenerator[ChangeEvent, None]:
        """Yield change events until shutdown; unsubscribes on exit."""
        queue: asyncio.Queue[ChangeEvent | None] = asyncio.Queue()
        self._queues.append(queue)
        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event
        finally:
            self._queues.remove(queue)

    def publish(self, event: ChangeEvent) -> None:
        for queue in self._queues:
            queue.put_nowait(event)
        logger.debug(
            "Published %s on %s (id=%s) to %d subscriber(s)",
            event.kind.value,
            event.store,
            event.entity_id,
            len(self._queues),
        )

    async def shutdown(self) -> None:
        """Disconnect all subscribers."""
        for queue in self._queues:
            queue.put_nowait(None)

    @property
    def subscriber_count(self) -> int:
        return len(self._queues)
