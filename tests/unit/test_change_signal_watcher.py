"""Unit tests for the ChangeSignalWatcher and ChangeNotifier."""

import asyncio

import pytest

from cms_client.application.services import (
    ChangeEvent,
    ChangeKind,
    ChangeNotifier,
    ChangeSignalWatcher,
    article_snapshot_store,
    category_snapshot_store,
)
from cms_client.infrastructure.storage import InMemoryKeyValueStore


class RefreshCounter:
    def __init__(self):
        self.count = 0

    async def __call__(self) -> None:
        self.count += 1


@pytest.mark.asyncio
async def test_check_now_triggers_once_and_consumes_markers():
    backend = InMemoryKeyValueStore()
    articles = article_snapshot_store(backend)
    categories = category_snapshot_store(backend)
    refresh = RefreshCounter()
    watcher = ChangeSignalWatcher([articles, categories], refresh)

    assert await watcher.check_now() is False

    await articles.remove("1")
    await categories.remove("2")

    assert await watcher.check_now() is True
    assert await watcher.check_now() is False
    assert refresh.count == 1


@pytest.mark.asyncio
async def test_polling_loop_picks_up_changes():
    backend = InMemoryKeyValueStore()
    articles = article_snapshot_store(backend)
    refresh = RefreshCounter()
    watcher = ChangeSignalWatcher([articles], refresh, interval=0.01)

    await watcher.start()
    assert watcher.running
    await articles.remove("4")

    for _ in range(100):
        if refresh.count:
            break
        await asyncio.sleep(0.01)

    await watcher.stop()

    assert refresh.count == 1
    assert not watcher.running


@pytest.mark.asyncio
async def test_failed_refresh_keeps_markers_for_next_check():
    backend = InMemoryKeyValueStore()
    articles = article_snapshot_store(backend)
    attempts = []

    async def flaky_refresh():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("view gone")

    watcher = ChangeSignalWatcher([articles], flaky_refresh)
    await articles.remove("1")

    with pytest.raises(RuntimeError):
        await watcher.check_now()

    assert await watcher.check_now() is True
    assert await watcher.check_now() is False
    assert len(attempts) == 2


@pytest.mark.asyncio
async def test_polling_retries_refresh_after_error():
    backend = InMemoryKeyValueStore()
    articles = article_snapshot_store(backend)
    attempts = []

    async def flaky_refresh():
        attempts.append(1)
        if len(attempts) == 1:
            raise RuntimeError("view gone")

    watcher = ChangeSignalWatcher([articles], flaky_refresh, interval=0.01)
    await watcher.start()
    await articles.remove("1")
    for _ in range(100):
        if len(attempts) >= 2:
            break
        await asyncio.sleep(0.01)
    await watcher.stop()

    assert len(attempts) == 2
    assert not (await articles.take_change_signals()).any


@pytest.mark.asyncio
async def test_notifier_fans_out_to_every_subscriber():
    notifier = ChangeNotifier()
    first, second = [], []

    async def consume(sink):
        async for event in notifier.subscribe():
            sink.append(event)

    tasks = [asyncio.create_task(consume(first)), asyncio.create_task(consume(second))]
    while notifier.subscriber_count < 2:
        await asyncio.sleep(0)

    event = ChangeEvent(store="articles", kind=ChangeKind.RESET)
    notifier.publish(event)
    await notifier.shutdown()
    await asyncio.wait_for(asyncio.gather(*tasks), timeout=1)

    assert first == [event]
    assert second == [event]
    assert notifier.subscriber_count == 0
