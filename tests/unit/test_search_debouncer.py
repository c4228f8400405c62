"""Unit tests for the SearchDebouncer."""

import pytest

from cms_client.application.services import SearchDebouncer


@pytest.mark.asyncio
async def test_only_last_value_is_committed():
    committed = []

    async def on_commit(value):
        committed.append(value)

    debouncer = SearchDebouncer(on_commit, delay=0.05)
    for text in ["w", "wo", "wor", "world"]:
        debouncer.submit(text)
    assert debouncer.pending

    await debouncer.flush()

    assert committed == ["world"]
    assert debouncer.committed == "world"
    assert not debouncer.pending


@pytest.mark.asyncio
async def test_cancel_drops_pending_value():
    committed = []

    async def on_commit(value):
        committed.append(value)

    debouncer = SearchDebouncer(on_commit, delay=0.05)
    debouncer.submit("abc")
    await debouncer.cancel()

    assert committed == []
    assert debouncer.committed is None


@pytest.mark.asyncio
async def test_flush_without_pending_is_noop():
    async def on_commit(value):
        raise AssertionError("should not commit")

    debouncer = SearchDebouncer(on_commit)

    await debouncer.flush()

    assert debouncer.committed is None
