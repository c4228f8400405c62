"""Integration tests for the SQLite-backed key-value store."""

from pathlib import Path

import pytest

from cms_client.application.services import article_snapshot_store
from cms_client.infrastructure.database import create_engine_for, create_session_factory
from cms_client.infrastructure.storage import SQLAlchemyKeyValueStore


def _open_store(db_path: Path) -> tuple[SQLAlchemyKeyValueStore, object]:
    engine = create_engine_for(f"sqlite:///{db_path}")
    return SQLAlchemyKeyValueStore(engine, create_session_factory(engine)), engine


@pytest.mark.asyncio
async def test_get_set_remove(tmp_path: Path):
    store, engine = _open_store(tmp_path / "profile" / "local_storage.db")
    try:
        assert await store.get("missing") is None

        await store.set("greeting", "hello")
        assert await store.get("greeting") == "hello"

        await store.set("greeting", "hello again")
        assert await store.get("greeting") == "hello again"

        await store.remove("greeting")
        assert await store.get("greeting") is None

        await store.remove("greeting")
    finally:
        await engine.dispose()

    assert (tmp_path / "profile" / "local_storage.db").exists()


@pytest.mark.asyncio
async def test_values_survive_reopening(tmp_path: Path):
    db_path = tmp_path / "local_storage.db"

    first, engine = _open_store(db_path)
    try:
        await first.set("token", "abc")
    finally:
        await engine.dispose()

    second, engine = _open_store(db_path)
    try:
        assert await second.get("token") == "abc"
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_snapshot_mutations_persist_across_profiles_sessions(tmp_path: Path):
    db_path = tmp_path / "local_storage.db"

    backend, engine = _open_store(db_path)
    try:
        assert await article_snapshot_store(backend).remove("3") is True
    finally:
        await engine.dispose()

    backend, engine = _open_store(db_path)
    try:
        store = article_snapshot_store(backend)
        articles = await store.read_all()
        signals = await store.take_change_signals()
    finally:
        await engine.dispose()

    assert len(articles) == 11
    assert signals.deleted_at is not None
