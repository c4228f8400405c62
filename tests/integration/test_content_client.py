"""Integration tests for the composition root."""

from pathlib import Path

import httpx
import pytest

from cms_client.application.schemas import ArticleCreate, ArticleQuery, LoginCredentials
from cms_client.config import Settings
from cms_client.domain.entities import DataSource
from cms_client.infrastructure.dependencies import build_content_client
from cms_client.infrastructure.storage import InMemoryKeyValueStore


def _offline_client() -> httpx.AsyncClient:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("connection refused", request=request)

    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


@pytest.mark.asyncio
async def test_offline_demo_session_end_to_end():
    settings = Settings(api_base_url="http://api.test/api", storage_url="memory://")
    http_client = _offline_client()

    async with build_content_client(settings, http_client=http_client) as client:
        login = await client.auth.login(LoginCredentials(email="admin@example.com", password="pw"))
        assert login.source == DataSource.LOCAL
        assert client.auth.is_demo_session()

        created = await client.articles.create_article(
            ArticleCreate(title="Offline draft", content="Drafted without network", category_id="3")
        )
        assert created.data.category.name == "Business"

        listed = await client.articles.list_articles(ArticleQuery(search="offline draft"))
        assert [a.id for a in listed.data.items] == [created.data.id]

        refreshes = []

        async def refresh():
            refreshes.append(1)

        watcher = client.change_watcher(refresh)
        assert await watcher.check_now() is True
        assert refreshes == [1]

    assert not http_client.is_closed
    await http_client.aclose()


@pytest.mark.asyncio
async def test_injected_backend_is_used():
    backend = InMemoryKeyValueStore()
    settings = Settings(api_base_url="http://api.test/api", storage_url="memory://")

    async with build_content_client(settings, http_client=_offline_client(), backend=backend) as client:
        await client.categories.delete_category("1")

    assert "dummyCategories" in backend.keys()
    assert "categoryDeletedAt" in backend.keys()


@pytest.mark.asyncio
async def test_sqlite_profile_is_durable(tmp_path: Path):
    settings = Settings(
        api_base_url="http://api.test/api",
        storage_url=f"sqlite:///{tmp_path / 'profile.db'}",
        default_page_size=5,
    )

    async with build_content_client(settings, http_client=_offline_client()) as client:
        deleted = await client.articles.delete_article("12")
        assert deleted.source == DataSource.LOCAL

    async with build_content_client(settings, http_client=_offline_client()) as client:
        listed = await client.articles.list_articles()

    assert listed.data.total == 11
    assert len(listed.data.items) == 5
    assert listed.data.total_pages == 3


@pytest.mark.asyncio
async def test_owned_http_client_is_closed():
    settings = Settings(api_base_url="http://api.test/api", storage_url="memory://")

    client = build_content_client(settings)
    http_client = client.gateway._http_client
    await client.aclose()

    assert http_client.is_closed


@pytest.mark.asyncio
async def test_search_debouncer_uses_configured_delay():
    settings = Settings(
        api_base_url="http://api.test/api",
        storage_url="memory://",
        search_debounce_seconds=0.01,
    )
    committed = []

    async def on_commit(value):
        committed.append(value)

    async with build_content_client(settings, http_client=_offline_client()) as client:
        debouncer = client.search_debouncer(on_commit)
        debouncer.submit("tech")
        debouncer.submit("technology")
        await debouncer.flush()

    assert committed == ["technology"]
