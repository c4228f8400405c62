"""Unit tests for the CategoryService."""

import httpx
import pytest

from cms_client.application.schemas import CategoryCreate, CategoryQuery, CategoryUpdate
from cms_client.application.services import (
    CategoryService,
    FallbackResolver,
    article_snapshot_store,
    category_snapshot_store,
)
from cms_client.domain.entities import DataSource, category_label
from cms_client.infrastructure.http import RestGateway
from cms_client.infrastructure.session import CookieSessionStore
from cms_client.infrastructure.storage import InMemoryKeyValueStore


def _make_service(handler) -> tuple[CategoryService, InMemoryKeyValueStore]:
    backend = InMemoryKeyValueStore()
    gateway = RestGateway(
        "http://api.test/api",
        CookieSessionStore(),
        http_client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
    )
    service = CategoryService(gateway, category_snapshot_store(backend), FallbackResolver())
    return service, backend


def _offline(request: httpx.Request) -> httpx.Response:
    raise httpx.ConnectTimeout("timed out", request=request)


@pytest.mark.asyncio
async def test_list_categories_from_remote():
    def handler(request):
        assert request.url.params["search"] == "tech"
        return httpx.Response(
            200,
            json={
                "status": True,
                "message": "ok",
                "data": {"items": [{"id": 10, "name": "Tech"}], "total": 1, "page": 1, "limit": 10},
            },
        )

    service, _ = _make_service(handler)
    result = await service.list_categories(CategoryQuery(search="tech"))

    assert result.source == DataSource.REMOTE
    assert result.data.items[0].id == "10"
    assert result.data.items[0].name == "Tech"


@pytest.mark.asyncio
async def test_list_categories_local_search_and_pagination():
    service, _ = _make_service(_offline)

    searched = await service.list_categories(CategoryQuery(search="h"))
    second_page = await service.list_categories(CategoryQuery(page=2, limit=2))

    assert searched.source == DataSource.LOCAL
    assert [c.name for c in searched.data.items] == ["Technology", "Health"]
    assert [c.name for c in second_page.data.items] == ["Business", "Sports"]
    assert second_page.data.total_pages == 3


@pytest.mark.asyncio
async def test_get_category_local_first():
    service, _ = _make_service(_offline)

    found = await service.get_category("3")
    missing = await service.get_category("77")

    assert found.data.name == "Business"
    assert missing.status is False
    assert missing.message == "Category with id '77' not found"


@pytest.mark.asyncio
async def test_create_category_offline():
    service, _ = _make_service(_offline)

    result = await service.create_category(CategoryCreate(name="Travel"))

    assert result.source == DataSource.LOCAL
    assert result.data.id.startswith("demo-")
    assert (await service.store.read_all())[-1].name == "Travel"


@pytest.mark.asyncio
async def test_update_category_offline_applies_locally():
    service, _ = _make_service(_offline)

    result = await service.update_category("2", CategoryUpdate(name="Wellness"))

    assert result.status is True
    assert result.data.name == "Wellness"
    assert (await service.store.find_by_id("2")).name == "Wellness"


@pytest.mark.asyncio
async def test_deleted_category_leaves_articles_with_unknown_label():
    service, backend = _make_service(_offline)
    articles = article_snapshot_store(backend)

    result = await service.delete_category("5")

    assert result.status is True
    assert result.source == DataSource.LOCAL
    movie = await articles.find_by_id("8")
    assert movie.category_id == "5"
    assert category_label(movie.category_id, await service.store.read_all()) == "Unknown Category"


@pytest.mark.asyncio
async def test_reset_categories():
    service, _ = _make_service(_offline)
    await service.delete_category("1")

    await service.reset_to_default()

    assert [c.id for c in await service.store.read_all()] == ["1", "2", "3", "4", "5"]
