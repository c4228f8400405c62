"""Application service (use case) for Article operations.

Each method pairs a remote call with its snapshot fallback and hands both
to the FallbackResolver; callers only ever see a ServiceResult.
"""

from cms_client.application.interfaces import RemoteGateway
from cms_client.application.schemas import (
    ArticleCreate,
    ArticleQuery,
    ArticleRecord,
    ArticleUpdate,
    CategoryRecord,
)
from cms_client.domain.entities import Article, Category, Page, ServiceResult, epoch_millis
from cms_client.domain.exceptions import EntityNotFoundError

from .fallback_resolver import FallbackResolver, ResolutionPolicy
from .listing import filter_articles, paginate, related_articles
from .remote_payloads import unwrap, unwrap_page
from .snapshot_store import SnapshotStore


class ArticleService:
    """Orchestrates article reads and writes across the API and the local snapshot."""

    def __init__(
        self,
        gateway: RemoteGateway,
        store: SnapshotStore[Article],
        resolver: FallbackResolver,
        *,
        category_store: SnapshotStore[Category] | None = None,
        detail_policy: ResolutionPolicy = ResolutionPolicy.LOCAL_FIRST,
        related_limit: int = 3,
        page_size: int = 10,
    ):
        self._gateway = gateway
        self._store = store
        self._resolver = resolver
        self._category_store = category_store
        self._detail_policy = detail_policy
        self._related_limit = related_limit
        self._page_size = page_size

    @property
    def store(self) -> SnapshotStore[Article]:
        return self._store

    async def list_articles(self, query: ArticleQuery | None = None) -> ServiceResult[Page[Article]]:
        query = query or ArticleQuery(limit=self._page_size)

        async def remote() -> Page[Article]:
            raw = await self._gateway.get("/articles", query=query.to_params())
            data = unwrap_page(raw, ArticleRecord)
            return Page(
                items=[record.to_entity() for record in data.items],
                total=data.total,
                page=query.page,
                limit=query.limit,
            )

        async def local() -> Page[Article]:
            articles = await self._store.read_all()
            return paginate(filter_articles(articles, query), query.page, query.limit)

        return await self._resolver.resolve(
            "list articles",
            remote=remote,
            local=local,
            remote_message="Articles fetched successfully",
            local_message="Articles found in local storage",
        )

    async def get_article(self, article_id: str) -> ServiceResult[Article]:
        async def remote() -> Article:
            raw = await self._gateway.get(f"/articles/{article_id}")
            return unwrap(raw, ArticleRecord).to_entity()

        async def local() -> Article:
            article = await self._store.find_by_id(article_id)
            if article is None:
                raise EntityNotFoundError("Article", article_id)
            return article

        return await self._resolver.resolve(
            f"get article {article_id}",
            remote=remote,
            local=local,
            policy=self._detail_policy,
            remote_message="Article fetched successfully",
            local_message="Article found in local storage",
        )

    async def create_article(self, data: ArticleCreate) -> ServiceResult[Article]:
        async def remote() -> Article:
            raw = await self._gateway.post("/articles", body=data.model_dump(by_alias=True))
            return unwrap(raw, ArticleRecord).to_entity()

        async def local() -> Article:
            article = Article(
                id=f"demo-{epoch_millis()}",
                title=data.title,
                content=data.content,
                category_id=data.category_id,
                category=await self._lookup_category(data.category_id),
            )
            await self._store.append(article)
            return article

        return await self._resolver.resolve(
            "create article",
            remote=remote,
            local=local,
            remote_message="Article created successfully",
            local_message="Article created in local storage",
        )

    async def update_article(self, article_id: str, data: ArticleUpdate) -> ServiceResult[Article]:
        """Apply ``data`` to the snapshot, then to the API.

        The local change stands even when the API call fails.
        """
        patch = await self._with_category_snapshot(data)

        async def remote() -> Article:
            raw = await self._gateway.put(
                f"/articles/{article_id}",
                body=data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True),
            )
            return unwrap(raw, ArticleRecord).to_entity()

        async def local() -> Article:
            if not await self._store.upsert(article_id, patch):
                raise EntityNotFoundError("Article", article_id)
            return await self._store.find_by_id(article_id)

        return await self._resolver.resolve(
            f"update article {article_id}",
            remote=remote,
            local=local,
            policy=ResolutionPolicy.WRITE_THROUGH,
            remote_message="Article updated successfully",
            local_message="Article updated in local storage",
        )

    async def delete_article(self, article_id: str) -> ServiceResult[None]:
        async def remote() -> None:
            raw = await self._gateway.delete(f"/articles/{article_id}")
            unwrap(raw, None, required=False)

        async def local() -> None:
            if not await self._store.remove(article_id):
                raise EntityNotFoundError("Article", article_id)

        return await self._resolver.resolve(
            f"delete article {article_id}",
            remote=remote,
            local=local,
            policy=ResolutionPolicy.WRITE_THROUGH,
            remote_message="Article deleted successfully",
            local_message="Article deleted in local storage",
        )

    async def get_related_articles(
        self, category_id: str, article_id: str, limit: int | None = None
    ) -> ServiceResult[Page[Article]]:
        """Other articles in the same category, excluding ``article_id``."""
        if limit is None:
            limit = self._related_limit

        async def remote() -> Page[Article]:
            raw = await self._gateway.get(
                "/articles",
                query={"categoryId": category_id, "limit": limit, "exclude": article_id},
            )
            data = unwrap_page(raw, ArticleRecord)
            items = [record.to_entity() for record in data.items][:limit]
            return Page(items=items, total=len(items), page=1, limit=limit)

        async def local() -> Page[Article]:
            articles = await self._store.read_all()
            return related_articles(articles, category_id, article_id, limit)

        return await self._resolver.resolve(
            f"related articles for {article_id}",
            remote=remote,
            local=local,
            remote_message="Related articles fetched successfully",
            local_message="Related articles found in local storage",
        )

    async def reset_to_default(self) -> None:
        await self._store.reset_to_default()

    async def _lookup_category(self, category_id: str) -> Category | None:
        if self._category_store is None:
            return None
        return await self._category_store.find_by_id(category_id)

    async def _with_category_snapshot(self, data: ArticleUpdate) -> ArticleUpdate:
        """Attach the embedded category when the patch moves the article to another category.

        The category is explicitly cleared when the new id has no local record.
        """
        if data.category_id is None or "category" in data.model_fields_set:
            return data
        category = await self._lookup_category(data.category_id)
        fields = {name: getattr(data, name) for name in data.model_fields_set}
        record = CategoryRecord.from_entity(category) if category is not None else None
        return ArticleUpdate(**fields, category=record)
