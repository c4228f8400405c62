"""Application service (use case) for Category operations."""

from cms_client.application.interfaces import RemoteGateway
from cms_client.application.schemas import (
    CategoryCreate,
    CategoryQuery,
    CategoryRecord,
    CategoryUpdate,
)
from cms_client.domain.entities import Category, Page, ServiceResult, epoch_millis
from cms_client.domain.exceptions import EntityNotFoundError

from .fallback_resolver import FallbackResolver, ResolutionPolicy
from .listing import filter_categories, paginate
from .remote_payloads import unwrap, unwrap_page
from .snapshot_store import SnapshotStore


class CategoryService:
    """Category CRUD with the same remote/local fallback as articles.

    Deleting a category leaves articles pointing at it; they are shown
    under "Unknown Category".
    """

    def __init__(
        self,
        gateway: RemoteGateway,
        store: SnapshotStore[Category],
        resolver: FallbackResolver,
        *,
        detail_policy: ResolutionPolicy = ResolutionPolicy.LOCAL_FIRST,
        page_size: int = 10,
    ):
        self._gateway = gateway
        self._store = store
        self._resolver = resolver
        self._detail_policy = detail_policy
        self._page_size = page_size

    @property
    def store(self) -> SnapshotStore[Category]:
        return self._store

    async def list_categories(
        self, query: CategoryQuery | None = None
    ) -> ServiceResult[Page[Category]]:
        query = query or CategoryQuery(limit=self._page_size)

        async def remote() -> Page[Category]:
            raw = await self._gateway.get("/categories", query=query.to_params())
            data = unwrap_page(raw, CategoryRecord)
            return Page(
                items=[record.to_entity() for record in data.items],
                total=data.total,
                page=query.page,
                limit=query.limit,
            )

        async def local() -> Page[Category]:
            categories = await self._store.read_all()
            return paginate(filter_categories(categories, query), query.page, query.limit)

        return await self._resolver.resolve(
            "list categories",
            remote=remote,
            local=local,
            remote_message="Categories fetched successfully",
            local_message="Categories found in local storage",
        )

    async def get_category(self, category_id: str) -> ServiceResult[Category]:
        async def remote() -> Category:
            raw = await self._gateway.get(f"/categories/{category_id}")
            return unwrap(raw, CategoryRecord).to_entity()

        async def local() -> Category:
            category = await self._store.find_by_id(category_id)
            if category is None:
                raise EntityNotFoundError("Category", category_id)
            return category

        return await self._resolver.resolve(
            f"get category {category_id}",
            remote=remote,
            local=local,
            policy=self._detail_policy,
            remote_message="Category fetched successfully",
            local_message="Category found in local storage",
        )

    async def create_category(self, data: CategoryCreate) -> ServiceResult[Category]:
        async def remote() -> Category:
            raw = await self._gateway.post("/categories", body=data.model_dump(by_alias=True))
            return unwrap(raw, CategoryRecord).to_entity()

        async def local() -> Category:
            category = Category(id=f"demo-{epoch_millis()}", name=data.name)
            await self._store.append(category)
            return category

        return await self._resolver.resolve(
            "create category",
            remote=remote,
            local=local,
            remote_message="Category created successfully",
            local_message="Category created in local storage",
        )

    async def update_category(
        self, category_id: str, data: CategoryUpdate
    ) -> ServiceResult[Category]:
        async def remote() -> Category:
            raw = await self._gateway.put(
                f"/categories/{category_id}",
                body=data.model_dump(by_alias=True, exclude_unset=True, exclude_none=True),
            )
            return unwrap(raw, CategoryRecord).to_entity()

        async def local() -> Category:
            if not await self._store.upsert(category_id, data):
                raise EntityNotFoundError("Category", category_id)
            return await self._store.find_by_id(category_id)

        return await self._resolver.resolve(
            f"update category {category_id}",
            remote=remote,
            local=local,
            policy=ResolutionPolicy.WRITE_THROUGH,
            remote_message="Category updated successfully",
            local_message="Category updated in local storage",
        )

    async def delete_category(self, category_id: str) -> ServiceResult[None]:
        async def remote() -> None:
            raw = await self._gateway.delete(f"/categories/{category_id}")
            unwrap(raw, None, required=False)

        async def local() -> None:
            if not await self._store.remove(category_id):
                raise EntityNotFoundError("Category", category_id)

        return await self._resolver.resolve(
            f"delete category {category_id}",
            remote=remote,
            local=local,
            policy=ResolutionPolicy.WRITE_THROUGH,
            remote_message="Category deleted successfully",
            local_message="Category deleted in local storage",
        )

    async def reset_to_default(self) -> None:
        await self._store.reset_to_default()
