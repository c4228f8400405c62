"""Composition root: wires infrastructure adapters to the application layer."""

import logging
from collections.abc import Awaitable, Callable

import httpx
from sqlalchemy.ext.asyncio import AsyncEngine

from cms_client.config import Settings, get_settings
from cms_client.application.interfaces import KeyValueStore
from cms_client.application.services import (
    ArticleService,
    AuthService,
    CategoryService,
    ChangeNotifier,
    ChangeSignalWatcher,
    FallbackResolver,
    ResolutionPolicy,
    SearchDebouncer,
    SnapshotStore,
    article_snapshot_store,
    category_snapshot_store,
)
from cms_client.domain.entities import Article, Category
from cms_client.infrastructure.database.session import create_engine_for, create_session_factory
from cms_client.infrastructure.http import RestGateway
from cms_client.infrastructure.logging import setup_logging
from cms_client.infrastructure.session import CookieSessionStore
from cms_client.infrastructure.storage import InMemoryKeyValueStore, SQLAlchemyKeyValueStore

logger = logging.getLogger(__name__)

MEMORY_STORAGE_URL = "memory://"


class ContentClient:
    """Everything a presentation layer needs, built once per client profile.

    Use as an async context manager, or call ``aclose()`` when done.
    """

    def __init__(
        self,
        *,
        settings: Settings,
        gateway: RestGateway,
        session: CookieSessionStore,
        backend: KeyValueStore,
        notifier: ChangeNotifier,
        article_store: SnapshotStore[Article],
        category_store: SnapshotStore[Category],
        articles: ArticleService,
        categories: CategoryService,
        auth: AuthService,
        owned_http_client: httpx.AsyncClient | None = None,
        engine: AsyncEngine | None = None,
    ):
        self.settings = settings
        self.gateway = gateway
        self.session = session
        self.backend = backend
        self.notifier = notifier
        self.article_store = article_store
        self.category_store = category_store
        self.articles = articles
        self.categories = categories
        self.auth = auth
        self._owned_http_client = owned_http_client
        self._engine = engine
        self._closed = False

    def change_watcher(
        self,
        on_change: Callable[[], Awaitable[None]],
        interval: float | None = None,
    ) -> ChangeSignalWatcher:
        """A poller over both snapshot stores, not yet started."""
        return ChangeSignalWatcher(
            [self.article_store, self.category_store],
            on_change,
            interval=interval if interval is not None else self.settings.change_poll_interval_seconds,
        )

    def search_debouncer(
        self,
        on_commit: Callable[[str], Awaitable[None]],
        delay: float | None = None,
    ) -> SearchDebouncer:
        return SearchDebouncer(
            on_commit,
            delay=delay if delay is not None else self.settings.search_debounce_seconds,
        )

    async def aclose(self) -> None:
        if self._closed:
            return
        self._closed = True
        await self.notifier.shutdown()
        if self._owned_http_client is not None:
            await self._owned_http_client.aclose()
        if self._engine is not None:
            await self._engine.dispose()
        logger.debug("ContentClient closed")

    async def __aenter__(self) -> "ContentClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()


def _build_backend(storage_url: str) -> tuple[KeyValueStore, AsyncEngine | None]:
    if storage_url == MEMORY_STORAGE_URL:
        return InMemoryKeyValueStore(), None
    engine = create_engine_for(storage_url)
    return SQLAlchemyKeyValueStore(engine, create_session_factory(engine)), engine


def build_content_client(
    settings: Settings | None = None,
    *,
    http_client: httpx.AsyncClient | None = None,
    backend: KeyValueStore | None = None,
    session: CookieSessionStore | None = None,
) -> ContentClient:
    """Build a fully wired ContentClient.

    ``http_client`` and ``backend`` override what the settings would select;
    an injected client or backend is left open by ``aclose()``.
    """
    settings = settings or get_settings()
    setup_logging(settings)

    engine: AsyncEngine | None = None
    if backend is None:
        backend, engine = _build_backend(settings.storage_url)

    owned_http_client: httpx.AsyncClient | None = None
    if http_client is None:
        owned_http_client = httpx.AsyncClient(timeout=settings.request_timeout)
        http_client = owned_http_client

    session = session or CookieSessionStore()
    gateway = RestGateway(
        settings.api_base_url,
        session,
        timeout=settings.request_timeout,
        login_path=settings.login_path,
        http_client=http_client,
    )

    notifier = ChangeNotifier()
    article_store = article_snapshot_store(backend, notifier)
    category_store = category_snapshot_store(backend, notifier)
    resolver = FallbackResolver()
    detail_policy = ResolutionPolicy(settings.detail_lookup_policy)

    logger.info(
        "Building content client for %s (storage=%s, detail lookups %s)",
        settings.api_base_url,
        settings.storage_url if engine is not None else type(backend).__name__,
        detail_policy.value,
    )

    return ContentClient(
        settings=settings,
        gateway=gateway,
        session=session,
        backend=backend,
        notifier=notifier,
        article_store=article_store,
        category_store=category_store,
        articles=ArticleService(
            gateway,
            article_store,
            resolver,
            category_store=category_store,
            detail_policy=detail_policy,
            related_limit=settings.related_limit,
            page_size=settings.default_page_size,
        ),
        categories=CategoryService(
            gateway,
            category_store,
            resolver,
            detail_policy=detail_policy,
            page_size=settings.default_page_size,
        ),
        auth=AuthService(gateway, session, backend, resolver),
        owned_http_client=owned_http_client,
        engine=engine,
    )
