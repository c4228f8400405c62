"""Local snapshot store: durable fallback copy of an entity collection.

The whole collection lives under one key as a JSON array (camelCase
records, insertion order preserved). Every write replaces the full array.
Reads never fail: a missing, empty or unreadable array is replaced by the
bundled defaults before it is returned.

Two marker keys sit next to the array. They hold the epoch-millisecond
time of the last deletion and the last update, so that other consumers of
the same backend (another process, another window) can notice changes by
polling ``take_change_signals()``. In-process consumers can use the
``ChangeNotifier`` instead.
"""

import dataclasses
import logging
from collections.abc import AsyncGenerator, Callable
from dataclasses import dataclass
from typing import Generic, Protocol, TypeVar

from pydantic import BaseModel, TypeAdapter, ValidationError

from cms_client.application.interfaces import KeyValueStore
from cms_client.application.schemas import ArticleRecord, CategoryRecord
from cms_client.domain.default_dataset import default_articles, default_categories
from cms_client.domain.entities import Article, Category, epoch_millis, utc_now_iso

from .change_notifier import ChangeEvent, ChangeKind, ChangeNotifier

logger = logging.getLogger(__name__)

ARTICLE_SNAPSHOT_KEY = "dummyArticles"
ARTICLE_DELETED_SIGNAL_KEY = "articleDeletedAt"
ARTICLE_UPDATED_SIGNAL_KEY = "articleLastUpdated"

CATEGORY_SNAPSHOT_KEY = "dummyCategories"
CATEGORY_DELETED_SIGNAL_KEY = "categoryDeletedAt"
CATEGORY_UPDATED_SIGNAL_KEY = "categoryLastUpdated"


# Optional entity fields a patch may reset to None
_CLEARABLE_FIELDS = frozenset({"category"})


class _Identified(Protocol):
    id: str
    updated_at: str


EntityT = TypeVar("EntityT", bound=_Identified)


@dataclass(frozen=True)
class ChangeSignals:
    """Markers observed (and cleared) by one poll."""

    deleted_at: str | None = None
    updated_at: str | None = None

    @property
    def any(self) -> bool:
        return self.deleted_at is not None or self.updated_at is not None


class SnapshotStore(Generic[EntityT]):
    """Read-modify-write access to one persisted entity array."""

    def __init__(
        self,
        backend: KeyValueStore,
        *,
        name: str,
        key: str,
        record_type: type[BaseModel],
        defaults: Callable[[], list[EntityT]],
        deleted_signal_key: str,
        updated_signal_key: str,
        notifier: ChangeNotifier | None = None,
    ):
        self._backend = backend
        self._name = name
        self._key = key
        self._record_type = record_type
        self._adapter = TypeAdapter(list[record_type])
        self._defaults = defaults
        self._deleted_signal_key = deleted_signal_key
        self._updated_signal_key = updated_signal_key
        self._notifier = notifier

    @property
    def name(self) -> str:
        return self._name

    # ── Raw persistence ─────────────────────────────────────────────

    async def _load(self) -> list[EntityT] | None:
        """Parse the stored array; None when it is absent or unreadable."""
        raw = await self._backend.get(self._key)
        if raw is None:
            return None
        try:
            records = self._adapter.validate_json(raw)
        except ValidationError as exc:
            logger.warning(
                "Discarding unreadable %s snapshot under '%s': %d error(s)",
                self._name,
                self._key,
                exc.error_count(),
            )
            return None
        return [record.to_entity() for record in records]

    def _dump(self, items: list[EntityT]) -> str:
        records = [self._record_type.from_entity(item) for item in items]
        return self._adapter.dump_json(records, by_alias=True).decode("utf-8")

    async def _signal(self, signal_key: str) -> None:
        await self._backend.set(signal_key, str(epoch_millis()))

    def _publish(self, kind: ChangeKind, entity_id: str | None = None) -> None:
        if self._notifier is not None:
            self._notifier.publish(ChangeEvent(store=self._name, kind=kind, entity_id=entity_id))

    # ── Seeding ─────────────────────────────────────────────────────

    async def ensure_seeded(self) -> bool:
        """Seed the store from the bundled defaults when it is absent, corrupt or empty.

        Returns True when a (re)seed happened.
        """
        items = await self._load()
        if items:
            return False
        logger.info("Seeding %s snapshot from bundled defaults", self._name)
        await self._backend.set(self._key, self._dump(self._defaults()))
        return True

    async def reset_to_default(self) -> None:
        """Overwrite the store with the bundled defaults, whatever it holds."""
        await self._backend.set(self._key, self._dump(self._defaults()))
        await self._signal(self._updated_signal_key)
        self._publish(ChangeKind.RESET)
        logger.info("Reset %s snapshot to bundled defaults", self._name)

    # ── Reads ───────────────────────────────────────────────────────

    async def read_all(self) -> list[EntityT]:
        await self.ensure_seeded()
        items = await self._load()
        if items is None:
            return self._defaults()
        return items

    async def find_by_id(self, entity_id: str) -> EntityT | None:
        for item in await self.read_all():
            if item.id == entity_id:
                return item
        return None

    # ── Writes ──────────────────────────────────────────────────────

    async def write_all(self, items: list[EntityT]) -> None:
        await self._backend.set(self._key, self._dump(list(items)))

    async def append(self, item: EntityT) -> None:
        """Add a locally created record at the end of the array."""
        items = await self.read_all()
        items.append(item)
        await self.write_all(items)
        await self._signal(self._updated_signal_key)
        self._publish(ChangeKind.CREATED, item.id)

    async def upsert(self, entity_id: str, patch: BaseModel) -> bool:
        """Merge the fields set on ``patch`` into the matching record.

        Stamps a fresh ``updated_at``. Returns False, leaving the store
        untouched, when no record has that id.
        """
        items = await self.read_all()
        for index, item in enumerate(items):
            if item.id == entity_id:
                items[index] = dataclasses.replace(
                    item, **_patch_changes(patch), updated_at=utc_now_iso()
                )
                break
        else:
            return False

        await self.write_all(items)
        await self._signal(self._updated_signal_key)
        self._publish(ChangeKind.UPDATED, entity_id)
        return True

    async def remove(self, entity_id: str) -> bool:
        """Drop the matching record. Returns False when nothing was removed."""
        items = await self.read_all()
        remaining = [item for item in items if item.id != entity_id]
        if len(remaining) == len(items):
            return False

        await self.write_all(remaining)
        await self._signal(self._deleted_signal_key)
        self._publish(ChangeKind.DELETED, entity_id)
        return True

    # ── Change observation ──────────────────────────────────────────

    async def subscribe(self) -> AsyncGenerator[ChangeEvent, None]:
        """Yield the in-process mutation events of this store only."""
        if self._notifier is None:
            raise RuntimeError(f"{self._name} snapshot store has no change notifier")
        async for event in self._notifier.subscribe():
            if event.store == self._name:
                yield event

    async def take_change_signals(self) -> ChangeSignals:
        """Return the pending change markers and clear the ones that were set."""
        deleted_at = await self._backend.get(self._deleted_signal_key)
        updated_at = await self._backend.get(self._updated_signal_key)
        if deleted_at is not None:
            await self._backend.remove(self._deleted_signal_key)
        if updated_at is not None:
            await self._backend.remove(self._updated_signal_key)
        return ChangeSignals(deleted_at=deleted_at, updated_at=updated_at)

    async def restore_change_signals(self, signals: ChangeSignals) -> None:
        """Put back markers taken by a poll whose refresh failed.

        A marker set again since the poll is left as it is.
        """
        for key, value in (
            (self._deleted_signal_key, signals.deleted_at),
            (self._updated_signal_key, signals.updated_at),
        ):
            if value is not None and await self._backend.get(key) is None:
                await self._backend.set(key, value)


def _patch_changes(patch: BaseModel) -> dict:
    """Fields explicitly set on a patch, as entity values.

    None means "leave unchanged" except for the fields in ``_CLEARABLE_FIELDS``.
    """
    changes = {}
    for field_name in patch.model_fields_set:
        value = getattr(patch, field_name)
        if value is None and field_name not in _CLEARABLE_FIELDS:
            continue
        if isinstance(value, BaseModel) and hasattr(value, "to_entity"):
            value = value.to_entity()
        changes[field_name] = value
    return changes


def article_snapshot_store(
    backend: KeyValueStore, notifier: ChangeNotifier | None = None
) -> SnapshotStore[Article]:
    return SnapshotStore(
        backend,
        name="articles",
        key=ARTICLE_SNAPSHOT_KEY,
        record_type=ArticleRecord,
        defaults=default_articles,
        deleted_signal_key=ARTICLE_DELETED_SIGNAL_KEY,
        updated_signal_key=ARTICLE_UPDATED_SIGNAL_KEY,
        notifier=notifier,
    )


def category_snapshot_store(
    backend: KeyValueStore, notifier: ChangeNotifier | None = None
) -> SnapshotStore[Category]:
    return SnapshotStore(
        backend,
        name="categories",
        key=CATEGORY_SNAPSHOT_KEY,
        record_type=CategoryRecord,
        defaults=default_categories,
        deleted_signal_key=CATEGORY_DELETED_SIGNAL_KEY,
        updated_signal_key=CATEGORY_UPDATED_SIGNAL_KEY,
        notifier=notifier,
    )
