from .access_policy import AccessDecision, decide_access
from .article_service import ArticleService
from .auth_service import AuthService
from .category_service import CategoryService
from .change_notifier import ChangeEvent, ChangeKind, ChangeNotifier
from .change_signal_watcher import ChangeSignalWatcher
from .fallback_resolver import FallbackResolver, ResolutionPolicy
from .search_debouncer import SearchDebouncer
from .snapshot_store import (
    ChangeSignals,
    SnapshotStore,
    article_snapshot_store,
    category_snapshot_store,
)

__all__ = [
    "AccessDecision",
    "decide_access",
    "ArticleService",
    "AuthService",
    "CategoryService",
    "ChangeEvent",
    "ChangeKind",
    "ChangeNotifier",
    "ChangeSignalWatcher",
    "FallbackResolver",
    "ResolutionPolicy",
    "SearchDebouncer",
    "ChangeSignals",
    "SnapshotStore",
    "article_snapshot_store",
    "category_snapshot_store",
]
