from .article import Article
from .category import Category, UNKNOWN_CATEGORY_LABEL, category_label
from .result import DataSource, Page, ServiceResult
from .timestamps import epoch_millis, utc_now_iso
from .user import User, UserRole

__all__ = [
    "Article",
    "Category",
    "UNKNOWN_CATEGORY_LABEL",
    "category_label",
    "DataSource",
    "Page",
    "ServiceResult",
    "epoch_millis",
    "utc_now_iso",
    "User",
    "UserRole",
]
