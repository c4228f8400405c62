from .article import (
    ALL_CATEGORIES,
    ArticleCreate,
    ArticleQuery,
    ArticleRecord,
    ArticleUpdate,
)
from .auth import (
    AuthPayload,
    DemoAccountRecord,
    LoginCredentials,
    RegisterCredentials,
    UserRecord,
)
from .category import CategoryCreate, CategoryQuery, CategoryRecord, CategoryUpdate
from .envelope import ApiEnvelope, PageData

__all__ = [
    "ALL_CATEGORIES",
    "ArticleCreate",
    "ArticleQuery",
    "ArticleRecord",
    "ArticleUpdate",
    "AuthPayload",
    "DemoAccountRecord",
    "LoginCredentials",
    "RegisterCredentials",
    "UserRecord",
    "CategoryCreate",
    "CategoryQuery",
    "CategoryRecord",
    "CategoryUpdate",
    "ApiEnvelope",
    "PageData",
]
