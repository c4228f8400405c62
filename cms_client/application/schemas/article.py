"""Pydantic DTOs for the Article feature."""

from pydantic import Field, field_validator

from cms_client.domain.entities import Article

from ._base import CamelModel
from .category import CategoryRecord

# UI value meaning "every category"
ALL_CATEGORIES = "all"


class ArticleRecord(CamelModel):
    """Article as serialized by the API and inside the article snapshot."""

    id: str
    title: str
    content: str
    category_id: str
    category: CategoryRecord | None = None
    created_at: str = ""
    updated_at: str = ""

    def to_entity(self) -> Article:
        return Article(
            id=self.id,
            title=self.title,
            content=self.content,
            category_id=self.category_id,
            category=self.category.to_entity() if self.category else None,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, article: Article) -> "ArticleRecord":
        return cls(
            id=article.id,
            title=article.title,
            content=article.content,
            category_id=article.category_id,
            category=CategoryRecord.from_entity(article.category) if article.category else None,
            created_at=article.created_at,
            updated_at=article.updated_at,
        )


class ArticleCreate(CamelModel):
    """Schema for creating a new article."""

    title: str = Field(..., min_length=1, max_length=255, examples=["Getting Started"])
    content: str = Field(..., min_length=1, examples=["This is an article body."])
    category_id: str = Field(..., min_length=1, examples=["1"])


class ArticleUpdate(CamelModel):
    """Schema for updating an existing article: all fields optional.

    Only fields explicitly set are merged into the stored record.
    """

    title: str | None = Field(None, min_length=1, max_length=255)
    content: str | None = Field(None, min_length=1)
    category_id: str | None = Field(None, min_length=1)
    category: CategoryRecord | None = None


class ArticleQuery(CamelModel):
    """List parameters shared by the remote query and the local filter."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    search: str | None = None
    category_id: str | None = None

    @field_validator("search")
    @classmethod
    def _blank_search_is_no_filter(cls, value: str | None) -> str | None:
        return value or None

    @field_validator("category_id")
    @classmethod
    def _sentinel_is_no_filter(cls, value: str | None) -> str | None:
        if not value or value == ALL_CATEGORIES:
            return None
        return value

    def to_params(self) -> dict[str, str | int]:
        return self.model_dump(by_alias=True, exclude_none=True)
