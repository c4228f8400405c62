"""Pydantic DTOs for the Category feature."""

from pydantic import Field, field_validator

from cms_client.domain.entities import Category

from ._base import CamelModel


class CategoryRecord(CamelModel):
    """Category as serialized by the API and inside snapshots."""

    id: str
    name: str
    created_at: str = ""
    updated_at: str = ""

    def to_entity(self) -> Category:
        return Category(
            id=self.id,
            name=self.name,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )

    @classmethod
    def from_entity(cls, category: Category) -> "CategoryRecord":
        return cls(
            id=category.id,
            name=category.name,
            created_at=category.created_at,
            updated_at=category.updated_at,
        )


class CategoryCreate(CamelModel):
    """Schema for creating a new category."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Technology"])


class CategoryUpdate(CamelModel):
    """Schema for updating a category: all fields optional."""

    name: str | None = Field(None, min_length=1, max_length=255)


class CategoryQuery(CamelModel):
    """List parameters for categories."""

    page: int = Field(1, ge=1)
    limit: int = Field(10, ge=1)
    search: str | None = None

    @field_validator("search")
    @classmethod
    def _blank_search_is_no_filter(cls, value: str | None) -> str | None:
        return value or None

    def to_params(self) -> dict[str, str | int]:
        return self.model_dump(by_alias=True, exclude_none=True)
