"""Response envelopes returned by the content API."""

from typing import Generic, TypeVar

from pydantic import BaseModel

from ._base import CamelModel

T = TypeVar("T")


class ApiEnvelope(BaseModel, Generic[T]):
    """``{status, message, data}`` wrapper used by every endpoint."""

    status: bool
    message: str = ""
    data: T | None = None


class PageData(CamelModel, Generic[T]):
    """``data`` member of list responses."""

    items: list[T]
    total: int = 0
    page: int = 1
    limit: int = 10
    total_pages: int = 1
