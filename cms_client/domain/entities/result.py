"""Uniform result envelope returned by every entity service operation."""

from dataclasses import dataclass, field
from enum import Enum
from math import ceil
from typing import Generic, TypeVar

T = TypeVar("T")


class DataSource(str, Enum):
    """Which side served a request."""

    REMOTE = "remote"
    LOCAL = "local"
    NONE = "none"


@dataclass
class Page(Generic[T]):
    """One window of a filtered, ordered sequence."""

    items: list[T] = field(default_factory=list)
    total: int = 0
    page: int = 1
    limit: int = 10

    @property
    def total_pages(self) -> int:
        """Number of pages; never less than one, even for an empty result."""
        if self.limit <= 0:
            return 1
        return max(1, ceil(self.total / self.limit))


@dataclass
class ServiceResult(Generic[T]):
    """Envelope with a success flag, a payload, and a human-readable message.

    Callers branch on ``status`` only. ``source`` lets the presentation
    layer show a demo/offline indicator when the local store answered.
    """

    status: bool
    data: T | None = None
    message: str = ""
    source: DataSource = DataSource.NONE

    @classmethod
    def ok(cls, data: T | None, message: str, source: DataSource) -> "ServiceResult[T]":
        return cls(status=True, data=data, message=message, source=source)

    @classmethod
    def failure(cls, message: str) -> "ServiceResult[T]":
        return cls(status=False, data=None, message=message, source=DataSource.NONE)

    @property
    def is_local(self) -> bool:
        return self.source == DataSource.LOCAL
