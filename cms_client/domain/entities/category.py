"""Domain entity for article categories."""

from dataclasses import dataclass
from collections.abc import Iterable

from .timestamps import utc_now_iso

UNKNOWN_CATEGORY_LABEL = "Unknown Category"


@dataclass
class Category:
    """A named grouping of articles."""

    id: str
    name: str
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = utc_now_iso()
        if not self.updated_at:
            self.updated_at = self.created_at


def category_label(category_id: str, categories: Iterable[Category]) -> str:
    """Return the display name for a category id, tolerating dangling references."""
    for category in categories:
        if category.id == category_id:
            return category.name
    return UNKNOWN_CATEGORY_LABEL
