"""Domain entities: pure Python business objects, no framework dependencies."""

from dataclasses import dataclass

from .category import Category
from .timestamps import utc_now_iso


@dataclass
class Article:
    """Core domain entity representing a published article."""

    id: str
    title: str
    content: str
    category_id: str
    category: Category | None = None
    created_at: str = ""
    updated_at: str = ""

    def __post_init__(self) -> None:
        if not self.created_at:
            self.created_at = utc_now_iso()
        if not self.updated_at:
            self.updated_at = self.created_at
