"""Search, filter and pagination rules shared by every local list fallback.

They mirror what the remote API does with the same query parameters so a
list looks the same whichever side served it. Filtering always happens
before the page window is cut.
"""

from collections.abc import Sequence
from typing import TypeVar

from cms_client.application.schemas import ArticleQuery, CategoryQuery
from cms_client.domain.entities import Article, Category, Page

T = TypeVar("T")


def matches_search(article: Article, search: str | None) -> bool:
    """Case-insensitive substring match against the title or the content."""
    if not search:
        return True
    needle = search.lower()
    return needle in article.title.lower() or needle in article.content.lower()


def filter_articles(articles: Sequence[Article], query: ArticleQuery) -> list[Article]:
    return [
        article
        for article in articles
        if matches_search(article, query.search)
        and (query.category_id is None or article.category_id == query.category_id)
    ]


def filter_categories(categories: Sequence[Category], query: CategoryQuery) -> list[Category]:
    if not query.search:
        return list(categories)
    needle = query.search.lower()
    return [category for category in categories if needle in category.name.lower()]


def paginate(items: Sequence[T], page: int, limit: int) -> Page[T]:
    """Cut the 1-indexed ``page`` of ``limit`` items out of an already filtered sequence."""
    start = (page - 1) * limit
    return Page(items=list(items[start:start + limit]), total=len(items), page=page, limit=limit)


def related_articles(
    articles: Sequence[Article], category_id: str, exclude_id: str, limit: int
) -> Page[Article]:
    """Same-category articles other than ``exclude_id``, capped at ``limit``, as a single page."""
    related = [
        article
        for article in articles
        if article.category_id == category_id and article.id != exclude_id
    ][:limit]
    return Page(items=related, total=len(related), page=1, limit=limit)
