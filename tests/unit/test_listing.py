"""Unit tests for local search, filter and pagination."""

from cms_client.application.schemas import ArticleQuery, CategoryQuery
from cms_client.application.services.listing import (
    filter_articles,
    filter_categories,
    matches_search,
    paginate,
    related_articles,
)
from cms_client.domain.default_dataset import default_articles, default_categories
from cms_client.domain.entities import Article, Page, category_label


def test_search_matches_title_or_content_case_insensitively():
    article = Article(id="x", title="Hello World", content="goodbye", category_id="1")

    assert matches_search(article, "WORLD")
    assert matches_search(article, "goodbye")
    assert not matches_search(article, "xyz")
    assert matches_search(article, None)


def test_second_page_of_defaults():
    query = ArticleQuery(page=2, limit=9)

    page = paginate(filter_articles(default_articles(), query), query.page, query.limit)

    assert len(page.items) == 3
    assert page.total == 12
    assert page.total_pages == 2
    assert [a.id for a in page.items] == ["10", "11", "12"]


def test_filter_runs_before_pagination():
    query = ArticleQuery(page=2, limit=2, search="business")

    page = paginate(filter_articles(default_articles(), query), query.page, query.limit)

    assert page.total == 3
    assert page.total_pages == 2
    assert [a.id for a in page.items] == ["11"]


def test_category_filter_and_all_sentinel():
    by_category = filter_articles(default_articles(), ArticleQuery(category_id="1"))
    everything = filter_articles(default_articles(), ArticleQuery(category_id="all"))
    blank = filter_articles(default_articles(), ArticleQuery(category_id=""))

    assert [a.id for a in by_category] == ["1", "4", "9"]
    assert len(everything) == 12
    assert len(blank) == 12


def test_page_past_the_end_is_empty():
    page = paginate(default_articles(), page=5, limit=9)

    assert page.items == []
    assert page.total_pages == 2


def test_empty_result_still_has_one_page():
    page = paginate([], page=1, limit=10)

    assert page.total == 0
    assert page.total_pages == 1
    assert Page(total=0, limit=10).total_pages == 1


def test_category_search_matches_name():
    matches = filter_categories(default_categories(), CategoryQuery(search="TECH"))

    assert [c.name for c in matches] == ["Technology"]
    assert len(filter_categories(default_categories(), CategoryQuery(search=""))) == 5


def test_related_articles_exclude_self_and_cap_limit():
    related = related_articles(default_articles(), "1", "1", limit=3)
    capped = related_articles(default_articles(), "1", "1", limit=1)

    assert [a.id for a in related.items] == ["4", "9"]
    assert [a.id for a in capped.items] == ["4"]


def test_dangling_category_label():
    categories = default_categories()

    assert category_label("2", categories) == "Health"
    assert category_label("999", categories) == "Unknown Category"
