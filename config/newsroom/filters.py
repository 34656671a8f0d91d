"""
In-memory filtering for article lists (dashboard table, search page).

Search deliberately covers only the title and the author's name; excerpt,
body, keywords and category are not searched.
"""

from __future__ import annotations

from typing import Any, Iterable, Optional

STATUS_ALL = 'all'


def _author_name(article: Any) -> str:
    author = getattr(article, 'author', None)
    if author is None:
        return ''
    return getattr(author, 'name', '') or ''


def matches_search(article: Any, search_term: str) -> bool:
    """Case-insensitive substring match on title, then author name."""
    if search_term == '':
        return True
    needle = search_term.lower()
    if needle in (article.title or '').lower():
        return True
    author_name = _author_name(article)
    return bool(author_name) and needle in author_name.lower()


def matches_status(article: Any, status_filter: str) -> bool:
    return status_filter == STATUS_ALL or article.status == status_filter


def matches_trending(article: Any, trending_filter: Optional[bool]) -> bool:
    return trending_filter is None or bool(article.trending) == trending_filter


def filter_articles(
    articles: Iterable[Any],
    search_term: str,
    status_filter: str,
    trending_filter: Optional[bool] = None,
) -> list[Any]:
    """
    Return the articles matching every active filter, in their original order.

    Args:
        articles: Objects exposing ``title``, ``status``, ``trending`` and an
            optional ``author`` with a ``name`` (model instances or plain
            records alike).
        search_term: Free text; ``''`` disables the search filter.
        status_filter: ``'all'`` or one of the article statuses. Any other
            value matches nothing.
        trending_filter: ``None`` to ignore, otherwise the required flag.

    Example:
        >>> filter_articles(articles, 'election', 'published')
    """
    return [
        article for article in articles
        if matches_status(article, status_filter)
        and matches_search(article, search_term)
        and matches_trending(article, trending_filter)
    ]


def parse_trending_filter(value: Optional[str]) -> Optional[bool]:
    """Map the dashboard ``trending`` query parameter to a filter value."""
    if value in ('true', '1', 'yes'):
        return True
    if value in ('false', '0', 'no'):
        return False
    return None
